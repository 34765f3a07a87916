#!/usr/bin/env python3
"""
Numerical Diagnostics for Iterative SLAE Solvers
================================================

This script runs Jacobi, Gauss-Seidel and Steepest Descent on the reference
systems and on a batch of random diagonally dominant systems, and compares
them on:

    1. Outcome: converged, or which failure was reported
    2. Iterations and wall-clock time (ms)
    3. Residual norm ||b - Ax|| and relative residual ||b - Ax|| / ||b||
    4. Solution error max|x - x*| against a direct (LAPACK) reference solution

All metrics are reported as distributions over the systems, next to the
pre-solve checks (diagonal dominance, SPD, stability warnings) that decide
whether a method is even allowed to run.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List
import warnings
from scipy.linalg import solve as direct_solve

from slae import (
    Method,
    ReferenceSystem,
    SolverError,
    DidNotConvergeError,
    euclidean_norm,
    is_diagonally_dominant,
    is_symmetric_positive_definite,
    leading_principal_minors,
    random_system,
    reference_systems,
    residual,
    solve,
    stability_warning,
)

warnings.filterwarnings('ignore')

# =============================================================================
# CONFIGURATION
# =============================================================================

# Solver parameters (identical across all methods)
TOLERANCE = 1e-6
MAX_ITERATIONS = 1000

# Random systems: sizes where the generator guarantees diagonal dominance
N_RANDOM_SYSTEMS = 24
RANDOM_SIZES = [2, 3, 4, 5]
RANDOM_SEED = 42

METHODS = [Method.JACOBI, Method.GAUSS_SEIDEL, Method.GRADIENT]


# =============================================================================
# DATA CLASSES FOR DIAGNOSTICS
# =============================================================================

@dataclass
class MethodDiagnostics:
    """Diagnostics of a single solve."""
    system: str
    method: str
    n: int

    # Pre-solve checks
    diagonally_dominant: bool
    spd: bool
    min_leading_minor: float
    n_warnings: int

    # Outcome
    status: str
    converged: bool
    iterations: int
    wall_clock_time_ms: float
    final_error: float

    # Quality of the returned solution
    residual_norm: float
    relative_residual: float
    solution_error: float


@dataclass
class MethodDiagnosticsCollection:
    """Diagnostics across all systems for one method."""
    method: str
    diagnostics: List[MethodDiagnostics] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([vars(d) for d in self.diagnostics])

    def get_distribution_stats(self, metric: str) -> Dict[str, float]:
        """Distribution statistics of a metric over converged solves."""
        df = self.to_dataframe()
        values = df.loc[df['converged'], metric].dropna()
        return {
            'mean': values.mean(),
            'std': values.std(),
            'min': values.min(),
            'median': values.median(),
            'max': values.max(),
        }


# =============================================================================
# DIAGNOSTICS
# =============================================================================

def compute_reference_solution(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Reference solution from a direct solver.

    Uses scipy's direct solve (LAPACK) as the comparison baseline.
    """
    return direct_solve(A, b)


def diagnose_method(system: ReferenceSystem,
                    method: Method,
                    x_ref: np.ndarray) -> MethodDiagnostics:
    """Run one method on one system; failures are recorded, not raised."""
    A, b = system.A, system.b
    minors = leading_principal_minors(A)
    warning_text = stability_warning(A, method)

    history = None
    try:
        history = solve(method, A, b, tolerance=TOLERANCE, max_iterations=MAX_ITERATIONS)
        status = 'converged'
    except DidNotConvergeError as exc:
        history = exc.history
        status = type(exc).__name__
    except SolverError as exc:
        status = type(exc).__name__

    if history is not None and len(history) > 0:
        x = history.solution
        residual_norm = euclidean_norm(residual(A, x, b))
        iterations = history.iterations
        elapsed = history.elapsed_ms
        final_error = history.final_error
        solution_error = float(np.max(np.abs(x - x_ref)))
    else:
        residual_norm = np.nan
        iterations = 0
        elapsed = np.nan
        final_error = np.nan
        solution_error = np.nan

    b_norm = euclidean_norm(b)

    return MethodDiagnostics(
        system=system.name,
        method=method.value,
        n=system.n,
        diagonally_dominant=is_diagonally_dominant(A),
        spd=is_symmetric_positive_definite(A),
        min_leading_minor=min(minors),
        n_warnings=len(warning_text.splitlines()),
        status=status,
        converged=status == 'converged',
        iterations=iterations,
        wall_clock_time_ms=elapsed,
        final_error=final_error,
        residual_norm=residual_norm,
        relative_residual=residual_norm / b_norm if b_norm > 0 else np.nan,
        solution_error=solution_error,
    )


def build_systems(n_random: int = N_RANDOM_SYSTEMS,
                  seed: int = RANDOM_SEED) -> List[ReferenceSystem]:
    """Reference systems followed by random ones."""
    rng = np.random.default_rng(seed)
    systems = list(reference_systems().values())
    for k in range(n_random):
        n = RANDOM_SIZES[k % len(RANDOM_SIZES)]
        system = random_system(n, rng)
        system.name = f'{system.name}_{k:02d}'
        systems.append(system)
    return systems


def run_full_diagnostics(systems: List[ReferenceSystem],
                         verbose: bool = True) -> Dict[str, MethodDiagnosticsCollection]:
    """Run every method on every system."""

    if verbose:
        print("="*80)
        print("NUMERICAL DIAGNOSTICS FOR ITERATIVE SLAE SOLVERS")
        print("="*80)
        print(f"\nConfiguration:")
        print(f"  Tolerance: {TOLERANCE:.2e}")
        print(f"  Max Iterations: {MAX_ITERATIONS}")
        print(f"  Number of systems: {len(systems)}")
        print(f"  Reference solution: Direct solver (LAPACK)")

    collections = {m.value: MethodDiagnosticsCollection(method=m.value) for m in METHODS}

    if verbose:
        print("\n" + "-"*80)
        print("Running diagnostics for each system...")
        print("-"*80)

    for idx, system in enumerate(systems):
        x_ref = compute_reference_solution(system.A, system.b)

        results = {m.value: diagnose_method(system, m, x_ref) for m in METHODS}
        for name, diag in results.items():
            collections[name].diagnostics.append(diag)

        if verbose:
            print(f"\n  [{idx+1}/{len(systems)}] {system.name} (n = {system.n})")
            for name, d in results.items():
                mark = "✓" if d.converged else "✗"
                print(f"    {name:12s}: {d.iterations:4d} iters, "
                      f"||r|| = {d.residual_norm:.2e} [{mark} {d.status}]")

    return collections


def compute_distribution_tables(collections: Dict[str, MethodDiagnosticsCollection]) -> Dict[str, pd.DataFrame]:
    """Distribution statistics tables for each metric."""
    metrics = [
        'iterations',
        'wall_clock_time_ms',
        'residual_norm',
        'relative_residual',
        'solution_error',
    ]

    tables = {}
    for metric in metrics:
        rows = []
        for name, collection in collections.items():
            stats = collection.get_distribution_stats(metric)
            stats['method'] = name
            rows.append(stats)
        df = pd.DataFrame(rows)
        tables[metric] = df[['method', 'mean', 'std', 'min', 'median', 'max']]

    return tables


def compare_sweep_counts(collections: Dict[str, MethodDiagnosticsCollection]) -> pd.DataFrame:
    """Per-system iteration counts of Jacobi vs Gauss-Seidel where both converged."""
    jac = collections[Method.JACOBI.value].to_dataframe()
    gs = collections[Method.GAUSS_SEIDEL.value].to_dataframe()
    merged = jac[['system', 'converged', 'iterations']].merge(
        gs[['system', 'converged', 'iterations']],
        on='system', suffixes=('_jacobi', '_gauss_seidel'))
    both = merged['converged_jacobi'] & merged['converged_gauss_seidel']
    merged = merged.loc[both, ['system', 'iterations_jacobi', 'iterations_gauss_seidel']]
    merged['gauss_seidel_not_slower'] = merged['iterations_gauss_seidel'] <= merged['iterations_jacobi']
    return merged.reset_index(drop=True)


# =============================================================================
# REPORTS
# =============================================================================

def _print_scientific(df: pd.DataFrame):
    df = df.copy()
    for col in df.columns:
        if col != 'method':
            df[col] = df[col].apply(lambda x: f'{x:.2e}' if pd.notna(x) else 'N/A')
    print(df.to_string(index=False))


def print_distribution_report(tables: Dict[str, pd.DataFrame]):
    print("\n" + "="*80)
    print("DISTRIBUTION STATISTICS OVER CONVERGED SOLVES")
    print("="*80)

    print("\n" + "-"*80)
    print("ITERATIONS DISTRIBUTION")
    print("-"*80)
    print(tables['iterations'].to_string(index=False, float_format='%.2f'))

    print("\n" + "-"*80)
    print("WALL-CLOCK TIME (ms) DISTRIBUTION")
    print("-"*80)
    print(tables['wall_clock_time_ms'].to_string(index=False, float_format='%.4f'))

    print("\n" + "-"*80)
    print("RESIDUAL NORM ||b-Ax|| DISTRIBUTION")
    print("-"*80)
    _print_scientific(tables['residual_norm'])

    print("\n" + "-"*80)
    print("SOLUTION ERROR max|x-x*| DISTRIBUTION")
    print("-"*80)
    _print_scientific(tables['solution_error'])


def print_convergence_analysis(collections: Dict[str, MethodDiagnosticsCollection]):
    print("\n" + "="*80)
    print("CONVERGENCE BEHAVIOR ANALYSIS")
    print("="*80)

    print("\n" + "-"*80)
    print("OUTCOMES BY METHOD")
    print("-"*80)
    print(f"{'Method':<15} {'Converged':>10} {'Total':>8} {'Rate':>10}")
    print("-"*45)

    for name, collection in collections.items():
        df = collection.to_dataframe()
        converged = int(df['converged'].sum())
        total = len(df)
        rate = converged / total * 100 if total else 0.0
        print(f"{name:<15} {converged:>10} {total:>8} {rate:>9.1f}%")

    for name, collection in collections.items():
        df = collection.to_dataframe()
        failures = df.loc[~df['converged'], 'status'].value_counts()
        if not failures.empty:
            print(f"\n{name} failures:")
            for status, count in failures.items():
                print(f"  {status:<28} {count}")

    print("\n" + "-"*80)
    print("JACOBI VS GAUSS-SEIDEL ITERATIONS")
    print("-"*80)
    sweeps = compare_sweep_counts(collections)
    if sweeps.empty:
        print("No system converged with both methods.")
    else:
        not_slower = int(sweeps['gauss_seidel_not_slower'].sum())
        print(f"Gauss-Seidel needed no more iterations than Jacobi on "
              f"{not_slower}/{len(sweeps)} systems")


def main():
    """Main execution function."""
    systems = build_systems()

    collections = run_full_diagnostics(systems, verbose=True)
    tables = compute_distribution_tables(collections)

    print_distribution_report(tables)
    print_convergence_analysis(collections)

    return collections, tables


if __name__ == '__main__':
    collections, tables = main()

"""
Shared pieces of the iterative solvers.

Every solver in this package runs the same loop: start from the zero vector,
compute a candidate iterate, reject non-finite components, measure the
max-norm change, record a snapshot and stop once the change drops to the
tolerance or the iteration budget runs out.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional
import time

import numpy as np
import pandas as pd

from .linalg_utils import euclidean_norm, first_non_finite, max_abs_diff, residual


# =============================================================================
# CONFIGURATION
# =============================================================================

# Stopping rule defaults (overridable per call)
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 1000

# Supported system sizes
MIN_SIZE = 2
MAX_SIZE = 10

# |A[i, i]| below this is treated as a zero diagonal entry
DIAGONAL_EPS = 1e-14

# Allowed asymmetry |A[i, j] - A[j, i]|
SYMMETRY_TOL = 1e-10

# Gradient descent: r^T r below this means converged, r^T A r below this is a breakdown
BREAKDOWN_EPS = 1e-14

# Stability warning thresholds
SMALL_DIAGONAL = 1e-6
MAGNITUDE_RATIO_LIMIT = 1e5

# More iterations than this is reported as slow convergence
SLOW_CONVERGENCE_ITERATIONS = 50


# =============================================================================
# METHODS
# =============================================================================

class Method(Enum):
    """Iterative methods offered by the engine."""
    JACOBI = "Jacobi"
    GAUSS_SEIDEL = "GaussSeidel"
    GRADIENT = "Gradient"

    @property
    def label(self) -> str:
        """Short name used in warnings and progress lines."""
        return _LABELS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def lookup(cls, value) -> Optional["Method"]:
        """
        Resolve a Method from a member or a name, None if unrecognised.

        Accepts the tag values ("Jacobi", "GaussSeidel", "Gradient") and
        case-insensitive aliases such as "gauss-seidel" or "steepest_descent".
        """
        if isinstance(value, cls):
            return value
        key = str(value).lower().replace('-', '').replace('_', '').replace(' ', '')
        return _ALIASES.get(key)

    @classmethod
    def parse(cls, value) -> "Method":
        method = cls.lookup(value)
        if method is None:
            raise ValueError(f"Unknown method: {value}. "
                             f"Available: {[m.value for m in cls]}")
        return method


_LABELS = {
    Method.JACOBI: "Jacobi",
    Method.GAUSS_SEIDEL: "Gauss-Seidel",
    Method.GRADIENT: "Gradient Descent",
}

_DISPLAY_NAMES = {
    Method.JACOBI: "Jacobi Method",
    Method.GAUSS_SEIDEL: "Gauss-Seidel Method",
    Method.GRADIENT: "Steepest Descent Method",
}

_ALIASES = {
    'jacobi': Method.JACOBI,
    'gaussseidel': Method.GAUSS_SEIDEL,
    'seidel': Method.GAUSS_SEIDEL,
    'gradient': Method.GRADIENT,
    'gradientdescent': Method.GRADIENT,
    'steepestdescent': Method.GRADIENT,
    'steepest': Method.GRADIENT,
}


# =============================================================================
# ERRORS
# =============================================================================

class SolverError(Exception):
    """Base class for every failure reported by a solve."""


class InvalidMatrixError(SolverError, ValueError):
    """Matrix or right-hand side rejected before iterating."""

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = list(problems or [])


class ConvergenceGateFailed(SolverError):
    """The sufficient convergence condition of the chosen method does not hold."""

    def __init__(self, method: Method, check: str, message: str):
        super().__init__(message)
        self.method = method
        self.check = check


class NumericalOverflowError(SolverError, ArithmeticError):
    """A NaN or infinite component appeared in a new iterate."""

    def __init__(self, component: int, iteration: int):
        super().__init__(f"Numerical overflow detected in solution x[{component + 1}] "
                         f"at iteration {iteration}")
        self.component = component
        self.iteration = iteration


class NearSingularStepError(SolverError, ArithmeticError):
    """Gradient descent step denominator r^T A r is numerically zero."""

    def __init__(self, denominator: float, iteration: int):
        super().__init__(f"Division by very small value in Gradient Descent method "
                         f"(r^T A r = {denominator:.3e} at iteration {iteration})")
        self.denominator = denominator
        self.iteration = iteration


class DidNotConvergeError(SolverError):
    """Iteration budget exhausted before reaching the tolerance."""

    def __init__(self, iterations: int, final_error: float, history: "SolveHistory"):
        super().__init__(f"Failed to converge after {iterations} iterations. "
                         f"Final error: {final_error:.10E}")
        self.iterations = iterations
        self.final_error = final_error
        self.history = history


# =============================================================================
# ITERATION RECORDS
# =============================================================================

@dataclass
class IterationRecord:
    """Snapshot taken after one completed iteration."""
    iteration: int
    solution: np.ndarray
    error: float
    elapsed_ms: float


@dataclass
class SolveHistory:
    """Ordered iteration snapshots of one solve; the last one is the answer."""
    method: Method
    records: List[IterationRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[IterationRecord]:
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]

    def append(self, record: IterationRecord):
        self.records.append(record)

    @property
    def final(self) -> IterationRecord:
        if not self.records:
            raise ValueError("SolveHistory is empty")
        return self.records[-1]

    @property
    def solution(self) -> np.ndarray:
        return self.final.solution.copy()

    @property
    def final_error(self) -> float:
        return self.final.error

    @property
    def iterations(self) -> int:
        return len(self.records)

    @property
    def elapsed_ms(self) -> float:
        return self.final.elapsed_ms if self.records else 0.0

    @property
    def is_slow(self) -> bool:
        """True when convergence took more than SLOW_CONVERGENCE_ITERATIONS."""
        return self.iterations > SLOW_CONVERGENCE_ITERATIONS

    def to_dataframe(self) -> pd.DataFrame:
        """One row per iteration: iteration, error, elapsed_ms, x1..xn."""
        records = []
        for rec in self.records:
            row = {
                'iteration': rec.iteration,
                'error': rec.error,
                'elapsed_ms': rec.elapsed_ms,
            }
            for i, value in enumerate(rec.solution):
                row[f'x{i + 1}'] = value
            records.append(row)
        return pd.DataFrame(records)

    def summary(self, A: np.ndarray, b: np.ndarray) -> Dict[str, object]:
        """Final-state diagnostics, including the residual norm ||b - A x||."""
        x = self.solution
        return {
            'method': self.method.value,
            'iterations': self.iterations,
            'elapsed_ms': self.elapsed_ms,
            'final_error': self.final_error,
            'residual_norm': euclidean_norm(residual(A, x, b)),
            'solution': x,
        }


# =============================================================================
# SHARED ITERATION LOOP
# =============================================================================

# step(x, iteration) -> new iterate, or None when x already solves the system
StepFunction = Callable[[np.ndarray, int], Optional[np.ndarray]]


def check_parameters(tolerance: float, max_iterations: int):
    """Reject stopping-rule parameters that cannot terminate sensibly."""
    if not np.isfinite(tolerance) or tolerance <= 0:
        raise ValueError(f"tolerance must be a positive number, got {tolerance}")
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, (int, np.integer)):
        raise ValueError(f"max_iterations must be an integer, got {max_iterations!r}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")


def run_iterations(method: Method,
                   step: StepFunction,
                   n: int,
                   tolerance: float = DEFAULT_TOLERANCE,
                   max_iterations: int = DEFAULT_MAX_ITERATIONS,
                   verbose: bool = False) -> SolveHistory:
    """
    Drive a solver step function from the zero vector to convergence.

    Parameters
    ----------
    method : Method
        Method the history is tagged with
    step : callable
        step(x, iteration) returning the next iterate as a new array (x must
        not be modified), or None if x is already an exact solution
    n : int
        System size
    tolerance : float
        Stop once max|x_new - x| <= tolerance
    max_iterations : int
        Iteration budget
    verbose : bool
        Print iteration progress

    Returns
    -------
    SolveHistory
        All iteration snapshots, never empty

    Raises
    ------
    NumericalOverflowError
        A new iterate has a NaN or infinite component
    DidNotConvergeError
        The budget ran out with error > tolerance
    """
    history = SolveHistory(method=method)
    x = np.zeros(n, dtype=np.float64)
    error = np.inf

    start_time = time.perf_counter()

    # non-finite values are caught by the explicit check below
    with np.errstate(all='ignore'):
        for iteration in range(max_iterations):
            x_new = step(x, iteration)

            if x_new is None:
                history.append(IterationRecord(
                    iteration=iteration,
                    solution=x.copy(),
                    error=0.0,
                    elapsed_ms=_elapsed_ms(start_time),
                ))
                _log(method, iteration, 0.0, verbose)
                return history

            bad = first_non_finite(x_new)
            if bad is not None:
                raise NumericalOverflowError(bad, iteration)

            error = max_abs_diff(x, x_new)

            history.append(IterationRecord(
                iteration=iteration,
                solution=x_new.copy(),
                error=error,
                elapsed_ms=_elapsed_ms(start_time),
            ))
            _log(method, iteration, error, verbose)

            x = x_new
            if error <= tolerance:
                return history

    raise DidNotConvergeError(max_iterations, error, history)


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000.0


def _log(method: Method, iteration: int, error: float, verbose: bool):
    """Log iteration progress."""
    if verbose:
        print(f"  {method.label} iter {iteration:4d}: error = {error:.6e}")

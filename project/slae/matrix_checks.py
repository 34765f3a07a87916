"""
Matrix Diagnostics
==================

Checks run on a system before any solver touches it.

Hard preconditions (raise and abort the solve):
- validate / prepare_system: finite entries, non-zero diagonal, sane shape
- require_diagonal_dominance: convergence gate of Jacobi and Gauss-Seidel
- require_spd: convergence gate of steepest descent (Sylvester's criterion)

Advisory (never raises):
- stability_warning: human-readable list of potential numerical problems,
  meant to be shown before the user commits to a solve. It repeats the
  dominance check as a warning; a user who accepts the warning still hits
  the hard gate in the solver.
"""

from typing import List, Tuple
import numpy as np

from .base import (
    DIAGONAL_EPS,
    MAGNITUDE_RATIO_LIMIT,
    MAX_SIZE,
    MIN_SIZE,
    SMALL_DIAGONAL,
    SYMMETRY_TOL,
    ConvergenceGateFailed,
    InvalidMatrixError,
    Method,
)
from .determinant import leading_principal_minors


# =============================================================================
# VALIDATION
# =============================================================================

def _as_float_array(value, name: str) -> np.ndarray:
    """Coerce to a float64 array, raising InvalidMatrixError for ragged or non-numeric input."""
    try:
        return np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidMatrixError(f"{name} is not a numeric array: {exc}") from exc


def validation_errors(A: np.ndarray, b: np.ndarray) -> List[str]:
    """
    Describe every problem that makes (A, b) unusable for iteration.

    Parameters
    ----------
    A : np.ndarray
        Coefficient matrix (n x n)
    b : np.ndarray
        Right-hand side vector (n,)

    Returns
    -------
    list of str
        Empty when the system passes validation
    """
    try:
        A = _as_float_array(A, "Coefficient matrix")
        b = _as_float_array(b, "Right-hand side").flatten()
    except InvalidMatrixError as exc:
        return [str(exc)]

    if A.ndim != 2 or A.shape[0] != A.shape[1] or A.shape[0] != b.size:
        return [f"shape mismatch: A is {A.shape}, b has {b.size} entries"]

    problems = []
    for i, j in np.argwhere(~np.isfinite(A)):
        problems.append(f"A[{i + 1},{j + 1}] is {A[i, j]}")
    for i in np.flatnonzero(~np.isfinite(b)):
        problems.append(f"b[{i + 1}] is {b[i]}")

    diag = np.abs(np.diag(A))
    for i in np.flatnonzero(diag < DIAGONAL_EPS):
        problems.append(f"A[{i + 1},{i + 1}] = {A[i, i]:.3e} is zero or nearly zero")

    return problems


def validate(A: np.ndarray, b: np.ndarray) -> bool:
    """True if A and b are finite and no |A[i, i]| is below 1e-14."""
    return not validation_errors(A, b)


def check_dimensions(A: np.ndarray, b: np.ndarray):
    """Raise InvalidMatrixError unless A is n x n, b has n entries and MIN_SIZE <= n <= MAX_SIZE."""
    A = _as_float_array(A, "Coefficient matrix")
    b = _as_float_array(b, "Right-hand side").flatten()

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise InvalidMatrixError(f"Coefficient matrix must be square, got shape {A.shape}")

    n = A.shape[0]
    if b.size != n:
        raise InvalidMatrixError(f"Right-hand side has {b.size} entries, expected {n}")

    if not MIN_SIZE <= n <= MAX_SIZE:
        raise InvalidMatrixError(f"System size must be between {MIN_SIZE} and {MAX_SIZE}, got {n}")


def prepare_system(A: np.ndarray, b: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Check dimensions and values, then return private float64 copies of A and b.

    Raises
    ------
    InvalidMatrixError
        Wrong shape, non-finite entries or a (near) zero diagonal entry
    """
    check_dimensions(A, b)

    problems = validation_errors(A, b)
    if problems:
        raise InvalidMatrixError(
            "Matrix contains invalid values (NaN, Infinity) or zero diagonal elements: "
            + "; ".join(problems),
            problems,
        )

    A = np.array(A, dtype=np.float64)
    b = np.array(b, dtype=np.float64).flatten()
    return A, b


# =============================================================================
# CONVERGENCE CONDITIONS
# =============================================================================

def is_diagonally_dominant(A: np.ndarray) -> bool:
    """Strict row diagonal dominance: |A[i, i]| > sum_{j != i} |A[i, j]| for every row."""
    A = np.abs(np.asarray(A, dtype=np.float64))
    n = A.shape[0]
    diag = np.diag(A)
    off_diag = np.where(np.eye(n, dtype=bool), 0.0, A).sum(axis=1)
    return bool(np.all(diag > off_diag))


def is_symmetric(A: np.ndarray, tol: float = SYMMETRY_TOL) -> bool:
    A = np.asarray(A, dtype=np.float64)
    return bool(np.all(np.abs(A - A.T) <= tol))


def is_symmetric_positive_definite(A: np.ndarray) -> bool:
    """
    Symmetric positive definiteness via Sylvester's criterion.

    The matrix must be symmetric within SYMMETRY_TOL and every leading
    principal minor (order 1..n) must be strictly positive.
    """
    A = np.asarray(A, dtype=np.float64)
    if not is_symmetric(A):
        return False
    return all(m > 0 for m in leading_principal_minors(A))


def require_diagonal_dominance(A: np.ndarray, method: Method):
    if not is_diagonally_dominant(A):
        raise ConvergenceGateFailed(
            method, 'diagonal_dominance',
            f"{method.label} method may not converge for the given matrix "
            f"(not diagonally dominant)")


def require_spd(A: np.ndarray, method: Method = Method.GRADIENT):
    if not is_symmetric_positive_definite(A):
        raise ConvergenceGateFailed(
            method, 'symmetric_positive_definite',
            "Gradient descent method is only applicable to symmetric "
            "positive definite matrices")


# =============================================================================
# STABILITY WARNING
# =============================================================================

NOT_A_MATRIX_WARNING = "Warning: Coefficient matrix is not a square numeric matrix."


def stability_warning(A: np.ndarray, method) -> str:
    """
    Advisory check for numerical trouble before solving.

    Parameters
    ----------
    A : np.ndarray
        Coefficient matrix (n x n)
    method : Method or str
        Method the user is about to run. Unrecognised names only skip the
        method-specific checks.

    Returns
    -------
    str
        Newline-separated warnings; empty string when nothing looks wrong
    """
    try:
        A = _as_float_array(A, "Coefficient matrix")
    except InvalidMatrixError:
        return NOT_A_MATRIX_WARNING

    if A.size == 0:
        return ""
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return NOT_A_MATRIX_WARNING

    method = Method.lookup(method)
    abs_A = np.abs(A)
    warnings = []

    min_diagonal = np.min(np.abs(np.diag(A)))
    if min_diagonal < SMALL_DIAGONAL:
        warnings.append("Warning: Small diagonal elements detected. "
                        "This may lead to numerical instability.")

    if method in (Method.JACOBI, Method.GAUSS_SEIDEL) and not is_diagonally_dominant(A):
        warnings.append(f"Warning: Matrix is not diagonally dominant. "
                        f"{method.label} method may not converge.")

    if method is Method.GRADIENT and not is_symmetric(A):
        warnings.append("Warning: Matrix is not symmetric. "
                        "Gradient Descent method requires a symmetric matrix.")

    nonzero = abs_A[abs_A > 0]
    if nonzero.size > 0:
        ratio = np.max(nonzero) / np.min(nonzero)
        if ratio > MAGNITUDE_RATIO_LIMIT:
            warnings.append(f"Warning: Large difference in magnitude between matrix "
                            f"elements detected (ratio: {ratio:.2E}). "
                            f"This may cause numerical instability.")

    return "\n".join(warnings)

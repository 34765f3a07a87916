"""
Jacobi Method
=============

Simple iteration: every component of the new iterate is computed from the
previous iterate only,

    x_new[i] = (b[i] - Σ_{j≠i} A[i, j] x_old[j]) / A[i, i]

Strict diagonal dominance of A is required as a sufficient condition for
convergence.
"""

import numpy as np

from .base import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    Method,
    SolveHistory,
    check_parameters,
    run_iterations,
)
from .matrix_checks import prepare_system, require_diagonal_dominance


def jacobi(A: np.ndarray,
           b: np.ndarray,
           tolerance: float = DEFAULT_TOLERANCE,
           max_iterations: int = DEFAULT_MAX_ITERATIONS,
           verbose: bool = False) -> SolveHistory:
    """
    Solve A @ x = b with the Jacobi method, starting from x = 0.

    Parameters
    ----------
    A : np.ndarray
        Coefficient matrix (n x n), strictly diagonally dominant
    b : np.ndarray
        Right-hand side vector (n,)
    tolerance : float
        Stop once max|x_new - x_old| <= tolerance
    max_iterations : int
        Maximum number of iterations before DidNotConvergeError
    verbose : bool
        Print iteration progress

    Returns
    -------
    SolveHistory
        One record per sweep
    """
    check_parameters(tolerance, max_iterations)
    A, b = prepare_system(A, b)
    require_diagonal_dominance(A, Method.JACOBI)

    diag = np.diag(A).copy()
    off_diag = A - np.diag(diag)

    def step(x: np.ndarray, iteration: int) -> np.ndarray:
        return (b - off_diag @ x) / diag

    return run_iterations(Method.JACOBI, step, len(b),
                          tolerance=tolerance,
                          max_iterations=max_iterations,
                          verbose=verbose)

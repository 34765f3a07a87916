"""
Gauss-Seidel Method
===================

Like Jacobi, but the sweep is done in place: components already updated in
the current sweep are used immediately,

    x_new[i] = (b[i] - Σ_{j<i} A[i, j] x_new[j] - Σ_{j>i} A[i, j] x_old[j]) / A[i, i]

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


def gauss_seidel(A: np.ndarray,
                 b: np.ndarray,
                 tolerance: float = DEFAULT_TOLERANCE,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS,
                 verbose: bool = False) -> SolveHistory:
    """
    Solve A @ x = b with the Gauss-Seidel method, starting from x = 0.

    Takes the same arguments as jacobi().
    """
    check_parameters(tolerance, max_iterations)
    A, b = prepare_system(A, b)
    require_diagonal_dominance(A, Method.GAUSS_SEIDEL)

    n = len(b)

    def step(x: np.ndarray, iteration: int) -> np.ndarray:
        x_new = x.copy()
        for i in range(n):
            # Forward sweep: new values below i, old values above i
            s = b[i] - np.dot(A[i, :i], x_new[:i]) - np.dot(A[i, i+1:], x[i+1:])
            x_new[i] = s / A[i, i]
        return x_new

    return run_iterations(Method.GAUSS_SEIDEL, step, n,
                          tolerance=tolerance,
                          max_iterations=max_iterations,
                          verbose=verbose)

"""
Method dispatch: solve(method, A, b) picks one of the three solver functions.
"""

from typing import Callable, Dict
import numpy as np

from .base import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    Method,
    SolveHistory,
)
from .gauss_seidel import gauss_seidel
from .gradient_descent import gradient_descent
from .jacobi import jacobi


# Solver registry
SOLVERS: Dict[Method, Callable[..., SolveHistory]] = {
    Method.JACOBI: jacobi,
    Method.GAUSS_SEIDEL: gauss_seidel,
    Method.GRADIENT: gradient_descent,
}


def solve(method,
          A: np.ndarray,
          b: np.ndarray,
          tolerance: float = DEFAULT_TOLERANCE,
          max_iterations: int = DEFAULT_MAX_ITERATIONS,
          verbose: bool = False) -> SolveHistory:
    """
    Solve A @ x = b with the selected iterative method.

    Parameters
    ----------
    method : Method or str
        Method.JACOBI, Method.GAUSS_SEIDEL, Method.GRADIENT or one of their
        names ("Jacobi", "GaussSeidel", "Gradient", "gauss-seidel", ...)
    A : np.ndarray
        Coefficient matrix (n x n), 2 <= n <= 10. Not modified.
    b : np.ndarray
        Right-hand side vector (n,). Not modified.
    tolerance : float
        Stop once the max-norm change between iterates is <= tolerance
    max_iterations : int
        Maximum number of iterations
    verbose : bool
        Print iteration progress

    Returns
    -------
    SolveHistory
        Per-iteration snapshots; the last one holds the solution

    Raises
    ------
    InvalidMatrixError
        NaN/Infinity entries, a (near) zero diagonal entry or a bad shape
    ConvergenceGateFailed
        Not diagonally dominant (Jacobi, Gauss-Seidel) or not SPD (Gradient)
    NumericalOverflowError
        NaN/Infinity appeared during iteration
    NearSingularStepError
        Gradient descent step denominator vanished
    DidNotConvergeError
        max_iterations reached; carries the final error
    """
    method = Method.parse(method)
    return SOLVERS[method](A, b,
                           tolerance=tolerance,
                           max_iterations=max_iterations,
                           verbose=verbose)

"""
Gradient Descent Solver for Linear Systems
==========================================

Solves A @ x = b using steepest descent with optimal step size.

For symmetric positive definite A, the optimal step size is:
    α = (r^T r) / (r^T A r)

where r = b - A @ x is the residual.

Reference: Shewchuk, "An Introduction to the Conjugate Gradient Method
Without the Agonizing Pain", 1994.
"""

from typing import Optional
import numpy as np

from .base import (
    BREAKDOWN_EPS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    Method,
    NearSingularStepError,
    SolveHistory,
    check_parameters,
    run_iterations,
)
from .matrix_checks import prepare_system, require_spd


def gradient_descent(A: np.ndarray,
                     b: np.ndarray,
                     tolerance: float = DEFAULT_TOLERANCE,
                     max_iterations: int = DEFAULT_MAX_ITERATIONS,
                     verbose: bool = False) -> SolveHistory:
    """
    Solve using steepest descent with optimal step size.

    Algorithm:
    1. r = b - A @ x
    2. if r^T r ~ 0, x already solves the system: record it with error 0 and stop
    3. α = (r^T r) / (r^T A r), failing if the denominator is ~ 0
    4. x = x + α * r
    5. Repeat until max|Δx| <= tolerance

    Parameters
    ----------
    A : np.ndarray
        System matrix (n x n), symmetric positive definite
    b : np.ndarray
        Right-hand side vector (n,)
    tolerance : float
        Stop once max|x_new - x| <= tolerance
    max_iterations : int
        Maximum number of iterations before DidNotConvergeError
    verbose : bool
        Print iteration progress

    Returns
    -------
    SolveHistory
        One record per descent step
    """
    check_parameters(tolerance, max_iterations)
    A, b = prepare_system(A, b)
    require_spd(A, Method.GRADIENT)

    def step(x: np.ndarray, iteration: int) -> Optional[np.ndarray]:
        r = b - A @ x

        rTr = np.dot(r, r)
        if abs(rTr) < BREAKDOWN_EPS:
            return None

        Ar = A @ r
        rTAr = np.dot(r, Ar)

        # Guard against division by zero
        if abs(rTAr) < BREAKDOWN_EPS:
            raise NearSingularStepError(float(rTAr), iteration)

        alpha = rTr / rTAr
        return x + alpha * r

    return run_iterations(Method.GRADIENT, step, len(b),
                          tolerance=tolerance,
                          max_iterations=max_iterations,
                          verbose=verbose)

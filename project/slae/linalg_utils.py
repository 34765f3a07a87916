"""
Error and Residual Utilities
============================

Vector helpers shared by the iterative solvers and by reporting code:

- max_abs_diff: max-norm of the difference of two iterates, the single
  convergence metric of every solver in this package
- residual: r = b - A @ x
- euclidean_norm: ||v||_2
"""

from typing import Optional
import numpy as np


def max_abs_diff(x_prev: np.ndarray, x_next: np.ndarray) -> float:
    """
    Maximum absolute componentwise difference between two iterates.

    Parameters
    ----------
    x_prev : np.ndarray
        Previous iterate (n,)
    x_next : np.ndarray
        New iterate (n,)

    Returns
    -------
    float
        max_i |x_next[i] - x_prev[i]|
    """
    x_prev = np.asarray(x_prev, dtype=np.float64)
    x_next = np.asarray(x_next, dtype=np.float64)
    if x_prev.size == 0:
        return 0.0
    return float(np.max(np.abs(x_next - x_prev)))


def residual(A: np.ndarray, x: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Residual vector r = b - A @ x.

    Parameters
    ----------
    A : np.ndarray
        System matrix (n x n)
    x : np.ndarray
        Candidate solution (n,)
    b : np.ndarray
        Right-hand side vector (n,)

    Returns
    -------
    np.ndarray
        Residual (n,)
    """
    A = np.asarray(A, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64).flatten()
    b = np.asarray(b, dtype=np.float64).flatten()
    return b - A @ x


def euclidean_norm(v: np.ndarray) -> float:
    """Euclidean norm sqrt(sum(v_i^2))."""
    v = np.asarray(v, dtype=np.float64).flatten()
    return float(np.sqrt(np.dot(v, v)))


def first_non_finite(v: np.ndarray) -> Optional[int]:
    """Index of the first NaN or infinite component of v, or None."""
    bad = np.flatnonzero(~np.isfinite(v))
    if bad.size == 0:
        return None
    return int(bad[0])

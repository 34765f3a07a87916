"""
Determinants and Minors
=======================

Recursive cofactor expansion along the first row:

    det(M) = Σ_j (-1)^j M[0, j] det(minor(M, 0, j))

Exponential in n, but the systems handled here are at most 10 x 10 and the
determinant is only needed for the leading principal minors of the SPD check.
The recursion works on plain row lists; building numpy sub-arrays for every
one of the ~n! minors costs far more than the arithmetic itself.
"""

from typing import List
import numpy as np

Rows = List[List[float]]


def _as_rows(M) -> Rows:
    return np.asarray(M, dtype=np.float64).tolist()


def _minor_rows(rows: Rows, row: int, col: int) -> Rows:
    return [r[:col] + r[col+1:] for i, r in enumerate(rows) if i != row]


def _det(rows: Rows) -> float:
    n = len(rows)

    if n == 1:
        return rows[0][0]

    if n == 2:
        return rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]

    det = 0.0
    for j, a in enumerate(rows[0]):
        # zero entries contribute nothing to the expansion
        if a == 0.0:
            continue
        sign = 1.0 if j % 2 == 0 else -1.0
        det += sign * a * _det(_minor_rows(rows, 0, j))
    return det


def minor(M: np.ndarray, row: int, col: int) -> np.ndarray:
    """
    Copy of M with the given row and column removed.

    Parameters
    ----------
    M : np.ndarray
        Square matrix (n x n)
    row : int
        Row to remove
    col : int
        Column to remove

    Returns
    -------
    np.ndarray
        New (n-1) x (n-1) matrix, remaining entries in their original order
    """
    rows = _minor_rows(_as_rows(M), row, col)
    n = len(rows)
    return np.array(rows, dtype=np.float64).reshape(n, n)


def determinant(M: np.ndarray) -> float:
    """
    Determinant by recursive cofactor expansion.

    Parameters
    ----------
    M : np.ndarray
        Square matrix (n x n), n >= 1

    Returns
    -------
    float
        det(M)
    """
    return float(_det(_as_rows(M)))


def leading_principal_minors(M: np.ndarray) -> List[float]:
    """Determinants of the top-left k x k blocks of M, k = 1..n."""
    M = np.asarray(M, dtype=np.float64)
    n = M.shape[0]
    return [determinant(M[:k, :k]) for k in range(1, n + 1)]

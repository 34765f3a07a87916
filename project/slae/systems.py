"""
Test Systems
============

Reference systems with known solutions and a random system generator for
experiments and tests.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import numpy as np

from .base import MAX_SIZE, MIN_SIZE


@dataclass
class ReferenceSystem:
    """A small system with a known exact solution."""
    name: str
    A: np.ndarray
    b: np.ndarray
    solution: Optional[np.ndarray] = None

    @property
    def n(self) -> int:
        return len(self.b)


def reference_systems() -> Dict[str, ReferenceSystem]:
    """Fresh copies of the reference systems, keyed by name."""
    systems = [
        ReferenceSystem(
            name='dominant_2x2',
            A=np.array([[4.0, 1.0], [2.0, 3.0]]),
            b=np.array([1.0, 2.0]),
            solution=np.array([0.1, 0.6]),
        ),
        ReferenceSystem(
            name='spd_2x2',
            A=np.array([[2.0, 1.0], [1.0, 2.0]]),
            b=np.array([3.0, 3.0]),
            solution=np.array([1.0, 1.0]),
        ),
        ReferenceSystem(
            name='spd_dominant_3x3',
            A=np.array([[4.0, 1.0, 1.0],
                        [1.0, 3.0, -1.0],
                        [1.0, -1.0, 3.0]]),
            b=np.array([6.0, 3.0, 3.0]),
            solution=np.array([1.0, 1.0, 1.0]),
        ),
        ReferenceSystem(
            name='not_dominant_2x2',
            A=np.array([[1.0, 2.0], [3.0, 4.0]]),
            b=np.array([5.0, 6.0]),
            solution=np.array([-4.0, 4.5]),
        ),
    ]
    return {s.name: s for s in systems}


def random_system(n: int,
                  rng: Optional[np.random.Generator] = None,
                  round_values: bool = True) -> ReferenceSystem:
    """
    Random system in the style of the "fill with random values" button.

    Diagonal entries are drawn from [50, 100], off-diagonal entries from
    [-10, 10] and the right-hand side from [-50, 50]. Each value is rounded
    to a random number of decimals between 0 and 6.

    Rows are guaranteed to be diagonally dominant only for n <= 5; for larger
    n the off-diagonal sum can exceed the diagonal.

    Parameters
    ----------
    n : int
        System size, MIN_SIZE <= n <= MAX_SIZE
    rng : np.random.Generator, optional
        Random source. If None, uses np.random.default_rng().
    round_values : bool
        Round each entry to a random number of decimal places

    Returns
    -------
    ReferenceSystem
        System without a known solution
    """
    if not MIN_SIZE <= n <= MAX_SIZE:
        raise ValueError(f"n must be between {MIN_SIZE} and {MAX_SIZE}, got {n}")

    if rng is None:
        rng = np.random.default_rng()

    A = rng.uniform(-10.0, 10.0, size=(n, n))
    A[np.diag_indices(n)] = rng.uniform(50.0, 100.0, size=n)
    b = rng.uniform(-50.0, 50.0, size=n)

    if round_values:
        A = _round_randomly(A, rng)
        b = _round_randomly(b, rng)

    return ReferenceSystem(name=f'random_{n}x{n}', A=A, b=b)


def _round_randomly(values: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    decimals = rng.integers(0, 7, size=values.shape)
    scale = 10.0 ** decimals
    return np.round(values * scale) / scale

import os
import sys

import numpy as np
import pytest

# Make the project sources importable without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'project')))


# ─── FIXTURES ──────────────────────────────────────────────────────────────────

@pytest.fixture
def dominant_system():
    A = np.array([[4.0, 1.0], [2.0, 3.0]])
    b = np.array([1.0, 2.0])
    expected = np.array([0.1, 0.6])
    return A, b, expected


@pytest.fixture
def spd_system():
    A = np.array([[2.0, 1.0], [1.0, 2.0]])
    b = np.array([3.0, 3.0])
    expected = np.array([1.0, 1.0])
    return A, b, expected


@pytest.fixture
def spd_dominant_3x3():
    A = np.array([[4.0, 1.0, 1.0],
                  [1.0, 3.0, -1.0],
                  [1.0, -1.0, 3.0]])
    b = np.array([6.0, 3.0, 3.0])
    expected = np.array([1.0, 1.0, 1.0])
    return A, b, expected


@pytest.fixture
def non_dominant_system():
    A = np.array([[1.0, 2.0], [3.0, 4.0]])
    b = np.array([5.0, 6.0])
    return A, b


@pytest.fixture
def zero_diagonal_system():
    A = np.array([[0.0, 2.0], [3.0, 4.0]])
    b = np.array([1.0, 1.0])
    return A, b

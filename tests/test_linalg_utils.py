import numpy as np
import pytest

from slae.linalg_utils import euclidean_norm, first_non_finite, max_abs_diff, residual


def test_max_abs_diff_same_vector_is_zero():
    x = np.array([1.5, -2.0, 3.25])
    assert max_abs_diff(x, x) == 0.0


def test_max_abs_diff_picks_largest_component():
    assert max_abs_diff([0.0, 0.0, 0.0], [0.1, -0.5, 0.2]) == pytest.approx(0.5)


def test_residual_of_exact_solution_is_zero():
    A = np.array([[2.0, 1.0], [1.0, 2.0]])
    r = residual(A, [1.0, 1.0], [3.0, 3.0])
    np.testing.assert_allclose(r, [0.0, 0.0])


def test_residual_direction():
    A = np.eye(2)
    r = residual(A, [1.0, 2.0], [0.0, 0.0])
    np.testing.assert_allclose(r, [-1.0, -2.0])


def test_euclidean_norm():
    assert euclidean_norm(np.zeros(4)) == 0.0
    assert euclidean_norm([3.0, 4.0]) == pytest.approx(5.0)


def test_first_non_finite():
    assert first_non_finite(np.array([1.0, 2.0])) is None
    assert first_non_finite(np.array([1.0, np.inf, np.nan])) == 1

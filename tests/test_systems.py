import numpy as np
import pytest

from slae import is_diagonally_dominant, random_system, reference_systems


def test_reference_solutions_are_exact():
    for system in reference_systems().values():
        np.testing.assert_allclose(system.A @ system.solution, system.b, atol=1e-12)


def test_reference_systems_are_fresh_copies():
    first = reference_systems()
    first['spd_2x2'].A[0, 0] = -1.0
    assert reference_systems()['spd_2x2'].A[0, 0] == 2.0


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_random_system_ranges(n):
    rng = np.random.default_rng(n)
    system = random_system(n, rng)
    diag = np.diag(system.A)
    off = system.A[~np.eye(n, dtype=bool)]
    assert system.A.shape == (n, n)
    assert system.b.shape == (n,)
    assert np.all((diag >= 50.0) & (diag <= 100.0))
    assert np.all(np.abs(off) <= 10.0)
    assert np.all(np.abs(system.b) <= 50.0)
    assert is_diagonally_dominant(system.A)


def test_random_system_rounds_to_at_most_six_decimals():
    system = random_system(4, np.random.default_rng(3))
    values = np.concatenate([system.A.ravel(), system.b])
    np.testing.assert_allclose(values, np.round(values, 6), atol=1e-9)


def test_random_system_without_rounding_keeps_full_precision():
    rng = np.random.default_rng(3)
    system = random_system(4, rng, round_values=False)
    values = np.concatenate([system.A.ravel(), system.b])
    assert np.any(np.abs(values - np.round(values, 6)) > 1e-9)
    assert is_diagonally_dominant(system.A)


def test_random_system_is_reproducible():
    s1 = random_system(3, np.random.default_rng(11))
    s2 = random_system(3, np.random.default_rng(11))
    np.testing.assert_array_equal(s1.A, s2.A)
    np.testing.assert_array_equal(s1.b, s2.b)


@pytest.mark.parametrize("n", [1, 11])
def test_random_system_size_bounds(n):
    with pytest.raises(ValueError):
        random_system(n)

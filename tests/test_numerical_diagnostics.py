import numpy as np
import pytest

import numerical_diagnostics as nd
from slae import Method, reference_systems


@pytest.fixture(scope='module')
def collections():
    systems = nd.build_systems(n_random=4, seed=5)
    return nd.run_full_diagnostics(systems, verbose=False)


def test_every_method_sees_every_system(collections):
    assert set(collections) == {m.value for m in Method}
    counts = {len(c.diagnostics) for c in collections.values()}
    assert counts == {len(reference_systems()) + 4}


def test_outcomes_for_reference_systems(collections):
    jac = collections['Jacobi'].to_dataframe().set_index('system')
    grad = collections['Gradient'].to_dataframe().set_index('system')

    assert jac.loc['dominant_2x2', 'converged']
    assert jac.loc['not_dominant_2x2', 'status'] == 'ConvergenceGateFailed'
    assert grad.loc['dominant_2x2', 'status'] == 'ConvergenceGateFailed'
    assert grad.loc['spd_2x2', 'converged']
    assert grad.loc['spd_2x2', 'solution_error'] == pytest.approx(0.0, abs=1e-12)


def test_failed_solves_have_no_metrics(collections):
    df = collections['GaussSeidel'].to_dataframe().set_index('system')
    row = df.loc['not_dominant_2x2']
    assert row['iterations'] == 0
    assert np.isnan(row['residual_norm'])


def test_distribution_tables(collections):
    tables = nd.compute_distribution_tables(collections)
    assert set(tables) == {'iterations', 'wall_clock_time_ms', 'residual_norm',
                           'relative_residual', 'solution_error'}
    table = tables['solution_error'].set_index('method')
    assert table.loc['Jacobi', 'max'] < 1e-4


def test_sweep_comparison(collections):
    sweeps = nd.compare_sweep_counts(collections)
    assert 'dominant_2x2' in set(sweeps['system'])
    assert 'not_dominant_2x2' not in set(sweeps['system'])


def test_reports_print(collections, capsys):
    tables = nd.compute_distribution_tables(collections)
    nd.print_distribution_report(tables)
    nd.print_convergence_analysis(collections)
    out = capsys.readouterr().out
    assert "ITERATIONS DISTRIBUTION" in out
    assert "ConvergenceGateFailed" in out

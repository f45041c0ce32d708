import numpy as np
import pytest
from scipy import stats

from families.zib import dzib, pzib, qzib

SIZE, PROB, PI = 5.0, 0.4, 0.3


def test_mass_at_zero_includes_inflation():
    expected = PI + (1.0 - PI) * (1.0 - PROB) ** SIZE
    assert dzib(0.0, SIZE, PROB, PI)[0] == pytest.approx(expected)


def test_positive_counts_are_scaled_binomial():
    k = np.arange(1.0, 6.0)
    np.testing.assert_allclose(
        dzib(k, SIZE, PROB, PI), (1.0 - PI) * stats.binom.pmf(k, SIZE, PROB), rtol=1e-10
    )


def test_mass_sums_to_one_and_cdf_accumulates():
    k = np.arange(0.0, SIZE + 1.0)
    mass = dzib(k, SIZE, PROB, PI)
    assert mass.sum() == pytest.approx(1.0)
    np.testing.assert_allclose(pzib(k, SIZE, PROB, PI), np.cumsum(mass), rtol=1e-10)


def test_non_integer_counts_have_no_mass():
    assert dzib(1.5, SIZE, PROB, PI)[0] == 0.0


def test_quantile_recovers_counts():
    k = np.arange(0.0, SIZE + 1.0)
    q = qzib(pzib(k, SIZE, PROB, PI) - 1e-9, SIZE, PROB, PI)
    np.testing.assert_array_equal(q, k)


def test_quantile_inside_the_zero_spike():
    np.testing.assert_array_equal(qzib([0.0, 0.1, PI], SIZE, PROB, PI), [0.0, 0.0, 0.0])


def test_pi_is_recycled_with_the_other_arguments():
    out = dzib(0.0, SIZE, PROB, [0.0, 1.0])
    np.testing.assert_allclose(out, [(1.0 - PROB) ** SIZE, 1.0])


def test_out_of_domain_parameters_warn(domain_warnings):
    out = dzib(1.0, [5.0, 2.5, 5.0], [0.4, 0.4, 0.4], [0.3, 0.3, 1.5])
    assert np.isfinite(out[0])
    assert np.isnan(out[1:]).all()
    assert domain_warnings() == 1

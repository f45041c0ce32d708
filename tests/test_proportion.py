import numpy as np
import pytest
from scipy import stats

from families.proportion import dprop, pprop, qprop, shape_params


def test_shape_params():
    assert shape_params(10.0, 0.3) == pytest.approx((4.0, 8.0))


def test_density_recycles_each_argument_independently():
    x = np.array([0.2, 0.5, 0.9])
    size = np.array([2.0])
    mean = np.array([0.3, 0.7])
    means = np.array([0.3, 0.7, 0.3])
    expected = stats.beta.pdf(x, 2.0 * means + 1.0, 2.0 * (1.0 - means) + 1.0)
    np.testing.assert_allclose(dprop(x, size, mean), expected, rtol=1e-12)


def test_cdf_and_quantile_match_beta():
    x = np.array([0.1, 0.45, 0.8])
    expected = stats.beta.cdf(x, 6.0, 16.0)
    np.testing.assert_allclose(pprop(x, 20.0, 0.25), expected, rtol=1e-10)
    np.testing.assert_allclose(qprop(expected, 20.0, 0.25), x, rtol=1e-8)


def test_mean_outside_unit_interval_warns(domain_warnings):
    out = pprop(0.5, [5.0, 5.0], [1.2, 0.5])
    assert np.isnan(out[0])
    assert np.isfinite(out[1])
    assert domain_warnings() == 1


def test_nonpositive_size_warns(domain_warnings):
    assert np.isnan(dprop(0.5, 0.0, 0.5)[0])
    assert domain_warnings() == 1

import numpy as np
import pytest
from scipy.integrate import quad

from families.kumaraswamy import dkumar, pkumar, qkumar


def test_quantile_inverts_cdf():
    assert qkumar(pkumar(0.4, 2.0, 3.0), 2.0, 3.0)[0] == pytest.approx(0.4)


def test_cdf_closed_form():
    x = np.array([0.1, 0.5, 0.9])
    a, b = 1.5, 4.0
    np.testing.assert_allclose(pkumar(x, a, b), 1.0 - (1.0 - x ** a) ** b, rtol=1e-12)


def test_density_integrates_to_one():
    total, _ = quad(lambda t: dkumar(t, 2.0, 5.0)[0], 0.0, 1.0)
    assert total == pytest.approx(1.0, abs=1e-8)


def test_density_outside_unit_interval():
    np.testing.assert_array_equal(dkumar([-0.1, 1.1], 2.0, 3.0), [0.0, 0.0])
    assert dkumar(-0.1, 2.0, 3.0, log_prob=True)[0] == -np.inf


def test_bounds_of_cdf():
    np.testing.assert_array_equal(pkumar([-1.0, 1.0, 2.0], 2.0, 2.0), [0.0, 1.0, 1.0])


def test_nonpositive_shape_warns(domain_warnings):
    out = dkumar([0.3, 0.6], [1.0, 0.0], 2.0)
    assert np.isfinite(out[0])
    assert np.isnan(out[1])
    assert domain_warnings() == 1

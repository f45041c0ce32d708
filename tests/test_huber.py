import numpy as np
import pytest
from scipy import stats
from scipy.integrate import quad

from families.huber import dhuber, phuber, qhuber


@pytest.mark.parametrize("epsilon", [0.5, 1.345, 3.0])
def test_density_integrates_to_one(epsilon):
    total, _ = quad(lambda t: dhuber(t, 0.0, 1.0, epsilon)[0], -np.inf, np.inf)
    assert total == pytest.approx(1.0, abs=1e-7), f"mass {total:.8f} for epsilon={epsilon}"


def test_cdf_matches_integrated_density():
    for x in (-3.0, -1.0, 0.4, 2.2):
        area, _ = quad(lambda t: dhuber(t, 0.5, 2.0, 1.0)[0], -np.inf, x)
        assert phuber(x, 0.5, 2.0, 1.0)[0] == pytest.approx(area, abs=1e-7)


def test_cdf_is_one_half_at_location():
    assert phuber(1.5, 1.5, 0.7)[0] == pytest.approx(0.5)


def test_large_epsilon_approaches_normal():
    x = np.array([-2.0, 0.0, 1.0])
    np.testing.assert_allclose(dhuber(x, epsilon=50.0), stats.norm.pdf(x), rtol=1e-10)


def test_quantile_inverts_cdf():
    x = np.array([-4.0, -1.2, 0.3, 2.5])
    p = phuber(x, 0.0, 1.0, 1.345)
    np.testing.assert_allclose(qhuber(p, 0.0, 1.0, 1.345), x, rtol=1e-8, atol=1e-10)


def test_bad_scale_or_epsilon_warns(domain_warnings):
    out = dhuber(0.0, 0.0, [1.0, 0.0, 1.0], [1.0, 1.0, -1.0])
    assert np.isfinite(out[0])
    assert np.isnan(out[1:]).all()
    assert domain_warnings() == 1


def test_quantile_rejects_probability_outside_unit_interval(domain_warnings):
    assert np.isnan(qhuber(1.5)[0])
    assert domain_warnings() == 1

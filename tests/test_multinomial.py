import numpy as np
import pytest
from scipy import stats

from families.multinomial import dmnom, rmnom


def test_mass():
    assert dmnom([2.0, 1.0], 3.0, [0.5, 0.5])[0] == pytest.approx(0.375)


def test_matches_scipy_with_unnormalized_weights():
    x = np.array([[1.0, 2.0, 3.0], [0.0, 0.0, 6.0]])
    weights = np.array([1.0, 2.0, 3.0])
    expected = stats.multinomial.pmf(x, 6, weights / weights.sum())
    np.testing.assert_allclose(dmnom(x, 6.0, weights), expected, rtol=1e-10)


def test_counts_not_summing_to_size_have_no_mass():
    assert dmnom([1.0, 1.0], 3.0, [0.5, 0.5])[0] == 0.0
    assert dmnom([1.5, 1.5], 3.0, [0.5, 0.5], log_prob=True)[0] == -np.inf


def test_column_mismatch_raises():
    with pytest.raises(ValueError):
        dmnom([1.0, 2.0], 3.0, [0.2, 0.3, 0.5])


def test_bad_parameters_warn(domain_warnings):
    out = dmnom([1.0, 1.0], [2.0, 2.5], [0.5, 0.5])
    assert np.isfinite(out[0])
    assert np.isnan(out[1])
    assert domain_warnings() == 1


def test_draws_sum_to_size():
    x = rmnom(500, [4.0, 10.0], [0.2, 0.3, 0.5], rng=3)
    assert x.shape == (500, 3)
    np.testing.assert_array_equal(x.sum(axis=1), np.tile([4.0, 10.0], 250))
    assert (x >= 0).all()

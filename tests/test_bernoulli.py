import numpy as np

from families.bernoulli import dbern, pbern, qbern


def test_mass():
    np.testing.assert_allclose(dbern([1.0, 0.0], 0.3), [0.3, 0.7])
    np.testing.assert_allclose(dbern(1.0), [0.5])


def test_improper_values_have_no_mass(domain_warnings):
    np.testing.assert_array_equal(dbern([0.5, 2.0, -1.0], 0.3), [0.0, 0.0, 0.0])
    assert domain_warnings() == 0


def test_cdf():
    np.testing.assert_allclose(pbern([-0.5, 0.0, 0.5, 1.0], 0.3), [0.0, 0.7, 0.7, 1.0])
    np.testing.assert_allclose(pbern(0.0, 0.3, lower_tail=False), [0.3])


def test_quantile_threshold():
    np.testing.assert_array_equal(qbern([0.0, 0.7, 0.71, 1.0], 0.3), [0.0, 0.0, 1.0, 1.0])


def test_probability_out_of_range_warns(domain_warnings):
    out = dbern(1.0, [0.2, 1.5, -0.1])
    assert out[0] == 0.2
    assert np.isnan(out[1:]).all()
    assert domain_warnings() == 1

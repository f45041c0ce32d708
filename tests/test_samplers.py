import numpy as np
import pytest
from scipy import stats

import families.bernoulli as bernoulli
import families.tukey_lambda as tukey_lambda
from families import (
    pkumar,
    phuber,
    rbern,
    rcat,
    rgpois,
    rhuber,
    rkumar,
    rlaplace,
    rmnom,
    rpower,
    rprop,
    rrayleigh,
    rtlambda,
    rzib,
)
from recycling import open_uniform

N = 5000


@pytest.mark.parametrize(
    "draw, cdf",
    [
        (lambda rng: rrayleigh(N, 2.0, rng=rng), stats.rayleigh(scale=2.0).cdf),
        (lambda rng: rlaplace(N, 1.0, 0.5, rng=rng), stats.laplace(1.0, 0.5).cdf),
        (lambda rng: rkumar(N, 2.0, 3.0, rng=rng), lambda x: pkumar(x, 2.0, 3.0)),
        (lambda rng: rpower(N, 2.0, 3.0, rng=rng), stats.powerlaw(3.0, scale=2.0).cdf),
        (lambda rng: rhuber(N, rng=rng), lambda x: phuber(x)),
        (lambda rng: rtlambda(N, 0.0, rng=rng), stats.logistic.cdf),
        (lambda rng: rprop(N, 8.0, 0.25, rng=rng), stats.beta(3.0, 7.0).cdf),
    ],
    ids=["rayleigh", "laplace", "kumaraswamy", "power", "huber", "tukey_lambda", "proportion"],
)
def test_continuous_samplers_follow_their_cdf(draw, cdf):
    sample = draw(np.random.default_rng(20240607))
    result = stats.kstest(sample, cdf)
    assert result.pvalue > 0.001, f"KS statistic {result.statistic:.4f}, p={result.pvalue:.2e}"


def test_discrete_sampler_means():
    rng = np.random.default_rng(11)
    n = 20000
    assert rbern(n, 0.3, rng=rng).mean() == pytest.approx(0.3, abs=0.02)
    assert rgpois(n, 2.0, 3.0, rng=rng).mean() == pytest.approx(6.0, abs=0.3)
    assert rzib(n, 10.0, 0.4, 0.3, rng=rng).mean() == pytest.approx(2.8, abs=0.1)


def test_categorical_frequencies():
    x = rcat(20000, [1.0, 1.0, 2.0], rng=5)
    freq = np.array([(x == k).mean() for k in (1.0, 2.0, 3.0)])
    np.testing.assert_allclose(freq, [0.25, 0.25, 0.5], atol=0.02)


def test_multinomial_column_means():
    x = rmnom(20000, 10.0, [0.2, 0.3, 0.5], rng=8)
    np.testing.assert_allclose(x.mean(axis=0), [2.0, 3.0, 5.0], atol=0.1)


def test_same_seed_same_draws():
    np.testing.assert_array_equal(rlaplace(10, rng=42), rlaplace(10, rng=42))
    np.testing.assert_array_equal(rgpois(10, 1.0, 1.0, rng=42), rgpois(10, 1.0, 1.0, rng=42))


def test_sequence_n_and_parameter_truncation():
    assert rrayleigh([0, 0, 0]).shape == (3,)
    assert rkumar(2, [1.0, 2.0, 3.0, 4.0], 1.0).shape == (2,)
    assert rbern(0, 0.5).shape == (0,)


def test_invalid_parameter_gives_nan_and_one_warning(domain_warnings):
    x = rrayleigh(4, [1.0, -1.0], rng=1)
    assert np.isfinite(x[[0, 2]]).all()
    assert np.isnan(x[[1, 3]]).all()
    assert domain_warnings() == 1


def test_missing_parameter_is_silent(domain_warnings):
    x = rzib(3, 5.0, [0.5, np.nan, 0.5], 0.1, rng=1)
    assert np.isnan(x[1])
    assert domain_warnings() == 0


def test_empty_parameters_with_positive_n_raise():
    with pytest.raises(ValueError):
        rlaplace(3, [], 1.0)


class ZeroUniforms:
    """Generator stand-in whose uniform draws all hit the closed endpoint 0."""

    def random(self, n):
        return np.zeros(n)


def test_uniform_endpoint_stays_inside_support(monkeypatch):
    monkeypatch.setattr(bernoulli, "resolve_rng", lambda rng: ZeroUniforms())
    monkeypatch.setattr(tukey_lambda, "resolve_rng", lambda rng: ZeroUniforms())
    np.testing.assert_array_equal(bernoulli.rbern(4, 0.0), np.zeros(4))
    assert np.isfinite(tukey_lambda.rtlambda(4, [0.0, -0.5])).all()


def test_open_uniform_never_returns_zero():
    u = open_uniform(ZeroUniforms(), 5)
    assert (u > 0.0).all()
    assert (u < 1.0).all()

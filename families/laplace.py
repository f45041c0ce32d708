import numpy as np
import numba as nb

from recycling import (
    apply3,
    as_vector,
    finalize_cdf,
    finalize_density,
    prepare_probs,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng
from validation import valid_prob


@nb.njit()
def logpdf(x, mu, sigma):
    """
    Log-PDF of the Laplace distribution, f(x) = exp(-|x - mu| / sigma) / (2 sigma).
    """
    if np.isnan(x) or np.isnan(mu) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0:
        return np.nan, True
    return -np.log(2.0 * sigma) - np.abs(x - mu) / sigma, False


@nb.njit()
def cdf(x, mu, sigma):
    """
    Piecewise exponential CDF around the location.
    """
    if np.isnan(x) or np.isnan(mu) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0:
        return np.nan, True
    z = (x - mu) / sigma
    if x < mu:
        return 0.5 * np.exp(z), False
    return 1.0 - 0.5 * np.exp(-z), False


@nb.njit()
def ppf(p, mu, sigma):
    if np.isnan(p) or np.isnan(mu) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0 or not valid_prob(p):
        return np.nan, True
    if p < 0.5:
        return mu + sigma * np.log(2.0 * p), False
    return mu - sigma * np.log(2.0 * (1.0 - p)), False


@nb.njit()
def rvs(u, mu, sigma):
    """
    Map a uniform draw on (-1/2, 1/2) to a Laplace variate.

    The sign of u picks the side of mu, log(1 - 2|u|) the distance.
    """
    if np.isnan(mu) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0:
        return np.nan, True
    return mu - sigma * np.sign(u) * np.log1p(-2.0 * np.abs(u)), False


def dlaplace(x, mu=0.0, sigma=1.0, log_prob=False):
    x, mu, sigma = as_vector(x), as_vector(mu), as_vector(sigma)
    logp, invalid = apply3(logpdf, x, mu, sigma)
    warn_nans(invalid)
    return finalize_density(logp, log_prob)


def plaplace(x, mu=0.0, sigma=1.0, lower_tail=True, log_prob=False):
    x, mu, sigma = as_vector(x), as_vector(mu), as_vector(sigma)
    p, invalid = apply3(cdf, x, mu, sigma)
    warn_nans(invalid)
    return finalize_cdf(p, lower_tail, log_prob)


def qlaplace(p, mu=0.0, sigma=1.0, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    q, invalid = apply3(ppf, p, as_vector(mu), as_vector(sigma))
    warn_nans(invalid)
    return q


def rlaplace(n, mu=0.0, sigma=1.0, rng=None):
    n = sample_size(n)
    mu, sigma = sampler_args(n, as_vector(mu), as_vector(sigma))
    u = resolve_rng(rng).uniform(-0.5, 0.5, n)
    u[u == -0.5] = np.nextafter(-0.5, 0.0)
    x, invalid = apply3(rvs, u, mu, sigma)
    warn_nans(invalid, "NAs produced")
    return x

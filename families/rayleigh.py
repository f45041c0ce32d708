import numpy as np
import numba as nb

from recycling import (
    apply2,
    as_vector,
    finalize_cdf,
    finalize_density,
    open_uniform,
    prepare_probs,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng
from validation import valid_prob


@nb.njit()
def logpdf(x, sigma):
    """
    Log-PDF of the Rayleigh distribution, f(x) = x/sigma^2 * exp(-x^2 / (2 sigma^2)).

    Parameters:
        x: Point at which to evaluate (scalar).
        sigma: Scale (scalar, > 0).

    Returns:
        Tuple (log-density, invalid).
    """
    if np.isnan(x) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0:
        return np.nan, True
    if x < 0.0 or not np.isfinite(x):
        return -np.inf, False
    return np.log(x) - 2.0 * np.log(sigma) - x * x / (2.0 * sigma * sigma), False


@nb.njit()
def cdf(x, sigma):
    """
    CDF of the Rayleigh distribution, F(x) = 1 - exp(-x^2 / (2 sigma^2)).
    """
    if np.isnan(x) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0:
        return np.nan, True
    if x < 0.0:
        return 0.0, False
    if not np.isfinite(x):
        return 1.0, False
    return -np.expm1(-x * x / (2.0 * sigma * sigma)), False


@nb.njit()
def ppf(p, sigma):
    """
    Inverse CDF of the Rayleigh distribution, sigma * sqrt(-2 log(1 - p)).
    """
    if np.isnan(p) or np.isnan(sigma):
        return np.nan, False
    if sigma <= 0.0 or not valid_prob(p):
        return np.nan, True
    return sigma * np.sqrt(-2.0 * np.log1p(-p)), False


def drayleigh(x, sigma=1.0, log_prob=False):
    x, sigma = as_vector(x), as_vector(sigma)
    logp, invalid = apply2(logpdf, x, sigma)
    warn_nans(invalid)
    return finalize_density(logp, log_prob)


def prayleigh(x, sigma=1.0, lower_tail=True, log_prob=False):
    x, sigma = as_vector(x), as_vector(sigma)
    p, invalid = apply2(cdf, x, sigma)
    warn_nans(invalid)
    return finalize_cdf(p, lower_tail, log_prob)


def qrayleigh(p, sigma=1.0, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    q, invalid = apply2(ppf, p, as_vector(sigma))
    warn_nans(invalid)
    return q


def rrayleigh(n, sigma=1.0, rng=None):
    """
    Random variates from the Rayleigh distribution by inverse transform.

    Parameters:
        n: Number of draws (int, or a sequence whose length is used).
        sigma: Scale (recycled over the draws).
        rng: numpy.random.Generator, seed or None.

    Returns:
        1D array of length n.
    """
    n = sample_size(n)
    (sigma,) = sampler_args(n, as_vector(sigma))
    u = open_uniform(resolve_rng(rng), n)
    x, invalid = apply2(ppf, u, sigma)
    warn_nans(invalid, "NAs produced")
    return x

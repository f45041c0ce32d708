import numpy as np
import numba as nb

from recycling import (
    apply3,
    as_vector,
    finalize_density,
    finalize_log_cdf,
    open_uniform,
    prepare_probs,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng
from validation import valid_prob, xlogy


@nb.njit()
def logpdf(x, alpha, beta):
    """
    Log-PDF of the power distribution on (0, alpha).

    f(x) = beta * x^(beta-1) / alpha^beta

    Parameters:
        x: Point at which to evaluate (scalar).
        alpha: Upper bound of the support (scalar, > 0).
        beta: Shape (scalar, > 0).

    Returns:
        Tuple (log-density, invalid).
    """
    if np.isnan(x) or np.isnan(alpha) or np.isnan(beta):
        return np.nan, False
    if alpha <= 0.0 or beta <= 0.0:
        return np.nan, True
    if x <= 0.0 or x >= alpha:
        return -np.inf, False
    return np.log(beta) + xlogy(beta - 1.0, x) - beta * np.log(alpha), False


@nb.njit()
def logcdf(x, alpha, beta):
    """
    Log-CDF, beta * (log(x) - log(alpha)).
    """
    if np.isnan(x) or np.isnan(alpha) or np.isnan(beta):
        return np.nan, False
    if alpha <= 0.0 or beta <= 0.0:
        return np.nan, True
    if x <= 0.0:
        return -np.inf, False
    if x >= alpha:
        return 0.0, False
    return beta * (np.log(x) - np.log(alpha)), False


@nb.njit()
def ppf(p, alpha, beta):
    if np.isnan(p) or np.isnan(alpha) or np.isnan(beta):
        return np.nan, False
    if alpha <= 0.0 or beta <= 0.0 or not valid_prob(p):
        return np.nan, True
    return alpha * p ** (1.0 / beta), False


def dpower(x, alpha, beta, log_prob=False):
    x, alpha, beta = as_vector(x), as_vector(alpha), as_vector(beta)
    logp, invalid = apply3(logpdf, x, alpha, beta)
    warn_nans(invalid)
    return finalize_density(logp, log_prob)


def ppower(x, alpha, beta, lower_tail=True, log_prob=False):
    """
    CDF of the power distribution, F(x) = (x / alpha)^beta.

    The kernel works on the log scale; the upper tail is taken as 1 - F(x)
    in probability space before any log is applied.
    """
    x, alpha, beta = as_vector(x), as_vector(alpha), as_vector(beta)
    logp, invalid = apply3(logcdf, x, alpha, beta)
    warn_nans(invalid)
    return finalize_log_cdf(logp, lower_tail, log_prob)


def qpower(p, alpha, beta, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    q, invalid = apply3(ppf, p, as_vector(alpha), as_vector(beta))
    warn_nans(invalid)
    return q


def rpower(n, alpha, beta, rng=None):
    n = sample_size(n)
    alpha, beta = sampler_args(n, as_vector(alpha), as_vector(beta))
    u = open_uniform(resolve_rng(rng), n)
    x, invalid = apply3(ppf, u, alpha, beta)
    warn_nans(invalid, "NAs produced")
    return x

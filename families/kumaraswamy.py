import numpy as np
import numba as nb

from recycling import (
    apply3,
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
from validation import valid_prob, xlog1py, xlogy


@nb.njit()
def logpdf(x, a, b):
    """
    Log-PDF of the Kumaraswamy distribution on [0, 1].

    f(x) = a * b * x^(a-1) * (1 - x^a)^(b-1)

    Parameters:
        x: Point at which to evaluate (scalar).
        a: First shape parameter (scalar, > 0).
        b: Second shape parameter (scalar, > 0).

    Returns:
        Tuple (log-density, invalid).
    """
    if np.isnan(x) or np.isnan(a) or np.isnan(b):
        return np.nan, False
    if a <= 0.0 or b <= 0.0:
        return np.nan, True
    if x < 0.0 or x > 1.0:
        return -np.inf, False
    return np.log(a) + np.log(b) + xlogy(a - 1.0, x) + xlog1py(b - 1.0, -(x ** a)), False


@nb.njit()
def cdf(x, a, b):
    """
    CDF of the Kumaraswamy distribution, F(x) = 1 - (1 - x^a)^b.
    """
    if np.isnan(x) or np.isnan(a) or np.isnan(b):
        return np.nan, False
    if a <= 0.0 or b <= 0.0:
        return np.nan, True
    if x < 0.0:
        return 0.0, False
    if x >= 1.0:
        return 1.0, False
    return -np.expm1(b * np.log1p(-(x ** a))), False


@nb.njit()
def ppf(p, a, b):
    """
    Inverse CDF, (1 - (1 - p)^(1/b))^(1/a).
    """
    if np.isnan(p) or np.isnan(a) or np.isnan(b):
        return np.nan, False
    if a <= 0.0 or b <= 0.0 or not valid_prob(p):
        return np.nan, True
    return (-np.expm1(np.log1p(-p) / b)) ** (1.0 / a), False


def dkumar(x, a, b, log_prob=False):
    x, a, b = as_vector(x), as_vector(a), as_vector(b)
    logp, invalid = apply3(logpdf, x, a, b)
    warn_nans(invalid)
    return finalize_density(logp, log_prob)


def pkumar(x, a, b, lower_tail=True, log_prob=False):
    x, a, b = as_vector(x), as_vector(a), as_vector(b)
    p, invalid = apply3(cdf, x, a, b)
    warn_nans(invalid)
    return finalize_cdf(p, lower_tail, log_prob)


def qkumar(p, a, b, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    q, invalid = apply3(ppf, p, as_vector(a), as_vector(b))
    warn_nans(invalid)
    return q


def rkumar(n, a, b, rng=None):
    """
    Random variates from the Kumaraswamy distribution by inverse transform;
    no rejection step is needed.
    """
    n = sample_size(n)
    a, b = sampler_args(n, as_vector(a), as_vector(b))
    u = open_uniform(resolve_rng(rng), n)
    x, invalid = apply3(ppf, u, a, b)
    warn_nans(invalid, "NAs produced")
    return x

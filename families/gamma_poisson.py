import logging
import math

import numpy as np
import numba as nb

import settings
from recycling import (
    apply3,
    as_vector,
    check_cancelled,
    finalize_cdf,
    finalize_density,
    recycle_index,
    recycled_length,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng
from validation import is_integer, lfactorial

logger = logging.getLogger(__name__)


@nb.njit()
def logpmf(x, shape, scale):
    """
    Log-PMF of the gamma-Poisson (negative binomial) distribution.

    The Poisson rate follows a gamma(shape, scale) prior, which gives a negative
    binomial with real-valued size `shape` and success probability
    p = scale / (1 + scale):

        f(x) = Gamma(shape + x) / (Gamma(shape) x!) * p^x * (1 - p)^shape

    Parameters:
        x: Count at which to evaluate (scalar).
        shape: Gamma shape alpha (scalar, > 0).
        scale: Gamma scale beta (scalar, > 0).

    Returns:
        Tuple (log-mass, invalid).
    """
    if np.isnan(x) or np.isnan(shape) or np.isnan(scale):
        return np.nan, False
    if shape <= 0.0 or scale <= 0.0:
        return np.nan, True
    if x < 0.0 or not is_integer(x):
        return -np.inf, False
    log_p = np.log(scale) - np.log1p(scale)
    return (
        math.lgamma(shape + x) - (lfactorial(x) + math.lgamma(shape))
        + x * log_p - shape * np.log1p(scale)
    ), False


@nb.njit()
def cdf_table(x_max, shape, scale):
    """
    Cumulative probabilities for every count 0..floor(x_max).

    Each term follows from the previous one through
    f(j) = f(j-1) * (j + shape - 1) / j * p, accumulated on the log scale.

    Parameters:
        x_max: Largest finite observation of the batch (scalar, >= 0).
        shape: Gamma shape alpha (scalar, > 0).
        scale: Gamma scale beta (scalar, > 0).

    Returns:
        1D array of length floor(x_max) + 1.
    """
    size = int(math.floor(x_max)) + 1
    table = np.empty(size)
    log_p = np.log(scale) - np.log1p(scale)
    log_term = -shape * np.log1p(scale)
    table[0] = np.exp(log_term)
    for j in range(1, size):
        log_term += np.log(j + shape - 1.0) - np.log(j) + log_p
        table[j] = min(table[j - 1] + np.exp(log_term), 1.0)
    return table


def dgpois(x, shape, scale, log_prob=False):
    x, shape, scale = as_vector(x), as_vector(shape), as_vector(scale)
    logp, invalid = apply3(logpmf, x, shape, scale)
    warn_nans(invalid)
    return finalize_density(logp, log_prob)


def pgpois(x, shape, scale, lower_tail=True, log_prob=False, cancel=None):
    """
    CDF of the gamma-Poisson distribution.

    One cumulative table is built per distinct (shape index, scale index) pair
    and shared by every observation using that pair; the memo lives only for
    this call.

    Parameters:
        x: Points at which to evaluate the CDF.
        shape: Gamma shape alpha (> 0).
        scale: Gamma scale beta (> 0).
        lower_tail: P(X <= x) if True, P(X > x) otherwise.
        log_prob: Return log-probabilities.
        cancel: Optional object with is_set(), polled every
            settings.INTERRUPT_CHECK_INTERVAL elements.

    Returns:
        1D array of probabilities.

    Raises:
        ComputationCancelled: if cancel is set when polled.
    """
    x, shape, scale = as_vector(x), as_vector(shape), as_vector(scale)
    n = recycled_length(x, shape, scale)
    nx, nshape, nscale = len(x), len(shape), len(scale)
    every = settings.INTERRUPT_CHECK_INTERVAL

    finite = x[np.isfinite(x)]
    x_max = max(finite.max(), 0.0) if finite.size else 0.0

    p = np.empty(n)
    memo = {}
    invalid = False
    for i in range(n):
        check_cancelled(cancel, i, every)
        xi = x[i % nx]
        ia, ib = i % nshape, i % nscale
        alpha, beta = shape[ia], scale[ib]
        if np.isnan(xi) or np.isnan(alpha) or np.isnan(beta):
            p[i] = np.nan
        elif alpha <= 0.0 or beta <= 0.0:
            p[i] = np.nan
            invalid = True
        elif xi < 0.0:
            p[i] = 0.0
        elif xi == np.inf:
            p[i] = 1.0
        else:
            table = memo.get((ia, ib))
            if table is None:
                table = cdf_table(x_max, alpha, beta)
                memo[(ia, ib)] = table
            p[i] = table[int(xi)]

    logger.debug("pgpois built %d cumulative tables of length %d", len(memo), int(x_max) + 1)
    warn_nans(invalid)
    return finalize_cdf(p, lower_tail, log_prob)


def rgpois(n, shape, scale, rng=None):
    """
    Random variates from the gamma-Poisson distribution: a gamma(shape, scale)
    rate followed by a Poisson count at that rate.
    """
    n = sample_size(n)
    shape, scale = sampler_args(n, as_vector(shape), as_vector(scale))
    rng = resolve_rng(rng)
    x = np.full(n, np.nan)
    if n == 0:
        return x
    shape = shape[recycle_index(n, len(shape))]
    scale = scale[recycle_index(n, len(scale))]
    missing = np.isnan(shape) | np.isnan(scale)
    invalid = ~missing & ((shape <= 0.0) | (scale <= 0.0))
    ok = ~missing & ~invalid
    rate = rng.gamma(shape[ok], scale[ok])
    x[ok] = rng.poisson(rate)
    warn_nans(invalid.any(), "NAs produced")
    return x

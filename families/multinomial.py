import logging

import numpy as np
import numba as nb

from recycling import (
    as_matrix,
    as_vector,
    finalize_density,
    recycle_index,
    sample_size,
    warn_nans,
)
from settings import resolve_rng
from validation import is_integer, lfactorial, xlogy

logger = logging.getLogger(__name__)


@nb.njit()
def logpmf_batch(x, size, prob):
    """
    Log-PMF of the multinomial distribution, one output per recycled row.

        log f(x) = log(n!) - sum(log(x_j!)) + sum(x_j log(p_j / sum(p)))

    Parameters:
        x: 2D array of category counts (rows recycled).
        size: 1D array of total counts n (recycled).
        prob: 2D array of category weights (rows recycled, normalized here).

    Returns:
        Tuple (log-mass, invalid).
    """
    nx, ns, npr = x.shape[0], size.shape[0], prob.shape[0]
    k = prob.shape[1]
    n = 0 if min(nx, ns, npr) == 0 else max(nx, ns, npr)
    out = np.empty(n)
    invalid = False
    for i in range(n):
        xr = x[i % nx]
        pr = prob[i % npr]
        total = size[i % ns]

        missing = np.isnan(total)
        wrong_param = False
        p_tot = 0.0
        for j in range(k):
            if np.isnan(pr[j]) or np.isnan(xr[j]):
                missing = True
                break
            if pr[j] < 0.0:
                wrong_param = True
            p_tot += pr[j]
        if missing:
            out[i] = np.nan
            continue
        if (wrong_param or total < 0.0 or not is_integer(total)
                or not np.isfinite(p_tot) or p_tot <= 0.0):
            out[i] = np.nan
            invalid = True
            continue

        wrong_x = False
        sum_x = 0.0
        log_xfac = 0.0
        log_pow = 0.0
        for j in range(k):
            if xr[j] < 0.0 or not is_integer(xr[j]):
                wrong_x = True
                break
            sum_x += xr[j]
            log_xfac += lfactorial(xr[j])
            log_pow += xlogy(xr[j], pr[j] / p_tot)
        if wrong_x or sum_x != total:
            out[i] = -np.inf
        else:
            out[i] = lfactorial(total) - log_xfac + log_pow
    return out, invalid


def dmnom(x, size, prob, log_prob=False):
    """
    Mass of the multinomial distribution.

    Parameters:
        x: Vector of counts, or matrix with one row of counts per observation.
        size: Total number of draws (non-negative integer).
        prob: Vector of weights, or matrix with one row per parameter set.
            Rows are normalized to sum to one.
        log_prob: Return log-mass.

    Returns:
        1D array of (log-)mass values.

    Raises:
        ValueError: if x and prob have a different number of columns.
    """
    x = as_matrix(x, "x")
    prob = as_matrix(prob)
    if x.shape[1] != prob.shape[1]:
        raise ValueError("Number of columns in 'x' does not equal number of columns in 'prob'.")
    logp, invalid = logpmf_batch(x, as_vector(size), prob)
    warn_nans(invalid)
    return finalize_density(logp, log_prob)


def rmnom(n, size, prob, rng=None):
    """
    Random count vectors from the multinomial distribution.

    Each category but the last is a binomial draw from the trials still left,
    with its probability renormalized over the categories not yet drawn; the
    last category takes whatever remains, so every row sums to size.

    Parameters:
        n: Number of draws (int, or a sequence whose length is used).
        size: Total number of trials per draw (recycled).
        prob: Vector of weights, or matrix with one row per parameter set (recycled).
        rng: numpy.random.Generator, seed or None.

    Returns:
        2D array of shape (n, k).
    """
    n = sample_size(n)
    size = as_vector(size)
    prob = as_matrix(prob)
    k = prob.shape[1]
    x = np.full((n, k), np.nan)
    if n == 0:
        return x
    if len(size) == 0 or prob.shape[0] == 0:
        raise ValueError("invalid arguments: parameters must not be empty.")
    rng = resolve_rng(rng)

    size = size[recycle_index(n, len(size))]
    rows = prob[recycle_index(n, prob.shape[0])]
    with np.errstate(invalid="ignore"):
        row_sum = rows.sum(axis=1)
        missing = np.isnan(size) | np.isnan(rows).any(axis=1)
        invalid = ~missing & (
            (rows < 0.0).any(axis=1) | (size < 0.0) | (np.floor(size) != size)
            | ~np.isfinite(size) | ~np.isfinite(row_sum) | (row_sum <= 0.0)
        )
    ok = ~missing & ~invalid

    p = rows[ok] / row_sum[ok, np.newaxis]
    size_left = size[ok].astype(np.int64)
    sum_p = np.ones(len(size_left))
    draws = np.empty((len(size_left), k))
    for j in range(k - 1):
        with np.errstate(divide="ignore", invalid="ignore"):
            cond = np.where(sum_p > 0.0, p[:, j] / sum_p, 0.0)
        draws[:, j] = rng.binomial(size_left, np.clip(cond, 0.0, 1.0))
        size_left = size_left - draws[:, j].astype(np.int64)
        sum_p = sum_p - p[:, j]
    draws[:, k - 1] = size_left
    x[ok] = draws

    if invalid.any():
        logger.debug("rmnom produced %d rows of NaN", int(invalid.sum()))
    warn_nans(invalid.any(), "NAs produced")
    return x

import math

import numpy as np
import numba as nb

from recycling import (
    as_matrix,
    as_vector,
    finalize_cdf,
    finalize_mass,
    prepare_probs,
    sample_size,
    warn_nans,
)
from settings import resolve_rng
from validation import is_integer, normalize_prob, valid_prob


@nb.njit()
def _length(values, prob):
    n, rows = values.shape[0], prob.shape[0]
    return 0 if min(n, rows) == 0 else max(n, rows)


@nb.njit()
def pmf_batch(x, prob, bad_rows):
    """
    Mass of 1-based categories under row-normalized probabilities.

    Parameters:
        x: 1D array of categories.
        prob: 2D array of normalized probabilities (NaN rows are missing or invalid).
        bad_rows: 1D boolean array, True for rows that are out of domain.

    Returns:
        Tuple (mass, invalid).
    """
    n = _length(x, prob)
    nx, rows, k = x.shape[0], prob.shape[0], prob.shape[1]
    out = np.empty(n)
    invalid = False
    for i in range(n):
        xi = x[i % nx]
        r = i % rows
        if np.isnan(xi):
            out[i] = np.nan
        elif bad_rows[r]:
            out[i] = np.nan
            invalid = True
        elif np.isnan(prob[r, 0]):
            out[i] = np.nan
        elif not is_integer(xi) or xi < 1.0 or xi > k:
            out[i] = 0.0
        else:
            out[i] = prob[r, int(xi) - 1]
    return out, invalid


@nb.njit()
def cdf_batch(x, prob, bad_rows):
    """
    Partial sums of each row up to and including the queried category.
    """
    n = _length(x, prob)
    nx, rows, k = x.shape[0], prob.shape[0], prob.shape[1]
    out = np.empty(n)
    invalid = False
    for i in range(n):
        xi = x[i % nx]
        r = i % rows
        if np.isnan(xi):
            out[i] = np.nan
        elif bad_rows[r]:
            out[i] = np.nan
            invalid = True
        elif np.isnan(prob[r, 0]):
            out[i] = np.nan
        elif xi < 1.0:
            out[i] = 0.0
        elif xi >= k:
            out[i] = 1.0
        else:
            total = 0.0
            for j in range(int(math.floor(xi))):
                total += prob[r, j]
            out[i] = total
    return out, invalid


@nb.njit()
def ppf_batch(p, prob, bad_rows):
    """
    Categories for lower-tail probabilities.

    Scans from the last category downwards, removing its mass from the
    remaining total until the target exceeds what is left.
    """
    n = _length(p, prob)
    npr, rows, k = p.shape[0], prob.shape[0], prob.shape[1]
    out = np.empty(n)
    invalid = False
    for i in range(n):
        target = p[i % npr]
        r = i % rows
        if np.isnan(target):
            out[i] = np.nan
        elif bad_rows[r] or not valid_prob(target):
            out[i] = np.nan
            invalid = True
        elif np.isnan(prob[r, 0]):
            out[i] = np.nan
        elif target == 0.0:
            out[i] = 1.0
        else:
            remaining = 1.0
            category = 0
            for j in range(k - 1, -1, -1):
                remaining -= prob[r, j]
                if target > remaining:
                    category = j
                    break
            out[i] = category + 1.0
    return out, invalid


def _normalized(prob):
    return normalize_prob(as_matrix(prob))


def dcat(x, prob, log_prob=False):
    """
    Mass of the categorical distribution over categories 1..k.

    Parameters:
        x: Categories (1-based); non-integer or out-of-range values have no mass.
        prob: Vector of weights, or matrix with one row of weights per parameter
            set. Rows are normalized to sum to one.
        log_prob: Return log-mass.

    Returns:
        1D array of (log-)mass values.
    """
    prob, bad_rows = _normalized(prob)
    p, invalid = pmf_batch(as_vector(x), prob, bad_rows)
    warn_nans(invalid)
    return finalize_mass(p, log_prob)


def pcat(x, prob, lower_tail=True, log_prob=False):
    prob, bad_rows = _normalized(prob)
    p, invalid = cdf_batch(as_vector(x), prob, bad_rows)
    warn_nans(invalid)
    return finalize_cdf(p, lower_tail, log_prob)


def qcat(p, prob, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    prob, bad_rows = _normalized(prob)
    q, invalid = ppf_batch(p, prob, bad_rows)
    warn_nans(invalid)
    return q


def rcat(n, prob, rng=None):
    """
    Random categories, mapping uniform draws through the same downward scan
    as the quantile function.
    """
    n = sample_size(n)
    prob, bad_rows = _normalized(prob)
    if n > 0 and prob.shape[0] == 0:
        raise ValueError("invalid arguments: parameters must not be empty.")
    prob, bad_rows = prob[:n], bad_rows[:n]
    u = resolve_rng(rng).random(n)
    x, invalid = ppf_batch(u, prob, bad_rows)
    warn_nans(invalid, "NAs produced")
    return x

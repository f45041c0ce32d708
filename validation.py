import logging
import math

import numpy as np
import numba as nb

logger = logging.getLogger(__name__)


@nb.njit()
def is_integer(x):
    """
    True for finite values without a fractional part.
    """
    return np.isfinite(x) and math.floor(x) == x


@nb.njit()
def valid_prob(p):
    return p >= 0.0 and p <= 1.0


@nb.njit()
def lfactorial(x):
    return math.lgamma(x + 1.0)


@nb.njit()
def xlogy(x, y):
    """
    x * log(y) with the convention 0 * log(0) = 0.
    """
    if x == 0.0:
        return 0.0
    return x * np.log(y)


@nb.njit()
def xlog1py(x, y):
    """
    x * log1p(y) with the convention 0 * log(0) = 0.
    """
    if x == 0.0:
        return 0.0
    return x * np.log1p(y)


def normalize_prob(prob):
    """
    Divide each row of a weight matrix by its sum.

    Parameters:
        prob: 2D numpy array.
            Non-negative category weights, one row per parameter set.

    Returns:
        Tuple (normalized, invalid):
            normalized: rows scaled to sum to one; rows with missing weights or
                out-of-domain weights are filled with NaN.
            invalid: boolean array marking rows with a negative weight or a sum
                that is not positive and finite.
    """
    missing = np.isnan(prob).any(axis=1)
    with np.errstate(invalid="ignore"):
        row_sum = prob.sum(axis=1)
        invalid = ~missing & (
            (prob < 0.0).any(axis=1) | ~np.isfinite(row_sum) | (row_sum <= 0.0)
        )
    bad = missing | invalid
    normalized = np.full_like(prob, np.nan)
    normalized[~bad] = prob[~bad] / row_sum[~bad, np.newaxis]
    if invalid.any():
        logger.debug("%d probability rows out of domain", int(invalid.sum()))
    return normalized, invalid

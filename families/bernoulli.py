import numpy as np
import numba as nb

from recycling import (
    apply2,
    as_vector,
    finalize_cdf,
    finalize_mass,
    open_uniform,
    prepare_probs,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng
from validation import valid_prob


@nb.njit()
def pmf(x, prob):
    """
    Mass of the Bernoulli distribution; values other than 0 and 1 have none.
    """
    if np.isnan(x) or np.isnan(prob):
        return np.nan, False
    if not valid_prob(prob):
        return np.nan, True
    if x == 1.0:
        return prob, False
    if x == 0.0:
        return 1.0 - prob, False
    return 0.0, False


@nb.njit()
def cdf(x, prob):
    if np.isnan(x) or np.isnan(prob):
        return np.nan, False
    if not valid_prob(prob):
        return np.nan, True
    if x < 0.0:
        return 0.0, False
    if x < 1.0:
        return 1.0 - prob, False
    return 1.0, False


@nb.njit()
def ppf(p, prob):
    if np.isnan(p) or np.isnan(prob):
        return np.nan, False
    if not valid_prob(prob) or not valid_prob(p):
        return np.nan, True
    if p <= 1.0 - prob:
        return 0.0, False
    return 1.0, False


@nb.njit()
def rvs(u, prob):
    if np.isnan(prob):
        return np.nan, False
    if not valid_prob(prob):
        return np.nan, True
    if u < prob:
        return 1.0, False
    return 0.0, False


def dbern(x, prob=0.5, log_prob=False):
    x, prob = as_vector(x), as_vector(prob)
    p, invalid = apply2(pmf, x, prob)
    warn_nans(invalid)
    return finalize_mass(p, log_prob)


def pbern(x, prob=0.5, lower_tail=True, log_prob=False):
    x, prob = as_vector(x), as_vector(prob)
    p, invalid = apply2(cdf, x, prob)
    warn_nans(invalid)
    return finalize_cdf(p, lower_tail, log_prob)


def qbern(p, prob=0.5, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    q, invalid = apply2(ppf, p, as_vector(prob))
    warn_nans(invalid)
    return q


def rbern(n, prob=0.5, rng=None):
    n = sample_size(n)
    (prob,) = sampler_args(n, as_vector(prob))
    u = open_uniform(resolve_rng(rng), n)
    x, invalid = apply2(rvs, u, prob)
    warn_nans(invalid, "NAs produced")
    return x

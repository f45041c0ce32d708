import numpy as np
from scipy.special import xlog1py
from scipy.stats import binom

from recycling import (
    as_vector,
    finalize_cdf,
    finalize_density,
    prepare_probs,
    recycle,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng


def _split(values, size, prob, pi):
    """
    Recycle the arguments and classify each element.

    Returns:
        Tuple (values, size, prob, pi, missing, invalid), all of the recycled length.
    """
    values, size, prob, pi = recycle(
        as_vector(values), as_vector(size), as_vector(prob), as_vector(pi)
    )
    missing = np.isnan(values) | np.isnan(size) | np.isnan(prob) | np.isnan(pi)
    with np.errstate(invalid="ignore"):
        in_domain = (
            (size >= 0.0) & np.isfinite(size) & (np.floor(size) == size)
            & (prob >= 0.0) & (prob <= 1.0)
            & (pi >= 0.0) & (pi <= 1.0)
        )
    invalid = ~missing & ~in_domain
    return values, size, prob, pi, missing, invalid


def dzib(x, size, prob, pi, log_prob=False):
    """
    Mass of the zero-inflated binomial distribution.

    A point mass at zero with weight pi mixed with binomial(size, prob):

        f(0) = pi + (1 - pi) * (1 - prob)^size
        f(x) = (1 - pi) * binom(x; size, prob)      for x > 0

    Parameters:
        x: Counts at which to evaluate.
        size: Number of trials (non-negative integer).
        prob: Success probability in [0, 1].
        pi: Probability of an extra zero in [0, 1].
        log_prob: Return log-mass.

    Returns:
        1D array of (log-)mass values.
    """
    x, size, prob, pi, missing, invalid = _split(x, size, prob, pi)
    ok = ~missing & ~invalid
    logp = np.full(x.shape, np.nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        zero = ok & (x == 0.0)
        count = ok & (x > 0.0) & np.isfinite(x) & (np.floor(x) == x)
        logp[ok & ~zero & ~count] = -np.inf
        logp[zero] = np.logaddexp(
            np.log(pi[zero]), np.log1p(-pi[zero]) + xlog1py(size[zero], -prob[zero])
        )
        logp[count] = np.log1p(-pi[count]) + binom.logpmf(x[count], size[count], prob[count])
    warn_nans(invalid.any())
    return finalize_density(logp, log_prob)


def pzib(x, size, prob, pi, lower_tail=True, log_prob=False):
    x, size, prob, pi, missing, invalid = _split(x, size, prob, pi)
    ok = ~missing & ~invalid
    p = np.full(x.shape, np.nan)
    below = ok & (x < 0.0)
    above = ok & (x == np.inf)
    inside = ok & ~below & ~above
    p[below] = 0.0
    p[above] = 1.0
    p[inside] = pi[inside] + (1.0 - pi[inside]) * binom.cdf(x[inside], size[inside], prob[inside])
    warn_nans(invalid.any())
    return finalize_cdf(p, lower_tail, log_prob)


def qzib(p, size, prob, pi, lower_tail=True, log_prob=False):
    """
    Quantile of the zero-inflated binomial distribution.

    Targets covered by the zero spike map to 0; the rest invert the binomial
    CDF at the rescaled probability (p - pi) / (1 - pi).
    """
    p = prepare_probs(p, lower_tail, log_prob)
    p, size, prob, pi, missing, invalid = _split(p, size, prob, pi)
    with np.errstate(invalid="ignore"):
        invalid |= ~missing & ((p < 0.0) | (p > 1.0))
    ok = ~missing & ~invalid
    q = np.full(p.shape, np.nan)
    spike = ok & (p <= pi)
    rest = ok & ~spike
    q[spike] = 0.0
    q[rest] = binom.ppf((p[rest] - pi[rest]) / (1.0 - pi[rest]), size[rest], prob[rest])
    warn_nans(invalid.any())
    return q


def rzib(n, size, prob, pi, rng=None):
    """
    Random variates: a uniform draw below pi gives 0, otherwise a binomial draw.
    """
    n = sample_size(n)
    size, prob, pi = sampler_args(n, as_vector(size), as_vector(prob), as_vector(pi))
    rng = resolve_rng(rng)
    u = rng.random(n)
    u, size, prob, pi, missing, invalid = _split(u, size, prob, pi)
    ok = ~missing & ~invalid
    x = np.full(n, np.nan)
    draws = rng.binomial(size[ok].astype(np.int64), prob[ok])
    x[ok] = np.where(u[ok] < pi[ok], 0.0, draws)
    warn_nans(invalid.any(), "NAs produced")
    return x

import numpy as np
from scipy.stats import beta as beta_dist

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


def shape_params(size, mean):
    """
    Beta shape parameters for a proportion with the given precision and mean.

    Parameters:
        size: Precision (> 0).
        mean: Mean in [0, 1].

    Returns:
        Tuple (a, b) = (size * mean + 1, size * (1 - mean) + 1).
    """
    return size * mean + 1.0, size * (1.0 - mean) + 1.0


def _split(values, size, mean):
    values, size, mean = recycle(as_vector(values), as_vector(size), as_vector(mean))
    missing = np.isnan(values) | np.isnan(size) | np.isnan(mean)
    with np.errstate(invalid="ignore"):
        invalid = ~missing & ((size <= 0.0) | (mean < 0.0) | (mean > 1.0))
    return values, size, mean, missing, invalid


def dprop(x, size, mean, log_prob=False):
    x, size, mean, missing, invalid = _split(x, size, mean)
    ok = ~missing & ~invalid
    logp = np.full(x.shape, np.nan)
    a, b = shape_params(size[ok], mean[ok])
    logp[ok] = beta_dist.logpdf(x[ok], a, b)
    warn_nans(invalid.any())
    return finalize_density(logp, log_prob)


def pprop(x, size, mean, lower_tail=True, log_prob=False):
    x, size, mean, missing, invalid = _split(x, size, mean)
    ok = ~missing & ~invalid
    p = np.full(x.shape, np.nan)
    a, b = shape_params(size[ok], mean[ok])
    p[ok] = beta_dist.cdf(x[ok], a, b)
    warn_nans(invalid.any())
    return finalize_cdf(p, lower_tail, log_prob)


def qprop(p, size, mean, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    p, size, mean, missing, invalid = _split(p, size, mean)
    with np.errstate(invalid="ignore"):
        invalid |= ~missing & ((p < 0.0) | (p > 1.0))
    ok = ~missing & ~invalid
    q = np.full(p.shape, np.nan)
    a, b = shape_params(size[ok], mean[ok])
    q[ok] = beta_dist.ppf(p[ok], a, b)
    warn_nans(invalid.any())
    return q


def rprop(n, size, mean, rng=None):
    n = sample_size(n)
    size, mean = sampler_args(n, as_vector(size), as_vector(mean))
    rng = resolve_rng(rng)
    placeholder = np.zeros(n)
    _, size, mean, missing, invalid = _split(placeholder, size, mean)
    ok = ~missing & ~invalid
    x = np.full(n, np.nan)
    a, b = shape_params(size[ok], mean[ok])
    x[ok] = rng.beta(a, b)
    warn_nans(invalid.any(), "NAs produced")
    return x

import numpy as np
from scipy.special import ndtr, ndtri

from recycling import (
    as_vector,
    finalize_cdf,
    finalize_density,
    open_uniform,
    prepare_probs,
    recycle,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng

SQRT_2_PI = np.sqrt(2.0 * np.pi)


def _phi(x):
    return np.exp(-0.5 * x * x) / SQRT_2_PI


def _norm_const(eps):
    """
    Normalizing constant of the Huber density on the standardized scale.

    A = 2 sqrt(2 pi) (Phi(eps) + phi(eps) / eps - 1/2)
    """
    return 2.0 * SQRT_2_PI * (ndtr(eps) + _phi(eps) / eps - 0.5)


def _split(values, mu, sigma, epsilon):
    values, mu, sigma, epsilon = recycle(
        as_vector(values), as_vector(mu), as_vector(sigma), as_vector(epsilon)
    )
    missing = np.isnan(values) | np.isnan(mu) | np.isnan(sigma) | np.isnan(epsilon)
    with np.errstate(invalid="ignore"):
        invalid = ~missing & ((sigma <= 0.0) | (epsilon <= 0.0))
    return values, mu, sigma, epsilon, missing, invalid


def logpdf(x, mu, sigma, epsilon):
    """
    Log-density of the Huber distribution for valid parameters.

    The standardized distance z = |x - mu| / sigma enters through a quadratic
    loss z^2 / 2 for z <= epsilon and a linear loss epsilon z - epsilon^2 / 2
    beyond it.

    Parameters:
        x, mu, sigma, epsilon: 1D arrays of equal length.

    Returns:
        1D array of log-densities.
    """
    z = np.abs(x - mu) / sigma
    rho = np.where(z <= epsilon, 0.5 * z * z, epsilon * z - 0.5 * epsilon * epsilon)
    return -rho - np.log(_norm_const(epsilon)) - np.log(sigma)


def cdf(x, mu, sigma, epsilon):
    """
    CDF of the Huber distribution for valid parameters.

    The lower half is evaluated at -|z|, with an exponential closed form in the
    linear tail and the normal CDF in the core; symmetry gives the upper half.
    """
    a = 2.0 * (_phi(epsilon) / epsilon - ndtr(-epsilon) + 0.5)
    z = (x - mu) / sigma
    az = -np.abs(z)
    tail = np.exp(0.5 * epsilon * epsilon + epsilon * az) / epsilon / SQRT_2_PI / a
    core = (_phi(epsilon) / epsilon + ndtr(az) - ndtr(-epsilon)) / a
    p = np.where(az <= -epsilon, tail, core)
    return np.where(z <= 0.0, p, 1.0 - p)


def ppf(p, mu, sigma, epsilon):
    """
    Quantile function of the Huber distribution for valid parameters and p in [0, 1].
    """
    a = _norm_const(epsilon)
    pm = np.minimum(p, 1.0 - p)
    in_tail = pm <= SQRT_2_PI * _phi(epsilon) / (epsilon * a)
    tail = np.log(epsilon * pm * a) / epsilon - 0.5 * epsilon
    core = ndtri(np.abs(1.0 - ndtr(epsilon) + pm * a / SQRT_2_PI - _phi(epsilon) / epsilon))
    z = np.where(in_tail, tail, core)
    return np.where(p < 0.5, mu + z * sigma, mu - z * sigma)


def dhuber(x, mu=0.0, sigma=1.0, epsilon=1.345, log_prob=False):
    x, mu, sigma, epsilon, missing, invalid = _split(x, mu, sigma, epsilon)
    ok = ~missing & ~invalid
    logp = np.full(x.shape, np.nan)
    logp[ok] = logpdf(x[ok], mu[ok], sigma[ok], epsilon[ok])
    warn_nans(invalid.any())
    return finalize_density(logp, log_prob)


def phuber(x, mu=0.0, sigma=1.0, epsilon=1.345, lower_tail=True, log_prob=False):
    x, mu, sigma, epsilon, missing, invalid = _split(x, mu, sigma, epsilon)
    ok = ~missing & ~invalid
    p = np.full(x.shape, np.nan)
    with np.errstate(over="ignore", invalid="ignore"):
        p[ok] = cdf(x[ok], mu[ok], sigma[ok], epsilon[ok])
    warn_nans(invalid.any())
    return finalize_cdf(p, lower_tail, log_prob)


def qhuber(p, mu=0.0, sigma=1.0, epsilon=1.345, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    p, mu, sigma, epsilon, missing, invalid = _split(p, mu, sigma, epsilon)
    with np.errstate(invalid="ignore"):
        invalid |= ~missing & ((p < 0.0) | (p > 1.0))
    ok = ~missing & ~invalid
    q = np.full(p.shape, np.nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        q[ok] = ppf(p[ok], mu[ok], sigma[ok], epsilon[ok])
    warn_nans(invalid.any())
    return q


def rhuber(n, mu=0.0, sigma=1.0, epsilon=1.345, rng=None):
    n = sample_size(n)
    mu, sigma, epsilon = sampler_args(n, as_vector(mu), as_vector(sigma), as_vector(epsilon))
    u = open_uniform(resolve_rng(rng), n)
    u, mu, sigma, epsilon, missing, invalid = _split(u, mu, sigma, epsilon)
    ok = ~missing & ~invalid
    x = np.full(n, np.nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        x[ok] = ppf(u[ok], mu[ok], sigma[ok], epsilon[ok])
    warn_nans(invalid.any(), "NAs produced")
    return x

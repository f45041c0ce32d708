import numpy as np
import numba as nb

from recycling import (
    apply2,
    as_vector,
    open_uniform,
    prepare_probs,
    sample_size,
    sampler_args,
    warn_nans,
)
from settings import resolve_rng
from validation import valid_prob


# The Tukey lambda distribution has no closed-form density or CDF for general
# lambda; only the quantile function and the sampler are provided.


@nb.njit(error_model="numpy")
def ppf(p, lam):
    """
    Quantile function of the Tukey lambda distribution.

    Q(p) = (p^lambda - (1 - p)^lambda) / lambda, and the logistic quantile
    log(p / (1 - p)) at lambda = 0 where the general form is 0/0.

    Parameters:
        p: Probability (scalar in [0, 1]).
        lam: Shape lambda (scalar).

    Returns:
        Tuple (quantile, invalid).
    """
    if np.isnan(p) or np.isnan(lam):
        return np.nan, False
    if not valid_prob(p):
        return np.nan, True
    if lam == 0.0:
        return np.log(p) - np.log1p(-p), False
    return (p ** lam - (1.0 - p) ** lam) / lam, False


def qtlambda(p, lam, lower_tail=True, log_prob=False):
    p = prepare_probs(p, lower_tail, log_prob)
    q, invalid = apply2(ppf, p, as_vector(lam))
    warn_nans(invalid)
    return q


def rtlambda(n, lam, rng=None):
    n = sample_size(n)
    (lam,) = sampler_args(n, as_vector(lam))
    u = open_uniform(resolve_rng(rng), n)
    x, invalid = apply2(ppf, u, lam)
    warn_nans(invalid, "NAs produced")
    return x

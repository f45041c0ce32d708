import logging
import warnings

import numpy as np
import numba as nb

logger = logging.getLogger(__name__)


class ComputationCancelled(RuntimeError):
    """Raised when a long-running batch call observes a cancellation request."""


def as_vector(values):
    """
    Coerce scalars, lists or arrays to a flat float64 vector.

    None entries become NaN, the missing-value sentinel.
    """
    return np.atleast_1d(np.asarray(values, dtype=np.float64)).ravel()


def as_matrix(values, name="prob"):
    """
    Coerce category weights or counts to a 2D float64 matrix, one row per set.

    A 1D input is treated as a single row.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.ndim == 1:
        values = values[np.newaxis, :]
    if values.ndim != 2:
        raise ValueError(f"'{name}' must be a vector or a matrix.")
    if values.shape[1] == 0:
        raise ValueError(f"'{name}' must have at least one column.")
    return values


def recycled_length(*arrays):
    """
    Length of the output produced by recycling the given arrays.

    The longest argument wins; any zero-length argument gives zero.
    """
    lengths = [len(a) for a in arrays]
    if min(lengths) == 0:
        return 0
    return max(lengths)


def recycle_index(n, length):
    """
    Indices into an argument of the given length for output positions 0..n-1.
    """
    return np.arange(n) % length


def recycle(*arrays):
    """
    Expand every array to the common recycled length.

    Element i of each result is arrays[k][i % len(arrays[k])].
    """
    n = recycled_length(*arrays)
    if n == 0:
        return [a[:0] for a in arrays]
    return [a[recycle_index(n, len(a))] for a in arrays]


def sample_size(n):
    """
    Resolve the 'n' argument of a sampler.

    A sequence of two or more elements means as many draws as it has
    elements; a one-element sequence holds the count itself.
    """
    if np.ndim(n) > 0:
        if len(n) != 1:
            return len(n)
        n = np.ravel(n)[0]
    n = int(n)
    if n < 0:
        raise ValueError("invalid number of draws: n must be non-negative.")
    return n


def open_uniform(rng, n):
    """
    Uniform draws on the open interval (0, 1).

    Generator.random samples [0, 1); an exact 0 is moved to the smallest
    positive double so inverse transforms never see the endpoint.
    """
    u = rng.random(n)
    u[u == 0.0] = np.nextafter(0.0, 1.0)
    return u


def sampler_args(n, *arrays):
    """
    Parameters recycled over exactly n draws.

    Elements beyond the first n are never reached, so they are dropped; this
    keeps the recycled length of (uniforms, *params) equal to n.
    """
    if n > 0 and any(len(a) == 0 for a in arrays):
        raise ValueError("invalid arguments: parameters must not be empty.")
    return [a[:n] for a in arrays]


@nb.njit()
def apply2(kernel, a, b):
    """
    Evaluate a scalar kernel over two recycled vectors.

    Parameters:
        kernel: jitted function (float, float) -> (value, invalid).
        a, b: 1D float arrays.

    Returns:
        Tuple (values, invalid) where invalid is True if any element was out of domain.
    """
    la, lb = a.shape[0], b.shape[0]
    n = 0 if min(la, lb) == 0 else max(la, lb)
    out = np.empty(n)
    invalid = False
    for i in range(n):
        value, bad = kernel(a[i % la], b[i % lb])
        out[i] = value
        invalid = invalid or bad
    return out, invalid


@nb.njit()
def apply3(kernel, a, b, c):
    """
    Evaluate a scalar kernel over three recycled vectors.
    """
    la, lb, lc = a.shape[0], b.shape[0], c.shape[0]
    n = 0 if min(la, lb, lc) == 0 else max(la, lb, lc)
    out = np.empty(n)
    invalid = False
    for i in range(n):
        value, bad = kernel(a[i % la], b[i % lb], c[i % lc])
        out[i] = value
        invalid = invalid or bad
    return out, invalid


def finalize_density(logp, log_prob):
    """
    Exponentiate a log-density unless the caller asked for the log scale.
    """
    if log_prob:
        return logp
    return np.exp(logp)


def finalize_mass(p, log_prob):
    """
    Log-transform a probability mass on request.
    """
    if log_prob:
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.log(p)
    return p


def finalize_cdf(p, lower_tail, log_prob):
    """
    Apply the tail complement and the log transform to lower-tail probabilities.

    The complement happens in probability space, before the log.
    """
    if not lower_tail:
        p = 1.0 - p
    if log_prob:
        with np.errstate(divide="ignore", invalid="ignore"):
            p = np.log(p)
    return p


def finalize_log_cdf(logp, lower_tail, log_prob):
    """
    Same as finalize_cdf for kernels that produce lower-tail log-probabilities.
    """
    if lower_tail:
        return logp if log_prob else np.exp(logp)
    p = -np.expm1(logp)
    if log_prob:
        with np.errstate(divide="ignore", invalid="ignore"):
            p = np.log(p)
    return p


def prepare_probs(p, lower_tail, log_prob):
    """
    Map quantile inputs back to lower-tail probabilities.
    """
    p = as_vector(p)
    if log_prob:
        p = np.exp(p)
    if not lower_tail:
        p = 1.0 - p
    return p


def warn_nans(invalid, message="NaNs produced"):
    """
    Emit the single aggregate domain warning for a batch call.
    """
    if invalid:
        warnings.warn(message, RuntimeWarning, stacklevel=3)


def check_cancelled(cancel, i, every):
    """
    Poll an external cancellation request every `every` elements.

    Parameters:
        cancel: object with is_set(), or None.
        i: int.
            Current output index.
        every: int.
            Polling interval.
    """
    if cancel is not None and i % every == 0 and cancel.is_set():
        logger.debug("Cancellation observed at element %d", i)
        raise ComputationCancelled(f"computation cancelled at element {i}")

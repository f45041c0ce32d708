import logging
import os

import numpy as np

logger = logging.getLogger(__name__)

# Read once at import; scripts override through the environment.
DEFAULT_SEED = os.getenv("DISTKERNELS_SEED")
INTERRUPT_CHECK_INTERVAL = int(os.getenv("DISTKERNELS_INTERRUPT_EVERY", "1000"))
LOG_LEVEL = os.getenv("DISTKERNELS_LOG_LEVEL", "WARNING")

if INTERRUPT_CHECK_INTERVAL < 1:
    raise ValueError("DISTKERNELS_INTERRUPT_EVERY must be a positive integer.")


def resolve_rng(rng=None):
    """
    Return the generator a sampler should draw from.

    Parameters:
        rng: numpy.random.Generator, int seed or None.
            None falls back to DISTKERNELS_SEED, or fresh entropy when unset.

    Returns:
        numpy.random.Generator.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None and DEFAULT_SEED is not None:
        rng = int(DEFAULT_SEED)
    return np.random.default_rng(rng)


def configure_logging(level=None):
    """
    Attach a stream handler to the root logger for the command-line scripts.
    """
    level = level or LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.debug("Logging configured at level %s", level)

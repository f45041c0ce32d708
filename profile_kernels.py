import io
import os
import pstats
import threading
from cProfile import Profile

import numpy as np
from tqdm import tqdm

import settings
from families import pgpois


def main():
    n = int(os.getenv("PROFILE_SIZE", "200000"))
    repeats = int(os.getenv("PROFILE_REPEATS", "5"))
    n_params = int(os.getenv("PROFILE_PARAMS", "4"))
    settings.configure_logging()

    rng = settings.resolve_rng()
    x = rng.poisson(20.0, n).astype(float)
    shape = rng.uniform(0.5, 5.0, n_params)
    scale = rng.uniform(0.5, 5.0, n_params)
    cancel = threading.Event()

    # Warm-up compiles the kernels outside the profile.
    pgpois(x[:10], shape, scale)

    profiler = Profile()
    profiler.enable()
    for _ in tqdm(range(repeats), desc="pgpois"):
        pgpois(x, shape, scale, cancel=cancel)
    profiler.disable()
    buf = io.StringIO()
    stats = pstats.Stats(profiler, stream=buf).strip_dirs().sort_stats("cumulative")
    stats.print_stats(30)
    print(buf.getvalue())


if __name__ == "__main__":
    main()

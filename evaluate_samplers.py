import os

import numpy as np
import pandas as pd
from scipy import stats

import settings
from families import (
    pbern,
    pcat,
    pgpois,
    phuber,
    pkumar,
    plaplace,
    ppower,
    pprop,
    prayleigh,
    pzib,
    rbern,
    rcat,
    rgpois,
    rhuber,
    rkumar,
    rlaplace,
    rpower,
    rprop,
    rrayleigh,
    rtlambda,
    rzib,
)


def continuous_cases():
    """
    (name, sampler, cdf) triples for the families with a continuous cdf.
    """
    return [
        ("rayleigh", lambda n, rng: rrayleigh(n, 2.0, rng=rng), lambda x: prayleigh(x, 2.0)),
        ("laplace", lambda n, rng: rlaplace(n, 1.0, 0.5, rng=rng), lambda x: plaplace(x, 1.0, 0.5)),
        ("kumaraswamy", lambda n, rng: rkumar(n, 2.0, 3.0, rng=rng), lambda x: pkumar(x, 2.0, 3.0)),
        ("power", lambda n, rng: rpower(n, 2.0, 3.0, rng=rng), lambda x: ppower(x, 2.0, 3.0)),
        ("huber", lambda n, rng: rhuber(n, 0.0, 1.0, 1.345, rng=rng), lambda x: phuber(x)),
        ("proportion", lambda n, rng: rprop(n, 8.0, 0.25, rng=rng), lambda x: pprop(x, 8.0, 0.25)),
        ("tukey_lambda", lambda n, rng: rtlambda(n, 0.0, rng=rng), stats.logistic.cdf),
    ]


def discrete_cases():
    return [
        ("bernoulli", lambda n, rng: rbern(n, 0.3, rng=rng), lambda k: pbern(k, 0.3), 1),
        ("zib", lambda n, rng: rzib(n, 10.0, 0.4, 0.3, rng=rng), lambda k: pzib(k, 10.0, 0.4, 0.3), 10),
        ("gamma_poisson", lambda n, rng: rgpois(n, 2.0, 3.0, rng=rng), lambda k: pgpois(k, 2.0, 3.0), 60),
        ("categorical", lambda n, rng: rcat(n, [1.0, 1.0, 2.0], rng=rng), lambda k: pcat(k, [1.0, 1.0, 2.0]), 3),
    ]


def max_cdf_gap(sample, cdf, support_max):
    """
    Largest absolute difference between the empirical and the analytic cdf
    over the integer support 0..support_max.
    """
    k = np.arange(0.0, support_max + 1.0)
    empirical = np.searchsorted(np.sort(sample), k, side="right") / len(sample)
    return np.max(np.abs(empirical - cdf(k)))


def main():
    n = int(os.getenv("SAMPLE_SIZE", "10000"))
    seed = int(os.getenv("SEED", "20240607"))
    settings.configure_logging()
    rng = np.random.default_rng(seed)

    rows = []
    for name, sampler, cdf in continuous_cases():
        result = stats.kstest(sampler(n, rng), cdf)
        rows.append({"family": name, "statistic": result.statistic, "pvalue": result.pvalue})
    for name, sampler, cdf, support_max in discrete_cases():
        gap = max_cdf_gap(sampler(n, rng), cdf, support_max)
        rows.append({"family": name, "statistic": gap, "pvalue": np.nan})

    results = pd.DataFrame(rows).set_index("family")
    print(f"Sampler goodness-of-fit (n={n}, seed={seed}); discrete rows report the max cdf gap:")
    print(results.to_string(float_format=lambda v: f"{v:.4f}"))


if __name__ == "__main__":
    main()

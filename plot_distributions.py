import os

import numpy as np
import matplotlib.pyplot as plt

import settings
from families import (
    dgpois,
    dhuber,
    dkumar,
    dlaplace,
    dzib,
    pgpois,
    phuber,
    pkumar,
    plaplace,
    pzib,
    qtlambda,
)


def main():
    settings.configure_logging()
    fig, axes = plt.subplots(2, 3, figsize=(13, 7))

    x = np.linspace(-5.0, 5.0, 400)
    for eps in (0.5, 1.345, 3.0):
        axes[0, 0].plot(x, dhuber(x, epsilon=eps), label=f"ε={eps}")
        axes[1, 0].plot(x, phuber(x, epsilon=eps), label=f"ε={eps}")
    axes[0, 0].plot(x, dlaplace(x), "k--", label="Laplace")
    axes[1, 0].plot(x, plaplace(x), "k--", label="Laplace")
    axes[0, 0].set_title("Huber density")
    axes[1, 0].set_title("Huber cdf")

    u = np.linspace(0.0, 1.0, 400)
    for a, b in ((0.5, 0.5), (2.0, 2.0), (2.0, 5.0), (5.0, 1.0)):
        axes[0, 1].plot(u, dkumar(u, a, b), label=f"a={a}, b={b}")
        axes[1, 1].plot(u, pkumar(u, a, b), label=f"a={a}, b={b}")
    axes[0, 1].set_ylim(0.0, 3.0)
    axes[0, 1].set_title("Kumaraswamy density")
    axes[1, 1].set_title("Kumaraswamy cdf")

    k = np.arange(0.0, 21.0)
    width = 0.4
    axes[0, 2].bar(k - width / 2, dgpois(k, 2.0, 3.0), width, label="gamma-Poisson(2, 3)")
    axes[0, 2].bar(k + width / 2, dzib(k, 20.0, 0.3, 0.2), width, label="ZIB(20, 0.3, 0.2)")
    axes[0, 2].set_title("Count distributions")
    axes[1, 2].step(k, pgpois(k, 2.0, 3.0), where="post", label="gamma-Poisson(2, 3)")
    axes[1, 2].step(k, pzib(k, 20.0, 0.3, 0.2), where="post", label="ZIB(20, 0.3, 0.2)")
    axes[1, 2].set_title("Count cdfs")

    p = np.linspace(0.01, 0.99, 200)
    inset = axes[0, 2].inset_axes([0.55, 0.35, 0.4, 0.4])
    for lam in (-0.2, 0.0, 0.14, 1.0):
        inset.plot(p, qtlambda(p, lam), label=f"λ={lam}")
    inset.set_title("Tukey λ quantiles", fontsize=8)
    inset.tick_params(labelsize=6)

    for ax in axes.ravel():
        ax.grid(True, alpha=0.3)
        ax.legend(fontsize=7)

    fig.suptitle("Density and cdf of selected families")
    fig.tight_layout()
    os.makedirs("plots", exist_ok=True)
    out_path = os.path.join("plots", "distributions.png")
    fig.savefig(out_path, dpi=150)
    print(f"Saved distribution plot to {out_path}")


if __name__ == "__main__":
    main()

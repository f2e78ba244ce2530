"""
1D regression with a Gaussian kernel: predictions, derivatives and
credible intervals

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpr
from gpr.misc import plotutils


def generate_data():
    """
    Data generation.

    Returns
    -------
    tuple
        (xt, zt): target data
        (xi, zi): input dataset
    """
    xt = np.linspace(-1.0, 1.0, 200)
    zt = np.sin(3.0 * xt) + 0.5 * xt

    xi = np.array([-0.9, -0.5, -0.1, 0.3, 0.6, 0.95])
    zi = np.sin(3.0 * xi) + 0.5 * xi

    return xt, zt, xi, zi


def main(show=True):
    xt, zt, xi, zi = generate_data()

    gp = gpr.GaussianProcess(gpr.kernel.GaussianKernel(0.3), sigma=1e-8)
    for x, z in zip(xi, zi):
        gp.add_sample([x], [z])
    gp.initialize()
    print(gp)

    y, D = gp.predict_derivative([0.0])
    print(f"\nprediction at 0: {y[0]:.4f}, derivative (scaled): {D[0, 0]:.4f}")

    fig, zpm, ci = plotutils.plot_prediction_1d(gp, xt)
    fig.plot(xt, zt, "k", linewidth=1, linestyle=(0, (5, 5)))
    fig.title("Posterior GP with a Gaussian kernel")
    if show:
        fig.show(grid=True, xlim=[-1.0, 1.0], legend=True, legend_fontsize=9)
    return gp, zpm, ci


if __name__ == "__main__":
    main()

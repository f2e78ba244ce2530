# gpr/misc/plotutils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Plotting helpers for 1-D Gaussian process posteriors.
"""
import numpy as np
import matplotlib.pyplot as plt


class Figure:
    """Single-axes figure for posterior plots.

    Parameters
    ----------
    boxoff : bool, optional
        Hide the top and right spines, by default True.
    **kwargs
        Passed to matplotlib.pyplot.figure.
    """

    def __init__(self, boxoff=True, **kwargs):
        self.fig = plt.figure(**kwargs)
        self.ax = self.fig.add_subplot(1, 1, 1)
        if boxoff:
            self.ax.spines["right"].set_visible(False)
            self.ax.spines["top"].set_visible(False)
            self.ax.tick_params(direction="in")

    def show(self, grid=False, legend=False, legend_fontsize=None, xlim=None):
        if grid:
            self.ax.grid(True, linestyle=(0, (1, 5)), linewidth=0.5)
        if legend:
            self.ax.legend(fontsize=legend_fontsize)
        if xlim is not None:
            self.ax.set_xlim(xlim)
        plt.show()

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kwargs):
        self.ax.plot(x, z, *args, **kwargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(x, z, "rs", markerfacecolor="none", markersize=6, label=label)

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def plotgp(
        self,
        x,
        mean,
        ci,
        mean_label="prediction",
        ci_label="credible interval",
        **kwargs
    ):
        """Plot a prediction and a shaded band mean +/- ci.

        Parameters
        ----------
        x : array_like, shape (n,)
        mean : array_like, shape (n,)
        ci : array_like, shape (n,)
            Half widths of the credible intervals.
        """
        mean = np.asarray(mean).flatten()
        x = np.asarray(x).flatten()
        ci = np.asarray(ci).flatten()

        self.ax.plot(x, mean, "#F2404C", linewidth=2.0, label=mean_label)

        kwargs.setdefault("alpha", 0.8)
        kwargs.setdefault("linewidth", 0.5)
        self.ax.fill(
            np.hstack((x, x[::-1])),
            np.hstack((mean + ci, (mean - ci)[::-1])),
            color="#BFBFBF",
            label=ci_label,
            **kwargs
        )


def plot_prediction_1d(gp, xt, level=0.95, fig=None, show=False):
    """Plot the predictions of a 1-D input, 1-D output engine on xt.

    Parameters
    ----------
    gp : gpr.core.GaussianProcess
    xt : array_like, shape (nt,)
        Prediction points.
    level : float, optional
        Credible level of the shaded band.
    fig : Figure, optional
        Figure to draw into; a new one is created if None.
    show : bool, optional
        Call plt.show() at the end.

    Returns
    -------
    fig : Figure
    zt : np.ndarray, shape (nt,)
        Predictions.
    ci : np.ndarray, shape (nt,)
        Half widths of the credible intervals.
    """
    if gp.input_dim != 1 or gp.output_dim != 1:
        raise ValueError("plot_prediction_1d requires input and output dimensions 1")
    xt = np.asarray(xt, dtype=float).flatten()
    zt = np.array([gp.predict([t])[0] for t in xt])
    ci = np.array([gp.get_credible_interval([t], level) for t in xt])

    if fig is None:
        fig = Figure()
    xi = np.array([s[0] for s in gp.samples])
    zi = np.array([y[0] for y in gp.labels])
    fig.plotgp(xt, zt, ci, ci_label=f"CI {100 * level:g}%")
    fig.plotdata(xi, zi)
    fig.xylabels("$x$", "$y$")
    if show:
        fig.show(grid=True, legend=True)
    return fig, zt, ci

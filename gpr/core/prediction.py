# gpr/core/prediction.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Point prediction, derivative and credible interval.

All functions read the learned state of an initialized
`gpr.core.GaussianProcess` and never modify it.

Functions
---------
predict(gp, x)
    Kx^T R, where Kx is the kernel vector at x and R the regression vectors.
predict_derivative(gp, x)
    Point prediction and its derivative with respect to x.
credible_interval(gp, x, level=0.95)
    Half width of the central credible interval of the posterior at x.
"""
import warnings

import gpr.num as gnp
from . import kernel_matrix


def predict(gp, x):
    """Compute the point prediction at x.

    Parameters
    ----------
    gp : gpr.core.GaussianProcess
        Initialized engine.
    x : gnp.array, shape (input_dim,)

    Returns
    -------
    y : gnp.array, shape (output_dim,)
    """
    Kx = kernel_matrix.compute_kernel_vector(gp.kernel, x, gp.samples, gp.workers)
    return gnp.matmul(Kx, gp.regression_vectors)


def predict_derivative(gp, x):
    """Compute the point prediction at x and its derivative.

    With X the difference matrix (rows x - x_i), column j of the derivative
    is D[:, j] = -X^T (Kx * R[:, j]). For a Gaussian kernel with unit scale
    and length scale sigma, D is sigma^2 times the gradient of the
    prediction.

    Returns
    -------
    y : gnp.array, shape (output_dim,)
    D : gnp.array, shape (input_dim, output_dim)
    """
    Kx = kernel_matrix.compute_kernel_vector(gp.kernel, x, gp.samples, gp.workers)
    X = kernel_matrix.compute_difference_matrix(x, gp.samples)
    R = gp.regression_vectors
    D = -gnp.matmul(X.T, Kx[:, None] * R)
    return gnp.matmul(Kx, R), D


def posterior_variance(gp, x, core_matrix):
    """Return k(x, x) - Kx^T C Kx (may be slightly negative)."""
    Kx = kernel_matrix.compute_kernel_vector(gp.kernel, x, gp.samples, gp.workers)
    kxx = float(gp.kernel(x, x))
    return kxx - float(gnp.einsum("i, ij, j", Kx, core_matrix, Kx))


def credible_interval(gp, x, core_matrix, level=0.95):
    """Half width of the central credible interval at x.

    Parameters
    ----------
    gp : gpr.core.GaussianProcess
    x : gnp.array, shape (input_dim,)
    core_matrix : gnp.array, shape (n, n)
        (K + sigma I)^-1.
    level : float, optional
        Credible level in (0, 1), by default 0.95 (z = 1.959964).

    Returns
    -------
    float
        z * sqrt(v), v the posterior variance at x clipped at zero.
    """
    if not 0.0 < level < 1.0:
        raise ValueError("level must be in (0, 1)")
    v = posterior_variance(gp, x, core_matrix)
    if v < 0.0:
        warnings.warn(
            f"Negative posterior variance ({v:.3e}) clipped to zero.",
            RuntimeWarning,
        )
        v = 0.0
    z = gnp.normal.ppf((1.0 + level) / 2.0)
    return float(z * gnp.sqrt(v))

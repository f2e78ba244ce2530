# gpr/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Negative log marginal likelihood of a Gaussian process and its gradient
with respect to the kernel parameters.

These routines only use the capabilities that `gpr.core.GaussianProcess`
exposes for this purpose (`compute_core_matrix_with_log_determinant`,
`compute_derivative_kernel_matrix`), so the log-determinant is computed
from the same factorization as the inverse.
"""
import gpr.num as gnp
from . import kernel_matrix


def negative_log_likelihood(gp):
    """Negative log marginal likelihood of the labels of gp.

    .. math::
        L = \\frac{1}{2} \\sum_j \\left( y_j^T C y_j + \\log\\det(K + \\sigma I)
            + n \\log 2\\pi \\right)

    where the sum runs over the output dimensions and C = (K + sigma I)^-1.

    Returns
    -------
    float
        +inf if the determinant is not positive.
    """
    C, sign, ldet = gp.compute_core_matrix_with_log_determinant()
    if not sign > 0:
        return gnp.inf
    Y = kernel_matrix.compute_label_matrix(gp.labels, gp.workers)
    n, m = Y.shape
    norm2 = gnp.einsum("ij, ik, kj", Y, C, Y)
    L = 0.5 * (norm2 + m * (ldet + n * gnp.log(2.0 * gnp.pi)))
    return float(L)


def negative_log_likelihood_gradient(gp):
    """Gradient of `negative_log_likelihood` w.r.t. the kernel parameters.

    .. math::
        \\frac{\\partial L}{\\partial \\theta_k} = \\frac{1}{2} \\sum_j
        \\mathrm{tr}\\left( (C - \\alpha_j \\alpha_j^T)
        \\frac{\\partial K}{\\partial \\theta_k} \\right),
        \\quad \\alpha_j = C y_j

    Returns
    -------
    gnp.array, shape (num_kernel_parameters,)
    """
    C = gp.compute_core_matrix()
    Y = kernel_matrix.compute_label_matrix(gp.labels, gp.workers)
    m = Y.shape[1]
    alpha = gnp.matmul(C, Y)
    W = m * C - gnp.matmul(alpha, alpha.T)
    D = gp.compute_derivative_kernel_matrix()
    return 0.5 * gnp.einsum("ij, kji -> k", W, D)

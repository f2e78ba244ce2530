# gpr/core/regression.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Learning step: regression vectors and core matrix.

The core matrix is C = (K + sigma I)^-1, where K is the kernel matrix of
the samples and sigma the noise term, added as is to the diagonal. The
regression vectors are R = C Y, where the rows of Y are the labels.
"""
import gpr.num as gnp
from gpr.config import get_logger
from . import kernel_matrix
from .linalg import invert_kernel_matrix_with_log_determinant

_logger = get_logger()


def compute_regularized_kernel_matrix(gp):
    """Return K + sigma I for the samples of gp."""
    if gp.debug:
        _logger.info("GaussianProcess: building kernel matrix")
    K = kernel_matrix.compute_kernel_matrix(gp.kernel, gp.samples, gp.workers)
    kernel_matrix.add_noise(K, gp.sigma)
    return K


def compute_core_matrix_with_log_determinant(gp):
    """Return (C, sign, log|det(K + sigma I)|) using the inversion method of gp."""
    K = compute_regularized_kernel_matrix(gp)
    if gp.debug:
        _logger.info(
            "GaussianProcess: inverting kernel matrix (%s)",
            gp.solver_options.method.value,
        )
    return invert_kernel_matrix_with_log_determinant(
        K, gp.solver_options.method, gp.solver_options.stable
    )


def compute_core_matrix_with_determinant(gp):
    """Return (C, det(K + sigma I)) using the inversion method of gp."""
    C, sign, logdet = compute_core_matrix_with_log_determinant(gp)
    return C, sign * gnp.exp(gnp.longdouble(logdet))


def compute_core_matrix(gp):
    """Return C = (K + sigma I)^-1 using the inversion method of gp."""
    C, _, _ = compute_core_matrix_with_log_determinant(gp)
    return C


def compute_regression_vectors(gp):
    """Compute the regression vectors of gp.

    Returns
    -------
    R : gnp.array, shape (n, output_dim)
        Regression vectors, one column per output dimension.
    C : gnp.array, shape (n, n)
        Core matrix used to compute R.
    """
    C = compute_core_matrix(gp)
    Y = kernel_matrix.compute_label_matrix(gp.labels, gp.workers)
    R = gnp.matmul(C, Y)
    return R, C

# gpr/core/kernel_matrix.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Assembly of kernel matrices, kernel vectors and label matrices.

Kernel evaluations are independent, so matrices are filled by row ranges
dispatched to a thread pool. Each task writes a disjoint set of cells, and
the result does not depend on the number of workers.

Functions
---------
compute_kernel_matrix(kernel, samples, workers)
    Symmetric Gram matrix K_ij = k(x_i, x_j).
add_noise(M, sigma)
    Add sigma to the diagonal of M in place.
compute_kernel_matrix_trace(kernel, samples)
    sum_i k(x_i, x_i).
compute_derivative_kernel_matrix(kernel, samples)
    dK/dtheta_p for every kernel parameter.
compute_derivative_kernel_matrix_trace(kernel, samples)
    sum_i dk(x_i, x_i)/dtheta_p for every kernel parameter.
compute_label_matrix(labels, workers)
    Labels stacked as rows.
compute_kernel_vector(kernel, x, samples, workers)
    Kx_i = k(x, x_i).
compute_difference_matrix(x, samples)
    Rows x - x_i.
"""
from concurrent.futures import ThreadPoolExecutor

import gpr.num as gnp
from gpr.errors import InvalidState


# Smallest number of rows handed to the thread pool by the builders below.
MIN_ROWS_MATRIX = 64
MIN_ROWS_VECTOR = 2048


def parallel_for(body, n, workers, min_rows=2):
    """Run body(start, stop) over [0, n) split in contiguous row ranges.

    If workers is 0 or 1, or n is below min_rows, the loop runs on the
    calling thread. Exceptions raised by a task are re-raised in the caller.
    """
    if workers is None or workers <= 1 or n < max(min_rows, 2):
        body(0, n)
        return
    workers = min(workers, n)
    bounds = [n * k // workers for k in range(workers + 1)]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(body, bounds[k], bounds[k + 1]) for k in range(workers)
        ]
        for f in futures:
            f.result()


def _check_not_empty(vectors, what):
    if len(vectors) == 0:
        raise InvalidState(f"no {what} defined")


def compute_kernel_matrix(kernel, samples, workers=1):
    """Compute the kernel matrix K_ij = k(x_i, x_j).

    Only the upper triangle (diagonal included) is evaluated; the lower
    triangle is mirrored.

    Parameters
    ----------
    kernel : gpr.kernel.Kernel
    samples : list of gnp.array, each of shape (d,)
    workers : int, optional
        Number of threads.

    Returns
    -------
    M : gnp.array, shape (n, n)
    """
    _check_not_empty(samples, "input samples")
    n = len(samples)
    M = gnp.empty((n, n))

    def rows(start, stop):
        for i in range(start, stop):
            for j in range(i, n):
                v = kernel(samples[i], samples[j])
                M[i, j] = v
                M[j, i] = v

    parallel_for(rows, n, workers, MIN_ROWS_MATRIX)
    return M


def add_noise(M, sigma):
    """Add sigma (not sigma**2) to every diagonal entry of M, in place."""
    idx = gnp.arange(M.shape[0])
    M[idx, idx] += sigma
    return M


def compute_kernel_matrix_trace(kernel, samples):
    """Return sum_i k(x_i, x_i) without building the kernel matrix."""
    _check_not_empty(samples, "input samples")
    trace = 0.0
    for x in samples:
        trace += float(kernel(x, x))
    return trace


def compute_derivative_kernel_matrix(kernel, samples):
    """Derivatives of the kernel matrix with respect to the kernel parameters.

    Returns
    -------
    D : gnp.array, shape (p, n, n)
        D[k] = dK / dtheta_k, symmetric.
    """
    _check_not_empty(samples, "input samples")
    n = len(samples)
    p = kernel.num_parameters
    D = gnp.empty((p, n, n))
    for i in range(n):
        for j in range(i, n):
            d = kernel.parameter_derivatives(samples[i], samples[j])
            D[:, i, j] = d
            D[:, j, i] = d
    return D


def compute_derivative_kernel_matrix_trace(kernel, samples):
    """Return sum_i dk(x_i, x_i)/dtheta, shape (p,)."""
    _check_not_empty(samples, "input samples")
    trace = gnp.zeros((kernel.num_parameters,))
    for x in samples:
        trace += kernel.parameter_derivatives(x, x)
    return trace


def compute_label_matrix(labels, workers=1):
    """Bring the labels in a matrix form Y where the rows are the labels."""
    _check_not_empty(labels, "output labels")
    n = len(labels)
    d = labels[0].shape[0]
    Y = gnp.empty((n, d))

    def rows(start, stop):
        for i in range(start, stop):
            Y[i, :] = labels[i]

    parallel_for(rows, n, workers, MIN_ROWS_VECTOR)
    return Y


def compute_kernel_vector(kernel, x, samples, workers=1):
    """Compute the kernel vector Kx_i = k(x, x_i), shape (n,)."""
    _check_not_empty(samples, "input samples")
    n = len(samples)
    Kx = gnp.empty((n,))

    def entries(start, stop):
        for i in range(start, stop):
            Kx[i] = kernel(x, samples[i])

    parallel_for(entries, n, workers, MIN_ROWS_VECTOR)
    return Kx


def compute_difference_matrix(x, samples):
    """Compute X = [x - x_0, x - x_1, ..., x - x_{n-1}]^T, shape (n, d)."""
    _check_not_empty(samples, "input samples")
    return x[None, :] - gnp.stack(samples, axis=0)

# gpr/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Inversion of regularized kernel matrices.

Several algorithms are available to invert K + sigma I. The default, an LU
decomposition with partial pivoting, is the fastest but may amplify
ill-conditioning, to the point where the resulting GP covariance is no
longer positive definite. The other methods are slower and more robust:

- ``"high-accuracy-svd"``: one-sided SVD (LAPACK gesvd), very accurate but
  too slow for large problems;
- ``"fast-svd"``: divide-and-conquer SVD (LAPACK gesdd), accurate and
  faster than gesvd, still slower than LU;
- ``"symmetric-eigen"``: eigendecomposition of a symmetric matrix, good
  for medium-sized problems.

A matrix is declared singular when its smallest pivot (singular value,
absolute eigenvalue) is below ``n * eps`` times the largest one. With
``stable=True``, the SVD and eigen methods floor such values at that
threshold instead of failing.
"""
import warnings
from dataclasses import dataclass
from enum import Enum

import gpr.num as gnp
from gpr.config import get_config, get_logger
from gpr.errors import SingularMatrix

_logger = get_logger()


class InversionMethod(str, Enum):
    DIRECT = "direct"
    HIGH_ACCURACY_SVD = "high-accuracy-svd"
    FAST_SVD = "fast-svd"
    SYMMETRIC_EIGEN = "symmetric-eigen"


@dataclass
class SolverOptions:
    """Per-engine inversion settings. Never persisted."""

    method: InversionMethod = None
    stable: bool = False

    def __post_init__(self):
        if self.method is None:
            self.method = get_config().inversion_method
        self.method = InversionMethod(self.method)


def invert_kernel_matrix(K, method=InversionMethod.DIRECT, stable=False):
    """Return the inverse of the regularized kernel matrix K.

    Parameters
    ----------
    K : gnp.array, shape (n, n)
    method : InversionMethod or str, optional
    stable : bool, optional
        Floor near-zero singular values / eigenvalues instead of failing.

    Returns
    -------
    Kinv : gnp.array, shape (n, n)

    Raises
    ------
    SingularMatrix
    """
    Kinv, _ = invert_kernel_matrix_with_determinant(K, method, stable)
    return Kinv


def invert_kernel_matrix_with_determinant(K, method=InversionMethod.DIRECT, stable=False):
    """Return (K^-1, det K), both from the same factorization.

    The determinant is returned as a ``numpy.longdouble``. It may still
    underflow for large matrices; use
    :func:`invert_kernel_matrix_with_log_determinant` for likelihoods.
    """
    Kinv, sign, logdet = invert_kernel_matrix_with_log_determinant(K, method, stable)
    return Kinv, sign * gnp.exp(gnp.longdouble(logdet))


def invert_kernel_matrix_with_log_determinant(
    K, method=InversionMethod.DIRECT, stable=False
):
    """Return (K^-1, sign, log|det K|), all from the same factorization.

    sign is +1 or -1. log|det K| is a sum of logarithms of the pivots
    (singular values, absolute eigenvalues).
    """
    method = InversionMethod(method)
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise ValueError(f"expected a square matrix, got shape {K.shape}")
    if not gnp.all(gnp.isfinite(K)):
        raise SingularMatrix("kernel matrix contains non-finite values")

    try:
        if method is InversionMethod.DIRECT:
            if stable:
                _logger.debug("stable flag ignored by the direct inversion method")
            return _invert_lu(K)
        if method is InversionMethod.HIGH_ACCURACY_SVD:
            return _invert_svd(K, "gesvd", stable)
        if method is InversionMethod.FAST_SVD:
            return _invert_svd(K, "gesdd", stable)
        return _invert_eigh(K, stable)
    except gnp.LinAlgError as exc:
        if isinstance(exc, SingularMatrix):
            raise
        raise SingularMatrix(f"{method.value} inversion failed: {exc}") from exc


def _tolerance(n, largest):
    return n * gnp.eps * largest


def _invert_lu(K):
    n = K.shape[0]
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", gnp.LinAlgWarning)
        lu, piv = gnp.lu_factor(K, check_finite=False)
    pivots = gnp.diag(lu)
    u = gnp.abs(pivots)
    if gnp.min(u) <= _tolerance(n, gnp.max(u)):
        raise SingularMatrix("kernel matrix is singular (LU pivot below tolerance)")
    Kinv = gnp.lu_solve((lu, piv), gnp.eye(n), check_finite=False)
    swaps = int(gnp.sum(piv != gnp.arange(n)))
    sign = (-1.0) ** swaps * gnp.prod(gnp.sign(pivots))
    return Kinv, sign, gnp.sum(gnp.log(u))


def _invert_svd(K, lapack_driver, stable):
    n = K.shape[0]
    U, s, Vt = gnp.svd(K, lapack_driver=lapack_driver, check_finite=False)
    tol = _tolerance(n, s[0])
    if s[0] == 0.0:
        raise SingularMatrix("kernel matrix is zero")
    if stable:
        s = gnp.maximum(s, tol)
    elif s[-1] <= tol:
        raise SingularMatrix(
            f"kernel matrix is singular (smallest singular value {s[-1]:.3e})"
        )
    Kinv = gnp.matmul(Vt.T / s, U.T)
    sign = gnp.orthogonal_sign(U) * gnp.orthogonal_sign(Vt)
    return Kinv, sign, gnp.sum(gnp.log(s))


def _invert_eigh(K, stable):
    n = K.shape[0]
    w, V = gnp.eigh(K, check_finite=False)
    aw = gnp.abs(w)
    tol = _tolerance(n, gnp.max(aw))
    if gnp.max(aw) == 0.0:
        raise SingularMatrix("kernel matrix is zero")
    if stable:
        w = gnp.where(aw < tol, tol, w)
    elif gnp.min(aw) <= tol:
        raise SingularMatrix(
            f"kernel matrix is singular (smallest eigenvalue magnitude {gnp.min(aw):.3e})"
        )
    Kinv = gnp.matmul(V / w, V.T)
    return Kinv, gnp.prod(gnp.sign(w)), gnp.sum(gnp.log(gnp.abs(w)))

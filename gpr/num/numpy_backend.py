# gpr/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for gpr.

This module defines the NumPy / SciPy implementation of the gpr.num API.
"""

from gpr.config import get_config

_config = get_config()

# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy

_np_dtype = numpy.dtype(_config.dtype).type

from numpy import (
    copy,
    array_equal,
    where,
    all,
    isfinite,
    stack,
    diag,
    arange,
    abs,
    sqrt,
    exp,
    log,
    sin,
    sum,
    prod,
    sign,
    min,
    max,
    maximum,
    einsum,
    matmul,
)
from numpy import pi, inf
from numpy import finfo, float64, longdouble
from scipy.linalg import svd, eigh, lu_factor, lu_solve, LinAlgWarning
from scipy.stats import norm as normal

# ..................................................

eps = finfo(_np_dtype).eps
LinAlgError = numpy.linalg.LinAlgError

# ..................................................


def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.integer) or out.dtype == numpy.bool_:
        return out.astype(_np_dtype)
    if numpy.issubdtype(out.dtype, numpy.floating):
        return out.astype(_np_dtype, copy=False)
    return out


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(_np_dtype, copy=False)
        return x
    elif isinstance(x, (int, float)):
        return numpy.array([x], dtype=_np_dtype)
    else:
        out = numpy.asarray(x)
        if numpy.issubdtype(out.dtype, numpy.integer):
            return out.astype(_np_dtype)
        if numpy.issubdtype(out.dtype, numpy.floating):
            return out.astype(_np_dtype, copy=False)
        return out


def empty(shape, dtype=None):
    return numpy.empty(shape, dtype=_np_dtype if dtype is None else dtype)


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)


# ..................................................


def orthogonal_sign(Q):
    """Determinant (+1 or -1) of an orthogonal matrix."""
    return numpy.sign(numpy.linalg.det(Q))

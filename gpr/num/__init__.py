# gpr/num/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Numerical facade for gpr (NumPy / SciPy)."""

from . import shared as _shared
from . import numpy_backend as _backend

# Re-export backend API.
for _name in dir(_backend):
    if _name.startswith("__"):
        continue
    globals()[_name] = getattr(_backend, _name)

# Re-export backend-independent helpers from shared.py.
derivative_finite_diff = _shared.derivative_finite_diff

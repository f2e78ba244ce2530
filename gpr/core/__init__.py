# gpr/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpr package.

This subpackage contains the regression engine and its numerical
routines: sample store, kernel matrix assembly, inversion strategies,
regression vectors, predictors, persistence and likelihood.

Public API
----------
GaussianProcess : class
    Gaussian Process regression engine.
InversionMethod : enum
    Recognized inversion algorithms.
SolverOptions : dataclass
    Per-engine inversion settings.
"""

from .model import GaussianProcess
from .linalg import InversionMethod, SolverOptions
from . import likelihood

__all__ = ["GaussianProcess", "InversionMethod", "SolverOptions", "likelihood"]

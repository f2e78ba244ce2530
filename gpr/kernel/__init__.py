# gpr/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernels for Gaussian Process regression.

Modules
-------
base
    Kernel contract (evaluation, parameters, type name, equality).
gaussian
    Gaussian kernel.
periodic
    Periodic kernel.
registry
    Kernel reconstruction from a type name and a parameter vector.

Public API
-----------
Kernel, GaussianKernel, PeriodicKernel, KERNEL_REGISTRY, make_kernel
"""

from .base import Kernel
from .gaussian import GaussianKernel
from .periodic import PeriodicKernel
from .registry import KERNEL_REGISTRY, make_kernel

__all__ = [
    "Kernel",
    "GaussianKernel",
    "PeriodicKernel",
    "KERNEL_REGISTRY",
    "make_kernel",
]

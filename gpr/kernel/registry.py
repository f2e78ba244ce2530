# gpr/kernel/registry.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel types that can be rebuilt from a persisted parameter record.
"""
from gpr.errors import UnrecognizedKernel
from .gaussian import GaussianKernel
from .periodic import PeriodicKernel

# name -> (class, expected number of parameters)
KERNEL_REGISTRY = {
    GaussianKernel.name: (GaussianKernel, 2),
    PeriodicKernel.name: (PeriodicKernel, 3),
}


def make_kernel(name, parameters):
    """Build a kernel from its type name and parameter vector.

    Raises
    ------
    UnrecognizedKernel
        If `name` is not registered, if the number of parameters does not
        match the registered arity, or if the kernel rejects the values.
    """
    try:
        cls, arity = KERNEL_REGISTRY[name]
    except KeyError:
        raise UnrecognizedKernel(f"kernel not recognized: {name!r}") from None
    if len(parameters) != arity:
        raise UnrecognizedKernel(
            f"wrong number of kernel parameters for {name}: "
            f"expected {arity}, got {len(parameters)}"
        )
    try:
        return cls.from_parameters(parameters)
    except ValueError as exc:
        raise UnrecognizedKernel(f"invalid parameters for {name}: {exc}") from exc

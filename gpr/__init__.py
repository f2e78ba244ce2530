# gpr/__init__.py

from . import config
from . import errors
from . import num
from . import kernel
from . import core
from .core import GaussianProcess, InversionMethod
from .errors import (
    GPRError,
    DimensionMismatch,
    InvalidState,
    MissingArtifact,
    CorruptState,
    UnrecognizedKernel,
    SingularMatrix,
)

__all__ = [
    "num",
    "kernel",
    "GaussianProcess",
    "InversionMethod",
    "GPRError",
    "DimensionMismatch",
    "InvalidState",
    "MissingArtifact",
    "CorruptState",
    "UnrecognizedKernel",
    "SingularMatrix",
    "__version__",
]

__version__ = config.__version__

# gpr/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by gpr.

Two families are distinguished:

- precondition violations (:class:`PreconditionError`), raised when the
  caller uses the engine incorrectly: wrong vector sizes, prediction or
  saving without data;
- data and environment failures (:class:`DataError`), raised when files
  are missing or corrupt, when a kernel cannot be reconstructed, or when a
  matrix cannot be inverted.

Each concrete exception also derives from the closest builtin exception so
that generic handlers (``except ValueError``, ``except FileNotFoundError``)
keep working.
"""
import numpy


class GPRError(Exception):
    """Base class of all gpr exceptions."""


class PreconditionError(GPRError):
    """The engine was called in a way that violates its contract."""


class DataError(GPRError):
    """Data, files or numerics do not allow the operation to complete."""


class DimensionMismatch(PreconditionError, ValueError):
    """Input or output vector size disagrees with the established dimension."""


class InvalidState(PreconditionError, RuntimeError):
    """Operation requires samples, labels or initialization that are absent."""


class MissingArtifact(DataError, FileNotFoundError):
    """A persistence file does not exist or is not a regular file."""


class CorruptState(DataError, ValueError):
    """A persistence file does not follow the expected grammar."""


class UnrecognizedKernel(DataError, ValueError):
    """Unknown kernel type name or wrong number of kernel parameters."""


class SingularMatrix(DataError, numpy.linalg.LinAlgError):
    """The selected inversion method cannot produce a meaningful inverse."""

# gpr/core/samples.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Ordered store of (sample, label) pairs.

The first pair fixes the input and output dimensions; every later pair is
checked against them before anything is stored.
"""
import gpr.num as gnp
from gpr.errors import DimensionMismatch


def as_vector(v, msg_prefix=""):
    """Return a 1-D float copy of v (scalars become vectors of size 1)."""
    v = gnp.array(v, dtype=gnp.float64)
    if v.ndim == 0:
        v = v.reshape(1)
    if v.ndim != 1:
        raise DimensionMismatch(
            f"{msg_prefix}expected a vector, got an array of shape {v.shape}."
        )
    return v


class SampleStore:
    """Two parallel, append-only sequences of sample and label vectors."""

    def __init__(self, samples=None, labels=None):
        self.samples = [] if samples is None else samples
        self.labels = [] if labels is None else labels
        self.input_dim = self.samples[0].shape[0] if self.samples else 0
        self.output_dim = self.labels[0].shape[0] if self.labels else 0

    def __len__(self):
        return len(self.samples)

    def append(self, x, y):
        """Append the pair (x, y).

        Both vectors are validated before either store is touched, so a
        rejected pair leaves the store unchanged.
        """
        x = as_vector(x, "add_sample: ")
        y = as_vector(y, "add_sample: ")
        if len(self.samples) == 0:
            if x.shape[0] == 0 or y.shape[0] == 0:
                raise DimensionMismatch(
                    "add_sample: input and output vectors must not be empty."
                )
            input_dim, output_dim = x.shape[0], y.shape[0]
        else:
            input_dim, output_dim = self.input_dim, self.output_dim
        check_dimension(x, input_dim, "input", "add_sample: ")
        check_dimension(y, output_dim, "output", "add_sample: ")

        self.input_dim, self.output_dim = input_dim, output_dim
        self.samples.append(x)
        self.labels.append(y)

    def sample_matrix(self):
        """Samples stacked as columns, shape (input_dim, n)."""
        return gnp.stack(self.samples, axis=1)

    def label_matrix(self):
        """Labels stacked as columns, shape (output_dim, n)."""
        return gnp.stack(self.labels, axis=1)

    @classmethod
    def from_column_matrices(cls, X, Y):
        """Rebuild a store from column-stacked samples X and labels Y."""
        samples = [gnp.array(X[:, i]) for i in range(X.shape[1])]
        labels = [gnp.array(Y[:, i]) for i in range(Y.shape[1])]
        return cls(samples, labels)


def check_dimension(v, dim, kind, msg_prefix=""):
    if v.shape[0] != dim:
        raise DimensionMismatch(
            f"{msg_prefix}dimension of {kind} vector ({v.shape[0]}) does not "
            f"correspond to the {kind} dimension ({dim})."
        )

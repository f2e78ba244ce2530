# gpr/core/persistence.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Text persistence of Gaussian process models.

A model saved under ``prefix`` consists of four files:

- ``<prefix>-RegressionVectors.txt``: regression vectors, (n, output_dim);
- ``<prefix>-SampleVectors.txt``: samples as columns, (input_dim, n);
- ``<prefix>-LabelVectors.txt``: labels as columns, (output_dim, n);
- ``<prefix>-ParameterFile.txt``: a single line

  ``kernel_type num_params param_0 ... param_{k-1} sigma input_dim output_dim debug``

Matrices are written row by row, one line per row, entries separated by a
single space. Floating point values use 17 significant digits, which
round-trips float64 exactly. The inversion method and the efficient storage
flag are not saved.
"""
import os
import warnings
from collections import namedtuple

import numpy as np

from gpr.errors import CorruptState, MissingArtifact
from gpr.kernel import make_kernel
from .samples import SampleStore

FLOAT_FORMAT = "%.17g"

ARTIFACT_SUFFIXES = {
    "regression_vectors": "-RegressionVectors.txt",
    "sample_vectors": "-SampleVectors.txt",
    "label_vectors": "-LabelVectors.txt",
    "parameters": "-ParameterFile.txt",
}

ModelState = namedtuple(
    "ModelState", ["kernel", "sigma", "store", "regression_vectors", "debug"]
)


def artifact_filenames(prefix):
    """Return the dict of the four file names of a model saved under prefix."""
    return {key: prefix + suffix for key, suffix in ARTIFACT_SUFFIXES.items()}


# --------------------------------------------------------------------------
# Matrix files
# --------------------------------------------------------------------------
def write_matrix(M, filename):
    """Write a 2D array as whitespace-delimited text, one row per line."""
    with open(filename, "w") as f:
        np.savetxt(f, np.atleast_2d(M), fmt=FLOAT_FORMAT, delimiter=" ")


def read_matrix(filename):
    """Read a whitespace-delimited matrix; dimensions are inferred.

    Raises
    ------
    CorruptState
        If the file is empty, ragged, or contains non-numeric tokens.
    """
    try:
        with open(filename, "r") as f, warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            M = np.loadtxt(f, dtype=np.float64, ndmin=2)
    except ValueError as exc:
        raise CorruptState(f"{filename}: malformed matrix ({exc})") from exc
    if M.size == 0:
        raise CorruptState(f"{filename}: empty matrix")
    return M


# --------------------------------------------------------------------------
# Parameter file
# --------------------------------------------------------------------------
def format_parameter_line(kernel, sigma, input_dim, output_dim, debug):
    params = [FLOAT_FORMAT % p for p in kernel.get_parameters()]
    fields = (
        [str(kernel), str(len(params))]
        + params
        + [FLOAT_FORMAT % sigma, str(input_dim), str(output_dim), str(int(debug))]
    )
    return " ".join(fields)


def parse_parameter_line(text, filename="parameter file"):
    """Parse a parameter record.

    Returns
    -------
    tuple
        (kernel_type, kernel_parameters, sigma, input_dim, output_dim, debug)

    Raises
    ------
    CorruptState
        On missing, malformed or extra tokens.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) != 1:
        raise CorruptState(f"{filename}: expected a single parameter line")
    tokens = lines[0].split()

    def corrupt(reason):
        return CorruptState(f"{filename}: parameter file is corrupt ({reason})")

    try:
        kernel_type = tokens[0]
        num_params = int(tokens[1])
    except (IndexError, ValueError):
        raise corrupt("kernel type or number of parameters") from None
    if num_params < 0:
        raise corrupt("negative number of kernel parameters")
    if len(tokens) != num_params + 6:
        raise corrupt(f"expected {num_params + 6} tokens, got {len(tokens)}")
    try:
        kernel_parameters = [float(t) for t in tokens[2 : 2 + num_params]]
        sigma = float(tokens[2 + num_params])
        input_dim = int(tokens[3 + num_params])
        output_dim = int(tokens[4 + num_params])
    except ValueError as exc:
        raise corrupt(str(exc)) from None
    debug_token = tokens[5 + num_params]
    if debug_token not in ("0", "1"):
        raise corrupt(f"debug flag {debug_token!r}")
    if input_dim <= 0 or output_dim <= 0:
        raise corrupt("dimensions must be positive")
    return kernel_type, kernel_parameters, sigma, input_dim, output_dim, debug_token == "1"


# --------------------------------------------------------------------------
# Save / load
# --------------------------------------------------------------------------
def save(gp, prefix):
    """Write the four artifacts of an initialized model."""
    filenames = artifact_filenames(prefix)
    write_matrix(gp.regression_vectors, filenames["regression_vectors"])
    write_matrix(gp.store.sample_matrix(), filenames["sample_vectors"])
    write_matrix(gp.store.label_matrix(), filenames["label_vectors"])
    line = format_parameter_line(
        gp.kernel, gp.sigma, gp.input_dim, gp.output_dim, gp.debug
    )
    with open(filenames["parameters"], "w") as f:
        f.write(line + "\n")
    return filenames


def _check_artifact(filename):
    if not os.path.exists(filename) or not os.path.isfile(filename):
        raise MissingArtifact(f"{filename} does not exist or is a directory.")


def load(prefix):
    """Read the four artifacts saved under prefix.

    Nothing is returned until every file has been read and checked, so the
    caller can commit the result in one step.

    Returns
    -------
    ModelState

    Raises
    ------
    MissingArtifact, CorruptState, UnrecognizedKernel
    """
    filenames = artifact_filenames(prefix)
    for filename in filenames.values():
        _check_artifact(filename)

    with open(filenames["parameters"], "r") as f:
        text = f.read()
    (
        kernel_type,
        kernel_parameters,
        sigma,
        input_dim,
        output_dim,
        debug,
    ) = parse_parameter_line(text, filenames["parameters"])
    kernel = make_kernel(kernel_type, kernel_parameters)

    R = read_matrix(filenames["regression_vectors"])
    X = read_matrix(filenames["sample_vectors"])
    Y = read_matrix(filenames["label_vectors"])

    n = X.shape[1]
    if X.shape[0] != input_dim:
        raise CorruptState(
            f"sample vectors have dimension {X.shape[0]}, expected {input_dim}"
        )
    if Y.shape != (output_dim, n):
        raise CorruptState(
            f"label matrix has shape {Y.shape}, expected {(output_dim, n)}"
        )
    if R.shape != (n, output_dim):
        raise CorruptState(
            f"regression vectors have shape {R.shape}, expected {(n, output_dim)}"
        )

    store = SampleStore.from_column_matrices(X, Y)
    return ModelState(kernel, sigma, store, R, debug)

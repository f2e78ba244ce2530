# gpr/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process regression engine.
"""
import threading

import gpr.num as gnp
from gpr.config import get_config, get_logger
from gpr.errors import InvalidState

from . import kernel_matrix
from . import persistence
from . import prediction
from . import regression
from .linalg import InversionMethod, SolverOptions
from .samples import SampleStore, as_vector, check_dimension

_logger = get_logger()


class GaussianProcess:
    """Gaussian Process (GP) regression engine.

    The engine stores (sample, label) pairs and learns regression vectors
    R = (K + sigma I)^-1 Y, where K is the kernel matrix of the samples and
    Y the matrix whose rows are the labels. Predictions at a new input x
    are Kx^T R, with Kx the kernel vector at x.

    Attributes
    ----------
    kernel : gpr.kernel.Kernel
        Kernel, shared with the caller. Replacing it invalidates the
        learned state.
    sigma : float
        Noise term added to the diagonal of the kernel matrix. It is added
        as is, not squared; `sigma_squared` is provided for callers that
        need the squared value.
    inversion_method : InversionMethod
        Algorithm used to invert K + sigma I. Not saved by `save`.
    stable_inversion : bool
        Floor near-zero singular values / eigenvalues instead of failing
        (SVD and eigen methods only). Not saved by `save`.
    efficient_storage : bool
        If True, the core matrix (K + sigma I)^-1 is not kept after
        learning. It is then recomputed when needed, which may not give
        bit-identical results if the inversion method changed. Not saved.
    debug : bool
        Log progress messages at INFO level. Saved by `save`.
    workers : int
        Number of threads used to assemble kernel matrices and vectors.
    lock : threading.Lock
        Lock available to callers that need to guard a sequence of
        operations (e.g. add samples, initialize, predict) against
        concurrent mutation. The engine never acquires it.

    Examples
    --------
    >>> import gpr
    >>> gp = gpr.GaussianProcess(gpr.kernel.GaussianKernel(1.0))
    >>> gp.sigma = 1e-6
    >>> for x, y in [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)]:
    ...     gp.add_sample([x], [y])
    >>> y = gp.predict([1.0])
    >>> y, D = gp.predict_derivative([1.5])
    >>> ci = gp.get_credible_interval([1.5])
    """

    def __init__(
        self,
        kernel,
        sigma=0.0,
        inversion_method=None,
        stable_inversion=False,
        efficient_storage=False,
        workers=None,
    ):
        self._kernel = kernel
        self._sigma = float(sigma)
        self.solver_options = SolverOptions(inversion_method, stable_inversion)
        self.efficient_storage = efficient_storage
        self.workers = get_config().workers if workers is None else int(workers)
        self.debug = False
        self.store = SampleStore()
        self.regression_vectors = None
        self._core_matrix = None
        self._initialized = False
        self.lock = threading.Lock()

    def __repr__(self):
        output = str("<gpr.core.GaussianProcess object> " + hex(id(self)))
        return output

    def __str__(self):
        params = ", ".join(f"{p:g}" for p in self._kernel.get_parameters())
        return (
            f"Gaussian Process:\n"
            f"  Initialized: {self._initialized}\n"
            f"  Samples: {len(self.store.samples)}\n"
            f"  Labels: {len(self.store.labels)}\n"
            f"  Noise: {self._sigma}\n"
            f"  Input Dimension: {self.input_dim}\n"
            f"  Output Dimension: {self.output_dim}\n"
            f"  Kernel Type: {self._kernel}\n"
            f"  Kernel Parameters: {params}"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def _invalidate(self):
        self._initialized = False
        self._core_matrix = None

    @property
    def kernel(self):
        return self._kernel

    @kernel.setter
    def kernel(self, k):
        self._kernel = k
        self._invalidate()

    @property
    def sigma(self):
        return self._sigma

    @sigma.setter
    def sigma(self, sigma):
        self._sigma = float(sigma)
        self._invalidate()

    @property
    def sigma_squared(self):
        return self._sigma * self._sigma

    @property
    def inversion_method(self):
        return self.solver_options.method

    @inversion_method.setter
    def inversion_method(self, method):
        self.solver_options.method = InversionMethod(method)

    @property
    def stable_inversion(self):
        return self.solver_options.stable

    @stable_inversion.setter
    def stable_inversion(self, stable):
        self.solver_options.stable = bool(stable)

    @property
    def initialized(self):
        return self._initialized

    @property
    def samples(self):
        return self.store.samples

    @property
    def labels(self):
        return self.store.labels

    @property
    def num_samples(self):
        return len(self.store)

    @property
    def input_dim(self):
        return self.store.input_dim

    @property
    def output_dim(self):
        return self.store.output_dim

    def debug_on(self):
        self.debug = True

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------
    def add_sample(self, x, y):
        """Add a sample/label pair.

        The first pair defines the input and output dimensions.

        Raises
        ------
        DimensionMismatch
            If x or y do not have the established dimensions. The stores
            are left unchanged.
        """
        self.store.append(x, y)
        self._invalidate()

    def initialize(self):
        """Compute the regression vectors if the data changed since the last
        call.

        Raises
        ------
        InvalidState
            If no sample or label has been added.
        SingularMatrix
            If the regularized kernel matrix cannot be inverted.
        """
        if self._initialized:
            return
        if len(self.store.samples) == 0:
            raise InvalidState(
                "GaussianProcess.initialize: no input samples defined during initialization"
            )
        if len(self.store.labels) == 0:
            raise InvalidState(
                "GaussianProcess.initialize: no output labels defined during initialization"
            )
        R, C = regression.compute_regression_vectors(self)
        self.regression_vectors = R
        self._core_matrix = None if self.efficient_storage else C
        self._initialized = True

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def _check_input(self, x, msg_prefix):
        x = as_vector(x, msg_prefix)
        check_dimension(x, self.input_dim, "input", msg_prefix)
        return x

    def predict(self, x):
        """Predict the output at x.

        Parameters
        ----------
        x : array_like, shape (input_dim,)

        Returns
        -------
        y : gnp.array, shape (output_dim,)
        """
        self.initialize()
        x = self._check_input(x, "GaussianProcess.predict: ")
        return prediction.predict(self, x)

    def predict_derivative(self, x):
        """Predict the output at x and its derivative.

        Returns
        -------
        y : gnp.array, shape (output_dim,)
        D : gnp.array, shape (input_dim, output_dim)
        """
        self.initialize()
        x = self._check_input(x, "GaussianProcess.predict_derivative: ")
        return prediction.predict_derivative(self, x)

    def get_credible_interval(self, x, level=0.95):
        """Half width of the central credible interval at x.

        With the default level, this is 1.96 times the posterior standard
        deviation of the latent function at x.
        """
        self.initialize()
        x = self._check_input(x, "GaussianProcess.get_credible_interval: ")
        C = self._core_matrix
        if C is None:
            C = self.compute_core_matrix()
        return prediction.credible_interval(self, x, C, level)

    def inner_product(self, x, y):
        """Scalar product between x and y in the RKHS of the kernel."""
        if self.input_dim == 0:
            raise InvalidState(
                "GaussianProcess.inner_product: no input samples defined, input dimension unknown"
            )
        x = self._check_input(x, "GaussianProcess.inner_product: ")
        y = self._check_input(y, "GaussianProcess.inner_product: ")
        return float(self._kernel(x, y))

    __call__ = inner_product

    # ------------------------------------------------------------------
    # Capabilities used by gpr.core.likelihood
    # ------------------------------------------------------------------
    def compute_core_matrix(self):
        """Return (K + sigma I)^-1 with the current inversion method."""
        return regression.compute_core_matrix(self)

    def compute_core_matrix_with_determinant(self):
        """Return ((K + sigma I)^-1, det(K + sigma I)) from one factorization."""
        return regression.compute_core_matrix_with_determinant(self)

    def compute_core_matrix_with_log_determinant(self):
        """Return ((K + sigma I)^-1, sign, log|det(K + sigma I)|)."""
        return regression.compute_core_matrix_with_log_determinant(self)

    def compute_kernel_matrix_trace(self):
        return kernel_matrix.compute_kernel_matrix_trace(self._kernel, self.samples)

    def compute_derivative_kernel_matrix(self):
        """Return dK/dtheta, shape (num_kernel_parameters, n, n)."""
        return kernel_matrix.compute_derivative_kernel_matrix(self._kernel, self.samples)

    def compute_derivative_kernel_matrix_trace(self):
        return kernel_matrix.compute_derivative_kernel_matrix_trace(
            self._kernel, self.samples
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self, prefix):
        """Save the model under prefix (four text files).

        Raises
        ------
        InvalidState
            If the engine is not initialized.
        """
        if not self._initialized:
            raise InvalidState("GaussianProcess.save: gaussian process is not initialized.")
        filenames = persistence.save(self, prefix)
        if self.debug:
            _logger.info("GaussianProcess.save: writing gaussian process:")
            for filename in filenames.values():
                _logger.info("\t %s", filename)

    def load(self, prefix):
        """Replace the state of the engine by the model saved under prefix.

        The kernel is rebuilt from its saved type and parameters. The
        regression vectors are loaded as saved, and the engine is marked
        initialized. The current state is kept if anything fails.

        Raises
        ------
        MissingArtifact, CorruptState, UnrecognizedKernel
        """
        if self.debug:
            _logger.info("GaussianProcess.load: loading gaussian process:")
            for filename in persistence.artifact_filenames(prefix).values():
                _logger.info("\t %s", filename)
        state = persistence.load(prefix)

        self._kernel = state.kernel
        self._sigma = state.sigma
        self.store = state.store
        self.regression_vectors = state.regression_vectors
        self.debug = state.debug
        self._core_matrix = None
        self._initialized = True

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def _mismatch(self, what):
        if self.debug:
            _logger.info("GaussianProcess comparison: %s not equal.", what)
        return False

    def __eq__(self, other):
        if not isinstance(other, GaussianProcess):
            return NotImplemented
        if other is self:
            return True
        if not _same_matrix(self.regression_vectors, other.regression_vectors):
            return self._mismatch("regression vectors")
        if len(self.samples) != len(other.samples):
            return self._mismatch("number of sample vectors")
        for a, b in zip(self.samples, other.samples):
            if not _same_matrix(a, b):
                return self._mismatch("sample vectors")
        if len(self.labels) != len(other.labels):
            return self._mismatch("number of label vectors")
        for a, b in zip(self.labels, other.labels):
            if not _same_matrix(a, b):
                return self._mismatch("label vectors")
        if self._kernel != other._kernel:
            return self._mismatch("kernel")
        if self._sigma != other._sigma:
            return self._mismatch("sigma")
        if self._initialized != other._initialized:
            return self._mismatch("initialization state")
        if self.input_dim != other.input_dim:
            return self._mismatch("input dimension")
        if self.output_dim != other.output_dim:
            return self._mismatch("output dimension")
        if self.debug != other.debug:
            return self._mismatch("debug state")
        if self.debug:
            _logger.info("GaussianProcess comparison: is equal!")
        return True

    def __ne__(self, other):
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    __hash__ = None


def _same_matrix(a, b):
    if a is None or b is None:
        return a is None and b is None
    return a.shape == b.shape and gnp.array_equal(a, b)

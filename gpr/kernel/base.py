# gpr/kernel/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel contract consumed by :class:`gpr.core.GaussianProcess`.

A kernel is a symmetric, deterministic, positive semi-definite function
``k(x, y) -> float`` of two input vectors, parameterized by a fixed-size
parameter vector. The type name returned by ``str(kernel)`` identifies the
kernel in persisted models.
"""
import gpr.num as gnp


class Kernel:
    """Base class of kernels.

    Subclasses implement :meth:`evaluate` and :meth:`get_parameters`, and
    must be constructible as ``cls(*kernel.get_parameters())``.
    """

    name = "Kernel"

    def __call__(self, x, y):
        return self.evaluate(gnp.asarray(x), gnp.asarray(y))

    def evaluate(self, x, y):
        raise NotImplementedError

    def get_parameters(self):
        raise NotImplementedError

    @property
    def num_parameters(self):
        return self.get_parameters().shape[0]

    @classmethod
    def from_parameters(cls, parameters):
        return cls(*[float(p) for p in parameters])

    def parameter_derivatives(self, x, y, h=1e-6):
        """Derivatives of k(x, y) with respect to each kernel parameter.

        Uses a 5-point central finite difference scheme, with a step
        relative to the magnitude of each parameter.

        Returns
        -------
        gnp.array, shape (num_parameters,)
        """
        x = gnp.asarray(x)
        y = gnp.asarray(y)
        theta = gnp.array(self.get_parameters())
        d = gnp.zeros(theta.shape)
        for k in range(theta.shape[0]):
            step = h * max(1.0, abs(float(theta[k])))

            def k_of_theta(t, k=k):
                theta_k = gnp.copy(theta)
                theta_k[k] = t
                return type(self).from_parameters(theta_k).evaluate(x, y)

            d[k] = gnp.derivative_finite_diff(k_of_theta, float(theta[k]), step)
        return d

    def __eq__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return gnp.array_equal(self.get_parameters(), other.get_parameters())

    def __ne__(self, other):
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    def __hash__(self):
        return hash((self.name, tuple(float(p) for p in self.get_parameters())))

    def __str__(self):
        return self.name

    def __repr__(self):
        params = ", ".join(repr(float(p)) for p in self.get_parameters())
        return f"{self.name}({params})"

# gpr/kernel/gaussian.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpr.num as gnp
from .base import Kernel


class GaussianKernel(Kernel):
    """Gaussian (squared exponential) kernel.

    .. math::
        k(x, y) = s \\exp\\left(-\\frac{\\|x - y\\|^2}{2\\sigma^2}\\right)

    Parameters
    ----------
    sigma : float
        Length scale :math:`\\sigma > 0`.
    scale : float, optional
        Amplitude :math:`s`, by default 1.
    """

    name = "GaussianKernel"

    def __init__(self, sigma, scale=1.0):
        if not sigma > 0:
            raise ValueError("GaussianKernel: sigma must be positive")
        self.sigma = float(sigma)
        self.scale = float(scale)

    def evaluate(self, x, y):
        r = x - y
        return self.scale * gnp.exp(-0.5 * gnp.sum(r * r) / self.sigma ** 2)

    def get_parameters(self):
        return gnp.array([self.sigma, self.scale])

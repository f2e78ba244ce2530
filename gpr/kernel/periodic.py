# gpr/kernel/periodic.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpr.num as gnp
from .base import Kernel


class PeriodicKernel(Kernel):
    """Periodic kernel.

    .. math::
        k(x, y) = \\alpha^2 \\exp\\left(-\\frac{2}{\\sigma^2}
                  \\sum_i \\sin^2\\left(\\frac{\\pi (x_i - y_i)}{b}\\right)\\right)

    Parameters
    ----------
    scale : float
        Amplitude :math:`\\alpha`.
    period : float
        Period :math:`b > 0`.
    sigma : float
        Length scale :math:`\\sigma > 0`.
    """

    name = "PeriodicKernel"

    def __init__(self, scale, period, sigma):
        if not period > 0:
            raise ValueError("PeriodicKernel: period must be positive")
        if not sigma > 0:
            raise ValueError("PeriodicKernel: sigma must be positive")
        self.scale = float(scale)
        self.period = float(period)
        self.sigma = float(sigma)

    def evaluate(self, x, y):
        s = gnp.sin(gnp.pi / self.period * (x - y))
        return self.scale ** 2 * gnp.exp(-2.0 * gnp.sum(s * s) / self.sigma ** 2)

    def get_parameters(self):
        return gnp.array([self.scale, self.period, self.sigma])

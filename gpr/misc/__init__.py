# gpr/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Miscellaneous utility modules for gpr.

plotutils is not imported here so that importing gpr does not import
matplotlib.
"""

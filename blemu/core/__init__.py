# blemu/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Core components of the blemu package.

This subpackage contains the design assembler, the block covariance
builder, the Bayes Linear adjustment and the emulator class that
composes them.

Public API
----------
Design : class
    Aligned observation points, observations and prior means.
assemble_design : function
    Concatenate value and derivative observations into a Design.
Emulator : class
    Bayes Linear emulator facade.
VARIANTS : dict
    Derivative directions of the named emulator variants.
observation_covariance, cross_covariance : functions
    Block covariance matrices.
bayes_linear_adjust, factorize : functions
    Bayes Linear update.
"""

from .design import Design, assemble_design
from .covariance import observation_covariance, cross_covariance, covariance_block
from .adjust import AdjustmentFactor, bayes_linear_adjust, factorize
from .emulator import Emulator, VARIANTS

__all__ = [
    "Design",
    "assemble_design",
    "observation_covariance",
    "cross_covariance",
    "covariance_block",
    "AdjustmentFactor",
    "bayes_linear_adjust",
    "factorize",
    "Emulator",
    "VARIANTS",
]

# blemu/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by blemu.

All of them signal a violated precondition. They are raised as soon as
the problem is detected and are never caught inside the package.

ConfigurationError
    Hyperparameters out of range, unknown variant, or block-size
    metadata inconsistent with the arrays it describes.
SingularMatrixError
    The observation covariance matrix cannot be factorized (not
    symmetric, or not numerically positive definite).
DimensionMismatchError
    Points or derivative directions inconsistent with the dimension of
    the input space.
"""
import numpy


class BLEMUError(Exception):
    """Base class for blemu errors."""


class ConfigurationError(BLEMUError, ValueError):
    pass


class SingularMatrixError(BLEMUError, numpy.linalg.LinAlgError):
    def __init__(self, message, name=None, shape=None):
        if name is not None:
            message = f"{name}: {message}"
        if shape is not None:
            message = f"{message} (matrix shape {tuple(shape)})"
        super().__init__(message)
        self.name = name
        self.shape = shape


class DimensionMismatchError(BLEMUError, ValueError):
    pass

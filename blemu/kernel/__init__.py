# blemu/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance kernels for Bayes Linear emulation.

Modules
-------
gaussian
    Squared-exponential covariance between function values and first
    order partial derivatives.
utils
    Validation of hyperparameters, points and derivative directions.

Public API
-----------
- Value/derivative covariances:
    cov_value, cov_value_deriv, cov_deriv_value,
    cov_deriv_deriv_same, cov_deriv_deriv_mixed, cov_deriv_deriv
- Validation:
    check_hyperparameters, check_direction
"""

from .gaussian import (
    cov_value,
    cov_value_deriv,
    cov_deriv_value,
    cov_deriv_deriv_same,
    cov_deriv_deriv_mixed,
    cov_deriv_deriv,
)
from .utils import check_hyperparameters, check_direction

__all__ = [
    "cov_value",
    "cov_value_deriv",
    "cov_deriv_value",
    "cov_deriv_deriv_same",
    "cov_deriv_deriv_mixed",
    "cov_deriv_deriv",
    "check_hyperparameters",
    "check_direction",
]

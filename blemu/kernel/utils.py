# blemu/kernel/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import math
import numbers
import blemu.num as gnp
from blemu.errors import ConfigurationError, DimensionMismatchError


def check_hyperparameters(theta, sigma):
    """Validate the correlation length and the prior standard deviation."""
    for name, value in (("theta", theta), ("sigma", sigma)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{name} must be a real number, got {value!r}")
        if not math.isfinite(value) or value <= 0.0:
            raise ConfigurationError(f"{name} must be finite and > 0, got {value}")
    return float(theta), float(sigma)


def as_points(x, name="x"):
    """Return x as a (n, d) array and a flag telling if x was a single point."""
    x = gnp.asarray(x)
    if x.ndim == 1:
        return x.reshape(1, -1), True
    if x.ndim != 2:
        raise DimensionMismatchError(
            f"{name} should be a point (d,) or an array of points (n, d), got shape {x.shape}"
        )
    return x, False


def prepare_pair(x, xdash):
    """Convert a pair of point sets and check that they live in the same space."""
    x, x_single = as_points(x, "x")
    xdash, xdash_single = as_points(xdash, "xdash")
    if x.shape[1] != xdash.shape[1]:
        raise DimensionMismatchError(
            f"x and xdash must have the same dimension, got {x.shape[1]} and {xdash.shape[1]}"
        )
    return x, xdash, x_single and xdash_single


def check_direction(k, dim, name="k"):
    """Check that k is a valid coordinate index in a dim-dimensional space."""
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise DimensionMismatchError(f"direction {name} must be an integer, got {k!r}")
    if not 0 <= k < dim:
        raise DimensionMismatchError(
            f"direction {name}={k} is out of range for a {dim}-dimensional input space"
        )
    return int(k)

# blemu/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `blemu.core` modules.

This file hosts:
- Shape/type validation & conversion helpers for (xi, zi, xt)
- Block-size validation for observation vectors
"""
import numbers
import blemu.num as gnp
from blemu.errors import ConfigurationError, DimensionMismatchError


def ensure_shapes_and_type(*, xi=None, zi=None, xt=None, dim=None):
    """Validate and adjust shapes/types of input arrays.

    Parameters
    ----------
    xi : array_like, optional
        Observation points (n, d).
    zi : array_like, optional
        Observed values (n,) or (n, 1).
    xt : array_like, optional
        Prediction points (m, d), or a single point (d,).
    dim : int, optional
        Expected dimension of the input space.

    Returns
    -------
    tuple
        (xi, zi, xt) converted with `gnp.asarray`.

    Raises
    ------
    DimensionMismatchError
        If an array does not have the expected number of axes, or if
        the number of rows / columns are inconsistent.

    Notes
    -----
    - If `zi` is provided as a 2D column (n,1), it is reshaped to (n,).
    - A 1D `xt` is read as a single point and reshaped to (1, d).
    """
    if xi is not None:
        xi = gnp.asarray(xi)
        if xi.ndim != 2:
            raise DimensionMismatchError(f"xi should be a 2D array, got shape {xi.shape}")
        if dim is None:
            dim = xi.shape[1]

    if zi is not None:
        zi = gnp.asarray(zi)
        if zi.ndim == 2 and zi.shape[1] == 1:
            zi = zi.reshape(-1)
        elif zi.ndim != 1:
            raise DimensionMismatchError(
                f"zi should be 1D or a 2D column array, got shape {zi.shape}"
            )

    if xt is not None:
        xt = gnp.asarray(xt)
        if xt.ndim == 1:
            xt = xt.reshape(1, -1)
        elif xt.ndim != 2:
            raise DimensionMismatchError(f"xt should be a 2D array, got shape {xt.shape}")

    if xi is not None and zi is not None and xi.shape[0] != zi.shape[0]:
        raise ConfigurationError(
            f"xi and zi must have the same number of rows, got {xi.shape[0]} and {zi.shape[0]}"
        )
    if dim is not None:
        if xi is not None and xi.shape[1] != dim:
            raise DimensionMismatchError(
                f"xi has {xi.shape[1]} columns, expected input dimension {dim}"
            )
        if xt is not None and xt.shape[1] != dim:
            raise DimensionMismatchError(
                f"query points have dimension {xt.shape[1]}, expected input dimension {dim}"
            )

    return xi, zi, xt


def check_block_size(size, name):
    if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 0:
        raise ConfigurationError(f"{name} must be a non-negative integer, got {size!r}")
    return int(size)

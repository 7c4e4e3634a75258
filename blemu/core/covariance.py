# blemu/core/covariance.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Block covariance matrices over value and derivative observations.

The observation vector of a `Design` is split into a value block and
one block per derivative direction. Each pair of blocks gets its own
kernel:

============  ============  ==================================
row block     column block  kernel
============  ============  ==================================
value         value         cov_value
value         k             cov_value_deriv(., ., k)
k             value         cov_deriv_value(., ., k)
k             k             cov_deriv_deriv_same(., ., k)
k             l (l != k)    cov_deriv_deriv_mixed(., ., k, l)
============  ============  ==================================

Functions
---------
covariance_block(x, y, row_block, col_block, theta, sigma)
    One sub-matrix of the table above.
observation_covariance(design, theta, sigma, nugget=0.0)
    Var_D, assembled block by block.
cross_covariance(xt, design, theta, sigma)
    Cov(f(xt), D), one row per query point.
check_symmetric(K, name)
    Raise SingularMatrixError if K is not symmetric.
"""
import blemu.num as gnp
from blemu.config import get_config
from blemu.errors import SingularMatrixError
from blemu.kernel import (
    cov_value,
    cov_value_deriv,
    cov_deriv_value,
    cov_deriv_deriv,
    check_hyperparameters,
)
from .design import VALUE
from .utils import ensure_shapes_and_type


def covariance_block(x, y, row_block, col_block, theta, sigma):
    """Covariance between observations of type row_block at x and col_block at y.

    Parameters
    ----------
    x : array_like, shape (n, d)
    y : array_like, shape (m, d)
    row_block, col_block : 'value' or int
        Observation type: function value or partial derivative along
        the given direction.
    theta, sigma : float
        Kernel hyperparameters.

    Returns
    -------
    gnp.array, shape (n, m)
    """
    if row_block == VALUE and col_block == VALUE:
        return cov_value(x, y, theta, sigma)
    if row_block == VALUE:
        return cov_value_deriv(x, y, col_block, theta, sigma)
    if col_block == VALUE:
        return cov_deriv_value(x, y, row_block, theta, sigma)
    return cov_deriv_deriv(x, y, row_block, col_block, theta, sigma)


def observation_covariance(design, theta, sigma, nugget=0.0):
    """Prior covariance matrix Var_D of the observation vector of a design.

    Only the blocks present in `design` are built: for a design with n
    values and derivative blocks of sizes n_k, the result is a square
    matrix of size n + sum(n_k).

    Parameters
    ----------
    design : blemu.core.Design
    theta, sigma : float
        Kernel hyperparameters.
    nugget : float, optional
        Value added to the diagonal (default 0).

    Returns
    -------
    Var_D : gnp.array, shape (N, N)

    Raises
    ------
    SingularMatrixError
        If the assembled matrix is not symmetric.
    """
    theta, sigma = check_hyperparameters(theta, sigma)
    slices = design.block_slices()
    xD = design.xD
    rows = []
    for row_block, row_slice in slices.items():
        rows.append(
            [
                covariance_block(
                    xD[row_slice], xD[col_slice], row_block, col_block, theta, sigma
                )
                for col_block, col_slice in slices.items()
            ]
        )
    Var_D = gnp.block(rows)
    if nugget:
        Var_D = Var_D + nugget * gnp.eye(Var_D.shape[0])
    check_symmetric(Var_D, "Var_D")
    return Var_D


def cross_covariance(xt, design, theta, sigma):
    """Covariance between f at the query points and the observations.

    The column order follows the observation vector. The derivative
    columns use cov_value_deriv(xt, xD_j, k): the derivative is taken
    at the design point.

    Parameters
    ----------
    xt : array_like, shape (m, d) or (d,)
        Query points.
    design : blemu.core.Design
    theta, sigma : float

    Returns
    -------
    Cov_fx_D : gnp.array, shape (m, N)
    """
    theta, sigma = check_hyperparameters(theta, sigma)
    _, _, xt = ensure_shapes_and_type(xt=xt, dim=design.dim)
    xD = design.xD
    return gnp.hstack(
        [
            covariance_block(xt, xD[col_slice], VALUE, col_block, theta, sigma)
            for col_block, col_slice in design.block_slices().items()
        ]
    )


def check_symmetric(K, name="K", rtol=None):
    """Raise SingularMatrixError if K is not square and symmetric."""
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise SingularMatrixError("matrix is not square", name, K.shape)
    if rtol is None:
        rtol = get_config().symmetry_rtol
    scale = gnp.max(gnp.abs(K)) if K.size else 0.0
    asymmetry = gnp.max(gnp.abs(K - K.T)) if K.size else 0.0
    if asymmetry > rtol * scale:
        raise SingularMatrixError(
            f"matrix is not symmetric (max |K - K^T| = {asymmetry:.3e})", name, K.shape
        )

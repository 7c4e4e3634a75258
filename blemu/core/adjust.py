# blemu/core/adjust.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Bayes Linear adjustment of a quantity by an observation vector.

Given the prior mean E_fx and variance Var_fx of f(x), the observations
D with prior mean E_D and covariance Var_D, and the covariance
Cov_fx_D between f(x) and D, the adjusted moments are

.. math::
    E_D[f(x)] = E_{fx} + Cov_{fx,D} \\, Var_D^{-1} (D - E_D)

    Var_D[f(x)] = Var_{fx} - Cov_{fx,D} \\, Var_D^{-1} \\, Cov_{fx,D}^T

Var_D is factorized once (Cholesky) and the factor is reused for any
number of query points. No explicit inverse is formed.

Functions
---------
factorize(Var_D, name="Var_D")
    Cholesky factorization wrapped in an `AdjustmentFactor`.
bayes_linear_adjust(E_fx, Var_fx, Cov_fx_D, Var_D, D, E_D)
    One-shot adjustment.
"""
import warnings
import blemu.num as gnp
from blemu.config import get_config, get_logger
from blemu.errors import ConfigurationError, SingularMatrixError
from .covariance import check_symmetric


class AdjustmentFactor:
    """Cholesky factor of an observation covariance matrix.

    Instances are immutable and can be shared between any number of
    evaluations.
    """

    def __init__(self, cho, size, condition_number):
        self._cho = cho
        self._size = size
        self._condition_number = condition_number

    def __repr__(self):
        return f"<blemu.core.AdjustmentFactor object> size={self._size}"

    @property
    def size(self):
        return self._size

    @property
    def condition_number(self):
        return self._condition_number

    def solve(self, b):
        """Solve Var_D z = b."""
        b = gnp.asarray(b)
        if b.shape[0] != self._size:
            raise ConfigurationError(
                f"right-hand side has {b.shape[0]} rows, expected {self._size}"
            )
        return gnp.cho_solve(self._cho, b, check_finite=False)

    def adjust(self, E_fx, Var_fx, Cov_fx_D, residual_weights):
        """Adjusted expectations and variances for the rows of Cov_fx_D.

        Parameters
        ----------
        E_fx, Var_fx : float or array_like, shape (m,)
            Prior means and variances of the target quantities.
        Cov_fx_D : array_like, shape (m, N) or (N,)
            Covariances between the targets and D. A single row is
            read as m = 1.
        residual_weights : array_like, shape (N,)
            Var_D^{-1} (D - E_D), see `solve`.

        Returns
        -------
        E_adj, Var_adj : gnp.array, shape (m,)
        """
        Cov_fx_D = gnp.asarray(Cov_fx_D)
        if Cov_fx_D.ndim == 1:
            Cov_fx_D = Cov_fx_D.reshape(1, -1)
        lambda_t = self.solve(Cov_fx_D.T)
        E_adj = E_fx + gnp.einsum("ij, j -> i", Cov_fx_D, residual_weights)
        Var_adj = Var_fx - gnp.einsum("i..., i...", lambda_t, Cov_fx_D.T)
        return E_adj, Var_adj


def factorize(Var_D, name="Var_D"):
    """Factorize an observation covariance matrix.

    Parameters
    ----------
    Var_D : array_like, shape (N, N)
        Symmetric positive definite matrix.
    name : str, optional
        Name used in error messages.

    Returns
    -------
    AdjustmentFactor

    Raises
    ------
    SingularMatrixError
        If Var_D is not symmetric, if the Cholesky factorization fails,
        or if its condition number exceeds 1 / eps.
    """
    Var_D = gnp.asarray(Var_D)
    check_symmetric(Var_D, name)
    try:
        cho = gnp.cholesky_factor(Var_D)
    except Exception as e:
        if gnp.is_linalg_exception(e):
            raise SingularMatrixError(
                f"Cholesky factorization failed, matrix is not positive definite ({e})",
                name,
                Var_D.shape,
            ) from e
        raise

    condition_number = gnp.cond(Var_D)
    if not condition_number < 1.0 / gnp.eps:
        raise SingularMatrixError(
            f"matrix is numerically singular (condition number {condition_number:.3e})",
            name,
            Var_D.shape,
        )
    if condition_number > get_config().condition_warning:
        warnings.warn(
            f"{name} is ill-conditioned (condition number {condition_number:.3e}).",
            RuntimeWarning,
        )
    get_logger().debug(
        "Factorized %s of size %d, condition number %.3e",
        name,
        Var_D.shape[0],
        condition_number,
    )
    return AdjustmentFactor(cho, Var_D.shape[0], condition_number)


def bayes_linear_adjust(E_fx, Var_fx, Cov_fx_D, Var_D, D, E_D):
    """Bayes Linear adjusted expectation and variance.

    Parameters
    ----------
    E_fx : float
        Prior expectation of the target.
    Var_fx : float
        Prior variance of the target.
    Cov_fx_D : array_like, shape (N,) or (m, N)
        Covariance between the target(s) and D.
    Var_D : array_like, shape (N, N)
        Covariance of D.
    D, E_D : array_like, shape (N,)
        Observations and their prior expectation.

    Returns
    -------
    E_adj, Var_adj : float, or gnp.array of shape (m,) when Cov_fx_D is 2D.

    Raises
    ------
    ConfigurationError
        If the lengths of D, E_D, Cov_fx_D and the size of Var_D differ.
    SingularMatrixError
        If Var_D cannot be factorized.
    """
    D = gnp.asarray(D).reshape(-1)
    E_D = gnp.asarray(E_D).reshape(-1)
    Cov_fx_D = gnp.asarray(Cov_fx_D)
    single = Cov_fx_D.ndim == 1
    if single:
        Cov_fx_D = Cov_fx_D.reshape(1, -1)
    Var_D = gnp.asarray(Var_D)
    N = Var_D.shape[0]
    if D.shape[0] != N or E_D.shape[0] != N or Cov_fx_D.shape[1] != N:
        raise ConfigurationError(
            f"inconsistent sizes: Var_D {Var_D.shape}, D {D.shape}, "
            f"E_D {E_D.shape}, Cov_fx_D {Cov_fx_D.shape}"
        )

    factor = factorize(Var_D)
    E_adj, Var_adj = factor.adjust(E_fx, Var_fx, Cov_fx_D, factor.solve(D - E_D))
    if single:
        return gnp.to_scalar(E_adj[0]), gnp.to_scalar(Var_adj[0])
    return E_adj, Var_adj

# blemu/kernel/gaussian.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Squared-exponential covariance and its partial derivatives.

For a process f with constant mean and covariance

.. math::
    k(x, x') = \\sigma^2 \\exp(-\\|x - x'\\|^2 / \\theta^2),

the covariances between values and first-order partial derivatives
of f are obtained by differentiating k with respect to either
argument. With :math:`\\Delta = x - x'` and
:math:`e = \\exp(-\\|\\Delta\\|^2 / \\theta^2)`:

=========================  ===========================================
Cov(f(x), df(x')/dx'_k)    :math:`2\\sigma^2 \\Delta_k e / \\theta^2`
Cov(df(x)/dx_k, f(x'))     :math:`-2\\sigma^2 \\Delta_k e / \\theta^2`
Cov(df/dx_k, df/dx'_k)     :math:`(2\\sigma^2/\\theta^2 - 4\\sigma^2 \\Delta_k^2/\\theta^4) e`
Cov(df/dx_k, df/dx'_l)     :math:`-4\\sigma^2 \\Delta_k \\Delta_l e / \\theta^4`
=========================  ===========================================

Every function accepts single points (shape (d,)) or arrays of points
(shape (n, d)). Arrays give an (n, m) matrix; two single points give
a float.
"""
import blemu.num as gnp
from .utils import check_direction, check_hyperparameters, prepare_pair
from blemu.errors import ConfigurationError


def _differences_and_correlation(x, xdash, theta):
    delta = gnp.pairwise_differences(x, xdash)
    r2 = gnp.sum(delta**2, axis=2)
    return delta, gnp.exp(-r2 / theta**2)


def _output(K, single):
    if single:
        return float(K[0, 0])
    return K


def cov_value(x, xdash, theta=1.0, sigma=1.0):
    """Covariance between f(x) and f(xdash).

    Parameters
    ----------
    x : array_like, shape (n, d) or (d,)
    xdash : array_like, shape (m, d) or (d,)
    theta : float
        Correlation length, > 0.
    sigma : float
        Prior standard deviation, > 0.

    Returns
    -------
    gnp.array, shape (n, m), or float
    """
    theta, sigma = check_hyperparameters(theta, sigma)
    x, xdash, single = prepare_pair(x, xdash)
    _, e = _differences_and_correlation(x, xdash, theta)
    return _output(sigma**2 * e, single)


def cov_value_deriv(x, xdash, k, theta=1.0, sigma=1.0):
    """Covariance between f(x) and the k-th partial derivative of f at xdash."""
    theta, sigma = check_hyperparameters(theta, sigma)
    x, xdash, single = prepare_pair(x, xdash)
    k = check_direction(k, x.shape[1])
    delta, e = _differences_and_correlation(x, xdash, theta)
    K = 2.0 * sigma**2 * delta[:, :, k] * e / theta**2
    return _output(K, single)


def cov_deriv_value(x, xdash, k, theta=1.0, sigma=1.0):
    """Covariance between the k-th partial derivative of f at x and f(xdash)."""
    theta, sigma = check_hyperparameters(theta, sigma)
    x, xdash, single = prepare_pair(x, xdash)
    k = check_direction(k, x.shape[1])
    delta, e = _differences_and_correlation(x, xdash, theta)
    K = -2.0 * sigma**2 * delta[:, :, k] * e / theta**2
    return _output(K, single)


def cov_deriv_deriv_same(x, xdash, k, theta=1.0, sigma=1.0):
    """Covariance between k-th partial derivatives of f at x and at xdash."""
    theta, sigma = check_hyperparameters(theta, sigma)
    x, xdash, single = prepare_pair(x, xdash)
    k = check_direction(k, x.shape[1])
    delta, e = _differences_and_correlation(x, xdash, theta)
    dk = delta[:, :, k]
    K = (2.0 * sigma**2 / theta**2 - 4.0 * sigma**2 * dk**2 / theta**4) * e
    return _output(K, single)


def cov_deriv_deriv_mixed(x, xdash, k, l, theta=1.0, sigma=1.0):
    """Covariance between the k-th partial derivative at x and the l-th at xdash, k != l."""
    theta, sigma = check_hyperparameters(theta, sigma)
    x, xdash, single = prepare_pair(x, xdash)
    k = check_direction(k, x.shape[1], "k")
    l = check_direction(l, x.shape[1], "l")
    if k == l:
        raise ConfigurationError(
            f"mixed derivative covariance needs two distinct directions, got k=l={k}"
        )
    delta, e = _differences_and_correlation(x, xdash, theta)
    K = -4.0 * sigma**2 * (delta[:, :, k] * delta[:, :, l]) * e / theta**4
    return _output(K, single)


def cov_deriv_deriv(x, xdash, k, l, theta=1.0, sigma=1.0):
    """Covariance between derivatives in directions k (at x) and l (at xdash)."""
    if k == l:
        return cov_deriv_deriv_same(x, xdash, k, theta, sigma)
    return cov_deriv_deriv_mixed(x, xdash, k, l, theta, sigma)

## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""
Simulators used to train and check emulators.

The SIR model describes an epidemic in a closed population split into
susceptible (S), infected (I) and recovered (R) individuals:

.. math::
    S' = -\\beta S I / N, \\quad I' = \\beta S I / N - \\gamma I, \\quad R' = \\gamma I

The simulator maps an input point x = (beta, gamma) to the size of one
compartment at a fixed time. Partial derivatives with respect to the
inputs are estimated by central finite differences.
"""
import numpy as np
from scipy.integrate import solve_ivp

import blemu.num as gnp
from blemu.errors import ConfigurationError, DimensionMismatchError
from blemu.kernel.utils import check_direction

COMPARTMENTS = {"S": 0, "I": 1, "R": 2}


def sir_model(t, y, beta, gamma):
    """Right-hand side of the SIR equations, y = (S, I, R)."""
    S, I, R = y
    N = S + I + R
    infections = beta * S * I / N
    recoveries = gamma * I
    return [-infections, infections - recoveries, recoveries]


def simulate_sir(
    params,
    t_end=50.0,
    population=1000.0,
    infected0=1.0,
    compartment="R",
    rtol=1e-10,
    atol=1e-8,
):
    """
    Size of a compartment of the SIR model at time t_end.

    Parameters
    ----------
    params : sequence of 2 floats
        Infection rate beta and recovery rate gamma.
    t_end : float, optional
        Evaluation time, default 50.
    population : float, optional
        Total population, default 1000.
    infected0 : float, optional
        Initial number of infected individuals, default 1.
    compartment : {'S', 'I', 'R'}, optional
        Returned compartment, default 'R'.
    rtol, atol : float, optional
        Tolerances of the ODE solver. They must be small compared to
        the finite-difference step used on the output.

    Returns
    -------
    float
    """
    if compartment not in COMPARTMENTS:
        raise ConfigurationError(
            f"compartment must be one of {list(COMPARTMENTS)}, got {compartment!r}"
        )
    params = np.asarray(params, dtype=float).reshape(-1)
    if params.shape[0] != 2:
        raise DimensionMismatchError(
            f"the SIR simulator takes 2 parameters (beta, gamma), got {params.shape[0]}"
        )
    beta, gamma = params
    y0 = [population - infected0, infected0, 0.0]
    sol = solve_ivp(
        sir_model,
        (0.0, t_end),
        y0,
        args=(beta, gamma),
        method="LSODA",
        t_eval=[t_end],
        rtol=rtol,
        atol=atol,
    )
    if not sol.success:
        raise RuntimeError(f"SIR integration failed at params {params}: {sol.message}")
    return float(sol.y[COMPARTMENTS[compartment], -1])


def simulate(x, **kwargs):
    """
    Run `simulate_sir` on every row of x.

    Parameters
    ----------
    x : array_like, shape (n, 2)
    **kwargs
        Passed to `simulate_sir`.

    Returns
    -------
    numpy.ndarray, shape (n,)
    """
    x = np.atleast_2d(np.asarray(x, dtype=float))
    return np.array([simulate_sir(xi, **kwargs) for xi in x])


def finite_difference(f, x, direction, eps=1e-4):
    """
    Central finite-difference estimate of a partial derivative.

    .. math::
        \\partial_k f(x) \\approx (f(x + \\epsilon e_k) - f(x - \\epsilon e_k)) / (2 \\epsilon)

    Parameters
    ----------
    f : callable
        Vectorized function, maps an (n, d) array to an (n,) array.
    x : array_like, shape (n, d)
        Points where the derivative is estimated.
    direction : int
        Coordinate index k.
    eps : float, optional
        Step, default 1e-4.

    Returns
    -------
    numpy.ndarray, shape (n,)
    """
    x = np.atleast_2d(np.asarray(x, dtype=float))
    direction = check_direction(direction, x.shape[1], "direction")
    if not eps > 0:
        raise ConfigurationError(f"eps must be > 0, got {eps}")
    ek = np.zeros(x.shape[1])
    ek[direction] = 1.0
    return gnp.central_difference(lambda h: np.asarray(f(x + h * ek)), 0.0, eps)


def gradient_design(f, x, directions=(0, 1), eps=1e-4):
    """
    Finite-difference derivative blocks for `blemu.core.assemble_design`.

    Returns a dict {direction: (x, df/dx_direction(x))}, with the
    derivatives observed at the same points x for every direction.
    """
    return {k: (x, finite_difference(f, x, k, eps)) for k in directions}

# blemu/core/emulator.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Bayes Linear emulator class.
"""
import warnings
import blemu.num as gnp
from blemu.config import get_config, get_logger
from blemu.errors import ConfigurationError, DimensionMismatchError
from blemu.kernel import check_hyperparameters

from . import covariance
from . import adjust
from . import utils
from .design import Design

# Derivative directions used by the named variants of a 2D emulator.
VARIANTS = {
    "none": (),
    "x1": (0,),
    "x2": (1,),
    "both": (0, 1),
}


class Emulator:
    """Bayes Linear emulator of a deterministic function.

    The prior for f is a constant mean E_f and the squared-exponential
    covariance sigma^2 exp(-|x - x'|^2 / theta^2). Observations are the
    function values and the partial derivatives stored in a `Design`.
    The observation covariance Var_D is built and factorized once, at
    construction; every evaluation then reuses the factor and does not
    modify the emulator.

    Attributes
    ----------
    design : blemu.core.Design
        Observations used by the emulator (restricted to the active
        derivative directions).
    theta : float
        Correlation length.
    sigma : float
        Prior standard deviation.
    mean : float
        Prior mean E_f.
    directions : tuple of int
        Active derivative directions, in block order.

    Public API (methods)
    --------------------
    evaluate
        Adjusted expectation and variance at one point.
    predict
        Adjusted expectations and variances at many points.
    cross_covariance
        Cov(f(xt), D) rows for query points.

    Examples
    --------
    >>> import blemu
    >>> xi = blemu.misc.designs.cartesian_product([0.08, 0.36, 0.64, 0.92], [0.08, 0.36, 0.64, 0.92])
    >>> zi = blemu.misc.simulators.simulate(xi)
    >>> dz1 = blemu.misc.simulators.finite_difference(blemu.misc.simulators.simulate, xi, 0)
    >>> design = blemu.core.assemble_design(xi, zi, {0: (xi, dz1)}, mean=500.0)
    >>> em = blemu.core.Emulator.from_variant(design, "x1", theta=0.2, sigma=170.0)
    >>> expectation, variance = em.evaluate([0.5, 0.5])
    """

    def __init__(
        self, design, theta=None, sigma=None, mean=None, directions=None, nugget=0.0
    ):
        """
        Parameters
        ----------
        design : blemu.core.Design
            Assembled observations.
        theta : float, optional
            Correlation length (> 0). Defaults to the configured fallback (1).
        sigma : float, optional
            Prior standard deviation (> 0). Defaults to the configured fallback (1).
        mean : float, optional
            Prior mean E_f. Defaults to the mean stored in `design`.
        directions : sequence of int, optional
            Derivative blocks of `design` to use. Defaults to all of them.
        nugget : float, optional
            Value added to the diagonal of Var_D (default 0).
        """
        if not isinstance(design, Design):
            raise ConfigurationError(
                f"design must be a blemu.core.Design, got {type(design).__name__}"
            )
        theta, sigma, _ = get_config().default_hyperparameters(theta, sigma)
        self.theta, self.sigma = check_hyperparameters(theta, sigma)
        if nugget < 0:
            raise ConfigurationError(f"nugget must be >= 0, got {nugget}")
        self.nugget = nugget

        if mean is not None and mean != design.mean:
            design = Design(design.xD, design.D, design.n, design.blocks, mean)
        if directions is not None:
            design = design.restrict(directions)
        self.design = design
        self.mean = design.mean
        self.directions = design.directions

        self._Var_D = gnp.readonly(
            covariance.observation_covariance(design, self.theta, self.sigma, nugget)
        )
        self._factor = adjust.factorize(self._Var_D, "Var_D")
        self._residual_weights = gnp.readonly(self._factor.solve(design.D - design.E_D))
        get_logger().debug(
            "Built emulator (variant %s, %d observations, theta=%g, sigma=%g, E_f=%g)",
            self.variant,
            self.size,
            self.theta,
            self.sigma,
            self.mean,
        )

    @classmethod
    def from_variant(cls, design, variant, theta=None, sigma=None, mean=None, nugget=0.0):
        """Build one of the named variants 'none', 'x1', 'x2' or 'both'.

        Raises
        ------
        ConfigurationError
            If the variant name is unknown, or if `design` lacks a
            derivative block the variant needs.
        """
        try:
            directions = VARIANTS[variant]
        except KeyError:
            raise ConfigurationError(
                f"unknown variant '{variant}', expected one of {list(VARIANTS)}"
            ) from None
        return cls(design, theta, sigma, mean, directions, nugget)

    def __repr__(self):
        output = str("<blemu.core.Emulator object> " + hex(id(self)))
        return output

    def __str__(self):
        return (
            f"Bayes Linear emulator:\n"
            f"  Variant: {self.variant}\n"
            f"  Derivative directions: {self.directions}\n"
            f"  Observations: {self.size}\n"
            f"  theta: {self.theta}\n"
            f"  sigma: {self.sigma}\n"
            f"  Prior mean: {self.mean}"
        )

    @property
    def variant(self):
        for name, directions in VARIANTS.items():
            if directions == self.directions:
                return name
        return "custom"

    @property
    def size(self):
        return self._Var_D.shape[0]

    @property
    def Var_D(self):
        return self._Var_D

    @property
    def condition_number(self):
        return self._factor.condition_number

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def cross_covariance(self, xt):
        """Covariance between f at the query points xt and the observations."""
        return covariance.cross_covariance(xt, self.design, self.theta, self.sigma)

    def evaluate(self, x):
        """Adjusted expectation and variance of f at a single point x.

        Parameters
        ----------
        x : array_like, shape (d,)

        Returns
        -------
        expectation, variance : float
        """
        x = gnp.asarray(x)
        if x.ndim != 1 or x.shape[0] != self.design.dim:
            raise DimensionMismatchError(
                f"query point should have shape ({self.design.dim},), got {x.shape}"
            )
        E_adj, Var_adj = self._adjust(x.reshape(1, -1))
        return gnp.to_scalar(E_adj[0]), gnp.to_scalar(Var_adj[0])

    def predict(self, xt, zero_neg_variances=True, batch_size=None):
        """Adjusted expectations and variances at the query points xt.

        Parameters
        ----------
        xt : array_like, shape (m, d)
            Query points.
        zero_neg_variances : bool, optional
            Whether to replace negative adjusted variances with zeros,
            by default True. Negative variances can occur due to
            numerical errors.
        batch_size : int, optional
            Number of query points adjusted together. By default all
            points are processed at once.

        Returns
        -------
        expectation : gnp.array, shape (m,)
        variance : gnp.array, shape (m,)

        Notes
        -----
        Each query point is adjusted independently of the others, so
        the results do not depend on `batch_size` or on the order of
        the points.
        """
        _, _, xt = utils.ensure_shapes_and_type(xt=xt, dim=self.design.dim)
        if batch_size is None or xt.shape[0] <= batch_size:
            E_adj, Var_adj = self._adjust(xt)
        else:
            if batch_size < 1:
                raise ConfigurationError(f"batch_size must be >= 1, got {batch_size}")
            nb_batches = -(-xt.shape[0] // batch_size)
            results = [self._adjust(chunk) for chunk in gnp.array_split(xt, nb_batches)]
            E_adj = gnp.concatenate([r[0] for r in results])
            Var_adj = gnp.concatenate([r[1] for r in results])

        if gnp.any(Var_adj < 0.0):
            warnings.warn(
                "Negative adjusted variances detected. Consider using a nugget.",
                RuntimeWarning,
            )
        if zero_neg_variances:
            Var_adj = gnp.maximum(Var_adj, 0.0)
        return E_adj, Var_adj

    def __call__(self, x):
        return self.evaluate(x)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _adjust(self, xt):
        Cov_fx_D = covariance.cross_covariance(xt, self.design, self.theta, self.sigma)
        return self._factor.adjust(
            self.mean, self.sigma**2, Cov_fx_D, self._residual_weights
        )

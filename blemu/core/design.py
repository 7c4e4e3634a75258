# blemu/core/design.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Design assembly: observation points, observation vector and prior mean.

An observation vector D stacks n function values followed by one
block of partial derivatives per derivative direction. The tag of an
entry (value or derivative along direction k) is given by its
position only, so the block layout travels with the arrays in a
`Design` object.

Functions
---------
assemble_design(xi, zi, derivatives=None, mean=None)
    Concatenate value and derivative observations into a `Design`.
"""
import math
import blemu.num as gnp
from blemu.config import get_config
from blemu.errors import ConfigurationError
from blemu.kernel.utils import check_direction
from .utils import ensure_shapes_and_type, check_block_size

VALUE = "value"


class Design:
    """Aligned observation points, observations and prior means.

    Attributes
    ----------
    xD : gnp.array, shape (N, d)
        Observation points. A point appears once per block in which
        it carries an observation.
    D : gnp.array, shape (N,)
        Observations: n function values, then the derivative blocks.
    E_D : gnp.array, shape (N,)
        Prior mean of D. Equal to `mean` on the value block and to 0 on
        derivative blocks (the derivative of a constant mean).
    n : int
        Size of the value block.
    blocks : tuple of (int, int)
        (direction, size) of each derivative block, in order.
    mean : float
        Prior mean E_f of the function values.

    Parameters
    ----------
    xD, D : array_like
        Concatenated points and observations.
    n : int
        Number of function-value observations at the head of D.
    blocks : sequence of (int, int) or dict, optional
        Derivative blocks following the value block.
    mean : float, optional
        Prior mean of the function values. Defaults to the configured
        fallback (`get_config().mean`, 0 unless updated).
    """

    def __init__(self, xD, D, n, blocks=(), mean=None):
        xD, D, _ = ensure_shapes_and_type(xi=xD, zi=D)
        if xD.shape[0] == 0:
            raise ConfigurationError("a design needs at least one observation")
        if isinstance(blocks, dict):
            blocks = list(blocks.items())

        n = check_block_size(n, "n")
        dim = xD.shape[1]
        checked = []
        for direction, size in blocks:
            direction = check_direction(direction, dim, "direction")
            size = check_block_size(size, f"size of block {direction}")
            if direction in [b[0] for b in checked]:
                raise ConfigurationError(f"derivative direction {direction} given twice")
            checked.append((direction, size))

        total = n + sum(size for _, size in checked)
        if total != xD.shape[0]:
            raise ConfigurationError(
                f"block sizes (n={n}, "
                + ", ".join(f"n_{k}={s}" for k, s in checked)
                + f") add up to {total} but {xD.shape[0]} observation points were given"
            )

        if mean is None:
            mean = get_config().mean
        try:
            mean = float(mean)
        except (TypeError, ValueError):
            raise ConfigurationError(f"prior mean must be a real number, got {mean!r}")
        if not math.isfinite(mean):
            raise ConfigurationError(f"prior mean must be finite, got {mean}")

        E_D = gnp.zeros(total)
        E_D[:n] = mean

        self._xD = gnp.readonly(gnp.copy(xD))
        self._D = gnp.readonly(gnp.copy(D))
        self._E_D = gnp.readonly(E_D)
        self._n = n
        self._blocks = tuple(checked)
        self._mean = mean

    @classmethod
    def from_concatenated(cls, xD, D, n, blocks=(), mean=None):
        """Build a design from already concatenated arrays and block sizes.

        Raises
        ------
        ConfigurationError
            If the block sizes do not add up to the number of rows of
            xD, or if D and xD have different lengths.
        """
        return cls(xD, D, n, blocks, mean)

    def __repr__(self):
        return f"<blemu.core.Design object> {hex(id(self))}"

    def __str__(self):
        layout = ", ".join([f"value: {self._n}"] + [f"d/dx{k + 1}: {s}" for k, s in self._blocks])
        return (
            f"Design:\n"
            f"  Input dimension: {self.dim}\n"
            f"  Observations: {self.size} ({layout})\n"
            f"  Prior mean: {self._mean}"
        )

    def __len__(self):
        return self.size

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def xD(self):
        return self._xD

    @property
    def D(self):
        return self._D

    @property
    def E_D(self):
        return self._E_D

    @property
    def n(self):
        return self._n

    @property
    def blocks(self):
        return self._blocks

    @property
    def mean(self):
        return self._mean

    @property
    def directions(self):
        return tuple(direction for direction, _ in self._blocks)

    @property
    def dim(self):
        return self._xD.shape[1]

    @property
    def size(self):
        return self._xD.shape[0]

    # ------------------------------------------------------------------
    # Block bookkeeping
    # ------------------------------------------------------------------
    def block_slices(self):
        """Return a dict mapping 'value' and each direction to a slice of D."""
        slices = {VALUE: slice(0, self._n)}
        start = self._n
        for direction, size in self._blocks:
            slices[direction] = slice(start, start + size)
            start += size
        return slices

    def block_points(self, block):
        """Points of one block ('value' or a direction)."""
        return self._xD[self.block_slices()[block]]

    def block_observations(self, block):
        """Observations of one block ('value' or a direction)."""
        return self._D[self.block_slices()[block]]

    def restrict(self, directions):
        """Return the design keeping the value block and the given derivative blocks.

        Parameters
        ----------
        directions : sequence of int
            Derivative directions to keep, in the order they should
            appear in the new observation vector.

        Raises
        ------
        ConfigurationError
            If a direction has no block in this design.
        """
        directions = tuple(directions)
        if directions == self.directions:
            return self
        slices = self.block_slices()
        missing = [k for k in directions if k not in slices or k == VALUE]
        if missing:
            raise ConfigurationError(
                f"design has no derivative block for direction(s) {missing}; "
                f"available: {list(self.directions)}"
            )
        order = [slices[VALUE]] + [slices[k] for k in directions]
        xD = gnp.vstack([self._xD[s] for s in order])
        D = gnp.concatenate([self._D[s] for s in order])
        blocks = [(k, slices[k].stop - slices[k].start) for k in directions]
        return Design(xD, D, self._n, blocks, self._mean)


def assemble_design(xi, zi, derivatives=None, mean=None):
    """Concatenate value and derivative observations into a `Design`.

    Parameters
    ----------
    xi : array_like, shape (n, d)
        Points where the function was evaluated.
    zi : array_like, shape (n,)
        Function values at xi.
    derivatives : dict or sequence, optional
        Either a dict {direction: (xk, dzk)} or a sequence of
        (direction, xk, dzk), where dzk holds the partial derivatives
        along `direction` observed at the points xk. The blocks are
        appended in the order given. xk may repeat xi.
    mean : float, optional
        Prior mean E_f of the function values. Defaults to the configured
        fallback (`get_config().mean`).

    Returns
    -------
    Design

    Examples
    --------
    >>> xi = blemu.misc.designs.cartesian_product([0.1, 0.9], [0.1, 0.9])
    >>> zi = f(xi)
    >>> design = assemble_design(xi, zi, {0: (xi, df_dx1(xi))}, mean=500.0)
    >>> design.blocks
    ((0, 4),)
    """
    xi, zi, _ = ensure_shapes_and_type(xi=xi, zi=zi)
    if derivatives is None:
        derivatives = []
    elif isinstance(derivatives, dict):
        derivatives = [(k, xk, dzk) for k, (xk, dzk) in derivatives.items()]

    x_parts = [xi]
    z_parts = [zi]
    blocks = []
    for direction, xk, dzk in derivatives:
        xk, dzk, _ = ensure_shapes_and_type(xi=xk, zi=dzk, dim=xi.shape[1])
        x_parts.append(xk)
        z_parts.append(dzk)
        blocks.append((direction, xk.shape[0]))

    return Design(
        gnp.vstack(x_parts), gnp.concatenate(z_parts), xi.shape[0], blocks, mean
    )

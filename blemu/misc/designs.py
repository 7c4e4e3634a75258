## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2023, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import numpy as np
from blemu.errors import DimensionMismatchError


def cartesian_product(*levels):
    """
    Build the Cartesian product of coordinate levels.

    The first coordinate varies slowest, so that the result reshaped
    to (len(levels[0]), len(levels[1]), ...) follows the "ij" indexing
    of numpy.meshgrid.

    Parameters
    ----------
    *levels : sequences of float
        Coordinate values, one sequence per dimension.

    Returns
    -------
    x : numpy.ndarray, shape (prod(len(l) for l in levels), len(levels))

    Examples
    --------
    >>> cartesian_product([0.08, 0.36, 0.64, 0.92], [0.08, 0.36, 0.64, 0.92]).shape
    (16, 2)
    """
    if len(levels) == 0:
        raise DimensionMismatchError("at least one coordinate is needed")
    levels = [np.asarray(level, dtype=float).reshape(-1) for level in levels]
    Xv = np.meshgrid(*levels, copy=True, sparse=False, indexing="ij")
    return np.stack([X.reshape(-1) for X in Xv], axis=1)


def regulargrid(dim, n, box):
    """
    Build a regular grid in the dim-dimensional hyperrectangle.

    If n is an integer, a grid of size n^dim is built;

    If n is a list of length dim, a grid of size prod(n) is built,
    with n_i points on coordinate i.

    The dim-dimensional hyperrectangle is specified by the argument
    box, which is a 2 x dim array where box_(1, i) and box_(2, i) are
    the lower- and upper-bound of the interval on the i^th coordinate.

    Parameters
    ----------
    dim : int
        Number of dimensions.
    n : int or list
        Number of points per dimension or a list with the number of points per dimension.
    box : list of lists
        List of lists containing the lower and upper bounds of the box.

    Returns
    -------
    x : numpy.ndarray
        Regular grid in the dim-dimensional hyperrectangle.
    """

    # Read argument 'n'
    if not isinstance(n, (list, tuple)):
        n = [n for i in range(dim)]
    if len(n) != dim:
        raise DimensionMismatchError(f"n has {len(n)} entries, expected {dim}")

    # Read argument 'box'
    xmin, xmax = box[0], box[1]
    if len(xmin) != dim or len(xmax) != dim:
        raise DimensionMismatchError(f"box bounds should have {dim} entries")

    levels = [np.linspace(xmin[i], xmax[i], n[i]) for i in range(dim)]
    return cartesian_product(*levels)

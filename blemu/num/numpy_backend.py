# blemu/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for blemu.

This module defines the NumPy implementation of the blemu.num API.
"""

import builtins
from typing import Any, Union
from blemu.config import get_config, get_logger

Scalar = Union[int, float]
ArrayLike = Any

_config = get_config()
_logger = get_logger()
_logger.debug("Using backend: %s", _config.backend)

_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "leading minor",
    "cholesky",
    "decomposition",
    "factorization",
    "ill-conditioned",
    "linalg",
    "lapack",
    "array must not contain infs or nans",
)


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy.typing import NDArray

_np_dtype = numpy.dtype(_config.dtype).type
_config.dtype_resolved = _np_dtype

ndarray = NDArray[numpy.floating]
from numpy import (
    copy,
    reshape,
    where,
    any,
    isscalar,
    isnan,
    isinf,
    isfinite,
    isclose,
    allclose,
    unique,
    hstack,
    vstack,
    stack,
    block,
    concatenate,
    expand_dims,
    empty,
    zeros_like,
    ones_like,
    zeros,
    ones,
    full,
    eye,
    diag,
    arange,
    linspace,
    meshgrid,
    abs,
    sqrt,
    exp,
    log,
    sum,
    prod,
    mean,
    min,
    max,
    argmin,
    argmax,
    minimum,
    maximum,
    einsum,
    matmul,
    all,
    array_split,
)
from numpy.linalg import cond, eigvalsh
from numpy import pi, inf, nan
from numpy import finfo, float64
from scipy.linalg import cho_factor, cho_solve

# ..................................................

eps = finfo(_np_dtype).eps

# ..................................................

def is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, numpy.linalg.LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)

# ..................................................

def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.integer) or numpy.issubdtype(
        out.dtype, numpy.floating
    ):
        return out.astype(_np_dtype, copy=False)
    return out

def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(_np_dtype, copy=False)
        if numpy.issubdtype(x.dtype, numpy.integer):
            return x.astype(_np_dtype)
        return x
    elif isinstance(x, (int, float)):
        return numpy.array([x], dtype=_np_dtype)
    else:
        out = numpy.asarray(x)
        if numpy.issubdtype(out.dtype, numpy.floating) or numpy.issubdtype(
            out.dtype, numpy.integer
        ):
            return out.astype(_np_dtype, copy=False)
        return out

def readonly(x):
    """Return a read-only view of x."""
    view = numpy.asarray(x).view()
    view.flags.writeable = False
    return view

def to_scalar(x):
    return numpy.asarray(x).item()

def pairwise_differences(x, y):
    """Return the (n, m, d) array of differences x_i - y_j."""
    return x[:, None, :] - y[None, :, :]

# ..................................................

def cholesky_factor(A):
    return cho_factor(A, lower=True, check_finite=True)

# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)

def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _np_rng = numpy.random.default_rng(seed=seed)

def rand(*shape: int) -> ArrayLike:
    return _np_rng.random(shape).astype(_np_dtype, copy=False)

def randn(*shape: int) -> ArrayLike:
    return _np_rng.normal(loc=0, scale=1, size=shape).astype(_np_dtype, copy=False)

def uniform(low, high, size) -> ArrayLike:
    return _np_rng.uniform(low, high, size=size).astype(_np_dtype, copy=False)

# blemu/num/shared.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Backend-independent helpers for blemu.num."""

from typing import Any, Callable, Union

from blemu.config import get_config

Scalar = Union[int, float]
ArrayLike = Any


def get_dtype():
    return get_config().dtype_resolved


def central_difference(
    f: Callable[[Scalar], ArrayLike], x: Scalar, h: Scalar
) -> ArrayLike:
    """
    2-point central difference derivative of f w.r.t. scalar x,
    (f(x + h) - f(x - h)) / (2h). The error is O(h^2).
    """
    return (f(x + h) - f(x - h)) / (2.0 * h)


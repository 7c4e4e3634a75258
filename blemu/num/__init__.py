# blemu/num/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Numerical backend dispatcher for blemu."""

from blemu.config import get_backend

from . import shared as _shared

_blemu_backend_ = get_backend()

if _blemu_backend_ == "numpy":
    from . import numpy_backend as _backend
else:
    raise RuntimeError(f"Unsupported backend '{_blemu_backend_}', only 'numpy' is available.")

# Re-export backend API.
for _name in dir(_backend):
    if _name.startswith("__"):
        continue
    globals()[_name] = getattr(_backend, _name)

# Re-export backend-independent helpers from shared.py.
get_dtype = _shared.get_dtype
central_difference = _shared.central_difference

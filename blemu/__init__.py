# blemu/__init__.py

from . import config
from . import errors
from . import num
from . import kernel
from . import core
from . import misc
from .core import Design, Emulator, assemble_design
from .errors import ConfigurationError, SingularMatrixError, DimensionMismatchError

__all__ = [
    "num",
    "kernel",
    "core",
    "misc",
    "Design",
    "Emulator",
    "assemble_design",
    "ConfigurationError",
    "SingularMatrixError",
    "DimensionMismatchError",
    "__version__",
]

__version__ = config.__version__

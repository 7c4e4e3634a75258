# blemu/config.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"


class _BLEMUConfig:
    def __init__(self):
        self.version = __version__
        self.backend = "numpy"
        self.dtype = float
        self.seed = 1234
        # fallback hyperparameters, used when an emulator is built with None
        self.theta = 1.0
        self.sigma = 1.0
        self.mean = 0.0
        self.symmetry_rtol = 1e-10
        self.condition_warning = 1e12
        # logger lives in config
        self.logger = logging.getLogger("blemu")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"BLEMUConfig("
            f"version={self.version}, "
            f"backend={self.backend}, "
            f"dtype={self.dtype}, "
            f"seed={self.seed}, "
            f"theta={self.theta}, "
            f"sigma={self.sigma}, "
            f"mean={self.mean})"
        )

    def __repr__(self):
        return (
            f"<BLEMUConfig "
            f"version={self.version!r}, "
            f"backend={self.backend!r}, "
            f"dtype={self.dtype!r}, "
            f"seed={self.seed!r}, "
            f"theta={self.theta!r}, "
            f"sigma={self.sigma!r}, "
            f"mean={self.mean!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"Unknown configuration entry '{k}'")
            setattr(self, k, v)
        return self

    def default_hyperparameters(self, theta=None, sigma=None, mean=None):
        """Fill missing hyperparameters with the configured fallbacks."""
        return (
            self.theta if theta is None else theta,
            self.sigma if sigma is None else sigma,
            self.mean if mean is None else mean,
        )


_config = _BLEMUConfig()


def get_config():
    return _config


def get_backend():
    return _config.backend


def set_dtype(dtype):
    _config.dtype = dtype


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)

# gpreparam/config.py
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


class _GPReparamConfig:
    def __init__(self):
        self.version = __version__
        self.seed = 1234
        # absolute diagonal term added to prior Gram matrices
        self.nugget = 1e-10
        # relative jitter for the single Cholesky repair attempt
        self.cholesky_jitter = 1e-8
        # relative tolerances on triangular pivots
        self.singular_tol = 1e-12
        self.rank_tol = 1e-10
        self.caches = {}
        # logger lives in config
        self.logger = logging.getLogger("gpreparam")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"GPReparamConfig("
            f"version={self.version}, "
            f"nugget={self.nugget}, "
            f"cholesky_jitter={self.cholesky_jitter}, "
            f"singular_tol={self.singular_tol}, "
            f"rank_tol={self.rank_tol}, "
            f"seed={self.seed}, "
            f"caches={list(self.caches.keys())})"
        )

    def __repr__(self):
        return (
            f"<GPReparamConfig "
            f"version={self.version!r}, "
            f"nugget={self.nugget!r}, "
            f"cholesky_jitter={self.cholesky_jitter!r}, "
            f"seed={self.seed!r}, "
            f"caches={list(self.caches.keys())}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"Unknown configuration entry {k!r}")
            setattr(self, k, v)
        return self

    def clear_caches(self, name=None):
        if name is None:
            self.caches.clear()
        else:
            self.caches.pop(name, None)


_config = _GPReparamConfig()


def get_config():
    return _config


def clear_caches(name=None):
    _config.clear_caches(name)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)

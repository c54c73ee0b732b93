# gpreparam/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Core components of the gpreparam package.

This subpackage contains the numerical routines for regression
reparameterization and Gaussian process inference: dense linear-algebra
primitives, a stabilized Cholesky factorizer, the scaled thin QR
reparameterization, and the Gaussian process engine.

Public API
----------
GaussianProcess : class
    Gaussian process model façade over `gaussian_process`.
QRReparameterization : class
    Scaled thin QR reparameterization of a regression.
NonCenteredLatent : class
    Non-centered latent transform f = μ + L η.
"""

from .errors import (
    DimensionMismatch,
    ReparameterizationError,
    RankDeficient,
    SingularMatrix,
    NotPositiveDefinite,
)
from .qr import QRReparameterization
from .gaussian_process import NonCenteredLatent
from .model import GaussianProcess

__all__ = [
    "GaussianProcess",
    "QRReparameterization",
    "NonCenteredLatent",
    "DimensionMismatch",
    "ReparameterizationError",
    "RankDeficient",
    "SingularMatrix",
    "NotPositiveDefinite",
]

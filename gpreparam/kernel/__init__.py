# gpreparam/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance functions for Gaussian process priors.

Modules
-------
base
    Kernel interface, sum and product composition, Gram matrix helpers.
exponentiated_quadratic
    Exponentiated quadratic (squared exponential) kernel.
white_noise
    Measurement-noise kernel.

Public API
-----------
- Interface and composition:
    Kernel, SumKernel, ProductKernel
- Kernels:
    ExponentiatedQuadratic, WhiteNoise
- Functional forms:
    exponentiated_quadratic_kernel, exponentiated_quadratic_covariance,
    white_noise_covariance
- Helpers:
    gram_matrix, cross_covariance
"""

from .base import (
    Kernel,
    SumKernel,
    ProductKernel,
    gram_matrix,
    cross_covariance,
    kernel_cache_key,
)
from .exponentiated_quadratic import (
    ExponentiatedQuadratic,
    exponentiated_quadratic_kernel,
    exponentiated_quadratic_covariance,
)
from .white_noise import WhiteNoise, white_noise_covariance

__all__ = [
    "Kernel",
    "SumKernel",
    "ProductKernel",
    "ExponentiatedQuadratic",
    "WhiteNoise",
    "exponentiated_quadratic_kernel",
    "exponentiated_quadratic_covariance",
    "white_noise_covariance",
    "gram_matrix",
    "cross_covariance",
    "kernel_cache_key",
]

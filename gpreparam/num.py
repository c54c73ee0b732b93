"""num.py — Numerical namespace for gpreparam.

This module gathers the NumPy/SciPy operations used across gpreparam
under a single name, so that the rest of the package reads

    import gpreparam.num as gnp

All arrays are float64 NumPy arrays. Random sampling helpers are
provided for examples and tests; the numerical core itself never draws
random numbers, it consumes the variates it is given.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupélec
License: GPLv3 (see LICENSE)

"""

from typing import Any, Optional

from gpreparam.config import get_config, get_logger

_config = get_config()
_logger = get_logger()
_logger.debug("Using backend: numpy")

ArrayLike = Any

# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy.typing import NDArray

_np_dtype = numpy.float64

ndarray = NDArray[numpy.floating]
from numpy import (
    copy,
    where,
    any,
    all,
    isnan,
    isfinite,
    allclose,
    vstack,
    diag,
    diagonal,
    triu,
    triu_indices,
    arange,
    abs,
    sign,
    sqrt,
    exp,
    log,
    sum,
    mean,
    min,
    max,
    maximum,
    matmul,
    outer,
    pi,
    inf,
    finfo,
    float64,
)
from numpy.linalg import LinAlgError, norm, qr, cholesky
from scipy.linalg import solve_triangular
from scipy.spatial.distance import cdist
from scipy.stats import norm as normal

eps = finfo(_np_dtype).eps

# ..................................................


def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.floating) or numpy.issubdtype(
        out.dtype, numpy.integer
    ):
        return out.astype(_np_dtype, copy=False)
    return out


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    out = numpy.asarray(x)
    if numpy.issubdtype(out.dtype, numpy.floating) or numpy.issubdtype(
        out.dtype, numpy.integer
    ):
        return out.astype(_np_dtype, copy=False)
    return out


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)


def empty(shape, dtype=None):
    return numpy.empty(shape, dtype=_np_dtype if dtype is None else dtype)


def linspace(start, stop, num=50, endpoint=True):
    return numpy.linspace(start, stop, num=num, endpoint=endpoint, dtype=_np_dtype)


def to_scalar(x):
    return numpy.asarray(x).item()


def as_covariates(x):
    """Return covariates as an (n, d) array; 1-D inputs become (n, 1)."""
    x = asarray(x)
    if x.ndim == 0:
        return x.reshape(1, 1)
    if x.ndim == 1:
        return x.reshape(-1, 1)
    return x


def sq_distance(x, y):
    """Squared Euclidean distances between the rows of x and y."""
    return cdist(as_covariates(x), as_covariates(y), "sqeuclidean")


def sq_distance_elementwise(x, y):
    x = as_covariates(x)
    y = as_covariates(y)
    return sum((x - y) ** 2, axis=1)


def readonly(x):
    x = numpy.asarray(x)
    x.setflags(write=False)
    return x


# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)


def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _np_rng = numpy.random.default_rng(seed=seed)


def rand(*shape: int) -> ArrayLike:
    return _np_rng.random(shape, dtype=_np_dtype)


def randn(*shape: int) -> ArrayLike:
    return _np_rng.normal(loc=0, scale=1, size=shape).astype(_np_dtype, copy=False)


def poisson(lam: ArrayLike, size: Optional[int] = None) -> ArrayLike:
    return _np_rng.poisson(lam=lam, size=size)

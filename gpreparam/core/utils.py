# gpreparam/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `gpreparam.core` modules.

This file hosts:
- Shape/type validation & conversion helpers for (xi, yi, xt)
- Mean vector evaluation for Gaussian process routines
- Hyperparameter context for error reporting
"""
import gpreparam.num as gnp

from .errors import DimensionMismatch


def ensure_shapes_and_type(*, xi=None, yi=None, xt=None):
    """Validate and convert covariates and responses.

    Parameters
    ----------
    xi : array_like, optional
        Observed covariates, (n, d) or (n,).
    yi : array_like, optional
        Observed responses, (n,) or (n, 1).
    xt : array_like, optional
        Predictive covariates, (m, d) or (m,).

    Returns
    -------
    tuple
        (xi, yi, xt) as float64 arrays, covariates as 2D arrays and
        responses as a 1D array.

    Raises
    ------
    DimensionMismatch
        If yi is not a vector, if xi and yi have different lengths, or if
        xi and xt have a different number of columns.
    """
    if xi is not None:
        xi = gnp.as_covariates(xi)
        if xi.ndim != 2:
            raise DimensionMismatch("xi should be a 2D array", (xi.shape,))

    if yi is not None:
        yi = gnp.asarray(yi)
        if yi.ndim == 2 and yi.shape[1] == 1:
            yi = yi.reshape(-1)  # (n,1) -> (n,)
        if yi.ndim != 1:
            raise DimensionMismatch("yi should be 1D or a 2D column array", (yi.shape,))

    if xt is not None:
        xt = gnp.as_covariates(xt)
        if xt.ndim != 2:
            raise DimensionMismatch("xt should be a 2D array", (xt.shape,))

    if xi is not None and yi is not None and xi.shape[0] != yi.shape[0]:
        raise DimensionMismatch("xi and yi must have the same number of rows", (xi.shape, yi.shape))
    if xi is not None and xt is not None and xt.shape[0] > 0 and xi.shape[1] != xt.shape[1]:
        raise DimensionMismatch("xi and xt must have the same number of columns", (xi.shape, xt.shape))

    return xi, yi, xt


def mean_vector(mean, x):
    """Evaluate a prior mean at covariates x.

    ``mean`` may be None (zero mean), a scalar, an (n,) array, or a
    callable returning one of those when called as ``mean(x)``.
    """
    n = x.shape[0]
    if mean is None:
        return gnp.zeros((n,))
    m = gnp.asarray(mean(x) if callable(mean) else mean)
    if m.ndim == 0 or m.size == 1:
        return gnp.to_scalar(m) * gnp.ones((n,))
    m = m.reshape(-1)
    if m.shape[0] != n:
        raise DimensionMismatch("mean has incompatible length", (m.shape, x.shape))
    return m


def hyperparameter_context(covparam, **extra):
    """Diagnostic context attached to numerical errors."""
    context = {"covparam": tuple(float(p) for p in gnp.asarray(covparam).reshape(-1))}
    context.update(extra)
    return context

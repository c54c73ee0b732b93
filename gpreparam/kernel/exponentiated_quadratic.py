# gpreparam/kernel/exponentiated_quadratic.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpreparam.num as gnp

from .base import Kernel


def exponentiated_quadratic_kernel(h):
    """Exponentiated quadratic kernel.

    .. math::
        k(h) = \\exp(-h^2)

    Parameters
    ----------
    h : gnp.array, shape (n,)
        Scaled distances between points.

    Returns
    -------
    gnp.array, shape (n,)
        Kernel values.
    """
    return gnp.exp(-(h**2))


def exponentiated_quadratic_covariance(x, y, param, pairwise=False):
    """Exponentiated quadratic covariance.

    .. math::
        K_{ij} = \\alpha^2 \\exp(-\\|x_i - y_j\\|^2 / \\rho^2)

    Parameters
    ----------
    x : gnp.array, shape (nx, d)
    y : gnp.array, shape (ny, d), or None
        None means y := x.
    param : gnp.array, shape (2,)
        [alpha, rho]: marginal scale and length scale.
    pairwise : bool
        If True, return elementwise k(x_i, y_i); else (nx, ny).

    Returns
    -------
    gnp.array
        (nx, ny) matrix or (nx,) vector if pairwise.
    """
    alpha, rho = param[0], param[1]
    if rho <= 0.0:
        raise ValueError(f"length scale rho must be positive, got {rho}")
    alpha2 = alpha**2
    if pairwise:
        if y is None:
            return alpha2 * gnp.ones((x.shape[0],))
        h2 = gnp.sq_distance_elementwise(x, y)
    else:
        h2 = gnp.sq_distance(x, x if y is None else y)
    return alpha2 * exponentiated_quadratic_kernel(gnp.sqrt(h2) / rho)


class ExponentiatedQuadratic(Kernel):
    """k(x1, x2) = α² exp(-|x1 - x2|² / ρ²), hyperparameters [α, ρ]."""

    n_params = 2
    param_names = ("alpha", "rho")

    def _covariance(self, x, y, params, pairwise):
        return exponentiated_quadratic_covariance(x, y, params, pairwise)

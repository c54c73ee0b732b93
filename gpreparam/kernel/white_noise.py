# gpreparam/kernel/white_noise.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpreparam.num as gnp

from .base import Kernel


def white_noise_covariance(x, y, param, pairwise=False):
    """Measurement-noise covariance σ² [x1 == x2].

    On a single covariate set (y is None) every point is its own
    measurement and the result is σ² I, duplicated covariates included.
    Between two distinct sets, points are matched by exact equality.

    Parameters
    ----------
    x : gnp.array, shape (nx, d)
    y : gnp.array, shape (ny, d), or None
    param : gnp.array, shape (1,)
        [sigma]: noise standard deviation.
    pairwise : bool

    Returns
    -------
    gnp.array
        (nx, ny) matrix or (nx,) vector if pairwise.
    """
    sigma2 = param[0] ** 2
    if pairwise:
        if y is None:
            return sigma2 * gnp.ones((x.shape[0],))
        return sigma2 * (gnp.sq_distance_elementwise(x, y) == 0.0)
    if y is None:
        return sigma2 * gnp.eye(x.shape[0])
    return sigma2 * (gnp.sq_distance(x, y) == 0.0)


class WhiteNoise(Kernel):
    """Independent measurement noise, hyperparameter [σ]."""

    n_params = 1
    param_names = ("sigma",)

    def _covariance(self, x, y, params, pairwise):
        return white_noise_covariance(x, y, params, pairwise)

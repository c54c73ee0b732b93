# gpreparam/core/gaussian_process.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian process prior simulation, conjugate posterior and
non-centered latent construction.

This module provides:
- Prior covariance and its Cholesky factor on a covariate set.
- Prior simulation f = m + L z from caller-supplied standard normal
  variates z, optionally followed by a caller-supplied observation model.
- The analytic posterior of f at predictive covariates given Gaussian
  observations (conjugate case), computed with triangular solves
  against the Cholesky factor of the observed block.
- The non-centered parameterization f = μ + L η used with non-Gaussian
  observation models, and the log-density callback handed to an
  external sampler.

The engine never draws random numbers and never hard-codes an
observation model: both are supplied by the caller.
"""
import warnings

import gpreparam.num as gnp
from gpreparam.config import get_config
from gpreparam.kernel.base import gram_matrix

from . import utils
from .cholesky import cached_cholesky, cholesky, cholesky_solve
from .errors import DimensionMismatch
from .linalg import add_diagonal_jitter, check_square, multiply, triangular_solve


def prior_covariance(kernel, xs, covparam, nugget=None):
    """Gram matrix of the prior over xs, plus a nugget on the diagonal.

    Parameters
    ----------
    kernel : Kernel or callable
    xs : array_like, shape (n, d) or (n,)
    covparam : array_like
        Kernel hyperparameters.
    nugget : float, optional
        Diagonal term, defaults to ``config.nugget``.

    Returns
    -------
    K : array_like, shape (n, n)
    """
    nugget = get_config().nugget if nugget is None else nugget
    return add_diagonal_jitter(gram_matrix(kernel, xs, covparam), nugget)


def prior_factor(kernel, xs, covparam, nugget=None, cache=False):
    """Cholesky factor of `prior_covariance`.

    With ``cache=True`` the process-wide factorization cache is used (a
    `FactorizationCache` instance may also be passed).
    """
    if cache:
        return cached_cholesky(
            kernel, xs, covparam, nugget=nugget, cache=None if cache is True else cache
        )
    K = prior_covariance(kernel, xs, covparam, nugget)
    return cholesky(K, context=utils.hyperparameter_context(covparam))


def sample_prior(
    kernel,
    xs,
    covparam,
    z,
    mean=None,
    nugget=None,
    observation_model=None,
    cache=False,
):
    """Draw latent function values from the GP prior.

    Parameters
    ----------
    kernel : Kernel or callable
    xs : array_like, shape (n, d) or (n,)
        Covariate set.
    covparam : array_like
        Kernel hyperparameters.
    z : array_like, shape (n,) or (n, nb_draws)
        Independent standard normal variates.
    mean : None, scalar, array_like or callable, optional
        Prior mean (zero by default).
    nugget : float, optional
        Diagonal term added before factoring.
    observation_model : callable, optional
        Maps f to simulated observations, e.g. ``lambda f: f + sigma * e``
        or a Poisson draw with rate ``exp(f)``.
    cache : bool or FactorizationCache, optional

    Returns
    -------
    f : array_like, same shape as z
        Latent function draws, f = m + L z.
    y : array_like
        Simulated observations, only when ``observation_model`` is given.
    """
    _, _, xs = utils.ensure_shapes_and_type(xt=xs)
    n = xs.shape[0]
    z = gnp.asarray(z)
    if z.ndim not in (1, 2) or z.shape[0] != n:
        raise DimensionMismatch("z must have one row per covariate", (xs.shape, z.shape))

    L = prior_factor(kernel, xs, covparam, nugget=nugget, cache=cache).L
    f = multiply(L, z)
    m = utils.mean_vector(mean, xs)
    f = f + (m if z.ndim == 1 else m.reshape(-1, 1))

    if observation_model is None:
        return f
    return f, observation_model(f)


def posterior(
    kernel,
    xi,
    yi,
    xt,
    covparam,
    sigma=0.0,
    mean=None,
    return_type=1,
    predict_noisy=False,
    zero_neg_variances=True,
):
    """Posterior of the latent function at xt given observations (xi, yi).

    The observation model is y = f(x) + e with e ~ N(0, sigma²), that is,
    the observed block uses the kernel k'(x1, x2) = k(x1, x2) + sigma²
    [x1 == x2].

    Parameters
    ----------
    kernel : Kernel or callable
    xi : array_like, shape (ni, d) or (ni,)
        Observed covariates.
    yi : array_like, shape (ni,) or (ni, 1)
        Observed responses.
    xt : array_like, shape (nt, d) or (nt,)
        Predictive covariates.
    covparam : array_like
        Kernel hyperparameters.
    sigma : float, optional
        Measurement noise standard deviation (default 0).
    mean : None, scalar or callable, optional
        Prior mean; a callable is evaluated at xi and xt. Array means
        are rejected, since they cannot be evaluated at both sets.
    return_type : int, optional
        Indicator for posterior variance:
          -1: return None,
           0: return marginal variances,
           1: return full covariance (default).
    predict_noisy : bool, optional
        If True, add sigma² to the predictive variances (posterior of new
        observations rather than of the latent function).
    zero_neg_variances : bool, optional
        Replace negative variances (numerical errors) with zeros.

    Returns
    -------
    zt_posterior_mean : array_like, shape (nt,)
    zt_posterior_variance : array_like
        (nt, nt) covariance, (nt,) variances, or None.

    Notes
    -----
    With Σ the Gram matrix over xi ∪ xt, partitioned in observed (o) and
    predictive (p) blocks, and L the Cholesky factor of Σ_oo + sigma² I:

        mean = m_p + Σ_po (Σ_oo + sigma² I)⁻¹ (y - m_o)
        cov  = Σ_pp - Wᵀ W,   W = L⁻¹ Σ_op

    No explicit inverse is formed.
    """
    xi, yi, xt = utils.ensure_shapes_and_type(xi=xi, yi=yi, xt=xt)
    if return_type not in (-1, 0, 1):
        raise ValueError("return_type must be in {-1, 0, 1}")
    if mean is not None and not callable(mean) and gnp.asarray(mean).size != 1:
        raise ValueError(
            "posterior needs a scalar or callable mean, evaluated at both xi and xt"
        )
    ni, nt = xi.shape[0], xt.shape[0]
    noise_variance = float(sigma) ** 2

    if nt == 0:
        empty_var = gnp.zeros((0, 0)) if return_type == 1 else gnp.zeros((0,))
        return gnp.zeros((0,)), (None if return_type == -1 else empty_var)

    mt = utils.mean_vector(mean, xt)
    if ni == 0:
        K = gram_matrix(kernel, xt, covparam)
        return mt, _posterior_variance(K, None, noise_variance, return_type, predict_noisy, zero_neg_variances)

    # Joint Gram matrix, partitioned into observed / predictive blocks.
    K = gram_matrix(kernel, gnp.vstack((xi, xt)), covparam)
    K_oo = K[:ni, :ni] + noise_variance * gnp.eye(ni)
    K_op = K[:ni, ni:]
    K_pp = K[ni:, ni:]

    factor = cholesky(K_oo, context=utils.hyperparameter_context(covparam, sigma=float(sigma)))
    L = factor.L

    yi_centered = yi - utils.mean_vector(mean, xi)
    Kinv_yi = cholesky_solve(L, yi_centered)
    zt_posterior_mean = multiply(K_op.T, Kinv_yi) + mt

    W = triangular_solve(L, K_op, lower=True)
    zt_posterior_variance = _posterior_variance(
        K_pp, W, noise_variance, return_type, predict_noisy, zero_neg_variances
    )
    return zt_posterior_mean, zt_posterior_variance


def _posterior_variance(K_pp, W, noise_variance, return_type, predict_noisy, zero_neg_variances):
    """Σ_pp - Wᵀ W, as full covariance or marginal variances."""
    if return_type == -1:
        return None
    nt = K_pp.shape[0]
    noise = noise_variance if predict_noisy else 0.0
    if return_type == 0:
        var = gnp.diagonal(K_pp).copy()
        if W is not None:
            var = var - gnp.sum(W * W, axis=0)
        var = var + noise
        if gnp.any(var < 0.0):
            warnings.warn(
                "Negative variances detected. Consider using jitter.",
                RuntimeWarning,
            )
            if zero_neg_variances:
                var = gnp.maximum(var, 0.0)
        return var

    cov = gnp.copy(K_pp) if W is None else K_pp - gnp.matmul(W.T, W)
    cov = 0.5 * (cov + cov.T) + noise * gnp.eye(nt)
    d = gnp.diagonal(cov)
    if gnp.any(d < 0.0):
        warnings.warn(
            "Negative variances detected. Consider using jitter.",
            RuntimeWarning,
        )
        if zero_neg_variances:
            cov[gnp.arange(nt), gnp.arange(nt)] = gnp.maximum(d, 0.0)
    return cov


# --------------------------------------------------------------------------
# Non-centered parameterization
# --------------------------------------------------------------------------
class NonCenteredLatent:
    """Latent Gaussian vector f = μ + L η with η ~ N(0, I).

    An external sampler explores η, whose prior is isotropic whatever the
    conditioning of Σ = L Lᵀ; `forward` maps each draw of η to the latent
    function values and `inverse` maps latent values back.

    Parameters
    ----------
    L : array_like, shape (n, n)
        Lower Cholesky factor of the prior covariance.
    mean : array_like, shape (n,) or scalar, optional
        Prior mean μ (zero by default).
    """

    def __init__(self, L, mean=None):
        L = check_square(L, "Cholesky factor")
        self.L = gnp.readonly(gnp.array(L))
        n = L.shape[0]
        if mean is None:
            mu = gnp.zeros((n,))
        else:
            mu = gnp.asarray(mean)
            mu = mu * gnp.ones((n,)) if mu.ndim == 0 else gnp.array(mu).reshape(-1)
            if mu.shape[0] != n:
                raise DimensionMismatch("mean has incompatible length", (mu.shape, L.shape))
        self.mean = gnp.readonly(mu)

    def __repr__(self):
        return f"<gpreparam.NonCenteredLatent size={self.size}> " + hex(id(self))

    @property
    def size(self):
        return self.L.shape[0]

    def _check(self, v, name):
        v = gnp.asarray(v)
        if v.ndim not in (1, 2) or v.shape[-1] != self.size:
            raise DimensionMismatch(
                f"{name} must have shape ({self.size},) or (k, {self.size})", (v.shape,)
            )
        return v

    def forward(self, eta):
        """f = μ + L η, for one draw (n,) or a batch of draws (k, n)."""
        eta = self._check(eta, "eta")
        if eta.ndim == 1:
            return self.mean + multiply(self.L, eta)
        return self.mean + multiply(eta, self.L.T)

    def inverse(self, f):
        """η = L⁻¹ (f - μ), for one vector (n,) or a batch (k, n)."""
        f = self._check(f, "f")
        if f.ndim == 1:
            return triangular_solve(self.L, f - self.mean, lower=True)
        return triangular_solve(self.L, (f - self.mean).T, lower=True).T

    def log_prior(self, eta):
        """Standard normal log density of η (summed over components)."""
        eta = self._check(eta, "eta")
        return gnp.sum(gnp.normal.logpdf(eta), axis=-1)

    def log_density(self, log_likelihood):
        """Log density of η for an external sampler.

        Parameters
        ----------
        log_likelihood : callable
            ``log_likelihood(f)`` returns the log likelihood of the data
            given latent values f (Poisson with log link, Bernoulli, ...).

        Returns
        -------
        callable
            ``eta -> log_likelihood(μ + L η) + log N(η; 0, I)``.
        """

        def log_density(eta):
            return log_likelihood(self.forward(eta)) + self.log_prior(eta)

        return log_density


def non_centered_latent(kernel, xs, covparam, mean=None, nugget=None, cache=False):
    """Build the non-centered parameterization of the GP prior on xs."""
    _, _, xs = utils.ensure_shapes_and_type(xt=xs)
    L = prior_factor(kernel, xs, covparam, nugget=nugget, cache=cache).L
    return NonCenteredLatent(L, utils.mean_vector(mean, xs))

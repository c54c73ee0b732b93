# gpreparam/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process model class.
"""
import gpreparam.num as gnp

from . import gaussian_process
from .cholesky import FactorizationCache


class GaussianProcess:
    """Gaussian Process (GP) Model Class.

    This class stores a covariance function with its hyperparameters and
    delegates to `gpreparam.core.gaussian_process` for prior simulation,
    analytic posterior prediction and the non-centered latent transform.

    Attributes
    ----------
    kernel : Kernel or callable
        Covariance function, called as

        K = self.kernel(x, y, self.covparam, pairwise),

        where x is (n x d) and y is either an (m x d) array of points, or
        None, meaning y := x.

    covparam : array_like
        Hyperparameters of the covariance function, given as a
        one-dimensional array ([alpha, rho] for the exponentiated
        quadratic kernel).

    sigma : float
        Standard deviation of the Gaussian measurement noise used by
        `posterior` and `predict` (0 for interpolation).

    mean : None, scalar, array_like or callable
        Prior mean. A callable is called as ``mean(x)`` and returns an
        (n,) vector. An (n,) array is only valid for the prior methods
        on a fixed covariate set; `posterior` and `predict` need a
        scalar or a callable.

    nugget : float or None
        Diagonal term added to prior Gram matrices (None means
        ``config.nugget``).

    cache : FactorizationCache or None
        When set, prior factorizations are memoized. Pass
        ``use_cache=True`` to get a private cache.

    Public API (methods)
    --------------------
    gram
        Gram matrix over a covariate set.
    prior_covariance
        Gram matrix plus nugget.
    cholesky
        Cholesky factor of the prior covariance.
    sample_prior
        Prior draws f = m + L z and optional simulated observations.
    posterior
        Conjugate posterior mean and covariance at predictive points.
    predict
        Posterior mean and marginal variances.
    non_centered
        Non-centered latent transform f = μ + L η.

    Examples
    --------
    >>> import gpreparam as gr
    >>> import gpreparam.num as gnp
    >>> gp = gr.GaussianProcess(gr.kernel.ExponentiatedQuadratic(), [1.0, 0.5], sigma=0.1)
    >>> xi = gnp.array([0.0, 1.0, 2.0, 3.0])
    >>> yi = gnp.array([0.0, 0.8, 0.9, 0.1])
    >>> xt = gnp.linspace(0.0, 3.0, 7)
    >>> mean, var = gp.predict(xi, yi, xt)
    """

    def __init__(self, kernel, covparam, sigma=0.0, mean=None, nugget=None, use_cache=False):
        if not callable(kernel):
            raise TypeError("kernel must be a Kernel object or a covariance callable")
        if sigma < 0.0:
            raise ValueError(f"sigma must be nonnegative, got {sigma}")
        self.kernel = kernel
        self.covparam = gnp.asarray(covparam).reshape(-1)
        self.sigma = float(sigma)
        self.mean = mean
        self.nugget = nugget
        self.cache = FactorizationCache() if use_cache else None

    def __repr__(self):
        output = str("<gpreparam.core.GaussianProcess object> " + hex(id(self)))
        return output

    def __str__(self):
        if self.mean is None:
            mean_desc = "Zero Mean"
        else:
            mean_desc = getattr(self.mean, "__name__", str(self.mean))
        cov_desc = getattr(self.kernel, "__name__", repr(self.kernel))
        return (
            f"GP Model:\n"
            f"  Mean Function: {mean_desc}\n"
            f"  Covariance Function: {cov_desc}\n"
            f"  Covariance Parameters: {self.covparam}\n"
            f"  Noise Standard Deviation: {self.sigma}"
        )

    def _cache_arg(self):
        return self.cache if self.cache is not None else False

    # ------------------------------------------------------------------
    # Prior (delegating to gpreparam.core.gaussian_process)
    # ------------------------------------------------------------------
    def gram(self, xs):
        """Gram matrix of the kernel over xs."""
        return gaussian_process.gram_matrix(self.kernel, xs, self.covparam)

    def prior_covariance(self, xs):
        """Gram matrix over xs plus the nugget."""
        return gaussian_process.prior_covariance(self.kernel, xs, self.covparam, self.nugget)

    def cholesky(self, xs):
        """CholeskyFactor of the prior covariance over xs."""
        return gaussian_process.prior_factor(
            self.kernel, xs, self.covparam, nugget=self.nugget, cache=self._cache_arg()
        )

    def sample_prior(self, xs, z, observation_model=None):
        """Prior draws f = m + L z at xs.

        Parameters
        ----------
        xs : array_like, shape (n, d) or (n,)
        z : array_like, shape (n,) or (n, nb_draws)
            Standard normal variates supplied by the caller.
        observation_model : callable, optional
            Maps f to simulated observations.

        Returns
        -------
        f, or (f, y) when an observation model is given.
        """
        return gaussian_process.sample_prior(
            self.kernel,
            xs,
            self.covparam,
            z,
            mean=self.mean,
            nugget=self.nugget,
            observation_model=observation_model,
            cache=self._cache_arg(),
        )

    # ------------------------------------------------------------------
    # Posterior
    # ------------------------------------------------------------------
    def posterior(self, xi, yi, xt, return_type=1, predict_noisy=False):
        """Posterior mean and covariance of f at xt given (xi, yi).

        See `gpreparam.core.gaussian_process.posterior`.
        """
        return gaussian_process.posterior(
            self.kernel,
            xi,
            yi,
            xt,
            self.covparam,
            sigma=self.sigma,
            mean=self.mean,
            return_type=return_type,
            predict_noisy=predict_noisy,
        )

    def predict(self, xi, yi, xt, predict_noisy=False):
        """Posterior mean and marginal variances at xt.

        Returns
        -------
        zt_posterior_mean : array_like, shape (nt,)
        zt_posterior_variance : array_like, shape (nt,)
        """
        return self.posterior(xi, yi, xt, return_type=0, predict_noisy=predict_noisy)

    # ------------------------------------------------------------------
    # Non-centered parameterization
    # ------------------------------------------------------------------
    def non_centered(self, xs):
        """NonCenteredLatent f = μ + L η on the covariate set xs."""
        return gaussian_process.non_centered_latent(
            self.kernel,
            xs,
            self.covparam,
            mean=self.mean,
            nugget=self.nugget,
            cache=self._cache_arg(),
        )

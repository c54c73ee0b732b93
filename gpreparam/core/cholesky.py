# gpreparam/core/cholesky.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Stabilized Cholesky factorization of covariance matrices.

Gram matrices built from smooth kernels are positive semi-definite in
exact arithmetic but often fail to factor in floating point (close
covariates, long length scales). The factorizer below tries a plain
factorization first and, on failure, retries exactly once after adding
a small jitter to the diagonal. If the second attempt fails,
`NotPositiveDefinite` is raised: the caller must change the
hyperparameters or the covariates, there is no further fallback.

This module also provides a thread-safe factorization cache, so that
the O(n³) factorization of a Gram matrix is computed at most once per
(kernel, hyperparameters, covariates, nugget) key.
"""
import threading
from collections import namedtuple

import gpreparam.num as gnp
from gpreparam.config import get_config, get_logger
from gpreparam.kernel.base import gram_matrix, kernel_cache_key

from .errors import NotPositiveDefinite
from .linalg import add_diagonal_jitter, check_square, triangular_solve

_logger = get_logger()

CholeskyFactor = namedtuple("CholeskyFactor", ["L", "jitter"])
CholeskyFactor.__doc__ = """Lower Cholesky factor L and the jitter added before factoring.

L Lᵀ = K + jitter I, with jitter = 0.0 when no repair was needed.
"""


def default_jitter(K):
    """Jitter used by the repair attempt: cholesky_jitter × mean(diag(K))."""
    rel = get_config().cholesky_jitter
    scale = gnp.to_scalar(gnp.mean(gnp.diagonal(K))) if K.shape[0] > 0 else 0.0
    return rel * scale if scale > 0.0 else rel


def _factor(K):
    L = gnp.cholesky(K)
    if gnp.any(gnp.isnan(L)):
        raise gnp.LinAlgError("Cholesky factorization produced NaNs")
    return L


def cholesky(K, jitter=None, context=None):
    """Cholesky factorization with a single jitter repair.

    Parameters
    ----------
    K : array_like, shape (n, n)
        Symmetric covariance matrix.
    jitter : float, optional
        Absolute jitter for the repair attempt. Defaults to
        ``default_jitter(K)``.
    context : dict, optional
        Diagnostic information (e.g. hyperparameters) attached to the
        error if the factorization fails.

    Returns
    -------
    CholeskyFactor
        (L, jitter) with L lower triangular.

    Raises
    ------
    DimensionMismatch
        If K is not square.
    NotPositiveDefinite
        If K is not symmetric, or not positive definite after repair.
    """
    K = check_square(K, "covariance matrix")
    n = K.shape[0]
    if n == 0:
        return CholeskyFactor(gnp.zeros((0, 0)), 0.0)
    if not gnp.all(gnp.isfinite(K)):
        raise NotPositiveDefinite(
            "covariance matrix contains infs or NaNs", shape=K.shape, context=context
        )
    scale = gnp.to_scalar(gnp.max(gnp.abs(K)))
    if not gnp.allclose(K, K.T, rtol=1e-10, atol=1e-14 * scale):
        raise NotPositiveDefinite(
            "covariance matrix is not symmetric", shape=K.shape, context=context
        )
    try:
        return CholeskyFactor(_factor(K), 0.0)
    except gnp.LinAlgError:
        pass

    eps = default_jitter(K) if jitter is None else jitter
    _logger.info("Cholesky factorization failed (n=%d), retrying with jitter %.3g", n, eps)
    try:
        L = _factor(add_diagonal_jitter(K, eps))
    except gnp.LinAlgError as exc:
        ctx = dict(context or {})
        ctx["jitter"] = eps
        raise NotPositiveDefinite(
            "covariance matrix is not positive definite after jitter repair; "
            "consider a shorter length scale or removing duplicated covariates",
            shape=K.shape,
            context=ctx,
        ) from exc
    return CholeskyFactor(L, eps)


def cholesky_solve(L, b):
    """Solve K x = b given the lower Cholesky factor L of K.

    Two triangular solves: L y = b, then Lᵀ x = y.
    """
    L = check_square(L, "Cholesky factor")
    y = triangular_solve(L, b, lower=True)
    return triangular_solve(L.T, y, lower=False)


def log_det(L):
    """log det(K) = 2 Σ log L_ii."""
    return 2.0 * gnp.sum(gnp.log(gnp.diagonal(L)))


# --------------------------------------------------------------------------
# Factorization cache
# --------------------------------------------------------------------------
class FactorizationCache:
    """Memoize Cholesky factors, at most one factorization per key.

    Concurrent callers asking for the same key wait on a per-key lock
    while the first one factors; factors are stored read-only and may be
    shared between threads.
    """

    def __init__(self):
        self._factors = {}
        self._locks = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(kernel, xs, covparam, nugget):
        x = gnp.as_covariates(xs)
        params = tuple(float(p) for p in gnp.asarray(covparam).reshape(-1))
        return (kernel_cache_key(kernel), params, x.shape, x.tobytes(), float(nugget))

    def get_or_compute(self, key, compute):
        with self._lock:
            if key in self._factors:
                self.hits += 1
                return self._factors[key]
            key_lock = self._locks.setdefault(key, threading.Lock())
        with key_lock:
            with self._lock:
                if key in self._factors:
                    self.hits += 1
                    return self._factors[key]
            try:
                factor = compute()
                factor = CholeskyFactor(gnp.readonly(factor.L), factor.jitter)
                with self._lock:
                    self._factors[key] = factor
                    self.misses += 1
            finally:
                with self._lock:
                    self._locks.pop(key, None)
        _logger.debug("Cached Cholesky factor of size %d", factor.L.shape[0])
        return factor

    def clear(self):
        with self._lock:
            self._factors.clear()
            self._locks.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self):
        return len(self._factors)

    def __contains__(self, key):
        return key in self._factors


def get_default_cache():
    """Cache stored in ``config.caches['cholesky']``, created on demand."""
    return get_config().caches.setdefault("cholesky", FactorizationCache())


def cached_cholesky(kernel, xs, covparam, nugget=None, cache=None, jitter=None):
    """Cholesky factor of gram(xs) + nugget I, memoized.

    Parameters
    ----------
    kernel : Kernel or callable
    xs : array_like, shape (n, d)
    covparam : array_like
    nugget : float, optional
        Defaults to ``config.nugget``.
    cache : FactorizationCache, optional
        Defaults to the process-wide cache.
    jitter : float, optional
        Passed to `cholesky` for the repair attempt.

    Returns
    -------
    CholeskyFactor
        Read-only factor, possibly shared with other callers.
    """
    nugget = get_config().nugget if nugget is None else nugget
    cache = get_default_cache() if cache is None else cache
    key = cache.make_key(kernel, xs, covparam, nugget)

    def compute():
        K = add_diagonal_jitter(gram_matrix(kernel, xs, covparam), nugget)
        context = {"covparam": key[1]}
        return cholesky(K, jitter=jitter, context=context)

    return cache.get_or_compute(key, compute)


# gpreparam/kernel/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance function interface and kernel composition.

A covariance function is called as

    K = k(x, y, covparam, pairwise=False)

where x is (n x d) and y is either an (m x d) array of points or None,
meaning y := x. With ``pairwise=False`` an (n x m) matrix is returned,
with ``pairwise=True`` the (n,) vector of k(x_i, y_i). Plain callables
with this signature are accepted wherever a `Kernel` is; `Kernel`
objects add scalar evaluation, exact Gram matrices and composition by
``+`` and ``*``.
"""
import gpreparam.num as gnp
from gpreparam.core.errors import DimensionMismatch


class Kernel:
    """Base class for covariance functions.

    Subclasses define ``n_params``, ``param_names`` and ``_covariance``.
    Hyperparameters are never stored on the kernel: they are passed as a
    one-dimensional ``covparam`` array on every call.
    """

    n_params = 0
    param_names = ()

    def __call__(self, x, y=None, covparam=(), pairwise=False):
        x = gnp.as_covariates(x)
        if y is not None:
            y = gnp.as_covariates(y)
            if y.shape[1] != x.shape[1]:
                raise DimensionMismatch(
                    "covariates must have the same dimension", (x.shape, y.shape)
                )
            if pairwise and y.shape[0] != x.shape[0]:
                raise DimensionMismatch(
                    "pairwise evaluation needs the same number of points",
                    (x.shape, y.shape),
                )
        return self._covariance(x, y, self.check_params(covparam), pairwise)

    def _covariance(self, x, y, params, pairwise):
        raise NotImplementedError

    def check_params(self, covparam):
        params = gnp.asarray(covparam).reshape(-1)
        if params.shape[0] != self.n_params:
            raise ValueError(
                f"{self!r} expects {self.n_params} hyperparameters "
                f"{self.param_names}, got {params.shape[0]}"
            )
        return params

    def evaluate(self, x1, x2, *hyperparameters):
        """Return k(x1, x2) for two single covariates.

        >>> ExponentiatedQuadratic().evaluate(0.0, 0.0, 3.0, 5.5)
        9.0
        """
        x1 = gnp.asarray(x1).reshape(1, -1)
        x2 = gnp.asarray(x2).reshape(1, -1)
        return gnp.to_scalar(self(x1, x2, hyperparameters)[0, 0])

    def gram(self, xs, covparam):
        """Gram matrix over a covariate set, exactly symmetric."""
        x = gnp.as_covariates(xs)
        return mirror_upper(self(x, None, covparam))

    def cache_key(self):
        """Key identifying this kernel in a factorization cache.

        Kernels with hashable instance attributes are keyed by type and
        state, so equally configured instances share cached factors;
        other kernels are keyed by identity.
        """
        key = (type(self), tuple(sorted(getattr(self, "__dict__", {}).items())))
        try:
            hash(key)
        except TypeError:
            return (type(self), _IdentityKey(self))
        return key

    def __add__(self, other):
        return SumKernel(self, other)

    def __mul__(self, other):
        return ProductKernel(self, other)

    def __repr__(self):
        return f"{type(self).__name__}()"


class _CompositeKernel(Kernel):
    """Combination of two kernels.

    The hyperparameters of a composite kernel are the concatenation
    ``[covparam_1, covparam_2]``.
    """

    def __init__(self, k1, k2):
        if not isinstance(k1, Kernel) or not isinstance(k2, Kernel):
            raise TypeError("kernels can only be composed with other Kernel objects")
        self.k1 = k1
        self.k2 = k2
        self.n_params = k1.n_params + k2.n_params
        self.param_names = tuple(k1.param_names) + tuple(k2.param_names)

    def split_params(self, params):
        n1 = self.k1.n_params
        return params[:n1], params[n1:]

    def cache_key(self):
        return (type(self), self.k1.cache_key(), self.k2.cache_key())

    def __repr__(self):
        return f"{type(self).__name__}({self.k1!r}, {self.k2!r})"


class SumKernel(_CompositeKernel):
    """k(x, y) = k1(x, y) + k2(x, y)."""

    def _covariance(self, x, y, params, pairwise):
        p1, p2 = self.split_params(params)
        return self.k1._covariance(x, y, self.k1.check_params(p1), pairwise) + (
            self.k2._covariance(x, y, self.k2.check_params(p2), pairwise)
        )


class ProductKernel(_CompositeKernel):
    """k(x, y) = k1(x, y) k2(x, y)."""

    def _covariance(self, x, y, params, pairwise):
        p1, p2 = self.split_params(params)
        return self.k1._covariance(x, y, self.k1.check_params(p1), pairwise) * (
            self.k2._covariance(x, y, self.k2.check_params(p2), pairwise)
        )


# --------------------------------------------------------------------------
# Helpers accepting Kernel objects or plain covariance callables
# --------------------------------------------------------------------------
def mirror_upper(K):
    """Copy the strict upper triangle of K onto its lower triangle."""
    K = gnp.array(K)
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise DimensionMismatch("Gram matrix must be square", (K.shape,))
    iu = gnp.triu_indices(K.shape[0], 1)
    K[(iu[1], iu[0])] = K[iu]
    return K


def gram_matrix(kernel, xs, covparam):
    """Gram matrix of ``kernel`` over ``xs`` (exactly symmetric)."""
    if isinstance(kernel, Kernel):
        return kernel.gram(xs, covparam)
    x = gnp.as_covariates(xs)
    return mirror_upper(kernel(x, None, covparam))


def cross_covariance(kernel, x, y, covparam):
    """Matrix of k(x_i, y_j)."""
    return gnp.asarray(kernel(gnp.as_covariates(x), gnp.as_covariates(y), covparam))


class _IdentityKey:
    """Hashable wrapper comparing by identity, holding a reference to obj."""

    __slots__ = ("obj",)

    def __init__(self, obj):
        self.obj = obj

    def __hash__(self):
        return id(self.obj)

    def __eq__(self, other):
        return isinstance(other, _IdentityKey) and other.obj is self.obj


def kernel_cache_key(kernel):
    if isinstance(kernel, Kernel):
        return kernel.cache_key()
    return ("callable", _IdentityKey(kernel))

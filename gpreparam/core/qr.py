# gpreparam/core/qr.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Scaled thin QR reparameterization of a linear regression.

For a linear predictor μ = X β + α with an N x M design matrix X, the
thin QR factorization X = Q R gives μ = Q β̃ + α with β̃ = R β. The
columns of Q are orthogonal, so the posterior of β̃ is much less
correlated than the posterior of β, and an external sampler explores it
more easily. Draws of β̃ are mapped back with β = R⁻¹ β̃.

Q and R are rescaled by reciprocal factors (Q c and R / c), which
leaves Q R = X unchanged and puts β̃ on a unit-like scale:

- scaling="n"      : c = N, so that Qᵀ Q = N² I
- scaling="sqrt_n" : c = √N, so that Qᵀ Q = N I

Centering
---------
Decorrelation is complete only for centered covariates: with
uncentered X, β̃ keeps a residual correlation with the intercept
proportional to the column means. Use `center` before factoring. Note
that centering changes the meaning of the intercept: a model fitted on
centered covariates has intercept α, which corresponds to
α - meansᵀ β on the original covariates (see `uncenter_intercept`).
Centering is never applied automatically.
"""
from collections import namedtuple

import gpreparam.num as gnp
from gpreparam.config import get_config, get_logger

from .errors import DimensionMismatch, RankDeficient
from .linalg import multiply, triangular_solve

_logger = get_logger()

QRFactors = namedtuple("QRFactors", ["Q", "R"])

_SCALINGS = ("n", "sqrt_n")


def center(X):
    """Center the columns of a design matrix.

    Returns
    -------
    Xc : array_like, shape (n, m)
        X minus its column means.
    means : array_like, shape (m,)
    """
    X = _as_design(X)
    means = gnp.mean(X, axis=0)
    return X - means, means


def uncenter_intercept(intercept, beta, means):
    """Intercept on the original covariates: α - meansᵀ β.

    ``beta`` may be one coefficient vector (m,) or a batch of draws
    (k, m), in which case ``intercept`` is a scalar or a (k,) vector.
    """
    beta = gnp.asarray(beta)
    means = gnp.asarray(means).reshape(-1)
    return gnp.asarray(intercept) - multiply(beta, means)


def _as_design(X):
    X = gnp.asarray(X)
    if X.ndim != 2:
        raise DimensionMismatch("design matrix must be 2D", (X.shape,))
    return X


def _scale_factor(n, scaling):
    if scaling == "n":
        return float(n)
    if scaling == "sqrt_n":
        return float(gnp.sqrt(n))
    raise ValueError(f"scaling must be one of {_SCALINGS}, got {scaling!r}")


def factor(X, scaling="n", rank_tol=None):
    """Scaled thin QR factorization of an N x M design matrix.

    Parameters
    ----------
    X : array_like, shape (n, m)
        Design matrix, n >= m.
    scaling : {'n', 'sqrt_n'}, optional
        Reciprocal scaling applied to Q and R (default 'n').
    rank_tol : float, optional
        Relative tolerance on the diagonal of R; defaults to
        ``config.rank_tol``.

    Returns
    -------
    QRFactors
        (Q, R) with Q of shape (n, m), R upper triangular (m, m) with a
        positive diagonal, and Q R = X.

    Raises
    ------
    DimensionMismatch
        If X is not 2D, is empty, or has more columns than rows.
    RankDeficient
        If the columns of X are not linearly independent.
    """
    X = _as_design(X)
    n, m = X.shape
    if m == 0 or n < m:
        raise DimensionMismatch("design matrix must satisfy n >= m >= 1", (X.shape,))
    c = _scale_factor(n, scaling)
    rank_tol = get_config().rank_tol if rank_tol is None else rank_tol

    Q, R = gnp.qr(X, mode="reduced")
    # Make diag(R) positive, so that the factorization is unique.
    s = gnp.sign(gnp.diagonal(R))
    s = gnp.where(s == 0.0, 1.0, s)
    Q = Q * s
    R = s.reshape(-1, 1) * R

    d = gnp.abs(gnp.diagonal(R))
    threshold = rank_tol * gnp.max(d)
    deficient = gnp.where((d <= threshold) | (d == 0.0))[0]
    if deficient.shape[0] > 0:
        j = int(deficient[0])
        _logger.debug("Rank deficient design matrix: |R[%d, %d]| = %g", j, j, d[j])
        raise RankDeficient(
            "design matrix columns are not linearly independent",
            shape=X.shape,
            context={"column": j, "pivot": float(d[j]), "rank_tol": rank_tol},
        )

    return QRFactors(Q * c, gnp.triu(R) / c)


class QRReparameterization:
    """Thin QR reparameterization of a regression on a design matrix X.

    Attributes
    ----------
    Q : array_like, shape (n, m)
        Scaled orthogonal design, used in place of X in the model.
    R : array_like, shape (m, m)
        Scaled upper-triangular factor, β̃ = R β.
    n, m : int
        Number of observations and of covariates.
    scaling : str
        'n' or 'sqrt_n'.
    scale : float
        Factor c applied as Q c and R / c.

    Examples
    --------
    >>> import gpreparam as gr
    >>> X = [[1.0, 1.0], [2.0, 4.0], [3.0, 9.0], [4.0, 16.0]]
    >>> qr = gr.QRReparameterization(X)
    >>> beta_tilde = qr.to_transformed([0.5, -0.2])
    >>> beta = qr.to_original(beta_tilde)   # [0.5, -0.2]
    """

    def __init__(self, X, scaling="n", rank_tol=None):
        Q, R = factor(X, scaling=scaling, rank_tol=rank_tol)
        self.n, self.m = Q.shape
        self.scaling = scaling
        self.scale = _scale_factor(self.n, scaling)
        self.Q = gnp.readonly(Q)
        self.R = gnp.readonly(R)

    def __repr__(self):
        return (
            f"<gpreparam.QRReparameterization n={self.n} m={self.m} "
            f"scaling={self.scaling!r}> " + hex(id(self))
        )

    @property
    def factors(self):
        return QRFactors(self.Q, self.R)

    def forward_design(self):
        """Design matrix to use in place of X: μ = Q β̃ + α."""
        return self.Q

    def _check_coefficients(self, beta, name):
        beta = gnp.asarray(beta)
        if beta.ndim not in (1, 2) or beta.shape[-1] != self.m:
            raise DimensionMismatch(
                f"{name} must have shape ({self.m},) or (k, {self.m})", (beta.shape,)
            )
        return beta

    def to_transformed(self, beta):
        """β̃ = R β, for one vector (m,) or a batch of draws (k, m)."""
        beta = self._check_coefficients(beta, "beta")
        if beta.ndim == 1:
            return multiply(self.R, beta)
        return multiply(beta, self.R.T)

    def to_original(self, beta_tilde):
        """β = R⁻¹ β̃, applied to one draw (m,) or to every row of (k, m)."""
        beta_tilde = self._check_coefficients(beta_tilde, "beta_tilde")
        if beta_tilde.ndim == 1:
            return triangular_solve(self.R, beta_tilde, lower=False)
        return triangular_solve(self.R, beta_tilde.T, lower=False).T

    def linear_predictor(self, beta_tilde, intercept=0.0):
        """μ = Q β̃ + α.

        For a batch of draws (k, m) the result has shape (k, n) and
        ``intercept`` may be a scalar or a (k,) vector.
        """
        beta_tilde = self._check_coefficients(beta_tilde, "beta_tilde")
        if beta_tilde.ndim == 1:
            return multiply(self.Q, beta_tilde) + intercept
        intercept = gnp.asarray(intercept)
        if intercept.ndim == 1:
            intercept = intercept.reshape(-1, 1)
        return multiply(beta_tilde, self.Q.T) + intercept

    def design_for(self, X_new):
        """X_new R⁻¹, so that design_for(X_new) β̃ = X_new β."""
        X_new = _as_design(X_new)
        if X_new.shape[1] != self.m:
            raise DimensionMismatch("new design has the wrong number of columns", (X_new.shape, self.R.shape))
        return triangular_solve(self.R.T, X_new.T, lower=True).T

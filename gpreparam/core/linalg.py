# gpreparam/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Dense linear-algebra primitives shared across gpreparam.core modules.

This file isolates small helpers (built on top of `gpreparam.num as
gnp`) so they can be reused by the Cholesky factorizer, the QR
reparameterization and the Gaussian process routines without import
cycles. All functions are pure: inputs are never modified in place.
"""
import gpreparam.num as gnp
from gpreparam.config import get_config, get_logger

from .errors import DimensionMismatch, SingularMatrix

_logger = get_logger()


def transpose(A):
    """Return Aᵀ (a copy, so the result may be modified freely)."""
    return gnp.copy(gnp.asarray(A).T)


def multiply(A, B):
    """Matrix product A B.

    Parameters
    ----------
    A : array_like, shape (n, k) or (k,)
    B : array_like, shape (k, m) or (k,)

    Returns
    -------
    array_like
        The product, following `numpy.matmul` conventions for vectors.

    Raises
    ------
    DimensionMismatch
        If the inner dimensions differ.
    """
    A = gnp.asarray(A)
    B = gnp.asarray(B)
    if A.ndim == 0 or B.ndim == 0:
        raise DimensionMismatch("multiply expects arrays, got a scalar", (A.shape, B.shape))
    inner_a = A.shape[-1]
    inner_b = B.shape[0] if B.ndim == 1 else B.shape[-2]
    if inner_a != inner_b:
        raise DimensionMismatch(
            f"inner dimensions differ ({inner_a} != {inner_b})", (A.shape, B.shape)
        )
    return gnp.matmul(A, B)


def check_square(A, name="matrix"):
    A = gnp.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise DimensionMismatch(f"{name} must be square", (A.shape,))
    return A


def symmetrize(A):
    """Return (A + Aᵀ) / 2."""
    A = check_square(A)
    return 0.5 * (A + A.T)


def check_triangular_pivots(T, tol=None):
    """Raise SingularMatrix if a diagonal entry of T is numerically zero.

    A pivot d is considered zero when ``|d| <= tol * max_j |T_jj|``; a
    matrix with an all-zero diagonal is always singular.
    """
    tol = get_config().singular_tol if tol is None else tol
    d = gnp.abs(gnp.diagonal(T))
    if d.shape[0] == 0:
        return
    threshold = tol * gnp.max(d)
    bad = gnp.where((d <= threshold) | (d == 0.0))[0]
    if bad.shape[0] > 0:
        _logger.debug("Singular triangular matrix: pivot %d = %g", bad[0], d[bad[0]])
        raise SingularMatrix(
            "triangular matrix has a zero pivot",
            shape=T.shape,
            context={"pivot": int(bad[0]), "value": float(d[bad[0]]), "tol": tol},
        )


def triangular_solve(T, b, lower=True, tol=None):
    """Solve T x = b for triangular T by forward/back substitution.

    Parameters
    ----------
    T : array_like, shape (k, k)
        Lower (``lower=True``) or upper triangular matrix. Entries on the
        other side of the diagonal are ignored.
    b : array_like, shape (k,) or (k, m)
        Right-hand side(s).
    lower : bool, optional
        Whether T is lower triangular (default True).
    tol : float, optional
        Relative pivot tolerance; defaults to ``config.singular_tol``.

    Returns
    -------
    x : array_like, same shape as b

    Raises
    ------
    DimensionMismatch
        If T is not square or b has the wrong leading dimension.
    SingularMatrix
        If a diagonal entry of T is within tolerance of zero.
    """
    T = check_square(T, "triangular matrix")
    b = gnp.asarray(b)
    if b.ndim not in (1, 2) or b.shape[0] != T.shape[0]:
        raise DimensionMismatch("right-hand side does not match the system", (T.shape, b.shape))
    check_triangular_pivots(T, tol)
    return gnp.solve_triangular(T, b, lower=lower, check_finite=False)


def triangular_inverse(T, lower=True, tol=None):
    """Inverse of a triangular matrix, by substitution against the identity."""
    T = check_square(T, "triangular matrix")
    return triangular_solve(T, gnp.eye(T.shape[0]), lower=lower, tol=tol)


def cholesky_inverse(L):
    """Return K⁻¹ from a lower Cholesky factor L of K.

    Notes
    -----
    If K = L Lᵀ, then K⁻¹ = L⁻ᵀ L⁻¹. With T = L⁻¹, K⁻¹ = Tᵀ T.
    """
    T = triangular_inverse(L, lower=True)
    return gnp.matmul(T.T, T)


def add_diagonal_jitter(A, eps):
    """Return A + eps I.

    The jitter restores numerical positive definiteness and must not be
    used to change the model: callers choose the smallest eps that makes
    the factorization succeed.
    """
    A = check_square(A)
    if eps < 0:
        raise ValueError(f"jitter must be nonnegative, got {eps}")
    return A + eps * gnp.eye(A.shape[0])

# gpreparam/core/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Error kinds raised by the numerical core.

Numerical failures derive from `numpy.linalg.LinAlgError`, so that a
caller can catch every linear-algebra failure of gpreparam and of NumPy
with a single ``except`` clause. Shape errors derive from `ValueError`.
"""
from numpy.linalg import LinAlgError


class DimensionMismatch(ValueError):
    """Operand shapes are incompatible.

    Parameters
    ----------
    message : str
    shapes : tuple of tuple, optional
        Shapes of the offending operands.
    """

    def __init__(self, message, shapes=None):
        self.shapes = tuple(shapes) if shapes is not None else ()
        if self.shapes:
            message = f"{message} (shapes: {', '.join(map(str, self.shapes))})"
        super().__init__(message)


class ReparameterizationError(LinAlgError):
    """Base class for numerical failures of the core.

    Parameters
    ----------
    message : str
    shape : tuple, optional
        Shape of the matrix that could not be processed.
    context : dict, optional
        Extra diagnostic information (hyperparameters, jitter, pivot index).
    """

    def __init__(self, message, shape=None, context=None):
        self.shape = tuple(shape) if shape is not None else None
        self.context = dict(context) if context else {}
        details = []
        if self.shape is not None:
            details.append(f"shape={self.shape}")
        details.extend(f"{k}={v!r}" for k, v in self.context.items())
        if details:
            message = f"{message} [{', '.join(details)}]"
        super().__init__(message)


class RankDeficient(ReparameterizationError):
    """The columns of a design matrix are not linearly independent."""


class SingularMatrix(ReparameterizationError):
    """A triangular system has a (numerically) zero pivot."""


class NotPositiveDefinite(ReparameterizationError):
    """A covariance matrix could not be factored, even after jitter repair."""

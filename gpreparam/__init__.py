# gpreparam/__init__.py

from . import config
from . import num
from . import core
from . import kernel
from .core import (
    GaussianProcess,
    QRReparameterization,
    NonCenteredLatent,
    DimensionMismatch,
    ReparameterizationError,
    RankDeficient,
    SingularMatrix,
    NotPositiveDefinite,
)
from .core.qr import center, uncenter_intercept
from .config import __version__

__all__ = [
    "num",
    "kernel",
    "GaussianProcess",
    "QRReparameterization",
    "NonCenteredLatent",
    "center",
    "uncenter_intercept",
    "DimensionMismatch",
    "ReparameterizationError",
    "RankDeficient",
    "SingularMatrix",
    "NotPositiveDefinite",
    "__version__",
]

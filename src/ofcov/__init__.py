"""Object field coverage for test assertions."""

from ofcov.engine import CoverageEngine
from ofcov.errors import (
    CoverageError,
    EqualsNotOverriddenError,
    InvalidPathError,
    MissingPathError,
    PseudoFieldConflictError,
)
from ofcov.fields import AccessibleField

__all__ = [
    "AccessibleField",
    "CoverageEngine",
    "CoverageError",
    "EqualsNotOverriddenError",
    "InvalidPathError",
    "MissingPathError",
    "PseudoFieldConflictError",
]

__version__ = "0.1.0"

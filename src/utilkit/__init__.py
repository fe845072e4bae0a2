"""utilkit: small, independent helpers for everyday application code.

This package groups string, collection, stream and byte helpers
(:mod:`utilkit.extensions`), declarative validation rules
(:mod:`utilkit.validation`) and enum display strings
(:mod:`utilkit.metadata`). Configuration lives in :mod:`utilkit.settings`.
"""

from utilkit.exceptions import (
    InvalidArgumentError,
    ItemNotFoundError,
    PropertyNotFoundError,
    TypeMismatchError,
    UtilkitError,
    ValidationFailedError,
)

__version__ = "0.1.0"

__all__ = [
    "UtilkitError",
    "InvalidArgumentError",
    "ItemNotFoundError",
    "PropertyNotFoundError",
    "TypeMismatchError",
    "ValidationFailedError",
    "__version__",
]

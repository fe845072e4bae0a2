"""Error hierarchy shared by every utilkit helper.

Three tiers are kept apart:

* argument/precondition failures (:class:`InvalidArgumentError`) raised at the
  call boundary when an input is absent or malformed;
* programmer errors (:class:`TypeMismatchError`, :class:`PropertyNotFoundError`)
  signalling that a helper was pointed at the wrong kind of value;
* lookup misses (:class:`ItemNotFoundError`).

Normal validation verdicts are never exceptions; they are returned as
:class:`utilkit.validation.ValidationResult` values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing only
    from utilkit.validation.results import ValidationResult


class UtilkitError(Exception):
    """Base class for every error raised by utilkit."""


class InvalidArgumentError(UtilkitError, ValueError):
    """Raised when a required argument is ``None``, empty or out of range."""

    def __init__(self, argument: str, message: str = "Value cannot be None") -> None:
        self.argument = argument
        super().__init__(f"{message} (argument: {argument})")


class ItemNotFoundError(UtilkitError, LookupError):
    """Raised when no element of a sequence satisfies a predicate."""


class PropertyNotFoundError(UtilkitError, AttributeError):
    """Raised when a named property does not exist on an object."""

    def __init__(self, property_name: str, source: object) -> None:
        self.property_name = property_name
        super().__init__(f"Unable to find property: {property_name} on object: {source!r}")


class TypeMismatchError(UtilkitError, TypeError):
    """Raised when a value is not of the type a helper requires."""


class ValidationFailedError(UtilkitError):
    """Raised by :meth:`Validator.ensure_valid` when at least one rule fails."""

    def __init__(self, results: Sequence["ValidationResult"]) -> None:
        self.results = tuple(results)
        messages = "; ".join(result.error_message or "invalid" for result in self.results)
        super().__init__(f"Validation failed: {messages}")


__all__ = [
    "UtilkitError",
    "InvalidArgumentError",
    "ItemNotFoundError",
    "PropertyNotFoundError",
    "TypeMismatchError",
    "ValidationFailedError",
]

"""Typed access to object attributes by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

from utilkit.exceptions import (
    InvalidArgumentError,
    PropertyNotFoundError,
    TypeMismatchError,
    UtilkitError,
)

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class PropertyLookup(Generic[T]):
    """Outcome of :func:`lookup_property`.

    Exactly one of ``value`` and ``error`` is meaningful: ``found`` tells which.
    """

    name: str
    value: T | None = None
    error: UtilkitError | None = None

    @property
    def found(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the recorded error."""

        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def _check_arguments(source: Any, property_name: str) -> None:
    if source is None:
        raise InvalidArgumentError("source")
    if not property_name:
        raise InvalidArgumentError("property_name")


@overload
def lookup_property(source: Any, property_name: str) -> PropertyLookup[Any]: ...


@overload
def lookup_property(source: Any, property_name: str, expected_type: type[T]) -> PropertyLookup[T]: ...


def lookup_property(source, property_name, expected_type=object):
    """Read ``source.<property_name>`` and check it against ``expected_type``.

    Lookup and type failures are returned inside the :class:`PropertyLookup`
    rather than raised. ``None`` never satisfies ``expected_type``.

    Raises:
        InvalidArgumentError: If ``source`` is ``None`` or ``property_name`` is empty.
    """

    _check_arguments(source, property_name)

    value = getattr(source, property_name, _MISSING)
    if value is _MISSING:
        return PropertyLookup(property_name, error=PropertyNotFoundError(property_name, source))
    if value is None or not isinstance(value, expected_type):
        expected = getattr(expected_type, "__name__", repr(expected_type))
        return PropertyLookup(
            property_name,
            error=TypeMismatchError(f"Unable to cast: {type(value).__name__} to {expected}"),
        )
    return PropertyLookup(property_name, value=value)


@overload
def get_property_value(source: Any, property_name: str) -> Any: ...


@overload
def get_property_value(source: Any, property_name: str, expected_type: type[T]) -> T: ...


def get_property_value(source, property_name, expected_type=object):
    """Return ``source.<property_name>`` as an instance of ``expected_type``.

    Raises:
        InvalidArgumentError: If ``source`` is ``None`` or ``property_name`` is empty.
        PropertyNotFoundError: If the attribute does not exist.
        TypeMismatchError: If the value is ``None`` or not an ``expected_type``.
    """

    return lookup_property(source, property_name, expected_type).unwrap()

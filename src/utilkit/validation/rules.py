"""Declarative validation rules.

Rules are immutable values attached to a field once, when the owning type is
defined, through :mod:`utilkit.validation.registry` or the pydantic adapters.
A rule answers a single question for a single value: is it valid? Failing
verdicts come back as :class:`ValidationResult` instances; a rule pointed at a
value of the wrong kind raises :class:`TypeMismatchError` instead.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from utilkit.exceptions import InvalidArgumentError, PropertyNotFoundError, TypeMismatchError
from utilkit.settings import get_settings
from utilkit.validation.results import ValidationContext, ValidationResult

logger = logging.getLogger(__name__)

_MISSING = object()


class ValidationRule(ABC):
    """Base class for every rule understood by :class:`Validator`."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Short identifier used in logs."""

    @abstractmethod
    def validate(
        self,
        value: Any,
        context: ValidationContext,
        *,
        now: datetime | None = None,
    ) -> ValidationResult:
        """Return the verdict for ``value`` in ``context``."""

    def _fail(self, message: str | None, context: ValidationContext) -> ValidationResult:
        members = (context.member_name,) if context.member_name else ()
        return ValidationResult.failure(message, *members)


def _require_message(message: str | None, argument: str = "error_message") -> None:
    if not message:
        raise InvalidArgumentError(argument)


def _resolve_now(value: datetime, now: datetime | None) -> datetime:
    if now is not None:
        return now
    if value.tzinfo is None:
        return datetime.now()
    return datetime.now(value.tzinfo)


def _ensure_datetime(value: Any) -> datetime:
    if not isinstance(value, datetime):
        raise TypeMismatchError(f"Cannot validate non-datetime value of type {type(value).__name__}")
    return value


@dataclass(frozen=True)
class AfterToday(ValidationRule):
    """The value must be a point in time strictly later than now."""

    error_message: str

    def __post_init__(self) -> None:
        _require_message(self.error_message)

    @property
    def constraint_name(self) -> str:
        return "after_today"

    def validate(
        self,
        value: Any,
        context: ValidationContext,
        *,
        now: datetime | None = None,
    ) -> ValidationResult:
        moment = _ensure_datetime(value)
        try:
            passed = moment > _resolve_now(moment, now)
        except TypeError as exc:
            raise TypeMismatchError("Cannot compare naive and timezone-aware datetimes") from exc
        return ValidationResult.success() if passed else self._fail(self.error_message, context)


@dataclass(frozen=True)
class BeforeToday(ValidationRule):
    """The value must be a point in time strictly earlier than now."""

    error_message: str

    def __post_init__(self) -> None:
        _require_message(self.error_message)

    @property
    def constraint_name(self) -> str:
        return "before_today"

    def validate(
        self,
        value: Any,
        context: ValidationContext,
        *,
        now: datetime | None = None,
    ) -> ValidationResult:
        moment = _ensure_datetime(value)
        try:
            passed = moment < _resolve_now(moment, now)
        except TypeError as exc:
            raise TypeMismatchError("Cannot compare naive and timezone-aware datetimes") from exc
        return ValidationResult.success() if passed else self._fail(self.error_message, context)


@dataclass(frozen=True)
class CompareNotEqual(ValidationRule):
    """The value must differ from the value of a sibling property.

    Args:
        other_property: Name of the sibling property on the same instance.
        error_message: Optional message; when omitted one is built from the
            display name of the validated member.
        require_sibling: Whether a missing sibling is an error. ``None`` defers
            to ``settings.validation.require_sibling_property``. When the
            sibling is not required, a missing sibling reads as ``None``.
    """

    other_property: str
    error_message: str | None = None
    require_sibling: bool | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _require_message(self.other_property, "other_property")

    @property
    def constraint_name(self) -> str:
        return "compare_not_equal"

    def validate(
        self,
        value: Any,
        context: ValidationContext,
        *,
        now: datetime | None = None,
    ) -> ValidationResult:
        other_value = self._read_sibling(context)
        if other_value != value:
            return ValidationResult.success()
        message = self.error_message or f"The {context.display_name} is invalid"
        return self._fail(message, context)

    def _read_sibling(self, context: ValidationContext) -> Any:
        instance = context.instance
        if isinstance(instance, Mapping):
            other_value = instance.get(self.other_property, _MISSING)
        else:
            other_value = getattr(instance, self.other_property, _MISSING)
        if other_value is not _MISSING:
            return other_value

        require = self.require_sibling
        if require is None:
            require = get_settings().validation.require_sibling_property
        if require:
            raise PropertyNotFoundError(self.other_property, instance)
        logger.warning(
            "Sibling property %s not found on %s; treating it as None",
            self.other_property,
            type(instance).__name__,
        )
        return None


class SpecificValue(ValidationRule):
    """The value must be one of a fixed set of allowed values.

    ``SpecificValue("draft", "final")`` allows exactly those two strings.
    ``SpecificValue(None)`` is rejected: the allowed set itself may not be
    absent. ``SpecificValue()`` is accepted and rejects every value.
    """

    __slots__ = ("_values",)

    def __init__(self, *values: Any) -> None:
        if len(values) == 1 and values[0] is None:
            raise InvalidArgumentError("values")
        object.__setattr__(self, "_values", tuple(values))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"SpecificValue{self._values!r}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpecificValue):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash((SpecificValue, self._values))

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    @property
    def constraint_name(self) -> str:
        return "specific_value"

    def is_valid(self, value: Any) -> bool:
        return value is not None and value in self._values

    def validate(
        self,
        value: Any,
        context: ValidationContext,
        *,
        now: datetime | None = None,
    ) -> ValidationResult:
        if self.is_valid(value):
            return ValidationResult.success()
        allowed = ", ".join(repr(item) for item in self._values)
        message = f"The {context.display_name or 'value'} must be one of: {allowed}"
        return self._fail(message, context)


__all__ = [
    "ValidationRule",
    "AfterToday",
    "BeforeToday",
    "CompareNotEqual",
    "SpecificValue",
]

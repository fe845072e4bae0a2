"""Runs registered rules against live objects."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from utilkit.exceptions import InvalidArgumentError, PropertyNotFoundError, ValidationFailedError
from utilkit.observability import Observability, get_observability
from utilkit.validation.registry import RuleRegistry, default_registry
from utilkit.validation.results import ValidationContext, ValidationResult

_MISSING = object()


class Validator:
    """Evaluate the rules of a :class:`RuleRegistry` against object instances.

    Args:
        registry: Registry to read rules from. Defaults to the module-level
            registry populated by :func:`validates`.
        clock: Optional callable returning the reference moment for date
            rules. When omitted each rule uses the current time.
        observability: Structured event emitter for failed validations.
    """

    def __init__(
        self,
        *,
        registry: RuleRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
        observability: Observability | None = None,
    ) -> None:
        self.registry = registry or default_registry
        self._clock = clock
        self._observability = observability

    def validate_property(self, instance: Any, member: str, value: Any = _MISSING) -> list[ValidationResult]:
        """Validate one member of ``instance`` and return the failing verdicts.

        Args:
            instance: Object owning the member.
            member: Member name as registered.
            value: Value to validate. Defaults to the member's current value.

        Returns:
            Failing results in rule order; an empty list means the value is valid.

        Raises:
            InvalidArgumentError: If ``instance`` is ``None`` or ``member`` is empty.
            PropertyNotFoundError: If ``value`` is omitted and the member does not exist.
            TypeMismatchError: If a rule cannot handle the value's type.
        """

        if instance is None:
            raise InvalidArgumentError("instance")
        if not member:
            raise InvalidArgumentError("member")

        if value is _MISSING:
            value = getattr(instance, member, _MISSING)
            if value is _MISSING:
                raise PropertyNotFoundError(member, instance)

        owner = type(instance)
        context = ValidationContext(
            instance=instance,
            member_name=member,
            display_name=self.registry.display_name(owner, member),
        )
        now = self._clock() if self._clock else None

        failures: list[ValidationResult] = []
        for rule in self.registry.rules_for(owner, member):
            result = rule.validate(value, context, now=now)
            if not result.is_valid:
                failures.append(result)
                self._emit_failure(owner, member, rule.constraint_name, result)
        return failures

    def try_validate_property(self, instance: Any, member: str, value: Any = _MISSING) -> bool:
        """Return ``True`` when every rule on ``member`` accepts the value."""

        return not self.validate_property(instance, member, value)

    def validate_object(self, instance: Any) -> list[ValidationResult]:
        """Validate every registered member of ``instance``."""

        if instance is None:
            raise InvalidArgumentError("instance")

        failures: list[ValidationResult] = []
        for member in self.registry.fields_for(type(instance)):
            failures.extend(self.validate_property(instance, member))
        return failures

    def try_validate_object(self, instance: Any) -> bool:
        return not self.validate_object(instance)

    def ensure_valid(self, instance: Any) -> None:
        """Raise :class:`ValidationFailedError` when any registered rule fails."""

        failures = self.validate_object(instance)
        if failures:
            raise ValidationFailedError(failures)

    def _emit_failure(self, owner: type, member: str, constraint: str, result: ValidationResult) -> None:
        if self._observability is None:
            self._observability = get_observability(component="validation")
        self._observability.emit_event(
            "validation.failed",
            level=logging.DEBUG,
            owner=owner.__name__,
            member=member,
            constraint=constraint,
            result=result.to_dict(),
        )


__all__ = ["Validator"]

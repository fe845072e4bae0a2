"""Explicit mapping from ``(type, field)`` to the rules declared for it.

Rules are registered when a type is defined, either by calling
:meth:`RuleRegistry.register` or with the :func:`validates` class decorator::

    @validates("starts_at", AfterToday("Start must be in the future"))
    @validates("status", SpecificValue("draft", "final"), display_name="Status")
    @dataclass
    class Booking:
        starts_at: datetime
        status: str

Lookups walk the owner's MRO so subclasses inherit the rules of their bases.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, TypeVar

from utilkit.exceptions import InvalidArgumentError
from utilkit.validation.rules import ValidationRule

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class RuleRegistry:
    """Registry of validation rules keyed by owner type and field name."""

    def __init__(self) -> None:
        self._rules: dict[type, dict[str, tuple[ValidationRule, ...]]] = {}
        self._display_names: dict[tuple[type, str], str] = {}
        self._lock = threading.Lock()

    def register(
        self,
        owner: type,
        field: str,
        *rules: ValidationRule,
        display_name: str | None = None,
    ) -> None:
        """Attach ``rules`` to ``owner.field``.

        Repeated registrations for the same field append, preserving order.

        Raises:
            InvalidArgumentError: If ``owner`` is ``None``, ``field`` is empty
                or any rule is not a :class:`ValidationRule`.
        """

        if owner is None:
            raise InvalidArgumentError("owner")
        if not field:
            raise InvalidArgumentError("field")
        for rule in rules:
            if not isinstance(rule, ValidationRule):
                raise InvalidArgumentError("rules", f"Expected ValidationRule, got {type(rule).__name__}")

        with self._lock:
            fields = self._rules.setdefault(owner, {})
            fields[field] = fields.get(field, ()) + tuple(rules)
            if display_name:
                self._display_names[(owner, field)] = display_name
        logger.debug(
            "Registered %d rule(s) for %s.%s",
            len(rules),
            owner.__name__,
            field,
        )

    def rules_for(self, owner: type, field: str) -> tuple[ValidationRule, ...]:
        """Return every rule declared for ``field`` on ``owner`` or its bases."""

        collected: list[ValidationRule] = []
        for klass in reversed(owner.__mro__):
            collected.extend(self._rules.get(klass, {}).get(field, ()))
        return tuple(collected)

    def fields_for(self, owner: type) -> tuple[str, ...]:
        """Return the names of every field with rules, in registration order."""

        seen: dict[str, None] = {}
        for klass in reversed(owner.__mro__):
            for name in self._rules.get(klass, {}):
                seen.setdefault(name, None)
        return tuple(seen)

    def display_name(self, owner: type, field: str) -> str:
        """Return the display name registered for ``field`` or the field name itself."""

        for klass in owner.__mro__:
            name = self._display_names.get((klass, field))
            if name:
                return name
        return field

    def clear(self, owner: type | None = None) -> None:
        """Drop registrations for ``owner``, or every registration when omitted."""

        with self._lock:
            if owner is None:
                self._rules.clear()
                self._display_names.clear()
                return
            self._rules.pop(owner, None)
            for key in [key for key in self._display_names if key[0] is owner]:
                del self._display_names[key]


default_registry = RuleRegistry()


def validates(
    field: str,
    *rules: ValidationRule,
    display_name: str | None = None,
    registry: RuleRegistry | None = None,
) -> Callable[[T], T]:
    """Class decorator registering ``rules`` for ``field`` on the decorated type."""

    target = registry or default_registry

    def decorator(cls: T) -> T:
        target.register(cls, field, *rules, display_name=display_name)
        return cls

    return decorator


__all__ = ["RuleRegistry", "default_registry", "validates"]

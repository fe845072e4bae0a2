"""Display strings attached to enum members.

Texts are registered once, when the enum is defined::

    @string_values(TEST1="test1", TEST2="test2")
    class Sample(StringValueEnum):
        TEST1 = 1
        TEST2 = 2
        TEST3 = 3

    Sample.TEST1.string_value      # "test1"
    get_string_value(Sample.TEST3)  # None
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

from utilkit.exceptions import InvalidArgumentError, TypeMismatchError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=type[Enum])

_REGISTRY: dict[tuple[type, str], "StringValue"] = {}
_LOCK = threading.Lock()


@dataclass(frozen=True)
class StringValue:
    """Display text bound to a single enum member."""

    text: str


def _key(member: Enum) -> tuple[type, str]:
    # str/int mixin members hash and compare like their values
    return type(member), member.name


def register_string_value(member: Enum, text: str) -> StringValue:
    """Attach ``text`` to ``member``.

    Registering the same text twice is a no-op; registering a different text
    for a member that already has one raises :class:`InvalidArgumentError`.
    """

    if member is None:
        raise InvalidArgumentError("member")
    if not isinstance(member, Enum):
        raise TypeMismatchError(f"Expected an Enum member, got {type(member).__name__}")
    if text is None:
        raise InvalidArgumentError("text")

    value = StringValue(text)
    with _LOCK:
        existing = _REGISTRY.get(_key(member))
        if existing is not None and existing != value:
            raise InvalidArgumentError(
                "text",
                f"{member!r} already has string value {existing.text!r}",
            )
        _REGISTRY[_key(member)] = value
    return value


def string_values(**texts: str) -> Callable[[E], E]:
    """Class decorator registering display texts by member name."""

    def decorator(enum_cls: E) -> E:
        members = enum_cls.__members__
        unknown = sorted(name for name in texts if name not in members)
        if unknown:
            raise InvalidArgumentError(
                "texts",
                f"Unknown member(s) for {enum_cls.__name__}: {', '.join(unknown)}",
            )
        for name, text in texts.items():
            register_string_value(members[name], text)
        logger.debug("Registered %d string value(s) for %s", len(texts), enum_cls.__name__)
        return enum_cls

    return decorator


def get_string_value(member: Enum) -> str | None:
    """Return the display text attached to ``member`` or ``None`` when it has none."""

    if member is None:
        raise InvalidArgumentError("source")
    if not isinstance(member, Enum):
        raise TypeMismatchError(f"Expected an Enum member, got {type(member).__name__}")
    attached = _REGISTRY.get(_key(member))
    return attached.text if attached is not None else None


class StringValueEnum(Enum):
    """Enum base exposing the registered display text as ``.string_value``."""

    @property
    def string_value(self) -> str | None:
        return get_string_value(self)


__all__ = [
    "StringValue",
    "StringValueEnum",
    "get_string_value",
    "register_string_value",
    "string_values",
]

"""Helpers for ordered sequences."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from utilkit.exceptions import InvalidArgumentError, ItemNotFoundError

T = TypeVar("T")


def replace(source: Iterable[T], match: Callable[[T], bool], value: T) -> list[T]:
    """Return a copy of ``source`` with the first element matching ``match`` swapped for ``value``.

    The source is not modified; every other element keeps its position.

    Args:
        source: Elements to copy. Any iterable is accepted and consumed once.
        match: Predicate selecting the element to replace.
        value: Replacement element.

    Returns:
        A new list.

    Raises:
        InvalidArgumentError: If ``source`` or ``match`` is ``None``.
        ItemNotFoundError: If no element satisfies ``match``.
    """

    if source is None:
        raise InvalidArgumentError("source")
    if match is None:
        raise InvalidArgumentError("match")

    items = list(source)
    for index, item in enumerate(items):
        if match(item):
            items[index] = value
            return items
    raise ItemNotFoundError(f"Item not found using predicate {getattr(match, '__name__', match)!s}")

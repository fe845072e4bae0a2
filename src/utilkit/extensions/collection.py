"""Helpers for mutable collections."""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence, MutableSet
from typing import TypeVar

from utilkit.exceptions import InvalidArgumentError, TypeMismatchError

T = TypeVar("T")


def add_range(target: MutableSequence[T] | MutableSet[T], values: Iterable[T]) -> None:
    """Append every element of ``values`` to ``target`` in iteration order.

    Sequences grow with ``append``; sets with ``add``. ``values`` is read in
    full before ``target`` changes, so ``add_range(items, items)`` doubles ``items``.

    Raises:
        InvalidArgumentError: If ``target`` or ``values`` is ``None``.
        TypeMismatchError: If ``target`` is neither a mutable sequence nor a mutable set.
    """

    if target is None:
        raise InvalidArgumentError("target")
    if values is None:
        raise InvalidArgumentError("values")

    if isinstance(target, MutableSequence):
        add = target.append
    elif isinstance(target, MutableSet):
        add = target.add
    else:
        raise TypeMismatchError(f"Cannot add items to {type(target).__name__}")

    for value in list(values):
        add(value)

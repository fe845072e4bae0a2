"""Metadata attached to types at definition time (enum display strings)."""

from .string_values import (
    StringValue,
    StringValueEnum,
    get_string_value,
    register_string_value,
    string_values,
)

__all__ = [
    "StringValue",
    "StringValueEnum",
    "get_string_value",
    "register_string_value",
    "string_values",
]

"""Stateless helpers grouped by the type they operate on."""

from .collection import add_range
from .data_types import (
    from_base64,
    from_byte_array,
    generate_salt,
    get_bytes,
    get_string,
    hash_bytes,
    hash_string,
    to_base64,
    to_byte_array,
)
from .lists import replace
from .reflection import PropertyLookup, get_property_value, lookup_property
from .streams import read_to_end_as_string
from .strings import (
    has_trailing_back_slash,
    has_trailing_forward_slash,
    remove_trailing_back_slash,
    remove_trailing_forward_slash,
)

__all__ = [
    "add_range",
    "replace",
    "PropertyLookup",
    "get_property_value",
    "lookup_property",
    "has_trailing_back_slash",
    "has_trailing_forward_slash",
    "remove_trailing_back_slash",
    "remove_trailing_forward_slash",
    "generate_salt",
    "get_bytes",
    "get_string",
    "to_byte_array",
    "from_byte_array",
    "hash_bytes",
    "hash_string",
    "to_base64",
    "from_base64",
    "read_to_end_as_string",
]

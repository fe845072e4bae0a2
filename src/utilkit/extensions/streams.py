"""Stream helpers."""

from __future__ import annotations

import codecs
from contextlib import closing
from typing import IO, Any

from utilkit.exceptions import InvalidArgumentError, TypeMismatchError
from utilkit.settings import get_settings

# UTF-32 marks first: the UTF-32LE mark starts with the UTF-16LE one.
_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _sniff_encoding(data: bytes) -> str | None:
    for mark, encoding in _BYTE_ORDER_MARKS:
        if data.startswith(mark):
            return encoding
    return None


def read_to_end_as_string(source: IO[Any], encoding: str | None = None) -> str:
    """Read ``source`` to the end and return its contents as text.

    Binary streams are decoded with ``encoding``. Without one, a UTF-16 or
    UTF-32 byte order mark selects that encoding; otherwise
    ``settings.encoding.stream_encoding`` (``utf-8-sig``, which drops a UTF-8
    byte order mark) applies. An explicit ``encoding`` is used as given, with
    no mark detection. Text streams are returned as read. Line endings are
    preserved. The stream is closed once read, including when reading fails.

    Raises:
        InvalidArgumentError: If ``source`` is ``None`` or the encoding is unknown.
        TypeMismatchError: If ``source`` has no ``read`` method.
    """

    if source is None:
        raise InvalidArgumentError("source")
    if not callable(getattr(source, "read", None)):
        raise TypeMismatchError(f"Expected a readable stream, got {type(source).__name__}")

    manager = source if hasattr(source, "__enter__") else closing(source)
    with manager as stream:
        data = stream.read()

    if isinstance(data, str):
        return data
    data = bytes(data)
    resolved = encoding or _sniff_encoding(data) or get_settings().encoding.stream_encoding
    try:
        return data.decode(resolved)
    except LookupError as exc:
        raise InvalidArgumentError("encoding", f"Unknown encoding {resolved!r}") from exc

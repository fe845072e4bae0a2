"""Byte/string conversion, hashing, salts and Base64 helpers.

Defaults (text encoding, digest algorithm, salt size, Base64 line length)
come from :mod:`utilkit.settings` when a caller does not pass them.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import secrets
from typing import Any, Callable, Union

from utilkit.exceptions import InvalidArgumentError, TypeMismatchError
from utilkit.settings import get_settings

BytesLike = Union[bytes, bytearray, memoryview]
HashAlgorithm = Union[str, Callable[..., Any]]

_UTF16_RAW = "utf-16-le"


def _ensure_source(source: Any) -> None:
    if source is None:
        raise InvalidArgumentError("source")


def _ensure_bytes(source: Any) -> bytes:
    _ensure_source(source)
    if not isinstance(source, (bytes, bytearray, memoryview)):
        raise TypeMismatchError(f"Expected a bytes-like object, got {type(source).__name__}")
    return bytes(source)


def _ensure_str(source: Any) -> str:
    _ensure_source(source)
    if not isinstance(source, str):
        raise TypeMismatchError(f"Expected str, got {type(source).__name__}")
    return source


def _resolve_encoding(encoding: str | None) -> str:
    return encoding or get_settings().default_encoding


# ---------------------------------------------------------------------------
# Salts
# ---------------------------------------------------------------------------


def generate_salt(size: int | None = None) -> bytes:
    """Return ``size`` cryptographically random bytes, none of them zero.

    Args:
        size: Number of bytes. Defaults to ``settings.hashing.default_salt_size``.

    Raises:
        InvalidArgumentError: If ``size`` is negative.
    """

    if size is None:
        size = get_settings().hashing.default_salt_size
    if size < 0:
        raise InvalidArgumentError("size", f"Salt size must be non-negative, got {size}")

    salt = bytearray()
    while len(salt) < size:
        salt.extend(byte for byte in secrets.token_bytes(size - len(salt)) if byte)
    return bytes(salt)


# ---------------------------------------------------------------------------
# Text <-> bytes
# ---------------------------------------------------------------------------


def to_byte_array(source: str, encoding: str | None = None) -> bytes:
    """Encode ``source`` with ``encoding`` (default ``settings.encoding.default_encoding``)."""

    text = _ensure_str(source)
    resolved = _resolve_encoding(encoding)
    try:
        return text.encode(resolved)
    except LookupError as exc:
        raise InvalidArgumentError("encoding", f"Unknown encoding {resolved!r}") from exc


def from_byte_array(source: BytesLike, encoding: str | None = None) -> str:
    """Decode ``source`` with ``encoding`` (default ``settings.encoding.default_encoding``)."""

    data = _ensure_bytes(source)
    resolved = _resolve_encoding(encoding)
    try:
        return data.decode(resolved)
    except LookupError as exc:
        raise InvalidArgumentError("encoding", f"Unknown encoding {resolved!r}") from exc


def get_bytes(source: str) -> bytes:
    """Return the raw UTF-16LE code units of ``source``, two bytes per unit."""

    return _ensure_str(source).encode(_UTF16_RAW, errors="surrogatepass")


def get_string(source: BytesLike) -> str:
    """Inverse of :func:`get_bytes`.

    Raises:
        InvalidArgumentError: If ``source`` is ``None`` or has an odd length.
    """

    data = _ensure_bytes(source)
    if len(data) % 2:
        raise InvalidArgumentError("source", f"UTF-16 data must have an even length, got {len(data)} bytes")
    return data.decode(_UTF16_RAW, errors="surrogatepass")


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


def hash_bytes(source: BytesLike, algorithm: HashAlgorithm | None = None) -> bytes:
    """Return the digest of ``source``.

    Args:
        source: Data to hash.
        algorithm: ``hashlib`` algorithm name (``"sha256"``, ``"sha1"`` ...) or a
            constructor such as ``hashlib.sha512``. Defaults to
            ``settings.hashing.default_algorithm`` (SHA-256).

    Raises:
        InvalidArgumentError: If ``source`` is ``None`` or the algorithm is unknown.
    """

    data = _ensure_bytes(source)
    algorithm = algorithm or get_settings().default_hash_algorithm
    if callable(algorithm):
        return algorithm(data).digest()
    try:
        hasher = hashlib.new(algorithm, data)
    except (ValueError, TypeError) as exc:
        raise InvalidArgumentError("algorithm", f"Unsupported hash algorithm {algorithm!r}") from exc
    if hasher.name.startswith("shake_"):
        raise InvalidArgumentError("algorithm", f"Variable-length digest {algorithm!r} is not supported")
    return hasher.digest()


def hash_string(
    source: str,
    algorithm: HashAlgorithm | None = None,
    encoding: str | None = None,
) -> str:
    """Hash the encoded ``source`` and render it as dash-separated hex pairs.

    ``hash_string("abc")`` returns ``"BA-78-16-BF-..."``.
    """

    digest = hash_bytes(to_byte_array(source, encoding), algorithm)
    return digest.hex("-").upper()


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------


def to_base64(source: BytesLike, insert_line_breaks: bool = False) -> str:
    """Encode ``source`` as Base64.

    With ``insert_line_breaks`` a CRLF is inserted after every
    ``settings.encoding.base64_line_length`` characters (76 by default).
    """

    encoded = base64.b64encode(_ensure_bytes(source)).decode("ascii")
    if not insert_line_breaks:
        return encoded
    width = get_settings().encoding.base64_line_length
    return "\r\n".join(encoded[index : index + width] for index in range(0, len(encoded), width))


def from_base64(source: str | BytesLike) -> bytes:
    """Decode Base64 text, ignoring embedded whitespace and line breaks."""

    _ensure_source(source)
    if not isinstance(source, (str, bytes, bytearray, memoryview)):
        raise TypeMismatchError(f"Expected str or bytes, got {type(source).__name__}")
    try:
        text = source if isinstance(source, str) else bytes(source).decode("ascii")
        return base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidArgumentError("source", "Invalid Base64 input") from exc

"""Trailing separator helpers for path-like strings.

``remove_trailing_*`` truncates at the *last* separator in the string, not
only a final character: ``"a/b/"`` becomes ``"a/b"`` but ``"a/b"`` becomes
``"a"``. Check with ``has_trailing_*`` first when only a final separator
should go.
"""

from __future__ import annotations

from utilkit.exceptions import InvalidArgumentError

BACK_SLASH = "\\"
FORWARD_SLASH = "/"


def _ensure_source(source: str | None) -> str:
    if source is None:
        raise InvalidArgumentError("source")
    return source


def _truncate_at_last(source: str, separator: str) -> str:
    index = source.rfind(separator)
    if index == -1:
        raise InvalidArgumentError("source", f"{source!r} does not contain {separator!r}")
    return source[:index]


def has_trailing_back_slash(source: str) -> bool:
    return _ensure_source(source).endswith(BACK_SLASH)


def has_trailing_forward_slash(source: str) -> bool:
    return _ensure_source(source).endswith(FORWARD_SLASH)


def remove_trailing_back_slash(source: str) -> str:
    """Truncate ``source`` at its last back slash."""

    return _truncate_at_last(_ensure_source(source), BACK_SLASH)


def remove_trailing_forward_slash(source: str) -> str:
    """Truncate ``source`` at its last forward slash."""

    return _truncate_at_last(_ensure_source(source), FORWARD_SLASH)

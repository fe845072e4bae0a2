"""Observability helpers for structured logging."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from utilkit.settings import Settings, get_settings

_LOGGER = logging.getLogger("utilkit.observability")
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Observability:
    """Emit structured log events for a utilkit component."""

    def __init__(
        self,
        *,
        settings: Settings,
        component: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.component = component or "core"
        self._logger = logger or _LOGGER
        self._structured_logging = bool(settings.observability.structured_logging)

    def emit_event(self, event: str, *, level: int = logging.INFO, **fields: Any) -> None:
        """Emit a structured log if enabled, otherwise a plain ``event | payload`` line."""

        if not self._logger.isEnabledFor(level):
            return
        payload = {
            "event": event,
            "component": self.component,
            "service": self.settings.observability.service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **_sanitize_dict(fields),
        }
        if self._structured_logging:
            message = json.dumps(payload, default=_serialize)
            self._logger.log(level, message)
        else:
            self._logger.log(level, "%s | %s", event, payload)


def get_observability(*, component: str | None = None, settings: Settings | None = None) -> Observability:
    """Return an :class:`Observability` instance for the requested component."""

    resolved = settings or get_settings()
    return Observability(settings=resolved, component=component, logger=_LOGGER)


def configure_logging(settings: Settings | None = None, *, force: bool = False) -> None:
    """Configure the root logger using ``settings.runtime.log_level``.

    Library code never calls this; host applications and scripts opt in.
    """

    resolved = settings or get_settings()
    level = logging.getLevelName(resolved.log_level.upper())
    if not isinstance(level, int):
        _LOGGER.warning("Unknown log level %r, falling back to INFO", resolved.log_level)
        level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT, force=force)


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------


def _serialize(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_serialize(item) for item in value)
    if isinstance(value, dict):
        return {str(key): _serialize(val) for key, val in value.items()}
    return str(value)


def _sanitize_dict(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _serialize(value) for key, value in fields.items() if value is not None}


__all__ = ["Observability", "configure_logging", "get_observability"]

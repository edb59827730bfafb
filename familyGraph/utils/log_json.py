from __future__ import annotations

"""Structured JSON logger for pipeline events."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, MutableMapping

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def level_from_name(name: str) -> int:
    try:
        return _LEVEL_MAP[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name}") from None


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return {str(k): _sanitize(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, (int, float, bool)) or obj is None:
        return obj
    return str(obj)


def _truncate(details: Any, max_bytes: int) -> Any:
    if max_bytes <= 0:
        return details
    serialized = json.dumps(details, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    blob = serialized.encode("utf-8")
    if len(blob) <= max_bytes:
        return details
    preview = blob[:max_bytes].decode("utf-8", errors="ignore")
    return {"note": "truncated", "preview": preview}


class JsonLogger:
    """Emit structured JSON events with consistent keys."""

    def __init__(
        self,
        service: str,
        *,
        logger: logging.Logger | None = None,
        level: int = logging.INFO,
        max_details_bytes: int = 4096,
    ) -> None:
        self._service = service
        self._logger = logger or logging.getLogger(f"familyGraph.{service}.json")
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)
        self._logger.propagate = False
        self._logger.setLevel(level)
        self._max_details_bytes = max(0, int(max_details_bytes))

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def debug(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("WARNING", event, fields)

    def error(self, event: str, **fields: Any) -> dict[str, Any] | None:
        return self._emit("ERROR", event, fields)

    def _emit(self, level: str, event: str, fields: MutableMapping[str, Any]) -> dict[str, Any] | None:
        numeric = _LEVEL_MAP.get(level, logging.INFO)
        if not self._logger.isEnabledFor(numeric):
            return None
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "service": self._service,
            "event": event,
        }
        if fields:
            entry["details"] = _truncate(_sanitize(fields), self._max_details_bytes)
        payload = json.dumps(entry, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
        self._logger.log(numeric, payload)
        return entry


__all__ = ["JsonLogger", "level_from_name"]

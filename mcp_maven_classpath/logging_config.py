"""Centralized logging configuration.

stdout carries the MCP stdio protocol, so every record goes to stderr. Maven's
own output is relayed through the ``mcp_maven_classpath.maven`` logger and ends
up there too.

``configure_logging`` can be called any number of times; it keeps exactly one
application handler on the root logger and only swaps its formatter.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .config import Settings

_FRAMEWORK_LOGGERS = ("mcp", "fastmcp")

# Anything on a LogRecord that is not in this set arrived through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras: dict[str, Any] = {}
    for key, value in vars(record).items():
        if key in _RECORD_ATTRS or key.startswith("_"):
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        extras[key] = value
    return extras


class _JsonLineFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name or "root",
            "message": record.getMessage(),
            **_record_extras(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    @property
    def stream(self) -> Any:
        return sys.stderr

    @stream.setter
    def stream(self, _value: Any) -> None:
        # StreamHandler.__init__ assigns a stream; the live sys.stderr always wins
        pass


def _app_handler(root: logging.Logger) -> Optional[_StderrHandler]:
    for h in root.handlers:
        if isinstance(h, _StderrHandler):
            return h
    return None


def _writes_to_stdout(h: logging.Handler) -> bool:
    return isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure application-wide logging.

    Parameters
    ----------
    log_level: str
        Root log level name; unknown names fall back to INFO.
    json_logs: bool
        Emit one JSON object per line instead of plain text.
    """

    level = logging.getLevelName((log_level or "").upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    handler = _app_handler(root)
    if handler is None:
        handler = _StderrHandler()
        root.handlers = [h for h in root.handlers if not _writes_to_stdout(h)]
        root.addHandler(handler)
    handler.setFormatter(
        _JsonLineFormatter() if json_logs else logging.Formatter(_TEXT_FORMAT, _TEXT_DATEFMT)
    )
    root.setLevel(level)

    # MCP framework chatter only shows up when debugging
    framework_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _FRAMEWORK_LOGGERS:
        logging.getLogger(name).setLevel(framework_level)


def configure_from_settings(settings: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL / LOG_JSON from ``settings`` (or the environment)."""
    s = settings or Settings()
    configure_logging(s.LOG_LEVEL, json_logs=s.LOG_JSON)


__all__ = ["configure_from_settings", "configure_logging"]

"""
Logging for documentation runs.

Every module logs through ``scoped_logger(scope)``; the scope names the
pipeline stage (``walker``, ``extract``, ``source``, ``render``, ``cli``)
and ``extra={"symbol": ...}`` names the declaration being processed.

Two output shapes are available on stderr:

- ``human``: ``12:00:01 INFO  [walker] requestVisit Tensor (mylib.core.Tensor)``
- ``json``: one OpenTelemetry log record per line

Environment::

    APIREF_LOG_LEVEL=trace|debug|info|warn|error|fatal|off (default: info)
    APIREF_LOG_FORMAT=json|human (default: human on a terminal, json otherwise)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from typing import Any

__all__ = ["logger", "setup_logging", "scoped_logger"]

logger = logging.getLogger("apiref")

OFF = logging.CRITICAL + 10

# Spellings accepted on top of the stdlib level names
_LEVEL_ALIASES = {"trace": logging.DEBUG, "warn": logging.WARNING, "fatal": logging.CRITICAL, "off": OFF}

_SEVERITY = {logging.WARNING: "WARN", logging.CRITICAL: "FATAL"}

# LogRecord attributes that are not user extras
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "scope"}


def _parse_level(level: str | int) -> int:
    """Numeric level for a name or number; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    name = level.strip().lower()
    if name in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name]
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _severity(levelno: int) -> str:
    return _SEVERITY.get(levelno) or logging.getLevelName(levelno)


def _scope(record: logging.LogRecord) -> str:
    return getattr(record, "scope", None) or "apiref"


def _get_log_level() -> int:
    return _parse_level(os.environ.get("APIREF_LOG_LEVEL", "info"))


def _get_log_format() -> str:
    fmt = os.environ.get("APIREF_LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "human" if sys.stderr.isatty() else "json"


class JsonFormatter(logging.Formatter):
    """One OpenTelemetry log record per line."""

    def __init__(self) -> None:
        super().__init__()
        try:
            self._resource = {"service.name": "apiref", "service.version": version("apiref")}
        except PackageNotFoundError:
            self._resource = {"service.name": "apiref", "service.version": "0.0.0"}

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        attributes = {"scope": _scope(record)}
        attributes.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        )
        if record.exc_info:
            attributes["exception.stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(
            {
                "timestamp": f"{ts:%Y-%m-%dT%H:%M:%S}.{ts.microsecond * 1000:09d}Z",
                "severityText": _severity(record.levelno),
                "body": record.getMessage(),
                "attributes": attributes,
                "resource": self._resource,
            },
            separators=(",", ":"),
            default=str,
        )


class HumanFormatter(logging.Formatter):
    """Single-line terminal output, optionally colored by level."""

    _RESET = "\x1b[0m"
    _SCOPE_COLOR = "\x1b[36m"
    # Checked in order: first threshold the level reaches wins
    _LEVEL_COLORS = ((logging.ERROR, "\x1b[31m"), (logging.WARNING, "\x1b[33m"), (logging.INFO, ""))
    _DEBUG_COLOR = "\x1b[2m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        if not (self._use_colors and color):
            return text
        return f"{color}{text}{self._RESET}"

    def _level_color(self, levelno: int) -> str:
        for threshold, color in self._LEVEL_COLORS:
            if levelno >= threshold:
                return color
        return self._DEBUG_COLOR

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line = (
            f"{ts:%H:%M:%S} "
            f"{self._paint(f'{_severity(record.levelno):<5}', self._level_color(record.levelno))} "
            f"{self._paint(f'[{_scope(record)}]', self._SCOPE_COLOR)} "
            f"{record.getMessage()}"
        )
        symbol = getattr(record, "symbol", None)
        if symbol:
            line += f" ({symbol})"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _create_handler(fmt: str | None = None) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if (fmt or _get_log_format()).lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(HumanFormatter(use_colors=sys.stderr.isatty()))
    return handler


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
) -> None:
    """
    Configure apiref logging.

    Parameters
    ----------
    level : str or int, default "INFO"
        Level name (``trace``, ``debug``, ``info``, ``warn``, ``error``,
        ``fatal``, ``off``) or a ``logging`` constant.

    format : str, optional
        ``"json"`` or ``"human"``. Defaults to ``APIREF_LOG_FORMAT``, else
        human on a terminal and JSON otherwise.

    Examples
    --------
    Show every visit request while generating::

        >>> import apiref
        >>> apiref.setup_logging("DEBUG", format="human")
    """
    logger.handlers.clear()
    logger.addHandler(_create_handler(format))
    logger.setLevel(_parse_level(level))


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Adds the fixed scope to every record, keeping per-call extras."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """Logger adapter on the ``apiref`` logger tagging records with ``scope``."""
    return _ScopedLoggerAdapter(logger, {"scope": scope})


# Leave handlers alone if the embedding application configured them
if not logger.handlers:
    logger.addHandler(_create_handler())
    logger.setLevel(_get_log_level())

"""
forgecord Logging Subsystem

Purpose
-------
Structured logging shared by every forgecord component:

- JSON lines in production (or with ``LOG_JSON``), plain or colored text
  otherwise.
- Interaction context (user_id, guild_id, custom_id, component,
  correlation_id) carried in a ContextVar and stamped onto each record.
- Handler I/O runs on a ``QueueListener`` thread, never on the event loop.

forgecord is a library, so nothing is configured on import; bots call
``setup_logging()`` once at startup and ``shutdown_logging()`` on exit.
Modules only ever call ``get_logger(__name__)``.

Dependencies
------------
- forgecord.core.config.Config
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Dict, Optional

from forgecord.core.config.config import Config

CONTEXT_FIELDS = ("user_id", "guild_id", "custom_id", "component", "correlation_id")
NOISY_LOGGERS = ("discord", "discord.http", "discord.gateway", "asyncio")
TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"

# Attributes every LogRecord carries; anything else on a record came from extra=.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

_interaction_context: ContextVar[Dict[str, Any]] = ContextVar(
    "forge_interaction_context",
    default={},
)
_listener: Optional[QueueListener] = None


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Output settings resolved from ``Config`` when logging is set up."""

    level: int
    json: bool
    colors: bool

    @classmethod
    def from_config(cls) -> "LogSettings":
        level = logging.getLevelName(str(Config.LOG_LEVEL).upper())
        use_json = Config.is_production() if Config.LOG_JSON is None else bool(Config.LOG_JSON)
        return cls(
            level=level if isinstance(level, int) else logging.INFO,
            json=use_json,
            colors=not use_json and Config.LOG_COLORS and sys.stdout.isatty(),
        )


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    """Copy the current interaction context onto the record; explicit extra= wins."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _interaction_context.get()
        for key in CONTEXT_FIELDS:
            if not hasattr(record, key):
                setattr(record, key, context.get(key))
        if record.component is None:
            record.component = record.name.split(".", 1)[0]
        return True


class ColoredFormatter(logging.Formatter):
    LEVEL_COLORS = {
        logging.DEBUG: "\033[90m",
        logging.INFO: "\033[94m",
        logging.WARNING: "\033[93m",
        logging.ERROR: "\033[91m",
        logging.CRITICAL: "\033[1;91m",
    }

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        return f"{color}{line}\033[0m" if color else line


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Context fields sit at the top level; other ``extra=`` fields are nested
    under ``"extra"``.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {key: getattr(record, key) for key in CONTEXT_FIELDS if getattr(record, key, None) is not None}
        )

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in CONTEXT_FIELDS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _build_formatter(settings: LogSettings) -> logging.Formatter:
    if settings.json:
        return JSONFormatter()
    formatter_cls = ColoredFormatter if settings.colors else logging.Formatter
    return formatter_cls(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


# ============================================================================
# Setup / Teardown
# ============================================================================


def setup_logging() -> None:
    """Route the root logger through a queue to a stdout handler. Idempotent."""
    global _listener

    if _listener is not None:
        return

    settings = LogSettings.from_config()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_build_formatter(settings))

    log_queue: "queue.SimpleQueue[logging.LogRecord]" = queue.SimpleQueue()
    _listener = QueueListener(log_queue, console)
    _listener.start()

    queue_handler = QueueHandler(log_queue)
    # Context is captured on the emitting task, before the record is queued.
    queue_handler.addFilter(ContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.level)
    root.addHandler(queue_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={
            "environment": Config.ENVIRONMENT,
            "log_level": logging.getLevelName(settings.level),
            "json": settings.json,
        },
    )


def shutdown_logging() -> None:
    """Flush queued records and detach the handlers installed by ``setup_logging``."""
    global _listener

    if _listener is None:
        return

    listener, _listener = _listener, None
    listener.stop()

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, QueueHandler):
            root.removeHandler(handler)
            handler.close()


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


# ============================================================================
# Interaction Context
# ============================================================================


class LogContext:
    """
    Attach interaction context to every record logged inside the block.

    Usage
    -----
    >>> async with LogContext(user_id=1, custom_id="open_ticket"):
    ...     logger.info("Dispatching")
    """

    def __init__(
        self,
        user_id: Optional[int] = None,
        guild_id: Optional[int] = None,
        custom_id: Optional[str] = None,
        component: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = {
            "user_id": str(user_id) if user_id is not None else None,
            "guild_id": str(guild_id) if guild_id is not None else None,
            "custom_id": custom_id,
            "component": component,
            "correlation_id": correlation_id or uuid.uuid4().hex[:8],
            **extra,
        }
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _interaction_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _interaction_context.reset(self._token)
            self._token = None

    async def __aenter__(self) -> "LogContext":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def set_log_context(**fields: Any) -> None:
    current = dict(_interaction_context.get())
    current.update({key: value for key, value in fields.items() if value is not None})
    _interaction_context.set(current)


def clear_log_context() -> None:
    _interaction_context.set({})

"""
forgecord logging infrastructure.

Exports the structured logging subsystem and the log context helpers.
"""

from forgecord.core.logging.logger import (
    LogContext,
    LogSettings,
    clear_log_context,
    get_logger,
    set_log_context,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "LogContext",
    "set_log_context",
    "clear_log_context",
    "LogSettings",
]

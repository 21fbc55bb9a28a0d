"""
Core infrastructure: configuration, logging, exceptions and REST access.
"""

from forgecord.core.config import Config, Environment
from forgecord.core.exceptions import (
    ConfirmationTimedOutError,
    CooldownActiveError,
    ErrorCode,
    ErrorSeverity,
    ForgeError,
    InvalidDurationError,
    InvalidFormBodyError,
    InvalidPageError,
    InvalidPatternError,
    NoPagesError,
    NotReadyError,
    RateLimitedError,
    RestError,
    WebhookInvalidUrlError,
)
from forgecord.core.logging import LogContext, get_logger, setup_logging, shutdown_logging
from forgecord.core.rest import ForgeRest

__all__ = [
    "Config",
    "Environment",
    "ForgeRest",
    "LogContext",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "ErrorCode",
    "ErrorSeverity",
    "ForgeError",
    "InvalidPatternError",
    "InvalidPageError",
    "NoPagesError",
    "InvalidDurationError",
    "InvalidFormBodyError",
    "CooldownActiveError",
    "ConfirmationTimedOutError",
    "NotReadyError",
    "RestError",
    "RateLimitedError",
    "WebhookInvalidUrlError",
]

"""
Exceptions for forgecord.

Purpose
-------
Define the structured exception hierarchy raised by every forgecord
component: validation failures at registration/construction time, contextual
failures (cooldown active, confirmation timed out) and REST failures mapped
from Discord error responses.

Design Notes
------------
- All exceptions inherit from ``ForgeError``.
- Each exception carries:
  - ``code``: an ``ErrorCode`` value, stable for programmatic handling
  - ``message``: human-readable description
  - ``details``: additional structured context (dict)
  - ``severity``: ``ErrorSeverity`` value for logging
  - ``is_retryable``: whether the operation can be retried
  - ``http_status`` / ``discord_code``: set for REST failures only
- Validation errors are raised synchronously by the call that caused them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels for logging."""

    DEBUG = "debug"  # Expected, not concerning (e.g., cooldowns)
    INFO = "info"  # Normal operation (e.g., validation failures)
    WARNING = "warning"  # Concerning but handled (e.g., rate limits)
    ERROR = "error"  # Unexpected errors requiring attention


class ErrorCode(str, Enum):
    """Stable error identifiers."""

    # REST / HTTP
    RATE_LIMITED = "RATE_LIMITED"
    UNKNOWN = "UNKNOWN"
    CLIENT_NOT_READY = "CLIENT_NOT_READY"

    # Discord API
    UNKNOWN_INTERACTION = "UNKNOWN_INTERACTION"
    UNKNOWN_CHANNEL = "UNKNOWN_CHANNEL"
    UNKNOWN_GUILD = "UNKNOWN_GUILD"
    UNKNOWN_MESSAGE = "UNKNOWN_MESSAGE"
    UNKNOWN_WEBHOOK = "UNKNOWN_WEBHOOK"
    MISSING_PERMISSIONS = "MISSING_PERMISSIONS"
    MISSING_ACCESS = "MISSING_ACCESS"
    INVALID_FORM_BODY = "INVALID_FORM_BODY"

    # Soundboard
    SOUNDBOARD_INVALID_VOLUME = "SOUNDBOARD_INVALID_VOLUME"

    # Polls
    POLL_INVALID_DURATION = "POLL_INVALID_DURATION"
    POLL_TOO_MANY_ANSWERS = "POLL_TOO_MANY_ANSWERS"

    # Monetization
    ENTITLEMENT_NOT_FOUND = "ENTITLEMENT_NOT_FOUND"
    SKU_NOT_FOUND = "SKU_NOT_FOUND"

    # Webhooks
    WEBHOOK_INVALID_URL = "WEBHOOK_INVALID_URL"

    # Interaction Router
    ROUTER_INVALID_PATTERN = "ROUTER_INVALID_PATTERN"

    # Paginator
    PAGINATOR_NO_PAGES = "PAGINATOR_NO_PAGES"
    PAGINATOR_INVALID_PAGE = "PAGINATOR_INVALID_PAGE"

    # Cooldowns
    COOLDOWN_ACTIVE = "COOLDOWN_ACTIVE"
    COOLDOWN_INVALID_DURATION = "COOLDOWN_INVALID_DURATION"

    # Confirmations
    CONFIRMATION_TIMED_OUT = "CONFIRMATION_TIMED_OUT"


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.RATE_LIMITED: "You are being rate limited. Please wait before retrying.",
    ErrorCode.UNKNOWN: "An unknown error occurred.",
    ErrorCode.CLIENT_NOT_READY: "The client is not ready. Wait for the ready event.",
    ErrorCode.UNKNOWN_INTERACTION: "The interaction token is invalid or expired (15-minute limit).",
    ErrorCode.UNKNOWN_CHANNEL: "Channel does not exist or the bot has no access.",
    ErrorCode.UNKNOWN_GUILD: "Guild not found or bot is not a member.",
    ErrorCode.UNKNOWN_MESSAGE: "Message not found.",
    ErrorCode.UNKNOWN_WEBHOOK: "Webhook not found.",
    ErrorCode.MISSING_PERMISSIONS: "Bot is missing required permissions for this action.",
    ErrorCode.MISSING_ACCESS: "Bot cannot access this resource.",
    ErrorCode.INVALID_FORM_BODY: "Request body is invalid. Check your parameters.",
    ErrorCode.SOUNDBOARD_INVALID_VOLUME: "Volume must be between 0 and 1.",
    ErrorCode.POLL_INVALID_DURATION: "Poll duration must be between 1 and 168 hours.",
    ErrorCode.POLL_TOO_MANY_ANSWERS: "Poll can have at most 10 answer options.",
    ErrorCode.ENTITLEMENT_NOT_FOUND: "Entitlement not found for this user/guild.",
    ErrorCode.SKU_NOT_FOUND: "SKU not found for this application.",
    ErrorCode.WEBHOOK_INVALID_URL: "Invalid Discord webhook URL format.",
    ErrorCode.ROUTER_INVALID_PATTERN: "Invalid customId pattern. Patterns must be strings or compiled regular expressions.",
    ErrorCode.PAGINATOR_NO_PAGES: "Paginator requires at least one page.",
    ErrorCode.PAGINATOR_INVALID_PAGE: "Page index out of bounds.",
    ErrorCode.COOLDOWN_ACTIVE: "This command is on cooldown.",
    ErrorCode.COOLDOWN_INVALID_DURATION: "Cooldown duration must be greater than 0.",
    ErrorCode.CONFIRMATION_TIMED_OUT: "Confirmation timed out. No response received.",
}


class ForgeError(Exception):
    """
    Base exception for all forgecord errors.

    Args:
        code: Stable error code; selects the base message
        extra: Optional detail appended to the base message
        details: Additional structured data about the error
        http_status: HTTP status for REST failures
        discord_code: Discord JSON error code for REST failures

    Example:
        >>> raise ForgeError(ErrorCode.UNKNOWN, "HTTP 500: Internal Server Error")
    """

    DEFAULT_CODE: ErrorCode = ErrorCode.UNKNOWN
    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: bool = False

    def __init__(
        self,
        code: Optional[ErrorCode] = None,
        extra: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
        http_status: Optional[int] = None,
        discord_code: Optional[int] = None,
    ) -> None:
        self.code: ErrorCode = code or self.DEFAULT_CODE
        base = ERROR_MESSAGES.get(self.code, "Unknown error.")
        self.message: str = f"{base} ({extra})" if extra else base
        self.details: Dict[str, Any] = details or {}
        self.severity: ErrorSeverity = self.DEFAULT_SEVERITY
        self.is_retryable: bool = self.code is ErrorCode.RATE_LIMITED or self.DEFAULT_RETRYABLE
        self.http_status = http_status
        self.discord_code = discord_code
        super().__init__(self.message)

    @property
    def error_code(self) -> str:
        return self.code.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "http_status": self.http_status,
            "discord_code": self.discord_code,
        }

    def __str__(self) -> str:
        return f"[forgecord/{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"details={self.details!r}"
            ")"
        )


# ============================================================================
# Validation errors (raised synchronously)
# ============================================================================


class InvalidPatternError(ForgeError):
    """Route registration with a non-string/non-regex pattern or a non-callable handler."""

    DEFAULT_CODE = ErrorCode.ROUTER_INVALID_PATTERN
    DEFAULT_SEVERITY = ErrorSeverity.INFO


class InvalidPageError(ForgeError):
    """Paginator navigation to an out-of-range index."""

    DEFAULT_CODE = ErrorCode.PAGINATOR_INVALID_PAGE
    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, index: int, total: int) -> None:
        self.index = index
        self.total = total
        super().__init__(
            extra=f"index {index} out of bounds for {total} page(s)",
            details={"index": index, "total": total},
        )


class NoPagesError(ForgeError):
    """Paginator constructed with zero pages."""

    DEFAULT_CODE = ErrorCode.PAGINATOR_NO_PAGES
    DEFAULT_SEVERITY = ErrorSeverity.INFO


class InvalidDurationError(ForgeError):
    """Cooldown set/use with a non-positive duration."""

    DEFAULT_CODE = ErrorCode.COOLDOWN_INVALID_DURATION
    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, duration: float) -> None:
        self.duration = duration
        super().__init__(extra=f"got {duration}", details={"duration": duration})


class InvalidFormBodyError(ForgeError):
    """Request parameters rejected before any HTTP call was made."""

    DEFAULT_CODE = ErrorCode.INVALID_FORM_BODY
    DEFAULT_SEVERITY = ErrorSeverity.INFO


class WebhookInvalidUrlError(ForgeError):
    """Webhook URL does not match the Discord webhook URL format."""

    DEFAULT_CODE = ErrorCode.WEBHOOK_INVALID_URL
    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(extra=url)


# ============================================================================
# Contextual errors
# ============================================================================


class CooldownActiveError(ForgeError):
    """
    Raised by ``CooldownManager.use`` while the entity is on cooldown.

    Args:
        bucket: Cooldown bucket (usually the command name)
        remaining: Seconds until the cooldown expires
    """

    DEFAULT_CODE = ErrorCode.COOLDOWN_ACTIVE
    DEFAULT_SEVERITY = ErrorSeverity.DEBUG
    DEFAULT_RETRYABLE = True

    def __init__(self, bucket: str, remaining: float, remaining_text: str) -> None:
        self.bucket = bucket
        self.remaining = remaining
        self.remaining_text = remaining_text
        super().__init__(
            extra=f"{remaining_text} remaining",
            details={
                "bucket": bucket,
                "remaining": remaining,
                "retry_after": remaining,
            },
        )


class ConfirmationTimedOutError(ForgeError):
    """Confirmation session expired without a qualifying click."""

    DEFAULT_CODE = ErrorCode.CONFIRMATION_TIMED_OUT
    DEFAULT_SEVERITY = ErrorSeverity.DEBUG


class NotReadyError(ForgeError):
    """A collaborator client handle was required but unavailable."""

    DEFAULT_CODE = ErrorCode.CLIENT_NOT_READY
    DEFAULT_SEVERITY = ErrorSeverity.WARNING


# ============================================================================
# REST errors
# ============================================================================


class RestError(ForgeError):
    """A Discord REST call failed; ``code`` is mapped from the Discord error code."""

    DEFAULT_SEVERITY = ErrorSeverity.WARNING


class RateLimitedError(RestError):
    """HTTP 429 surfaced from the REST layer."""

    DEFAULT_CODE = ErrorCode.RATE_LIMITED

    def __init__(
        self,
        retry_after: Optional[float] = None,
        *,
        http_status: int = 429,
        discord_code: Optional[int] = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(
            extra=f"Retry-After: {retry_after}s" if retry_after is not None else None,
            details={"retry_after": retry_after},
            http_status=http_status,
            discord_code=discord_code,
        )

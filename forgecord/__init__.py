"""
forgecord: interaction utilities and extra REST coverage for discord.py.

    >>> from forgecord import InteractionRouter, Paginator, CooldownManager, ConfirmationManager
"""

from forgecord.cooldowns import CooldownConfig, CooldownManager, CooldownResult, RedisCooldownStore
from forgecord.core import (
    Config,
    ConfirmationTimedOutError,
    CooldownActiveError,
    ErrorCode,
    ForgeError,
    ForgeRest,
    InvalidDurationError,
    InvalidFormBodyError,
    InvalidPageError,
    InvalidPatternError,
    NoPagesError,
    NotReadyError,
    RateLimitedError,
    RestError,
    WebhookInvalidUrlError,
    get_logger,
    setup_logging,
)
from forgecord.managers import (
    MonetizationManager,
    OnboardingManager,
    PollAnswer,
    PollManager,
    SoundboardManager,
    SuperReactionsManager,
    VoiceEffectsManager,
)
from forgecord.routing import InteractionRouter, PatternMatcher, RouteMatch
from forgecord.ui import (
    ConfirmationConfig,
    ConfirmationManager,
    EmbedPresets,
    Mention,
    Paginator,
    PaginatorConfig,
    PaginatorLabels,
    Strings,
    Timestamp,
    format_duration,
)
from forgecord.utils import Perms
from forgecord.webhooks import WebhookSender

__version__ = "1.0.0"

__all__ = [
    "InteractionRouter",
    "PatternMatcher",
    "RouteMatch",
    "CooldownManager",
    "CooldownConfig",
    "CooldownResult",
    "RedisCooldownStore",
    "Paginator",
    "PaginatorConfig",
    "PaginatorLabels",
    "ConfirmationManager",
    "ConfirmationConfig",
    "WebhookSender",
    "ForgeRest",
    "SoundboardManager",
    "PollManager",
    "PollAnswer",
    "MonetizationManager",
    "OnboardingManager",
    "VoiceEffectsManager",
    "SuperReactionsManager",
    "EmbedPresets",
    "Timestamp",
    "Mention",
    "Strings",
    "format_duration",
    "Perms",
    "Config",
    "get_logger",
    "setup_logging",
    "ErrorCode",
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

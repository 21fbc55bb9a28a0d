"""
Static configuration for forgecord.

Purpose
-------
Centralized static configuration loaded from environment variables (with
``.env`` support) and documented defaults. Component configuration
dataclasses (paginator, confirmation, cooldowns) read their defaults here, so
a deployment can tune timeouts without touching call sites.

Environment Variables
---------------------
- DISCORD_TOKEN: Bot token (only needed by the example bot)
- ENVIRONMENT: development | testing | staging | production
- LOG_LEVEL: Logging level (default: INFO)
- LOG_JSON: Force JSON console logs (default: production only)
- LOG_COLORS: Colored console logs in development (default: True)
- FORGE_PAGINATOR_TIMEOUT: Paginator idle timeout in seconds (default: 120)
- FORGE_CONFIRMATION_TIMEOUT: Confirmation timeout in seconds (default: 30)
- FORGE_COOLDOWN_SWEEP_INTERVAL: Cooldown sweep interval in seconds (default: 60)
- FORGE_COOLDOWN_PREFIX: Key prefix for cooldown entries (default: forge:cd:)
- REDIS_URL: Redis URL for the shared cooldown store
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string with fallback to development.

        Example
        -------
        >>> Environment.from_string("PRODUCTION") == Environment.PRODUCTION
        True
        """
        try:
            return cls(value.lower())
        except ValueError:
            logging.warning(
                f"Unknown environment '{value}', defaulting to development"
            )
            return cls.DEVELOPMENT


class Config:
    """
    Centralized static configuration.

    Values are class attributes so they can be read without instantiation.
    ``Config.load()`` runs on import and can be called again (e.g. in tests
    after patching the environment).

    Usage
    -----
    >>> from forgecord.core.config import Config
    >>> Config.PAGINATOR_TIMEOUT
    120.0
    """

    _validation_errors: Dict[str, str] = {}

    # =========================================================================
    # Discord
    # =========================================================================

    DISCORD_TOKEN: str = ""

    # =========================================================================
    # Environment / Logging
    # =========================================================================

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_COLORS: bool = True

    # =========================================================================
    # Interaction Utilities
    # =========================================================================

    PAGINATOR_TIMEOUT: float = 120.0
    CONFIRMATION_TIMEOUT: float = 30.0
    COOLDOWN_SWEEP_INTERVAL: float = 60.0
    COOLDOWN_KEY_PREFIX: str = "forge:cd:"

    # =========================================================================
    # Redis
    # =========================================================================

    REDIS_URL: str = "redis://localhost:6379/0"

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @classmethod
    def _record_error(cls, key: str, error: str) -> None:
        logging.warning(error)
        cls._validation_errors[key] = error

    @classmethod
    def _safe_float(
        cls,
        key: str,
        default: float,
        min_val: Optional[float] = None,
    ) -> float:
        """
        Parse a float from the environment, falling back to ``default``.

        Example
        -------
        >>> Config._safe_float("FORGE_PAGINATOR_TIMEOUT", 120.0, min_val=1.0)
        120.0
        """
        raw_value = os.getenv(key)
        if raw_value is None:
            return default

        try:
            value = float(raw_value)
        except ValueError:
            cls._record_error(
                key, f"{key}='{raw_value}' is not a valid number, using default {default}"
            )
            return default

        if min_val is not None and value < min_val:
            cls._record_error(
                key, f"{key}={value} is below minimum {min_val}, using default {default}"
            )
            return default

        return value

    @classmethod
    def _safe_bool(cls, key: str, default: Optional[bool]) -> Optional[bool]:
        """Parse true/false, yes/no, 1/0, on/off (case-insensitive)."""
        raw_value = os.getenv(key)
        if raw_value is None:
            return default

        normalized = raw_value.lower().strip()
        if normalized in {"true", "yes", "1", "on"}:
            return True
        if normalized in {"false", "no", "0", "off"}:
            return False

        cls._record_error(
            key, f"{key}='{raw_value}' is not a valid boolean, using default {default}"
        )
        return default

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        value = os.getenv(key, default)
        return value if value else default

    # =========================================================================
    # Configuration Loading
    # =========================================================================

    @classmethod
    def load(cls) -> None:
        """Load all configuration from environment variables."""
        cls._validation_errors = {}

        cls.DISCORD_TOKEN = os.getenv("DISCORD_TOKEN", "")

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENVIRONMENT", "development")
        ).value
        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", "INFO").upper()
        cls.LOG_JSON = cls._safe_bool("LOG_JSON", None)
        cls.LOG_COLORS = bool(cls._safe_bool("LOG_COLORS", True))

        cls.PAGINATOR_TIMEOUT = cls._safe_float(
            "FORGE_PAGINATOR_TIMEOUT", 120.0, min_val=1.0
        )
        cls.CONFIRMATION_TIMEOUT = cls._safe_float(
            "FORGE_CONFIRMATION_TIMEOUT", 30.0, min_val=1.0
        )
        cls.COOLDOWN_SWEEP_INTERVAL = cls._safe_float(
            "FORGE_COOLDOWN_SWEEP_INTERVAL", 60.0, min_val=1.0
        )
        cls.COOLDOWN_KEY_PREFIX = cls._safe_str("FORGE_COOLDOWN_PREFIX", "forge:cd:")

        cls.REDIS_URL = cls._safe_str("REDIS_URL", "redis://localhost:6379/0")

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """Non-secret configuration snapshot for startup logging."""
        return {
            "environment": cls.ENVIRONMENT,
            "log_level": cls.LOG_LEVEL,
            "paginator_timeout": cls.PAGINATOR_TIMEOUT,
            "confirmation_timeout": cls.CONFIRMATION_TIMEOUT,
            "cooldown_sweep_interval": cls.COOLDOWN_SWEEP_INTERVAL,
            "cooldown_key_prefix": cls.COOLDOWN_KEY_PREFIX,
            "token_configured": bool(cls.DISCORD_TOKEN),
            "validation_errors": len(cls._validation_errors),
        }


Config.load()

"""Bucketed cooldowns with lazy expiry and a background sweep."""

from forgecord.cooldowns.manager import (
    CooldownConfig,
    CooldownManager,
    CooldownResult,
    CooldownScopes,
    SweepTimer,
)
from forgecord.cooldowns.store import CooldownStore, RedisCooldownStore

__all__ = [
    "CooldownManager",
    "CooldownConfig",
    "CooldownResult",
    "CooldownScopes",
    "CooldownStore",
    "RedisCooldownStore",
    "SweepTimer",
]

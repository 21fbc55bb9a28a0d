"""
Cooldown stores.

A store is any ``MutableMapping[str, float]`` from composite key to expiry
instant. ``CooldownManager`` only uses ``get``, ``__setitem__``, ``pop`` and
key iteration, so a plain ``dict`` works as the in-process default.

``RedisCooldownStore`` shares cooldowns between processes. Monotonic clocks
are per-process, so the manager switches to wall-clock time (``time.time``)
when given a store that declares ``preferred_clock``.
"""

from __future__ import annotations

import time
from typing import Callable, Iterator, MutableMapping, Optional, Union

import redis

from forgecord.core.config.config import Config
from forgecord.core.logging.logger import get_logger

logger = get_logger(__name__)

CooldownStore = MutableMapping[str, float]


class RedisCooldownStore(MutableMapping[str, float]):
    """
    Redis-backed cooldown store (synchronous client).

    Entries are written with a PX expiry matching the cooldown, so Redis
    reaps expired keys on its own; ``CooldownManager.sweep()`` still works
    and simply finds little to remove. Calls block, so the manager runs its
    sweep and ``destroy`` clear in a worker thread.

    Iteration is scoped to the owning manager's ``CooldownConfig.key_prefix``.

    Usage
    -----
    >>> store = RedisCooldownStore.from_url("redis://localhost:6379/0")
    >>> cooldowns = CooldownManager(store=store)
    """

    preferred_clock: Callable[[], float] = staticmethod(time.time)

    def __init__(self, client: "redis.Redis") -> None:
        self._client = client
        self._match = f"{Config.COOLDOWN_KEY_PREFIX}*"

    def bind_prefix(self, key_prefix: str) -> None:
        """Scope iteration to ``key_prefix``; ``CooldownManager`` calls this with its own prefix."""
        self._match = f"{key_prefix}*"

    @classmethod
    def from_url(cls, url: Optional[str] = None, **kwargs) -> "RedisCooldownStore":
        client = redis.Redis.from_url(url or Config.REDIS_URL, decode_responses=True, **kwargs)
        logger.info("Redis cooldown store connected", extra={"url": url or Config.REDIS_URL})
        return cls(client)

    @staticmethod
    def _decode(value: Union[str, bytes]) -> str:
        return value.decode() if isinstance(value, bytes) else value

    def __getitem__(self, key: str) -> float:
        raw = self._client.get(key)
        if raw is None:
            raise KeyError(key)
        return float(self._decode(raw))

    def __setitem__(self, key: str, expiry: float) -> None:
        ttl_ms = max(1, int((expiry - time.time()) * 1000))
        self._client.set(key, repr(expiry), px=ttl_ms)

    def __delitem__(self, key: str) -> None:
        if not self._client.delete(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        for key in self._client.scan_iter(match=self._match):
            yield self._decode(key)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def clear(self) -> None:
        keys = list(self)
        if keys:
            self._client.delete(*keys)

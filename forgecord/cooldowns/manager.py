"""
CooldownManager: per-user, per-guild, per-channel or global cooldowns.

Purpose
-------
Track ``bucket:entity -> expiry`` entries so command handlers can refuse
repeated use within a window.

Responsibilities
----------------
- ``check`` (pure read), ``set`` (unconditional overwrite), ``use``
  (check-then-set, raising ``CooldownActiveError``), ``reset``,
  ``reset_all``, ``remaining`` and ``sweep``.
- Scope helpers deriving the entity id from a ``discord.Interaction``.
- A background ``SweepTimer`` that bounds memory by removing expired
  entries; expiry itself is lazy, so correctness never depends on the sweep.

Lifecycle
---------
The sweep task starts at construction when an event loop is running, or on
``await start()``. ``await destroy()`` cancels it and clears the store.
``async with CooldownManager() as cooldowns:`` guarantees the timer is
cancelled on every exit path.

All durations are seconds.

Usage
-----
>>> cooldowns = CooldownManager()
>>> try:
...     cooldowns.scope.user("ban", interaction, 10)
... except CooldownActiveError as exc:
...     await interaction.response.send_message(
...         f"Wait **{exc.remaining_text}** before using this again.", ephemeral=True
...     )
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from forgecord.cooldowns.store import CooldownStore
from forgecord.core.config.config import Config
from forgecord.core.exceptions import CooldownActiveError, InvalidDurationError
from forgecord.core.logging.logger import get_logger
from forgecord.ui.formatters import format_duration

logger = get_logger(__name__)

GLOBAL_ENTITY = "global"
DM_SENTINEL = "dm"


@dataclass(frozen=True, slots=True)
class CooldownConfig:
    """
    Cooldown manager configuration.

    Attributes:
        key_prefix: Prefix for every store key
        auto_sweep: Run the background sweep task
        sweep_interval: Seconds between sweeps
        clear_on_destroy: Clear the store when the manager is destroyed
    """

    key_prefix: str = field(default_factory=lambda: Config.COOLDOWN_KEY_PREFIX)
    auto_sweep: bool = True
    sweep_interval: float = field(default_factory=lambda: Config.COOLDOWN_SWEEP_INTERVAL)
    clear_on_destroy: bool = True


@dataclass(frozen=True, slots=True)
class CooldownResult:
    on_cooldown: bool
    remaining: float = 0.0
    expiry: Optional[float] = None

    @property
    def remaining_text(self) -> str:
        if not self.on_cooldown:
            return "0s"
        return format_duration(self.remaining)


class SweepTimer:
    """
    Repeating asyncio task that calls ``callback`` every ``interval`` seconds.

    With ``offload=True`` the callback runs in a worker thread, for stores
    whose iteration does network round-trips.
    """

    def __init__(
        self, callback: Callable[[], Any], interval: float, *, offload: bool = False
    ) -> None:
        self._callback = callback
        self._interval = interval
        self._offload = offload
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                if self._offload:
                    await asyncio.to_thread(self._callback)
                else:
                    self._callback()
            except Exception:
                logger.error("Cooldown sweep failed", exc_info=True)


class CooldownScopes:
    """
    Entity-id conventions for common scopes. Each helper delegates to ``use``.

    >>> cooldowns.scope.user("ban", interaction, 10)     # user_<id>
    >>> cooldowns.scope.guild("ban", interaction, 30)    # guild_<id> / guild_dm
    >>> cooldowns.scope.channel("ban", interaction, 5)   # channel_<id>
    >>> cooldowns.scope.global_("ban", interaction, 60)  # global
    """

    def __init__(self, manager: "CooldownManager") -> None:
        self._manager = manager

    def user(self, bucket: str, interaction: Any, duration: float) -> float:
        return self._manager.use(bucket, f"user_{interaction.user.id}", duration)

    def guild(self, bucket: str, interaction: Any, duration: float) -> float:
        guild_id = getattr(interaction, "guild_id", None)
        return self._manager.use(
            bucket, f"guild_{guild_id if guild_id is not None else DM_SENTINEL}", duration
        )

    def channel(self, bucket: str, interaction: Any, duration: float) -> float:
        return self._manager.use(bucket, f"channel_{interaction.channel_id}", duration)

    def global_(self, bucket: str, interaction: Any, duration: float) -> float:
        return self._manager.use(bucket, GLOBAL_ENTITY, duration)


class CooldownManager:
    """In-memory (or pluggable store) cooldown tracker."""

    def __init__(
        self,
        config: Optional[CooldownConfig] = None,
        *,
        store: Optional[CooldownStore] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config or CooldownConfig()
        self._store: CooldownStore = store if store is not None else {}
        self._clock: Callable[[], float] = (
            clock or getattr(self._store, "preferred_clock", None) or time.monotonic
        )
        bind_prefix = getattr(self._store, "bind_prefix", None)
        if bind_prefix is not None:
            bind_prefix(self.config.key_prefix)
        self._sweeper = SweepTimer(
            self.sweep,
            self.config.sweep_interval,
            offload=not isinstance(self._store, dict),
        )
        self.scope = CooldownScopes(self)

        if self.config.auto_sweep:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop; cooldown sweep starts on start()")
            else:
                self._sweeper.start()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def sweeping(self) -> bool:
        return self._sweeper.running

    async def start(self) -> None:
        if self.config.auto_sweep:
            self._sweeper.start()

    async def destroy(self) -> None:
        """Stop the sweep task and, unless configured otherwise, clear the store."""
        await self._sweeper.stop()
        if self.config.clear_on_destroy:
            if isinstance(self._store, dict):
                self._store.clear()
            else:
                await asyncio.to_thread(self._store.clear)

    async def __aenter__(self) -> "CooldownManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.destroy()

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def key(self, bucket: str, entity_id: Any) -> str:
        return f"{self.config.key_prefix}{bucket}:{entity_id}"

    def check(self, bucket: str, entity_id: Any) -> CooldownResult:
        """Report cooldown state without mutating anything."""
        expiry = self._store.get(self.key(bucket, entity_id))
        now = self._clock()

        if expiry is None or expiry <= now:
            return CooldownResult(on_cooldown=False)

        return CooldownResult(on_cooldown=True, remaining=expiry - now, expiry=expiry)

    def set(self, bucket: str, entity_id: Any, duration: float) -> float:
        """Start (or overwrite) a cooldown; returns the expiry instant."""
        if duration <= 0:
            raise InvalidDurationError(duration)

        expiry = self._clock() + duration
        self._store[self.key(bucket, entity_id)] = expiry
        return expiry

    def use(self, bucket: str, entity_id: Any, duration: float) -> float:
        """
        Check and set in one step.

        Raises:
            InvalidDurationError: duration <= 0
            CooldownActiveError: entity is still on cooldown
        """
        if duration <= 0:
            raise InvalidDurationError(duration)

        result = self.check(bucket, entity_id)
        if result.on_cooldown:
            logger.debug(
                "Cooldown active",
                extra={
                    "bucket": bucket,
                    "entity_id": str(entity_id),
                    "remaining": round(result.remaining, 3),
                },
            )
            raise CooldownActiveError(bucket, result.remaining, result.remaining_text)

        return self.set(bucket, entity_id, duration)

    def reset(self, bucket: str, entity_id: Any) -> None:
        self._store.pop(self.key(bucket, entity_id), None)

    def reset_all(self, bucket: str) -> int:
        """Remove every entry of ``bucket``; returns the number removed."""
        prefix = f"{self.config.key_prefix}{bucket}:"
        doomed = [key for key in list(self._store) if key.startswith(prefix)]
        for key in doomed:
            self._store.pop(key, None)
        return len(doomed)

    def remaining(self, bucket: str, entity_id: Any) -> float:
        return self.check(bucket, entity_id).remaining

    def sweep(self) -> int:
        """Physically remove expired entries; returns the number removed."""
        now = self._clock()
        removed = 0

        for key in list(self._store):
            expiry = self._store.get(key)
            if expiry is not None and expiry <= now:
                self._store.pop(key, None)
                removed += 1

        if removed:
            logger.debug("Cooldown sweep", extra={"removed": removed})
        return removed

    def __len__(self) -> int:
        return len(self._store)

"""
InteractionRouter: route component/modal customIds to handlers.

Purpose
-------
Replace long if/else chains over ``interaction.data["custom_id"]`` with an
ordered route table. Routes are tested in registration order and the first
match wins; there is no "most specific" resolution, so register narrower
patterns first when they overlap.

Usage
-----
>>> router = InteractionRouter()
>>> router.on("open_ticket", open_ticket)
>>> router.on("role_*", toggle_role)                 # params["wildcard"]
>>> router.on(re.compile(r"^ban_(?P<user_id>\\d+)$"), ban)  # params["user_id"]
>>> router.fallback(unknown_component)
>>> router.attach(bot)

Handlers are called as ``handler(interaction, params)`` and the fallback as
``fallback(interaction)``. Both may be plain functions or coroutine
functions. Exceptions raised by handlers propagate to the caller (discord.py
reports them through ``on_error`` when dispatched from ``on_interaction``).
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from forgecord.core.exceptions import InvalidPatternError, NotReadyError
from forgecord.core.logging.logger import LogContext, get_logger
from forgecord.routing.patterns import PatternMatcher, RouteMatch, RoutePattern

logger = get_logger(__name__)

RouteHandler = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class Route:
    pattern: RoutePattern
    matcher: PatternMatcher
    handler: RouteHandler
    once: bool = False


class InteractionRouter:
    """Ordered customId route table with an optional fallback."""

    def __init__(self) -> None:
        self._routes: List[Route] = []
        self._fallback: Optional[Callable[..., Any]] = None

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        pattern: RoutePattern,
        handler: RouteHandler,
        *,
        once: bool = False,
    ) -> "InteractionRouter":
        """
        Register a handler for a customId pattern.

        Raises:
            InvalidPatternError: pattern is not a str/compiled regex, or
                handler is not callable.
        """
        if not callable(handler):
            raise InvalidPatternError(extra="handler must be callable")

        matcher = PatternMatcher.compile(pattern)
        self._routes.append(Route(pattern, matcher, handler, once))

        logger.debug(
            "Route registered",
            extra={"pattern": str(pattern), "kind": matcher.kind.value, "once": once},
        )
        return self

    def on(self, pattern: RoutePattern, handler: RouteHandler) -> "InteractionRouter":
        return self.register(pattern, handler)

    def once(self, pattern: RoutePattern, handler: RouteHandler) -> "InteractionRouter":
        """Register a handler that is removed after its first match."""
        return self.register(pattern, handler, once=True)

    def set_fallback(self, handler: Optional[Callable[..., Any]]) -> "InteractionRouter":
        """Set (or with ``None`` clear) the handler used when nothing matches."""
        if handler is not None and not callable(handler):
            raise InvalidPatternError(extra="fallback must be callable")
        self._fallback = handler
        return self

    fallback = set_fallback

    def unregister(self, pattern: RoutePattern) -> "InteractionRouter":
        """Remove every route registered with an equal pattern."""
        self._routes = [route for route in self._routes if route.pattern != pattern]
        return self

    off = unregister

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def match(self, custom_id: Optional[str]) -> Optional[Tuple[Route, RouteMatch]]:
        """Return the first route matching ``custom_id`` without running it."""
        if not custom_id:
            return None

        for route in self._routes:
            found = route.matcher.match(custom_id)
            if found is not None:
                return route, found

        return None

    async def dispatch(self, custom_id: Optional[str], interaction: Any = None) -> bool:
        """
        Run the first matching handler for ``custom_id``.

        Returns:
            True if a route handled the id. False if nothing matched (the
            fallback, if any, has run) or the id was empty (nothing ran).
        """
        if not custom_id:
            return False

        hit = self.match(custom_id)

        if hit is None:
            logger.debug("No route matched", extra={"fallback": self._fallback is not None})
            if self._fallback is not None:
                await _maybe_await(self._fallback(interaction))
            return False

        route, found = hit
        if route.once:
            self._routes = [r for r in self._routes if r is not route]

        await _maybe_await(route.handler(interaction, found.params))
        return True

    async def handle(self, interaction: Any) -> bool:
        """``on_interaction`` entry point; ignores interactions without a customId."""
        data = getattr(interaction, "data", None) or {}
        custom_id = data.get("custom_id")
        if not custom_id:
            return False

        user = getattr(interaction, "user", None)
        async with LogContext(
            user_id=getattr(user, "id", None),
            guild_id=getattr(interaction, "guild_id", None),
            custom_id=custom_id,
            component="router",
        ):
            return await self.dispatch(custom_id, interaction)

    def attach(self, bot: Any) -> "InteractionRouter":
        """Subscribe ``handle`` to the bot's ``on_interaction`` event."""
        add_listener = getattr(bot, "add_listener", None)
        if add_listener is None:
            raise NotReadyError(extra="client does not support add_listener; use commands.Bot")

        add_listener(self.handle, "on_interaction")
        return self


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result

"""
ForgeRest: thin wrapper over discord.py's HTTP client.

Purpose
-------
Issue raw Discord REST calls for endpoints discord.py does not expose as
models (soundboard, polls answers, monetization, onboarding, voice effects,
burst reactions) while keeping authentication, rate limiting and retries
inside ``discord.http.HTTPClient``.

Error Handling
--------------
``discord.HTTPException`` is translated into forgecord errors:

- HTTP 429 (or ``discord.RateLimited``) -> ``RateLimitedError``
- known Discord JSON error codes -> ``RestError`` with the matching ``ErrorCode``
- anything else -> ``RestError(ErrorCode.UNKNOWN)``

Usage
-----
>>> rest = ForgeRest(bot)
>>> await rest.request("GET", "/guilds/{guild_id}/onboarding", guild_id=guild.id)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import discord
from discord.http import Route

from forgecord.core.exceptions import ErrorCode, NotReadyError, RateLimitedError, RestError
from forgecord.core.logging.logger import get_logger

logger = get_logger(__name__)

DISCORD_CODE_MAP: Dict[int, ErrorCode] = {
    10062: ErrorCode.UNKNOWN_INTERACTION,
    10003: ErrorCode.UNKNOWN_CHANNEL,
    10004: ErrorCode.UNKNOWN_GUILD,
    10008: ErrorCode.UNKNOWN_MESSAGE,
    10015: ErrorCode.UNKNOWN_WEBHOOK,
    50013: ErrorCode.MISSING_PERMISSIONS,
    50001: ErrorCode.MISSING_ACCESS,
    50035: ErrorCode.INVALID_FORM_BODY,
    10084: ErrorCode.ENTITLEMENT_NOT_FOUND,
    10082: ErrorCode.SKU_NOT_FOUND,
}


def map_http_exception(exc: discord.HTTPException) -> RestError:
    """Translate a discord.py HTTP failure into a forgecord error."""
    status = exc.status
    discord_code = exc.code or 0

    if status == 429:
        return RateLimitedError(
            getattr(exc, "retry_after", None),
            http_status=status,
            discord_code=discord_code,
        )

    mapped = DISCORD_CODE_MAP.get(discord_code)
    if mapped is not None:
        return RestError(mapped, exc.text or None, http_status=status, discord_code=discord_code)

    return RestError(
        ErrorCode.UNKNOWN,
        f"HTTP {status}: {exc.text}",
        http_status=status,
        discord_code=discord_code,
    )


class ForgeRest:
    """
    REST caller bound to one discord.py client.

    Paths use discord.py ``Route`` placeholders (``{guild_id}``); values are
    passed as keyword arguments and URL-quoted by ``Route``.
    """

    def __init__(self, client: discord.Client) -> None:
        http = getattr(client, "http", None)
        if http is None or not getattr(http, "token", None):
            raise NotReadyError(extra="client has no HTTP token; log in first")
        self._client = client
        self._http = http

    @property
    def application_id(self) -> Optional[int]:
        return getattr(self._client, "application_id", None)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        reason: Optional[str] = None,
        **path_params: Any,
    ) -> Any:
        """
        Make a REST request.

        Args:
            method: HTTP method
            path: Endpoint path relative to the API base, with placeholders
            json: JSON body
            params: Query string parameters
            reason: Audit log reason
            **path_params: Placeholder values

        Raises:
            RateLimitedError: rate limited beyond discord.py's retry budget
            RestError: any other HTTP failure
        """
        route = Route(method, path, **path_params)
        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        if reason is not None:
            kwargs["reason"] = reason

        try:
            return await self._http.request(route, **kwargs)
        except discord.RateLimited as e:
            logger.warning(
                "REST rate limited",
                extra={"method": method, "path": path, "retry_after": e.retry_after},
            )
            raise RateLimitedError(e.retry_after) from e
        except discord.HTTPException as e:
            error = map_http_exception(e)
            logger.warning(
                f"REST request failed: {error.error_code}",
                extra={
                    "method": method,
                    "path": path,
                    "http_status": e.status,
                    "discord_code": e.code,
                },
            )
            raise error from e

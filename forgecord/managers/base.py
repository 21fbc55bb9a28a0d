"""
Base class for REST endpoint managers.

Each manager owns a ``ForgeRest`` bound to the client it was created with
and a logger named after its module.
"""

from __future__ import annotations

from typing import Any, Dict

import discord

from forgecord.core.logging.logger import get_logger
from forgecord.core.rest import ForgeRest


class RestManager:
    """
    Base class for endpoint managers.

    Args:
        client: Logged-in discord.py client

    Raises:
        NotReadyError: the client has no HTTP token yet
    """

    def __init__(self, client: discord.Client) -> None:
        self._client = client
        self._rest = ForgeRest(client)
        self.log = get_logger(type(self).__module__)

    @staticmethod
    def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
        """Drop keys whose value is None."""
        return {key: value for key, value in body.items() if value is not None}

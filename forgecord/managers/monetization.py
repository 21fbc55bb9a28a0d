"""
Monetization: SKUs, entitlements and SKU subscriptions.

Application-scoped endpoints need the client's application id, which
discord.py only knows after login.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from forgecord.core.exceptions import NotReadyError
from forgecord.managers.base import RestManager

OWNER_TYPE_GUILD = 1
OWNER_TYPE_USER = 2


class MonetizationManager(RestManager):
    """
    Usage:
        >>> shop = MonetizationManager(bot)
        >>> entitlements = await shop.get_entitlements(user_id=user.id, exclude_ended=True)
    """

    def _application_id(self) -> int:
        application_id = self._rest.application_id
        if application_id is None:
            raise NotReadyError(extra="application id not available yet; wait for ready")
        return application_id

    async def get_skus(self) -> List[Dict[str, Any]]:
        return await self._rest.request(
            "GET", "/applications/{application_id}/skus", application_id=self._application_id()
        )

    async def get_entitlements(
        self,
        *,
        user_id: Optional[int] = None,
        sku_ids: Optional[Iterable[int]] = None,
        before: Optional[int] = None,
        after: Optional[int] = None,
        limit: Optional[int] = None,
        guild_id: Optional[int] = None,
        exclude_ended: bool = False,
    ) -> List[Dict[str, Any]]:
        params = {
            "user_id": user_id,
            "sku_ids": ",".join(str(sku) for sku in sku_ids) if sku_ids else None,
            "before": before,
            "after": after,
            "limit": limit,
            "guild_id": guild_id,
            "exclude_ended": "true" if exclude_ended else None,
        }
        return await self._rest.request(
            "GET",
            "/applications/{application_id}/entitlements",
            application_id=self._application_id(),
            params=params,
        )

    async def get_entitlement(self, entitlement_id: int) -> Dict[str, Any]:
        return await self._rest.request(
            "GET",
            "/applications/{application_id}/entitlements/{entitlement_id}",
            application_id=self._application_id(),
            entitlement_id=entitlement_id,
        )

    async def create_test_entitlement(
        self, sku_id: int, owner_id: int, owner_type: int = OWNER_TYPE_USER
    ) -> Dict[str, Any]:
        """Grant a test entitlement (``owner_type`` 1 = guild, 2 = user)."""
        entitlement = await self._rest.request(
            "POST",
            "/applications/{application_id}/entitlements",
            application_id=self._application_id(),
            json={"sku_id": str(sku_id), "owner_id": str(owner_id), "owner_type": owner_type},
        )
        self.log.info(
            "Test entitlement created",
            extra={"sku_id": sku_id, "owner_id": owner_id, "owner_type": owner_type},
        )
        return entitlement

    async def delete_test_entitlement(self, entitlement_id: int) -> None:
        await self._rest.request(
            "DELETE",
            "/applications/{application_id}/entitlements/{entitlement_id}",
            application_id=self._application_id(),
            entitlement_id=entitlement_id,
        )

    async def consume_entitlement(self, entitlement_id: int) -> None:
        """Mark a one-time purchase entitlement as consumed."""
        await self._rest.request(
            "POST",
            "/applications/{application_id}/entitlements/{entitlement_id}/consume",
            application_id=self._application_id(),
            entitlement_id=entitlement_id,
        )

    async def get_sku_subscriptions(
        self,
        sku_id: int,
        *,
        before: Optional[int] = None,
        after: Optional[int] = None,
        limit: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        return await self._rest.request(
            "GET",
            "/skus/{sku_id}/subscriptions",
            sku_id=sku_id,
            params={"before": before, "after": after, "limit": limit, "user_id": user_id},
        )

    async def get_subscription(self, sku_id: int, subscription_id: int) -> Dict[str, Any]:
        return await self._rest.request(
            "GET",
            "/skus/{sku_id}/subscriptions/{subscription_id}",
            sku_id=sku_id,
            subscription_id=subscription_id,
        )

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from catalog_sync.core.exceptions import ShopifyApiError
from catalog_sync.schemas.product import Product
from catalog_sync.schemas.shopify import (ShopifyOrderPayload, ShopifyProductPayload,
                                          ShopifyWebhookPayload)


class RemoteCatalogClient(ABC):
    """Abstract base class for the remote storefront a store is synced with."""

    @abstractmethod
    async def test_connection(self) -> bool:
        """Return True when the credentials reach the shop. Never raises."""
        pass

    @abstractmethod
    async def get_shop_info(self) -> Dict:
        pass

    @abstractmethod
    async def list_products(self, limit: int = 250) -> List[ShopifyProductPayload]:
        """Fetch every product, following pagination until exhausted."""
        pass

    @abstractmethod
    async def list_orders(self, limit: int = 250, status: str = "any") -> List[ShopifyOrderPayload]:
        """Fetch every order, following pagination until exhausted."""
        pass

    @abstractmethod
    async def create_product(self, product: Product) -> ShopifyProductPayload:
        pass

    @abstractmethod
    async def update_product(
        self,
        remote_id: int,
        product: Product,
        variant_id: Optional[int] = None,
    ) -> ShopifyProductPayload:
        pass

    @abstractmethod
    async def list_locations(self) -> List[Dict]:
        pass

    @abstractmethod
    async def set_inventory_level(
        self,
        inventory_item_id: int,
        available: int,
        location_id: Optional[int] = None,
    ) -> Dict:
        pass

    @abstractmethod
    async def get_webhooks(self) -> List[ShopifyWebhookPayload]:
        pass

    @abstractmethod
    async def create_webhook(self, topic: str, address: str) -> ShopifyWebhookPayload:
        pass

    @abstractmethod
    async def delete_webhook(self, webhook_id: int) -> None:
        pass

    async def ensure_webhook(self, topic: str, address: str) -> ShopifyWebhookPayload:
        """
        Register a webhook subscription unless the same (topic, address) exists.

        Shopify rejects duplicates with "address has already been taken"; that
        rejection is treated as success and the existing subscription returned.
        """
        existing = await self._find_webhook(topic, address)
        if existing:
            return existing
        try:
            return await self.create_webhook(topic, address)
        except ShopifyApiError as e:
            if "already been taken" not in str(e).lower():
                raise
            existing = await self._find_webhook(topic, address)
            if existing is None:
                raise
            return existing

    async def _find_webhook(self, topic: str, address: str) -> Optional[ShopifyWebhookPayload]:
        for webhook in await self.get_webhooks():
            if webhook.topic == topic and webhook.address == address:
                return webhook
        return None

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import shopify
from shopify import ShopifyResource
from shopify.collection import PaginatedCollection

from catalog_sync.core.config import get_settings
from catalog_sync.core.exceptions import ShopifyApiError
from catalog_sync.core.money import from_minor_units
from catalog_sync.schemas.product import Product
from catalog_sync.schemas.shopify import (ShopifyOrderPayload, ShopifyProductPayload,
                                          ShopifyWebhookPayload)
from catalog_sync.schemas.store import ShopifyStore
from .base import RemoteCatalogClient

logger = logging.getLogger(__name__)

# Shopify max page size
MAX_PAGE_SIZE = 250

ORDER_FIELDS = ",".join([
    "id",
    "order_number",
    "email",
    "customer",
    "total_price",
    "subtotal_price",
    "total_tax",
    "currency",
    "financial_status",
    "fulfillment_status",
    "fulfillments",
    "tags",
    "note",
    "processed_at",
    "cancelled_at",
    "cancel_reason",
    "shipping_address",
    "billing_address",
    "line_items",
])


def build_product_payload(product: Product, variant_id: Optional[int] = None) -> Dict[str, Any]:
    """Single-variant Shopify representation of a local product."""
    variant = {
        "price": from_minor_units(product.price),
        "inventory_quantity": product.stock,
        "sku": product.sku,
        "barcode": product.ean13 or "",
    }
    if variant_id:
        variant["id"] = variant_id
    return {
        "title": product.name,
        "body_html": product.description or "",
        "product_type": product.category,
        "tags": product.sku,
        "variants": [variant],
    }


def _save_or_raise(resource: ShopifyResource) -> ShopifyResource:
    # save() returns False and fills resource.errors on validation failures
    if not resource.save():
        messages = "; ".join(resource.errors.full_messages()) or "unknown error"
        raise ShopifyApiError(f"Shopify rejected {type(resource).__name__.lower()}: {messages}")
    return resource


def _fetch_all(resource_class, **params) -> List[Dict]:
    """Collect every page of a resource listing."""
    all_resources_data = []
    resources: PaginatedCollection = resource_class.find(**params)
    while True:
        for resource in resources:
            all_resources_data.append(resource.to_dict())
        if not resources.has_next_page():
            break
        resources = resources.next_page()
    return all_resources_data


class ShopifyClient(RemoteCatalogClient):
    """ShopifyAPI-backed client bound to one store's credentials.

    The ShopifyAPI library is synchronous and keeps the active session in
    thread-local state, so every call activates the session, runs and clears
    it inside the same worker thread.
    """

    def __init__(self, store: ShopifyStore, api_version: Optional[str] = None):
        self.shop_domain = store.shopify_domain
        self.access_token = store.access_token
        self.api_version = api_version or get_settings().SHOPIFY_API_VERSION

    def _run_in_session(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        session = shopify.Session(self.shop_domain, self.api_version, self.access_token)
        ShopifyResource.activate_session(session)
        try:
            return func(*args, **kwargs)
        finally:
            ShopifyResource.clear_session()

    async def _call(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        return await asyncio.to_thread(self._run_in_session, func, *args, **kwargs)

    async def test_connection(self) -> bool:
        try:
            await self._call(shopify.Shop.current)
            return True
        except Exception as e:
            logger.warning(f"Shopify connection test failed for {self.shop_domain}: {e}")
            return False

    async def get_shop_info(self) -> Dict:
        shop = await self._call(shopify.Shop.current)
        return shop.to_dict()

    async def list_products(self, limit: int = MAX_PAGE_SIZE) -> List[ShopifyProductPayload]:
        rows = await self._call(_fetch_all, shopify.Product, limit=min(limit, MAX_PAGE_SIZE))
        logger.info(f"Fetched {len(rows)} products from {self.shop_domain}")
        return [ShopifyProductPayload.model_validate(row) for row in rows]

    async def list_orders(self, limit: int = MAX_PAGE_SIZE, status: str = "any") -> List[ShopifyOrderPayload]:
        rows = await self._call(
            _fetch_all,
            shopify.Order,
            limit=min(limit, MAX_PAGE_SIZE),
            status=status,
            fields=ORDER_FIELDS,
        )
        logger.info(f"Fetched {len(rows)} orders from {self.shop_domain}")
        return [ShopifyOrderPayload.model_validate(row) for row in rows]

    async def create_product(self, product: Product) -> ShopifyProductPayload:
        def create():
            return _save_or_raise(shopify.Product(build_product_payload(product))).to_dict()

        return ShopifyProductPayload.model_validate(await self._call(create))

    async def update_product(
        self,
        remote_id: int,
        product: Product,
        variant_id: Optional[int] = None,
    ) -> ShopifyProductPayload:
        def update():
            # A resource with an id is saved with PUT
            resource = shopify.Product({"id": remote_id, **build_product_payload(product, variant_id)})
            return _save_or_raise(resource).to_dict()

        return ShopifyProductPayload.model_validate(await self._call(update))

    async def list_locations(self) -> List[Dict]:
        locations = await self._call(shopify.Location.find)
        return [location.to_dict() for location in locations]

    async def set_inventory_level(
        self,
        inventory_item_id: int,
        available: int,
        location_id: Optional[int] = None,
    ) -> Dict:
        if location_id is None:
            locations = await self.list_locations()
            if not locations:
                raise ShopifyApiError(f"No locations configured for {self.shop_domain}")
            location_id = locations[0]["id"]
        level = await self._call(shopify.InventoryLevel.set, location_id, inventory_item_id, available)
        return level.to_dict()

    async def get_webhooks(self) -> List[ShopifyWebhookPayload]:
        webhooks = await self._call(shopify.Webhook.find)
        return [ShopifyWebhookPayload.model_validate(webhook.to_dict()) for webhook in webhooks]

    async def create_webhook(self, topic: str, address: str) -> ShopifyWebhookPayload:
        def create():
            resource = shopify.Webhook({"topic": topic, "address": address, "format": "json"})
            return _save_or_raise(resource).to_dict()

        return ShopifyWebhookPayload.model_validate(await self._call(create))

    async def delete_webhook(self, webhook_id: int) -> None:
        await self._call(shopify.Webhook.delete, webhook_id)

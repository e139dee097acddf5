import itertools
from typing import Dict, List, Optional

import pytest
from cryptography.fernet import Fernet

from catalog_sync.core.exceptions import ShopifyApiError
from catalog_sync.core.money import from_minor_units
from catalog_sync.crud import store as crud_store
from catalog_sync.db.record_store import BlobRecordStore, MemoryBlobBackend
from catalog_sync.schemas.product import Product
from catalog_sync.schemas.shopify import (ShopifyOrderPayload, ShopifyProductPayload,
                                          ShopifyWebhookPayload)
from catalog_sync.schemas.store import ShopifyStoreCreate
from catalog_sync.services.platform_connector import RemoteCatalogClient

TEST_ENCRYPTION_KEY = Fernet.generate_key()


@pytest.fixture(autouse=True)
def setup_encryption_key(monkeypatch):
    """Setup test encryption key for all tests"""
    monkeypatch.setenv("ENCRYPTION_KEY", TEST_ENCRYPTION_KEY.decode())


@pytest.fixture
def records():
    return BlobRecordStore(MemoryBlobBackend(), key_prefix="test:")


class FakeShopifyClient(RemoteCatalogClient):
    """In-memory stand-in for the Shopify REST API that records every write."""

    def __init__(self):
        self.products: List[ShopifyProductPayload] = []
        self.orders: List[ShopifyOrderPayload] = []
        self.webhooks: List[ShopifyWebhookPayload] = []
        self.locations: List[Dict] = [{"id": 71, "name": "Warehouse"}]
        self.inventory_levels: List[tuple] = []
        self.calls: List[tuple] = []
        self.failing_skus = set()
        self.connected = True
        self._ids = itertools.count(9000)

    async def test_connection(self) -> bool:
        self.calls.append(("test_connection",))
        return self.connected

    async def get_shop_info(self) -> Dict:
        return {"name": "Test Shop", "domain": "test-shop.myshopify.com", "currency": "EUR"}

    async def list_products(self, limit: int = 250) -> List[ShopifyProductPayload]:
        self.calls.append(("list_products",))
        return list(self.products)

    async def list_orders(self, limit: int = 250, status: str = "any") -> List[ShopifyOrderPayload]:
        self.calls.append(("list_orders", status))
        return list(self.orders)

    def _payload(self, remote_id: int, product: Product, variant_id: Optional[int] = None) -> ShopifyProductPayload:
        return ShopifyProductPayload(
            id=remote_id,
            title=product.name,
            product_type=product.category,
            variants=[{
                "id": variant_id or next(self._ids),
                "product_id": remote_id,
                "sku": product.sku,
                "price": from_minor_units(product.price),
                "inventory_quantity": product.stock,
                "inventory_item_id": next(self._ids),
            }],
        )

    async def create_product(self, product: Product) -> ShopifyProductPayload:
        self.calls.append(("create_product", product.sku))
        if product.sku in self.failing_skus:
            raise ShopifyApiError("Shopify rejected product: Title can't be blank")
        remote = self._payload(next(self._ids), product)
        self.products.append(remote)
        return remote

    async def update_product(self, remote_id: int, product: Product, variant_id: Optional[int] = None) -> ShopifyProductPayload:
        self.calls.append(("update_product", remote_id, product.sku))
        if product.sku in self.failing_skus:
            raise ShopifyApiError("Shopify rejected product: Price is invalid")
        return self._payload(remote_id, product, variant_id)

    async def list_locations(self) -> List[Dict]:
        return list(self.locations)

    async def set_inventory_level(self, inventory_item_id: int, available: int, location_id: Optional[int] = None) -> Dict:
        self.inventory_levels.append((inventory_item_id, available, location_id))
        return {"inventory_item_id": inventory_item_id, "available": available, "location_id": location_id}

    async def get_webhooks(self) -> List[ShopifyWebhookPayload]:
        return list(self.webhooks)

    async def create_webhook(self, topic: str, address: str) -> ShopifyWebhookPayload:
        self.calls.append(("create_webhook", topic))
        if any(w.topic == topic and w.address == address for w in self.webhooks):
            raise ShopifyApiError("Shopify rejected webhook: Address for this topic has already been taken")
        webhook = ShopifyWebhookPayload(id=next(self._ids), topic=topic, address=address, format="json")
        self.webhooks.append(webhook)
        return webhook

    async def delete_webhook(self, webhook_id: int) -> None:
        self.webhooks = [w for w in self.webhooks if w.id != webhook_id]


@pytest.fixture
def fake_client():
    return FakeShopifyClient()


@pytest.fixture
def client_factory(fake_client):
    return lambda store: fake_client


@pytest.fixture
def seed_store(records):
    """Async factory inserting a store with test credentials."""
    async def _seed(**overrides):
        values = {
            "store_name": "Test Shop",
            "shopify_domain": "test-shop.myshopify.com",
            "access_token": "shpat_test_token",
            "api_key": "test_key",
            "api_secret": "test_secret",
            "webhook_secret": "whsec_test",
            **overrides,
        }
        return await crud_store.create_store(records, ShopifyStoreCreate(**values))
    return _seed


@pytest.fixture
def remote_product():
    """Factory for Shopify product payloads with a single variant."""
    def _build(product_id: int, sku: Optional[str], price: str = "19.99", **fields) -> ShopifyProductPayload:
        variant = {
            "id": product_id * 10,
            "product_id": product_id,
            "sku": sku,
            "price": price,
            "inventory_quantity": fields.pop("inventory_quantity", 5),
            "barcode": fields.pop("barcode", None),
            "inventory_item_id": product_id * 100,
        }
        data = {"id": product_id, "title": f"Product {product_id}", "variants": [variant], **fields}
        return ShopifyProductPayload.model_validate(data)
    return _build


@pytest.fixture
def order_json():
    """Factory for raw Shopify order JSON, as found in webhook bodies."""
    def _build(order_id: int = 5001, order_number: int = 1001, total_price: str = "99.99", **fields) -> Dict:
        data = {
            "id": order_id,
            "order_number": order_number,
            "email": "jane@example.com",
            "customer": {"id": 42, "first_name": "Jane", "last_name": "Doe"},
            "total_price": total_price,
            "subtotal_price": "84.03",
            "total_tax": "15.96",
            "currency": "EUR",
            "financial_status": "paid",
            "fulfillments": [],
            "tags": "",
            "note": None,
            "processed_at": "2024-03-01T10:15:00+01:00",
            "cancelled_at": None,
            "cancel_reason": None,
            "shipping_address": {"city": "Berlin", "country": "DE"},
            "billing_address": {"city": "Berlin", "country": "DE"},
            "line_items": [
                {
                    "id": order_id * 10 + 1,
                    "product_id": 301,
                    "variant_id": 3010,
                    "sku": "SKU-1",
                    "title": "Blue Mug",
                    "variant_title": "Large",
                    "quantity": 2,
                    "price": "42.00",
                    "total_discount": "0.00",
                    "fulfillment_status": None,
                    "requires_shipping": True,
                    "taxable": True,
                    "gift_card": False,
                },
            ],
        }
        data.update(fields)
        return data
    return _build

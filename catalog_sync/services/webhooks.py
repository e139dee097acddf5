"""Inbound Shopify webhook deliveries for orders.

A delivery is verified against the receiving store's secret before anything
is written. Verified deliveries on allow-listed topics are dispatched to the
order upsert logic shared with the bulk order import. Processing failures
are logged and acknowledged so Shopify does not retry them.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from catalog_sync.core.config import get_settings
from catalog_sync.core.exceptions import CatalogSyncError, StoreNotFoundError
from catalog_sync.core.security import verify_shopify_hmac
from catalog_sync.crud import order as crud_order
from catalog_sync.crud import store as crud_store
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.shopify import ShopifyOrderPayload, ShopifyWebhookPayload
from catalog_sync.schemas.store import ShopifyStore
from catalog_sync.services.platform_connector import RemoteCatalogClient, get_client
from catalog_sync.services.sync.mapping import cancellation_changes, order_data_from_remote
from catalog_sync.services.sync.orders import upsert_order

logger = logging.getLogger(__name__)

ORDER_TOPICS = (
    "orders/create",
    "orders/updated",
    "orders/cancelled",
    "orders/fulfilled",
    "orders/partially_fulfilled",
)
CANCELLED_TOPIC = "orders/cancelled"

OK_RESPONSE: Tuple[int, Dict[str, Any]] = (200, {"ok": True})
UNAUTHORIZED_RESPONSE: Tuple[int, Dict[str, Any]] = (401, {"error": "Unauthorized"})


class DeliveryState(str, Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass
class WebhookDelivery:
    raw_body: bytes
    hmac_header: Optional[str] = None
    topic: Optional[str] = None
    shop_domain: Optional[str] = None
    state: DeliveryState = field(default=DeliveryState.UNVERIFIED)

    def verify(self, secret: Optional[str]) -> bool:
        if self.state != DeliveryState.UNVERIFIED:
            return self.state == DeliveryState.VERIFIED
        valid = verify_shopify_hmac(self.raw_body, self.hmac_header, secret)
        self.state = DeliveryState.VERIFIED if valid else DeliveryState.REJECTED
        return valid

    @property
    def is_order_topic(self) -> bool:
        return self.topic in ORDER_TOPICS


async def resolve_store(records: RecordStore, shop_domain: Optional[str]) -> Optional[ShopifyStore]:
    """Active store matching the shop domain header, else the first active store."""
    if shop_domain:
        store = await crud_store.get_active_store_by_domain(records, shop_domain)
        if store:
            return store
    # Oldest active store first
    stores = await crud_store.list_stores(records, active_only=True, order_by="created_at")
    if not stores:
        return None
    if shop_domain:
        logger.warning(f"No active store for domain {shop_domain}, using store {stores[0].id}")
    return stores[0]


def webhook_secret_for(store: Optional[ShopifyStore]) -> str:
    if store and store.webhook_secret:
        return store.webhook_secret
    return get_settings().SHOPIFY_WEBHOOK_SECRET


async def process_order_webhook(
    records: RecordStore,
    store: ShopifyStore,
    topic: str,
    payload: ShopifyOrderPayload,
) -> None:
    existing = await crud_order.get_order_by_shopify_id(records, payload.id, store.id)
    now = datetime.now(timezone.utc)

    if topic == CANCELLED_TOPIC:
        if existing:
            await crud_order.update_order(records, existing.id, cancellation_changes(payload, now))
        else:
            data = order_data_from_remote(payload, store.id, now).model_copy(
                update={"order_status": "cancelled"}
            )
            await crud_order.insert_order(records, data)
        logger.info(f"Order {payload.order_number} marked as cancelled")
        return

    order = await upsert_order(records, store.id, payload)
    logger.info(f"Order {order.order_number} upserted from webhook {topic}")


async def handle_delivery(records: RecordStore, delivery: WebhookDelivery) -> Tuple[int, Dict[str, Any]]:
    """Verify and process one delivery; returns (status code, JSON body)."""
    try:
        store = await resolve_store(records, delivery.shop_domain)
    except CatalogSyncError as e:
        logger.error(f"Could not resolve store for webhook: {e}")
        store = None

    if not delivery.verify(webhook_secret_for(store)):
        logger.warning(f"Rejected webhook {delivery.topic} from {delivery.shop_domain}: invalid signature")
        return UNAUTHORIZED_RESPONSE

    if not delivery.is_order_topic:
        logger.info(f"Ignoring webhook topic {delivery.topic}")
        return OK_RESPONSE

    try:
        if store is None:
            raise StoreNotFoundError(delivery.shop_domain or "<unknown>")
        payload = ShopifyOrderPayload.model_validate_json(delivery.raw_body)
        await process_order_webhook(records, store, delivery.topic, payload)
    except Exception as e:
        # Verified deliveries are always acknowledged
        logger.error(f"Error processing webhook {delivery.topic}: {e}", exc_info=True)
    return OK_RESPONSE


async def register_order_webhooks(
    records: RecordStore,
    store_id: str,
    address: str,
    client_factory: Callable[[ShopifyStore], RemoteCatalogClient] = get_client,
) -> List[ShopifyWebhookPayload]:
    """Subscribe the store to every handled order topic; safe to call repeatedly."""
    store = await crud_store.get_store(records, store_id)
    if store is None:
        raise StoreNotFoundError(store_id)
    client = client_factory(store)
    webhooks = []
    for topic in ORDER_TOPICS:
        webhooks.append(await client.ensure_webhook(topic, address))
        logger.info(f"Webhook {topic} -> {address} registered for store {store_id}")
    return webhooks

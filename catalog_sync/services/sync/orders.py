import logging
from datetime import datetime, timezone
from typing import List, Optional

from catalog_sync.core.config import get_settings
from catalog_sync.crud import order as crud_order
from catalog_sync.crud import product as crud_product
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.order import Order
from catalog_sync.schemas.shopify import ShopifyLineItemPayload, ShopifyOrderPayload
from catalog_sync.schemas.store import ShopifyStore
from catalog_sync.schemas.sync import SyncResult
from catalog_sync.services.platform_connector import RemoteCatalogClient
from .mapping import order_data_from_remote, order_item_data_from_remote

logger = logging.getLogger(__name__)


async def _resolve_product_id(records: RecordStore, sku: Optional[str]) -> Optional[str]:
    if not sku:
        return None
    product = await crud_product.get_product_by_sku(records, sku)
    return product.id if product else None


async def reconcile_line_items(
    records: RecordStore,
    order_id: str,
    line_items: List[ShopifyLineItemPayload],
) -> List[str]:
    """Insert or update each line item keyed by (line item id, order id). Returns per-item errors."""
    errors: List[str] = []
    for line_item in line_items:
        try:
            product_id = await _resolve_product_id(records, line_item.sku)
            item = order_item_data_from_remote(line_item, order_id, product_id)
            existing = await crud_order.get_order_item(records, line_item.id, order_id)
            if existing:
                await crud_order.update_order_item(records, existing.id, item.model_dump())
            else:
                await crud_order.insert_order_item(records, item)
        except Exception as e:
            logger.error(f"Error syncing line item {line_item.id} of order {order_id}: {e}", exc_info=True)
            errors.append(f"Line item {line_item.title}: {e}")
    return errors


async def upsert_order(records: RecordStore, store_id: str, payload: ShopifyOrderPayload) -> Order:
    """Full upsert of an order and its line items."""
    now = datetime.now(timezone.utc)
    data = order_data_from_remote(payload, store_id, now)
    existing = await crud_order.get_order_by_shopify_id(records, payload.id, store_id)
    if existing:
        order = await crud_order.update_order(records, existing.id, data.model_dump())
    else:
        order = await crud_order.insert_order(records, data)

    errors = await reconcile_line_items(records, order.id, payload.line_items)
    if errors:
        logger.warning(f"Order {payload.order_number} stored with {len(errors)} line item errors")
    return order


async def pull_orders(records: RecordStore, store: ShopifyStore, client: RemoteCatalogClient) -> SyncResult:
    """
    Import remote orders not yet present locally.

    Orders already stored for this store are skipped; webhooks keep them
    current. A failing order is recorded and the batch continues.
    """
    settings = get_settings()
    remote_orders = await client.list_orders(limit=settings.SHOPIFY_PAGE_LIMIT, status="any")

    synced_count = 0
    skipped = 0
    errors: List[str] = []
    for payload in remote_orders:
        try:
            if await crud_order.get_order_by_shopify_id(records, payload.id, store.id):
                skipped += 1
                continue

            data = order_data_from_remote(payload, store.id, datetime.now(timezone.utc))
            order = await crud_order.insert_order(records, data)
            errors.extend(await reconcile_line_items(records, order.id, payload.line_items))
            synced_count += 1
        except Exception as e:
            logger.error(f"Error importing order {payload.order_number}: {e}", exc_info=True)
            errors.append(f"Order {payload.order_number}: {e}")

    if errors:
        message = f"Imported {synced_count} orders, {len(errors)} errors"
    else:
        message = f"Imported {synced_count} orders from Shopify"
    if skipped:
        message += f" ({skipped} already present)"
    return SyncResult(
        success=not errors,
        message=message,
        synced_orders=synced_count,
        skipped=skipped,
        errors=errors,
    )

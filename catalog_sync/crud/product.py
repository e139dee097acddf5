from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from catalog_sync.db.record_store import PRODUCTS, SHOPIFY_PRODUCTS, RecordStore
from catalog_sync.schemas.product import LinkSyncStatus, Product, ShopifyProductLink


async def get_product(records: RecordStore, product_id: str) -> Optional[Product]:
    record = await records.find_one(PRODUCTS, id=product_id)
    return Product(**record) if record else None


async def get_product_by_sku(records: RecordStore, sku: str) -> Optional[Product]:
    record = await records.find_one(PRODUCTS, sku=sku)
    return Product(**record) if record else None


async def list_products(records: RecordStore) -> List[Product]:
    return [Product(**row) for row in await records.select(PRODUCTS, order_by="-created_at")]


async def list_children(records: RecordStore, parent_id: str) -> List[Product]:
    return [Product(**row) for row in await records.select(PRODUCTS, {"parent_id": parent_id})]


async def insert_product(records: RecordStore, values: Dict[str, Any]) -> Product:
    return Product(**await records.insert(PRODUCTS, values))


async def update_product(records: RecordStore, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
    changes = {**changes, "updated_at": datetime.now(timezone.utc)}
    record = await records.update(PRODUCTS, product_id, changes)
    return Product(**record) if record else None


async def delete_product(records: RecordStore, product_id: str) -> bool:
    return await records.delete(PRODUCTS, product_id)


# Shopify product links

async def get_link(records: RecordStore, local_product_id: str, store_id: str) -> Optional[ShopifyProductLink]:
    record = await records.find_one(SHOPIFY_PRODUCTS, local_product_id=local_product_id, shopify_store_id=store_id)
    return ShopifyProductLink(**record) if record else None


async def upsert_link(
    records: RecordStore,
    local_product_id: str,
    store_id: str,
    shopify_product_id: int,
    shopify_variant_id: Optional[int] = None,
    sync_status: LinkSyncStatus = LinkSyncStatus.SYNCED,
) -> ShopifyProductLink:
    """Create or refresh the link for (local product, store)."""
    values = {
        "shopify_product_id": shopify_product_id,
        "shopify_variant_id": shopify_variant_id,
        "last_synced_at": datetime.now(timezone.utc),
        "sync_status": LinkSyncStatus(sync_status).value,
    }
    existing = await get_link(records, local_product_id, store_id)
    if existing:
        record = await records.update(SHOPIFY_PRODUCTS, existing.id, values)
    else:
        record = await records.insert(
            SHOPIFY_PRODUCTS,
            {"local_product_id": local_product_id, "shopify_store_id": store_id, **values},
        )
    return ShopifyProductLink(**record)


async def set_link_status(records: RecordStore, link_id: str, sync_status: LinkSyncStatus) -> ShopifyProductLink:
    record = await records.update(SHOPIFY_PRODUCTS, link_id, {"sync_status": LinkSyncStatus(sync_status).value})
    return ShopifyProductLink(**record)

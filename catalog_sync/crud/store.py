from datetime import datetime
from typing import Any, Dict, List, Optional

from catalog_sync.core.security import decrypt_token, encrypt_token
from catalog_sync.db.record_store import SHOPIFY_STORES, Record, RecordStore
from catalog_sync.schemas.store import ShopifyStore, ShopifyStoreCreate

# Credentials are Fernet-encrypted at rest
ENCRYPTED_FIELDS = ("access_token", "api_secret", "webhook_secret")


def _encrypt_credentials(values: Dict[str, Any]) -> Dict[str, Any]:
    encrypted = dict(values)
    for field in ENCRYPTED_FIELDS:
        if encrypted.get(field) is not None:
            encrypted[field] = encrypt_token(encrypted[field])
    return encrypted


def _to_store(record: Record) -> ShopifyStore:
    return ShopifyStore(
        **{
            **record,
            "access_token": decrypt_token(record.get("access_token")) or "",
            "api_secret": decrypt_token(record.get("api_secret")) or "",
            "webhook_secret": decrypt_token(record.get("webhook_secret")),
        }
    )


async def get_store(records: RecordStore, store_id: str) -> Optional[ShopifyStore]:
    record = await records.find_one(SHOPIFY_STORES, id=store_id)
    return _to_store(record) if record else None


async def list_stores(
    records: RecordStore,
    active_only: bool = False,
    order_by: str = "-created_at",
) -> List[ShopifyStore]:
    filters = {"is_active": True} if active_only else None
    rows = await records.select(SHOPIFY_STORES, filters, order_by=order_by)
    return [_to_store(row) for row in rows]


async def get_active_store_by_domain(records: RecordStore, shop_domain: str) -> Optional[ShopifyStore]:
    record = await records.find_one(SHOPIFY_STORES, shopify_domain=shop_domain, is_active=True)
    return _to_store(record) if record else None


async def create_store(records: RecordStore, store: ShopifyStoreCreate) -> ShopifyStore:
    """Insert a new store with encrypted credentials and an idle sync state."""
    values = _encrypt_credentials(store.model_dump())
    values.update(is_active=True, sync_status="idle", last_sync_at=None)
    return _to_store(await records.insert(SHOPIFY_STORES, values))


async def update_store(records: RecordStore, store_id: str, changes: Dict[str, Any]) -> Optional[ShopifyStore]:
    record = await records.update(SHOPIFY_STORES, store_id, _encrypt_credentials(changes))
    return _to_store(record) if record else None


async def set_sync_state(
    records: RecordStore,
    store_id: str,
    sync_status: str,
    last_sync_at: Optional[datetime] = None,
) -> None:
    changes: Dict[str, Any] = {"sync_status": sync_status}
    if last_sync_at is not None:
        changes["last_sync_at"] = last_sync_at
    await records.update(SHOPIFY_STORES, store_id, changes)


async def delete_store(records: RecordStore, store_id: str) -> bool:
    return await records.delete(SHOPIFY_STORES, store_id)

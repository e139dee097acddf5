import logging
from datetime import datetime, timezone
from typing import Dict, List

from catalog_sync.core.config import get_settings
from catalog_sync.core.exceptions import ShopifyConnectionError, StoreNotFoundError
from catalog_sync.crud import store as crud_store
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.shopify import ShopifyProductPayload
from catalog_sync.schemas.store import ShopifyStore, ShopifyStoreCreate, ShopifyStoreUpdate
from catalog_sync.services.platform_connector import ClientFactory, get_client

logger = logging.getLogger(__name__)


async def _check_connection(store: ShopifyStore, client_factory: ClientFactory) -> None:
    if not await client_factory(store).test_connection():
        raise ShopifyConnectionError(
            f"Could not connect to {store.shopify_domain}, check the domain and access token"
        )


async def list_stores(records: RecordStore) -> List[ShopifyStore]:
    return await crud_store.list_stores(records)


async def get_store(records: RecordStore, store_id: str) -> ShopifyStore:
    store = await crud_store.get_store(records, store_id)
    if store is None:
        raise StoreNotFoundError(store_id)
    return store


async def create_store(
    records: RecordStore,
    store_in: ShopifyStoreCreate,
    client_factory: ClientFactory = get_client,
) -> ShopifyStore:
    """Store new credentials after confirming they reach the shop."""
    candidate = ShopifyStore(id="", created_at=datetime.now(timezone.utc), **store_in.model_dump())
    await _check_connection(candidate, client_factory)
    store = await crud_store.create_store(records, store_in)
    logger.info(f"Shopify store {store.id} created for {store.shopify_domain}")
    return store


async def update_store(
    records: RecordStore,
    store_id: str,
    store_in: ShopifyStoreUpdate,
    client_factory: ClientFactory = get_client,
) -> ShopifyStore:
    current = await get_store(records, store_id)
    changes = store_in.model_dump(exclude_unset=True)

    # Submitted credentials or a new domain are tested before they replace the stored ones
    if "access_token" in changes or "shopify_domain" in changes:
        await _check_connection(current.model_copy(update=changes), client_factory)

    store = await crud_store.update_store(records, store_id, changes)
    if store is None:
        raise StoreNotFoundError(store_id)
    return store


async def delete_store(records: RecordStore, store_id: str) -> None:
    if not await crud_store.delete_store(records, store_id):
        raise StoreNotFoundError(store_id)
    logger.info(f"Shopify store {store_id} deleted")


async def test_store_connection(
    records: RecordStore,
    store_id: str,
    client_factory: ClientFactory = get_client,
) -> bool:
    store = await crud_store.get_store(records, store_id)
    if store is None:
        logger.warning(f"Connection test for unknown store {store_id}")
        return False
    return await client_factory(store).test_connection()


async def get_shop_info(
    records: RecordStore,
    store_id: str,
    client_factory: ClientFactory = get_client,
) -> Dict:
    store = await get_store(records, store_id)
    return await client_factory(store).get_shop_info()


async def list_remote_products(
    records: RecordStore,
    store_id: str,
    client_factory: ClientFactory = get_client,
) -> List[ShopifyProductPayload]:
    store = await get_store(records, store_id)
    return await client_factory(store).list_products(limit=get_settings().SHOPIFY_PAGE_LIMIT)

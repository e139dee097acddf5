"""Sync actions exposed to the API and to Celery.

Each action runs inside the store's sync-operation boundary and never raises:
any failure is returned as an unsuccessful ``SyncResult``.
"""
import logging
from typing import Awaitable, Callable

from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.store import ShopifyStore
from catalog_sync.schemas.sync import SyncResult
from catalog_sync.services.platform_connector import ClientFactory, RemoteCatalogClient, get_client
from .orders import pull_orders
from .products import pull_products, push_products
from .status import store_sync_operation

logger = logging.getLogger(__name__)

SyncStep = Callable[[RecordStore, ShopifyStore, RemoteCatalogClient], Awaitable[SyncResult]]


async def _run_sync(
    records: RecordStore,
    store_id: str,
    step: SyncStep,
    client_factory: ClientFactory,
    failure_label: str,
    count_field: str,
) -> SyncResult:
    try:
        async with store_sync_operation(records, store_id) as run:
            result = await step(records, run.store, client_factory(run.store))
            return run.complete(result)
    except Exception as e:
        logger.error(f"{failure_label} for store {store_id}: {e}", exc_info=True)
        return SyncResult(
            success=False,
            message=f"{failure_label}: {e}",
            errors=[str(e)],
            **{count_field: 0},
        )


async def sync_products_to_shopify(
    records: RecordStore,
    store_id: str,
    client_factory: ClientFactory = get_client,
) -> SyncResult:
    return await _run_sync(records, store_id, push_products, client_factory, "Sync failed", "synced_products")


async def sync_products_from_shopify(
    records: RecordStore,
    store_id: str,
    client_factory: ClientFactory = get_client,
) -> SyncResult:
    return await _run_sync(records, store_id, pull_products, client_factory, "Import failed", "synced_products")


async def sync_orders_from_shopify(
    records: RecordStore,
    store_id: str,
    client_factory: ClientFactory = get_client,
) -> SyncResult:
    return await _run_sync(records, store_id, pull_orders, client_factory, "Import failed", "synced_orders")

import logging

from catalog_sync.crud import store as crud_store
from catalog_sync.db.record_store import open_record_store
from catalog_sync.services.sync import actions
from catalog_sync.tasks.async_helper import celery_async_task

logger = logging.getLogger(__name__)


# Sync actions return a failed SyncResult instead of raising, so they are not retried.

@celery_async_task(retry_on_error=False)
async def sync_products_to_shopify_task(self, store_id: str):
    """Push the local catalog to a store."""
    async with open_record_store() as records:
        result = await actions.sync_products_to_shopify(records, store_id)
    logger.info(f"Product push for store {store_id}: {result.message}")
    return result.model_dump()


@celery_async_task(retry_on_error=False)
async def sync_products_from_shopify_task(self, store_id: str):
    """Import a store's products into the local catalog."""
    async with open_record_store() as records:
        result = await actions.sync_products_from_shopify(records, store_id)
    logger.info(f"Product import for store {store_id}: {result.message}")
    return result.model_dump()


@celery_async_task(retry_on_error=False)
async def sync_orders_from_shopify_task(self, store_id: str):
    """Import a store's orders that are not stored yet."""
    async with open_record_store() as records:
        result = await actions.sync_orders_from_shopify(records, store_id)
    logger.info(f"Order import for store {store_id}: {result.message}")
    return result.model_dump()


async def _schedule_periodic_order_syncs_logic() -> str:
    """Queue an order import for every active store."""
    logger.info("Scheduling periodic order syncs for all active stores")
    async with open_record_store() as records:
        stores = await crud_store.list_stores(records, active_only=True)

    if not stores:
        logger.info("No active stores found for periodic order sync.")
        return "No active stores found."

    scheduled_count = 0
    for store in stores:
        try:
            sync_orders_from_shopify_task.delay(store.id)
            scheduled_count += 1
        except Exception as e:
            logger.error(f"Failed to schedule order sync for store {store.id}: {e}", exc_info=True)
    logger.info(f"Scheduled order syncs for {scheduled_count} stores.")
    return f"Scheduled order syncs for {scheduled_count} stores."


@celery_async_task()
async def schedule_periodic_order_syncs(self):
    return await _schedule_periodic_order_syncs_logic()

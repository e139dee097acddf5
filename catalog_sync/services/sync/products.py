import logging
from typing import Dict, List, Optional

from catalog_sync.core.config import get_settings
from catalog_sync.core.exceptions import RecordStoreError
from catalog_sync.crud import product as crud_product
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.product import LinkSyncStatus, Product, SkuLevel
from catalog_sync.schemas.shopify import ShopifyProductPayload
from catalog_sync.schemas.store import ShopifyStore
from catalog_sync.schemas.sync import SyncResult
from catalog_sync.services.platform_connector import RemoteCatalogClient
from .mapping import product_values_from_remote

logger = logging.getLogger(__name__)


def index_by_sku(remote_products: List[ShopifyProductPayload]) -> Dict[str, ShopifyProductPayload]:
    """Map every variant SKU to its remote product. The first product wins on duplicates."""
    index: Dict[str, ShopifyProductPayload] = {}
    for remote in remote_products:
        for variant in remote.variants:
            if variant.sku and variant.sku not in index:
                index[variant.sku] = remote
    return index


def _variant_for_sku(remote: ShopifyProductPayload, sku: str):
    for variant in remote.variants:
        if variant.sku == sku:
            return variant
    return remote.first_variant


async def _mark_link_failed(records: RecordStore, product_id: str, store_id: str) -> None:
    try:
        link = await crud_product.get_link(records, product_id, store_id)
        if link:
            await crud_product.set_link_status(records, link.id, LinkSyncStatus.ERROR)
    except RecordStoreError as e:
        logger.error(f"Could not mark link of product {product_id} as failed: {e}")


class InventoryPusher:
    """Pushes stock levels to the store's first location, resolved once per run."""

    def __init__(self, client: RemoteCatalogClient):
        self.client = client
        self._location_id: Optional[int] = None

    async def push(self, remote: ShopifyProductPayload, product: Product) -> None:
        variant = _variant_for_sku(remote, product.sku)
        if variant is None or variant.inventory_item_id is None:
            return
        if self._location_id is None:
            locations = await self.client.list_locations()
            if not locations:
                logger.warning("Store has no locations, skipping inventory levels")
                return
            self._location_id = locations[0]["id"]
        await self.client.set_inventory_level(variant.inventory_item_id, product.stock, self._location_id)


async def push_products(records: RecordStore, store: ShopifyStore, client: RemoteCatalogClient) -> SyncResult:
    """
    Push every local product to the remote store.

    Remote products are indexed by variant SKU once; a local product whose SKU
    is indexed is updated in place, any other is created and added to the
    index. A failing product is recorded and the batch continues.
    """
    settings = get_settings()
    products = await crud_product.list_products(records)
    index = index_by_sku(await client.list_products(limit=settings.SHOPIFY_PAGE_LIMIT))
    inventory = InventoryPusher(client) if settings.SHOPIFY_SYNC_INVENTORY_LEVELS else None

    synced_count = 0
    errors: List[str] = []
    for product in products:
        try:
            link = await crud_product.get_link(records, product.id, store.id)
            if link:
                await crud_product.set_link_status(records, link.id, LinkSyncStatus.SYNCING)

            existing = index.get(product.sku)
            if existing:
                variant = _variant_for_sku(existing, product.sku)
                remote = await client.update_product(existing.id, product, variant.id if variant else None)
            else:
                remote = await client.create_product(product)
            index[product.sku] = remote

            variant = _variant_for_sku(remote, product.sku)
            await crud_product.upsert_link(
                records,
                product.id,
                store.id,
                remote.id,
                variant.id if variant else None,
                LinkSyncStatus.SYNCED,
            )
            if inventory:
                await inventory.push(remote, product)
            synced_count += 1
        except Exception as e:
            logger.error(f"Error pushing product {product.sku} to {store.shopify_domain}: {e}", exc_info=True)
            errors.append(f"Product {product.name}: {e}")
            await _mark_link_failed(records, product.id, store.id)

    message = f"Synced {synced_count} products to Shopify"
    if errors:
        message += f" with {len(errors)} errors"
    return SyncResult(success=not errors, message=message, synced_products=synced_count, errors=errors)


async def pull_products(records: RecordStore, store: ShopifyStore, client: RemoteCatalogClient) -> SyncResult:
    """
    Import remote products into the local catalog, matched by SKU.

    New products are created as grandparents without a parent; existing ones
    keep their hierarchy and are updated in place.
    """
    settings = get_settings()
    remote_products = await client.list_products(limit=settings.SHOPIFY_PAGE_LIMIT)

    synced_count = 0
    skipped = 0
    errors: List[str] = []
    for remote in remote_products:
        values = product_values_from_remote(remote, settings.DEFAULT_PRODUCT_CATEGORY)
        if values is None:
            logger.info(f"Skipping remote product {remote.id}: no variant with a SKU")
            skipped += 1
            continue
        try:
            local = await crud_product.get_product_by_sku(records, values["sku"])
            if local:
                local = await crud_product.update_product(records, local.id, values)
            else:
                local = await crud_product.insert_product(
                    records,
                    {**values, "sku_level": SkuLevel.GRANDPARENT.value, "parent_id": None},
                )
            await crud_product.upsert_link(
                records,
                local.id,
                store.id,
                remote.id,
                remote.first_variant.id,
                LinkSyncStatus.SYNCED,
            )
            synced_count += 1
        except Exception as e:
            logger.error(f"Error importing remote product {remote.id}: {e}", exc_info=True)
            errors.append(f"Product {remote.title}: {e}")

    message = f"Imported {synced_count} products from Shopify"
    if errors:
        message += f", {len(errors)} errors"
    return SyncResult(
        success=not errors,
        message=message,
        synced_products=synced_count,
        skipped=skipped,
        errors=errors,
    )

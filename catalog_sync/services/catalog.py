"""Local product catalog with its three-level SKU hierarchy.

grandparent (no parent) <- parent <- child. Every write checks SKU
uniqueness and that ``parent_id`` points at a product exactly one level up.
"""
import logging
from typing import List, Optional

from catalog_sync.core.exceptions import ProductValidationError
from catalog_sync.crud import product as crud_product
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.product import PARENT_LEVEL, Product, ProductCreate, ProductUpdate, SkuLevel

logger = logging.getLogger(__name__)


async def _ensure_unique_sku(records: RecordStore, sku: str, product_id: Optional[str] = None) -> None:
    existing = await crud_product.get_product_by_sku(records, sku)
    if existing and existing.id != product_id:
        raise ProductValidationError(f"SKU {sku} is already used by product {existing.id}")


async def _validate_hierarchy(
    records: RecordStore,
    sku_level: str,
    parent_id: Optional[str],
    product_id: Optional[str] = None,
) -> None:
    level = SkuLevel(sku_level)
    expected = PARENT_LEVEL[level]
    if expected is None:
        if parent_id:
            raise ProductValidationError("A grandparent product cannot have a parent")
        return
    if not parent_id:
        raise ProductValidationError(f"A {level.value} product requires a {expected.value} parent")
    if parent_id == product_id:
        raise ProductValidationError("A product cannot be its own parent")

    parent = await crud_product.get_product(records, parent_id)
    if parent is None:
        raise ProductValidationError(f"Parent product {parent_id} not found")
    if parent.sku_level != expected.value:
        raise ProductValidationError(
            f"A {level.value} product must have a {expected.value} parent, got {parent.sku_level}"
        )


async def list_products(records: RecordStore) -> List[Product]:
    return await crud_product.list_products(records)


async def get_product(records: RecordStore, product_id: str) -> Product:
    product = await crud_product.get_product(records, product_id)
    if product is None:
        raise ProductValidationError(f"Product {product_id} not found")
    return product


async def create_product(records: RecordStore, product_in: ProductCreate) -> Product:
    await _ensure_unique_sku(records, product_in.sku)
    await _validate_hierarchy(records, product_in.sku_level, product_in.parent_id)
    product = await crud_product.insert_product(records, product_in.model_dump())
    logger.info(f"Product {product.sku} created")
    return product


async def update_product(records: RecordStore, product_id: str, product_in: ProductUpdate) -> Product:
    current = await get_product(records, product_id)
    changes = product_in.model_dump(exclude_unset=True)
    merged = current.model_copy(update=changes)

    if merged.sku != current.sku:
        await _ensure_unique_sku(records, merged.sku, product_id)
    if merged.sku_level != current.sku_level or merged.parent_id != current.parent_id:
        await _validate_hierarchy(records, merged.sku_level, merged.parent_id, product_id)
    if merged.sku_level != current.sku_level and await crud_product.list_children(records, product_id):
        raise ProductValidationError("Cannot change the level of a product that has children")

    return await crud_product.update_product(records, product_id, changes)


async def delete_product(records: RecordStore, product_id: str) -> None:
    children = await crud_product.list_children(records, product_id)
    if children:
        raise ProductValidationError(
            f"Product {product_id} still has {len(children)} child products, delete them first"
        )
    if not await crud_product.delete_product(records, product_id):
        raise ProductValidationError(f"Product {product_id} not found")
    logger.info(f"Product {product_id} deleted")

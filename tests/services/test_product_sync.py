import pytest

from catalog_sync.core.config import get_settings
from catalog_sync.crud import product as crud_product
from catalog_sync.crud import store as crud_store
from catalog_sync.db.record_store import PRODUCTS, SHOPIFY_PRODUCTS
from catalog_sync.services.sync.actions import sync_products_from_shopify, sync_products_to_shopify


async def _add_product(records, sku, **fields):
    values = {"sku": sku, "name": f"Product {sku}", "category": "mugs", "price": 1299, "stock": 4, **fields}
    return await crud_product.insert_product(records, values)


@pytest.mark.asyncio
async def test_push_updates_product_whose_sku_exists_remotely(records, seed_store, fake_client, client_factory, remote_product):
    """One update call and no create when the SKU is already on Shopify"""
    store = await seed_store()
    await _add_product(records, "SKU-1")
    fake_client.products = [remote_product(301, "SKU-1")]

    result = await sync_products_to_shopify(records, store.id, client_factory)

    writes = [c for c in fake_client.calls if c[0] in ("create_product", "update_product")]
    assert writes == [("update_product", 301, "SKU-1")]
    assert result.success is True
    assert result.synced_products == 1


@pytest.mark.asyncio
async def test_push_creates_missing_product_and_links_it(records, seed_store, fake_client, client_factory):
    store = await seed_store()
    product = await _add_product(records, "SKU-NEW")

    result = await sync_products_to_shopify(records, store.id, client_factory)

    assert [c[0] for c in fake_client.calls if c[0] != "list_products"] == ["create_product"]
    link = await crud_product.get_link(records, product.id, store.id)
    assert link.shopify_product_id == fake_client.products[0].id
    assert link.sync_status == "synced"
    assert result.message == "Synced 1 products to Shopify"


@pytest.mark.asyncio
async def test_push_twice_does_not_duplicate(records, seed_store, fake_client, client_factory):
    store = await seed_store()
    await _add_product(records, "SKU-1")

    await sync_products_to_shopify(records, store.id, client_factory)
    await sync_products_to_shopify(records, store.id, client_factory)

    assert len(fake_client.products) == 1
    assert len(await records.get(SHOPIFY_PRODUCTS)) == 1


@pytest.mark.asyncio
async def test_one_failing_product_does_not_stop_the_batch(records, seed_store, fake_client, client_factory):
    store = await seed_store()
    await _add_product(records, "SKU-1")
    await _add_product(records, "SKU-BAD", name="Broken Mug")
    await _add_product(records, "SKU-3")
    fake_client.failing_skus.add("SKU-BAD")

    result = await sync_products_to_shopify(records, store.id, client_factory)

    assert result.success is False
    assert result.synced_products == 2
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Product Broken Mug:")
    stored = await crud_store.get_store(records, store.id)
    assert stored.sync_status == "error"


@pytest.mark.asyncio
async def test_failed_push_marks_existing_link_as_error(records, seed_store, fake_client, client_factory):
    store = await seed_store()
    mug = await _add_product(records, "SKU-1", name="Blue Mug")
    await sync_products_to_shopify(records, store.id, client_factory)
    assert (await crud_product.get_link(records, mug.id, store.id)).sync_status == "synced"

    fake_client.failing_skus.add("SKU-1")
    result = await sync_products_to_shopify(records, store.id, client_factory)

    assert result.errors == ["Product Blue Mug: Shopify rejected product: Price is invalid"]
    assert (await crud_product.get_link(records, mug.id, store.id)).sync_status == "error"

    fake_client.failing_skus.clear()
    await sync_products_to_shopify(records, store.id, client_factory)
    assert (await crud_product.get_link(records, mug.id, store.id)).sync_status == "synced"


@pytest.mark.asyncio
async def test_successful_push_marks_store_success(records, seed_store, client_factory):
    store = await seed_store()
    await _add_product(records, "SKU-1")

    await sync_products_to_shopify(records, store.id, client_factory)

    stored = await crud_store.get_store(records, store.id)
    assert stored.sync_status == "success"
    assert stored.last_sync_at is not None


@pytest.mark.asyncio
async def test_push_sets_inventory_levels_when_enabled(records, seed_store, fake_client, client_factory, monkeypatch):
    monkeypatch.setattr(get_settings(), "SHOPIFY_SYNC_INVENTORY_LEVELS", True)
    store = await seed_store()
    await _add_product(records, "SKU-1", stock=11)

    await sync_products_to_shopify(records, store.id, client_factory)

    assert len(fake_client.inventory_levels) == 1
    _, available, location_id = fake_client.inventory_levels[0]
    assert available == 11
    assert location_id == 71


@pytest.mark.asyncio
async def test_push_for_unknown_store_returns_failed_result(records, client_factory):
    result = await sync_products_to_shopify(records, "missing-store", client_factory)

    assert result.success is False
    assert "not found" in result.message
    assert result.synced_products == 0


@pytest.mark.asyncio
async def test_pull_imports_new_products_as_grandparents(records, seed_store, fake_client, client_factory, remote_product):
    store = await seed_store()
    fake_client.products = [remote_product(301, "SKU-1", price="24.50", barcode="4006381333931")]

    result = await sync_products_from_shopify(records, store.id, client_factory)

    product = await crud_product.get_product_by_sku(records, "SKU-1")
    assert result.success is True
    assert product.price == 2450
    assert product.sku_level == "grandparent"
    assert product.parent_id is None
    assert product.ean13 == "4006381333931"
    assert product.category == get_settings().DEFAULT_PRODUCT_CATEGORY
    link = await crud_product.get_link(records, product.id, store.id)
    assert link.shopify_product_id == 301
    assert link.shopify_variant_id == 3010


@pytest.mark.asyncio
async def test_pull_twice_keeps_product_count_stable(records, seed_store, fake_client, client_factory, remote_product):
    store = await seed_store()
    fake_client.products = [remote_product(301, "SKU-1"), remote_product(302, "SKU-2")]

    await sync_products_from_shopify(records, store.id, client_factory)
    count_after_first = len(await records.get(PRODUCTS))
    await sync_products_from_shopify(records, store.id, client_factory)

    assert count_after_first == 2
    assert len(await records.get(PRODUCTS)) == 2
    assert len(await records.get(SHOPIFY_PRODUCTS)) == 2


@pytest.mark.asyncio
async def test_pull_keeps_hierarchy_of_existing_products(records, seed_store, fake_client, client_factory, remote_product):
    store = await seed_store()
    parent = await _add_product(records, "SKU-P")
    child = await _add_product(records, "SKU-C", sku_level="parent", parent_id=parent.id)
    fake_client.products = [remote_product(302, "SKU-C", price="5.00", title="Renamed")]

    await sync_products_from_shopify(records, store.id, client_factory)

    updated = await crud_product.get_product(records, child.id)
    assert updated.name == "Renamed"
    assert updated.price == 500
    assert updated.sku_level == "parent"
    assert updated.parent_id == parent.id
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_pull_skips_products_without_variants(records, seed_store, fake_client, client_factory, remote_product):
    store = await seed_store()
    empty = remote_product(303, "SKU-3").model_copy(update={"variants": []})
    fake_client.products = [empty, remote_product(304, "SKU-4")]

    result = await sync_products_from_shopify(records, store.id, client_factory)

    assert result.success is True
    assert result.synced_products == 1
    assert result.skipped == 1

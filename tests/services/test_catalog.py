import pytest

from catalog_sync.core.exceptions import ProductValidationError
from catalog_sync.schemas.product import ProductCreate, ProductUpdate
from catalog_sync.services import catalog


def _create(sku, **fields):
    return ProductCreate(**{"sku": sku, "name": f"Product {sku}", "category": "mugs", **fields})


async def _family(records):
    grandparent = await catalog.create_product(records, _create("GP"))
    parent = await catalog.create_product(records, _create("P", sku_level="parent", parent_id=grandparent.id))
    child = await catalog.create_product(records, _create("C", sku_level="child", parent_id=parent.id))
    return grandparent, parent, child


@pytest.mark.asyncio
async def test_three_level_hierarchy(records):
    grandparent, parent, child = await _family(records)

    assert grandparent.parent_id is None
    assert parent.parent_id == grandparent.id
    assert child.parent_id == parent.id
    assert sorted(p.sku for p in await catalog.list_products(records)) == ["C", "GP", "P"]


@pytest.mark.asyncio
async def test_grandparent_cannot_have_parent(records):
    grandparent = await catalog.create_product(records, _create("GP"))

    with pytest.raises(ProductValidationError):
        await catalog.create_product(records, _create("X", parent_id=grandparent.id))


@pytest.mark.asyncio
async def test_parent_must_be_exactly_one_level_up(records):
    grandparent, parent, _ = await _family(records)

    with pytest.raises(ProductValidationError):
        await catalog.create_product(records, _create("C2", sku_level="child", parent_id=grandparent.id))
    with pytest.raises(ProductValidationError):
        await catalog.create_product(records, _create("P2", sku_level="parent"))
    with pytest.raises(ProductValidationError):
        await catalog.create_product(records, _create("P3", sku_level="parent", parent_id="missing"))


@pytest.mark.asyncio
async def test_sku_must_be_unique(records):
    await catalog.create_product(records, _create("DUP"))

    with pytest.raises(ProductValidationError):
        await catalog.create_product(records, _create("DUP"))


@pytest.mark.asyncio
async def test_update_checks_sku_and_hierarchy(records):
    grandparent, parent, child = await _family(records)

    updated = await catalog.update_product(records, child.id, ProductUpdate(name="Renamed", stock=3))
    assert updated.name == "Renamed"
    assert updated.updated_at is not None

    with pytest.raises(ProductValidationError):
        await catalog.update_product(records, child.id, ProductUpdate(sku="GP"))
    with pytest.raises(ProductValidationError):
        await catalog.update_product(records, child.id, ProductUpdate(parent_id=grandparent.id))
    with pytest.raises(ProductValidationError):
        await catalog.update_product(records, parent.id, ProductUpdate(sku_level="grandparent", parent_id=None))


@pytest.mark.asyncio
async def test_delete_refused_while_children_exist(records):
    grandparent, parent, child = await _family(records)

    with pytest.raises(ProductValidationError):
        await catalog.delete_product(records, parent.id)

    await catalog.delete_product(records, child.id)
    await catalog.delete_product(records, parent.id)
    assert [p.sku for p in await catalog.list_products(records)] == ["GP"]


@pytest.mark.asyncio
async def test_invalid_ean13_is_rejected():
    with pytest.raises(ValueError):
        _create("X", ean13="12345")

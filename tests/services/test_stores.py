import pytest

from catalog_sync.core.exceptions import ShopifyConnectionError, StoreNotFoundError
from catalog_sync.db.record_store import SHOPIFY_STORES
from catalog_sync.schemas.store import ShopifyStoreCreate, ShopifyStoreUpdate
from catalog_sync.services import stores

STORE_IN = ShopifyStoreCreate(
    store_name="Test Shop",
    shopify_domain="test-shop.myshopify.com",
    access_token="shpat_secret_token",
    api_secret="api_secret_value",
    webhook_secret="whsec_value",
)


@pytest.mark.asyncio
async def test_create_store_tests_connection_first(records, fake_client, client_factory):
    store = await stores.create_store(records, STORE_IN, client_factory)

    assert fake_client.calls == [("test_connection",)]
    assert store.sync_status == "idle"
    assert store.is_active is True


@pytest.mark.asyncio
async def test_create_store_fails_on_bad_credentials(records, fake_client, client_factory):
    fake_client.connected = False

    with pytest.raises(ShopifyConnectionError):
        await stores.create_store(records, STORE_IN, client_factory)
    assert await records.get(SHOPIFY_STORES) == []


@pytest.mark.asyncio
async def test_credentials_encrypted_at_rest(records, client_factory):
    store = await stores.create_store(records, STORE_IN, client_factory)

    raw = (await records.get(SHOPIFY_STORES))[0]
    for field in ("access_token", "api_secret", "webhook_secret"):
        assert raw[field] != getattr(STORE_IN, field)
    loaded = await stores.get_store(records, store.id)
    assert loaded.access_token == "shpat_secret_token"
    assert loaded.webhook_secret == "whsec_value"


@pytest.mark.asyncio
async def test_update_retests_connection_only_for_new_credentials(records, fake_client, client_factory):
    store = await stores.create_store(records, STORE_IN, client_factory)
    fake_client.calls.clear()

    await stores.update_store(records, store.id, ShopifyStoreUpdate(store_name="Renamed"), client_factory)
    assert fake_client.calls == []

    fake_client.connected = False
    with pytest.raises(ShopifyConnectionError):
        await stores.update_store(records, store.id, ShopifyStoreUpdate(access_token="shpat_new"), client_factory)
    assert (await stores.get_store(records, store.id)).access_token == "shpat_secret_token"


@pytest.mark.asyncio
async def test_update_retests_connection_when_domain_changes(records, fake_client, client_factory):
    store = await stores.create_store(records, STORE_IN, client_factory)
    fake_client.calls.clear()
    fake_client.connected = False

    moved = ShopifyStoreUpdate(shopify_domain="other-shop.myshopify.com", access_token="shpat_secret_token")
    with pytest.raises(ShopifyConnectionError):
        await stores.update_store(records, store.id, moved, client_factory)

    assert fake_client.calls == [("test_connection",)]
    assert (await stores.get_store(records, store.id)).shopify_domain == "test-shop.myshopify.com"


@pytest.mark.asyncio
async def test_delete_store(records, client_factory):
    store = await stores.create_store(records, STORE_IN, client_factory)

    await stores.delete_store(records, store.id)

    with pytest.raises(StoreNotFoundError):
        await stores.get_store(records, store.id)
    with pytest.raises(StoreNotFoundError):
        await stores.delete_store(records, store.id)


@pytest.mark.asyncio
async def test_connection_test_never_raises_for_unknown_store(records, client_factory):
    assert await stores.test_store_connection(records, "missing", client_factory) is False


@pytest.mark.asyncio
async def test_shop_info(records, client_factory):
    store = await stores.create_store(records, STORE_IN, client_factory)

    info = await stores.get_shop_info(records, store.id, client_factory)

    assert info["currency"] == "EUR"


@pytest.mark.asyncio
async def test_list_remote_products(records, fake_client, client_factory, remote_product):
    store = await stores.create_store(records, STORE_IN, client_factory)
    fake_client.products = [remote_product(301, "SKU-1")]

    products = await stores.list_remote_products(records, store.id, client_factory)

    assert [p.id for p in products] == [301]
    with pytest.raises(StoreNotFoundError):
        await stores.list_remote_products(records, "missing", client_factory)

from typing import List

from strawberry.types import Info

from catalog_sync.api.graphql.inputs import set_fields
from catalog_sync.api.graphql.stores.types import (ShopifyProduct, ShopifyStore, ShopifyStoreInput,
                                                   ShopifyStoreUpdateInput, ShopInfo, SyncResult, Webhook)
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.store import ShopifyStoreCreate, ShopifyStoreUpdate
from catalog_sync.services import stores as store_service
from catalog_sync.services import webhooks as webhook_service
from catalog_sync.services.platform_connector import ClientFactory
from catalog_sync.services.sync import actions


def get_records(info: Info) -> RecordStore:
    return info.context["records"]


def get_client_factory(info: Info) -> ClientFactory:
    return info.context["client_factory"]


async def resolve_stores(info: Info) -> List[ShopifyStore]:
    stores = await store_service.list_stores(get_records(info))
    return [ShopifyStore.from_model(store) for store in stores]


async def resolve_shop_info(info: Info, store_id: str) -> ShopInfo:
    shop = await store_service.get_shop_info(get_records(info), store_id, get_client_factory(info))
    return ShopInfo.from_dict(shop)


async def resolve_shopify_products(info: Info, store_id: str) -> List[ShopifyProduct]:
    products = await store_service.list_remote_products(get_records(info), store_id, get_client_factory(info))
    return [ShopifyProduct.from_payload(product) for product in products]


async def resolve_create_store(info: Info, input: ShopifyStoreInput) -> ShopifyStore:
    store_in = ShopifyStoreCreate(**set_fields(input))
    store = await store_service.create_store(get_records(info), store_in, get_client_factory(info))
    return ShopifyStore.from_model(store)


async def resolve_update_store(info: Info, store_id: str, input: ShopifyStoreUpdateInput) -> ShopifyStore:
    store_in = ShopifyStoreUpdate(**set_fields(input))
    store = await store_service.update_store(get_records(info), store_id, store_in, get_client_factory(info))
    return ShopifyStore.from_model(store)


async def resolve_delete_store(info: Info, store_id: str) -> bool:
    await store_service.delete_store(get_records(info), store_id)
    return True


async def resolve_test_connection(info: Info, store_id: str) -> bool:
    return await store_service.test_store_connection(get_records(info), store_id, get_client_factory(info))


async def resolve_sync_products_to_shopify(info: Info, store_id: str) -> SyncResult:
    result = await actions.sync_products_to_shopify(get_records(info), store_id, get_client_factory(info))
    return SyncResult.from_model(result)


async def resolve_sync_products_from_shopify(info: Info, store_id: str) -> SyncResult:
    result = await actions.sync_products_from_shopify(get_records(info), store_id, get_client_factory(info))
    return SyncResult.from_model(result)


async def resolve_sync_orders_from_shopify(info: Info, store_id: str) -> SyncResult:
    result = await actions.sync_orders_from_shopify(get_records(info), store_id, get_client_factory(info))
    return SyncResult.from_model(result)


async def resolve_register_order_webhooks(info: Info, store_id: str, address: str) -> List[Webhook]:
    webhooks = await webhook_service.register_order_webhooks(
        get_records(info), store_id, address, get_client_factory(info)
    )
    return [Webhook(id=str(webhook.id), topic=webhook.topic, address=webhook.address) for webhook in webhooks]

from typing import List

import strawberry
from strawberry.types import Info
from strawberry.scalars import ID

from catalog_sync.api.graphql.stores.types import (ShopifyStore, ShopifyStoreInput,
                                                   ShopifyStoreUpdateInput, SyncResult, Webhook)


@strawberry.type
class StoreMutation:
    @strawberry.mutation
    async def create_shopify_store(self, info: Info, input: ShopifyStoreInput) -> ShopifyStore:
        from catalog_sync.api.graphql.stores.resolvers import resolve_create_store
        return await resolve_create_store(info, input)

    @strawberry.mutation
    async def update_shopify_store(
        self,
        info: Info,
        store_id: ID,
        input: ShopifyStoreUpdateInput
    ) -> ShopifyStore:
        from catalog_sync.api.graphql.stores.resolvers import resolve_update_store
        return await resolve_update_store(info, store_id, input)

    @strawberry.mutation
    async def delete_shopify_store(self, info: Info, store_id: ID) -> bool:
        from catalog_sync.api.graphql.stores.resolvers import resolve_delete_store
        return await resolve_delete_store(info, store_id)

    @strawberry.mutation
    async def test_shopify_connection(self, info: Info, store_id: ID) -> bool:
        from catalog_sync.api.graphql.stores.resolvers import resolve_test_connection
        return await resolve_test_connection(info, store_id)

    @strawberry.mutation
    async def sync_products_to_shopify(self, info: Info, store_id: ID) -> SyncResult:
        from catalog_sync.api.graphql.stores.resolvers import resolve_sync_products_to_shopify
        return await resolve_sync_products_to_shopify(info, store_id)

    @strawberry.mutation
    async def sync_products_from_shopify(self, info: Info, store_id: ID) -> SyncResult:
        from catalog_sync.api.graphql.stores.resolvers import resolve_sync_products_from_shopify
        return await resolve_sync_products_from_shopify(info, store_id)

    @strawberry.mutation
    async def sync_orders_from_shopify(self, info: Info, store_id: ID) -> SyncResult:
        from catalog_sync.api.graphql.stores.resolvers import resolve_sync_orders_from_shopify
        return await resolve_sync_orders_from_shopify(info, store_id)

    @strawberry.mutation
    async def register_order_webhooks(self, info: Info, store_id: ID, address: str) -> List[Webhook]:
        from catalog_sync.api.graphql.stores.resolvers import resolve_register_order_webhooks
        return await resolve_register_order_webhooks(info, store_id, address)

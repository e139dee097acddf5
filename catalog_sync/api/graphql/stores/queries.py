from typing import List

import strawberry
from strawberry.scalars import ID
from strawberry.types import Info

from catalog_sync.api.graphql.stores.types import ShopifyProduct, ShopifyStore, ShopInfo


@strawberry.type
class StoreQuery:
    @strawberry.field
    async def stores(self, info: Info) -> List[ShopifyStore]:
        from catalog_sync.api.graphql.stores.resolvers import resolve_stores
        return await resolve_stores(info)

    @strawberry.field
    async def shop_info(self, info: Info, store_id: ID) -> ShopInfo:
        from catalog_sync.api.graphql.stores.resolvers import resolve_shop_info
        return await resolve_shop_info(info, store_id)

    @strawberry.field
    async def shopify_products(self, info: Info, store_id: ID) -> List[ShopifyProduct]:
        """Products currently in the Shopify store, read live from the Admin API."""
        from catalog_sync.api.graphql.stores.resolvers import resolve_shopify_products
        return await resolve_shopify_products(info, store_id)

from typing import List

import strawberry
from strawberry.types import Info

from catalog_sync.api.graphql.products.types import Product


@strawberry.type
class ProductQuery:
    @strawberry.field
    async def products(self, info: Info) -> List[Product]:
        """All catalog products, newest first."""
        from catalog_sync.api.graphql.products.resolvers import resolve_products
        return await resolve_products(info)

import strawberry
from strawberry.types import Info
from strawberry.scalars import ID

from catalog_sync.api.graphql.products.types import Product, ProductInput, ProductUpdateInput


@strawberry.type
class ProductMutation:
    @strawberry.mutation
    async def create_product(self, info: Info, input: ProductInput) -> Product:
        from catalog_sync.api.graphql.products.resolvers import resolve_create_product
        return await resolve_create_product(info, input)

    @strawberry.mutation
    async def update_product(self, info: Info, product_id: ID, input: ProductUpdateInput) -> Product:
        from catalog_sync.api.graphql.products.resolvers import resolve_update_product
        return await resolve_update_product(info, product_id, input)

    @strawberry.mutation
    async def delete_product(self, info: Info, product_id: ID) -> bool:
        from catalog_sync.api.graphql.products.resolvers import resolve_delete_product
        return await resolve_delete_product(info, product_id)

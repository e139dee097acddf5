from typing import List

from strawberry.types import Info

from catalog_sync.api.graphql.inputs import set_fields
from catalog_sync.api.graphql.products.types import Product, ProductInput, ProductUpdateInput
from catalog_sync.schemas.product import ProductCreate, ProductUpdate
from catalog_sync.services import catalog


async def resolve_products(info: Info) -> List[Product]:
    products = await catalog.list_products(info.context["records"])
    return [Product.from_model(product) for product in products]


async def resolve_create_product(info: Info, input: ProductInput) -> Product:
    product = await catalog.create_product(info.context["records"], ProductCreate(**set_fields(input)))
    return Product.from_model(product)


async def resolve_update_product(info: Info, product_id: str, input: ProductUpdateInput) -> Product:
    changes = ProductUpdate(**set_fields(input))
    product = await catalog.update_product(info.context["records"], product_id, changes)
    return Product.from_model(product)


async def resolve_delete_product(info: Info, product_id: str) -> bool:
    await catalog.delete_product(info.context["records"], product_id)
    return True

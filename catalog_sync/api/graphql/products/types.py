from datetime import datetime
from typing import Optional

import strawberry
from strawberry.scalars import ID

from catalog_sync.schemas.product import Product as ProductModel


@strawberry.type
class Product:
    id: ID
    sku: str
    name: str
    price: int
    stock: int
    category: str
    sku_level: str
    created_at: datetime
    ean13: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[ID] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, product: ProductModel) -> "Product":
        return cls(
            id=ID(product.id),
            sku=product.sku,
            name=product.name,
            price=product.price,
            stock=product.stock,
            category=product.category,
            sku_level=product.sku_level,
            created_at=product.created_at,
            ean13=product.ean13,
            description=product.description,
            parent_id=ID(product.parent_id) if product.parent_id else None,
            updated_at=product.updated_at,
        )


@strawberry.input
class ProductInput:
    sku: str
    name: str
    category: str
    price: int = 0
    stock: int = 0
    sku_level: str = "grandparent"
    ean13: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[ID] = None


@strawberry.input
class ProductUpdateInput:
    sku: Optional[str] = strawberry.UNSET
    name: Optional[str] = strawberry.UNSET
    category: Optional[str] = strawberry.UNSET
    price: Optional[int] = strawberry.UNSET
    stock: Optional[int] = strawberry.UNSET
    sku_level: Optional[str] = strawberry.UNSET
    ean13: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    parent_id: Optional[ID] = strawberry.UNSET

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SkuLevel(str, Enum):
    GRANDPARENT = "grandparent"
    PARENT = "parent"
    CHILD = "child"


# The level a product's parent must have; grandparents have no parent.
PARENT_LEVEL = {
    SkuLevel.GRANDPARENT: None,
    SkuLevel.PARENT: SkuLevel.GRANDPARENT,
    SkuLevel.CHILD: SkuLevel.PARENT,
}


class LinkSyncStatus(str, Enum):
    PENDING = "pending"
    SYNCING = "syncing"
    SYNCED = "synced"
    ERROR = "error"


# Base model for product attributes
class ProductBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    sku: str = Field(min_length=1)
    ean13: Optional[str] = Field(default=None, pattern=r"^\d{13}$")
    name: str
    description: Optional[str] = None
    price: int = 0  # minor currency units
    stock: int = Field(default=0, ge=0)
    category: str
    sku_level: SkuLevel = SkuLevel.GRANDPARENT
    parent_id: Optional[str] = None


# Input model for creating a product
class ProductCreate(ProductBase):
    pass


# Input model for partial updates
class ProductUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    sku: Optional[str] = Field(default=None, min_length=1)
    ean13: Optional[str] = Field(default=None, pattern=r"^\d{13}$")
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[int] = None
    stock: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None
    sku_level: Optional[SkuLevel] = None
    parent_id: Optional[str] = None


# Stored product (output, includes ID and timestamps)
class Product(ProductBase):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ShopifyProductLink(BaseModel):
    """Maps a local product to its Shopify product and variant in one store."""
    model_config = ConfigDict(use_enum_values=True)

    id: str
    created_at: datetime
    local_product_id: str
    shopify_product_id: int
    shopify_variant_id: Optional[int] = None
    shopify_store_id: str
    last_synced_at: Optional[datetime] = None
    sync_status: LinkSyncStatus = LinkSyncStatus.PENDING

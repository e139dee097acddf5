from datetime import datetime
from typing import Any, Dict, List, Optional

import strawberry
from strawberry.scalars import ID

from catalog_sync.core.money import to_minor_units
from catalog_sync.schemas.shopify import ShopifyProductPayload
from catalog_sync.schemas.store import ShopifyStore as ShopifyStoreModel
from catalog_sync.schemas.sync import SyncResult as SyncResultModel


@strawberry.type
class ShopifyStore:
    # Credentials are never exposed
    id: ID
    store_name: str
    shopify_domain: str
    is_active: bool
    sync_status: str
    created_at: datetime
    last_sync_at: Optional[datetime] = None
    has_webhook_secret: bool = False

    @classmethod
    def from_model(cls, store: ShopifyStoreModel) -> "ShopifyStore":
        return cls(
            id=ID(store.id),
            store_name=store.store_name,
            shopify_domain=store.shopify_domain,
            is_active=store.is_active,
            sync_status=store.sync_status,
            last_sync_at=store.last_sync_at,
            has_webhook_secret=bool(store.webhook_secret),
            created_at=store.created_at,
        )


@strawberry.type
class SyncResult:
    success: bool
    message: str
    synced_products: Optional[int] = None
    synced_orders: Optional[int] = None
    skipped: int = 0
    errors: List[str] = strawberry.field(default_factory=list)

    @classmethod
    def from_model(cls, result: SyncResultModel) -> "SyncResult":
        return cls(**result.model_dump())


@strawberry.type
class Webhook:
    id: ID
    topic: str
    address: str


@strawberry.input
class ShopifyStoreInput:
    store_name: str
    shopify_domain: str
    access_token: str
    api_key: str = ""
    api_secret: str = ""
    webhook_secret: Optional[str] = None


@strawberry.input
class ShopifyStoreUpdateInput:
    store_name: Optional[str] = strawberry.UNSET
    shopify_domain: Optional[str] = strawberry.UNSET
    access_token: Optional[str] = strawberry.UNSET
    api_key: Optional[str] = strawberry.UNSET
    api_secret: Optional[str] = strawberry.UNSET
    webhook_secret: Optional[str] = strawberry.UNSET
    is_active: Optional[bool] = strawberry.UNSET


@strawberry.type
class ShopInfo:
    name: str
    domain: str
    currency: Optional[str] = None
    email: Optional[str] = None
    plan_name: Optional[str] = None

    @classmethod
    def from_dict(cls, shop: Dict[str, Any]) -> "ShopInfo":
        return cls(
            name=shop.get("name", ""),
            domain=shop.get("myshopify_domain") or shop.get("domain", ""),
            currency=shop.get("currency"),
            email=shop.get("email"),
            plan_name=shop.get("plan_name"),
        )


@strawberry.type
class ShopifyVariant:
    id: ID
    sku: Optional[str] = None
    price: int = 0
    inventory_quantity: Optional[int] = None
    barcode: Optional[str] = None


@strawberry.type
class ShopifyProduct:
    """A product as it currently exists in the Shopify store; prices in minor units."""
    id: ID
    title: str
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    variants: List[ShopifyVariant] = strawberry.field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: ShopifyProductPayload) -> "ShopifyProduct":
        return cls(
            id=ID(str(payload.id)),
            title=payload.title,
            product_type=payload.product_type,
            vendor=payload.vendor,
            variants=[
                ShopifyVariant(
                    id=ID(str(variant.id)),
                    sku=variant.sku,
                    price=to_minor_units(variant.price),
                    inventory_quantity=variant.inventory_quantity,
                    barcode=variant.barcode,
                )
                for variant in payload.variants
            ],
        )

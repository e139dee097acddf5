"""Parsed shapes of the Shopify REST payloads the sync engine consumes.

Remote JSON is validated into these models once, at the client or webhook
boundary; unknown fields are ignored. Money stays ``Decimal`` here and is
converted to minor units by the sync mapping.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShopifyPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ShopifyVariantPayload(ShopifyPayload):
    id: int
    product_id: Optional[int] = None
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    inventory_quantity: Optional[int] = None
    inventory_item_id: Optional[int] = None
    barcode: Optional[str] = None


class ShopifyProductPayload(ShopifyPayload):
    id: int
    title: str = ""
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    tags: Optional[str] = None
    variants: List[ShopifyVariantPayload] = Field(default_factory=list)

    @property
    def first_variant(self) -> Optional[ShopifyVariantPayload]:
        return self.variants[0] if self.variants else None


class ShopifyCustomerPayload(ShopifyPayload):
    id: Optional[int] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ShopifyLineItemPayload(ShopifyPayload):
    id: int
    product_id: Optional[int] = None
    variant_id: Optional[int] = None
    sku: Optional[str] = None
    title: str = ""
    variant_title: Optional[str] = None
    quantity: int = 0
    price: Optional[Decimal] = None
    total_discount: Optional[Decimal] = None
    fulfillment_status: Optional[str] = None
    requires_shipping: bool = False
    taxable: bool = False
    gift_card: bool = False


class ShopifyOrderPayload(ShopifyPayload):
    id: int
    order_number: str = ""
    email: Optional[str] = None
    customer: Optional[ShopifyCustomerPayload] = None
    total_price: Optional[Decimal] = None
    subtotal_price: Optional[Decimal] = None
    total_tax: Optional[Decimal] = None
    currency: Optional[str] = None
    financial_status: Optional[str] = None
    fulfillments: List[Dict[str, Any]] = Field(default_factory=list)
    tags: Optional[str] = None
    note: Optional[str] = None
    processed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancel_reason: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None
    line_items: List[ShopifyLineItemPayload] = Field(default_factory=list)

    @field_validator("order_number", mode="before")
    @classmethod
    def _order_number_as_str(cls, value: Any) -> str:
        # Shopify sends order_number as an integer
        return "" if value is None else str(value)

    @field_validator("fulfillments", "line_items", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ShopifyWebhookPayload(ShopifyPayload):
    id: int
    topic: str
    address: str
    format: Optional[str] = None

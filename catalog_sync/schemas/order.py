from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class OrderSyncStatus(str, Enum):
    SYNCED = "synced"
    PENDING = "pending"
    ERROR = "error"


class OrderData(BaseModel):
    """Order fields as derived from a Shopify order, before storage."""
    model_config = ConfigDict(use_enum_values=True)

    shopify_order_id: int
    shopify_store_id: str
    order_number: str
    customer_email: Optional[str] = None
    customer_first_name: Optional[str] = None
    customer_last_name: Optional[str] = None
    total_price: int = 0
    subtotal_price: int = 0
    total_tax: int = 0
    currency: Optional[str] = None
    financial_status: Optional[str] = None
    fulfillment_status: str = "unfulfilled"
    order_status: str = "open"
    shipping_address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None
    tags: Optional[str] = None
    note: Optional[str] = None
    processed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancelled_reason: Optional[str] = None
    last_synced_at: Optional[datetime] = None
    sync_status: OrderSyncStatus = OrderSyncStatus.PENDING


class Order(OrderData):
    id: str
    created_at: datetime


class OrderItemData(BaseModel):
    order_id: str
    shopify_line_item_id: int
    product_id: Optional[str] = None
    shopify_product_id: Optional[int] = None
    shopify_variant_id: Optional[int] = None
    sku: Optional[str] = None
    title: str = ""
    variant_title: Optional[str] = None
    quantity: int = 0
    price: int = 0
    total_discount: int = 0
    fulfillment_status: str = "unfulfilled"
    requires_shipping: bool = False
    taxable: bool = False
    gift_card: bool = False


class OrderItem(OrderItemData):
    id: str
    created_at: datetime


class OrderStats(BaseModel):
    total_orders: int
    total_revenue: int
    pending_orders: int
    fulfilled_orders: int

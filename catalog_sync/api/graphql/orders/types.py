from datetime import datetime
from typing import Optional

import strawberry
from strawberry.scalars import ID, JSON

from catalog_sync.schemas.order import Order as OrderModel
from catalog_sync.schemas.order import OrderItem as OrderItemModel


@strawberry.type
class Order:
    id: ID
    shopify_order_id: str
    shopify_store_id: ID
    order_number: str
    total_price: int
    subtotal_price: int
    total_tax: int
    fulfillment_status: str
    order_status: str
    sync_status: str
    created_at: datetime
    customer_email: Optional[str] = None
    customer_first_name: Optional[str] = None
    customer_last_name: Optional[str] = None
    currency: Optional[str] = None
    financial_status: Optional[str] = None
    shipping_address: Optional[JSON] = None
    billing_address: Optional[JSON] = None
    tags: Optional[str] = None
    note: Optional[str] = None
    processed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancelled_reason: Optional[str] = None
    last_synced_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, order: OrderModel) -> "Order":
        values = order.model_dump()
        # Shopify ids exceed the GraphQL Int range
        values["shopify_order_id"] = str(order.shopify_order_id)
        return cls(**values)


@strawberry.type
class OrderItem:
    id: ID
    order_id: ID
    shopify_line_item_id: str
    title: str
    quantity: int
    price: int
    total_discount: int
    fulfillment_status: str
    requires_shipping: bool
    taxable: bool
    gift_card: bool
    created_at: datetime
    product_id: Optional[ID] = None
    sku: Optional[str] = None
    variant_title: Optional[str] = None

    @classmethod
    def from_model(cls, item: OrderItemModel) -> "OrderItem":
        return cls(
            id=ID(item.id),
            order_id=ID(item.order_id),
            shopify_line_item_id=str(item.shopify_line_item_id),
            title=item.title,
            quantity=item.quantity,
            price=item.price,
            total_discount=item.total_discount,
            fulfillment_status=item.fulfillment_status,
            requires_shipping=item.requires_shipping,
            taxable=item.taxable,
            gift_card=item.gift_card,
            created_at=item.created_at,
            product_id=ID(item.product_id) if item.product_id else None,
            sku=item.sku,
            variant_title=item.variant_title,
        )


@strawberry.type
class OrderStats:
    total_orders: int
    total_revenue: int
    pending_orders: int
    fulfilled_orders: int

import uuid
from datetime import datetime, timezone
from sqlalchemy import (Column, BigInteger, Boolean, DateTime, Integer, String, Text, UniqueConstraint)

from catalog_sync.db.base import Base


class OrderItem(Base):
    __tablename__ = 'order_items'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    order_id = Column(String(36), nullable=False, index=True)
    shopify_line_item_id = Column(BigInteger, nullable=False)
    # Soft reference resolved by SKU, null when the catalog has no match
    product_id = Column(String(36), nullable=True)
    shopify_product_id = Column(BigInteger, nullable=True)
    shopify_variant_id = Column(BigInteger, nullable=True)
    sku = Column(String(100), nullable=True)
    title = Column(Text, nullable=False, default='')
    variant_title = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Integer, nullable=False, default=0)
    total_discount = Column(Integer, nullable=False, default=0)
    fulfillment_status = Column(String(50), nullable=False, default='unfulfilled')
    requires_shipping = Column(Boolean, nullable=False, default=False)
    taxable = Column(Boolean, nullable=False, default=False)
    gift_card = Column(Boolean, nullable=False, default=False)

    __table_args__ = (UniqueConstraint('order_id', 'shopify_line_item_id', name='uq_order_shopify_line_item'),)

import uuid
from datetime import datetime, timezone
from sqlalchemy import (Column, BigInteger, DateTime, Integer, JSON, String, Text, UniqueConstraint)

from catalog_sync.db.base import Base


class Order(Base):
    __tablename__ = 'orders'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    shopify_order_id = Column(BigInteger, nullable=False)
    shopify_store_id = Column(String(36), nullable=False, index=True)
    order_number = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_first_name = Column(Text, nullable=True)
    customer_last_name = Column(Text, nullable=True)
    total_price = Column(Integer, nullable=False, default=0)
    subtotal_price = Column(Integer, nullable=False, default=0)
    total_tax = Column(Integer, nullable=False, default=0)
    currency = Column(String(10), nullable=True)
    financial_status = Column(String(50), nullable=True)
    fulfillment_status = Column(String(50), nullable=False, default='unfulfilled')
    order_status = Column(String(20), nullable=False, default='open')
    shipping_address = Column(JSON, nullable=True)
    billing_address = Column(JSON, nullable=True)
    tags = Column(Text, nullable=True)
    note = Column(Text, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_reason = Column(String(100), nullable=True)
    last_synced_at = Column(DateTime(timezone=True), nullable=True)
    sync_status = Column(String(20), nullable=False, default='pending')

    __table_args__ = (UniqueConstraint('shopify_store_id', 'shopify_order_id', name='uq_store_shopify_order'),)

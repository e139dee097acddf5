import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, BigInteger, DateTime, String, UniqueConstraint

from catalog_sync.db.base import Base

class ShopifyProduct(Base):
    """Link between a local product and its Shopify product/variant for one store."""
    __tablename__ = 'shopify_products'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    local_product_id = Column(String(36), nullable=False, index=True)
    shopify_product_id = Column(BigInteger, nullable=False)
    shopify_variant_id = Column(BigInteger, nullable=True)
    shopify_store_id = Column(String(36), nullable=False)
    last_synced_at = Column(DateTime(timezone=True), nullable=True)
    sync_status = Column(String(20), nullable=False, default='pending')

    __table_args__ = (UniqueConstraint('local_product_id', 'shopify_store_id', name='uq_local_product_store'),)

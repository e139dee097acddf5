import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from catalog_sync.db.base import Base


class Product(Base):
    __tablename__ = 'products'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sku = Column(String(100), nullable=False, unique=True, index=True)
    ean13 = Column(String(13), nullable=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False, default=0)  # minor currency units
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String(255), nullable=False)
    sku_level = Column(String(20), nullable=False, default='grandparent')
    # Weak reference, no cascading delete
    parent_id = Column(String(36), ForeignKey('products.id'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

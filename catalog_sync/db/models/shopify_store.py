import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Boolean, Text

from catalog_sync.db.base import Base

class ShopifyStore(Base):
    __tablename__ = "shopify_stores"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    store_name = Column(String(255), nullable=False)
    shopify_domain = Column(String(255), nullable=False, index=True)
    # Credentials are stored Fernet-encrypted
    access_token = Column(Text, nullable=False)
    api_key = Column(Text, nullable=False, default="")
    api_secret = Column(Text, nullable=False, default="")
    webhook_secret = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sync_status = Column(String(20), nullable=False, default="idle")
    last_sync_at = Column(DateTime(timezone=True), nullable=True)

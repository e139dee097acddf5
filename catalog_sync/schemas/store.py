from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StoreSyncStatus(str, Enum):
    IDLE = "idle"
    SYNCING = "syncing"
    SUCCESS = "success"
    ERROR = "error"


# Base model for common attributes
class ShopifyStoreBase(BaseModel):
    store_name: str
    shopify_domain: str
    api_key: str = ""


# Model for creating a new store (input, plaintext credentials)
class ShopifyStoreCreate(ShopifyStoreBase):
    access_token: str
    api_secret: str = ""
    webhook_secret: Optional[str] = None


class ShopifyStoreUpdate(BaseModel):
    store_name: Optional[str] = None
    shopify_domain: Optional[str] = None
    access_token: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    webhook_secret: Optional[str] = None
    is_active: Optional[bool] = None


# Stored store with decrypted credentials
class ShopifyStore(ShopifyStoreBase):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    created_at: datetime
    access_token: str
    api_secret: str = ""
    webhook_secret: Optional[str] = None
    is_active: bool = True
    sync_status: StoreSyncStatus = StoreSyncStatus.IDLE
    last_sync_at: Optional[datetime] = None

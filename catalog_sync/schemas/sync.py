from typing import List, Optional

from pydantic import BaseModel, Field


class SyncResult(BaseModel):
    """Outcome of one sync action, shown verbatim by the dashboard."""
    success: bool
    message: str
    synced_products: Optional[int] = None
    synced_orders: Optional[int] = None
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)

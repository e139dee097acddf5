import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from catalog_sync.core.exceptions import RecordStoreError

# Collection names shared by every adapter
PRODUCTS = "products"
ORDERS = "orders"
ORDER_ITEMS = "order_items"
SHOPIFY_STORES = "shopify_stores"
SHOPIFY_PRODUCTS = "shopify_products"

COLLECTIONS = (PRODUCTS, ORDERS, ORDER_ITEMS, SHOPIFY_STORES, SHOPIFY_PRODUCTS)

Record = Dict[str, Any]


def _matches(record: Record, filters: Optional[Dict[str, Any]]) -> bool:
    if not filters:
        return True
    return all(record.get(field) == value for field, value in filters.items())


def _sorted(records: List[Record], order_by: Optional[str]) -> List[Record]:
    if not order_by:
        return records
    descending = order_by.startswith("-")
    field = order_by.lstrip("-")
    # None sorts last in ascending order
    present = [r for r in records if r.get(field) is not None]
    missing = [r for r in records if r.get(field) is None]
    present.sort(key=lambda r: r[field], reverse=descending)
    return missing + present if descending else present + missing


class RecordStore(ABC):
    """Abstract collection store used by every sync and catalog service.

    Adapters must provide ``get`` (all records of a collection) and ``save``
    (replace a collection). The relational-style operations below are
    implemented on top of those two; adapters backed by a real query engine
    override them.
    """

    @abstractmethod
    async def get(self, collection: str) -> List[Record]:
        """Return every record of the collection (empty list when unset)."""
        pass

    @abstractmethod
    async def save(self, collection: str, records: List[Record]) -> bool:
        """Replace the collection with ``records``. Returns False on failure."""
        pass

    async def select(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
    ) -> List[Record]:
        records = [r for r in await self.get(collection) if _matches(r, filters)]
        return _sorted(records, order_by)

    async def find_one(self, collection: str, **filters: Any) -> Optional[Record]:
        records = await self.select(collection, filters)
        return records[0] if records else None

    async def insert(self, collection: str, record: Record) -> Record:
        record = self.stamp(record)
        records = await self.get(collection)
        records.append(record)
        await self._save_or_raise(collection, records)
        return record

    async def update(self, collection: str, record_id: str, changes: Record) -> Optional[Record]:
        records = await self.get(collection)
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                records[index] = {**record, **changes, "id": record_id}
                await self._save_or_raise(collection, records)
                return records[index]
        return None

    async def delete(self, collection: str, record_id: str) -> bool:
        records = await self.get(collection)
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            return False
        await self._save_or_raise(collection, remaining)
        return True

    async def _save_or_raise(self, collection: str, records: List[Record]) -> None:
        if not await self.save(collection, records):
            raise RecordStoreError(f"Could not save collection '{collection}'")

    @staticmethod
    def stamp(record: Record) -> Record:
        """Copy of ``record`` with ``id`` and ``created_at`` filled in when absent."""
        stamped = dict(record)
        if not stamped.get("id"):
            stamped["id"] = str(uuid.uuid4())
        if not stamped.get("created_at"):
            stamped["created_at"] = datetime.now(timezone.utc)
        return stamped

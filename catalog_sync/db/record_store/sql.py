import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete as sa_delete, inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from catalog_sync.core.exceptions import RecordStoreError
from catalog_sync.db.models import Order, OrderItem, Product, ShopifyProduct, ShopifyStore
from .base import (ORDER_ITEMS, ORDERS, PRODUCTS, SHOPIFY_PRODUCTS, SHOPIFY_STORES,
                   Record, RecordStore)

logger = logging.getLogger(__name__)

MODELS = {
    PRODUCTS: Product,
    ORDERS: Order,
    ORDER_ITEMS: OrderItem,
    SHOPIFY_STORES: ShopifyStore,
    SHOPIFY_PRODUCTS: ShopifyProduct,
}


def _model_for(collection: str):
    model = MODELS.get(collection)
    if model is None:
        raise RecordStoreError(f"Unknown collection: {collection}")
    return model


def _to_record(row) -> Record:
    return {attr.key: getattr(row, attr.key) for attr in sa_inspect(row).mapper.column_attrs}


class SqlRecordStore(RecordStore):
    """Relational adapter: one table per collection, equality filters, one commit per write."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _where(self, model, filters: Optional[Dict[str, Any]]):
        clauses = []
        for field, value in (filters or {}).items():
            column = getattr(model, field)
            clauses.append(column.is_(None) if value is None else column == value)
        return clauses

    async def select(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
    ) -> List[Record]:
        model = _model_for(collection)
        stmt = select(model).where(*self._where(model, filters))
        if order_by:
            column = getattr(model, order_by.lstrip("-"))
            stmt = stmt.order_by(column.desc() if order_by.startswith("-") else column.asc())
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise RecordStoreError(f"Could not query {collection}: {e}") from e
        return [_to_record(row) for row in result.scalars().all()]

    async def get(self, collection: str) -> List[Record]:
        return await self.select(collection)

    async def insert(self, collection: str, record: Record) -> Record:
        model = _model_for(collection)
        row = model(**self.stamp(record))
        self.session.add(row)
        await self._commit(f"insert into {collection}")
        return _to_record(row)

    async def update(self, collection: str, record_id: str, changes: Record) -> Optional[Record]:
        model = _model_for(collection)
        row = await self.session.get(model, record_id)
        if row is None:
            return None
        for field, value in changes.items():
            if field != "id":
                setattr(row, field, value)
        await self._commit(f"update {collection}/{record_id}")
        return _to_record(row)

    async def delete(self, collection: str, record_id: str) -> bool:
        model = _model_for(collection)
        row = await self.session.get(model, record_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self._commit(f"delete {collection}/{record_id}")
        return True

    async def save(self, collection: str, records: List[Record]) -> bool:
        model = _model_for(collection)
        try:
            await self.session.execute(sa_delete(model))
            self.session.add_all([model(**self.stamp(record)) for record in records])
            await self.session.commit()
            return True
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error replacing collection {collection}: {e}", exc_info=True)
            return False

    async def _commit(self, action: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Record store write failed ({action}): {e}")
            raise RecordStoreError(f"Could not {action}: {e}") from e

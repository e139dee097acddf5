from typing import Any, Dict, List, Optional

from catalog_sync.db.record_store import ORDER_ITEMS, ORDERS, RecordStore
from catalog_sync.schemas.order import Order, OrderData, OrderItem, OrderItemData


async def get_order(records: RecordStore, order_id: str) -> Optional[Order]:
    record = await records.find_one(ORDERS, id=order_id)
    return Order(**record) if record else None


async def get_order_by_shopify_id(records: RecordStore, shopify_order_id: int, store_id: str) -> Optional[Order]:
    record = await records.find_one(ORDERS, shopify_order_id=shopify_order_id, shopify_store_id=store_id)
    return Order(**record) if record else None


async def list_orders(records: RecordStore, store_id: Optional[str] = None) -> List[Order]:
    filters = {"shopify_store_id": store_id} if store_id else None
    return [Order(**row) for row in await records.select(ORDERS, filters, order_by="-created_at")]


async def insert_order(records: RecordStore, order: OrderData) -> Order:
    return Order(**await records.insert(ORDERS, order.model_dump()))


async def update_order(records: RecordStore, order_id: str, changes: Dict[str, Any]) -> Optional[Order]:
    record = await records.update(ORDERS, order_id, changes)
    return Order(**record) if record else None


async def list_order_items(records: RecordStore, order_id: str) -> List[OrderItem]:
    return [OrderItem(**row) for row in await records.select(ORDER_ITEMS, {"order_id": order_id})]


async def get_order_item(records: RecordStore, shopify_line_item_id: int, order_id: str) -> Optional[OrderItem]:
    record = await records.find_one(ORDER_ITEMS, shopify_line_item_id=shopify_line_item_id, order_id=order_id)
    return OrderItem(**record) if record else None


async def insert_order_item(records: RecordStore, item: OrderItemData) -> OrderItem:
    return OrderItem(**await records.insert(ORDER_ITEMS, item.model_dump()))


async def update_order_item(records: RecordStore, item_id: str, changes: Dict[str, Any]) -> Optional[OrderItem]:
    record = await records.update(ORDER_ITEMS, item_id, changes)
    return OrderItem(**record) if record else None

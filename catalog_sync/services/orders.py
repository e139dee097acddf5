from typing import List, Optional

from catalog_sync.crud import order as crud_order
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.order import Order, OrderItem, OrderStats


async def list_orders(records: RecordStore) -> List[Order]:
    return await crud_order.list_orders(records)


async def list_orders_by_store(records: RecordStore, store_id: str) -> List[Order]:
    return await crud_order.list_orders(records, store_id)


async def get_order_items(records: RecordStore, order_id: str) -> List[OrderItem]:
    return await crud_order.list_order_items(records, order_id)


async def get_order_stats(records: RecordStore, store_id: Optional[str] = None) -> OrderStats:
    """Totals over all orders; revenue is in minor units and includes cancelled orders."""
    orders = await crud_order.list_orders(records, store_id)
    return OrderStats(
        total_orders=len(orders),
        total_revenue=sum(order.total_price for order in orders),
        pending_orders=sum(1 for order in orders if order.fulfillment_status == "unfulfilled"),
        fulfilled_orders=sum(1 for order in orders if order.fulfillment_status == "fulfilled"),
    )

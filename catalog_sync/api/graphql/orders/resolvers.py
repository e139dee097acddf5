from typing import List, Optional

from strawberry.types import Info

from catalog_sync.api.graphql.orders.types import Order, OrderItem, OrderStats
from catalog_sync.services import orders as order_service


async def resolve_orders(info: Info, store_id: Optional[str] = None) -> List[Order]:
    records = info.context["records"]
    if store_id:
        orders = await order_service.list_orders_by_store(records, store_id)
    else:
        orders = await order_service.list_orders(records)
    return [Order.from_model(order) for order in orders]


async def resolve_order_items(info: Info, order_id: str) -> List[OrderItem]:
    items = await order_service.get_order_items(info.context["records"], order_id)
    return [OrderItem.from_model(item) for item in items]


async def resolve_order_stats(info: Info, store_id: Optional[str] = None) -> OrderStats:
    stats = await order_service.get_order_stats(info.context["records"], store_id)
    return OrderStats(**stats.model_dump())

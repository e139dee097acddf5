from typing import List, Optional

import strawberry
from strawberry.types import Info
from strawberry.scalars import ID

from catalog_sync.api.graphql.orders.types import Order, OrderItem, OrderStats


@strawberry.type
class OrderQuery:
    @strawberry.field
    async def orders(self, info: Info, store_id: Optional[ID] = None) -> List[Order]:
        from catalog_sync.api.graphql.orders.resolvers import resolve_orders
        return await resolve_orders(info, store_id)

    @strawberry.field
    async def order_items(self, info: Info, order_id: ID) -> List[OrderItem]:
        from catalog_sync.api.graphql.orders.resolvers import resolve_order_items
        return await resolve_order_items(info, order_id)

    @strawberry.field
    async def order_stats(self, info: Info, store_id: Optional[ID] = None) -> OrderStats:
        from catalog_sync.api.graphql.orders.resolvers import resolve_order_stats
        return await resolve_order_stats(info, store_id)

import strawberry

# Import feature queries and mutations
from catalog_sync.api.graphql.stores.queries import StoreQuery
from catalog_sync.api.graphql.stores.mutations import StoreMutation
from catalog_sync.api.graphql.products.queries import ProductQuery
from catalog_sync.api.graphql.products.mutations import ProductMutation
from catalog_sync.api.graphql.orders.queries import OrderQuery


# Root Query type combining all feature queries
@strawberry.type
class Query(StoreQuery, ProductQuery, OrderQuery):
    pass


# Root Mutation type combining all feature mutations
@strawberry.type
class Mutation(StoreMutation, ProductMutation):
    pass


schema = strawberry.Schema(query=Query, mutation=Mutation)

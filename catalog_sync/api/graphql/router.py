from typing import Any, Dict

from fastapi import Depends, Request
from strawberry.fastapi import GraphQLRouter

from catalog_sync.api.graphql.schema import schema
from catalog_sync.db.record_store import RecordStore, get_record_store
from catalog_sync.services.platform_connector import ClientFactory, get_client_factory


async def get_context(
    request: Request,
    records: RecordStore = Depends(get_record_store),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> Dict[str, Any]:
    """
    Context for GraphQL resolvers: the request, the record store and the
    factory building Shopify clients.
    """
    return {
        "request": request,
        "records": records,
        "client_factory": client_factory,
    }


graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql"
)

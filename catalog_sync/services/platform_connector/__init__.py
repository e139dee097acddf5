from typing import Callable

from catalog_sync.schemas.store import ShopifyStore
from .base import RemoteCatalogClient
from .shopify import ShopifyClient

ClientFactory = Callable[[ShopifyStore], RemoteCatalogClient]


def get_client(store: ShopifyStore) -> RemoteCatalogClient:
    """
    Get a remote client bound to the store's decrypted credentials.

    Sync services take this function as ``client_factory`` so tests can
    substitute a fake client.
    """
    return ShopifyClient(store)


def get_client_factory() -> ClientFactory:
    """FastAPI dependency handing the client factory to the GraphQL context."""
    return get_client


__all__ = ["ClientFactory", "RemoteCatalogClient", "ShopifyClient", "get_client", "get_client_factory"]

"""Error taxonomy shared by the record store, the Shopify client and the sync services."""


class CatalogSyncError(Exception):
    """Base class for all errors raised by catalog_sync."""


class StoreNotFoundError(CatalogSyncError):
    def __init__(self, store_id: str):
        super().__init__(f"Shopify store {store_id} not found")
        self.store_id = store_id


class ShopifyConnectionError(CatalogSyncError):
    """Store credentials are invalid or the shop is unreachable."""


class ShopifyApiError(CatalogSyncError):
    """Shopify rejected a write (validation errors on save)."""


class RecordStoreError(CatalogSyncError):
    """A record store read or write failed."""


class ProductValidationError(CatalogSyncError):
    """A product violates the SKU or hierarchy rules."""


class InvalidSyncTransition(CatalogSyncError):
    pass

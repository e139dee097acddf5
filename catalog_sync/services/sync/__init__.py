from .actions import sync_orders_from_shopify, sync_products_from_shopify, sync_products_to_shopify

__all__ = [
    "sync_orders_from_shopify",
    "sync_products_from_shopify",
    "sync_products_to_shopify",
]

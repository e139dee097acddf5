from .product import Product
from .shopify_store import ShopifyStore
from .shopify_product import ShopifyProduct
from .order import Order
from .order_item import OrderItem

__all__ = [
    'Product',
    'ShopifyStore',
    'ShopifyProduct',
    'Order',
    'OrderItem',
]

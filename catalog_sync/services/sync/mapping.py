"""Mapping between Shopify payloads and local records.

Pure functions; every money amount crosses this boundary as integer minor
units (``round(decimal * 100)``).
"""
import re
from datetime import datetime
from typing import Any, Dict, Optional

from catalog_sync.core.money import to_minor_units
from catalog_sync.schemas.order import OrderData, OrderItemData, OrderSyncStatus
from catalog_sync.schemas.shopify import (ShopifyLineItemPayload, ShopifyOrderPayload,
                                          ShopifyProductPayload)

EAN13_PATTERN = re.compile(r"^\d{13}$")


def valid_ean13(barcode: Optional[str]) -> Optional[str]:
    if barcode and EAN13_PATTERN.match(barcode.strip()):
        return barcode.strip()
    return None


def product_values_from_remote(remote: ShopifyProductPayload, default_category: str) -> Optional[Dict[str, Any]]:
    """
    Local product fields taken from a remote product's first variant.

    Returns None when the product has no variant or the variant has no SKU;
    such products cannot be matched and are skipped by the caller.
    """
    variant = remote.first_variant
    if variant is None or not (variant.sku or "").strip():
        return None
    return {
        "sku": variant.sku.strip(),
        "name": remote.title,
        "description": remote.body_html or None,
        "price": to_minor_units(variant.price),
        "stock": max(variant.inventory_quantity or 0, 0),
        "category": remote.product_type or default_category,
        "ean13": valid_ean13(variant.barcode),
    }


def fulfillment_status_for(payload: ShopifyOrderPayload) -> str:
    return "fulfilled" if payload.fulfillments else "unfulfilled"


def order_status_for(payload: ShopifyOrderPayload) -> str:
    return "cancelled" if payload.cancelled_at else "open"


def order_data_from_remote(payload: ShopifyOrderPayload, store_id: str, synced_at: datetime) -> OrderData:
    customer = payload.customer
    return OrderData(
        shopify_order_id=payload.id,
        shopify_store_id=store_id,
        order_number=payload.order_number,
        customer_email=payload.email,
        customer_first_name=customer.first_name if customer else None,
        customer_last_name=customer.last_name if customer else None,
        total_price=to_minor_units(payload.total_price),
        subtotal_price=to_minor_units(payload.subtotal_price),
        total_tax=to_minor_units(payload.total_tax),
        currency=payload.currency,
        financial_status=payload.financial_status,
        fulfillment_status=fulfillment_status_for(payload),
        order_status=order_status_for(payload),
        shipping_address=payload.shipping_address,
        billing_address=payload.billing_address,
        tags=payload.tags,
        note=payload.note,
        processed_at=payload.processed_at,
        cancelled_at=payload.cancelled_at,
        cancelled_reason=payload.cancel_reason,
        last_synced_at=synced_at,
        sync_status=OrderSyncStatus.SYNCED,
    )


def cancellation_changes(payload: ShopifyOrderPayload, synced_at: datetime) -> Dict[str, Any]:
    # Only these fields change when an existing order is cancelled
    return {
        "order_status": "cancelled",
        "cancelled_at": payload.cancelled_at or synced_at,
        "cancelled_reason": payload.cancel_reason,
        "last_synced_at": synced_at,
    }


def order_item_data_from_remote(
    line_item: ShopifyLineItemPayload,
    order_id: str,
    product_id: Optional[str],
) -> OrderItemData:
    return OrderItemData(
        order_id=order_id,
        shopify_line_item_id=line_item.id,
        product_id=product_id,
        shopify_product_id=line_item.product_id,
        shopify_variant_id=line_item.variant_id,
        sku=line_item.sku,
        title=line_item.title,
        variant_title=line_item.variant_title,
        quantity=line_item.quantity,
        price=to_minor_units(line_item.price),
        total_discount=to_minor_units(line_item.total_discount),
        fulfillment_status=line_item.fulfillment_status or "unfulfilled",
        requires_shipping=line_item.requires_shipping,
        taxable=line_item.taxable,
        gift_card=line_item.gift_card,
    )

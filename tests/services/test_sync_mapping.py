from datetime import datetime, timezone

from catalog_sync.schemas.shopify import ShopifyOrderPayload, ShopifyProductPayload
from catalog_sync.services.sync.mapping import (
    cancellation_changes,
    order_data_from_remote,
    order_item_data_from_remote,
    product_values_from_remote,
    valid_ean13,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_first_variant_is_product_of_record(remote_product):
    remote = remote_product(301, "SKU-1", price="99.99", inventory_quantity=7, product_type="Mugs")
    remote.variants.append(remote.variants[0].model_copy(update={"id": 1, "sku": "SKU-OTHER"}))

    values = product_values_from_remote(remote, "Imported")

    assert values["sku"] == "SKU-1"
    assert values["price"] == 9999
    assert values["stock"] == 7
    assert values["category"] == "Mugs"


def test_product_without_variants_or_sku_is_skipped(remote_product):
    assert product_values_from_remote(ShopifyProductPayload(id=1, title="Empty"), "Imported") is None
    assert product_values_from_remote(remote_product(2, None), "Imported") is None
    assert product_values_from_remote(remote_product(3, "   "), "Imported") is None


def test_defaults_for_missing_remote_fields(remote_product):
    values = product_values_from_remote(remote_product(4, "SKU-4", inventory_quantity=-3), "Imported")

    assert values["category"] == "Imported"
    assert values["stock"] == 0
    assert values["ean13"] is None


def test_ean13_only_from_thirteen_digit_barcodes():
    assert valid_ean13("4006381333931") == "4006381333931"
    assert valid_ean13("12345") is None
    assert valid_ean13("ABCDEFGHIJKLM") is None
    assert valid_ean13(None) is None


def test_order_mapping(order_json):
    payload = ShopifyOrderPayload.model_validate(order_json())

    data = order_data_from_remote(payload, "store-1", NOW)

    assert data.shopify_order_id == 5001
    assert data.order_number == "1001"
    assert data.total_price == 9999
    assert data.subtotal_price == 8403
    assert data.total_tax == 1596
    assert data.customer_first_name == "Jane"
    assert data.fulfillment_status == "unfulfilled"
    assert data.order_status == "open"
    assert data.sync_status == "synced"
    assert data.last_synced_at == NOW


def test_order_status_derivation(order_json):
    fulfilled = ShopifyOrderPayload.model_validate(order_json(fulfillments=[{"id": 1, "status": "success"}]))
    cancelled = ShopifyOrderPayload.model_validate(
        order_json(cancelled_at="2024-03-02T09:00:00Z", cancel_reason="customer")
    )

    assert order_data_from_remote(fulfilled, "s", NOW).fulfillment_status == "fulfilled"
    assert order_data_from_remote(cancelled, "s", NOW).order_status == "cancelled"
    assert order_data_from_remote(cancelled, "s", NOW).cancelled_reason == "customer"


def test_order_without_customer(order_json):
    payload = ShopifyOrderPayload.model_validate(order_json(customer=None, line_items=None))

    data = order_data_from_remote(payload, "s", NOW)

    assert data.customer_first_name is None
    assert payload.line_items == []


def test_cancellation_changes_touch_only_status_fields(order_json):
    payload = ShopifyOrderPayload.model_validate(
        order_json(cancelled_at="2024-03-02T09:00:00Z", cancel_reason="fraud")
    )

    changes = cancellation_changes(payload, NOW)

    assert set(changes) == {"order_status", "cancelled_at", "cancelled_reason", "last_synced_at"}
    assert changes["order_status"] == "cancelled"
    assert changes["cancelled_reason"] == "fraud"


def test_line_item_mapping(order_json):
    line_item = ShopifyOrderPayload.model_validate(order_json()).line_items[0]

    item = order_item_data_from_remote(line_item, "order-1", "product-1")

    assert item.order_id == "order-1"
    assert item.product_id == "product-1"
    assert item.price == 4200
    assert item.quantity == 2
    assert item.fulfillment_status == "unfulfilled"

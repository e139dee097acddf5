"""create catalog sync tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'products',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('sku', sa.String(100), nullable=False),
        sa.Column('ean13', sa.String(13), nullable=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('category', sa.String(255), nullable=False),
        sa.Column('sku_level', sa.String(20), nullable=False, server_default='grandparent'),
        sa.Column('parent_id', sa.String(36), sa.ForeignKey('products.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_products_sku', 'products', ['sku'], unique=True)

    op.create_table(
        'shopify_stores',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('store_name', sa.String(255), nullable=False),
        sa.Column('shopify_domain', sa.String(255), nullable=False),
        # Fernet-encrypted credentials
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('api_key', sa.Text(), nullable=False, server_default=''),
        sa.Column('api_secret', sa.Text(), nullable=False, server_default=''),
        sa.Column('webhook_secret', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sync_status', sa.String(20), nullable=False, server_default='idle'),
        sa.Column('last_sync_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_shopify_stores_shopify_domain', 'shopify_stores', ['shopify_domain'])

    op.create_table(
        'shopify_products',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('local_product_id', sa.String(36), nullable=False),
        sa.Column('shopify_product_id', sa.BigInteger(), nullable=False),
        sa.Column('shopify_variant_id', sa.BigInteger(), nullable=True),
        sa.Column('shopify_store_id', sa.String(36), nullable=False),
        sa.Column('last_synced_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sync_status', sa.String(20), nullable=False, server_default='pending'),
        sa.UniqueConstraint('local_product_id', 'shopify_store_id', name='uq_local_product_store'),
    )
    op.create_index('ix_shopify_products_local_product_id', 'shopify_products', ['local_product_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('shopify_order_id', sa.BigInteger(), nullable=False),
        sa.Column('shopify_store_id', sa.String(36), nullable=False),
        sa.Column('order_number', sa.String(100), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('customer_first_name', sa.Text(), nullable=True),
        sa.Column('customer_last_name', sa.Text(), nullable=True),
        # Money columns hold minor currency units
        sa.Column('total_price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('subtotal_price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_tax', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(10), nullable=True),
        sa.Column('financial_status', sa.String(50), nullable=True),
        sa.Column('fulfillment_status', sa.String(50), nullable=False, server_default='unfulfilled'),
        sa.Column('order_status', sa.String(20), nullable=False, server_default='open'),
        sa.Column('shipping_address', sa.JSON(), nullable=True),
        sa.Column('billing_address', sa.JSON(), nullable=True),
        sa.Column('tags', sa.Text(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_reason', sa.String(100), nullable=True),
        sa.Column('last_synced_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sync_status', sa.String(20), nullable=False, server_default='pending'),
        sa.UniqueConstraint('shopify_store_id', 'shopify_order_id', name='uq_store_shopify_order'),
    )
    op.create_index('ix_orders_shopify_store_id', 'orders', ['shopify_store_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('order_id', sa.String(36), nullable=False),
        sa.Column('shopify_line_item_id', sa.BigInteger(), nullable=False),
        sa.Column('product_id', sa.String(36), nullable=True),
        sa.Column('shopify_product_id', sa.BigInteger(), nullable=True),
        sa.Column('shopify_variant_id', sa.BigInteger(), nullable=True),
        sa.Column('sku', sa.String(100), nullable=True),
        sa.Column('title', sa.Text(), nullable=False, server_default=''),
        sa.Column('variant_title', sa.Text(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_discount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('fulfillment_status', sa.String(50), nullable=False, server_default='unfulfilled'),
        sa.Column('requires_shipping', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('taxable', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('gift_card', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('order_id', 'shopify_line_item_id', name='uq_order_shopify_line_item'),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])


def downgrade() -> None:
    op.drop_index('ix_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_shopify_store_id', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_shopify_products_local_product_id', table_name='shopify_products')
    op.drop_table('shopify_products')
    op.drop_index('ix_shopify_stores_shopify_domain', table_name='shopify_stores')
    op.drop_table('shopify_stores')
    op.drop_index('ix_products_sku', table_name='products')
    op.drop_table('products')

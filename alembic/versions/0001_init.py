"""storefront tables

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("image_url", sa.Text()),
    )
    op.create_index("ix_categories_slug", "categories", ["slug"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("category_id", sa.String(length=36), sa.ForeignKey("categories.id", ondelete="SET NULL")),
        sa.Column("price", sa.Numeric(12,2), nullable=False),
        sa.Column("original_price", sa.Numeric(12,2)),
        sa.Column("discount_percent", sa.Integer),
        sa.Column("stock", sa.Integer, server_default="0", nullable=False),
        sa.Column("images", sa.JSON()),
        sa.Column("rating", sa.Numeric(3,1)),
        sa.Column("reviews_count", sa.Integer, server_default="0", nullable=False),
        sa.Column("highlights", sa.JSON()),
        sa.Column("specifications", sa.JSON()),
    )
    op.create_index("ix_products_category_id", "products", ["category_id"])
    op.create_index("ix_products_created_at", "products", ["created_at"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("order_number", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=64)),
        sa.Column("shipping_name", sa.String(length=200), nullable=False),
        sa.Column("shipping_phone", sa.String(length=20), nullable=False),
        sa.Column("shipping_address", sa.Text(), nullable=False),
        sa.Column("shipping_city", sa.String(length=100), nullable=False),
        sa.Column("shipping_state", sa.String(length=100), nullable=False),
        sa.Column("shipping_pincode", sa.String(length=10), nullable=False),
        sa.Column("subtotal", sa.Numeric(12,2), server_default="0"),
        sa.Column("shipping_cost", sa.Numeric(12,2), server_default="0"),
        sa.Column("total", sa.Numeric(12,2), server_default="0"),
        sa.Column("status", sa.String(length=20), server_default="PENDING", nullable=False),  # PENDING/PROCESSING/SHIPPED/DELIVERED/CANCELLED
        sa.Column("payment_method", sa.String(length=16), nullable=False),  # CARD/UPI/COD
        sa.Column("payment_status", sa.String(length=16), nullable=False),
        sa.Column("transaction_id", sa.String(length=64)),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)
    op.create_index("ix_orders_user_id", "orders", ["user_id"])
    op.create_index("ix_orders_created_at", "orders", ["created_at"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("order_id", sa.String(length=36), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column("product_name", sa.String(length=300), nullable=False),
        sa.Column("product_image", sa.Text()),
        sa.Column("price", sa.Numeric(12,2), nullable=False),
        sa.Column("quantity", sa.Integer, server_default="1", nullable=False),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("user_id", sa.String(length=64)),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("order_id", sa.String(length=36), sa.ForeignKey("orders.id", ondelete="SET NULL")),
        sa.Column("content", sa.JSON()),
        sa.Column("status", sa.String(length=20), server_default="PENDING", nullable=False),  # PENDING/SENT/FAILED
    )

def downgrade():
    op.drop_table("notifications")
    op.drop_index("ix_order_items_order_id", table_name="order_items")
    op.drop_table("order_items")
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_index("ix_orders_user_id", table_name="orders")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_products_created_at", table_name="products")
    op.drop_index("ix_products_category_id", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_categories_slug", table_name="categories")
    op.drop_table("categories")

"""ilk sema: urunler, stok, siparisler, filament deposu, denetim kayitlari

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = False) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("capacity_per_batch", sa.Integer()),
        sa.Column("unit_weight_grams", sa.Float()),
        sa.Column("list_price", sa.Numeric(10, 2)),
        *_timestamps(updated=True),
    )
    op.create_index("ix_products_code", "products", ["code"], unique=True)

    op.create_table(
        "product_filaments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "product_id", sa.Uuid(),
            sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("filament_type", sa.String(50), nullable=False),
        sa.Column("filament_color", sa.String(50), nullable=False),
        sa.Column("grams_per_unit", sa.Float(), nullable=False),
    )
    op.create_index("ix_product_filaments_product_id", "product_filaments", ["product_id"])

    op.create_table(
        "inventory",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "product_id", sa.Uuid(),
            sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False, unique=True,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
    )

    op.create_table(
        "stock_movements",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "product_id", sa.Uuid(),
            sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("movement_type", sa.String(20), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("reference_type", sa.String(50)),
        sa.Column("reference_id", sa.Uuid()),
        sa.Column("notes", sa.String(255)),
        sa.Column("previous_stock", sa.Integer(), nullable=False),
        sa.Column("new_stock", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_stock_movements_product_id", "stock_movements", ["product_id"])
    op.create_index("ix_stock_movements_created_at", "stock_movements", ["created_at"])
    op.create_index(
        "ix_stock_movements_reference", "stock_movements", ["reference_type", "reference_id"]
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(20)),
        sa.Column("discount_rate", sa.Numeric(5, 2)),
        *_timestamps(),
    )
    op.create_index("ix_customers_name", "customers", ["name"])

    op.create_table(
        "customer_filament_prices",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "customer_id", sa.Uuid(),
            sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("filament_type", sa.String(50), nullable=False),
        sa.Column("price_per_gram", sa.Numeric(10, 2), nullable=False),
        sa.UniqueConstraint("customer_id", "filament_type", name="uq_customer_filament_type"),
    )
    op.create_index(
        "ix_customer_filament_prices_customer_id", "customer_filament_prices", ["customer_id"]
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("order_code", sa.String(50), nullable=False),
        sa.Column(
            "customer_id", sa.Uuid(),
            sa.ForeignKey("customers.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("status", sa.String(30)),
        sa.Column("production_quantity", sa.Integer()),
        sa.Column("skip_production", sa.Boolean()),
        sa.Column("total_amount", sa.Numeric(12, 2)),
        sa.Column("notes", sa.Text()),
        *_timestamps(updated=True),
    )
    op.create_index("ix_orders_order_code", "orders", ["order_code"], unique=True)
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "order_id", sa.Uuid(),
            sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "product_id", sa.Uuid(),
            sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("product_code", sa.String(50)),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(10, 2)),
        sa.Column("status", sa.String(20)),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])
    op.create_index("ix_order_items_product_id", "order_items", ["product_id"])
    op.create_index("ix_order_items_status", "order_items", ["status"])

    op.create_table(
        "filaments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("color", sa.String(50), nullable=False),
        sa.Column("brand", sa.String(100)),
        sa.Column("total_weight", sa.Float(), nullable=False),
        sa.Column("remaining_weight", sa.Float(), nullable=False),
        sa.Column("critical_stock", sa.Float()),
        sa.Column("price_per_gram", sa.Numeric(10, 4)),
        *_timestamps(updated=True),
    )
    op.create_index("ix_filaments_code", "filaments", ["code"], unique=True)
    op.create_index("ix_filaments_type_color", "filaments", ["type", "color"])

    op.create_table(
        "filament_usage",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "filament_id", sa.Uuid(),
            sa.ForeignKey("filaments.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column(
            "product_id", sa.Uuid(),
            sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("order_id", sa.Uuid(), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("usage_date", sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_filament_usage_filament_id", "filament_usage", ["filament_id"])
    op.create_index("ix_filament_usage_order_id", "filament_usage", ["order_id"])

    op.create_table(
        "filament_purchases",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "filament_id", sa.Uuid(),
            sa.ForeignKey("filaments.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("purchase_date", sa.Date(), nullable=False),
        sa.Column("amount_gram", sa.Float(), nullable=False),
        sa.Column("purchase_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("price_per_gram", sa.Numeric(10, 4), nullable=False),
        sa.Column("supplier", sa.String(255)),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_filament_purchases_filament_id", "filament_purchases", ["filament_id"])

    # Denetim tablolari: silinen urun / siparis kayitlari da kalsin diye foreign key yok
    op.create_table(
        "stock_audit",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("product_id", sa.Uuid()),
        sa.Column("operation", sa.String(20), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Uuid()),
        *_timestamps(),
    )
    op.create_index("ix_stock_audit_product_id", "stock_audit", ["product_id"])

    op.create_table(
        "order_audit",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("order_id", sa.Uuid()),
        sa.Column("event", sa.String(50), nullable=False),
        sa.Column("details", sa.JSON()),
        *_timestamps(),
    )
    op.create_index("ix_order_audit_order_id", "order_audit", ["order_id"])


def downgrade() -> None:
    for table in (
        "order_audit", "stock_audit", "filament_purchases", "filament_usage",
        "filaments", "order_items", "orders", "customer_filament_prices",
        "customers", "stock_movements", "inventory", "product_filaments", "products",
    ):
        op.drop_table(table)

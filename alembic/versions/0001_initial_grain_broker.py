"""Initial schema: customers, suppliers and the orders between them.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-19

Run with:
    alembic upgrade head
    # or
    python -m grainbroker.cli migrate
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("location", sa.String(200), nullable=False),
    )

    op.create_table(
        "suppliers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("location", sa.String(200), nullable=False),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("order_date", sa.Interval(), nullable=False),
        sa.Column("purchase_order", sa.Uuid(), nullable=False),
        sa.Column(
            "customer_id", sa.Uuid(),
            sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "supplier_id", sa.Uuid(),
            sa.ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("order_req_amt_ton", sa.Integer(), nullable=False),
        sa.Column("supplied_amt_ton", sa.Integer(), nullable=False),
        sa.Column("cost_of_delivery", sa.Numeric(18, 2), nullable=False),
    )
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])
    op.create_index("ix_orders_supplier_id", "orders", ["supplier_id"])


def downgrade() -> None:
    op.drop_index("ix_orders_supplier_id", table_name="orders")
    op.drop_index("ix_orders_customer_id", table_name="orders")
    op.drop_table("orders")
    op.drop_table("suppliers")
    op.drop_table("customers")

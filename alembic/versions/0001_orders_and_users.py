"""orders, order_detail and user tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ORDER_STATUS = sa.Enum(
    "PENDING_PAYMENT", "TO_BE_CONFIRMED", "CONFIRMED",
    "DELIVERY_IN_PROGRESS", "COMPLETED", "CANCELLED",
    name="order_status"
)


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("number", sa.String(), nullable=False, unique=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("status", ORDER_STATUS, nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("order_time", sa.DateTime(), nullable=False),
        sa.Column("checkout_time", sa.DateTime(), nullable=True),
        sa.Column("cancel_reason", sa.String(), nullable=True),
        sa.Column("cancel_time", sa.DateTime(), nullable=True),
        sa.Column("delivery_time", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])
    op.create_index("ix_orders_order_time", "orders", ["order_time"])

    op.create_table(
        "order_detail",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("order_id", sa.String(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
    )
    op.create_index("ix_order_detail_order_id", "order_detail", ["order_id"])

    op.create_table(
        "user",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("create_time", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_create_time", "user", ["create_time"])


def downgrade() -> None:
    op.drop_index("ix_user_create_time", table_name="user")
    op.drop_table("user")
    op.drop_index("ix_order_detail_order_id", table_name="order_detail")
    op.drop_table("order_detail")
    op.drop_index("ix_orders_order_time", table_name="orders")
    op.drop_index("ix_orders_user_id", table_name="orders")
    op.drop_table("orders")
    ORDER_STATUS.drop(op.get_bind(), checkfirst=True)

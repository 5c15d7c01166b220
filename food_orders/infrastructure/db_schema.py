from sqlalchemy import Table, Column, String, Integer, Numeric, Enum, DateTime, ForeignKey, MetaData
from sqlalchemy.sql import func

from food_orders.domain.models import OrderStatus

metadata = MetaData()


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String, primary_key=True),
    Column("number", String, nullable=False, unique=True),
    Column("user_id", String, nullable=False, index=True),
    Column("status", Enum(OrderStatus, name="order_status"), nullable=False,
           default=OrderStatus.PENDING_PAYMENT),
    Column("amount", Numeric(10, 2), nullable=False),
    Column("order_time", DateTime, nullable=False, index=True),
    Column("checkout_time", DateTime, nullable=True),
    Column("cancel_reason", String, nullable=True),
    Column("cancel_time", DateTime, nullable=True),
    Column("delivery_time", DateTime, nullable=True)
)


order_detail_tbl = Table(
    "order_detail",
    metadata,
    Column("id", String, primary_key=True),
    Column("order_id", String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String, nullable=False),
    Column("number", Integer, nullable=False),
    Column("amount", Numeric(10, 2), nullable=False)
)


users_tbl = Table(
    "user",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("create_time", DateTime, nullable=False, server_default=func.now(), index=True)
)

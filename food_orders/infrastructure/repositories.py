from typing import Optional, List
from datetime import datetime
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from food_orders.domain.models import Order, OrderStatus
from food_orders.infrastructure.db_schema import orders_tbl, order_detail_tbl, users_tbl
from food_orders.application.interfaces import (
    OrderRepository, UserRepository, OrderAggregateQuery, UserCountQuery, ProductSales
)


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def sum_amount(self, query: OrderAggregateQuery) -> Optional[float]:
        stmt = self._apply_filters(select(func.sum(orders_tbl.c.amount)), query)
        result = await self._session.execute(stmt)
        total = result.scalar()
        return float(total) if total is not None else None

    async def count_orders(self, query: OrderAggregateQuery) -> int:
        stmt = self._apply_filters(select(func.count(orders_tbl.c.id)), query)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def find_by_status_older_than(self, status: OrderStatus, cutoff: datetime) -> List[Order]:
        result = await self._session.execute(
            select(orders_tbl)
            .where(
                orders_tbl.c.status == status,
                orders_tbl.c.order_time < cutoff
            )
            .order_by(orders_tbl.c.order_time.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def update(self, order: Order) -> bool:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order.id)
            .values(
                status=order.status,
                checkout_time=order.checkout_time,
                cancel_reason=order.cancel_reason,
                cancel_time=order.cancel_time,
                delivery_time=order.delivery_time
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def top_sales_by_quantity(self, begin: datetime, end: datetime, limit: int) -> List[ProductSales]:
        quantity = func.sum(order_detail_tbl.c.number).label("quantity")
        result = await self._session.execute(
            select(order_detail_tbl.c.name, quantity)
            .join(orders_tbl, orders_tbl.c.id == order_detail_tbl.c.order_id)
            .where(
                orders_tbl.c.status == OrderStatus.COMPLETED,
                orders_tbl.c.order_time >= begin,
                orders_tbl.c.order_time <= end
            )
            .group_by(order_detail_tbl.c.name)
            .order_by(quantity.desc(), order_detail_tbl.c.name.asc())
            .limit(limit)
        )
        return [ProductSales(name=row.name, quantity=int(row.quantity)) for row in result.fetchall()]

    @staticmethod
    def _apply_filters(stmt, query: OrderAggregateQuery):
        if query.status is not None:
            stmt = stmt.where(orders_tbl.c.status == query.status)
        if query.begin is not None:
            stmt = stmt.where(orders_tbl.c.order_time >= query.begin)
        if query.end is not None:
            stmt = stmt.where(orders_tbl.c.order_time <= query.end)
        return stmt

    def _to_domain(self, row) -> Order:
        """Трансформация DB → Domain"""
        return Order(
            id=row.id,
            number=row.number,
            user_id=row.user_id,
            status=OrderStatus(row.status),
            amount=row.amount,
            order_time=row.order_time,
            checkout_time=row.checkout_time,
            cancel_reason=row.cancel_reason,
            cancel_time=row.cancel_time,
            delivery_time=row.delivery_time
        )


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def count_created(self, query: UserCountQuery) -> int:
        stmt = select(func.count(users_tbl.c.id))
        if query.begin is not None:
            stmt = stmt.where(users_tbl.c.create_time >= query.begin)
        if query.before is not None:
            stmt = stmt.where(users_tbl.c.create_time < query.before)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

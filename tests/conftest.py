import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pytest

from food_orders.application.interfaces import (
    OrderRepository, UserRepository, OrderAggregateQuery, UserCountQuery, ProductSales
)
from food_orders.domain.models import Order, OrderLine, OrderStatus, User


class InMemoryOrderRepository(OrderRepository):
    def __init__(self):
        self.orders = {}
        self.failing_ids = set()
        self.calls = []

    def add(self, order_time: datetime, status: OrderStatus = OrderStatus.COMPLETED,
            amount="10.00", lines=(), order_id: Optional[str] = None) -> Order:
        order_id = order_id or str(uuid.uuid4())
        order = Order(
            id=order_id,
            number=order_id[:8],
            user_id="user-1",
            status=status,
            amount=Decimal(amount),
            order_time=order_time,
            lines=[OrderLine(name=name, number=number, amount=Decimal("1.00")) for name, number in lines]
        )
        self.orders[order.id] = order
        return order

    def _matches(self, order: Order, query: OrderAggregateQuery) -> bool:
        if query.status is not None and order.status != query.status:
            return False
        if query.begin is not None and order.order_time < query.begin:
            return False
        if query.end is not None and order.order_time > query.end:
            return False
        return True

    async def sum_amount(self, query: OrderAggregateQuery) -> Optional[float]:
        self.calls.append(("sum_amount", query))
        amounts = [o.amount for o in self.orders.values() if self._matches(o, query)]
        return float(sum(amounts)) if amounts else None

    async def count_orders(self, query: OrderAggregateQuery) -> int:
        self.calls.append(("count_orders", query))
        return len([o for o in self.orders.values() if self._matches(o, query)])

    async def find_by_status_older_than(self, status: OrderStatus, cutoff: datetime) -> List[Order]:
        return [
            o.model_copy(deep=True) for o in self.orders.values()
            if o.status == status and o.order_time < cutoff
        ]

    async def update(self, order: Order) -> bool:
        if order.id in self.failing_ids:
            raise ConnectionError("database is unavailable")
        if order.id not in self.orders:
            return False
        self.orders[order.id] = order.model_copy(deep=True)
        return True

    async def top_sales_by_quantity(self, begin: datetime, end: datetime, limit: int) -> List[ProductSales]:
        totals = {}
        query = OrderAggregateQuery(status=OrderStatus.COMPLETED, begin=begin, end=end)
        for order in self.orders.values():
            if not self._matches(order, query):
                continue
            for line in order.lines:
                totals[line.name] = totals.get(line.name, 0) + line.number
        ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        return [ProductSales(name=name, quantity=quantity) for name, quantity in ranked[:limit]]


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.users = []

    def add(self, create_time: datetime) -> User:
        user = User(id=str(uuid.uuid4()), create_time=create_time)
        self.users.append(user)
        return user

    async def count_created(self, query: UserCountQuery) -> int:
        return len([
            u for u in self.users
            if (query.begin is None or u.create_time >= query.begin)
            and (query.before is None or u.create_time < query.before)
        ])


class FakeUnitOfWork:
    def __init__(self):
        self.orders = InMemoryOrderRepository()
        self.users = InMemoryUserRepository()
        self.commits = 0
        self.sessions = 0

    @asynccontextmanager
    async def __call__(self):
        self.sessions += 1
        yield self

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        pass


@pytest.fixture()
def uow():
    return FakeUnitOfWork()

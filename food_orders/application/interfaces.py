from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel

from food_orders.domain.models import Order, OrderStatus


class OrderAggregateQuery(BaseModel):
    """Параметры агрегатного запроса по заказам, границы включительно"""
    status: Optional[OrderStatus] = None
    begin: Optional[datetime] = None
    end: Optional[datetime] = None


class UserCountQuery(BaseModel):
    """begin — включительно, before — не включительно"""
    begin: Optional[datetime] = None
    before: Optional[datetime] = None


class ProductSales(BaseModel):
    name: str
    quantity: int


class OrderRepository(ABC):
    @abstractmethod
    async def sum_amount(self, query: OrderAggregateQuery) -> Optional[float]:
        pass

    @abstractmethod
    async def count_orders(self, query: OrderAggregateQuery) -> int:
        pass

    @abstractmethod
    async def find_by_status_older_than(self, status: OrderStatus, cutoff: datetime) -> List[Order]:
        pass

    @abstractmethod
    async def update(self, order: Order) -> bool:
        pass

    @abstractmethod
    async def top_sales_by_quantity(self, begin: datetime, end: datetime, limit: int) -> List[ProductSales]:
        pass


class UserRepository(ABC):
    @abstractmethod
    async def count_created(self, query: UserCountQuery) -> int:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @property
    @abstractmethod
    def users(self) -> UserRepository:
        pass

    @abstractmethod
    async def __call__(self):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

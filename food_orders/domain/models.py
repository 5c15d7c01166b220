from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel

from food_orders.domain.exceptions import OrderStatusError


class OrderStatus(str, Enum):
    PENDING_PAYMENT = "PENDING_PAYMENT"
    TO_BE_CONFIRMED = "TO_BE_CONFIRMED"
    CONFIRMED = "CONFIRMED"
    DELIVERY_IN_PROGRESS = "DELIVERY_IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class OrderLine(BaseModel):
    """Value Object — позиция заказа (блюдо или сет)"""
    name: str
    number: int
    amount: Decimal


class Order(BaseModel):
    """Domain Entity — заказ"""
    id: str
    number: str
    user_id: str
    status: OrderStatus
    amount: Decimal
    order_time: datetime
    checkout_time: Optional[datetime] = None
    cancel_reason: Optional[str] = None
    cancel_time: Optional[datetime] = None
    delivery_time: Optional[datetime] = None
    lines: List[OrderLine] = []

    def is_terminal(self) -> bool:
        """COMPLETED и CANCELLED — конечные статусы"""
        return self.status in TERMINAL_STATUSES

    def can_be_cancelled(self) -> bool:
        """Бизнес-правило: отменить можно любой незавершенный заказ"""
        return not self.is_terminal()

    def can_be_completed(self) -> bool:
        """Бизнес-правило: завершить можно только заказ в доставке"""
        return self.status == OrderStatus.DELIVERY_IN_PROGRESS

    def cancel(self, reason: str, now: datetime) -> None:
        if not self.can_be_cancelled():
            raise OrderStatusError(self.id, self.status.value, "cancel")
        self.status = OrderStatus.CANCELLED
        self.cancel_reason = reason
        self.cancel_time = now

    def complete(self) -> None:
        # Меняется только статус: поля отмены и delivery_time не трогаются
        if not self.can_be_completed():
            raise OrderStatusError(self.id, self.status.value, "complete")
        self.status = OrderStatus.COMPLETED


class User(BaseModel):
    """Domain Entity — пользователь (для отчетов важно только время регистрации)"""
    id: str
    create_time: datetime

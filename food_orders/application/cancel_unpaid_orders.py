from datetime import datetime, timedelta
from typing import Callable

from food_orders.domain.models import Order, OrderStatus
from food_orders.application.order_sweep import OrderSweepUseCase

PAYMENT_TIMEOUT_REASON = "Истекло время оплаты, заказ отменен автоматически"


class CancelUnpaidOrdersUseCase(OrderSweepUseCase):
    """PENDING_PAYMENT дольше 15 минут -> CANCELLED"""
    status = OrderStatus.PENDING_PAYMENT
    name = "payment-timeout"

    def __init__(self, unit_of_work, timeout: timedelta = timedelta(minutes=15),
                 clock: Callable[[], datetime] = datetime.now):
        super().__init__(unit_of_work, timeout, clock)

    def transition(self, order: Order, now: datetime) -> None:
        order.cancel(PAYMENT_TIMEOUT_REASON, now)

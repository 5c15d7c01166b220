from datetime import datetime, timedelta
from typing import Callable

from food_orders.domain.models import Order, OrderStatus
from food_orders.application.order_sweep import OrderSweepUseCase


class CompleteStaleDeliveriesUseCase(OrderSweepUseCase):
    """DELIVERY_IN_PROGRESS дольше 60 минут -> COMPLETED (это не отмена, поля отмены не заполняются)"""
    status = OrderStatus.DELIVERY_IN_PROGRESS
    name = "delivery-timeout"

    def __init__(self, unit_of_work, timeout: timedelta = timedelta(minutes=60),
                 clock: Callable[[], datetime] = datetime.now):
        super().__init__(unit_of_work, timeout, clock)

    def transition(self, order: Order, now: datetime) -> None:
        order.complete()

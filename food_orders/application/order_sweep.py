import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, List
from pydantic import BaseModel

from food_orders.domain.models import Order, OrderStatus

logger = logging.getLogger(__name__)


class SweepResult(BaseModel):
    matched: int = 0
    updated: List[str] = []
    failed: List[str] = []


class OrderSweepUseCase(ABC):
    """Базовый обход зависших заказов.

    Сначала выбираются заказы в статусе `status`, оформленные раньше
    now - timeout, затем каждый обновляется в своей единице работы.
    Ошибка по одному заказу логируется и не останавливает обход.
    """
    status: OrderStatus
    name: str = "sweep"

    def __init__(self, unit_of_work, timeout: timedelta, clock: Callable[[], datetime] = datetime.now):
        self._uow = unit_of_work
        self._timeout = timeout
        self._clock = clock

    @abstractmethod
    def transition(self, order: Order, now: datetime) -> None:
        pass

    async def __call__(self) -> SweepResult:
        now = self._clock()
        cutoff = now - self._timeout
        logger.info(f"[{self.name}] Поиск заказов {self.status.value} старше {cutoff}")

        async with self._uow() as uow:
            orders = await uow.orders.find_by_status_older_than(self.status, cutoff)

        result = SweepResult(matched=len(orders))
        if not orders:
            return result

        logger.info(f"[{self.name}] Найдено заказов: {len(orders)}")
        for order in orders:
            try:
                self.transition(order, now)
                async with self._uow() as uow:
                    updated = await uow.orders.update(order)
                    if updated:
                        await uow.commit()
            except Exception as e:
                logger.error(f"[{self.name}] Ошибка обработки заказа {order.id}: {e}")
                result.failed.append(order.id)
                continue

            if updated:
                logger.info(f"[{self.name}] Заказ {order.id} переведен в {order.status.value}")
                result.updated.append(order.id)
            else:
                logger.warning(f"[{self.name}] Заказ {order.id} не обновлен")
                result.failed.append(order.id)

        return result

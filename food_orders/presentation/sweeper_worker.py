import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, List

from food_orders.application.cancel_unpaid_orders import CancelUnpaidOrdersUseCase
from food_orders.application.complete_stale_deliveries import CompleteStaleDeliveriesUseCase
from food_orders.config import settings
from food_orders.database import AsyncSessionLocal
from food_orders.infrastructure.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def seconds_until(hour: int, now: datetime) -> float:
    """Сколько секунд до ближайшего наступления hour:00 (строго в будущем)"""
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


async def run_periodically(name: str, job: Callable[[], Awaitable], next_delay: Callable[[], float]):
    """Цикл воркера: ждем следующего запуска, выполняем job, повторяем.

    job выполняется внутри цикла, поэтому следующий запуск того же таймера
    не начнется, пока не закончился предыдущий.
    """
    logger.info(f"Воркер {name} запущен")
    while True:
        await asyncio.sleep(next_delay())
        try:
            result = await job()
            logger.info(f"Воркер {name}: {result}")
        except Exception as e:
            logger.error(f"Ошибка в воркере {name}: {e}", exc_info=True)


def start_sweeper(unit_of_work) -> List[asyncio.Task]:
    """Запускает два независимых таймера, каждый — отдельная отменяемая задача"""
    cancel_unpaid = CancelUnpaidOrdersUseCase(
        unit_of_work, timeout=timedelta(minutes=settings.PAYMENT_TIMEOUT_MINUTES)
    )
    complete_deliveries = CompleteStaleDeliveriesUseCase(
        unit_of_work, timeout=timedelta(minutes=settings.DELIVERY_TIMEOUT_MINUTES)
    )
    return [
        asyncio.create_task(
            run_periodically(
                "payment-timeout",
                cancel_unpaid,
                lambda: settings.PAYMENT_SWEEP_INTERVAL_SECONDS
            ),
            name="payment-timeout"
        ),
        asyncio.create_task(
            run_periodically(
                "delivery-timeout",
                complete_deliveries,
                lambda: seconds_until(settings.DELIVERY_SWEEP_HOUR, datetime.now())
            ),
            name="delivery-timeout"
        ),
    ]


async def stop_sweeper(tasks: List[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    logger.info("Воркеры sweeper остановлены")


async def main():
    tasks = start_sweeper(UnitOfWork(AsyncSessionLocal))
    try:
        await asyncio.gather(*tasks)
    finally:
        await stop_sweeper(tasks)


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())

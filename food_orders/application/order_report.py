import logging

from food_orders.domain.models import OrderStatus
from food_orders.domain.reports import ReportPeriod, OrderVolumeReport, DailySeries, day_bounds
from food_orders.application.interfaces import OrderAggregateQuery

logger = logging.getLogger(__name__)


class GetOrderVolumeReportUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, period: ReportPeriod) -> OrderVolumeReport:
        """Количество заказов и завершенных заказов по дням, плюс процент выполнения."""
        logger.info(f"Отчет по заказам за {period.begin} - {period.end}")

        order_counts = DailySeries()
        valid_order_counts = DailySeries()
        async with self._uow() as uow:
            for day in period.days():
                begin, end = day_bounds(day)
                order_counts.append(day, await uow.orders.count_orders(
                    OrderAggregateQuery(begin=begin, end=end)
                ))
                valid_order_counts.append(day, await uow.orders.count_orders(
                    OrderAggregateQuery(status=OrderStatus.COMPLETED, begin=begin, end=end)
                ))

        total_order_count = sum(order_counts.values)
        total_valid_order_count = sum(valid_order_counts.values)
        # Нет заказов — процент выполнения 0.0, а не ошибка
        completion_rate = 0.0
        if total_order_count:
            completion_rate = total_valid_order_count / total_order_count

        return OrderVolumeReport(
            dates=order_counts.dates,
            order_counts=order_counts.values,
            valid_order_counts=valid_order_counts.values,
            total_order_count=total_order_count,
            total_valid_order_count=total_valid_order_count,
            completion_rate=completion_rate
        )

import logging

from food_orders.domain.models import OrderStatus
from food_orders.domain.reports import ReportPeriod, TurnoverReport, DailySeries, day_bounds
from food_orders.application.interfaces import OrderAggregateQuery

logger = logging.getLogger(__name__)


class GetTurnoverReportUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, period: ReportPeriod) -> TurnoverReport:
        """Выручка по дням: сумма завершенных заказов за каждые сутки периода."""
        logger.info(f"Отчет по выручке за {period.begin} - {period.end}")

        series = DailySeries()
        async with self._uow() as uow:
            for day in period.days():
                begin, end = day_bounds(day)
                turnover = await uow.orders.sum_amount(
                    OrderAggregateQuery(status=OrderStatus.COMPLETED, begin=begin, end=end)
                )
                series.append(day, float(turnover) if turnover is not None else 0.0)

        return TurnoverReport(dates=series.dates, turnovers=series.values)

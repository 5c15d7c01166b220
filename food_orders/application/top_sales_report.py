import logging

from food_orders.domain.reports import ReportPeriod, TopSalesReport
from food_orders.config import settings

logger = logging.getLogger(__name__)


class GetTopSalesReportUseCase:
    def __init__(self, unit_of_work, limit: int = settings.TOP_SALES_LIMIT):
        self._uow = unit_of_work
        self._limit = limit

    async def __call__(self, period: ReportPeriod) -> TopSalesReport:
        """Топ продаж за весь период одним запросом (по убыванию количества, при равенстве — по имени)"""
        logger.info(f"Топ-{self._limit} продаж за {period.begin} - {period.end}")

        async with self._uow() as uow:
            sales = await uow.orders.top_sales_by_quantity(
                period.range_start(), period.range_end(), self._limit
            )

        sales = sales[:self._limit]
        return TopSalesReport(
            product_names=[item.name for item in sales],
            quantities=[item.quantity for item in sales]
        )

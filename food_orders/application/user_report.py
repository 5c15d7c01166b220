import logging

from food_orders.domain.reports import ReportPeriod, UserGrowthReport, DailySeries, day_half_open
from food_orders.application.interfaces import UserCountQuery

logger = logging.getLogger(__name__)


class GetUserGrowthReportUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, period: ReportPeriod) -> UserGrowthReport:
        """Новые и общие пользователи по дням.

        Новые считаются в окне [начало дня, начало следующего дня), чтобы
        регистрация ровно в полночь не попала в оба дня. Общее число
        запрашивается отдельно на каждый день, а не накапливается из новых:
        так учитываются записи, созданные задним числом.
        """
        logger.info(f"Отчет по пользователям за {period.begin} - {period.end}")

        new_users = DailySeries()
        total_users = DailySeries()
        async with self._uow() as uow:
            for day in period.days():
                day_start, next_day_start = day_half_open(day)
                new_users.append(day, await uow.users.count_created(
                    UserCountQuery(begin=day_start, before=next_day_start)
                ))
                total_users.append(day, await uow.users.count_created(
                    UserCountQuery(before=next_day_start)
                ))

        return UserGrowthReport(
            dates=new_users.dates,
            new_users=new_users.values,
            total_users=total_users.values
        )

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_orders.database import get_db
from food_orders.presentation.schemas import (
    TurnoverReportResponse, UserReportResponse, OrderReportResponse,
    SalesTop10ReportResponse, ErrorResponse
)
from food_orders.application.turnover_report import GetTurnoverReportUseCase
from food_orders.application.user_report import GetUserGrowthReportUseCase
from food_orders.application.order_report import GetOrderVolumeReportUseCase
from food_orders.application.top_sales_report import GetTopSalesReportUseCase
from food_orders.domain.exceptions import InvalidReportRangeError
from food_orders.domain.reports import ReportPeriod
from food_orders.infrastructure.unit_of_work import UnitOfWork
from food_orders.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()

REPORT_RESPONSES = {400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


# Фабрики для создания use cases
def get_unit_of_work(db: AsyncSession = Depends(get_db)):
    return UnitOfWork(lambda: db)


def get_turnover_report_use_case(uow=Depends(get_unit_of_work)):
    return GetTurnoverReportUseCase(uow)


def get_user_report_use_case(uow=Depends(get_unit_of_work)):
    return GetUserGrowthReportUseCase(uow)


def get_order_report_use_case(uow=Depends(get_unit_of_work)):
    return GetOrderVolumeReportUseCase(uow)


def get_top_sales_report_use_case(uow=Depends(get_unit_of_work)):
    return GetTopSalesReportUseCase(uow)


def report_period(
    begin: Optional[date] = Query(None),
    end: Optional[date] = Query(None)
) -> ReportPeriod:
    """Период отчета из query-параметров; пустые даты тоже проверяются здесь, а не валидацией FastAPI"""
    try:
        return ReportPeriod.create(begin, end, max_days=settings.REPORT_MAX_DAYS)
    except InvalidReportRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))


async def _build_report(use_case, period: ReportPeriod):
    try:
        return await use_case(period)
    except Exception as e:
        logger.error(f"Ошибка построения отчета за {period.begin} - {period.end}: {e}")
        raise HTTPException(status_code=503, detail=f"Service unavailable: {str(e)}")


@router.get(
    "/admin/report/turnoverStatistics",
    response_model=TurnoverReportResponse,
    responses=REPORT_RESPONSES
)
async def turnover_statistics(
    period: ReportPeriod = Depends(report_period),
    use_case: GetTurnoverReportUseCase = Depends(get_turnover_report_use_case)
):
    """Выручка по дням"""
    report = await _build_report(use_case, period)
    return TurnoverReportResponse.from_domain(report)


@router.get(
    "/admin/report/userStatistics",
    response_model=UserReportResponse,
    responses=REPORT_RESPONSES
)
async def user_statistics(
    period: ReportPeriod = Depends(report_period),
    use_case: GetUserGrowthReportUseCase = Depends(get_user_report_use_case)
):
    """Новые и общие пользователи по дням"""
    report = await _build_report(use_case, period)
    return UserReportResponse.from_domain(report)


@router.get(
    "/admin/report/ordersStatistics",
    response_model=OrderReportResponse,
    responses=REPORT_RESPONSES
)
async def orders_statistics(
    period: ReportPeriod = Depends(report_period),
    use_case: GetOrderVolumeReportUseCase = Depends(get_order_report_use_case)
):
    """Заказы по дням и процент выполнения"""
    report = await _build_report(use_case, period)
    return OrderReportResponse.from_domain(report)


@router.get(
    "/admin/report/top10",
    response_model=SalesTop10ReportResponse,
    responses=REPORT_RESPONSES
)
async def top10(
    period: ReportPeriod = Depends(report_period),
    use_case: GetTopSalesReportUseCase = Depends(get_top_sales_report_use_case)
):
    """Топ-10 блюд по количеству продаж"""
    report = await _build_report(use_case, period)
    return SalesTop10ReportResponse.from_domain(report)


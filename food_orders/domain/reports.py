from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator

from food_orders.domain.exceptions import (
    MissingDateBoundError, InvertedDateRangeError, DateRangeTooLargeError
)

DEFAULT_MAX_DAYS = 370


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Окно суток для заказов: [00:00:00, 23:59:59.999999]"""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def day_half_open(day: date) -> Tuple[datetime, datetime]:
    """Окно суток для пользователей: [00:00 дня, 00:00 следующего дня)"""
    return datetime.combine(day, time.min), datetime.combine(day + timedelta(days=1), time.min)


class ReportPeriod(BaseModel):
    """Value Object — период отчета, обе даты включительно.

    Границы проверяются при любом создании, поэтому перевернутый или
    слишком длинный период не доходит до хранилища. create() дополнительно
    проверяет пустые даты и принимает свой лимит дней.
    """
    model_config = ConfigDict(frozen=True)

    begin: date
    end: date

    @model_validator(mode="after")
    def check_range(self, info: ValidationInfo) -> "ReportPeriod":
        max_days = (info.context or {}).get("max_days", DEFAULT_MAX_DAYS)
        if self.end < self.begin:
            raise InvertedDateRangeError(self.begin, self.end)
        days = (self.end - self.begin).days + 1
        if days > max_days:
            raise DateRangeTooLargeError(days, max_days)
        return self

    @classmethod
    def create(cls, begin: Optional[date], end: Optional[date],
               max_days: int = DEFAULT_MAX_DAYS) -> "ReportPeriod":
        if begin is None:
            raise MissingDateBoundError("begin")
        if end is None:
            raise MissingDateBoundError("end")
        return cls.model_validate({"begin": begin, "end": end}, context={"max_days": max_days})

    @property
    def day_count(self) -> int:
        return (self.end - self.begin).days + 1

    def days(self) -> List[date]:
        return [self.begin + timedelta(days=i) for i in range(self.day_count)]

    def range_start(self) -> datetime:
        return datetime.combine(self.begin, time.min)

    def range_end(self) -> datetime:
        return datetime.combine(self.end, time.max)


class DailySeries(BaseModel):
    """Ряд (дата, значение) — по одной точке на каждый день периода"""
    points: List[tuple] = []

    def append(self, day: date, value) -> None:
        self.points.append((day, value))

    @property
    def dates(self) -> List[date]:
        return [day for day, _ in self.points]

    @property
    def values(self) -> list:
        return [value for _, value in self.points]


class TurnoverReport(BaseModel):
    dates: List[date]
    turnovers: List[float]


class UserGrowthReport(BaseModel):
    dates: List[date]
    new_users: List[int]
    total_users: List[int]


class OrderVolumeReport(BaseModel):
    dates: List[date]
    order_counts: List[int]
    valid_order_counts: List[int]
    total_order_count: int
    total_valid_order_count: int
    completion_rate: float


class TopSalesReport(BaseModel):
    product_names: List[str]
    quantities: List[int]

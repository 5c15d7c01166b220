from pydantic import BaseModel


def _join(values) -> str:
    """Списки отдаются фронтенду строкой через запятую (формат графиков админки)"""
    return ",".join(str(value) for value in values)


class TurnoverReportResponse(BaseModel):
    dateList: str
    turnoverList: str

    @classmethod
    def from_domain(cls, report):
        return cls(dateList=_join(report.dates), turnoverList=_join(report.turnovers))


class UserReportResponse(BaseModel):
    dateList: str
    newUserList: str
    totalUserList: str

    @classmethod
    def from_domain(cls, report):
        return cls(
            dateList=_join(report.dates),
            newUserList=_join(report.new_users),
            totalUserList=_join(report.total_users)
        )


class OrderReportResponse(BaseModel):
    dateList: str
    orderCountList: str
    validOrderCountList: str
    totalOrderCount: int
    validOrderCount: int
    orderCompletionRate: float

    @classmethod
    def from_domain(cls, report):
        return cls(
            dateList=_join(report.dates),
            orderCountList=_join(report.order_counts),
            validOrderCountList=_join(report.valid_order_counts),
            totalOrderCount=report.total_order_count,
            validOrderCount=report.total_valid_order_count,
            orderCompletionRate=report.completion_rate
        )


class SalesTop10ReportResponse(BaseModel):
    nameList: str
    numberList: str

    @classmethod
    def from_domain(cls, report):
        return cls(nameList=_join(report.product_names), numberList=_join(report.quantities))


class ErrorResponse(BaseModel):
    detail: str

class DomainException(Exception):
    pass


class OrderStatusError(DomainException):
    def __init__(self, order_id: str, status: str, action: str):
        self.order_id = order_id
        self.status = status
        self.action = action
        super().__init__(f"Заказ {order_id} в статусе {status}: действие '{action}' недопустимо")


class InvalidReportRangeError(DomainException):
    pass


class MissingDateBoundError(InvalidReportRangeError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Не указана дата '{field}': begin и end обязательны")


class InvertedDateRangeError(InvalidReportRangeError):
    def __init__(self, begin, end):
        self.begin = begin
        self.end = end
        super().__init__(f"Дата окончания {end} раньше даты начала {begin}")


class DateRangeTooLargeError(InvalidReportRangeError):
    def __init__(self, days: int, max_days: int):
        self.days = days
        self.max_days = max_days
        super().__init__(f"Слишком большой период: {days} дн. Максимум: {max_days} дн.")

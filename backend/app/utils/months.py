from datetime import date, datetime


def month_start(value: date | datetime) -> date:
    return date(value.year, value.month, 1)


def shift_months(value: date, months: int) -> date:
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_window(value: date | datetime) -> tuple[date, date]:
    """Return ``[start, end)`` of the calendar month containing ``value``."""
    start = month_start(value)
    return start, shift_months(start, 1)

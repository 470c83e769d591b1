"""
Calendar-month arithmetic for month-start dates.

Month steps use dateutil's relativedelta so that adding twelve months to
2000-01-01 lands on 2001-01-01 regardless of month lengths or leap years.
"""

from datetime import date, datetime
from typing import Iterator, Optional, Union

from dateutil.relativedelta import relativedelta


def month_start(value: Union[date, datetime]) -> date:
    """
    Truncate a date or datetime to the first day of its month.

    Args:
        value: Any calendar date

    Returns:
        First day of the same month
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def is_month_start(value: date) -> bool:
    """True if the date is the first day of a month."""
    return value.day == 1


def add_months(start: date, months: int) -> date:
    """
    Shift a month-start date by a number of calendar months.

    Args:
        start: First-of-month date
        months: Offset in months, may be negative

    Returns:
        First-of-month date `months` months away
    """
    return start + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """
    Number of whole calendar months from start to end.

    Args:
        start: Earlier month
        end: Later month

    Returns:
        Month count, negative if end precedes start
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_range(start: date, end: date) -> Iterator[date]:
    """
    Iterate month starts from start to end inclusive.

    Args:
        start: First month
        end: Last month

    Yields:
        Each first-of-month date in order
    """
    for offset in range(months_between(start, end) + 1):
        yield add_months(start, offset)


def format_month(value: Optional[date]) -> Optional[str]:
    """Format a month as YYYY-MM for logs and reports."""
    if value is None:
        return None
    return value.strftime("%Y-%m")

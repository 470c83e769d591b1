"""
Parsers converting raw price rows into PricePoint observations.

The data acquisition side delivers daily closes as dict rows (from CSV or
JSON). These helpers coerce dates and prices into canonical types and cut
the daily history down to the month-start subset the engine works on.
"""

import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from ..errors import MalformedDataError, MissingDataError
from ..utils.months import is_month_start
from .models import PricePoint

logger = structlog.get_logger(__name__)


def parse_date(raw: Any) -> date:
    """
    Parse a date from an ISO string, date or datetime.

    Raises:
        MalformedDataError: If the value cannot be read as a date
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            # Accept timestamps such as 2000-01-01T00:00:00 by keeping the date part
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
    raise MalformedDataError(
        f"Cannot parse date from {raw!r}",
        raw_data=str(raw)[:100],
        expected_format="YYYY-MM-DD"
    )


def parse_close(raw: Any) -> Decimal:
    """
    Parse a closing price into a Decimal.

    Floats go through str() so 110.1 stays 110.1 instead of its binary expansion.

    Raises:
        MalformedDataError: If the value is not a finite number
    """
    if isinstance(raw, bool) or raw is None:
        raise MalformedDataError(f"Cannot parse close from {raw!r}", raw_data=str(raw))
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise MalformedDataError(
            f"Cannot parse close from {raw!r}",
            raw_data=str(raw)[:100],
            expected_format="decimal number"
        ) from None
    if not value.is_finite():
        raise MalformedDataError(f"Close must be finite, got {raw!r}", raw_data=str(raw))
    return value


def parse_price_rows(
    rows: Iterable[Mapping[str, Any]],
    date_field: str = "date",
    close_field: str = "close",
) -> list[PricePoint]:
    """
    Parse dict rows into observations.

    Args:
        rows: Rows with a date and a close column
        date_field: Key holding the date
        close_field: Key holding the closing price

    Returns:
        PricePoint list in input order

    Raises:
        MissingDataError: If a row lacks either field
        MalformedDataError: If a value cannot be parsed
    """
    points = []
    for line_no, row in enumerate(rows, start=1):
        if date_field not in row or close_field not in row:
            raise MissingDataError(
                f"Row {line_no} is missing '{date_field}' or '{close_field}'",
                data_type="price_row",
                context={"row": dict(row)}
            )
        points.append(PricePoint(
            date=parse_date(row[date_field]),
            close=parse_close(row[close_field]),
        ))
    return points


def parse_price_csv(text: str, date_field: str = "date", close_field: str = "close") -> list[PricePoint]:
    """Parse CSV text with a header row into observations."""
    reader = csv.DictReader(io.StringIO(text))
    return parse_price_rows(reader, date_field=date_field, close_field=close_field)


def select_month_starts(points: Iterable[PricePoint]) -> list[PricePoint]:
    """
    Keep only observations dated on the first day of a month.

    Months whose first day was not a trading day drop out here and are
    left for the series completer to fill.

    Args:
        points: Daily observations

    Returns:
        Month-start observations in input order
    """
    points = list(points)
    selected = [point for point in points if is_month_start(point.date)]

    logger.debug(
        "Selected month-start observations",
        daily_count=len(points),
        month_start_count=len(selected)
    )
    return selected

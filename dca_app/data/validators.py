"""
Validation for month-start price observations.

The completer relies on these checks: every observation must sit on the
first day of a month, carry a positive close, and appear only once.
"""

from collections.abc import Iterable
from decimal import Decimal

from ..errors import MalformedDataError
from ..utils.months import is_month_start
from .models import PricePoint


def validate_price_point(point: PricePoint) -> None:
    """
    Validate a single observation.

    Raises:
        MalformedDataError: If the date is not a month start or the close is not positive
    """
    if not is_month_start(point.date):
        raise MalformedDataError(
            f"Observation {point.date.isoformat()} is not on the first day of a month",
            raw_data=point.date.isoformat(),
            expected_format="YYYY-MM-01"
        )

    if not isinstance(point.close, Decimal) or not point.close.is_finite():
        raise MalformedDataError(
            f"Close for {point.date.isoformat()} must be a finite Decimal",
            raw_data=repr(point.close)
        )

    if point.close <= 0:
        raise MalformedDataError(
            f"Close for {point.date.isoformat()} must be positive, got {point.close}",
            raw_data=str(point.close)
        )


def validate_observations(points: Iterable[PricePoint]) -> list[PricePoint]:
    """
    Validate observations and return them sorted by date.

    Args:
        points: Observations in any order

    Returns:
        Observations in ascending date order

    Raises:
        MalformedDataError: On an invalid point or a duplicated month
    """
    ordered = sorted(points, key=lambda point: point.date)

    for i, point in enumerate(ordered):
        validate_price_point(point)
        if i > 0 and ordered[i - 1].date == point.date:
            raise MalformedDataError(
                f"Duplicate observation for {point.date.isoformat()}",
                raw_data=point.date.isoformat()
            )

    return ordered

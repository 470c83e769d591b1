"""Single-shot return calculation"""

from datetime import date
from decimal import Decimal

from ..config.validation import ensure_valid_investment
from ..data.models import MonthlySeries, ReturnResult
from ..errors import InvalidParameterError


def holding_value(series: MonthlySeries, investment: Decimal,
                  start_date: date, end_date: date) -> ReturnResult:
    """Value a holding whose amount and dates have already been checked."""
    initial_price = series.close_on(start_date)
    final_price = series.close_on(end_date)

    if start_date == end_date:
        final_value = investment
    else:
        final_value = investment * (final_price / initial_price)

    return ReturnResult(
        start_date=start_date,
        end_date=end_date,
        invested_amount=investment,
        final_value=final_value,
    )


def compute_return(series: MonthlySeries, investment: Decimal,
                   start_date: date, end_date: date) -> ReturnResult:
    """
    Value of an investment bought at start_date and held to end_date

    final_value = investment * (P1 / P0)

    This is the simplified form of investment * (1 - (P0 - P1) / P0); there
    are no interim cash flows.

    Args:
        series: Completed monthly series
        investment: Amount invested at start_date (ints, floats and numeric
            strings are converted to Decimal)
        start_date: Purchase month
        end_date: Valuation month

    Returns:
        ReturnResult for the holding period

    Raises:
        SeriesLookupError: If either date is not in the series
        InvalidParameterError: If end_date precedes start_date or investment is not positive
    """
    investment = ensure_valid_investment(investment)
    if end_date < start_date:
        raise InvalidParameterError(
            f"End date {end_date.isoformat()} precedes start date {start_date.isoformat()}",
            parameter="end_date",
            value=end_date
        )

    return holding_value(series, investment, start_date, end_date)

"""
Gap filling for month-start price observations.

Fill policy, applied per run of consecutive missing months:

1. A run no longer than the straddle window, with an observed month
   directly before and directly after it, takes the arithmetic mean of
   those two observations.
2. Any other run (longer gaps, or a trailing gap with nothing after it)
   carries the most recent value forward.

Observations after `end` are ignored, so a trailing gap up to `end` is
carried forward even when later data exists.

The policy is a heuristic approximation of the missing prices. It never
back-fills: a month with no earlier value raises DataGapError.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from ..config.defaults import CompletionParams
from ..data.models import FillMethod, MonthlySeries, PricePoint
from ..data.parsers import parse_close, parse_date
from ..data.validators import validate_observations
from ..errors import DataGapError, InvalidParameterError
from ..logging.config import get_fill_logger, log_fill_decision
from ..utils.months import add_months, month_range, month_start

fill_logger = get_fill_logger(__name__)

Observation = Union[PricePoint, tuple[date, Union[Decimal, int, float, str]]]


def _as_points(observations: Iterable[Observation]) -> list[PricePoint]:
    """Accept PricePoints or raw (date, close) pairs."""
    points = []
    for item in observations:
        if isinstance(item, PricePoint):
            points.append(item)
        else:
            raw_date, raw_close = item
            points.append(PricePoint(date=parse_date(raw_date), close=parse_close(raw_close)))
    return points


def complete_monthly_series(
    observations: Iterable[Observation],
    start: Optional[date] = None,
    end: Optional[date] = None,
    straddle_window: int = 1,
) -> MonthlySeries:
    """
    Build a gap-free monthly series from sparse month-start observations.

    Args:
        observations: PricePoints or (date, close) pairs, any order
        start: First month of the result (defaults to the first observation)
        end: Last month of the result (defaults to the last observation)
        straddle_window: Longest run of missing months filled with the
            mean of its observed neighbours

    Returns:
        MonthlySeries covering start..end with every month present

    Raises:
        DataGapError: If there are no observations, or start precedes the first one
        MalformedDataError: If an observation is invalid or duplicated
        InvalidParameterError: If end precedes start or the window is negative
    """
    if straddle_window < 0:
        raise InvalidParameterError(
            "straddle_window must be non-negative",
            parameter="straddle_window",
            value=straddle_window
        )

    points = validate_observations(_as_points(observations))
    if not points:
        raise DataGapError("No observations to complete")

    first_observed = points[0].date
    range_start = month_start(start) if start is not None else first_observed
    range_end = month_start(end) if end is not None else points[-1].date

    if range_end < range_start:
        raise InvalidParameterError(
            f"Series end {range_end.isoformat()} precedes start {range_start.isoformat()}",
            parameter="end",
            value=range_end
        )

    if range_start < first_observed:
        raise DataGapError(
            f"No observation at or before {range_start.isoformat()} to carry forward; "
            f"first observation is {first_observed.isoformat()}",
            missing_month=range_start,
            first_observed=first_observed
        )

    # Observations after the range are neither emitted nor used as neighbours
    beyond = [point for point in points if point.date > range_end]
    if beyond:
        fill_logger.info(
            "Observations after series end ignored",
            end=range_end.isoformat(),
            ignored=len(beyond),
            last_ignored=beyond[-1].date.isoformat(),
        )

    observed = {point.date: point for point in points if point.date <= range_end}
    earlier = [point for point in points if point.date < range_start]
    last_known: Optional[Decimal] = earlier[-1].close if earlier else None

    months = list(month_range(range_start, range_end))
    completed: list[PricePoint] = []
    fill_counts = {FillMethod.MEAN_OF_NEIGHBOURS: 0, FillMethod.CARRIED_FORWARD: 0}

    i = 0
    while i < len(months):
        month = months[i]
        if month in observed:
            point = observed[month]
            completed.append(point)
            last_known = point.close
            i += 1
            continue

        run_end = i
        while run_end + 1 < len(months) and months[run_end + 1] not in observed:
            run_end += 1
        run = months[i:run_end + 1]

        # The earlier neighbour may precede start when the caller trims the range
        before = observed.get(add_months(run[0], -1))
        after = observed.get(add_months(run[-1], 1))

        if before is not None and after is not None and len(run) <= straddle_window:
            value = (before.close + after.close) / 2
            method = FillMethod.MEAN_OF_NEIGHBOURS
            context = {"before": str(before.close), "after": str(after.close)}
        else:
            if last_known is None:
                raise DataGapError(
                    f"No earlier value to carry into {run[0].isoformat()}",
                    missing_month=run[0],
                    first_observed=first_observed
                )
            value = last_known
            method = FillMethod.CARRIED_FORWARD
            context = {"gap_months": len(run)}

        for gap_month in run:
            completed.append(PricePoint(date=gap_month, close=value, source=method))
            log_fill_decision(fill_logger, gap_month, method.value, value, context)
        fill_counts[method] += len(run)

        last_known = value
        i = run_end + 1

    series = MonthlySeries(points=tuple(completed))

    fill_logger.info(
        "Series completed",
        start=series.start.isoformat(),
        end=series.end.isoformat(),
        months=len(series),
        observed=len(series) - sum(fill_counts.values()),
        mean_filled=fill_counts[FillMethod.MEAN_OF_NEIGHBOURS],
        carried_forward=fill_counts[FillMethod.CARRIED_FORWARD],
    )
    return series


class SeriesCompleter:
    """Series completer bound to configured completion parameters"""

    def __init__(self, params: Optional[CompletionParams] = None):
        self.params = params or CompletionParams()

    def complete(
        self,
        observations: Iterable[Observation],
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> MonthlySeries:
        """Complete observations using the configured straddle window."""
        return complete_monthly_series(
            observations,
            start=start,
            end=end,
            straddle_window=self.params.straddle_window,
        )

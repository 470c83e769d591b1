"""
Canonical data models for price series and simulation results.

This module defines immutable data structures that flow through the
pipeline: month-start prices, the completed monthly series, per-call
return results, staged plans, and the per-month comparison records.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, Optional

from ..errors import DataGapError, MalformedDataError, SeriesLookupError
from ..utils.months import add_months, is_month_start, months_between


class FillMethod(str, Enum):
    """How a series value came to be."""
    OBSERVED = "observed"
    MEAN_OF_NEIGHBOURS = "mean_of_neighbours"
    CARRIED_FORWARD = "carried_forward"


class Strategy(str, Enum):
    """Investment strategy being compared."""
    UPFRONT = "upfront"
    STAGED = "staged"


@dataclass(frozen=True)
class PricePoint:
    """Closing price on a month-start date."""
    date: date                                    # First day of the month
    close: Decimal                                # Closing price, positive
    source: FillMethod = FillMethod.OBSERVED      # Observed or substituted

    @property
    def is_filled(self) -> bool:
        """True if the value was substituted by the completer."""
        return self.source is not FillMethod.OBSERVED


@dataclass(frozen=True)
class MonthlySeries:
    """
    Gap-free monthly price series.

    One entry per calendar month between the first and last point, strictly
    increasing. The invariant is checked on construction, so any instance
    handed to a simulator is complete.
    """
    points: tuple[PricePoint, ...]
    _index: dict[date, PricePoint] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Check completeness and build the date index."""
        points = tuple(self.points)
        object.__setattr__(self, "points", points)

        if not points:
            raise DataGapError("Monthly series must contain at least one month")

        previous: Optional[date] = None
        for point in points:
            if point.close is None:
                raise DataGapError(
                    f"Missing close for {point.date.isoformat()}",
                    missing_month=point.date
                )
            if not is_month_start(point.date):
                raise MalformedDataError(
                    f"Series date {point.date.isoformat()} is not a month start",
                    raw_data=point.date.isoformat(),
                    expected_format="YYYY-MM-01"
                )
            if previous is not None:
                step = months_between(previous, point.date)
                if step < 1:
                    raise MalformedDataError(
                        f"Series dates out of order or duplicated at {point.date.isoformat()}",
                        raw_data=point.date.isoformat()
                    )
                if step > 1:
                    raise DataGapError(
                        f"Series has a gap after {previous.isoformat()}",
                        missing_month=add_months(previous, 1)
                    )
            previous = point.date

        object.__setattr__(self, "_index", {point.date: point for point in points})

    @property
    def start(self) -> date:
        """First month of the series."""
        return self.points[0].date

    @property
    def end(self) -> date:
        """Last month of the series."""
        return self.points[-1].date

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    def __contains__(self, month: object) -> bool:
        return month in self._index

    def dates(self) -> list[date]:
        """All months in order."""
        return [point.date for point in self.points]

    def closes(self) -> list[Decimal]:
        """All closes in month order."""
        return [point.close for point in self.points]

    def as_pairs(self) -> list[tuple[date, Decimal]]:
        """Series as (date, close) pairs."""
        return [(point.date, point.close) for point in self.points]

    def point_on(self, month: date) -> PricePoint:
        """
        Get the point for a month.

        Raises:
            SeriesLookupError: If the month is outside the series
        """
        try:
            return self._index[month]
        except KeyError:
            raise SeriesLookupError(
                f"No price for {month.isoformat()} in series "
                f"{self.start.isoformat()}..{self.end.isoformat()}",
                lookup_date=month
            ) from None

    def close_on(self, month: date) -> Decimal:
        """Closing price for a month (raises SeriesLookupError if absent)."""
        return self.point_on(month).close

    def filled_points(self) -> list[PricePoint]:
        """Points substituted by the completer, for auditing."""
        return [point for point in self.points if point.is_filled]


@dataclass(frozen=True)
class ReturnResult:
    """Value of a single investment held from start_date to end_date."""
    start_date: date
    end_date: date
    invested_amount: Decimal
    final_value: Decimal

    @property
    def gain(self) -> Decimal:
        """Final value minus the amount invested."""
        return self.final_value - self.invested_amount

    @property
    def in_profit(self) -> bool:
        """True if the investment ended above what was put in."""
        return self.final_value > self.invested_amount


@dataclass(frozen=True)
class StagedPlan:
    """Equal monthly installments, each held to a common horizon."""
    start_date: date
    staging_periods: int
    horizon_months: int
    total_investment: Decimal

    @property
    def installment_amount(self) -> Decimal:
        """Equal share of the total invested each month."""
        return self.total_investment / self.staging_periods

    @property
    def horizon_date(self) -> date:
        """Month at which every installment is valued."""
        return add_months(self.start_date, self.horizon_months)

    def installments(self) -> list[tuple[int, Decimal]]:
        """(month offset, amount) for every installment."""
        amount = self.installment_amount
        return [(offset, amount) for offset in range(self.staging_periods)]


@dataclass(frozen=True)
class StagedResult:
    """Outcome of a staged plan with its per-installment breakdown."""
    plan: StagedPlan
    installments: tuple[ReturnResult, ...]
    final_value: Decimal


@dataclass(frozen=True)
class ComparisonRecord:
    """Upfront vs. staged outcome for one starting month."""
    start_date: date
    end_date: date
    invested_amount: Decimal
    upfront_value: Decimal
    staged_value: Decimal
    difference: Decimal
    favored_strategy: Strategy

    @classmethod
    def from_values(cls, start_date: date, end_date: date, invested_amount: Decimal,
                    upfront_value: Decimal, staged_value: Decimal) -> "ComparisonRecord":
        """Build a record, deriving difference and the favored strategy."""
        favored = Strategy.UPFRONT if upfront_value >= staged_value else Strategy.STAGED
        return cls(
            start_date=start_date,
            end_date=end_date,
            invested_amount=invested_amount,
            upfront_value=upfront_value,
            staged_value=staged_value,
            difference=upfront_value - staged_value,
            favored_strategy=favored,
        )

    @property
    def upfront_in_profit(self) -> bool:
        return self.upfront_value > self.invested_amount

    @property
    def staged_in_profit(self) -> bool:
        return self.staged_value > self.invested_amount

    @property
    def profit_disagreement(self) -> bool:
        """True if exactly one strategy ended in profit."""
        return self.upfront_in_profit != self.staged_in_profit

    def to_dict(self) -> dict[str, Any]:
        """Serializable view for reporting collaborators."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "invested_amount": str(self.invested_amount),
            "upfront_value": str(self.upfront_value),
            "staged_value": str(self.staged_value),
            "difference": str(self.difference),
            "favored_strategy": self.favored_strategy.value,
        }

"""
Horizon scanner running both strategies for every eligible starting month.

For a horizon of H months, every month m of the series with m + H inside
the series is a candidate start. Each candidate yields one ComparisonRecord;
records come back in chronological order.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..config.defaults import ScanParams
from ..config.validation import ensure_valid_scan
from ..data.models import ComparisonRecord, MonthlySeries, StagedPlan
from ..errors import InvalidParameterError, SeriesLookupError, SimulationError
from ..logging.config import get_scan_logger, log_scan_summary
from ..utils.months import add_months, format_month, months_between
from .returns import holding_value
from .staged import run_plan

scan_logger = get_scan_logger(__name__)


def candidate_start_dates(series: MonthlySeries, horizon_months: int) -> list[date]:
    """
    Starting months whose horizon ends inside the series.

    The last candidate is series.end - horizon_months.
    """
    last_start = add_months(series.end, -horizon_months)
    if last_start < series.start:
        return []
    return series.dates()[:months_between(series.start, last_start) + 1]


def compare_start(series: MonthlySeries, start_date: date, horizon_months: int,
                  staging_periods: int, investment: Decimal) -> ComparisonRecord:
    """
    Compare upfront and staged outcomes for one starting month.

    Parameters are assumed valid; scan_horizons checks them once per scan.
    """
    end_date = add_months(start_date, horizon_months)

    upfront = holding_value(series, investment, start_date, end_date)
    staged = run_plan(series, StagedPlan(
        start_date=start_date,
        staging_periods=staging_periods,
        horizon_months=horizon_months,
        total_investment=investment,
    ))

    return ComparisonRecord.from_values(
        start_date=start_date,
        end_date=end_date,
        invested_amount=investment,
        upfront_value=upfront.final_value,
        staged_value=staged.final_value,
    )


def scan_horizons(
    series: MonthlySeries,
    horizon_months: int,
    staging_periods: int,
    investment: Decimal,
    workers: int = 1,
) -> list[ComparisonRecord]:
    """
    Compare upfront and staged investing for every eligible starting month.

    Args:
        series: Completed monthly series
        horizon_months: Holding period in months
        staging_periods: Number of monthly installments for the staged strategy
        investment: Total amount invested by each strategy
        workers: Threads to spread starting months over (1 runs inline)

    Returns:
        One ComparisonRecord per starting month, ascending by start date

    Raises:
        InvalidParameterError: If parameters are out of range
        SeriesLookupError: If the series is missing a month the scan needs
        SimulationError: If a starting month fails unexpectedly
    """
    investment = ensure_valid_scan(horizon_months, staging_periods, investment)
    if workers < 1:
        raise InvalidParameterError("workers must be at least 1", parameter="workers", value=workers)

    starts = candidate_start_dates(series, horizon_months)
    if not starts:
        scan_logger.warning(
            "Series too short for horizon",
            horizon_months=horizon_months,
            series_start=format_month(series.start),
            series_end=format_month(series.end),
        )
        return []

    def run(start_date: date) -> ComparisonRecord:
        try:
            return compare_start(series, start_date, horizon_months, staging_periods, investment)
        except SeriesLookupError:
            # Contract violation between the scanner and the series; fatal
            raise
        except Exception as e:
            raise SimulationError(
                f"Simulation failed for {start_date.isoformat()}: {e}",
                start_date=start_date,
                context={"horizon_months": horizon_months, "staging_periods": staging_periods}
            ) from e

    if workers == 1:
        records = [run(start_date) for start_date in starts]
    else:
        # Executor.map yields in submission order, so output stays chronological
        with ThreadPoolExecutor(max_workers=workers) as executor:
            records = list(executor.map(run, starts))

    log_scan_summary(scan_logger, horizon_months, staging_periods, records)
    return records


class HorizonScanner:
    """
    Horizon scanner bound to configured scan parameters.

    Holds no state between scans; the same series and parameters always
    produce the same records.
    """

    def __init__(self, params: Optional[ScanParams] = None):
        self.params = params or ScanParams()
        self.logger = scan_logger

    def scan(self, series: MonthlySeries, horizon_months: Optional[int] = None) -> list[ComparisonRecord]:
        """Run one scan, optionally overriding the configured horizon."""
        horizon = horizon_months if horizon_months is not None else self.params.horizon_months
        return scan_horizons(
            series,
            horizon_months=horizon,
            staging_periods=self.params.staging_periods,
            investment=self.params.initial_investment,
            workers=self.params.workers,
        )

    def scan_many(self, series: MonthlySeries, horizons: Iterable[int]) -> dict[int, list[ComparisonRecord]]:
        """
        Run one scan per horizon.

        Args:
            series: Completed monthly series
            horizons: Holding periods to evaluate

        Returns:
            Records keyed by horizon, in the order given
        """
        results = {}
        for horizon in horizons:
            results[horizon] = self.scan(series, horizon)
        return results

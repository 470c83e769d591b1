"""
Main comparison engine coordinator.

Orchestrates the comparison pipeline, coordinating configuration, series
completion, horizon scanning and summary aggregation.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .analysis.aggregator import ComparisonSummary, summarize
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader, build_config
from .config.validation import ConfigValidator
from .data.models import ComparisonRecord, MonthlySeries, PricePoint
from .data.parsers import select_month_starts
from .errors import DataQualityError, InvalidParameterError, SystemFailureError
from .series.completer import Observation, SeriesCompleter
from .simulation.scanner import HorizonScanner

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ComparisonRun:
    """Everything one pipeline run produced."""
    series: MonthlySeries
    records: tuple[ComparisonRecord, ...]
    summary: ComparisonSummary
    horizon_months: int


class ComparisonEngine:
    """
    Main coordinator for the upfront vs. staged comparison.

    Manages the pipeline:
    Observations → Series Completion → Horizon Scan → Summary
    """

    def __init__(
        self,
        ticker: str = "default",
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the engine with resolved configuration.

        Raises:
            InvalidParameterError: If the merged configuration is invalid
        """
        self.logger = logger.bind(ticker=ticker)
        self.ticker = ticker

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        merged = self.config_loader.merge_config(ticker, overrides)

        # Parameters are checked once here, never per starting month
        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error("Configuration validation failed", errors=error_msgs)
            first = validation_errors[0]
            raise InvalidParameterError(
                "; ".join(error_msgs),
                parameter=first.field,
                value=first.value,
            )

        self.config: DefaultConfig = build_config(merged)
        self.completer = SeriesCompleter(self.config.completion)
        self.scanner = HorizonScanner(self.config.scan)

        self.logger.info(
            "Comparison engine initialized",
            horizon_months=self.config.scan.horizon_months,
            staging_periods=self.config.scan.staging_periods,
            initial_investment=str(self.config.scan.initial_investment),
        )

    def complete_series(
        self,
        observations: Iterable[Observation],
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> MonthlySeries:
        """Complete month-start observations into a gap-free series."""
        try:
            return self.completer.complete(observations, start=start, end=end)
        except DataQualityError as e:
            self.logger.error(
                "Series completion failed",
                error=str(e),
                error_type=type(e).__name__,
                context=e.context,
            )
            raise

    def scan(self, series: MonthlySeries, horizon_months: Optional[int] = None) -> list[ComparisonRecord]:
        """Run the horizon scan on a completed series."""
        try:
            return self.scanner.scan(series, horizon_months)
        except SystemFailureError as e:
            self.logger.error(
                "Horizon scan failed",
                error=str(e),
                error_type=type(e).__name__,
                context=e.context,
            )
            raise

    def summarize(self, records: list[ComparisonRecord]) -> ComparisonSummary:
        """Summarize scan records with the configured top-N."""
        return summarize(records, top_n=self.config.aggregation.top_n)

    def run(
        self,
        observations: Iterable[Observation],
        horizon_months: Optional[int] = None,
    ) -> ComparisonRun:
        """
        Run the full pipeline on month-start observations.

        Args:
            observations: PricePoints or (date, close) pairs on month starts
            horizon_months: Override of the configured horizon

        Returns:
            ComparisonRun with the completed series, records and summary
        """
        series = self.complete_series(observations)
        records = self.scan(series, horizon_months)
        summary = self.summarize(records)
        horizon = horizon_months if horizon_months is not None else self.config.scan.horizon_months

        self.logger.info(
            "Comparison run complete",
            horizon_months=horizon,
            months=summary.months,
            upfront_favored_share=str(summary.upfront_favored_share),
        )

        return ComparisonRun(
            series=series,
            records=tuple(records),
            summary=summary,
            horizon_months=horizon,
        )

    def run_daily(
        self,
        daily_points: Iterable[PricePoint],
        horizon_months: Optional[int] = None,
    ) -> ComparisonRun:
        """Run the pipeline on daily closes, keeping only month-start observations."""
        return self.run(select_month_starts(daily_points), horizon_months)

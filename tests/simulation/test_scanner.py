"""Tests for the horizon scanner"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import patch

from dca_app.config.defaults import ScanParams
from dca_app.config.validation import ensure_valid_scan
from dca_app.data.models import Strategy
from dca_app.errors import InvalidParameterError
from dca_app.series.completer import complete_monthly_series
from dca_app.simulation.scanner import (
    HorizonScanner,
    candidate_start_dates,
    compare_start,
    scan_horizons,
)
from dca_app.utils.months import add_months


class TestScenario:
    """The five-month worked example"""

    def test_upfront_favored(self, scenario_series):
        """Upfront 960 beats staged ~924.85 from January 2000"""
        records = scan_horizons(scenario_series, horizon_months=4, staging_periods=4,
                                investment=Decimal("1200"))

        assert len(records) == 1
        record = records[0]
        assert record.start_date == date(2000, 1, 1)
        assert record.end_date == date(2000, 5, 1)
        assert record.upfront_value == Decimal("960")
        assert abs(record.staged_value - Decimal("924.85")) < Decimal("0.01")
        assert abs(record.difference - Decimal("35.15")) < Decimal("0.01")
        assert record.favored_strategy is Strategy.UPFRONT

    def test_staged_favored_when_prices_fall_then_recover(self, points_factory):
        """Buying into a dip favors staging"""
        series = complete_monthly_series(points_factory(date(2000, 1, 1), [100, 50, 50, 100]))
        records = scan_horizons(series, 3, 3, Decimal("300"))

        assert records[0].upfront_value == Decimal("300")
        assert records[0].staged_value == Decimal("500")
        assert records[0].favored_strategy is Strategy.STAGED
        assert records[0].difference == Decimal("-200")


class TestCandidates:
    """Test which starting months are scanned"""

    def test_last_start_is_end_minus_horizon(self, rising_series):
        """Scan stops at series.end - horizon"""
        records = scan_horizons(rising_series, 12, 6, Decimal("1000"))

        assert records[-1].start_date == add_months(rising_series.end, -12)
        assert all(record.end_date <= rising_series.end for record in records)
        assert len(records) == 12

    def test_chronological_without_duplicates(self, rising_series):
        """One record per month in ascending order"""
        records = scan_horizons(rising_series, 6, 3, Decimal("1000"))
        starts = [record.start_date for record in records]

        assert starts == sorted(starts)
        assert len(starts) == len(set(starts))
        assert starts[0] == rising_series.start

    def test_series_too_short(self, scenario_series):
        """No candidates when the horizon exceeds the series"""
        assert candidate_start_dates(scenario_series, 5) == []
        assert scan_horizons(scenario_series, 5, 2, Decimal("100")) == []

    def test_candidates_for_horizon(self, scenario_series):
        """Horizon of 2 over five months gives three starts"""
        assert candidate_start_dates(scenario_series, 2) == [
            date(2000, 1, 1), date(2000, 2, 1), date(2000, 3, 1),
        ]


class TestScanProperties:
    """Test determinism, ties and parameter validation"""

    def test_repeatable(self, rising_series):
        """Identical input gives identical output"""
        first = scan_horizons(rising_series, 12, 12, Decimal("10000"))
        second = scan_horizons(rising_series, 12, 12, Decimal("10000"))
        assert first == second

    def test_parallel_matches_serial(self, rising_series):
        """Threaded scans keep chronological order and values"""
        serial = scan_horizons(rising_series, 6, 6, Decimal("1000"))
        parallel = scan_horizons(rising_series, 6, 6, Decimal("1000"), workers=4)
        assert parallel == serial

    def test_tie_goes_to_upfront(self, points_factory):
        """A flat series ties, and ties favor upfront"""
        series = complete_monthly_series(points_factory(date(2000, 1, 1), [100] * 6))
        records = scan_horizons(series, 3, 3, Decimal("900"))

        assert all(record.difference == 0 for record in records)
        assert all(record.favored_strategy is Strategy.UPFRONT for record in records)

    def test_single_staging_period_never_differs(self, rising_series):
        """With one installment both strategies are the same"""
        records = scan_horizons(rising_series, 6, 1, Decimal("1000"))
        assert all(record.difference == 0 for record in records)

    def test_rising_market_favors_upfront(self, rising_series):
        """Steadily rising prices always favor investing upfront"""
        records = scan_horizons(rising_series, 12, 12, Decimal("1200"))
        assert all(record.favored_strategy is Strategy.UPFRONT for record in records)

    @pytest.mark.parametrize("horizon,staging,investment", [
        (0, 1, Decimal("100")),
        (-3, 1, Decimal("100")),
        (3, 4, Decimal("100")),
        (3, 0, Decimal("100")),
        (3, 3, Decimal("0")),
        (3, 3, Decimal("-1")),
    ])
    def test_invalid_parameters(self, rising_series, horizon, staging, investment):
        """Out-of-range parameters are rejected up front"""
        with pytest.raises(InvalidParameterError):
            scan_horizons(rising_series, horizon, staging, investment)

    def test_invalid_workers(self, rising_series):
        """Worker count must be positive"""
        with pytest.raises(InvalidParameterError):
            scan_horizons(rising_series, 3, 3, Decimal("100"), workers=0)

    @pytest.mark.parametrize("investment", [1200, 1200.0, "1200"])
    def test_plain_number_investment(self, scenario_series, investment):
        """Ints, floats and numeric strings are converted to Decimal before scanning"""
        records = scan_horizons(scenario_series, 4, 4, investment)

        assert records[0].upfront_value == Decimal("960")
        assert abs(records[0].staged_value - Decimal("924.85")) < Decimal("0.01")
        assert isinstance(records[0].invested_amount, Decimal)

    def test_parameters_validated_once_per_scan(self, rising_series):
        """One validation per scan, none per starting month or installment"""
        with patch("dca_app.simulation.scanner.ensure_valid_scan",
                   wraps=ensure_valid_scan) as scan_check, \
                patch("dca_app.simulation.returns.ensure_valid_investment") as amount_check:
            records = scan_horizons(rising_series, 6, 3, Decimal("600"))

        assert len(records) == 18
        scan_check.assert_called_once()
        amount_check.assert_not_called()

    def test_compare_start_matches_scan(self, rising_series):
        """A single comparison equals the scan's record for that month"""
        records = scan_horizons(rising_series, 6, 3, Decimal("600"))
        single = compare_start(rising_series, rising_series.start, 6, 3, Decimal("600"))
        assert single == records[0]


class TestHorizonScanner:
    """Test the configured scanner"""

    def test_uses_params(self, rising_series):
        """Scanner runs with its configured parameters"""
        scanner = HorizonScanner(ScanParams(horizon_months=6, staging_periods=3,
                                            initial_investment=Decimal("600")))
        records = scanner.scan(rising_series)

        assert len(records) == 18
        assert all(record.invested_amount == Decimal("600") for record in records)

    def test_horizon_override(self, rising_series):
        """A horizon passed to scan overrides the configured one"""
        scanner = HorizonScanner(ScanParams(horizon_months=6, staging_periods=3))
        records = scanner.scan(rising_series, horizon_months=12)
        assert records[0].end_date == add_months(rising_series.start, 12)

    def test_scan_many(self, rising_series):
        """One result list per horizon"""
        scanner = HorizonScanner(ScanParams(horizon_months=6, staging_periods=3))
        results = scanner.scan_many(rising_series, [3, 6, 12])

        assert list(results) == [3, 6, 12]
        assert [len(results[h]) for h in (3, 6, 12)] == [21, 18, 12]

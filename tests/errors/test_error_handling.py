"""
Error handling tests for the comparison engine.

Tests cover the error hierarchy, gap handling at the data boundary, and
propagation of contract violations out of the simulation.
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import patch

from dca_app.errors import (
    DataQualityError,
    DataGapError,
    MalformedDataError,
    MissingDataError,
    SystemFailureError,
    SeriesLookupError,
    InvalidParameterError,
    SimulationError,
)
from dca_app.simulation.scanner import scan_horizons


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors have proper hierarchy."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        malformed = MalformedDataError("bad date", raw_data="2000-13-01", expected_format="YYYY-MM-DD")
        assert isinstance(malformed, DataQualityError)
        assert malformed.raw_data == "2000-13-01"

        missing = MissingDataError("no rows", data_type="price_row")
        assert isinstance(missing, DataQualityError)
        assert missing.data_type == "price_row"

    def test_data_gap_error_is_unrecoverable(self):
        """A leading gap cannot be filled, so it is not recoverable."""
        gap = DataGapError("leading gap", missing_month=date(2000, 1, 1),
                           first_observed=date(2000, 3, 1), context={"ticker": "SPY"})
        assert isinstance(gap, DataQualityError)
        assert gap.recoverable is False
        assert gap.context == {"ticker": "SPY"}

    def test_system_failure_error_hierarchy(self):
        """Test that system failure errors have proper hierarchy."""
        lookup = SeriesLookupError("absent", lookup_date=date(2000, 1, 1))
        assert isinstance(lookup, SystemFailureError)
        assert isinstance(lookup, LookupError)
        assert lookup.recoverable is False

        invalid = InvalidParameterError("bad horizon", parameter="horizon_months", value=0)
        assert isinstance(invalid, ValueError)
        assert invalid.parameter == "horizon_months"

        failure = SimulationError("boom", start_date=date(2000, 1, 1))
        assert failure.start_date == date(2000, 1, 1)


class TestScanErrorPropagation:
    """Test how the scanner surfaces failures."""

    def test_lookup_error_is_not_wrapped(self, scenario_series):
        """A missing month is a contract violation and propagates unchanged."""
        with patch("dca_app.simulation.scanner.holding_value",
                   side_effect=SeriesLookupError("absent", lookup_date=date(2000, 1, 1))):
            with pytest.raises(SeriesLookupError):
                scan_horizons(scenario_series, 2, 2, Decimal("100"))

    def test_unexpected_error_wrapped_with_start_date(self, scenario_series):
        """Other failures are reported with the month that failed."""
        with patch("dca_app.simulation.scanner.holding_value", side_effect=ArithmeticError("overflow")):
            with pytest.raises(SimulationError) as exc_info:
                scan_horizons(scenario_series, 2, 2, Decimal("100"))

        assert exc_info.value.start_date == date(2000, 1, 1)
        assert isinstance(exc_info.value.__cause__, ArithmeticError)

    def test_parameters_checked_before_scanning(self, scenario_series):
        """Invalid parameters fail before any month is simulated."""
        with patch("dca_app.simulation.scanner.compare_start") as compare:
            with pytest.raises(InvalidParameterError):
                scan_horizons(scenario_series, 2, 3, Decimal("100"))
            compare.assert_not_called()

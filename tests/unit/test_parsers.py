"""Unit tests for raw price parsing."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from dca_app.data.models import PricePoint
from dca_app.data.parsers import (
    parse_close,
    parse_date,
    parse_price_csv,
    parse_price_rows,
    select_month_starts,
)
from dca_app.errors import MalformedDataError, MissingDataError


class TestParseDate:
    """Test date parsing."""

    def test_iso_string(self):
        assert parse_date("2000-01-01") == date(2000, 1, 1)

    def test_timestamp_string(self):
        """Time-of-day is dropped"""
        assert parse_date("2000-01-01T16:00:00") == date(2000, 1, 1)

    def test_datetime(self):
        assert parse_date(datetime(2000, 1, 1, 9, 30)) == date(2000, 1, 1)

    @pytest.mark.parametrize("raw", ["01/02/2000", "", None, 20000101])
    def test_invalid(self, raw):
        with pytest.raises(MalformedDataError):
            parse_date(raw)


class TestParseClose:
    """Test price parsing."""

    def test_float_keeps_decimal_text(self):
        """Floats are converted through their repr, not binary expansion"""
        assert parse_close(110.1) == Decimal("110.1")

    def test_string(self):
        assert parse_close(" 99.50 ") == Decimal("99.50")

    @pytest.mark.parametrize("raw", ["abc", None, True, "NaN", float("inf")])
    def test_invalid(self, raw):
        with pytest.raises(MalformedDataError):
            parse_close(raw)


class TestParseRows:
    """Test row and CSV parsing."""

    def test_rows(self, sparse_rows):
        points = parse_price_rows(sparse_rows)

        assert len(points) == 4
        assert points[0] == PricePoint(date=date(2001, 1, 1), close=Decimal("100"))
        assert points[-1].close == Decimal("125.5")

    def test_custom_fields(self):
        points = parse_price_rows([{"Date": "2001-01-01", "Adj Close": 5}],
                                  date_field="Date", close_field="Adj Close")
        assert points[0].close == Decimal("5")

    def test_missing_field(self):
        with pytest.raises(MissingDataError) as exc_info:
            parse_price_rows([{"date": "2001-01-01"}])
        assert exc_info.value.data_type == "price_row"

    def test_csv(self):
        text = "date,close\n2001-01-01,100\n2001-02-01,101.25\n"
        points = parse_price_csv(text)

        assert [p.date for p in points] == [date(2001, 1, 1), date(2001, 2, 1)]
        assert points[1].close == Decimal("101.25")


class TestSelectMonthStarts:
    """Test daily to month-start reduction."""

    def test_keeps_only_first_of_month(self):
        daily = [
            PricePoint(date=date(2001, 1, 31), close=Decimal("1")),
            PricePoint(date=date(2001, 2, 1), close=Decimal("2")),
            PricePoint(date=date(2001, 2, 2), close=Decimal("3")),
            PricePoint(date=date(2001, 3, 1), close=Decimal("4")),
        ]

        assert [p.close for p in select_month_starts(daily)] == [Decimal("2"), Decimal("4")]

    def test_holiday_month_dropped(self):
        """A month whose first day has no close leaves a gap"""
        daily = [
            PricePoint(date=date(2001, 1, 2), close=Decimal("1")),
            PricePoint(date=date(2001, 2, 1), close=Decimal("2")),
        ]
        assert [p.date for p in select_month_starts(daily)] == [date(2001, 2, 1)]

"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date
from decimal import Decimal

from dca_app.data.models import PricePoint
from dca_app.series.completer import complete_monthly_series
from dca_app.utils.months import add_months


def make_points(start: date, closes: list) -> list[PricePoint]:
    """Consecutive month-start observations from a list of closes (None skips a month)."""
    points = []
    for offset, close in enumerate(closes):
        if close is None:
            continue
        points.append(PricePoint(date=add_months(start, offset), close=Decimal(str(close))))
    return points


@pytest.fixture
def scenario_points() -> list[PricePoint]:
    """Five months of prices: 100, 110, 120, 90, 80 from January 2000."""
    return make_points(date(2000, 1, 1), [100, 110, 120, 90, 80])


@pytest.fixture
def scenario_series(scenario_points):
    """Completed series for the five-month scenario."""
    return complete_monthly_series(scenario_points)


@pytest.fixture
def rising_series():
    """Two years of steadily rising prices from January 2010."""
    return complete_monthly_series(
        make_points(date(2010, 1, 1), [100 + 5 * i for i in range(24)])
    )


@pytest.fixture
def sparse_rows() -> list[dict]:
    """Raw month-start rows with a single gap (March) and a trailing gap."""
    return [
        {"date": "2001-01-01", "close": "100"},
        {"date": "2001-02-01", "close": "100"},
        {"date": "2001-04-01", "close": "120"},
        {"date": "2001-05-01", "close": "125.5"},
    ]


@pytest.fixture
def points_factory():
    """Factory building month-start observations from a list of closes."""
    return make_points

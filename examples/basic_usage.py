#!/usr/bin/env python3
"""
Basic Usage Example - DCA App Comparison Engine

This script demonstrates the comparison engine on a synthetic daily price
history. It shows how to:
- Configure structured logging
- Initialize the engine with run overrides
- Reduce daily closes to month starts and fill the gaps
- Compare upfront and staged investing for every starting month
- Read the summary

Run: python examples/basic_usage.py
"""

import json
import math
from datetime import date, timedelta
from decimal import Decimal
from typing import List

from dca_app.data.models import PricePoint
from dca_app.engine import ComparisonEngine
from dca_app.logging.config import configure_logging


def create_daily_history(start: date, days: int) -> List[PricePoint]:
    """Weekday closes with a slow uptrend and a mid-period drawdown."""
    points = []
    for i in range(days):
        day = start + timedelta(days=i)
        if day.weekday() >= 5:
            continue
        trend = 100 * (1.0003 ** i)
        drawdown = 1 - 0.3 * math.exp(-((i - days / 2) / 120) ** 2)
        points.append(PricePoint(date=day, close=Decimal(f"{trend * drawdown:.2f}")))
    return points


def main():
    """Run the example."""
    configure_logging(level="INFO", format_json=False)

    engine = ComparisonEngine(
        ticker="SYNTHETIC",
        overrides={"scan": {"horizon_months": 12, "staging_periods": 12, "initial_investment": "12000"}},
    )

    daily = create_daily_history(date(2000, 1, 1), 365 * 10)
    run = engine.run_daily(daily)

    print(f"\n📈 Series: {run.series.start} to {run.series.end} "
          f"({len(run.series)} months, {len(run.series.filled_points())} filled)")
    print(f"📊 Starting months compared: {run.summary.months}")
    print(f"   Upfront favored: {float(run.summary.upfront_favored_share):.1%}")
    print(f"   Upfront in profit: {float(run.summary.upfront_profit_share):.1%}")
    print(f"   Staged in profit: {float(run.summary.staged_profit_share):.1%}")
    print(f"   Profit sign disagreement: {float(run.summary.profit_disagreement_share):.1%}")

    print("\n🏆 Largest differences:")
    print(json.dumps([record.to_dict() for record in run.summary.top_differences[:3]], indent=2))


if __name__ == "__main__":
    main()

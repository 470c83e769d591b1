#!/usr/bin/env python3
"""Performance benchmark script for DCA App horizon scans."""

import math
import time
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Dict, List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dca_app.data.models import PricePoint
from dca_app.series.completer import complete_monthly_series
from dca_app.simulation.scanner import scan_horizons
from dca_app.utils.months import add_months


def generate_sample_series(months: int):
    """Generate a trending, oscillating monthly series with every fifth month missing."""
    start = date(1950, 1, 1)
    points: List[PricePoint] = []
    for i in range(months):
        if i % 5 == 3:
            continue
        close = 100 * (1.006 ** i) * (1 + 0.1 * math.sin(i / 7))
        points.append(PricePoint(date=add_months(start, i), close=Decimal(f"{close:.2f}")))
    return complete_monthly_series(points)


def benchmark_scan(months: int, workers: int) -> Dict[str, float]:
    """Benchmark a 12-month horizon scan."""
    series = generate_sample_series(months)

    start_time = time.time()
    records = scan_horizons(series, 12, 12, Decimal("10000"), workers=workers)
    total_time = time.time() - start_time

    return {
        "total_time": total_time,
        "records": len(records),
        "avg_time_per_month": total_time / max(len(records), 1),
    }


def main():
    """Main benchmark function."""
    print("⚡ DCA App Scan Benchmark")
    print("=" * 40)

    for months in [120, 600, 1200]:
        for workers in [1, 4]:
            try:
                results = benchmark_scan(months, workers)

                print(f"\n📊 {months} months, {workers} worker(s):")
                print(f"   Total time: {results['total_time']:.3f}s")
                print(f"   Records: {results['records']}")
                print(f"   Avg per start month: {results['avg_time_per_month']*1000:.3f}ms")

            except Exception as e:
                print(f"   ❌ Benchmark failed: {e}")


if __name__ == "__main__":
    main()

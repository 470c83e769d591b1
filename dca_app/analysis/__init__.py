"""Descriptive aggregation over horizon scan results"""

from .aggregator import (
    ComparisonSummary,
    filter_records,
    profit_disagreement_share,
    profit_shares,
    summarize,
    top_differences,
    upfront_favored_share,
)

__all__ = [
    "ComparisonSummary",
    "filter_records",
    "profit_disagreement_share",
    "profit_shares",
    "summarize",
    "top_differences",
    "upfront_favored_share",
]

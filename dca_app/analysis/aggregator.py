"""Summary statistics over comparison records"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..data.models import ComparisonRecord, Strategy


def _share(count: int, total: int) -> Decimal:
    """Fraction count/total as a Decimal, zero for an empty population."""
    if total == 0:
        return Decimal(0)
    return Decimal(count) / Decimal(total)


def upfront_favored_share(records: Sequence[ComparisonRecord]) -> Decimal:
    """Share of starting months where upfront investing came out ahead (ties included)."""
    wins = sum(1 for record in records if record.favored_strategy is Strategy.UPFRONT)
    return _share(wins, len(records))


def profit_shares(records: Sequence[ComparisonRecord]) -> tuple[Decimal, Decimal]:
    """
    Share of months in which each strategy ended above the amount invested.

    Returns:
        (upfront share, staged share)
    """
    upfront = sum(1 for record in records if record.upfront_in_profit)
    staged = sum(1 for record in records if record.staged_in_profit)
    return _share(upfront, len(records)), _share(staged, len(records))


def profit_disagreement_share(records: Sequence[ComparisonRecord]) -> Decimal:
    """Share of months in which exactly one of the strategies ended in profit."""
    disagreements = sum(1 for record in records if record.profit_disagreement)
    return _share(disagreements, len(records))


def filter_records(records: Sequence[ComparisonRecord], start: Optional[date] = None,
                   end: Optional[date] = None) -> list[ComparisonRecord]:
    """Records whose start date lies in [start, end]; either bound may be open."""
    return [
        record for record in records
        if (start is None or record.start_date >= start)
        and (end is None or record.start_date <= end)
    ]


def top_differences(records: Sequence[ComparisonRecord], n: int, start: Optional[date] = None,
                    end: Optional[date] = None) -> list[ComparisonRecord]:
    """
    Records with the largest absolute upfront-minus-staged difference

    Args:
        records: Comparison records
        n: Number of records to keep
        start: Earliest start date to consider
        end: Latest start date to consider

    Returns:
        Up to n records, largest |difference| first; equal differences keep
        chronological order
    """
    candidates = filter_records(records, start, end)
    ranked = sorted(candidates, key=lambda record: (-abs(record.difference), record.start_date))
    return ranked[:max(n, 0)]


@dataclass(frozen=True)
class ComparisonSummary:
    """Descriptive summary of one horizon scan."""
    months: int
    upfront_favored_share: Decimal
    staged_favored_share: Decimal
    upfront_profit_share: Decimal
    staged_profit_share: Decimal
    profit_disagreement_share: Decimal
    mean_difference: Decimal
    top_differences: tuple[ComparisonRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serializable view for reporting collaborators."""
        return {
            "months": self.months,
            "upfront_favored_share": str(self.upfront_favored_share),
            "staged_favored_share": str(self.staged_favored_share),
            "upfront_profit_share": str(self.upfront_profit_share),
            "staged_profit_share": str(self.staged_profit_share),
            "profit_disagreement_share": str(self.profit_disagreement_share),
            "mean_difference": str(self.mean_difference),
            "top_differences": [record.to_dict() for record in self.top_differences],
        }


def summarize(records: Sequence[ComparisonRecord], top_n: int = 10) -> ComparisonSummary:
    """Build the full summary for a list of records."""
    upfront_share = upfront_favored_share(records)
    upfront_profit, staged_profit = profit_shares(records)

    if records:
        mean_difference = sum((record.difference for record in records), Decimal(0)) / len(records)
        staged_share = Decimal(1) - upfront_share
    else:
        mean_difference = Decimal(0)
        staged_share = Decimal(0)

    return ComparisonSummary(
        months=len(records),
        upfront_favored_share=upfront_share,
        staged_favored_share=staged_share,
        upfront_profit_share=upfront_profit,
        staged_profit_share=staged_profit,
        profit_disagreement_share=profit_disagreement_share(records),
        mean_difference=mean_difference,
        top_differences=tuple(top_differences(records, top_n)),
    )

"""Staged (dollar-cost averaging) investment simulation"""

from dataclasses import replace
from decimal import Decimal

from ..config.validation import ensure_valid_scan
from ..data.models import MonthlySeries, StagedPlan, StagedResult
from ..utils.months import add_months
from .returns import holding_value


def run_plan(series: MonthlySeries, plan: StagedPlan) -> StagedResult:
    """Simulate a plan that has already been validated."""
    horizon_date = plan.horizon_date

    installments = tuple(
        holding_value(series, amount, add_months(plan.start_date, offset), horizon_date)
        for offset, amount in plan.installments()
    )
    final_value = sum((result.final_value for result in installments), Decimal(0))

    return StagedResult(plan=plan, installments=installments, final_value=final_value)


def simulate_staged(series: MonthlySeries, plan: StagedPlan) -> StagedResult:
    """
    Simulate a staged plan with its per-installment breakdown

    Each installment of total_investment / staging_periods is bought on
    start_date + k months (k = 0..staging_periods - 1) and valued on the
    common horizon date start_date + horizon_months. Earlier installments
    are exposed to the market for longer than later ones.

    Args:
        series: Completed monthly series
        plan: Staged plan to simulate

    Returns:
        StagedResult whose final_value is the exact sum of its installments

    Raises:
        InvalidParameterError: If the plan parameters are out of range
        SeriesLookupError: If an installment or horizon month is not in the series
    """
    investment = ensure_valid_scan(plan.horizon_months, plan.staging_periods, plan.total_investment)
    return run_plan(series, replace(plan, total_investment=investment))


def compute_staged(series: MonthlySeries, plan: StagedPlan) -> Decimal:
    """Aggregate horizon value of a staged plan"""
    return simulate_staged(series, plan).final_value

"""Totals over calculated months and employees."""

from typing import Sequence

from .errors import PayrollInputError
from .schemas import BulkSummary, EmployeeTotals, PeriodResult


def aggregate_employee(periods: Sequence[PeriodResult]) -> EmployeeTotals:
    """Sum employer cost, net and gross over an employee's months."""
    return EmployeeTotals(
        total_cost=sum(p.employer_cost for p in periods),
        total_net=sum(p.net_wage for p in periods),
        total_gross=sum(p.gross_wage for p in periods),
    )


def aggregate_bulk(employee_totals: Sequence[EmployeeTotals], period_count: int) -> BulkSummary:
    """Summarize several employees calculated over the same months.

    Args:
        employee_totals: Per-employee totals
        period_count: Number of months each employee was calculated for

    Raises:
        PayrollInputError: If period_count is not positive
    """
    if period_count <= 0:
        raise PayrollInputError(f"period_count must be at least 1, got {period_count}")

    total_cost = sum(e.total_cost for e in employee_totals)
    return BulkSummary(
        total_employees=len(employee_totals),
        total_yearly_cost=total_cost,
        total_yearly_net=sum(e.total_net for e in employee_totals),
        total_yearly_gross=sum(e.total_gross for e in employee_totals),
        average_monthly_cost=total_cost / period_count,
    )

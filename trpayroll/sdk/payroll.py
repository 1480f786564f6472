"""Single and bulk payroll calculations."""

import logging
from typing import Optional, Sequence

from .aggregate import aggregate_bulk, aggregate_employee
from .engine.client import CalculationEngine
from .periods import run_periods
from .schemas import (
    BulkEmployeeResult,
    BulkPayrollResult,
    CustomParams,
    EmployeeInput,
    PayrollResult,
)

logger = logging.getLogger(__name__)


async def calculate_payroll(
    engine: CalculationEngine,
    employee: EmployeeInput,
    year: int,
    month: int,
    period_count: int = 1,
    custom_params: Optional[CustomParams] = None,
) -> PayrollResult:
    """Calculate one employee over `period_count` months starting at (year, month).

    Extra payments are added to every month; pay events only to their own
    month. The employee's carried-in bases seed the first month.
    """
    periods = await run_periods(
        engine,
        employee.wage_definition,
        year,
        month,
        period_count,
        payments_for=employee.payments_for,
        custom_params=custom_params,
        initial_state=employee.initial_state,
    )
    totals = aggregate_employee(periods)
    return PayrollResult(
        employee=employee.name,
        total_cost=totals.total_cost,
        total_net=totals.total_net,
        total_gross=totals.total_gross,
        periods=periods,
    )


async def calculate_bulk_payroll(
    engine: CalculationEngine,
    employees: Sequence[EmployeeInput],
    year: int,
    month: int,
    period_count: int = 1,
    custom_params: Optional[CustomParams] = None,
) -> BulkPayrollResult:
    """Calculate several employees with shared dates and parameters.

    Employees are calculated one after another; results keep input order.
    """
    results = []
    for employee in employees:
        result = await calculate_payroll(engine, employee, year, month, period_count, custom_params)
        results.append(BulkEmployeeResult(
            name=result.employee,
            total_cost=result.total_cost,
            total_net=result.total_net,
            total_gross=result.total_gross,
        ))

    logger.info(f"Calculated {len(results)} employee(s) over {period_count} month(s)")
    return BulkPayrollResult(
        summary=aggregate_bulk(results, period_count),
        employees=results,
    )

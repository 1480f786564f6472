"""Month-by-month payroll calculation.

The engine calculates one month per call. Progressive income tax brackets
and SSI ceilings apply cumulatively over a year, so each month's request
carries the bases produced by the month before it:

- cumulative income tax base: prior value + the month's totalIncomeTaxBase
- minimum wage exemption base: replaced by the engine's value
- transferred SSI bases 1 and 2: replaced by the engine's value, kept
  from the prior month when the engine leaves them out

Periods therefore run strictly one after another. A month without a
payroll in the response aborts the whole run; nothing partial is returned.
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from .engine.client import CalculationEngine
from .engine.schemas import (
    CalculationParams,
    CustomGlobalParams,
    Payroll,
    PayrollFigures,
    WageCalculationModel,
)
from .errors import NoPayrollResultError, PayrollInputError
from .payments import build_payments
from .schemas import CumulativeState, CustomParams, ExtraPayment, PeriodResult, WageDefinition

logger = logging.getLogger(__name__)

# (year, month) -> extra payments due that month
PaymentsForMonth = Callable[[int, int], Sequence[ExtraPayment]]


def add_months(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Calendar (year, month) that lies `offset` months after (year, month).

    Example: add_months(2025, 11, 3) -> (2026, 2)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def calc_date(year: int, month: int) -> str:
    """Calculation date for a month (always the 1st)."""
    return date(year, month, 1).isoformat()


def build_period_model(
    wage: WageDefinition,
    year: int,
    month: int,
    extra_payments: Sequence[ExtraPayment],
    state: CumulativeState,
    custom_params: Optional[CustomParams] = None,
) -> WageCalculationModel:
    """Engine request for a single month."""
    return WageCalculationModel(
        calc_date=calc_date(year, month),
        wage_amount=wage.wage,
        ssi_type=wage.ssi_type,
        wage_calculation_type=wage.calculation_type,
        period_count=1,
        payments=build_payments(extra_payments),
        cumulative_income_tax_base=state.cumulative_income_tax_base,
        cumulative_min_wage_income_tax_base=state.cumulative_min_wage_income_tax_base,
        transferred_ssi_base1=state.transferred_ssi_base1,
        transferred_ssi_base2=state.transferred_ssi_base2,
        calculation_params=CalculationParams(
            calculate_min_wage_exemption=True,
            custom_global_params=CustomGlobalParams.from_custom_params(custom_params),
        ),
    )


def next_state(state: CumulativeState, figures: PayrollFigures) -> CumulativeState:
    """State to hand to the following month."""
    return CumulativeState(
        cumulative_income_tax_base=state.cumulative_income_tax_base + figures.total_income_tax_base,
        cumulative_min_wage_income_tax_base=figures.total_min_wage_income_tax_exemption_base,
        transferred_ssi_base1=(
            figures.transferred_ssi_base1
            if figures.transferred_ssi_base1 is not None
            else state.transferred_ssi_base1
        ),
        transferred_ssi_base2=(
            figures.transferred_ssi_base2
            if figures.transferred_ssi_base2 is not None
            else state.transferred_ssi_base2
        ),
    )


def to_period_result(year: int, month: int, payroll: Payroll, state: CumulativeState) -> PeriodResult:
    """Flatten one engine payroll plus the outgoing state into a PeriodResult."""
    figures = payroll.payroll_result
    return PeriodResult(
        year=year,
        month=month,
        gross_wage=figures.total_gross,
        net_wage=figures.total_net,
        employer_cost=payroll.total_cost,
        income_tax=figures.total_income_tax,
        stamp_tax=figures.total_stamp_tax,
        employee_ssi=figures.total_ssi_worker_prem,
        employer_ssi=figures.total_ssi_employer_prem,
        cumulative_income_tax_base=state.cumulative_income_tax_base,
        cumulative_min_wage_income_tax_base=state.cumulative_min_wage_income_tax_base,
        transferred_ssi_base1=state.transferred_ssi_base1,
        transferred_ssi_base2=state.transferred_ssi_base2,
    )


async def step(
    engine: CalculationEngine,
    wage: WageDefinition,
    year: int,
    month: int,
    extra_payments: Sequence[ExtraPayment],
    state: CumulativeState,
    custom_params: Optional[CustomParams] = None,
) -> Tuple[CumulativeState, PeriodResult]:
    """Calculate one month.

    Returns:
        Tuple of (state for the next month, this month's result)

    Raises:
        NoPayrollResultError: If the engine response has no payroll
    """
    model = build_period_model(wage, year, month, extra_payments, state, custom_params)
    logger.debug(
        f"{wage.name}: calculating {model.calc_date} with {len(model.payments)} payment line(s)"
    )

    response = await engine.calculate(model)
    payroll = response.first_payroll()
    if payroll is None:
        raise NoPayrollResultError(year, month)

    if (payroll.year, payroll.month) not in ((None, None), (year, month)):
        logger.warning(
            f"{wage.name}: engine labelled {year}-{month:02d} as {payroll.year}-{payroll.month}"
        )

    new_state = next_state(state, payroll.payroll_result)
    return new_state, to_period_result(year, month, payroll, new_state)


async def run_periods(
    engine: CalculationEngine,
    wage: WageDefinition,
    start_year: int,
    start_month: int,
    period_count: int,
    payments_for: Optional[PaymentsForMonth] = None,
    custom_params: Optional[CustomParams] = None,
    initial_state: Optional[CumulativeState] = None,
) -> List[PeriodResult]:
    """Calculate `period_count` consecutive months for one employee.

    Args:
        engine: Calculation engine, called once per month
        wage: Employee wage definition
        start_year: Year of the first month
        start_month: First month (1-12)
        period_count: Number of months (>= 1)
        payments_for: Extra payments due in a given (year, month)
        custom_params: Parameter overrides sent with every month
        initial_state: Bases carried in from before start_month

    Returns:
        One PeriodResult per month, in calendar order

    Raises:
        PayrollInputError: If period_count < 1 or start_month is not 1-12
        NoPayrollResultError: If any month comes back without a payroll
    """
    if period_count < 1:
        raise PayrollInputError(f"period_count must be at least 1, got {period_count}")
    if not 1 <= start_month <= 12:
        raise PayrollInputError(f"month must be between 1 and 12, got {start_month}")

    state = initial_state or CumulativeState()
    periods = []

    for i in range(period_count):
        year, month = add_months(start_year, start_month, i)
        extra_payments = payments_for(year, month) if payments_for else ()
        state, result = await step(engine, wage, year, month, extra_payments, state, custom_params)
        periods.append(result)

    return periods

"""Budget simulation and scenario comparison.

A scenario is a set of what-if changes (salary raise, minimum wage,
bracket or SSI limit increases) applied to every employee. Simulations
always start in January of the simulated year.
"""

import logging
from typing import Optional, Sequence

from .aggregate import aggregate_bulk, aggregate_employee
from .engine.client import CalculationEngine
from .errors import PayrollInputError
from .params import apply_raise, apply_scenario, load_default_params
from .periods import run_periods
from .schemas import (
    ComparisonResult,
    EmployeeInput,
    FiscalParameters,
    ScenarioApplied,
    ScenarioComparison,
    ScenarioConfig,
    SimulationEmployeeResult,
    SimulationResult,
    SimulationSummary,
    TaxBracket,
)

logger = logging.getLogger(__name__)

SIMULATION_START_MONTH = 1


def scenario_label(scenario: ScenarioConfig, position: int) -> str:
    """Scenario name, or "Scenario <position>" (1-based) when unnamed."""
    return scenario.name or f"Scenario {position}"


async def simulate_budget(
    engine: CalculationEngine,
    employees: Sequence[EmployeeInput],
    year: int,
    period_count: int,
    scenario: ScenarioConfig,
    defaults: Optional[FiscalParameters] = None,
) -> SimulationResult:
    """Run one scenario over an employee set.

    Args:
        engine: Calculation engine
        employees: Employees with their current wages
        year: Simulated year (calculation starts in January)
        period_count: Number of months (12 for a full year)
        scenario: Changes to apply
        defaults: Parameters the scenario is applied to (year defaults if omitted)

    Returns:
        SimulationResult with effective parameters, totals and per-employee figures
    """
    if defaults is None:
        defaults = load_default_params(year)
    custom_params = apply_scenario(defaults, scenario)

    employee_results = []
    totals = []
    for employee in employees:
        adjusted = employee.model_copy(
            update={"wage": apply_raise(employee.wage, scenario.salary_raise_percent)}
        )
        periods = await run_periods(
            engine,
            adjusted.wage_definition,
            year,
            SIMULATION_START_MONTH,
            period_count,
            payments_for=adjusted.payments_for,
            custom_params=custom_params,
            initial_state=adjusted.initial_state,
        )
        employee_totals = aggregate_employee(periods)
        totals.append(employee_totals)
        employee_results.append(SimulationEmployeeResult(
            name=employee.name,
            original_wage=employee.wage,
            adjusted_wage=adjusted.wage,
            yearly_cost=employee_totals.total_cost,
            yearly_net=employee_totals.total_net,
            yearly_gross=employee_totals.total_gross,
            periods=periods,
        ))

    summary = aggregate_bulk(totals, period_count)

    if custom_params.income_tax_limits is not None:
        effective_brackets = custom_params.income_tax_limits
    else:
        effective_brackets = [
            TaxBracket(limit=b.limit, rate=b.rate) for b in defaults.income_tax_brackets
        ]

    def effective(override, default):
        return default if override is None else override

    return SimulationResult(
        scenario_applied=ScenarioApplied(
            salary_raise_percent=scenario.salary_raise_percent or 0,
            effective_min_wage=effective(custom_params.min_wage, defaults.min_wage),
            effective_min_wage_net=effective(custom_params.min_wage_net, defaults.min_wage_net),
            effective_ssi_lower_limit=effective(custom_params.ssi_lower_limit, defaults.ssi_lower_limit),
            effective_ssi_upper_limit=effective(custom_params.ssi_upper_limit, defaults.ssi_upper_limit),
            effective_tax_brackets=effective_brackets,
        ),
        summary=SimulationSummary(
            total_yearly_cost=summary.total_yearly_cost,
            total_yearly_net=summary.total_yearly_net,
            total_yearly_gross=summary.total_yearly_gross,
            cost_per_employee=(
                summary.total_yearly_cost / len(employees) if employees else 0.0
            ),
        ),
        employees=employee_results,
    )


def percent_change(cost: float, baseline_cost: float) -> float:
    """Percentage change of cost against the baseline; 0 when the baseline is 0."""
    if baseline_cost == 0:
        return 0.0
    return (cost - baseline_cost) / baseline_cost * 100


async def compare_scenarios(
    engine: CalculationEngine,
    employees: Sequence[EmployeeInput],
    year: int,
    period_count: int,
    scenarios: Sequence[ScenarioConfig],
) -> ComparisonResult:
    """Simulate each scenario and compare total costs against the first one.

    The first scenario is the baseline, whether or not it is the cheapest.
    Cheapest and most expensive come from a stable sort on total cost, so
    ties go to the scenario listed first.

    Raises:
        PayrollInputError: If no scenarios are given
    """
    if not scenarios:
        raise PayrollInputError("At least one scenario is required")

    defaults = load_default_params(year)
    results = []
    for position, scenario in enumerate(scenarios, start=1):
        simulation = await simulate_budget(
            engine, employees, year, period_count, scenario, defaults=defaults
        )
        name = scenario_label(scenario, position)
        logger.debug(f"{name}: total cost {simulation.summary.total_yearly_cost:.2f}")
        results.append((name, simulation.summary.total_yearly_cost))

    baseline_cost = results[0][1]
    comparison = [
        ScenarioComparison(
            scenario_name=name,
            total_cost=cost,
            cost_difference=cost - baseline_cost,
            percent_change=percent_change(cost, baseline_cost),
        )
        for name, cost in results
    ]

    by_cost = sorted(results, key=lambda r: r[1])
    return ComparisonResult(
        baseline_cost=baseline_cost,
        comparison=comparison,
        cheapest_scenario=by_cost[0][0],
        most_expensive_scenario=by_cost[-1][0],
    )

"""tr-payroll MCP Server - FastMCP tools for Turkish payroll calculations.

Environment:
    PAYROLLA_API_KEY - Required API key for the Payrolla engine
    PAYROLLA_DEBUG   - Optional, set to 'true' for debug logging on stderr
"""

import asyncio
import json
import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from trpayroll import __version__
from trpayroll.sdk import payroll as sdk_payroll
from trpayroll.sdk import scenarios as sdk_scenarios
from trpayroll.sdk.config import (
    API_KEY_ENV,
    EngineSettings,
    configure_logging,
    load_engine_settings,
)
from trpayroll.sdk.engine import CalculationEngine, PayrollaEngine
from trpayroll.sdk.errors import ConfigError, MissingCredentialError
from trpayroll.sdk.params import BASE_YEAR, load_default_params
from trpayroll.sdk.schemas import (
    CalculationType,
    CustomParams,
    EmployeeInput,
    ExtraPayment,
    PayEvent,
    ScenarioConfig,
    SSIType,
)

from . import prompts

logger = logging.getLogger(__name__)

_engine: Optional[CalculationEngine] = None
_settings: Optional[EngineSettings] = None


@asynccontextmanager
async def _engine_lifespan(server: FastMCP) -> AsyncIterator[dict]:
    """Close the engine's HTTP client when the server stops."""
    try:
        yield {}
    finally:
        if isinstance(_engine, PayrollaEngine):
            await _engine.aclose()


mcp = FastMCP("tr-payroll", lifespan=_engine_lifespan)


def get_settings() -> EngineSettings:
    global _settings
    if _settings is None:
        _settings = load_engine_settings()
    return _settings


def get_engine() -> CalculationEngine:
    """Engine used by the tools, built from settings on first use."""
    global _engine
    if _engine is None:
        _engine = PayrollaEngine.from_settings(get_settings())
    return _engine


def set_engine(engine: Optional[CalculationEngine], settings: Optional[EngineSettings] = None) -> None:
    """Install the engine (and optionally settings) the tools should use."""
    global _engine, _settings
    _engine = engine
    if settings is not None:
        _settings = settings


async def _run_tool(operation: str, call: Callable[[], Awaitable[BaseModel]]) -> dict[str, Any]:
    """Run an SDK call under the request deadline and shape the reply.

    Failures come back as {"error": message} so the agent can react;
    cancellation is left to propagate.
    """
    timeout = None
    try:
        timeout = get_settings().request_timeout
        result = await asyncio.wait_for(call(), timeout=timeout)
        return result.model_dump()
    except asyncio.TimeoutError:
        logger.error(f"{operation} did not finish within {timeout:g}s")
        return {"error": f"{operation} did not finish within {timeout:g}s"}
    except Exception as e:
        logger.error(f"Error in {operation}: {e}")
        return {"error": str(e)}


# --- Tools ---

@mcp.tool()
async def calculate_payroll(
    name: str = Field(description="Employee name"),
    wage: float = Field(description="Wage amount"),
    calculation_type: CalculationType = Field(description="Whether the wage is 'Gross' or 'Net'"),
    year: int = Field(description="Calculation year (e.g., 2025)"),
    month: int = Field(ge=1, le=12, description="Starting month (1-12)"),
    ssi_type: SSIType = Field(default="S4A", description="SSI type (default: S4A for general employees)"),
    period_count: int = Field(default=1, ge=1, le=12, description="Number of months to calculate (default: 1)"),
    extra_payments: list[ExtraPayment] | None = Field(default=None, description="Extra payments added to every month, like bonuses"),
    pay_events: list[PayEvent] | None = Field(default=None, description="One-off payments added only to their own year/month"),
    custom_params: CustomParams | None = Field(default=None, description="Custom global parameters to override defaults"),
    cumulative_income_tax_base: float = Field(default=0, description="Income tax base accumulated before the first month"),
    cumulative_min_wage_income_tax_base: float = Field(default=0, description="Minimum wage exemption base before the first month"),
    transferred_ssi_base1: float = Field(default=0, description="SSI base transferred into the first month"),
    transferred_ssi_base2: float = Field(default=0, description="SSI base transferred from two months before the first month"),
) -> dict[str, Any]:
    """Calculate payroll for a single employee including taxes, SSI, and employer cost.

    Months are calculated one at a time, carrying cumulative tax and SSI
    bases forward, and may run past December into the next year. Pass the
    bases from an earlier run to continue mid-year.
    """
    def call():
        employee = EmployeeInput(
            name=name,
            wage=wage,
            calculation_type=calculation_type,
            ssi_type=ssi_type,
            extra_payments=extra_payments or [],
            pay_events=pay_events or [],
            cumulative_income_tax_base=cumulative_income_tax_base,
            cumulative_min_wage_income_tax_base=cumulative_min_wage_income_tax_base,
            transferred_ssi_base1=transferred_ssi_base1,
            transferred_ssi_base2=transferred_ssi_base2,
        )
        return sdk_payroll.calculate_payroll(
            get_engine(), employee, year, month, period_count, custom_params
        )

    return await _run_tool("calculate_payroll", call)


@mcp.tool()
async def calculate_bulk_payroll(
    employees: list[EmployeeInput] = Field(description="Employees to calculate"),
    year: int = Field(description="Calculation year (e.g., 2025)"),
    month: int = Field(ge=1, le=12, description="Starting month (1-12)"),
    period_count: int = Field(default=1, ge=1, le=12, description="Number of months (default: 1, use 12 for yearly)"),
    custom_params: CustomParams | None = Field(default=None, description="Custom global parameters shared by all employees"),
) -> dict[str, Any]:
    """Calculate payroll for multiple employees with shared parameters."""
    return await _run_tool(
        "calculate_bulk_payroll",
        lambda: sdk_payroll.calculate_bulk_payroll(
            get_engine(), employees, year, month, period_count, custom_params
        ),
    )


@mcp.tool()
async def simulate_budget(
    employees: list[EmployeeInput] = Field(description="Employees with their current wages"),
    year: int = Field(description="Calculation year"),
    period_count: int = Field(ge=1, le=12, description="Number of months (use 12 for yearly)"),
    scenario: ScenarioConfig = Field(description="Scenario configuration with changes to apply"),
) -> dict[str, Any]:
    """Simulate budget with what-if scenarios like salary raises or parameter changes.

    The simulation starts in January of the given year.
    """
    return await _run_tool(
        "simulate_budget",
        lambda: sdk_scenarios.simulate_budget(get_engine(), employees, year, period_count, scenario),
    )


@mcp.tool()
async def compare_scenarios(
    employees: list[EmployeeInput] = Field(description="Employees with their current wages"),
    year: int = Field(description="Calculation year"),
    period_count: int = Field(ge=1, le=12, description="Number of months"),
    scenarios: list[ScenarioConfig] = Field(min_length=1, description="Scenarios to compare; the first one is the baseline"),
) -> dict[str, Any]:
    """Compare multiple budget scenarios side by side.

    Costs are compared against the first scenario. Unnamed scenarios are
    reported as "Scenario 1", "Scenario 2", ... by position.
    """
    return await _run_tool(
        "compare_scenarios",
        lambda: sdk_scenarios.compare_scenarios(get_engine(), employees, year, period_count, scenarios),
    )


@mcp.tool()
async def get_default_params(
    year: int = Field(description="Year to get parameters for (e.g., 2025)"),
) -> dict[str, Any]:
    """Get default Turkish payroll parameters for a given year.

    Only 2025 has its own table; other years return the 2025 values.
    """
    try:
        return load_default_params(year).model_dump()
    except Exception as e:
        logger.error(f"Error loading parameters for {year}: {e}")
        return {"error": str(e)}


# --- Resources ---

@mcp.resource(
    f"trpayroll://defaults/{BASE_YEAR}",
    name=f"{BASE_YEAR} Turkish Payroll Defaults",
    description=(
        f"Default payroll parameters for Turkey in {BASE_YEAR} including "
        "minimum wage, SSI limits, and tax brackets"
    ),
    mime_type="application/json",
)
async def base_year_defaults_resource() -> str:
    """Default parameters of the base year as JSON."""
    return json.dumps(load_default_params(BASE_YEAR).model_dump(), indent=2, ensure_ascii=False)


# --- Prompts ---

@mcp.prompt(
    name="budget_simulation",
    description=(
        "Simulate yearly payroll budget with custom scenarios like salary raises, "
        "minimum wage changes, or tax adjustments"
    ),
)
def budget_simulation(employee_count: str, scenario_type: str | None = None) -> str:
    return prompts.budget_simulation_prompt(employee_count or "(unspecified)", scenario_type)


@mcp.prompt(
    name="salary_raise_analysis",
    description="Analyze the cost impact of giving different salary raise percentages",
)
def salary_raise_analysis(raise_percentages: str = "5,10,15") -> str:
    return prompts.salary_raise_analysis_prompt(raise_percentages or "5,10,15")


@mcp.prompt(
    name="year_planning",
    description="Plan yearly payroll considering potential minimum wage and tax changes",
)
def year_planning(planning_year: str = str(BASE_YEAR)) -> str:
    return prompts.year_planning_prompt(planning_year or str(BASE_YEAR))


# --- Server Entry Point ---

def _raise_keyboard_interrupt(signum, frame):
    raise KeyboardInterrupt


def run_server():
    """Run the MCP server in stdio mode.

    Exits with status 1 before serving anything if the API key is missing
    or the settings are unusable.
    """
    try:
        settings = load_engine_settings()
        engine = PayrollaEngine.from_settings(settings)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        if isinstance(e, MissingCredentialError):
            print("", file=sys.stderr)
            print("Set it in your MCP client configuration or run:", file=sys.stderr)
            print(f"  export {API_KEY_ENV}=pk_live_xxxxx", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.debug)
    set_engine(engine, settings)
    logger.debug(f"Starting tr-payroll {__version__} in debug mode against {settings.api_url}")

    signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.debug("Shutting down...")


if __name__ == "__main__":
    run_server()

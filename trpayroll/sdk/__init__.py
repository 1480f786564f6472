"""tr-payroll SDK - Multi-month Turkish payroll orchestration over the Payrolla engine."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    get_setting,
    load_engine_settings,
    require_api_key,
    configure_logging,
    EngineSettings,
)

from .errors import (
    PayrollError,
    ConfigError,
    MissingCredentialError,
    PayrollInputError,
    EngineError,
    NoPayrollResultError,
)

from .params import (
    BASE_YEAR,
    UNBOUNDED_LIMIT,
    load_default_params,
    apply_scenario,
    apply_raise,
)

from .payments import build_payments

from .periods import (
    add_months,
    next_state,
    step,
    run_periods,
)

from .aggregate import aggregate_employee, aggregate_bulk

from .payroll import calculate_payroll, calculate_bulk_payroll

from .scenarios import simulate_budget, compare_scenarios

from .engine import CalculationEngine, PayrollaEngine

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "get_setting",
    "load_engine_settings",
    "require_api_key",
    "configure_logging",
    "EngineSettings",
    # Errors
    "PayrollError",
    "ConfigError",
    "MissingCredentialError",
    "PayrollInputError",
    "EngineError",
    "NoPayrollResultError",
    # Parameters
    "BASE_YEAR",
    "UNBOUNDED_LIMIT",
    "load_default_params",
    "apply_scenario",
    "apply_raise",
    # Payments
    "build_payments",
    # Periods
    "add_months",
    "next_state",
    "step",
    "run_periods",
    # Aggregation
    "aggregate_employee",
    "aggregate_bulk",
    # Operations
    "calculate_payroll",
    "calculate_bulk_payroll",
    "simulate_budget",
    "compare_scenarios",
    # Engine
    "CalculationEngine",
    "PayrollaEngine",
]

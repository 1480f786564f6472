"""Default fiscal parameters and scenario overrides.

Year tables live in fiscal_params/YYYY.yaml next to this module. Only 2025
ships; any other year is answered with the 2025 numbers relabelled with
the requested year, so limits for other years are approximations.
"""

import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml

from .schemas import CustomParams, FiscalParameters, ScenarioConfig, TaxBracket

logger = logging.getLogger(__name__)

BASE_YEAR = 2025

# Limit of the top bracket; never scaled
UNBOUNDED_LIMIT = 2**53 - 1


def _get_params_dir() -> Path:
    return Path(__file__).parent / "fiscal_params"


def available_years() -> List[int]:
    """Years that have their own parameter table, ascending."""
    return sorted(int(p.stem) for p in _get_params_dir().glob("*.yaml") if p.stem.isdigit())


@lru_cache(maxsize=None)
def _read_params_file(year: int) -> dict:
    config_file = _get_params_dir() / f"{year}.yaml"
    with open(config_file, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_default_params(year: int) -> FiscalParameters:
    """Load default fiscal parameters for a year.

    Args:
        year: Calculation year (e.g., 2025)

    Returns:
        A fresh FiscalParameters; years without a table get the 2025
        table with `year` overwritten.
    """
    if year in available_years():
        return FiscalParameters.model_validate(_read_params_file(year))

    logger.debug(f"No parameter table for {year}, reusing {BASE_YEAR} defaults")
    params = FiscalParameters.model_validate(_read_params_file(BASE_YEAR))
    return params.model_copy(update={"year": year})


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def scale_brackets(brackets: List[TaxBracket], percent: float) -> List[TaxBracket]:
    """Scale bracket limits by a percentage, leaving the unbounded bracket and all rates alone."""
    multiplier = 1 + percent / 100
    return [
        TaxBracket(
            limit=b.limit if b.limit == UNBOUNDED_LIMIT else _round_half_up(b.limit * multiplier),
            rate=b.rate,
        )
        for b in brackets
    ]


def apply_scenario(defaults: FiscalParameters, scenario: ScenarioConfig) -> CustomParams:
    """Turn a scenario into sparse overrides on top of the defaults.

    - min_wage / min_wage_net are copied as given
    - ssi_limit_increase_percent scales both SSI limits (not rounded)
    - custom_tax_brackets are used verbatim; otherwise
      tax_limit_increase_percent scales bracket limits (rounded)

    Args:
        defaults: Default parameters for the simulated year
        scenario: Scenario configuration

    Returns:
        CustomParams with only the overridden fields set
    """
    updates = {}

    if scenario.min_wage is not None:
        updates["min_wage"] = scenario.min_wage
    if scenario.min_wage_net is not None:
        updates["min_wage_net"] = scenario.min_wage_net

    if scenario.ssi_limit_increase_percent is not None:
        multiplier = 1 + scenario.ssi_limit_increase_percent / 100
        updates["ssi_lower_limit"] = defaults.ssi_lower_limit * multiplier
        updates["ssi_upper_limit"] = defaults.ssi_upper_limit * multiplier

    if scenario.custom_tax_brackets is not None:
        updates["income_tax_limits"] = list(scenario.custom_tax_brackets)
    elif scenario.tax_limit_increase_percent is not None:
        updates["income_tax_limits"] = scale_brackets(
            defaults.income_tax_brackets, scenario.tax_limit_increase_percent
        )

    return CustomParams(**updates)


def apply_raise(wage: float, raise_percent: Optional[float]) -> float:
    """Apply a salary raise percentage to a wage."""
    if not raise_percent:
        return wage
    return wage * (1 + raise_percent / 100)

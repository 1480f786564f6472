"""Pydantic schemas for tr-payroll inputs and results.

Input schemas use extra='forbid' so that a misspelled field from the
calling agent is reported instead of silently ignored.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


CalculationType = Literal["Gross", "Net"]
SSIType = Literal["S4A", "S4B", "S4C"]
PaymentCategory = Literal["RegularPayment", "Overtime", "SocialAid", "ExtraPay"]

# Engine's numeric codes for payment categories
PAYMENT_TYPE_CODES = {
    1: "RegularPayment",
    2: "Overtime",
    3: "SocialAid",
    4: "ExtraPay",
}


# =============================================================================
# Wage and payment input
# =============================================================================


class ExtraPayment(BaseModel):
    """Additional payment (bonus, overtime, aid) paid alongside the wage."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Name of the extra payment")
    amount: float = Field(..., description="Payment amount")
    type: CalculationType = Field(..., description="Whether the amount is Net or Gross")
    payment_type: PaymentCategory = Field(
        default="ExtraPay",
        description="Payment category (RegularPayment, Overtime, SocialAid, ExtraPay or 1-4)",
    )

    @field_validator("payment_type", mode="before")
    @classmethod
    def map_numeric_code(cls, v):
        """Accept the engine's numeric payment type codes."""
        if isinstance(v, int) and not isinstance(v, bool):
            if v not in PAYMENT_TYPE_CODES:
                raise ValueError(f"payment_type code must be 1-4, got {v}")
            return PAYMENT_TYPE_CODES[v]
        return v


class PayEvent(ExtraPayment):
    """Extra payment that only occurs in one specific month (e.g. a year-end bonus)."""

    year: int = Field(..., description="Year the payment is made")
    month: int = Field(..., ge=1, le=12, description="Month the payment is made (1-12)")

    def occurs_in(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month


class CumulativeState(BaseModel):
    """Bases carried from one monthly calculation into the next.

    The income tax base accumulates; the other three are replaced by
    whatever the engine reports for the latest month.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    cumulative_income_tax_base: float = Field(default=0, description="Cumulative income tax base")
    cumulative_min_wage_income_tax_base: float = Field(
        default=0, description="Cumulative minimum wage income tax exemption base"
    )
    transferred_ssi_base1: float = Field(default=0, description="SSI base transferred from prior month")
    transferred_ssi_base2: float = Field(default=0, description="SSI base transferred from two months ago")


class WageDefinition(BaseModel):
    """Wage of one employee as given by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Employee name")
    wage: float = Field(..., ge=0, description="Wage amount")
    calculation_type: CalculationType = Field(..., description="Whether the wage is Gross or Net")
    ssi_type: SSIType = Field(default="S4A", description="SSI type (S4A for general employees)")


class EmployeeInput(WageDefinition):
    """Employee entry for bulk calculations, simulations and comparisons."""

    extra_payments: List[ExtraPayment] = Field(
        default_factory=list, description="Payments added to every calculated month"
    )
    pay_events: List[PayEvent] = Field(
        default_factory=list, description="One-off payments added only to their own month"
    )
    cumulative_income_tax_base: float = Field(default=0, description="Carried-in income tax base")
    cumulative_min_wage_income_tax_base: float = Field(
        default=0, description="Carried-in minimum wage exemption base"
    )
    transferred_ssi_base1: float = Field(default=0, description="Carried-in SSI base 1")
    transferred_ssi_base2: float = Field(default=0, description="Carried-in SSI base 2")

    @property
    def wage_definition(self) -> WageDefinition:
        return WageDefinition(
            name=self.name,
            wage=self.wage,
            calculation_type=self.calculation_type,
            ssi_type=self.ssi_type,
        )

    @property
    def initial_state(self) -> CumulativeState:
        return CumulativeState(
            cumulative_income_tax_base=self.cumulative_income_tax_base,
            cumulative_min_wage_income_tax_base=self.cumulative_min_wage_income_tax_base,
            transferred_ssi_base1=self.transferred_ssi_base1,
            transferred_ssi_base2=self.transferred_ssi_base2,
        )

    def payments_for(self, year: int, month: int) -> List[ExtraPayment]:
        """Extra payments for one month: recurring ones first, then that month's events."""
        return list(self.extra_payments) + [e for e in self.pay_events if e.occurs_in(year, month)]


# =============================================================================
# Fiscal parameters and scenarios
# =============================================================================


class TaxBracket(BaseModel):
    """Income tax bracket: income up to `limit` is taxed at `rate`."""

    model_config = ConfigDict(extra="forbid")

    limit: float = Field(..., gt=0, description="Upper limit for this bracket")
    rate: float = Field(..., ge=0, le=1, description="Tax rate (e.g., 0.15 for 15%)")
    description: Optional[str] = Field(default=None, description="Human readable bracket summary")


class FiscalParameters(BaseModel):
    """Fiscal parameters in force for a year."""

    model_config = ConfigDict(extra="forbid")

    year: int = Field(..., description="Year the parameters apply to")
    min_wage: float = Field(..., gt=0, description="Gross minimum wage")
    min_wage_net: float = Field(..., gt=0, description="Net minimum wage")
    ssi_lower_limit: float = Field(..., ge=0, description="SSI base lower limit")
    ssi_upper_limit: float = Field(..., gt=0, description="SSI base upper limit")
    stamp_tax_ratio: float = Field(..., ge=0, le=1, description="Stamp tax ratio")
    income_tax_brackets: List[TaxBracket] = Field(..., min_length=1, description="Progressive income tax brackets")

    @model_validator(mode="after")
    def check_brackets_increase(self) -> "FiscalParameters":
        """Bracket limits must be strictly increasing."""
        limits = [b.limit for b in self.income_tax_brackets]
        for lower, upper in zip(limits, limits[1:]):
            if upper <= lower:
                raise ValueError(f"income tax bracket limits must increase ({lower} >= {upper})")
        return self


class CustomParams(BaseModel):
    """Overrides layered on top of the default fiscal parameters."""

    model_config = ConfigDict(extra="forbid")

    min_wage: Optional[float] = Field(default=None, description="Custom minimum wage (gross)")
    min_wage_net: Optional[float] = Field(default=None, description="Custom minimum wage (net)")
    ssi_lower_limit: Optional[float] = Field(default=None, description="Custom SSI lower limit")
    ssi_upper_limit: Optional[float] = Field(default=None, description="Custom SSI upper limit")
    stamp_tax_ratio: Optional[float] = Field(default=None, description="Custom stamp tax ratio")
    income_tax_limits: Optional[List[TaxBracket]] = Field(
        default=None, description="Custom income tax brackets"
    )


class ScenarioConfig(BaseModel):
    """What-if changes applied uniformly to an employee set."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, description="Scenario name for comparison")
    salary_raise_percent: Optional[float] = Field(
        default=None, description="Salary raise percentage (e.g., 10 for 10%)"
    )
    min_wage: Optional[float] = Field(default=None, description="Custom minimum wage")
    min_wage_net: Optional[float] = Field(default=None, description="Custom net minimum wage")
    tax_limit_increase_percent: Optional[float] = Field(
        default=None, description="Increase tax bracket limits by percentage"
    )
    ssi_limit_increase_percent: Optional[float] = Field(
        default=None, description="Increase SSI limits by percentage"
    )
    custom_tax_brackets: Optional[List[TaxBracket]] = Field(
        default=None, description="Custom tax brackets (take precedence over tax_limit_increase_percent)"
    )


# =============================================================================
# Results
# =============================================================================


class PeriodResult(BaseModel):
    """Outcome of one calculated month, including the state handed to the next month."""

    year: int
    month: int
    gross_wage: float
    net_wage: float
    employer_cost: float
    income_tax: float
    stamp_tax: float
    employee_ssi: float
    employer_ssi: float
    cumulative_income_tax_base: float
    cumulative_min_wage_income_tax_base: float
    transferred_ssi_base1: float
    transferred_ssi_base2: float

    @property
    def state(self) -> CumulativeState:
        return CumulativeState(
            cumulative_income_tax_base=self.cumulative_income_tax_base,
            cumulative_min_wage_income_tax_base=self.cumulative_min_wage_income_tax_base,
            transferred_ssi_base1=self.transferred_ssi_base1,
            transferred_ssi_base2=self.transferred_ssi_base2,
        )


class EmployeeTotals(BaseModel):
    total_cost: float
    total_net: float
    total_gross: float


class PayrollResult(EmployeeTotals):
    """Result of calculate_payroll for one employee."""

    employee: str
    periods: List[PeriodResult]


class BulkEmployeeResult(EmployeeTotals):
    name: str


class BulkSummary(BaseModel):
    total_employees: int
    total_yearly_cost: float
    total_yearly_net: float
    total_yearly_gross: float
    average_monthly_cost: float


class BulkPayrollResult(BaseModel):
    summary: BulkSummary
    employees: List[BulkEmployeeResult]


class ScenarioApplied(BaseModel):
    """Effective parameters a simulation ran with."""

    salary_raise_percent: float
    effective_min_wage: float
    effective_min_wage_net: float
    effective_ssi_lower_limit: float
    effective_ssi_upper_limit: float
    effective_tax_brackets: List[TaxBracket]


class SimulationSummary(BaseModel):
    total_yearly_cost: float
    total_yearly_net: float
    total_yearly_gross: float
    cost_per_employee: float


class SimulationEmployeeResult(BaseModel):
    name: str
    original_wage: float
    adjusted_wage: float
    yearly_cost: float
    yearly_net: float
    yearly_gross: float
    periods: List[PeriodResult]


class SimulationResult(BaseModel):
    scenario_applied: ScenarioApplied
    summary: SimulationSummary
    employees: List[SimulationEmployeeResult]


class ScenarioComparison(BaseModel):
    scenario_name: str
    total_cost: float
    cost_difference: float
    percent_change: float


class ComparisonResult(BaseModel):
    baseline_cost: float
    comparison: List[ScenarioComparison]
    cheapest_scenario: str
    most_expensive_scenario: str

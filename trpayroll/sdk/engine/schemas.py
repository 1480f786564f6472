"""Wire schemas for the Payrolla calculation engine.

Field names are snake_case in Python and serialize to the engine's own
keys via aliases. Requests are dumped with exclude_none so unset values
(e.g. the base pay line's amount) are left out of the body. Responses
ignore unknown keys so engine additions don't break parsing.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..schemas import CalculationType, CustomParams, PaymentCategory, SSIType


class PaymentLine(BaseModel):
    """One payment line of a calculation request."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    payment_amount: Optional[float] = Field(default=None, alias="paymentAmount")
    payment_name: str = Field(..., alias="paymentName")
    payment_type: PaymentCategory = Field(..., alias="paymentType")
    payment_ref: str = Field(..., alias="paymentRef")
    calculation_type: Optional[CalculationType] = Field(default=None, alias="calculationType")


class IncomeTaxLimit(BaseModel):
    model_config = ConfigDict(extra="forbid")

    limit: float
    rate: float


class CustomGlobalParams(BaseModel):
    """Parameter overrides in the engine's vocabulary."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    min_wage: Optional[float] = Field(default=None, alias="minWage")
    ssi_lower_limit: Optional[float] = Field(default=None, alias="ssi_LowerLimit")
    ssi_upper_limit: Optional[float] = Field(default=None, alias="ssi_UpperLimit")
    stamp_tax_ratio: Optional[float] = Field(default=None, alias="stampTaxRatio")
    income_tax_limits: Optional[List[IncomeTaxLimit]] = Field(default=None, alias="incomeTaxLimits")

    @classmethod
    def from_custom_params(cls, custom: Optional[CustomParams]) -> Optional["CustomGlobalParams"]:
        """Map caller overrides to engine overrides.

        The engine has no net minimum wage override, so min_wage_net is
        not forwarded; it only feeds simulation reporting.
        """
        if custom is None:
            return None
        limits = None
        if custom.income_tax_limits is not None:
            limits = [IncomeTaxLimit(limit=b.limit, rate=b.rate) for b in custom.income_tax_limits]
        return cls(
            min_wage=custom.min_wage,
            ssi_lower_limit=custom.ssi_lower_limit,
            ssi_upper_limit=custom.ssi_upper_limit,
            stamp_tax_ratio=custom.stamp_tax_ratio,
            income_tax_limits=limits,
        )


class CalculationParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    calculate_min_wage_exemption: bool = Field(default=True, alias="calculateMinWageExemption")
    custom_global_params: Optional[CustomGlobalParams] = Field(default=None, alias="customGlobalParams")


class WageCalculationModel(BaseModel):
    """Single-month calculation request."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    calc_date: str = Field(..., alias="calcDate", description="First day of the month (YYYY-MM-01)")
    wage_amount: float = Field(..., alias="wageAmount")
    ssi_type: SSIType = Field(..., alias="ssiType")
    wage_calculation_type: CalculationType = Field(..., alias="wageCalculationType")
    wage_period_type: Literal["Monthly"] = Field(default="Monthly", alias="wagePeriodType")
    period_length_type: Literal["Month"] = Field(default="Month", alias="periodLengthType")
    period_count: int = Field(default=1, alias="periodCount")
    payments: List[PaymentLine]
    cumulative_income_tax_base: float = Field(default=0, alias="cumulativeIncomeTaxBase")
    cumulative_min_wage_income_tax_base: float = Field(default=0, alias="cumulativeMinWageIncomeTaxBase")
    transferred_ssi_base1: float = Field(default=0, alias="transferredSSIBase1")
    transferred_ssi_base2: float = Field(default=0, alias="transferredSSIBase2")
    calculation_params: CalculationParams = Field(default_factory=CalculationParams, alias="calculationParams")

    def to_payload(self) -> dict:
        """JSON body for the engine."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PayrollFigures(BaseModel):
    """Figures the engine computed for one month."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    total_net: float = Field(..., alias="totalNet")
    total_gross: float = Field(..., alias="totalGross")
    total_income_tax: float = Field(..., alias="totalIncomeTax")
    total_income_tax_base: float = Field(..., alias="totalIncomeTaxBase")
    total_min_wage_income_tax_exemption_base: float = Field(
        ..., alias="totalMinWageIncomeTaxExemptionBase"
    )
    total_stamp_tax: float = Field(..., alias="totalStampTax")
    total_ssi_worker_prem: float = Field(..., alias="totalSSIWorkerPrem")
    total_ssi_employer_prem: float = Field(..., alias="totalSSIEmployerPrem")
    transferred_ssi_base1: Optional[float] = Field(default=None, alias="transferredSSIBase1")
    transferred_ssi_base2: Optional[float] = Field(default=None, alias="transferredSSIBase2")


class Payroll(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    year: Optional[int] = None
    month: Optional[int] = None
    total_cost: float = Field(..., alias="totalCost")
    payroll_result: Optional[PayrollFigures] = Field(default=None, alias="payrollResult")


class CalculationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    payrolls: Optional[List[Payroll]] = None

    def first_payroll(self) -> Optional[Payroll]:
        """The single payroll of a one-month request, if the engine returned one."""
        if not self.payrolls:
            return None
        payroll = self.payrolls[0]
        if payroll.payroll_result is None:
            return None
        return payroll

"""Shared fixtures: config isolation and a deterministic fake engine."""

import pytest

from trpayroll.sdk.engine.schemas import (
    CalculationResponse,
    Payroll,
    PayrollFigures,
    WageCalculationModel,
)

# Fake engine rates
NET_TO_GROSS = 1.25
TAX_BASE_RATIO = 0.85
INCOME_TAX_RATE = 0.15
STAMP_TAX_RATIO = 0.00759
SSI_WORKER_RATE = 0.14
SSI_EMPLOYER_RATE = 0.155


class FakeEngine:
    """CalculationEngine with simple, predictable arithmetic.

    - gross = wage (or wage * 1.25 if Net) + extra payments (Net ones * 1.25)
    - income tax base = 85% of gross; cost = gross * 1.155
    - min wage exemption base comes back as month * 100 (a replace value)
    - transferred SSI base 1 comes back as month * 10; base 2 is omitted

    Every request is recorded in `models`. Months listed in
    `missing` (as "YYYY-MM") come back without a payroll.
    """

    def __init__(self, missing=()):
        self.models = []
        self.missing = set(missing)

    async def calculate(self, model: WageCalculationModel) -> CalculationResponse:
        self.models.append(model)
        year, month = int(model.calc_date[:4]), int(model.calc_date[5:7])
        if f"{year}-{month:02d}" in self.missing:
            return CalculationResponse(payrolls=[])

        def to_gross(amount, calc_type):
            return amount * NET_TO_GROSS if calc_type == "Net" else amount

        gross = to_gross(model.wage_amount, model.wage_calculation_type)
        for line in model.payments:
            if line.payment_amount is not None:
                gross += to_gross(line.payment_amount, line.calculation_type)

        tax_base = gross * TAX_BASE_RATIO
        income_tax = tax_base * INCOME_TAX_RATE
        stamp_tax = gross * STAMP_TAX_RATIO
        worker_ssi = gross * SSI_WORKER_RATE
        employer_ssi = gross * SSI_EMPLOYER_RATE

        return CalculationResponse(payrolls=[Payroll(
            year=year,
            month=month,
            total_cost=gross + employer_ssi,
            payroll_result=PayrollFigures(
                total_net=gross - worker_ssi - income_tax - stamp_tax,
                total_gross=gross,
                total_income_tax=income_tax,
                total_income_tax_base=tax_base,
                total_min_wage_income_tax_exemption_base=month * 100,
                total_stamp_tax=stamp_tax,
                total_ssi_worker_prem=worker_ssi,
                total_ssi_employer_prem=employer_ssi,
                transferred_ssi_base1=month * 10,
                transferred_ssi_base2=None,
            ),
        )])


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at an empty directory and clear PAYROLLA_* variables."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TR_PAYROLL_CONFIG_PATH", str(config_dir))
    for var in (
        "PAYROLLA_API_KEY",
        "PAYROLLA_API_URL",
        "PAYROLLA_TIMEOUT",
        "PAYROLLA_REQUEST_TIMEOUT",
        "PAYROLLA_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    return config_dir


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def engine_factory():
    """Build a FakeEngine with options (e.g. missing months)."""
    return FakeEngine

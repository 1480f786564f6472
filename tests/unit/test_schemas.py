"""Tests for input schema validation."""

import pytest
from pydantic import ValidationError

from trpayroll.sdk.params import UNBOUNDED_LIMIT
from trpayroll.sdk.schemas import (
    EmployeeInput,
    ExtraPayment,
    FiscalParameters,
    PayEvent,
    TaxBracket,
)


class TestExtraPayment:

    @pytest.mark.parametrize("code, expected", [
        (1, "RegularPayment"),
        (2, "Overtime"),
        (3, "SocialAid"),
        (4, "ExtraPay"),
    ])
    def test_numeric_payment_type_codes(self, code, expected):
        payment = ExtraPayment(name="x", amount=1, type="Gross", payment_type=code)

        assert payment.payment_type == expected

    def test_default_payment_type(self):
        assert ExtraPayment(name="x", amount=1, type="Net").payment_type == "ExtraPay"

    @pytest.mark.parametrize("code", [0, 5])
    def test_unknown_code_rejected(self, code):
        with pytest.raises(ValidationError):
            ExtraPayment(name="x", amount=1, type="Gross", payment_type=code)

    def test_unknown_field_rejected(self):
        """A misspelled field is an error, not silently dropped."""
        with pytest.raises(ValidationError):
            ExtraPayment(name="x", amount=1, type="Gross", amout=2)

    def test_type_must_be_gross_or_net(self):
        with pytest.raises(ValidationError):
            ExtraPayment(name="x", amount=1, type="net")


class TestPayEvent:

    def test_occurs_in(self):
        event = PayEvent(name="Bonus", amount=1000, type="Gross", year=2025, month=12)

        assert event.occurs_in(2025, 12)
        assert not event.occurs_in(2025, 11)
        assert not event.occurs_in(2026, 12)

    def test_month_range(self):
        with pytest.raises(ValidationError):
            PayEvent(name="Bonus", amount=1000, type="Gross", year=2025, month=13)


class TestEmployeeInput:

    @pytest.fixture
    def employee(self):
        return EmployeeInput(
            name="Mehmet",
            wage=40000,
            calculation_type="Net",
            extra_payments=[{"name": "Yemek", "amount": 2000, "type": "Net", "payment_type": 3}],
            pay_events=[
                {"name": "Ikramiye", "amount": 40000, "type": "Gross", "year": 2025, "month": 6},
                {"name": "Prim", "amount": 5000, "type": "Gross", "year": 2025, "month": 6},
                {"name": "Bayram", "amount": 3000, "type": "Net", "year": 2025, "month": 9},
            ],
            transferred_ssi_base1=1500,
        )

    def test_payments_for_event_month(self, employee):
        names = [p.name for p in employee.payments_for(2025, 6)]

        assert names == ["Yemek", "Ikramiye", "Prim"]

    def test_payments_for_plain_month(self, employee):
        assert [p.name for p in employee.payments_for(2025, 7)] == ["Yemek"]

    def test_initial_state(self, employee):
        state = employee.initial_state

        assert state.transferred_ssi_base1 == 1500
        assert state.cumulative_income_tax_base == 0

    def test_wage_definition(self, employee):
        wage = employee.wage_definition

        assert (wage.name, wage.wage, wage.calculation_type, wage.ssi_type) == (
            "Mehmet", 40000, "Net", "S4A",
        )

    def test_negative_wage_rejected(self):
        with pytest.raises(ValidationError):
            EmployeeInput(name="x", wage=-1, calculation_type="Gross")


class TestFiscalParameters:

    def make(self, brackets):
        return FiscalParameters(
            year=2025,
            min_wage=26005.5,
            min_wage_net=22104.67,
            ssi_lower_limit=26005.5,
            ssi_upper_limit=195041.4,
            stamp_tax_ratio=0.00759,
            income_tax_brackets=brackets,
        )

    def test_increasing_limits_accepted(self):
        params = self.make([
            TaxBracket(limit=158000, rate=0.15),
            TaxBracket(limit=UNBOUNDED_LIMIT, rate=0.40),
        ])

        assert len(params.income_tax_brackets) == 2

    def test_non_increasing_limits_rejected(self):
        with pytest.raises(ValidationError, match="must increase"):
            self.make([
                TaxBracket(limit=330000, rate=0.20),
                TaxBracket(limit=158000, rate=0.15),
            ])

    def test_empty_brackets_rejected(self):
        with pytest.raises(ValidationError):
            self.make([])

    def test_rate_range(self):
        with pytest.raises(ValidationError):
            TaxBracket(limit=1000, rate=1.5)

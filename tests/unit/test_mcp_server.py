"""Tests for the MCP tool surface.

Tool functions are called directly; every argument is passed because
their defaults are pydantic Field markers.
"""

import asyncio
import json

import pytest

from trpayroll.mcp import server
from trpayroll.sdk.config import EngineSettings
from trpayroll.sdk.params import UNBOUNDED_LIMIT
from trpayroll.sdk.schemas import EmployeeInput, ExtraPayment, PayEvent, ScenarioConfig


@pytest.fixture
def install_engine(monkeypatch):
    """Install an engine for the tools; restored after the test."""
    monkeypatch.setattr(server, "_engine", None)
    monkeypatch.setattr(server, "_settings", None)

    def install(engine, settings=None):
        server.set_engine(engine, settings or EngineSettings())
        return engine

    return install


def calculate_payroll(**overrides):
    args = dict(
        name="Ayşe",
        wage=50000,
        calculation_type="Gross",
        year=2025,
        month=1,
        ssi_type="S4A",
        period_count=1,
        extra_payments=None,
        pay_events=None,
        custom_params=None,
        cumulative_income_tax_base=0,
        cumulative_min_wage_income_tax_base=0,
        transferred_ssi_base1=0,
        transferred_ssi_base2=0,
    )
    args.update(overrides)
    return asyncio.run(server.calculate_payroll(**args))


class SlowEngine:
    async def calculate(self, model):
        await asyncio.sleep(5)


class TestCalculatePayrollTool:

    def test_success(self, install_engine, fake_engine):
        install_engine(fake_engine)

        result = calculate_payroll(period_count=3)

        assert result["employee"] == "Ayşe"
        assert len(result["periods"]) == 3
        assert result["total_gross"] == 150000

    def test_extra_payments_and_events(self, install_engine, fake_engine):
        install_engine(fake_engine)

        result = calculate_payroll(
            period_count=2,
            extra_payments=[ExtraPayment(name="Yol", amount=1000, type="Gross")],
            pay_events=[PayEvent(name="Prim", amount=4000, type="Gross", year=2025, month=2)],
        )

        assert [p["gross_wage"] for p in result["periods"]] == [51000, 55000]

    def test_carried_in_bases(self, install_engine, fake_engine):
        install_engine(fake_engine)

        result = calculate_payroll(month=7, cumulative_income_tax_base=255000, transferred_ssi_base2=4000)

        assert fake_engine.models[0].cumulative_income_tax_base == 255000
        assert result["periods"][0]["cumulative_income_tax_base"] == pytest.approx(255000 + 42500)
        assert result["periods"][0]["transferred_ssi_base2"] == 4000

    def test_missing_payroll_is_error_dict(self, install_engine, engine_factory):
        install_engine(engine_factory(missing=["2025-02"]))

        result = calculate_payroll(period_count=3)

        assert result == {"error": "Payrolla calculation returned no payroll data for 2025-02"}

    def test_invalid_input_is_error_dict(self, install_engine, fake_engine):
        install_engine(fake_engine)

        result = calculate_payroll(wage=-100)

        assert "error" in result
        assert fake_engine.models == []

    def test_deadline(self, install_engine):
        install_engine(SlowEngine(), EngineSettings(request_timeout=0.05))

        result = calculate_payroll()

        assert result == {"error": "calculate_payroll did not finish within 0.05s"}

    def test_missing_api_key_is_error_dict(self, install_engine):
        result = calculate_payroll()

        assert "PAYROLLA_API_KEY" in result["error"]


class TestBulkAndScenarioTools:

    @pytest.fixture
    def employees(self):
        return [
            EmployeeInput(name="Ayşe", wage=50000, calculation_type="Gross"),
            EmployeeInput(name="Ali", wage=30000, calculation_type="Gross"),
        ]

    def test_bulk(self, install_engine, fake_engine, employees):
        install_engine(fake_engine)

        result = asyncio.run(server.calculate_bulk_payroll(
            employees=employees, year=2025, month=1, period_count=12, custom_params=None,
        ))

        assert result["summary"]["total_employees"] == 2
        assert [e["name"] for e in result["employees"]] == ["Ayşe", "Ali"]

    def test_simulate(self, install_engine, fake_engine, employees):
        install_engine(fake_engine)

        result = asyncio.run(server.simulate_budget(
            employees=employees, year=2025, period_count=12,
            scenario=ScenarioConfig(salary_raise_percent=10),
        ))

        assert result["scenario_applied"]["salary_raise_percent"] == 10
        assert result["employees"][0]["adjusted_wage"] == pytest.approx(55000)

    def test_compare(self, install_engine, fake_engine, employees):
        install_engine(fake_engine)

        result = asyncio.run(server.compare_scenarios(
            employees=employees, year=2025, period_count=12,
            scenarios=[ScenarioConfig(name="Now"), ScenarioConfig(salary_raise_percent=10)],
        ))

        assert [c["scenario_name"] for c in result["comparison"]] == ["Now", "Scenario 2"]
        assert result["cheapest_scenario"] == "Now"

    def test_compare_without_scenarios(self, install_engine, fake_engine, employees):
        install_engine(fake_engine)

        result = asyncio.run(server.compare_scenarios(
            employees=employees, year=2025, period_count=12, scenarios=[],
        ))

        assert result == {"error": "At least one scenario is required"}


class TestDefaultParams:

    def test_tool_other_year(self):
        result = asyncio.run(server.get_default_params(year=2030))

        assert result["year"] == 2030
        assert result["min_wage"] == 26005.5
        assert result["income_tax_brackets"][-1]["limit"] == UNBOUNDED_LIMIT

    def test_resource(self):
        data = json.loads(asyncio.run(server.base_year_defaults_resource()))

        assert data["year"] == 2025
        assert len(data["income_tax_brackets"]) == 5
        assert data["income_tax_brackets"][0]["description"]


class TestRegistration:

    def test_tools(self):
        tools = asyncio.run(server.mcp.list_tools())

        assert {t.name for t in tools} == {
            "calculate_payroll",
            "calculate_bulk_payroll",
            "simulate_budget",
            "compare_scenarios",
            "get_default_params",
        }

    def test_resource(self):
        resources = asyncio.run(server.mcp.list_resources())

        assert [str(r.uri) for r in resources] == ["trpayroll://defaults/2025"]

    def test_prompts(self):
        prompts = asyncio.run(server.mcp.list_prompts())

        assert {p.name for p in prompts} == {"budget_simulation", "salary_raise_analysis", "year_planning"}


class TestPrompts:

    def test_budget_simulation(self):
        text = server.budget_simulation("5", "salary raise")

        assert "5 employees" in text
        assert "salary raise scenario" in text
        assert "26,005.50" in text
        assert "simulate_budget" in text

    def test_salary_raise_analysis(self):
        text = server.salary_raise_analysis("5,10")

        assert "5,10" in text
        assert "compare_scenarios" in text

    def test_year_planning(self):
        text = server.year_planning("2026")

        assert "2026 payroll budget" in text
        assert "get_default_params" in text


class TestRunServer:

    def test_exits_without_api_key(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            server.run_server()

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "PAYROLLA_API_KEY environment variable is required" in err
        assert "export PAYROLLA_API_KEY" in err

    def test_exits_on_bad_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("PAYROLLA_API_KEY", "pk_test")
        monkeypatch.setenv("PAYROLLA_TIMEOUT", "never")

        with pytest.raises(SystemExit) as exc_info:
            server.run_server()

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "timeout" in err
        assert "export" not in err

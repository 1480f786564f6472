"""tr-payroll CLI - Turkish payroll calculations from the command line."""

import asyncio
import json

import click

from trpayroll import __version__
from trpayroll.sdk import (
    PayrollError,
    PayrollaEngine,
    calculate_payroll,
    configure_logging,
    load_default_params,
    load_engine_settings,
)
from trpayroll.sdk.params import BASE_YEAR, UNBOUNDED_LIMIT
from trpayroll.sdk.schemas import EmployeeInput


def make_engine():
    """Engine for CLI commands, built from the configured settings."""
    settings = load_engine_settings()
    configure_logging(settings.debug)
    return PayrollaEngine.from_settings(settings)


@click.group()
@click.version_option(version=__version__, prog_name="tr-payroll")
def cli():
    """tr-payroll - Turkish payroll calculations.

    Settings are resolved from (in order):

    \b
    1. PAYROLLA_* environment variables (PAYROLLA_API_KEY is required
       for calculations)
    2. settings.json in TR_PAYROLL_CONFIG_PATH or ~/.config/tr-payroll/
    3. Built-in defaults
    """
    pass


@cli.command("params")
@click.argument("year", type=int, required=False, default=BASE_YEAR)
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON.")
def params_cmd(year, as_json):
    """Show default payroll parameters for YEAR (default: 2025).

    Years without their own table show the 2025 values.
    """
    params = load_default_params(year)

    if as_json:
        click.echo(json.dumps(params.model_dump(), indent=2, ensure_ascii=False))
        return

    click.echo(f"Payroll parameters for {params.year}")
    click.echo(f"  Minimum wage (gross): {params.min_wage:>14,.2f}")
    click.echo(f"  Minimum wage (net):   {params.min_wage_net:>14,.2f}")
    click.echo(f"  SSI lower limit:      {params.ssi_lower_limit:>14,.2f}")
    click.echo(f"  SSI upper limit:      {params.ssi_upper_limit:>14,.2f}")
    click.echo(f"  Stamp tax ratio:      {params.stamp_tax_ratio:>14}")
    click.echo("  Income tax brackets:")
    for bracket in params.income_tax_brackets:
        limit = "no limit" if bracket.limit == UNBOUNDED_LIMIT else f"{bracket.limit:,.0f}"
        click.echo(f"    up to {limit:>14}  {bracket.rate:.0%}")


@cli.command("calculate")
@click.argument("name")
@click.argument("wage", type=float)
@click.option("--net", is_flag=True, help="WAGE is a net amount (default: gross).")
@click.option("--ssi-type", type=click.Choice(["S4A", "S4B", "S4C"]), default="S4A", show_default=True)
@click.option("--year", type=int, required=True, help="Calculation year.")
@click.option("--month", type=click.IntRange(1, 12), required=True, help="Starting month (1-12).")
@click.option("--periods", type=click.IntRange(1, 12), default=1, show_default=True, help="Number of months.")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON.")
def calculate_cmd(name, wage, net, ssi_type, year, month, periods, as_json):
    """Calculate payroll for one employee with the Payrolla engine."""
    employee = EmployeeInput(
        name=name,
        wage=wage,
        calculation_type="Net" if net else "Gross",
        ssi_type=ssi_type,
    )

    async def run():
        engine = make_engine()
        try:
            return await calculate_payroll(engine, employee, year, month, periods)
        finally:
            aclose = getattr(engine, "aclose", None)
            if aclose is not None:
                await aclose()

    try:
        result = asyncio.run(run())
    except PayrollError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.model_dump(), indent=2))
        return

    click.echo(f"{result.employee}")
    click.echo(f"{'Month':<8} {'Gross':>12} {'Net':>12} {'Income tax':>12} {'Employer cost':>14}")
    for p in result.periods:
        click.echo(
            f"{p.year}-{p.month:02d}  {p.gross_wage:>12,.2f} {p.net_wage:>12,.2f} "
            f"{p.income_tax:>12,.2f} {p.employer_cost:>14,.2f}"
        )
    click.echo(
        f"{'Total':<8} {result.total_gross:>12,.2f} {result.total_net:>12,.2f} "
        f"{'':>12} {result.total_cost:>14,.2f}"
    )


@cli.command("serve")
def serve_cmd():
    """Start the MCP server on stdio."""
    from trpayroll.mcp.server import run_server

    run_server()


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

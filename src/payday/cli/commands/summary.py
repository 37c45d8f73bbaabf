"""Dashboard summary command."""

import click
from payday.cli.formatting import format_currency, format_date
from payday.domain.savings import SavingsService
from payday.domain.summary import SummaryService


@click.command("summary")
@click.option("--currency", help="Reporting currency (defaults to the configured one)")
@click.pass_context
def summary(ctx, currency: str | None):
    """Show totals across paydays, bills, debts, charity and savings."""
    config = ctx.obj["config"]
    currency = (currency or config.reporting_currency).upper()
    service = SummaryService(ctx.obj["db"], ctx.obj["clock"], config.converter())
    result = service.build_summary(currency)

    click.echo("\nPayday Summary")
    click.echo("=" * 60)
    if result.next_payday is None:
        click.echo("Next payday: not set")
    else:
        click.echo(f"Next payday: {format_date(result.next_payday)}", nl=False)
        days = result.days_until_payday
        if days == 0:
            click.echo(" (today)")
        elif days is not None and days > 0:
            click.echo(f" (in {days} day{'s' if days != 1 else ''})")
        else:
            click.echo(" (past due)")

    click.echo(f"Unpaid bills:    {format_currency(result.total_unpaid_bills, currency)}")
    click.echo(f"Total debt:      {format_currency(result.total_debt, currency)}")
    click.echo(f"Charity balance: {format_currency(result.charity_balance)}")
    savings_currency = SavingsService(ctx.obj["db"]).get_settings().currency
    click.echo(f"Savings balance: {format_currency(result.savings_balance, savings_currency)}")

    latest = result.latest_payday
    if latest is None:
        return

    click.echo(f"\nLatest payday: {format_date(latest.date)}")
    latest_currency = latest.currency or "USD"
    click.echo(f"  Income: {format_currency(latest.total_income, latest_currency)}")
    for share in result.allocation_shares:
        click.echo(
            f"  {share.label:14s} {format_currency(share.amount, latest_currency):>12s} "
            f"{share.percent:3d}%"
        )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)

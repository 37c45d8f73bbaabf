"""Savings commands."""

import click
from payday.cli.error_handling import handle_domain_error
from payday.cli.formatting import format_currency, format_date
from payday.domain.errors import DomainError
from payday.domain.savings import SavingsService
from payday.utils.amount_parser import parse_optional_amount


@click.group()
def savings_group():
    """Track savings contributions."""
    pass


@savings_group.command("show")
@click.pass_context
def show_savings(ctx):
    """Show the savings balance and per-paycheck amount."""
    service = SavingsService(ctx.obj["db"], ctx.obj["clock"])
    settings = service.get_settings()
    state = service.get_state()
    click.echo(f"Savings balance: {format_currency(state.balance, settings.currency)}")
    click.echo(
        f"  Per paycheck: {format_currency(settings.amount_per_paycheck, settings.currency)}"
    )


@savings_group.command("history")
@click.option("--limit", type=int, default=None, help="Show only the most recent N entries")
@click.pass_context
def savings_history(ctx, limit: int | None):
    """List savings contributions, newest first."""
    entries = SavingsService(ctx.obj["db"], ctx.obj["clock"]).history()
    if limit is not None:
        entries = entries[:limit]
    if not entries:
        click.echo("No savings recorded.")
        return

    for entry in entries:
        click.echo(
            f"{format_date(entry.date):20s} {entry.description:20s} "
            f"{format_currency(entry.amount, entry.currency):>12s}  "
            f"balance {format_currency(entry.balance_after, entry.currency)}"
        )


@savings_group.command("settings")
@click.option("--amount", help="Amount saved each paycheck")
@click.option("--currency", help="Savings currency")
@click.pass_context
def savings_settings(ctx, amount: str | None, currency: str | None):
    """Show or change the per-paycheck savings amount."""
    service = SavingsService(ctx.obj["db"], ctx.obj["clock"])
    try:
        if amount is None and currency is None:
            settings = service.get_settings()
        else:
            settings = service.update_settings(parse_optional_amount(amount), currency)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Savings per paycheck: "
        f"{format_currency(settings.amount_per_paycheck, settings.currency)} ({settings.currency})"
    )


def register_commands(cli):
    """Register savings commands with main CLI."""
    cli.add_command(savings_group, name="savings")

"""Payday commands: record income and manage the payday schedule."""

import click
from payday.cli.error_handling import handle_domain_error
from payday.cli.formatting import format_currency, format_date
from payday.domain.entities import PaydayFrequency
from payday.domain.errors import DomainError
from payday.domain.payday import PaydayService, build_event
from payday.domain.savings import SavingsService
from payday.utils.amount_parser import parse_amount, parse_optional_amount


@click.command("record")
@click.option(
    "--date",
    "payday_date",
    default="today",
    show_default=True,
    help="Payday date (YYYY-MM-DD or 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Income amount (e.g., 2500.00)")
@click.option("--type", "income_type", default="Paycheck", show_default=True, help="Income type")
@click.option("--currency", default="USD", show_default=True, help="Income currency")
@click.option("--bills", default="0", help="Amount allocated to bills")
@click.option("--credit-cards", default="0", help="Amount allocated to credit cards")
@click.option("--charity", default="0", help="Amount allocated to charity")
@click.option(
    "--savings",
    default=None,
    help="Amount allocated to savings (defaults to the per-paycheck setting)",
)
@click.option("--other", default="0", help="Amount allocated to anything else")
@click.pass_context
def record_payday(
    ctx,
    payday_date: str,
    amount: str,
    income_type: str,
    currency: str,
    bills: str,
    credit_cards: str,
    charity: str,
    savings: str | None,
    other: str,
):
    """Record a payday.

    Schedules the next payday, adds the charity increment and puts money
    into savings.

    Examples:
        payday record --amount 2500
        payday record --date 2025-04-04 --amount 2500 --bills 800 --savings 150
    """
    service = PaydayService(ctx.obj["db"], ctx.obj["clock"])

    try:
        event = build_event(
            payday_date,
            parse_amount(amount),
            income_type=income_type,
            currency=currency,
            bills=parse_amount(bills),
            credit_cards=parse_amount(credit_cards),
            charity=parse_amount(charity),
            savings=parse_optional_amount(savings),
            other=parse_amount(other),
            clock=ctx.obj["clock"],
        )
        result = service.record_payday(event)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded {income_type} of {format_currency(event.total_income, event.currency)} "
        f"on {format_date(result.event.date)}"
    )
    click.echo(f"  Next payday: {format_date(result.settings.next_date)}")
    click.echo(f"  Charity balance: {format_currency(result.charity.current_amount)}")
    savings_currency = SavingsService(ctx.obj["db"]).get_settings().currency
    click.echo(f"  Savings balance: {format_currency(result.savings.balance, savings_currency)}")
    if event.unallocated < 0:
        click.echo(
            f"Warning: allocations exceed income by "
            f"{format_currency(-event.unallocated, event.currency)}",
            err=True,
        )


@click.command("history")
@click.option("--limit", type=int, default=None, help="Show only the most recent N paydays")
@click.pass_context
def payday_history(ctx, limit: int | None):
    """List recorded paydays, newest first."""
    service = PaydayService(ctx.obj["db"], ctx.obj["clock"])
    events = service.history()
    if limit is not None:
        events = events[:limit]

    if not events:
        click.echo("No paydays recorded.")
        return

    click.echo("\nPaydays:")
    click.echo("-" * 60)
    for event in events:
        currency = event.currency or "USD"
        kind = event.income_entries[0].type if event.income_entries else "Income"
        click.echo(f"{format_date(event.date)} - {kind}")
        click.echo(f"  Income: {format_currency(event.total_income, currency)}")
        parts = [
            f"{label}: {format_currency(value, currency)}"
            for label, value in event.allocations.as_dict().items()
            if value
        ]
        if parts:
            click.echo(f"  {' | '.join(parts)}")
        click.echo(
            f"  Allocated: {format_currency(event.allocations.total, currency)} / "
            f"{format_currency(event.total_income, currency)}"
        )


@click.command("next")
@click.option("--set", "set_date", help="Set the next payday date (YYYY-MM-DD)")
@click.pass_context
def next_payday(ctx, set_date: str | None):
    """Show (or set) the next expected payday."""
    service = PaydayService(ctx.obj["db"], ctx.obj["clock"])

    if set_date is not None:
        try:
            service.set_next_date(set_date)
        except DomainError as e:
            handle_domain_error(ctx, e)

    settings = service.get_settings()
    if settings.next_date is None:
        click.echo("Next payday not set. Record a payday or use --set.")
        return

    days = service.days_until_next_payday()
    click.echo(f"Next payday: {format_date(settings.next_date)} ({settings.frequency.value})")
    if service.is_payday_today():
        click.echo("It's payday! Record your income, pay bills and set aside savings.")
    elif days is not None and days > 0:
        click.echo(f"{days} day{'s' if days != 1 else ''} to go")
    elif days is not None:
        click.echo(f"Expected {abs(days)} day{'s' if abs(days) != 1 else ''} ago")


@click.command("frequency")
@click.argument(
    "frequency",
    required=False,
    type=click.Choice([f.value for f in PaydayFrequency]),
)
@click.pass_context
def payday_frequency(ctx, frequency: str | None):
    """Show or change how often you are paid."""
    service = PaydayService(ctx.obj["db"], ctx.obj["clock"])
    if frequency is None:
        click.echo(f"Payday frequency: {service.get_settings().frequency.value}")
        return

    try:
        settings = service.set_frequency(frequency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Payday frequency set to {settings.frequency.value}")


def register_commands(cli):
    """Register payday commands with main CLI."""
    cli.add_command(record_payday)
    cli.add_command(payday_history)
    cli.add_command(next_payday)
    cli.add_command(payday_frequency)

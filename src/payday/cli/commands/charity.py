"""Charity pot commands."""

import click
from payday.cli.error_handling import handle_domain_error
from payday.cli.formatting import format_currency, format_date
from payday.domain.charity import CharityService
from payday.domain.errors import DomainError
from payday.utils.amount_parser import parse_amount


@click.group()
def charity_group():
    """Track money set aside for charity."""
    pass


@charity_group.command("show")
@click.pass_context
def show_charity(ctx):
    """Show the charity pot."""
    state = CharityService(ctx.obj["db"], ctx.obj["clock"]).get_state()
    click.echo(f"Charity balance: {format_currency(state.current_amount)}")
    click.echo(f"  Added each payday: {format_currency(state.increment_amount)}")
    if state.recurring_donations:
        click.echo("  Recurring donations:")
        for donation in state.recurring_donations:
            click.echo(
                f"    {donation.description}: "
                f"{format_currency(donation.amount, donation.currency)} "
                f"({donation.schedule.value})"
            )


@charity_group.command("donate")
@click.option("--amount", required=True, help="Donation amount")
@click.option("--description", required=True, help="Who the donation went to")
@click.option("--date", "donation_date", default="today", show_default=True, help="Donation date")
@click.pass_context
def donate(ctx, amount: str, description: str, donation_date: str):
    """Record a donation out of the charity pot.

    Example:
        payday charity donate --amount 50 --description "Food bank"
    """
    service = CharityService(ctx.obj["db"], ctx.obj["clock"])
    try:
        state = service.record_donation(donation_date, parse_amount(amount), description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded donation: {description.strip()}")
    click.echo(f"  Charity balance: {format_currency(state.current_amount)}")


@charity_group.command("history")
@click.pass_context
def charity_history(ctx):
    """List donations, newest first."""
    deductions = CharityService(ctx.obj["db"], ctx.obj["clock"]).donation_history()
    if not deductions:
        click.echo("No donations recorded.")
        return

    for deduction in deductions:
        click.echo(
            f"{format_date(deduction.date):20s} {deduction.description:30s} "
            f"{format_currency(deduction.amount)}"
        )


@charity_group.command("increment")
@click.argument("amount")
@click.pass_context
def set_increment(ctx, amount: str):
    """Set how much is added to the pot each payday."""
    service = CharityService(ctx.obj["db"], ctx.obj["clock"])
    try:
        state = service.set_increment(parse_amount(amount))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Charity increment set to {format_currency(state.increment_amount)}")


@charity_group.command("recurring-add")
@click.option("--amount", required=True, help="Donation amount")
@click.option("--description", required=True, help="Who the donation goes to")
@click.option("--currency", default="USD", show_default=True, help="Donation currency")
@click.pass_context
def add_recurring(ctx, amount: str, description: str, currency: str):
    """Add a donation taken from the second paycheck of each month."""
    service = CharityService(ctx.obj["db"], ctx.obj["clock"])
    try:
        service.add_recurring_donation(parse_amount(amount), description, currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added recurring donation: {description.strip()}")


@charity_group.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_charity(ctx, yes: bool):
    """Set the charity pot back to its base amount."""
    service = CharityService(ctx.obj["db"], ctx.obj["clock"])
    if not yes and not click.confirm("Reset the charity balance to its base amount?"):
        click.echo("Reset cancelled.")
        return
    state = service.reset_balance()
    click.echo(f"Charity balance reset to {format_currency(state.current_amount)}")


def register_commands(cli):
    """Register charity commands with main CLI."""
    cli.add_command(charity_group, name="charity")

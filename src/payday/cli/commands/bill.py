"""Bill management commands."""

import click
from payday.cli.error_handling import handle_domain_error
from payday.cli.formatting import format_currency, format_date, format_days
from payday.cli.record_resolution import resolve_index_or_exit
from payday.domain.bills import BillService
from payday.domain.errors import DomainError
from payday.utils.amount_parser import parse_amount


def _service(ctx) -> BillService:
    config = ctx.obj["config"]
    return BillService(
        ctx.obj["db"], ctx.obj["clock"], config.converter(), config.due_soon_days
    )


@click.group()
def bill_group():
    """Manage bills."""
    pass


@bill_group.command("add")
@click.argument("name", metavar="BILL_NAME")
@click.option("--total", required=True, help="Full bill amount")
@click.option("--per-paycheck", required=True, help="Amount set aside each paycheck")
@click.option("--due", required=True, help="Next due date (YYYY-MM-DD)")
@click.option("--currency", default="USD", show_default=True, help="Bill currency")
@click.pass_context
def add_bill(ctx, name: str, total: str, per_paycheck: str, due: str, currency: str):
    """Add a bill.

    Examples:
        payday bill add "Rent" --total 1500 --per-paycheck 750 --due 2025-05-01
        payday bill add "Phone" --total 60 --per-paycheck 30 --due 2025-04-20 --currency CAD
    """
    service = _service(ctx)
    try:
        index = service.add_bill(
            name=name,
            total_amount=parse_amount(total),
            amount_per_paycheck=parse_amount(per_paycheck),
            due_date=due,
            currency=currency,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    bill = service.get_bill(index)
    click.echo(f"Added bill '{bill.name}' (#{index + 1})")
    click.echo(f"  Due: {format_date(bill.due_date)}")


@bill_group.command("list")
@click.pass_context
def list_bills(ctx):
    """List bills, unpaid first."""
    service = _service(ctx)
    ordered = service.sorted_bills_with_index()
    if not ordered:
        click.echo("No bills found.")
        return

    click.echo("\nBills:")
    click.echo("-" * 60)
    for index, bill in ordered:
        number = index + 1
        status = service.bill_status(bill)
        if status.state == "paid":
            due_text = "Paid"
        else:
            due_text = format_days(status.days_until_due).capitalize()
        marker = "[x]" if status.state == "paid" else "[ ]"
        click.echo(
            f"{marker} #{number:<3d} {bill.name:20s} "
            f"{format_currency(bill.amount_per_paycheck, bill.currency)} per paycheck"
        )
        click.echo(
            f"       Total: {format_currency(bill.total_amount, bill.currency)} | "
            f"Due: {format_date(bill.due_date)} ({due_text})"
        )


@bill_group.command("upcoming")
@click.option("--limit", type=int, default=3, show_default=True, help="Number of bills to show")
@click.pass_context
def upcoming_bills(ctx, limit: int):
    """Show the next unpaid bills."""
    service = _service(ctx)
    bills = service.upcoming_bills(limit=None)
    if not bills:
        click.echo("All bills are paid for this cycle.")
        return

    for bill in bills[:limit]:
        status = service.bill_status(bill)
        flag = {"overdue": " (!)", "due-soon": " (soon)"}.get(status.state, "")
        click.echo(
            f"{bill.name} - {format_currency(bill.amount_per_paycheck, bill.currency)} "
            f"{format_days(status.days_until_due)}{flag}"
        )
    if len(bills) > limit:
        click.echo(f"... {len(bills)} unpaid bills in total")


def _set_paid(ctx, reference: str, paid: bool):
    service = _service(ctx)
    index = resolve_index_or_exit(ctx, service.list_bills(), reference, "Bill")
    try:
        before = service.get_bill(index)
        bill = service.set_paid(index, paid)
    except DomainError as e:
        handle_domain_error(ctx, e)
    return before, bill


@bill_group.command("pay")
@click.argument("bill", metavar="BILL")
@click.pass_context
def pay_bill(ctx, bill: str):
    """Mark a bill paid today.

    BILL can be a bill name or number.
    """
    _, updated = _set_paid(ctx, bill, True)
    click.echo(
        f"Marked '{updated.name}' as paid "
        f"({format_currency(updated.amount_per_paycheck, updated.currency)})"
    )


@bill_group.command("unpay")
@click.argument("bill", metavar="BILL")
@click.pass_context
def unpay_bill(ctx, bill: str):
    """Undo today's payment on a bill.

    Only a payment recorded today can be undone.
    """
    before, updated = _set_paid(ctx, bill, False)
    if len(updated.payment_records) == len(before.payment_records):
        click.echo(f"No payment recorded today for '{updated.name}'; nothing to undo.")
        return
    click.echo(f"Removed today's payment for '{updated.name}'")


@bill_group.command("history")
@click.pass_context
def bill_history(ctx):
    """Show all bill payments, newest first."""
    service = _service(ctx)
    lines = service.payment_history()
    if not lines:
        click.echo("No bill payments recorded.")
        return

    for line in lines:
        click.echo(
            f"{format_date(line.date):20s} {line.bill_name:20s} "
            f"{format_currency(line.amount, line.currency)}"
        )


@bill_group.command("advance")
@click.argument("bill", metavar="BILL")
@click.pass_context
def advance_bill(ctx, bill: str):
    """Move a bill's due date to next month."""
    service = _service(ctx)
    index = resolve_index_or_exit(ctx, service.list_bills(), bill, "Bill")
    try:
        updated = service.advance_cycle(index)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"'{updated.name}' now due {format_date(updated.due_date)}")


@bill_group.command("rollover")
@click.pass_context
def rollover_bills(ctx):
    """Advance every paid bill whose due date has passed."""
    count = _service(ctx).roll_over_cycles()
    click.echo(f"Rolled over {count} bill{'s' if count != 1 else ''}")


@bill_group.command("total")
@click.pass_context
def total_bills(ctx):
    """Total of bills still unpaid this cycle."""
    currency = ctx.obj["config"].reporting_currency
    total = _service(ctx).total_unpaid(currency)
    click.echo(f"Unpaid bills: {format_currency(total, currency)}")


@bill_group.command("delete")
@click.argument("bill", metavar="BILL")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bill(ctx, bill: str, yes: bool):
    """Delete a bill and its payment records."""
    service = _service(ctx)
    index = resolve_index_or_exit(ctx, service.list_bills(), bill, "Bill")
    name = service.get_bill(index).name
    if not yes and not click.confirm(f"Are you sure you want to delete bill '{name}'?"):
        click.echo("Deletion cancelled.")
        return
    try:
        service.remove_bill(index)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted bill '{name}'")


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bill_group, name="bill")

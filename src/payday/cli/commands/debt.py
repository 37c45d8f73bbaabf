"""Debt management commands."""

import click
from payday.cli.error_handling import handle_domain_error
from payday.cli.formatting import format_currency, format_date
from payday.cli.record_resolution import resolve_index_or_exit
from payday.domain.debts import DebtService
from payday.domain.errors import DomainError
from payday.utils.amount_parser import parse_amount, parse_optional_amount


def _service(ctx) -> DebtService:
    config = ctx.obj["config"]
    return DebtService(
        ctx.obj["db"], ctx.obj["clock"], config.converter(), config.due_soon_days
    )


@click.group()
def debt_group():
    """Manage debts."""
    pass


@debt_group.command("add")
@click.argument("name", metavar="DEBT_NAME")
@click.option("--balance", required=True, help="Outstanding balance")
@click.option("--rate", default="0", show_default=True, help="Annual interest rate in percent")
@click.option("--minimum", default="0", show_default=True, help="Minimum monthly payment")
@click.option("--due", help="Next payment due date (YYYY-MM-DD)")
@click.option("--currency", default="USD", show_default=True, help="Debt currency")
@click.pass_context
def add_debt(
    ctx, name: str, balance: str, rate: str, minimum: str, due: str | None, currency: str
):
    """Add a debt.

    Examples:
        payday debt add "Visa" --balance 1200 --rate 19.99 --minimum 50 --due 2025-05-10
        payday debt add "Student Loan" --balance 15000 --rate 4.5
    """
    service = _service(ctx)
    try:
        index = service.add_debt(
            name=name,
            balance=parse_amount(balance),
            interest_rate_percent=parse_amount(rate),
            minimum_payment=parse_amount(minimum),
            due_date=due,
            currency=currency,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    debt = service.get_debt(index)
    click.echo(f"Added debt '{debt.name}' (#{index + 1})")
    click.echo(f"  Balance: {format_currency(debt.balance, debt.currency)}")


@debt_group.command("list")
@click.pass_context
def list_debts(ctx):
    """List debts, outstanding first."""
    service = _service(ctx)
    ordered = service.sorted_debts_with_index()
    if not ordered:
        click.echo("No debts found.")
        return

    click.echo("\nDebts:")
    click.echo("-" * 60)
    for index, debt in ordered:
        number = index + 1
        if debt.is_paid_off:
            click.echo(f"#{number:<3d} {debt.name:20s} PAID OFF")
            continue
        click.echo(
            f"#{number:<3d} {debt.name:20s} {format_currency(debt.balance, debt.currency)} "
            f"@ {debt.interest_rate_percent}%"
        )
        click.echo(
            f"      Minimum: {format_currency(debt.minimum_payment, debt.currency)} | "
            f"Due: {format_date(debt.due_date)}"
        )

    currency = ctx.obj["config"].reporting_currency
    click.echo("-" * 60)
    click.echo(f"Total: {format_currency(service.total_debt(currency), currency)}")


@debt_group.command("pay")
@click.argument("debt", metavar="DEBT")
@click.option("--amount", required=True, help="Payment amount")
@click.option("--date", "payment_date", help="Payment date (defaults to today)")
@click.pass_context
def pay_debt(ctx, debt: str, amount: str, payment_date: str | None):
    """Record a payment on a debt.

    DEBT can be a debt name or number.
    """
    service = _service(ctx)
    index = resolve_index_or_exit(ctx, service.list_debts(), debt, "Debt")
    try:
        result = service.record_payment(index, parse_amount(amount), payment_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    updated = result.debt
    click.echo(
        f"Paid {format_currency(parse_amount(amount), updated.currency)} on '{updated.name}'"
    )
    if result.paid_off:
        click.echo(f"Congratulations! '{updated.name}' is paid off!")
    else:
        click.echo(f"  Remaining: {format_currency(updated.balance, updated.currency)}")


@debt_group.command("priority")
@click.pass_context
def debt_priority(ctx):
    """Show the recommended payoff order."""
    currency = ctx.obj["config"].reporting_currency
    plan = _service(ctx).payoff_plan(currency)
    if not plan.steps:
        click.echo("No outstanding debts.")
        return

    click.echo("\nPayoff order:")
    for position, step in enumerate(plan.steps, start=1):
        debt = step.debt
        click.echo(
            f"{position}. {debt.name} - {format_currency(debt.balance, debt.currency)} "
            f"({step.reason})"
        )
    click.echo(f"\nTotal debt: {format_currency(plan.total_debt, plan.currency)}")


@debt_group.command("payoff")
@click.argument("debt", metavar="DEBT")
@click.option("--payment", help="Monthly payment (defaults to the minimum payment)")
@click.pass_context
def debt_payoff(ctx, debt: str, payment: str | None):
    """Estimate how many months it takes to clear a debt."""
    service = _service(ctx)
    index = resolve_index_or_exit(ctx, service.list_debts(), debt, "Debt")
    try:
        monthly = parse_optional_amount(payment)
        months = service.months_to_payoff(index, monthly)
    except DomainError as e:
        handle_domain_error(ctx, e)

    target = service.get_debt(index)
    shown = target.minimum_payment if monthly is None else monthly
    if months is None:
        click.echo(
            f"Paying {format_currency(shown, target.currency)} a month, "
            f"'{target.name}' payoff not achievable: the payment does not cover the interest."
        )
        return
    click.echo(
        f"Paying {format_currency(shown, target.currency)} a month, "
        f"'{target.name}' is paid off in {months} month{'s' if months != 1 else ''}."
    )


@debt_group.command("delete")
@click.argument("debt", metavar="DEBT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_debt(ctx, debt: str, yes: bool):
    """Delete a debt and its payment history."""
    service = _service(ctx)
    index = resolve_index_or_exit(ctx, service.list_debts(), debt, "Debt")
    name = service.get_debt(index).name
    if not yes and not click.confirm(f"Are you sure you want to delete debt '{name}'?"):
        click.echo("Deletion cancelled.")
        return
    try:
        service.remove_debt(index)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted debt '{name}'")


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")

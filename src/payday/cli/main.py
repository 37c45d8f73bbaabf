"""Main CLI entry point."""

import click
from payday.cli.error_handling import handle_domain_error
from payday.config import load_config
from payday.database.factories import create_sqlite_database
from payday.domain.errors import DomainError
from payday.logging_config import configure_logging
from payday.utils.dates import SystemClock

# Import and register all commands at module level
from payday.cli.commands import (
    payday_cmd,
    bill,
    debt,
    charity,
    savings,
    summary,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PAYDAY_DB_PATH environment variable)",
    envvar="PAYDAY_DB_PATH",
)
@click.option(
    "--currency",
    help="Reporting currency for totals (overrides PAYDAY_CURRENCY, default USD)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides PAYDAY_LOG_LEVEL, default WARNING)",
)
@click.pass_context
def cli(ctx, db_path: str | None, currency: str | None, log_level: str | None):
    """Payday Manager - plan every paycheck.

    Record paydays, keep bills paid for the current cycle, rank debts for
    payoff and track charity and savings as income comes in.
    """
    ctx.ensure_object(dict)

    # Initialize configuration and the store only when actually running a
    # command (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            config = load_config(
                database_path=db_path, reporting_currency=currency, log_level=log_level
            )
            configure_logging(config.log_level)
        except (DomainError, ValueError) as e:
            handle_domain_error(ctx, e)

        db = create_sqlite_database(database_path=config.database_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        ctx.obj["config"] = config
        ctx.obj["db"] = db
        ctx.obj.setdefault("clock", SystemClock())


# Register all commands
payday_cmd.register_commands(cli)
bill.register_commands(cli)
debt.register_commands(cli)
charity.register_commands(cli)
savings.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

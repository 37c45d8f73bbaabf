"""Shared pytest fixtures for payday tests."""

import logging
import os
import tempfile
from datetime import date

import pytest
from click.testing import CliRunner

from payday.database.factories import create_sqlite_database
from payday.domain.bills import BillService
from payday.domain.charity import CharityService
from payday.domain.debts import DebtService
from payday.domain.payday import PaydayService
from payday.domain.savings import SavingsService
from payday.domain.summary import SummaryService
from payday.utils.dates import FixedClock

TODAY = date(2025, 4, 20)


@pytest.fixture(autouse=True)
def reset_payday_logger():
    """Drop the handler the CLI installs so it does not outlive the runner."""
    yield
    logger = logging.getLogger("payday")
    for handler in list(logger.handlers):
        if getattr(handler, "_payday_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Clock pinned to April 20, 2025."""
    return FixedClock(TODAY)


@pytest.fixture
def bill_service(temp_db, clock):
    return BillService(temp_db, clock)


@pytest.fixture
def debt_service(temp_db, clock):
    return DebtService(temp_db, clock)


@pytest.fixture
def charity_service(temp_db, clock):
    return CharityService(temp_db, clock)


@pytest.fixture
def savings_service(temp_db, clock):
    return SavingsService(temp_db, clock)


@pytest.fixture
def payday_service(temp_db, clock):
    return PaydayService(temp_db, clock)


@pytest.fixture
def summary_service(temp_db, clock):
    return SummaryService(temp_db, clock)


@pytest.fixture
def cli_runner():
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner, temp_db, clock):
    """Invoke the CLI against the temporary database with the fixed clock."""
    from payday.cli.main import cli

    def _invoke(*args, input=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, *args],
            obj={"clock": clock},
            input=input,
        )

    return _invoke

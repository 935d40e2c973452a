"""Shared pytest fixtures for bikeflip tests."""

import tempfile
import os
import pytest

from bikeflip.database.factories import create_sqlite_database
from bikeflip.domain.bike import BikeService
from bikeflip.domain.capital import CapitalService
from bikeflip.domain.expense import ExpenseService
from bikeflip.domain.partner import PartnerService
from bikeflip.domain.report import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def bike_service(temp_db):
    """Create a BikeService with a temporary database."""
    return BikeService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def capital_service(temp_db):
    """Create a CapitalService with a temporary database."""
    return CapitalService(temp_db)


@pytest.fixture
def partner_service(temp_db):
    """Create a PartnerService with a temporary database."""
    return PartnerService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_partners(partner_service):
    """Create two partners and return their IDs by name."""
    return {
        "Alex": partner_service.create_partner("Alex"),
        "Sam": partner_service.create_partner("Sam"),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

"""Shared pytest fixtures for budgetreport tests."""

import tempfile
import os
from datetime import date

import httpx
import pytest

from budgetreport.database import create_sqlite_database
from budgetreport.domain.account import AccountService
from budgetreport.domain.budget import BudgetService
from budgetreport.domain.entities import VisibilityOptions
from budgetreport.domain.posting import PostingService
from budgetreport.domain.report_template import ReportTemplateService
from budgetreport.domain.value import DecimalValue

FAKE_PDF = b"%PDF-1.4 fake report"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def posting_service(temp_db):
    """Create a PostingService with a temporary database."""
    return PostingService(temp_db)


@pytest.fixture
def template_service(temp_db):
    """Create a ReportTemplateService with a temporary database."""
    return ReportTemplateService(temp_db)


@pytest.fixture
def sample_data(account_service, budget_service, posting_service):
    """Create budget B1 with accounts A1 and A2.

    A1: target 80.00, actual 100.00 (postings 60.00 + 40.00)
    A2: target 50.00, actual 50.00
    A posting outside the budget period is recorded for A1 and must be ignored.
    """
    group_id = account_service.create_account_group("Operations", "Day to day costs")
    a1 = account_service.create_account(
        "A1", group_id=group_id, description="Office supplies", code="4100"
    )
    a2 = account_service.create_account(
        "A2", group_id=group_id, description="Travel", code="4200"
    )
    b1 = budget_service.create_budget(
        "B1", date(2024, 1, 1), date(2024, 12, 31), description="Annual budget"
    )

    budget_service.set_target(b1, a1, DecimalValue("80.00"))
    budget_service.set_target(b1, a2, DecimalValue("50.00"))

    posting_service.record_posting(a1, date(2024, 1, 1), DecimalValue("60.00"))
    posting_service.record_posting(a1, date(2024, 12, 31), DecimalValue("40.00"))
    posting_service.record_posting(a1, date(2025, 1, 1), DecimalValue("999.00"))
    posting_service.record_posting(a2, date(2024, 6, 15), DecimalValue("50.00"))

    return {"group": group_id, "A1": a1, "A2": a2, "B1": b1}


@pytest.fixture
def all_fields_template(template_service):
    """Template showing actual, target and difference values."""
    return template_service.create_template(
        "All values",
        options=VisibilityOptions(
            actual_values_enabled=True,
            target_values_enabled=True,
            difference_values_enabled=True,
        ),
    )


@pytest.fixture
def pdf_transport():
    """Mock transport standing in for a working HTML-to-PDF service."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=FAKE_PDF, headers={"Content-Type": "application/pdf"})

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    transport.pdf = FAKE_PDF
    return transport


@pytest.fixture
def unreachable_transport():
    """Mock transport whose connections always fail."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

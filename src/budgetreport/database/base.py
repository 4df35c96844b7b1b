"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from budgetreport.domain.entities import (
    Account,
    AccountGroup,
    Budget,
    BudgetTarget,
    Posting,
    Report,
    ReportTemplate,
    VisibilityOptions,
)
from budgetreport.domain.value import DecimalValue


class Database(ABC):
    """Abstract database interface for budgetreport."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account group operations
    @abstractmethod
    def create_account_group(self, name: str, description: str = "") -> int:
        """Create an account group. Returns group ID."""
        pass

    @abstractmethod
    def get_account_group(self, group_id: int) -> Optional[AccountGroup]:
        """Get account group by ID."""
        pass

    @abstractmethod
    def list_account_groups(self) -> list[AccountGroup]:
        """List all account groups."""
        pass

    @abstractmethod
    def delete_account_group(self, group_id: int) -> None:
        """Delete an account group."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        group_id: int,
        description: Optional[str] = None,
        code: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, group_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally filtered by group."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account together with its postings and budget targets."""
        pass

    @abstractmethod
    def count_account_dependents(self, account_id: int) -> dict[str, int]:
        """Count postings and budget targets referring to an account."""
        pass

    # Budget operations
    @abstractmethod
    def create_budget(
        self, name: str, start_date: date, end_date: date, description: str = ""
    ) -> int:
        """Create a budget. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets."""
        pass

    @abstractmethod
    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget together with its targets."""
        pass

    @abstractmethod
    def set_budget_target(self, budget_id: int, account_id: int, target: DecimalValue) -> None:
        """Create or replace the target of a budget for an account."""
        pass

    @abstractmethod
    def get_budget_target(self, budget_id: int, account_id: int) -> Optional[DecimalValue]:
        """Get the target of a budget for an account, or None if unset."""
        pass

    @abstractmethod
    def list_budget_targets(self, budget_id: int) -> list[BudgetTarget]:
        """List all targets of a budget."""
        pass

    # Posting operations
    @abstractmethod
    def create_posting(
        self,
        account_id: int,
        date: date,
        amount: DecimalValue,
        description: Optional[str] = None,
    ) -> int:
        """Record a posting. Returns posting ID."""
        pass

    @abstractmethod
    def list_postings(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Posting]:
        """List postings with optional account and inclusive date filters."""
        pass

    @abstractmethod
    def sum_postings(self, account_id: int, start_date: date, end_date: date) -> DecimalValue:
        """Exact sum of an account's postings dated within [start_date, end_date]."""
        pass

    # Report template operations
    @abstractmethod
    def create_report_template(
        self, name: str, options: VisibilityOptions, body: Optional[str] = None
    ) -> int:
        """Create a report template. Returns template ID."""
        pass

    @abstractmethod
    def get_report_template(self, template_id: int) -> Optional[ReportTemplate]:
        """Get report template by ID."""
        pass

    @abstractmethod
    def list_report_templates(self) -> list[ReportTemplate]:
        """List all report templates."""
        pass

    # Stored report operations
    @abstractmethod
    def create_report(self, template_id: int, data: bytes) -> int:
        """Store rendered report bytes. Returns report ID."""
        pass

    @abstractmethod
    def get_report(self, report_id: int) -> Optional[Report]:
        """Get stored report by ID."""
        pass

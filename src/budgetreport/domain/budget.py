"""Budget domain service."""

from datetime import date
from typing import Optional

from budgetreport.database.base import Database
from budgetreport.domain.entities import Budget as BudgetEntity, BudgetTarget
from budgetreport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    budget_not_found,
    duplicate_name,
    invalid_period,
)
from budgetreport.domain.value import DecimalValue


class BudgetService:
    """Service for managing budgets and their per-account targets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_budget(
        self, name: str, start_date: date, end_date: date, description: str = ""
    ) -> int:
        """Create a budget.

        Args:
            name: Budget name
            start_date: First day of the budget period
            end_date: Last day of the budget period (inclusive)
            description: Optional description

        Returns:
            Budget ID

        Raises:
            ValidationError: If name is empty or start_date is after end_date
            ConflictError: If a budget with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Budget name must not be empty")
        if start_date > end_date:
            raise ValidationError(invalid_period(start_date, end_date))

        for budget in self.db.list_budgets():
            if budget.name == name:
                raise ConflictError(duplicate_name("Budget", name))

        return self.db.create_budget(
            name=name, start_date=start_date, end_date=end_date, description=description
        )

    def get_budget(self, budget_id: int) -> Optional[BudgetEntity]:
        """Get budget by ID."""
        return self.db.get_budget(budget_id)

    def list_budgets(self) -> list[BudgetEntity]:
        """List all budgets ordered by period start."""
        return self.db.list_budgets()

    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget and its targets. Postings are not touched.

        Raises:
            NotFoundError: If the budget does not exist
        """
        if self.db.get_budget(budget_id) is None:
            raise NotFoundError(budget_not_found(budget_id))
        self.db.delete_budget(budget_id)

    def set_target(self, budget_id: int, account_id: int, target: DecimalValue) -> None:
        """Set the target of a budget for an account, replacing any previous one.

        Raises:
            NotFoundError: If the budget or account does not exist
        """
        if self.db.get_budget(budget_id) is None:
            raise NotFoundError(budget_not_found(budget_id))
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        self.db.set_budget_target(budget_id, account_id, DecimalValue(target))

    def get_target(self, budget_id: int, account_id: int) -> DecimalValue:
        """Target of a budget for an account; zero when none is set."""
        target = self.db.get_budget_target(budget_id, account_id)
        return target if target is not None else DecimalValue.zero()

    def list_targets(self, budget_id: int) -> list[BudgetTarget]:
        """List all targets of a budget.

        Raises:
            NotFoundError: If the budget does not exist
        """
        if self.db.get_budget(budget_id) is None:
            raise NotFoundError(budget_not_found(budget_id))
        return self.db.list_budget_targets(budget_id)

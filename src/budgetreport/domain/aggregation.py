"""Actual/target aggregation for report pairs."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from budgetreport.database.base import Database
from budgetreport.domain.entities import Account, Budget
from budgetreport.domain.errors import NotFoundError, account_not_found, budget_not_found
from budgetreport.domain.selection import SelectionPair
from budgetreport.domain.value import DecimalValue, DecimalValueChange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportRow:
    """Aggregated values of one (budget, account) pair.

    ``change.old`` is the target, ``change.new`` the actual value and
    ``change.diff`` is actual minus target.
    """

    budget: Budget
    account: Account
    change: DecimalValueChange

    @property
    def target(self) -> DecimalValue:
        return self.change.old

    @property
    def actual(self) -> DecimalValue:
        return self.change.new

    @property
    def difference(self) -> DecimalValue:
        return self.change.diff


@dataclass
class AggregationResult:
    """Rows in selection order plus warnings for skipped pairs."""

    rows: list[ReportRow] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)


class ValueAggregator:
    """Computes actual, target and difference values for selected pairs."""

    def __init__(self, db: Database):
        """Initialize value aggregator.

        Args:
            db: Database instance (read only)
        """
        self.db = db

    def aggregate(self, pairs: Sequence[SelectionPair]) -> AggregationResult:
        """Aggregate values for every pair, in the order given.

        Pairs referencing an account that no longer exists are skipped and a
        warning is recorded. A missing budget is an error.

        Args:
            pairs: Resolved selection pairs

        Returns:
            AggregationResult with one row per pair that could be resolved

        Raises:
            NotFoundError: If a selected budget does not exist
        """
        result = AggregationResult()
        budgets: dict[int, Budget] = {}
        accounts: dict[int, Optional[Account]] = {}
        warned: set[int] = set()

        for pair in pairs:
            budget = budgets.get(pair.budget_id)
            if budget is None:
                budget = self.db.get_budget(pair.budget_id)
                if budget is None:
                    raise NotFoundError(budget_not_found(pair.budget_id))
                budgets[pair.budget_id] = budget
                result.budgets.append(budget)

            if pair.account_id not in accounts:
                accounts[pair.account_id] = self.db.get_account(pair.account_id)
            account = accounts[pair.account_id]
            if account is None:
                if pair.account_id not in warned:
                    message = f"{account_not_found(pair.account_id)}; skipped in report"
                    logger.warning(message)
                    result.warnings.append(message)
                    warned.add(pair.account_id)
                continue

            result.rows.append(
                ReportRow(
                    budget=budget,
                    account=account,
                    change=self.compute_change(budget, account),
                )
            )

        logger.debug("Aggregated %d rows from %d pairs", len(result.rows), len(pairs))
        return result

    def compute_change(self, budget: Budget, account: Account) -> DecimalValueChange:
        """Compute the target -> actual change for one account in one budget."""
        actual = self.get_actual_value(budget, account)
        target = self.get_target_value(budget, account)
        return DecimalValueChange.between(old=target, new=actual)

    def get_actual_value(self, budget: Budget, account: Account) -> DecimalValue:
        """Sum of the account's postings within the budget period."""
        return self.db.sum_postings(account.id, budget.start_date, budget.end_date)

    def get_target_value(self, budget: Budget, account: Account) -> DecimalValue:
        """Budget target for the account, zero when none is set."""
        target = self.db.get_budget_target(budget.id, account.id)
        return target if target is not None else DecimalValue.zero()

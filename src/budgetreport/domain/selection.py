"""Selection of (budget, account) pairs for a report."""

from typing import Iterable, NamedTuple, TypeVar

from budgetreport.domain.errors import EmptySelection, empty_selection

T = TypeVar("T")


class SelectionPair(NamedTuple):
    """One (budget, account) cell of a report."""

    budget_id: int
    account_id: int


def dedupe(ids: Iterable[T]) -> list[T]:
    """Remove duplicate IDs, keeping the first occurrence of each."""
    return list(dict.fromkeys(ids))


class SelectionResolver:
    """Resolves selected budgets and accounts into ordered report pairs."""

    def resolve(self, budget_ids: Iterable[int], account_ids: Iterable[int]) -> list[SelectionPair]:
        """Build the ordered cross product of budgets and accounts.

        Budgets form the outer loop and accounts the inner loop, both in the
        order supplied. Duplicate IDs are dropped before pairing.

        Args:
            budget_ids: Selected budget IDs
            account_ids: Selected account IDs

        Returns:
            List of pairs, ``len(budgets) * len(accounts)`` long

        Raises:
            EmptySelection: If either selection is empty
        """
        budgets = dedupe(budget_ids)
        accounts = dedupe(account_ids)

        if not budgets:
            raise EmptySelection(empty_selection("budget"))
        if not accounts:
            raise EmptySelection(empty_selection("account"))

        return [
            SelectionPair(budget_id=budget_id, account_id=account_id)
            for budget_id in budgets
            for account_id in accounts
        ]

"""Posting domain service."""

from datetime import date
from typing import Optional

from budgetreport.database.base import Database
from budgetreport.domain.entities import Posting as PostingEntity
from budgetreport.domain.errors import NotFoundError, account_not_found
from budgetreport.domain.value import DecimalValue


class PostingService:
    """Service for recording and querying postings."""

    def __init__(self, db: Database):
        self.db = db

    def record_posting(
        self,
        account_id: int,
        posting_date: date,
        amount: DecimalValue,
        description: Optional[str] = None,
    ) -> int:
        """Record a posting against an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        return self.db.create_posting(
            account_id=account_id,
            date=posting_date,
            amount=DecimalValue(amount),
            description=description,
        )

    def list_postings(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[PostingEntity]:
        """List postings, oldest first."""
        return self.db.list_postings(
            account_id=account_id, start_date=start_date, end_date=end_date
        )

    def get_balance(self, account_id: int, start_date: date, end_date: date) -> DecimalValue:
        """Exact sum of the account's postings in the period."""
        return self.db.sum_postings(account_id, start_date, end_date)

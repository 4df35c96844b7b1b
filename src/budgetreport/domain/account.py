"""Account and account group domain service."""

from typing import Optional
from budgetreport.database.base import Database
from budgetreport.domain.entities import Account as AccountEntity, AccountGroup as AccountGroupEntity
from budgetreport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_group_not_found,
    account_not_found,
    duplicate_name,
    still_in_use,
)


class AccountService:
    """Service for managing accounts and account groups."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account_group(self, name: str, description: str = "") -> int:
        """Create a new account group.

        Args:
            name: Group name
            description: Optional description

        Returns:
            Account group ID

        Raises:
            ValidationError: If name is empty
            ConflictError: If a group with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account group name must not be empty")

        for group in self.db.list_account_groups():
            if group.name == name:
                raise ConflictError(duplicate_name("Account group", name))

        return self.db.create_account_group(name=name, description=description)

    def get_account_group(self, group_id: int) -> Optional[AccountGroupEntity]:
        """Get account group by ID."""
        return self.db.get_account_group(group_id)

    def list_account_groups(self) -> list[AccountGroupEntity]:
        """List all account groups."""
        return self.db.list_account_groups()

    def delete_account_group(self, group_id: int) -> None:
        """Delete an account group.

        Args:
            group_id: Account group ID to delete

        Raises:
            NotFoundError: If the group does not exist
            ConflictError: If accounts still belong to the group
        """
        if self.db.get_account_group(group_id) is None:
            raise NotFoundError(account_group_not_found(group_id))

        accounts = self.db.list_accounts(group_id=group_id)
        if accounts:
            raise ConflictError(
                still_in_use("Account group", group_id, {"account": len(accounts)})
            )

        self.db.delete_account_group(group_id)

    def create_account(
        self,
        name: str,
        group_id: int,
        description: Optional[str] = None,
        code: Optional[str] = None,
    ) -> int:
        """Create a new account in an existing group.

        Args:
            name: Account name
            group_id: Owning account group ID
            description: Optional description
            code: Optional display code

        Returns:
            Account ID

        Raises:
            ValidationError: If name is empty
            NotFoundError: If the group does not exist
            ConflictError: If an account with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name must not be empty")

        if self.db.get_account_group(group_id) is None:
            raise NotFoundError(account_group_not_found(group_id))

        # Check if account with same name exists
        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_name("Account", name))

        return self.db.create_account(
            name=name, group_id=group_id, description=description, code=code
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, group_id: Optional[int] = None) -> list[AccountEntity]:
        """List accounts, optionally only those of one group."""
        return self.db.list_accounts(group_id=group_id)

    def find_account_by_code(self, code: str) -> Optional[AccountEntity]:
        """Get the account with the given display code, if any."""
        code = code.strip()
        for acc in self.db.list_accounts():
            if acc.code == code:
                return acc
        return None

    def delete_account(self, account_id: int, force: bool = False) -> None:
        """Delete an account.

        Without ``force`` the account must have no postings and no budget
        targets. With ``force`` those are deleted along with it; reports that
        still select the account then skip it with a warning.

        Args:
            account_id: Account ID to delete
            force: Also delete the account's postings and targets

        Raises:
            NotFoundError: If the account does not exist
            ConflictError: If the account is still in use and force is not set
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        dependents = self.db.count_account_dependents(account_id)
        if any(dependents.values()) and not force:
            raise ConflictError(still_in_use("Account", account_id, dependents))

        self.db.delete_account(account_id)

    def group_names(self) -> dict[int, str]:
        """Map of account group ID to group name."""
        return {group.id: group.name for group in self.db.list_account_groups()}

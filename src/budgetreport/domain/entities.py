"""Domain model entities for budgetreport.

These are pure data classes representing business concepts, independent of
database schema. The report engine only ever sees these read-only snapshots.
"""

from dataclasses import dataclass, fields
from datetime import datetime, date
from enum import Enum
from typing import Iterable, Optional

from budgetreport.domain.errors import (
    UnsupportedExportType,
    ValidationError,
    invalid_period,
    unsupported_export_type,
)
from budgetreport.domain.value import DecimalValue


@dataclass(frozen=True)
class AccountGroup:
    """Named grouping of accounts."""

    id: int
    name: str
    description: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Account domain entity. Belongs to exactly one account group."""

    id: int
    name: str
    group_id: int
    description: Optional[str]
    code: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Budget:
    """Budget over a closed date period."""

    id: int
    name: str
    description: str
    start_date: date
    end_date: date
    created_at: datetime

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValidationError(invalid_period(self.start_date, self.end_date))


@dataclass(frozen=True)
class BudgetTarget:
    """Target allocation of a budget for one account."""

    budget_id: int
    account_id: int
    target: DecimalValue


@dataclass(frozen=True)
class Posting:
    """Recorded posting against an account."""

    id: int
    account_id: int
    date: date
    amount: DecimalValue
    description: Optional[str]
    created_at: datetime


# Option names as accepted on the command line and in templates
VISIBILITY_OPTION_NAMES = {
    "actual": "actual_values_enabled",
    "target": "target_values_enabled",
    "difference": "difference_values_enabled",
    "account-descriptions": "account_descriptions_enabled",
    "budget-descriptions": "budget_descriptions_enabled",
}


@dataclass(frozen=True)
class VisibilityOptions:
    """Which fields a rendered report shows."""

    actual_values_enabled: bool = False
    target_values_enabled: bool = False
    difference_values_enabled: bool = False
    account_descriptions_enabled: bool = False
    budget_descriptions_enabled: bool = False

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "VisibilityOptions":
        """Build options with the named fields enabled.

        Args:
            names: Option names such as ``"actual"`` or ``"account-descriptions"``

        Raises:
            ValidationError: If a name is not a recognized option
        """
        enabled = {}
        for name in names:
            key = VISIBILITY_OPTION_NAMES.get(name.strip().lower())
            if key is None:
                known = ", ".join(VISIBILITY_OPTION_NAMES)
                raise ValidationError(f"Unknown report option '{name}'. Known options: {known}")
            enabled[key] = True
        return cls(**enabled)

    def enabled_names(self) -> list[str]:
        """Return the option names that are enabled, in canonical order."""
        return [name for name, key in VISIBILITY_OPTION_NAMES.items() if getattr(self, key)]

    @property
    def any_values_enabled(self) -> bool:
        return (
            self.actual_values_enabled
            or self.target_values_enabled
            or self.difference_values_enabled
        )

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ReportTemplate:
    """Report template: default visibility options and an optional layout body."""

    id: int
    name: str
    options: VisibilityOptions
    body: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Report:
    """Stored rendered report (PDF bytes)."""

    id: int
    template_id: int
    data: bytes
    created_at: datetime


class ExportType(Enum):
    """Output format of a report."""

    HTML = "html"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: "str | ExportType") -> "ExportType":
        """Parse an export type.

        Raises:
            UnsupportedExportType: If value is not ``html`` or ``pdf``
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        raise UnsupportedExportType(unsupported_export_type(value))

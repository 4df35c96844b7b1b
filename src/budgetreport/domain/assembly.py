"""Report document model and its assembly from aggregated rows.

The document model is renderer-agnostic: sections per budget, rows per
account, and only the fields the visibility options ask for. A disabled field
is absent from the row, never zero-filled.
"""

from dataclasses import dataclass
from datetime import date, datetime, UTC
from typing import Optional, Union

from budgetreport.domain.aggregation import AggregationResult, ReportRow
from budgetreport.domain.entities import VisibilityOptions
from budgetreport.domain.value import DecimalValue

ACTUAL = "actual"
TARGET = "target"
DIFFERENCE = "difference"
DESCRIPTION = "description"

FIELD_LABELS = {
    ACTUAL: "Actual",
    TARGET: "Target",
    DIFFERENCE: "Difference",
    DESCRIPTION: "Description",
}


@dataclass(frozen=True)
class DocumentField:
    """Named value shown in a row or section."""

    key: str
    label: str
    value: Union[DecimalValue, str]

    @property
    def is_amount(self) -> bool:
        return isinstance(self.value, DecimalValue)


@dataclass(frozen=True)
class DocumentRow:
    """One account line within a budget section."""

    account_id: int
    account_name: str
    account_code: str
    group_name: str
    fields: tuple[DocumentField, ...]

    def field(self, key: str) -> Optional[DocumentField]:
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def has_field(self, key: str) -> bool:
        return self.field(key) is not None


@dataclass(frozen=True)
class ReportSection:
    """All rows of one budget."""

    budget_id: int
    budget_name: str
    start_date: date
    end_date: date
    description: Optional[DocumentField]
    rows: tuple[DocumentRow, ...]
    totals: tuple[DocumentField, ...]

    def total(self, key: str) -> Optional[DocumentField]:
        for f in self.totals:
            if f.key == key:
                return f
        return None


@dataclass(frozen=True)
class ReportDocument:
    """Complete report ready for rendering."""

    title: str
    options: VisibilityOptions
    value_columns: tuple[str, ...]
    sections: tuple[ReportSection, ...]
    warnings: tuple[str, ...]
    generated_at: datetime

    @property
    def row_count(self) -> int:
        return sum(len(section.rows) for section in self.sections)


def value_columns(options: VisibilityOptions) -> tuple[str, ...]:
    """Return the enabled value field keys in display order."""
    columns = []
    if options.actual_values_enabled:
        columns.append(ACTUAL)
    if options.target_values_enabled:
        columns.append(TARGET)
    if options.difference_values_enabled:
        columns.append(DIFFERENCE)
    return tuple(columns)


class ReportAssembler:
    """Builds the document model from aggregated rows and visibility options."""

    def assemble(
        self,
        aggregation: AggregationResult,
        options: VisibilityOptions,
        title: str = "Budget Report",
        group_names: Optional[dict[int, str]] = None,
        generated_at: Optional[datetime] = None,
    ) -> ReportDocument:
        """Assemble a report document.

        Args:
            aggregation: Rows and budgets in selection order
            options: Effective visibility options
            title: Document title
            group_names: Optional map of account group ID to group name
            generated_at: Timestamp shown on the report (defaults to now)

        Returns:
            ReportDocument with one section per budget
        """
        group_names = group_names or {}
        columns = value_columns(options)

        rows_by_budget: dict[int, list[ReportRow]] = {b.id: [] for b in aggregation.budgets}
        for row in aggregation.rows:
            rows_by_budget.setdefault(row.budget.id, []).append(row)

        sections = []
        for budget in aggregation.budgets:
            budget_rows = rows_by_budget[budget.id]
            description = None
            if options.budget_descriptions_enabled:
                description = DocumentField(
                    DESCRIPTION, FIELD_LABELS[DESCRIPTION], budget.description or ""
                )
            sections.append(
                ReportSection(
                    budget_id=budget.id,
                    budget_name=budget.name,
                    start_date=budget.start_date,
                    end_date=budget.end_date,
                    description=description,
                    rows=tuple(
                        self.build_row(row, options, columns, group_names) for row in budget_rows
                    ),
                    totals=self.build_totals(budget_rows, columns),
                )
            )

        return ReportDocument(
            title=title,
            options=options,
            value_columns=columns,
            sections=tuple(sections),
            warnings=tuple(aggregation.warnings),
            generated_at=generated_at or datetime.now(UTC),
        )

    def build_row(
        self,
        row: ReportRow,
        options: VisibilityOptions,
        columns: tuple[str, ...],
        group_names: dict[int, str],
    ) -> DocumentRow:
        """Build a document row holding only the enabled fields."""
        fields = [DocumentField(key, FIELD_LABELS[key], self._value_of(row, key)) for key in columns]
        if options.account_descriptions_enabled:
            fields.append(
                DocumentField(DESCRIPTION, FIELD_LABELS[DESCRIPTION], row.account.description or "")
            )
        return DocumentRow(
            account_id=row.account.id,
            account_name=row.account.name,
            account_code=row.account.code or "",
            group_name=group_names.get(row.account.group_id, ""),
            fields=tuple(fields),
        )

    def build_totals(
        self, rows: list[ReportRow], columns: tuple[str, ...]
    ) -> tuple[DocumentField, ...]:
        """Exact per-column sums over a section's rows."""
        return tuple(
            DocumentField(
                key,
                FIELD_LABELS[key],
                DecimalValue.sum(self._value_of(row, key) for row in rows),
            )
            for key in columns
        )

    @staticmethod
    def _value_of(row: ReportRow, key: str) -> DecimalValue:
        if key == ACTUAL:
            return row.actual
        if key == TARGET:
            return row.target
        return row.difference

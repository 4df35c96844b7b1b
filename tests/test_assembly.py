"""Tests for report document assembly."""

from datetime import date, datetime, UTC

import pytest

from budgetreport.domain.aggregation import AggregationResult, ReportRow
from budgetreport.domain.assembly import (
    ACTUAL,
    DESCRIPTION,
    DIFFERENCE,
    TARGET,
    ReportAssembler,
    value_columns,
)
from budgetreport.domain.entities import Account, Budget, VisibilityOptions
from budgetreport.domain.value import DecimalValue, DecimalValueChange

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def make_budget(budget_id, name, description="Budget description"):
    return Budget(
        id=budget_id,
        name=name,
        description=description,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        created_at=NOW,
    )


def make_account(account_id, name, description=None, code=None, group_id=1):
    return Account(
        id=account_id,
        name=name,
        group_id=group_id,
        description=description,
        code=code,
        created_at=NOW,
    )


def make_row(budget, account, target, actual):
    return ReportRow(
        budget=budget,
        account=account,
        change=DecimalValueChange.between(DecimalValue(target), DecimalValue(actual)),
    )


@pytest.fixture
def aggregation():
    b1 = make_budget(1, "B1")
    a1 = make_account(1, "A1", description="Office supplies", code="4100")
    a2 = make_account(2, "A2")
    return AggregationResult(
        rows=[make_row(b1, a1, "80.00", "100.00"), make_row(b1, a2, "50.00", "50.00")],
        warnings=[],
        budgets=[b1],
    )


ALL_VALUES = VisibilityOptions(
    actual_values_enabled=True,
    target_values_enabled=True,
    difference_values_enabled=True,
)


def test_all_values_scenario(aggregation):
    document = ReportAssembler().assemble(aggregation, ALL_VALUES, generated_at=NOW)

    assert len(document.sections) == 1
    rows = document.sections[0].rows
    assert len(rows) == 2

    a1, a2 = rows
    assert a1.account_name == "A1"
    assert a1.field(ACTUAL).value.to_text() == "100.00"
    assert a1.field(TARGET).value.to_text() == "80.00"
    assert a1.field(DIFFERENCE).value.to_text() == "20.00"
    assert a2.field(ACTUAL).value.to_text() == "50.00"
    assert a2.field(TARGET).value.to_text() == "50.00"
    assert a2.field(DIFFERENCE).value.to_text() == "0.00"


def test_all_flags_false_rows_have_no_fields(aggregation):
    document = ReportAssembler().assemble(aggregation, VisibilityOptions(), generated_at=NOW)

    section = document.sections[0]
    assert section.description is None
    assert section.totals == ()
    assert document.value_columns == ()
    for row in section.rows:
        assert row.fields == ()
        assert not row.has_field(DESCRIPTION)


def test_only_enabled_fields_present(aggregation):
    options = VisibilityOptions(difference_values_enabled=True)
    row = ReportAssembler().assemble(aggregation, options).sections[0].rows[0]

    assert [f.key for f in row.fields] == [DIFFERENCE]
    assert row.field(ACTUAL) is None
    assert row.field(TARGET) is None


def test_descriptions(aggregation):
    options = VisibilityOptions(account_descriptions_enabled=True, budget_descriptions_enabled=True)
    section = ReportAssembler().assemble(aggregation, options).sections[0]

    assert section.description.value == "Budget description"
    a1, a2 = section.rows
    assert a1.field(DESCRIPTION).value == "Office supplies"
    assert not a1.field(DESCRIPTION).is_amount
    # Requested but empty description is present as empty text
    assert a2.field(DESCRIPTION).value == ""


def test_totals_are_exact_sums(aggregation):
    section = ReportAssembler().assemble(aggregation, ALL_VALUES).sections[0]

    assert section.total(ACTUAL).value.to_text() == "150.00"
    assert section.total(TARGET).value.to_text() == "130.00"
    assert section.total(DIFFERENCE).value.to_text() == "20.00"


def test_sections_per_budget_in_order():
    b1, b2 = make_budget(1, "B1"), make_budget(2, "B2")
    a1 = make_account(1, "A1")
    aggregation = AggregationResult(
        rows=[make_row(b2, a1, "1", "2"), make_row(b1, a1, "3", "4")],
        budgets=[b2, b1],
    )

    document = ReportAssembler().assemble(aggregation, ALL_VALUES)

    assert [s.budget_name for s in document.sections] == ["B2", "B1"]
    assert document.row_count == 2


def test_budget_without_rows_still_has_section():
    b1 = make_budget(1, "B1")
    aggregation = AggregationResult(rows=[], warnings=["Account 7 not found; skipped in report"], budgets=[b1])

    document = ReportAssembler().assemble(aggregation, ALL_VALUES)

    assert len(document.sections) == 1
    assert document.sections[0].rows == ()
    assert document.sections[0].total(ACTUAL).value.is_zero()
    assert document.warnings == ("Account 7 not found; skipped in report",)


def test_group_names_and_codes(aggregation):
    document = ReportAssembler().assemble(
        aggregation, VisibilityOptions(), title="Overview", group_names={1: "Operations"}
    )

    row = document.sections[0].rows[0]
    assert document.title == "Overview"
    assert row.group_name == "Operations"
    assert row.account_code == "4100"
    assert document.sections[0].rows[1].account_code == ""


def test_value_columns_order():
    options = VisibilityOptions(difference_values_enabled=True, actual_values_enabled=True)
    assert value_columns(options) == (ACTUAL, DIFFERENCE)

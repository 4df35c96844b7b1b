"""Tests for actual/target aggregation."""

import logging
from datetime import date

import pytest

from budgetreport.domain.aggregation import ValueAggregator
from budgetreport.domain.errors import NotFoundError
from budgetreport.domain.selection import SelectionPair, SelectionResolver
from budgetreport.domain.value import DecimalValue


def test_actual_is_sum_of_postings_in_period(temp_db, sample_data):
    """Postings on both period boundaries count, later ones do not."""
    aggregator = ValueAggregator(temp_db)
    budget = temp_db.get_budget(sample_data["B1"])
    account = temp_db.get_account(sample_data["A1"])

    assert aggregator.get_actual_value(budget, account) == DecimalValue("100.00")


def test_target_defaults_to_zero(temp_db, account_service, budget_service):
    group_id = account_service.create_account_group("G")
    account_id = account_service.create_account("Unbudgeted", group_id=group_id)
    budget_id = budget_service.create_budget("B", date(2024, 1, 1), date(2024, 1, 31))

    aggregator = ValueAggregator(temp_db)
    target = aggregator.get_target_value(
        temp_db.get_budget(budget_id), temp_db.get_account(account_id)
    )
    assert target.is_zero()


def test_rows_follow_pair_order(temp_db, sample_data):
    pairs = SelectionResolver().resolve([sample_data["B1"]], [sample_data["A2"], sample_data["A1"]])
    result = ValueAggregator(temp_db).aggregate(pairs)

    assert [row.account.name for row in result.rows] == ["A2", "A1"]
    assert [b.name for b in result.budgets] == ["B1"]
    assert result.warnings == []


def test_difference_is_actual_minus_target(temp_db, sample_data):
    pairs = SelectionResolver().resolve([sample_data["B1"]], [sample_data["A1"], sample_data["A2"]])
    rows = ValueAggregator(temp_db).aggregate(pairs).rows

    a1, a2 = rows
    assert a1.actual.to_text() == "100.00"
    assert a1.target.to_text() == "80.00"
    assert a1.difference.to_text() == "20.00"
    assert a2.difference.to_text() == "0.00"
    for row in rows:
        assert row.change.diff == row.change.new - row.change.old


def test_missing_account_is_skipped_with_warning(temp_db, sample_data, caplog):
    missing_id = 9999
    pairs = SelectionResolver().resolve([sample_data["B1"]], [sample_data["A1"], missing_id])

    with caplog.at_level(logging.WARNING, logger="budgetreport.domain.aggregation"):
        result = ValueAggregator(temp_db).aggregate(pairs)

    assert len(result.rows) == 1
    assert result.rows[0].account.id == sample_data["A1"]
    assert len(result.warnings) == 1
    assert "9999" in result.warnings[0]
    assert "9999" in caplog.text


def test_missing_account_warned_once_across_budgets(temp_db, sample_data, budget_service):
    b2 = budget_service.create_budget("B2", date(2025, 1, 1), date(2025, 12, 31))
    pairs = SelectionResolver().resolve([sample_data["B1"], b2], [sample_data["A1"], 4242])

    result = ValueAggregator(temp_db).aggregate(pairs)

    assert len(result.rows) == 2
    assert len(result.warnings) == 1
    assert result.rows[1].actual == DecimalValue("999.00")


def test_missing_budget_raises(temp_db, sample_data):
    pairs = [SelectionPair(12345, sample_data["A1"])]
    with pytest.raises(NotFoundError, match="Budget 12345 not found"):
        ValueAggregator(temp_db).aggregate(pairs)

"""Parsing helpers shared by the CLI and the services."""

from budgetreport.utils.amount_parser import parse_amount
from budgetreport.utils.date_parser import get_period, parse_date
from budgetreport.utils.entity_resolver import resolve_entity

__all__ = ["get_period", "parse_amount", "parse_date", "resolve_entity"]

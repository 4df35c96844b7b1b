"""Mapper functions to convert between domain models and SQLAlchemy models.

Stored monetary text is parsed back through ``DecimalValue.from_text`` here,
so corrupt amounts surface as ``InvalidDecimalFormat`` at the boundary.
"""

from budgetreport.domain import entities as domain
from budgetreport.domain.value import DecimalValue
from budgetreport.database.models import (
    Account as ORMAccount,
    AccountGroup as ORMAccountGroup,
    Budget as ORMBudget,
    BudgetTarget as ORMBudgetTarget,
    Posting as ORMPosting,
    Report as ORMReport,
    ReportTemplate as ORMReportTemplate,
)


def account_group_to_domain(orm_group: ORMAccountGroup) -> domain.AccountGroup:
    """Convert SQLAlchemy AccountGroup model to domain AccountGroup entity."""
    return domain.AccountGroup(
        id=orm_group.id,
        name=orm_group.name,
        description=orm_group.description or "",
        created_at=orm_group.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        group_id=orm_account.group_id,
        description=orm_account.description,
        code=orm_account.code,
        created_at=orm_account.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        name=orm_budget.name,
        description=orm_budget.description or "",
        start_date=orm_budget.start_date,
        end_date=orm_budget.end_date,
        created_at=orm_budget.created_at,
    )


def budget_target_to_domain(orm_target: ORMBudgetTarget) -> domain.BudgetTarget:
    """Convert SQLAlchemy BudgetTarget model to domain BudgetTarget entity."""
    return domain.BudgetTarget(
        budget_id=orm_target.budget_id,
        account_id=orm_target.account_id,
        target=DecimalValue.from_text(orm_target.target),
    )


def posting_to_domain(orm_posting: ORMPosting) -> domain.Posting:
    """Convert SQLAlchemy Posting model to domain Posting entity."""
    return domain.Posting(
        id=orm_posting.id,
        account_id=orm_posting.account_id,
        date=orm_posting.date,
        amount=DecimalValue.from_text(orm_posting.amount),
        description=orm_posting.description,
        created_at=orm_posting.created_at,
    )


def report_template_to_domain(orm_template: ORMReportTemplate) -> domain.ReportTemplate:
    """Convert SQLAlchemy ReportTemplate model to domain ReportTemplate entity."""
    return domain.ReportTemplate(
        id=orm_template.id,
        name=orm_template.name,
        options=domain.VisibilityOptions(
            actual_values_enabled=bool(orm_template.actual_values_enabled),
            target_values_enabled=bool(orm_template.target_values_enabled),
            difference_values_enabled=bool(orm_template.difference_values_enabled),
            account_descriptions_enabled=bool(orm_template.account_descriptions_enabled),
            budget_descriptions_enabled=bool(orm_template.budget_descriptions_enabled),
        ),
        body=orm_template.body,
        created_at=orm_template.created_at,
    )


def report_to_domain(orm_report: ORMReport) -> domain.Report:
    """Convert SQLAlchemy Report model to domain Report entity."""
    return domain.Report(
        id=orm_report.id,
        template_id=orm_report.template_id,
        data=bytes(orm_report.data),
        created_at=orm_report.created_at,
    )

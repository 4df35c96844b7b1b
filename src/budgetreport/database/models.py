"""SQLAlchemy models for budgetreport database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    LargeBinary,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class AccountGroup(Base):
    """Account group model."""

    __tablename__ = "account_groups"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, default="", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="group")


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    group_id = Column(Integer, ForeignKey("account_groups.id"), nullable=False)
    description = Column(String, nullable=True)
    code = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    group = relationship("AccountGroup", back_populates="accounts")
    postings = relationship("Posting", back_populates="account", cascade="all, delete-orphan")


class Budget(Base):
    """Budget model."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, default="", nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    targets = relationship("BudgetTarget", back_populates="budget", cascade="all, delete-orphan")


class BudgetTarget(Base):
    """Per-account target of a budget.

    Amounts are stored as canonical decimal text so they never pass through
    floating point on backends without a native decimal type.
    """

    __tablename__ = "budget_targets"

    id = Column(Integer, primary_key=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    target = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("budget_id", "account_id", name="uq_budget_account"),)

    # Relationships
    budget = relationship("Budget", back_populates="targets")


class Posting(Base):
    """Posting model. Amount stored as canonical decimal text."""

    __tablename__ = "postings"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(String, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="postings")


class ReportTemplate(Base):
    """Report template model."""

    __tablename__ = "report_templates"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    body = Column(Text, nullable=True)
    actual_values_enabled = Column(Boolean, default=False, nullable=False)
    target_values_enabled = Column(Boolean, default=False, nullable=False)
    difference_values_enabled = Column(Boolean, default=False, nullable=False)
    account_descriptions_enabled = Column(Boolean, default=False, nullable=False)
    budget_descriptions_enabled = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Report(Base):
    """Stored rendered report."""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True)
    template_id = Column(Integer, ForeignKey("report_templates.id"), nullable=False)
    data = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

"""
db.models - SQLAlchemy ORM declarations.

Tables
------
CLIENTS              - customer master data.
COLLABORATORS        - consultants; SecretField holds a password hash.
PROJECTS             - one per engagement, owned by a client.
TASKS                - work packages inside a project.
COLLABORATOR_RATES   - daily rate of a collaborator on a project.
TIMESHEET_ENTRIES    - days worked, with travel and other expenses.
INVOICES             - billing documents and their payment status.

Attribute names mirror the import file headers one to one, so a
transformed row dict can be written without any renaming.  Date columns
are plain strings: unparseable dates are stored as supplied.
"""

from __future__ import annotations

from sqlalchemy import Column, String, Numeric, Text, ForeignKey
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _money():
    return Column(Numeric(12, 2), default=0)


class Client(Base):
    __tablename__ = "CLIENTS"

    ID         = Column(String(20), primary_key=True)
    Name       = Column(String(200), nullable=False, default="")
    LegalName  = Column(String(200), default="")
    Address    = Column(String(300), default="")
    City       = Column(String(100), default="")
    PostalCode = Column(String(10), default="")
    Province   = Column(String(5), default="")
    TaxID      = Column(String(20), default="")


class Collaborator(Base):
    __tablename__ = "COLLABORATORS"

    ID          = Column(String(20), primary_key=True)
    Name        = Column(String(200), nullable=False, default="")
    Email       = Column(String(200), default="")
    SecretField = Column(String(255), default="")
    Role        = Column(String(50), default="")
    TaxID       = Column(String(20), default="")


class Project(Base):
    __tablename__ = "PROJECTS"

    ID             = Column(String(20), primary_key=True)
    Name           = Column(String(200), nullable=False, default="")
    Description    = Column(Text, default="")
    Type           = Column(String(50), default="")
    ClientID       = Column(String(20), ForeignKey("CLIENTS.ID"), index=True)
    CommissionRate = Column(Numeric(6, 4), default=0)
    CollaboratorID = Column(String(20), ForeignKey("COLLABORATORS.ID"), index=True)
    OpenDate       = Column(String(10))
    Status         = Column(String(50), default="")


class Task(Base):
    __tablename__ = "TASKS"

    ID               = Column(String(20), primary_key=True)
    Name             = Column(String(200), nullable=False, default="")
    Description      = Column(Text, default="")
    ProjectID        = Column(String(20), ForeignKey("PROJECTS.ID"), index=True)
    CollaboratorID   = Column(String(20), ForeignKey("COLLABORATORS.ID"), index=True)
    Type             = Column(String(50), default="")
    OpenDate         = Column(String(10))
    Status           = Column(String(50), default="")
    PlannedDays      = Column(String(20), default="")
    ExpensesIncluded = _money()
    StdExpenseValue  = _money()
    DayValue         = _money()


class CollaboratorRate(Base):
    __tablename__ = "COLLABORATOR_RATES"

    ID               = Column(String(20), primary_key=True)
    CollaboratorID   = Column(String(20), ForeignKey("COLLABORATORS.ID"), index=True)
    ProjectID        = Column(String(20), ForeignKey("PROJECTS.ID"), index=True)
    DailyRate        = _money()
    ExpensesIncluded = _money()
    EffectiveFrom    = Column(String(10))


class TimesheetEntry(Base):
    __tablename__ = "TIMESHEET_ENTRIES"

    ID             = Column(String(20), primary_key=True)
    Date           = Column(String(10))
    CollaboratorID = Column(String(20), ForeignKey("COLLABORATORS.ID"), index=True)
    TaskID         = Column(String(20), ForeignKey("TASKS.ID"), index=True)
    Type           = Column(String(20), default="No")
    Location       = Column(String(20), default="No")
    Days           = Column(String(20), default="")
    TravelExpenses = _money()
    Lodging        = Column(String(20), default="")
    OtherCosts     = _money()
    Notes          = Column(Text, default="")


class Invoice(Base):
    __tablename__ = "INVOICES"

    ID             = Column(String(20), primary_key=True)
    Date           = Column(String(10))
    ClientID       = Column(String(20), ForeignKey("CLIENTS.ID"), index=True)
    Type           = Column(String(20), default="")
    Number         = Column(String(20), default="")
    ProjectID      = Column(String(20), ForeignKey("PROJECTS.ID"), index=True)
    BilledDays     = _money()
    BilledExpenses = _money()
    BilledTotal    = _money()
    Notes          = Column(Text, default="")
    OrderReference = Column(String(100), default="")
    OrderDate      = Column(String(10))
    PaymentTerms   = Column(String(100), default="")
    PaymentDueDate = Column(String(10))
    PaymentDate    = Column(String(10))
    PaidAmount     = _money()

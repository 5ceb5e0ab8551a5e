"""
import_engine.table_map - The seven importable tables and their columns.

The first column of every table is its primary key.  IMPORT_ORDER lists
tables so that none comes before a table it references by foreign key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from import_engine.transforms import TransformKind


@dataclass(frozen=True)
class TableSchema:
    name: str
    columns: tuple[str, ...]
    field_transforms: Mapping[str, TransformKind] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def __post_init__(self):
        if not self.columns:
            raise ValueError(f"Table {self.name} has no columns")

    @property
    def primary_key(self) -> str:
        return self.columns[0]

    @property
    def data_columns(self) -> tuple[str, ...]:
        return self.columns[1:]


def _table(name: str, columns: list[str], transforms: Optional[dict] = None) -> TableSchema:
    return TableSchema(name, tuple(columns), MappingProxyType(dict(transforms or {})))


TABLES: dict[str, TableSchema] = {t.name: t for t in (
    _table("CLIENTS", [
        "ID", "Name", "LegalName", "Address", "City", "PostalCode", "Province", "TaxID",
    ]),
    _table("COLLABORATORS", [
        "ID", "Name", "Email", "SecretField", "Role", "TaxID",
    ], {
        "SecretField": TransformKind.SECRET_HASH,
    }),
    _table("PROJECTS", [
        "ID", "Name", "Description", "Type", "ClientID", "CommissionRate",
        "CollaboratorID", "OpenDate", "Status",
    ]),
    _table("TASKS", [
        "ID", "Name", "Description", "ProjectID", "CollaboratorID", "Type",
        "OpenDate", "Status", "PlannedDays", "ExpensesIncluded",
        "StdExpenseValue", "DayValue",
    ]),
    _table("COLLABORATOR_RATES", [
        "ID", "CollaboratorID", "ProjectID", "DailyRate", "ExpensesIncluded",
        "EffectiveFrom",
    ]),
    _table("TIMESHEET_ENTRIES", [
        "ID", "Date", "CollaboratorID", "TaskID", "Type", "Location", "Days",
        "TravelExpenses", "Lodging", "OtherCosts", "Notes",
    ], {
        "Location": TransformKind.ENUM_DEFAULT,
        "Type":     TransformKind.ENUM_DEFAULT,
    }),
    _table("INVOICES", [
        "ID", "Date", "ClientID", "Type", "Number", "ProjectID", "BilledDays",
        "BilledExpenses", "BilledTotal", "Notes", "OrderReference", "OrderDate",
        "PaymentTerms", "PaymentDueDate", "PaymentDate", "PaidAmount",
    ], {
        "OrderDate":   TransformKind.DATE_NULLIFY,
        "PaymentDate": TransformKind.DATE_NULLIFY,
    }),
)}

IMPORT_ORDER: tuple[str, ...] = (
    "CLIENTS",
    "COLLABORATORS",
    "PROJECTS",
    "TASKS",
    "COLLABORATOR_RATES",
    "TIMESHEET_ENTRIES",
    "INVOICES",
)


# ── Public helpers ────────────────────────────────────────────────────

def get_schema(table_name: str) -> Optional[TableSchema]:
    return TABLES.get(table_name)


def headers_for(table_name: str) -> Optional[list[str]]:
    """Expected columns for a table, primary key first, or None if unknown."""
    schema = TABLES.get(table_name)
    return list(schema.columns) if schema else None


def transform_for(table_name: str, column: str) -> TransformKind:
    """Column-specific transform, IDENTITY when none is registered."""
    schema = TABLES.get(table_name)
    if schema is None:
        return TransformKind.IDENTITY
    return schema.field_transforms.get(column, TransformKind.IDENTITY)

"""
import_engine.headers - Reconcile parsed headers with the expected columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from import_engine.table_map import get_schema


@dataclass
class HeaderCheck:
    fatal: bool
    message: str
    missing_columns: list[str] = field(default_factory=list)   # filled with defaults
    extra_columns: list[str] = field(default_factory=list)     # ignored on write

    @property
    def valid(self) -> bool:
        return not self.fatal


def validate_headers(table_name: str, headers: list[str]) -> HeaderCheck:
    """
    Fatal only for an unknown table or an absent primary key.
    Missing and extra non-key columns are reported but do not stop the import.
    """
    schema = get_schema(table_name)
    if schema is None:
        return HeaderCheck(True, f"Table {table_name} is not supported")

    if schema.primary_key not in headers:
        return HeaderCheck(
            True, f"Primary key column '{schema.primary_key}' missing",
            missing_columns=[c for c in schema.columns if c not in headers],
            extra_columns=[h for h in headers if h not in schema.columns],
        )

    missing = [c for c in schema.columns if c not in headers]
    extra = [h for h in headers if h not in schema.columns]
    return HeaderCheck(False, "Headers valid", missing, extra)

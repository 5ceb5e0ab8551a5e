"""
import_engine.row_processor - Turn one parsed row into column → value.

The transform plan for a file is resolved once from its headers: each
column gets its table-specific TransformKind followed by the kind its
name implies.  Rows are then pushed through the plan without any further
name matching.
"""

from __future__ import annotations

from import_engine.table_map import transform_for
from import_engine.transforms import TransformKind, APPLY, generic_kind


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


Plan = list[tuple[str, tuple[TransformKind, ...]]]


def build_plan(table_name: str, headers: list[str]) -> Plan:
    plan: Plan = []
    for column in headers:
        kinds = tuple(
            k for k in (transform_for(table_name, column), generic_kind(column))
            if k is not TransformKind.IDENTITY
        )
        plan.append((column, kinds))
    return plan


class RowProcessor:
    """Applies a table's transform plan to every row of one file."""

    def __init__(self, table_name: str, headers: list[str]):
        self.table_name = table_name
        self.headers = list(headers)
        self.plan = build_plan(table_name, self.headers)

    def process(self, row: list[str]) -> dict:
        values: dict = {}
        for index, (column, kinds) in enumerate(self.plan):
            value = row[index].strip() if index < len(row) and row[index] is not None else ""
            for kind in kinds:
                value = APPLY[kind](value)
            values[column] = value
        return values


def transform_row(table_name: str, headers: list[str], row: list[str]) -> dict:
    """One-off form of RowProcessor(table_name, headers).process(row)."""
    return RowProcessor(table_name, headers).process(row)

"""
import_engine.writers - Row persistence policies (insert / update / upsert).

A writer turns one transformed row into a single statement against the
target table and reports what happened.  Commit and rollback are the
caller's job, so each row stays its own unit of work.  The one exception
is InsertWriter, which rolls back a failed insert itself before checking
whether the key already exists.
"""

from __future__ import annotations

import enum
import logging

from sqlalchemy import Table, delete, func, insert, select, text, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.engine import get_engine
from db.models import Base
from import_engine.row_processor import RowError
from import_engine.table_map import TableSchema

logger = logging.getLogger(__name__)


class ImportMode(str, enum.Enum):
    INSERT = "insert"
    UPDATE = "update"
    UPSERT = "upsert"

    @classmethod
    def parse(cls, value: "str | ImportMode") -> "ImportMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown import mode '{value}' (expected {allowed})") from None


class WriteOutcome(enum.Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    DUPLICATE = "duplicate"     # insert hit an existing primary key
    UNMATCHED = "unmatched"     # update found no row with that primary key


class RowWriter:
    """Base class: resolves the SQL table and splits key from data columns."""

    mode: ImportMode

    def __init__(self, schema: TableSchema):
        self.schema = schema
        self.table: Table = Base.metadata.tables[schema.name]

    def write(self, session: Session, values: dict) -> WriteOutcome:
        raise NotImplementedError

    # ── Helpers ────────────────────────────────────────────────────────

    def _key(self, values: dict):
        key = values.get(self.schema.primary_key)
        if key is None or str(key).strip() == "":
            raise RowError(f"Empty primary key '{self.schema.primary_key}'")
        return key

    def _columns(self, values: dict) -> dict:
        """Only columns the table knows about; extras are dropped."""
        return {c: values[c] for c in self.schema.columns if c in values}

    def _exists(self, session: Session, key) -> bool:
        pk = self.table.c[self.schema.primary_key]
        count = session.execute(
            select(func.count()).select_from(self.table).where(pk == key)
        ).scalar()
        return bool(count)

    def _insert(self, session: Session, values: dict) -> None:
        session.execute(insert(self.table).values(**self._columns(values)))

    def _update(self, session: Session, key, values: dict) -> int:
        data = {c: v for c, v in self._columns(values).items()
                if c != self.schema.primary_key}
        if not data:
            return 1 if self._exists(session, key) else 0
        pk = self.table.c[self.schema.primary_key]
        result = session.execute(
            update(self.table).where(pk == key).values(**data)
        )
        return result.rowcount


class InsertWriter(RowWriter):
    mode = ImportMode.INSERT

    def write(self, session: Session, values: dict) -> WriteOutcome:
        key = self._key(values)
        try:
            self._insert(session, values)
        except IntegrityError:
            session.rollback()
            if self._exists(session, key):
                return WriteOutcome.DUPLICATE
            raise
        return WriteOutcome.INSERTED


class UpdateWriter(RowWriter):
    mode = ImportMode.UPDATE

    def write(self, session: Session, values: dict) -> WriteOutcome:
        key = self._key(values)
        if self._update(session, key, values) == 0:
            return WriteOutcome.UNMATCHED
        return WriteOutcome.UPDATED


class UpsertWriter(RowWriter):
    mode = ImportMode.UPSERT

    def write(self, session: Session, values: dict) -> WriteOutcome:
        key = self._key(values)
        if self._exists(session, key):
            self._update(session, key, values)
            return WriteOutcome.UPDATED
        self._insert(session, values)
        return WriteOutcome.INSERTED


WRITERS: dict[ImportMode, type[RowWriter]] = {
    ImportMode.INSERT: InsertWriter,
    ImportMode.UPDATE: UpdateWriter,
    ImportMode.UPSERT: UpsertWriter,
}


def writer_for(mode: "ImportMode | str", schema: TableSchema) -> RowWriter:
    return WRITERS[ImportMode.parse(mode)](schema)


# ── Truncation ────────────────────────────────────────────────────────

_FK_CHECKS = {
    # dialect → (disable, enable)
    "sqlite":     ("PRAGMA foreign_keys=OFF", "PRAGMA foreign_keys=ON"),
    "mysql":      ("SET FOREIGN_KEY_CHECKS = 0", "SET FOREIGN_KEY_CHECKS = 1"),
    "mariadb":    ("SET FOREIGN_KEY_CHECKS = 0", "SET FOREIGN_KEY_CHECKS = 1"),
    "postgresql": ("SET session_replication_role = replica",
                   "SET session_replication_role = DEFAULT"),
}


def truncate_table(session: Session, table_name: str) -> int:
    """
    Delete every row of table_name with foreign-key checks switched off.
    Checks are switched back on whatever the outcome.  Not transactional
    with the import that follows.  Returns the number of rows removed.
    """
    table = Base.metadata.tables[table_name]
    session.commit()

    # One connection for the whole sequence: the FK switch is per connection
    with get_engine().connect() as conn:
        disable, enable = _FK_CHECKS.get(conn.dialect.name, (None, None))
        if disable:
            conn.execute(text(disable))
        try:
            removed = conn.execute(delete(table)).rowcount
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            if enable:
                conn.execute(text(enable))
                conn.commit()

    logger.info("Truncated %s (%s rows)", table_name, removed)
    return removed

"""
import_engine.report - Structured result of an import run.

The pipeline records counters and events here instead of printing;
the console command and the JSON API render the same objects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass
class ImportStats:
    processed: int = 0
    inserted: int = 0
    updated: int = 0
    errors: int = 0
    skipped: int = 0

    def merge(self, other: "ImportStats") -> "ImportStats":
        self.processed += other.processed
        self.inserted += other.inserted
        self.updated += other.updated
        self.errors += other.errors
        self.skipped += other.skipped
        return self

    @property
    def success_rate(self) -> float:
        """Share of processed rows that were written, in percent."""
        if not self.processed:
            return 0.0
        return round((self.inserted + self.updated) / self.processed * 100, 2)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ImportEvent:
    level: str                       # info | warning | error
    message: str
    table: Optional[str] = None
    row: Optional[int] = None        # line in the source file, header is line 1

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FileInfo:
    table: str
    path: Path
    size: int
    rows: int
    modified: datetime

    def to_dict(self) -> dict:
        return {
            "table": self.table,
            "file": self.path.name,
            "size": self.size,
            "size_label": format_bytes(self.size),
            "rows": self.rows,
            "modified": self.modified.isoformat(),
        }


@dataclass
class TableReport:
    table: str
    status: str = "pending"          # imported | missing | empty | invalid
    file: Optional[str] = None
    delimiter: Optional[str] = None
    stats: ImportStats = field(default_factory=ImportStats)
    missing_columns: list[str] = field(default_factory=list)
    extra_columns: list[str] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "table": self.table,
            "status": self.status,
            "file": self.file,
            "delimiter": self.delimiter,
            "stats": self.stats.to_dict(),
            "missing_columns": self.missing_columns,
            "extra_columns": self.extra_columns,
            "message": self.message,
        }


@dataclass
class ImportReport:
    mode: str = "insert"
    truncate: bool = False
    stats: ImportStats = field(default_factory=ImportStats)
    tables: dict[str, TableReport] = field(default_factory=dict)
    files: dict[str, FileInfo] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    events: list[ImportEvent] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.stats.errors == 0

    def add_event(self, level: str, message: str,
                  table: Optional[str] = None, row: Optional[int] = None):
        self.events.append(ImportEvent(level, message, table, row))

    def add_table(self, table_report: TableReport):
        self.tables[table_report.table] = table_report
        self.stats.merge(table_report.stats)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "truncate": self.truncate,
            "success": self.success,
            "stats": self.stats.to_dict(),
            "success_rate": self.stats.success_rate,
            "tables": {name: t.to_dict() for name, t in self.tables.items()},
            "files": {name: f.to_dict() for name, f in self.files.items()},
            "missing": self.missing,
            "events": [e.to_dict() for e in self.events],
        }


def format_bytes(size: int) -> str:
    """Human-readable size, e.g. 1536 → '1.50 KB'."""
    units = ["B", "KB", "MB", "GB"]
    power = min(int(math.log(size, 1024)), len(units) - 1) if size > 0 else 0
    return f"{size / 1024 ** power:.2f} {units[power]}"

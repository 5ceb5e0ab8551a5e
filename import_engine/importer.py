"""
import_engine.importer - Top-level orchestrator.

Discovers the input files, then for every table in IMPORT_ORDER runs
csv_parser → headers → row_processor → writers and collects a
structured ImportReport.  A table that cannot be imported never stops
the run; only failures outside the per-table loop propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import config
from db.engine import get_session
from import_engine.csv_parser import read_table, count_rows
from import_engine.headers import validate_headers
from import_engine.report import FileInfo, ImportReport, TableReport
from import_engine.row_processor import RowProcessor, RowError
from import_engine.table_map import IMPORT_ORDER, get_schema
from import_engine.writers import ImportMode, WriteOutcome, truncate_table, writer_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportOptions:
    mode: ImportMode = ImportMode.INSERT
    truncate: bool = False

    @classmethod
    def from_values(cls, mode: "str | ImportMode | None" = None,
                    truncate: "bool | str | None" = None) -> "ImportOptions":
        """Build options from loosely-typed input (query strings, env)."""
        if isinstance(truncate, str):
            truncate = truncate.strip().lower() in ("1", "true", "yes", "on")
        return cls(
            mode=ImportMode.parse(mode or config.IMPORT_MODE),
            truncate=config.IMPORT_TRUNCATE if truncate is None else bool(truncate),
        )


@dataclass
class Discovery:
    available: dict[str, FileInfo]
    missing: list[str]


# ── Discovery ─────────────────────────────────────────────────────────

def find_file(data_dir: Path, table_name: str) -> Optional[Path]:
    for ext in config.IMPORT_EXTENSIONS:
        candidate = data_dir / f"{table_name}{ext}"
        if candidate.is_file():
            return candidate
    return None


def scan_files(data_dir: Optional[Path] = None) -> Discovery:
    """Check which of the expected table files exist in data_dir."""
    data_dir = Path(data_dir or config.DATA_DIR)
    data_dir.mkdir(parents=True, exist_ok=True)

    available: dict[str, FileInfo] = {}
    missing: list[str] = []
    for table_name in IMPORT_ORDER:
        path = find_file(data_dir, table_name)
        if path is None:
            missing.append(table_name)
            continue
        st = path.stat()
        available[table_name] = FileInfo(
            table=table_name,
            path=path,
            size=st.st_size,
            rows=count_rows(path),
            modified=datetime.fromtimestamp(st.st_mtime),
        )
    return Discovery(available, missing)


# ── Per-table import ──────────────────────────────────────────────────

def import_table(
    session: Session,
    table_name: str,
    path: Path,
    options: ImportOptions,
    report: ImportReport,
) -> TableReport:
    """Import one file into one table.  Events go to report; the tally is returned."""
    result = TableReport(table=table_name, file=Path(path).name)
    stats = result.stats

    parsed = read_table(path)
    if parsed.is_empty:
        result.status = "empty"
        result.message = "File empty or unreadable"
        report.add_event("error", result.message, table_name)
        return result

    result.delimiter = parsed.delimiter
    stats.skipped += parsed.blank_rows

    check = validate_headers(table_name, parsed.headers)
    result.missing_columns = check.missing_columns
    result.extra_columns = check.extra_columns
    if check.fatal:
        result.status = "invalid"
        result.message = check.message
        report.add_event("error", f"Invalid headers: {check.message}", table_name)
        logger.error("%s: invalid headers: %s", table_name, check.message)
        return result

    if check.missing_columns:
        report.add_event(
            "warning",
            "Missing columns (defaults used): " + ", ".join(check.missing_columns),
            table_name,
        )
    if check.extra_columns:
        report.add_event(
            "warning",
            "Extra columns (ignored): " + ", ".join(check.extra_columns),
            table_name,
        )

    processor = RowProcessor(table_name, parsed.headers)
    writer = writer_for(options.mode, get_schema(table_name))

    for row_no, row in zip(parsed.line_numbers, parsed.rows):
        stats.processed += 1

        try:
            outcome = writer.write(session, processor.process(row))
            session.commit()
        except RowError as exc:
            session.rollback()
            stats.errors += 1
            report.add_event("error", str(exc), table_name, row_no)
            continue
        except SQLAlchemyError as exc:
            session.rollback()
            stats.errors += 1
            message = str(getattr(exc, "orig", None) or exc)
            report.add_event("error", message, table_name, row_no)
            logger.warning("%s row %d: %s", table_name, row_no, message)
            continue
        except Exception as exc:
            session.rollback()
            stats.errors += 1
            report.add_event("error", f"Unexpected: {exc}", table_name, row_no)
            logger.exception("%s row %d: unexpected failure", table_name, row_no)
            continue

        if outcome is WriteOutcome.INSERTED:
            stats.inserted += 1
        elif outcome is WriteOutcome.UPDATED:
            stats.updated += 1
        elif outcome is WriteOutcome.UNMATCHED:
            stats.updated += 1
            report.add_event("warning", "No existing row to update", table_name, row_no)
        else:
            logger.debug("%s row %d: duplicate key, skipped", table_name, row_no)

    result.status = "imported"
    return result


# ── Run ───────────────────────────────────────────────────────────────

def run_import(
    options: Optional[ImportOptions] = None,
    *,
    data_dir: Optional[Path] = None,
) -> ImportReport:
    """
    Import every available table file in foreign-key order.

    Parameters
    ----------
    options  : mode and truncate flag (defaults from config)
    data_dir : where <TABLE_NAME>.<ext> files live (default config.DATA_DIR)

    Returns
    -------
    ImportReport with global and per-table tallies plus events
    """
    options = options or ImportOptions.from_values()
    report = ImportReport(mode=options.mode.value, truncate=options.truncate)

    discovery = scan_files(data_dir)
    report.files = discovery.available
    report.missing = discovery.missing

    if not discovery.available:
        report.add_event("error", "No input files found")
        logger.warning("No input files found in %s", data_dir or config.DATA_DIR)
        return report
    if discovery.missing:
        report.add_event("warning", "Missing files: " + ", ".join(discovery.missing))

    session = get_session()
    try:
        for table_name in IMPORT_ORDER:
            info = discovery.available.get(table_name)
            if info is None:
                report.add_table(TableReport(table_name, status="missing"))
                continue

            logger.info("Importing %s from %s (%s mode)",
                        table_name, info.path.name, options.mode.value)

            if options.truncate:
                try:
                    truncate_table(session, table_name)
                    report.add_event("info", "Table truncated", table_name)
                except SQLAlchemyError as exc:
                    session.rollback()
                    report.add_event("error", f"Truncate failed: {exc}", table_name)
                    logger.error("Truncate of %s failed: %s", table_name, exc)

            table_report = import_table(session, table_name, info.path, options, report)
            report.add_table(table_report)
            s = table_report.stats
            logger.info("%s: %d processed, %d inserted, %d updated, %d errors, %d skipped",
                        table_name, s.processed, s.inserted, s.updated, s.errors, s.skipped)
    finally:
        session.close()

    return report

"""
import_engine - Delimited-file import pipeline for the seven CTDB tables.

Public API:
    run_import(options=None, data_dir=None) → ImportReport
    scan_files(data_dir=None)               → Discovery
"""

from import_engine.importer import (                 # noqa: F401
    run_import, scan_files, import_table, ImportOptions, Discovery,
)
from import_engine.report import (                   # noqa: F401
    ImportReport, ImportStats, TableReport, ImportEvent, FileInfo, format_bytes,
)
from import_engine.writers import ImportMode, WriteOutcome   # noqa: F401

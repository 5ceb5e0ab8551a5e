"""
import_engine.csv_parser - Low-level delimited file reading and cleaning.

Responsibilities:
  • Delimiter detection from the first line (comma, semicolon, tab, pipe)
  • BOM removal on the first header cell
  • Header and field whitespace stripping
  • Dropping blank rows and fitting every row to the header width
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DELIMITERS = (",", ";", "\t", "|")
DEFAULT_DELIMITER = ","
BOM = "\ufeff"


@dataclass
class ParsedTable:
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    delimiter: str = DEFAULT_DELIMITER
    blank_rows: int = 0             # dropped because every field was empty
    line_numbers: list[int] = field(default_factory=list)   # source line of each row

    @property
    def is_empty(self) -> bool:
        return not self.headers


def detect_delimiter(sample_line: str) -> str:
    """
    Return the candidate occurring most often in sample_line.
    Ties for the top count, and lines with no candidate at all,
    fall back to a comma.
    """
    counts = {d: sample_line.count(d) for d in DELIMITERS}
    best = max(counts.values())
    if best == 0:
        return DEFAULT_DELIMITER
    winners = [d for d, n in counts.items() if n == best]
    if len(winners) > 1:
        return DEFAULT_DELIMITER
    return winners[0]


def is_blank(row: list[str]) -> bool:
    return all(not (value or "").strip() for value in row)


def fit_row(row: list[str], width: int) -> list[str]:
    """Trim every field, then pad with "" or truncate to exactly width fields."""
    cleaned = [(value or "").strip() for value in row]
    if len(cleaned) < width:
        cleaned.extend([""] * (width - len(cleaned)))
    return cleaned[:width]


def read_table(path: str | Path) -> ParsedTable:
    """
    Parse a delimited file into headers and data rows.

    Returns an empty ParsedTable when the file cannot be opened; callers
    treat that as nothing to import.
    """
    path = Path(path)
    try:
        fh = open(path, encoding="utf-8", errors="replace", newline="")
    except OSError as exc:
        logger.warning("Cannot open %s: %s", path, exc)
        return ParsedTable()

    with fh:
        delimiter = detect_delimiter(fh.readline())
        fh.seek(0)
        logger.debug("%s: detected delimiter %r", path.name, delimiter)

        reader = csv.reader(fh, delimiter=delimiter)
        header_row = next(reader, None)
        if header_row is None:
            return ParsedTable(delimiter=delimiter)

        headers = [h.strip() for h in header_row]
        if headers:
            headers[0] = headers[0].lstrip(BOM).strip()

        table = ParsedTable(headers=headers, delimiter=delimiter)
        for row in reader:
            if is_blank(row):
                table.blank_rows += 1
                continue
            table.rows.append(fit_row(row, len(headers)))
            table.line_numbers.append(reader.line_num)

    return table


def count_rows(path: str | Path) -> int:
    """Number of records after the header line, for discovery listings."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as fh:
            delimiter = detect_delimiter(fh.readline())
            fh.seek(0)
            total = sum(1 for _ in csv.reader(fh, delimiter=delimiter))
    except OSError as exc:
        logger.warning("Cannot count rows in %s: %s", path, exc)
        return 0
    return max(0, total - 1)

"""
import_engine.transforms - Value transformations applied to imported fields.

Each TransformKind maps to one pure function in APPLY.  Which kinds a
column receives is decided once per file (see row_processor.build_plan);
the row loop only dispatches through the table below.
"""

from __future__ import annotations

import enum
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

ZERO_DATE = "0000-00-00"
ENUM_DEFAULT = "No"

# Tried in order; the first successful parse wins
DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y", "%d-%m-%Y", "%Y/%m/%d")

MONETARY_COLUMN   = re.compile(r"amount|rate|expense|value|cost|billed", re.IGNORECASE)
COMMISSION_COLUMN = re.compile(r"Commission")
DATE_COLUMN       = re.compile(r"^Date|(?<!Due)Date$")


class TransformKind(enum.Enum):
    SECRET_HASH = "secret_hash"
    ENUM_DEFAULT = "enum_default"
    DATE_NULLIFY = "date_nullify"
    MONETARY_COERCE = "monetary_coerce"
    DATE_NORMALIZE = "date_normalize"
    IDENTITY = "identity"


# ── Transform functions ───────────────────────────────────────────────

def hash_secret(value: Optional[str]) -> str:
    """Salted one-way hash; check with werkzeug.security.check_password_hash."""
    if not value:
        return ""
    return generate_password_hash(value)


def default_enum(value: Optional[str]) -> str:
    if value is None or value == "":
        return ENUM_DEFAULT
    return value


def nullify_date(value: Optional[str]) -> Optional[str]:
    if value is None or value == "" or value == ZERO_DATE:
        return None
    return value


def coerce_monetary(value) -> Decimal:
    """Return the value as a Decimal, or 0 when it is not a plain number."""
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    if "_" in text:
        return Decimal(0)
    try:
        number = Decimal(text)
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not number.is_finite():
        return Decimal(0)
    return number


def normalize_date(value: Optional[str]) -> Optional[str]:
    """
    Reformat a date to YYYY-MM-DD.  The zero-date sentinel becomes None;
    anything no known format accepts is returned untouched.
    """
    if not value:
        return value
    if value == ZERO_DATE:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    return value


def identity(value):
    return value


APPLY: dict[TransformKind, Callable] = {
    TransformKind.SECRET_HASH:     hash_secret,
    TransformKind.ENUM_DEFAULT:    default_enum,
    TransformKind.DATE_NULLIFY:    nullify_date,
    TransformKind.MONETARY_COERCE: coerce_monetary,
    TransformKind.DATE_NORMALIZE:  normalize_date,
    TransformKind.IDENTITY:        identity,
}


def apply(kind: TransformKind, value):
    return APPLY[kind](value)


def generic_kind(column: str) -> TransformKind:
    """Transform implied by the column name alone."""
    if MONETARY_COLUMN.search(column) or COMMISSION_COLUMN.search(column):
        return TransformKind.MONETARY_COERCE
    if DATE_COLUMN.search(column):
        return TransformKind.DATE_NORMALIZE
    return TransformKind.IDENTITY

"""
CTDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.environ.get("CTDB_DATA_DIR", BASE_DIR / "Data"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("CTDB_DB", f"sqlite:///{BASE_DIR / 'ctdb.sqlite'}")

# ── Import defaults ────────────────────────────────────────────────────
IMPORT_MODE       = os.environ.get("CTDB_IMPORT_MODE", "insert")
IMPORT_TRUNCATE   = os.environ.get("CTDB_IMPORT_TRUNCATE", "0") == "1"
# Looked up in this order for each <TABLE_NAME>.<ext>
IMPORT_EXTENSIONS = tuple(
    ext.strip() for ext in
    os.environ.get("CTDB_IMPORT_EXTENSIONS", ".csv,.tsv,.txt").split(",")
    if ext.strip()
)

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("CTDB_LOG_LEVEL", "INFO").upper()

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("CTDB_HOST", "0.0.0.0")
PORT   = int(os.environ.get("CTDB_PORT", "5000"))
DEBUG  = os.environ.get("CTDB_DEBUG", "0") == "1"
SECRET = os.environ.get("CTDB_SECRET", "ctdb-dev-key-change-in-prod")

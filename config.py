"""
Booklovers - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR            = Path(__file__).resolve().parent
CATALOG_SEED_PATH   = Path(os.environ.get("BOOKLOVERS_CATALOG_SEED", BASE_DIR / "catalog_seed.json"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("BOOKLOVERS_DB", f"sqlite:///{BASE_DIR / 'booklovers.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("BOOKLOVERS_HOST", "0.0.0.0")
PORT   = int(os.environ.get("BOOKLOVERS_PORT", "5000"))
DEBUG  = os.environ.get("BOOKLOVERS_DEBUG", "0") == "1"
SECRET = os.environ.get("BOOKLOVERS_SECRET", "booklovers-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("BOOKLOVERS_LOG_LEVEL", "INFO").upper()

# ── Shelves ────────────────────────────────────────────────────────────
# Books on a default shelf live on exactly one of them at a time.
DEFAULT_SHELF   = "My Library"
DEFAULT_SHELVES = ("Read", "Want to Read", "Currently Reading")

# ── Reviews / ratings ──────────────────────────────────────────────────
REVIEW_MAX_LENGTH = 5000
RATING_MIN = 1
RATING_MAX = 5

# ── Import ─────────────────────────────────────────────────────────────
IMPORT_FORMATS = ("json", "csv")
MAX_UPLOAD_BYTES = int(os.environ.get("BOOKLOVERS_MAX_UPLOAD", str(5 * 1024 * 1024)))

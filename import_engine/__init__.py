"""
import_engine - User-data import pipeline (JSON / CSV export dialect).

Public API:
    import_from_json(user_id, text)  → ImportReport
    import_from_csv(user_id, text)   → ImportReport
    run_import(user_id, content, fmt) → ImportReport
"""

from import_engine.importer import import_from_csv, import_from_json, run_import   # noqa: F401
from import_engine.report import ImportReport, Outcome                              # noqa: F401
from import_engine.errors import (                                                  # noqa: F401
    DataImportError, MalformedInputError, UserNotFoundError,
)

"""
import_engine.importer - Top-level orchestrator.

Coordinates user check → parser → reconciler and produces a
structured ImportReport.  Only UserNotFoundError and
MalformedInputError escape; per-entry trouble ends up in the report.
"""

from __future__ import annotations

import logging

from db.engine import session_scope
from import_engine.errors import UserNotFoundError
from import_engine.parser import parse
from import_engine.reconciler import Reconciler
from import_engine.report import ImportReport
from services.user_service import UserService

logger = logging.getLogger(__name__)


def import_from_json(user_id: int, text: str | bytes) -> ImportReport:
    """Import an exported JSON document into the given user's library."""
    return run_import(user_id, text, "json")


def import_from_csv(user_id: int, text: str | bytes) -> ImportReport:
    """Import an exported CSV document into the given user's library."""
    return run_import(user_id, text, "csv")


def run_import(user_id: int, content: str | bytes, fmt: str) -> ImportReport:
    """
    Import one exported document.

    Parameters
    ----------
    user_id : target account; must exist
    content : raw JSON or CSV (bytes or str)
    fmt     : "json" or "csv"

    Returns
    -------
    ImportReport with per-collection counts and skipped-entry details
    """
    logger.info(f"Import ({fmt}) started: user={user_id}")
    _require_user(user_id)

    try:
        snapshot = parse(content, fmt)
    except Exception as exc:
        logger.error(f"Import ({fmt}) rejected: user={user_id}: {exc}")
        raise
    logger.debug(f"Snapshot for user={user_id}: {snapshot.counts()}")

    report = ImportReport(user_id=user_id, format=fmt)
    reconciler = Reconciler()

    for entry in snapshot.shelved_books:
        report.record(reconciler.apply_shelved_book(user_id, entry))
    for entry in snapshot.reviews:
        report.record(reconciler.apply_review(user_id, entry))
    for entry in snapshot.ratings:
        report.record(reconciler.apply_rating(user_id, entry))

    logger.info(
        f"Import ({fmt}) finished: user={user_id} "
        f"books={report.books.to_dict()} "
        f"reviews={report.reviews.to_dict()} "
        f"ratings={report.ratings.to_dict()}"
    )
    return report


def _require_user(user_id: int) -> None:
    with session_scope() as session:
        if UserService.get(session, user_id) is None:
            logger.error(f"Import target user not found: {user_id}")
            raise UserNotFoundError(user_id)

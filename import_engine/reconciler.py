"""
import_engine.reconciler - Apply one snapshot entry against the live store.

Single-responsibility: given a user id and one entry, run the write in
its own transaction and classify what happened.  Nothing raised while
applying an entry ever leaves this module; the result says whether it
was applied, an expected conflict, skipped, or failed.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.engine import session_scope
from db.models import Book
from import_engine.errors import EntryResolutionFailure, InvalidEntryError
from import_engine.report import EntryResult, Outcome
from import_engine.resolver import resolve_book
from import_engine.snapshot import RatingEntry, ReviewEntry, ShelvedBookEntry
from services.book_service import BookService, normalize_shelf
from services.errors import ConflictError, NotFoundError, ValidationError
from services.rating_service import RatingService, valid_rating
from services.review_service import ReviewService

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Stateless apart from the logger; one instance can serve a whole import.
    Each apply_* call opens, commits or rolls back, and closes its own session.
    """

    def apply_shelved_book(self, user_id: int, entry: ShelvedBookEntry) -> EntryResult:
        shelf = normalize_shelf(entry.shelf_name)

        def work(session: Session) -> Book:
            book = _require_book(session, entry.book_id, entry.book_title)
            BookService.add_to_shelf(session, user_id, book.id, shelf)
            return book

        return self._attempt("books", entry.book_title, work, detail=f"shelf='{shelf}'")

    def apply_review(self, user_id: int, entry: ReviewEntry) -> EntryResult:
        def work(session: Session) -> Book:
            book = _require_book(session, entry.book_id, entry.book_title)
            ReviewService.create(session, user_id, book.id, entry.content)
            return book

        result = self._attempt("reviews", entry.book_title, work)

        # The rating rides along in a second transaction; losing it
        # leaves the committed review in place.
        if result.outcome is Outcome.APPLIED and valid_rating(entry.rating_value):
            value = entry.rating_value
            self._attempt(
                "ratings", entry.book_title,
                lambda session: _upsert_rating(session, user_id, result.book_id, value),
                detail="from review",
            )
        return result

    def apply_rating(self, user_id: int, entry: RatingEntry) -> EntryResult:
        def work(session: Session) -> Book:
            if not valid_rating(entry.value):
                raise InvalidEntryError(f"rating value {entry.value!r} outside 1-5")
            book = _require_book(session, entry.book_id, entry.book_title)
            RatingService.create_or_update(session, user_id, book.id, entry.value)
            return book

        return self._attempt("ratings", entry.book_title, work, detail=f"value={entry.value}")

    # ── Private helpers ────────────────────────────────────────────────

    @staticmethod
    def _attempt(
        kind: str,
        title: Optional[str],
        work: Callable[[Session], Book],
        detail: str = "",
    ) -> EntryResult:
        label = f"[{kind}] '{title}'" + (f" {detail}" if detail else "")
        try:
            with session_scope() as session:
                book = work(session)
                book_id = book.id
        except (ConflictError, IntegrityError) as exc:
            logger.debug(f"{label}: already present, rolled back ({_short(exc)})")
            return EntryResult(kind, Outcome.CONFLICT, title, reason=_short(exc))
        except (EntryResolutionFailure, NotFoundError) as exc:
            logger.warning(f"{label}: book not found, skipped ({exc})")
            return EntryResult(kind, Outcome.SKIPPED, title, reason=str(exc))
        except (InvalidEntryError, ValidationError) as exc:
            logger.warning(f"{label}: invalid entry, skipped ({exc})")
            return EntryResult(kind, Outcome.SKIPPED, title, reason=str(exc))
        except Exception as exc:
            logger.warning(f"{label}: unexpected error, skipped ({exc})")
            return EntryResult(kind, Outcome.FAILED, title, reason=f"Unexpected: {exc}")

        logger.debug(f"{label}: applied to book {book_id}")
        return EntryResult(kind, Outcome.APPLIED, title, book_id=book_id)


def _require_book(session: Session, book_id: Optional[int], title: Optional[str]) -> Book:
    book = resolve_book(session, book_id, title)
    if book is None:
        raise EntryResolutionFailure(f"id={book_id} title={title!r}")
    return book


def _upsert_rating(session: Session, user_id: int, book_id: int, value: int) -> Book:
    return RatingService.create_or_update(session, user_id, book_id, value).book


def _short(exc: Exception) -> str:
    # IntegrityError messages carry the full SQL statement
    return str(exc).splitlines()[0] if str(exc) else type(exc).__name__

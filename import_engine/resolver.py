"""
import_engine.resolver - Map an entry's book reference onto a catalog Book.

Ids are tried first (round trip within the same catalog); titles are the
fallback (import from elsewhere).  A title only resolves on an exact,
case-insensitive match among the search hits, never on a partial one.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from db.models import Book
from services.book_service import BookService


def resolve_book(
    session: Session,
    book_id: Optional[int] = None,
    book_title: Optional[str] = None,
) -> Optional[Book]:
    if book_id is not None:
        book = BookService.get(session, book_id)
        if book is not None:
            return book

    title = (book_title or "").strip()
    if not title:
        return None

    wanted = title.lower()
    for candidate in BookService.search(session, title):
        if (candidate.title or "").strip().lower() == wanted:
            return candidate
    return None

"""
services.book_service - Catalog lookups and shelf placement.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and lets the
import engine wrap each call in its own transaction.
"""

from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

import config
from db.models import Book, UserBook
from services.errors import ConflictError, NotFoundError, ValidationError
from services.user_service import UserService

logger = logging.getLogger(__name__)


def normalize_shelf(shelf_name: str | None) -> str:
    """Blank or missing shelf names land on the default shelf."""
    if shelf_name is None or not shelf_name.strip():
        return config.DEFAULT_SHELF
    return shelf_name.strip()


def _like_pattern(query: str) -> str:
    escaped = (query.replace("\\", "\\\\")
                    .replace("%", "\\%")
                    .replace("_", "\\_"))
    return f"%{escaped}%"


class BookService:

    # ── Catalog ────────────────────────────────────────────────────────

    @staticmethod
    def get(session: Session, book_id: int) -> Book | None:
        return session.get(Book, book_id)

    @staticmethod
    def search(session: Session, query: str, limit: int | None = None) -> list[Book]:
        """
        Case-insensitive substring match over title, author and ISBN,
        ordered by id so callers picking the first hit are deterministic.
        """
        query = (query or "").strip()
        if not query:
            return []
        pattern = _like_pattern(query)
        q = (
            session.query(Book)
            .filter(or_(
                Book.title.ilike(pattern, escape="\\"),
                Book.author.ilike(pattern, escape="\\"),
                Book.isbn.ilike(pattern, escape="\\"),
            ))
            .order_by(Book.id)
        )
        if limit:
            q = q.limit(limit)
        return q.all()

    @staticmethod
    def create(session: Session, data: dict) -> Book:
        title = str(data.get("title") or "").strip()
        author = str(data.get("author") or "").strip()
        if not title or not author:
            raise ValidationError("Book title and author are required")
        book = Book(
            title=title,
            author=author,
            isbn=str(data.get("isbn") or "").strip(),
            description=str(data.get("description") or "").strip(),
        )
        session.add(book)
        session.flush()
        return book

    # ── Shelves ────────────────────────────────────────────────────────

    @staticmethod
    def user_shelves(session: Session, user_id: int) -> list[str]:
        """Distinct shelf names in use, followed by any unused default shelves."""
        rows = (
            session.query(UserBook.shelf_name)
            .filter(UserBook.user_id == user_id)
            .distinct()
            .order_by(UserBook.shelf_name)
            .all()
        )
        shelves = [name for (name,) in rows]
        for default in config.DEFAULT_SHELVES:
            if default not in shelves:
                shelves.append(default)
        return shelves

    @staticmethod
    def user_books(session: Session, user_id: int) -> list[UserBook]:
        return (
            session.query(UserBook)
            .filter(UserBook.user_id == user_id)
            .order_by(UserBook.id)
            .all()
        )

    @staticmethod
    def add_to_shelf(
        session: Session,
        user_id: int,
        book_id: int,
        shelf_name: str | None = None,
    ) -> UserBook:
        """
        Put a book on one of the user's shelves.

        Raises ConflictError if the book is already on that shelf.  Default
        shelves are mutually exclusive: a book on "Read" that is added to
        "Want to Read" is moved rather than duplicated.
        """
        UserService.require(session, user_id)
        book = session.get(Book, book_id)
        if book is None:
            raise NotFoundError("Book", book_id)

        shelf = normalize_shelf(shelf_name)
        existing = (
            session.query(UserBook)
            .filter_by(user_id=user_id, book_id=book_id, shelf_name=shelf)
            .first()
        )
        if existing is not None:
            raise ConflictError(f"Book {book_id} already on shelf '{shelf}'")

        if shelf in config.DEFAULT_SHELVES:
            current = (
                session.query(UserBook)
                .filter(
                    UserBook.user_id == user_id,
                    UserBook.book_id == book_id,
                    UserBook.shelf_name.in_(config.DEFAULT_SHELVES),
                )
                .first()
            )
            if current is not None:
                logger.debug(f"Moving book {book_id} from '{current.shelf_name}' to '{shelf}'")
                current.shelf_name = shelf
                session.flush()
                return current

        entry = UserBook(user_id=user_id, book_id=book_id, shelf_name=shelf)
        session.add(entry)
        session.flush()
        return entry

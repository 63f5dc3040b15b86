"""
services.export_service - Dump one user's library as JSON or CSV.

The CSV layout is the section-based dialect that
import_engine.csv_parser reads back:

    User Data Export
    Username,<value>
    ...
    <blank>
    Books
    Title,Author,ISBN,Shelf,Added At
    "<title>","<author>","<isbn>","<shelf>",<added at>
    <blank>
    Reviews
    ...
"""

from __future__ import annotations

import json

from sqlalchemy.orm import Session

from import_engine.field_map import (
    BOOKS_HEADER, BOOKS_SECTION, META_SECTION, RATINGS_HEADER,
    RATINGS_SECTION, REVIEWS_HEADER, REVIEWS_SECTION, USER_FIELDS,
)
from services.book_service import BookService
from services.rating_service import RatingService
from services.review_service import ReviewService
from services.user_service import UserService


def _quote(value) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _plain(value) -> str:
    return "" if value is None else str(value)


class ExportService:

    @staticmethod
    def export(session: Session, user_id: int) -> dict:
        """Build the export document.  Raises NotFoundError for unknown users."""
        user = UserService.require(session, user_id)
        user_books = [ub for ub in BookService.user_books(session, user_id) if ub.book]
        ratings = RatingService.for_user(session, user_id)
        rating_by_book = {r.book_id: r.value for r in ratings}

        books: list[dict] = []
        seen: set[int] = set()
        for ub in user_books:
            if ub.book_id not in seen:
                seen.add(ub.book_id)
                books.append(ub.book.to_dict())

        return {
            "user": user.to_dict(),
            "books": books,
            "userBooks": [ub.to_dict() for ub in user_books],
            "reviews": [
                r.to_dict(rating_value=rating_by_book.get(r.book_id))
                for r in ReviewService.for_user(session, user_id)
            ],
            "ratings": [r.to_dict() for r in ratings],
            "shelves": BookService.user_shelves(session, user_id),
        }

    @staticmethod
    def as_json(session: Session, user_id: int) -> str:
        return json.dumps(ExportService.export(session, user_id),
                          ensure_ascii=False, indent=2)

    @staticmethod
    def as_csv(session: Session, user_id: int) -> str:
        data = ExportService.export(session, user_id)
        user = UserService.require(session, user_id)
        isbn_by_book = {b["id"]: b["isbn"] for b in data["books"]}
        lines: list[str] = [META_SECTION]

        for label, attr in USER_FIELDS.items():
            value = _plain(getattr(user, attr))
            if attr == "bio":
                # Commas would split the metadata pair
                value = value.replace(",", ";")
            lines.append(f"{label},{value}")
        lines.append("")

        lines += [BOOKS_SECTION, BOOKS_HEADER]
        for ub in data["userBooks"]:
            lines.append(",".join([
                _quote(ub["bookTitle"]),
                _quote(ub["bookAuthor"]),
                _quote(isbn_by_book.get(ub["bookId"])),
                _quote(ub["shelfName"]),
                _plain(ub["addedAt"]),
            ]))
        lines.append("")

        lines += [REVIEWS_SECTION, REVIEWS_HEADER]
        for review in data["reviews"]:
            content = (review["content"] or "").replace("\r", "").replace("\n", " ")
            lines.append(",".join([
                _quote(review["bookTitle"]),
                _quote(content),
                _plain(review["ratingValue"]),
                _plain(review["createdAt"]),
            ]))
        lines.append("")

        lines += [RATINGS_SECTION, RATINGS_HEADER]
        for rating in data["ratings"]:
            lines.append(",".join([
                _quote(rating["bookTitle"]),
                _plain(rating["value"]),
                _plain(rating["createdAt"]),
            ]))

        return "\n".join(lines) + "\n"

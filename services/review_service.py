"""
services.review_service - Review creation and lookup.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

import config
from db.models import Book, Review
from services.errors import ConflictError, NotFoundError, ValidationError
from services.user_service import UserService


class ReviewService:

    @staticmethod
    def for_user(session: Session, user_id: int) -> list[Review]:
        return (
            session.query(Review)
            .filter(Review.user_id == user_id)
            .order_by(Review.id)
            .all()
        )

    @staticmethod
    def create(session: Session, user_id: int, book_id: int, content: str | None) -> Review:
        """
        Create the user's review of a book.

        Raises ConflictError when the user already reviewed the book and
        ValidationError for blank or oversized content.
        """
        content = (content or "").strip()
        if not content:
            raise ValidationError("Review content is required")
        if len(content) > config.REVIEW_MAX_LENGTH:
            raise ValidationError(
                f"Review content must not exceed {config.REVIEW_MAX_LENGTH} characters"
            )

        UserService.require(session, user_id)
        if session.get(Book, book_id) is None:
            raise NotFoundError("Book", book_id)

        existing = session.query(Review).filter_by(user_id=user_id, book_id=book_id).first()
        if existing is not None:
            raise ConflictError(f"User {user_id} already reviewed book {book_id}")

        review = Review(user_id=user_id, book_id=book_id, content=content)
        session.add(review)
        session.flush()
        return review

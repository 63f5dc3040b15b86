"""
services.rating_service - Per-user book ratings (1-5).

Ratings are upserted: a second rating of the same book replaces the
first instead of conflicting.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

import config
from db.models import Book, Rating
from services.errors import NotFoundError, ValidationError
from services.user_service import UserService

logger = logging.getLogger(__name__)


def valid_rating(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and config.RATING_MIN <= value <= config.RATING_MAX
    )


class RatingService:

    @staticmethod
    def get(session: Session, user_id: int, book_id: int) -> Rating | None:
        return session.query(Rating).filter_by(user_id=user_id, book_id=book_id).first()

    @staticmethod
    def for_user(session: Session, user_id: int) -> list[Rating]:
        return (
            session.query(Rating)
            .filter(Rating.user_id == user_id)
            .order_by(Rating.id)
            .all()
        )

    @staticmethod
    def create_or_update(session: Session, user_id: int, book_id: int, value: int) -> Rating:
        if not valid_rating(value):
            raise ValidationError(
                f"Rating must be between {config.RATING_MIN} and {config.RATING_MAX}, got {value!r}"
            )

        UserService.require(session, user_id)
        if session.get(Book, book_id) is None:
            raise NotFoundError("Book", book_id)

        rating = RatingService.get(session, user_id, book_id)
        if rating is None:
            logger.debug(f"Creating rating: user={user_id} book={book_id} value={value}")
            rating = Rating(user_id=user_id, book_id=book_id, value=value)
            session.add(rating)
        else:
            logger.debug(f"Updating rating {rating.id}: {rating.value} -> {value}")
            rating.value = value

        session.flush()
        return rating

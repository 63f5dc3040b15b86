"""
db.models - SQLAlchemy ORM declarations.

Tables
------
users       - account identity.  Import never rewrites these columns.
books       - the catalog.  Import only reads it (id lookup / title search).
user_books  - one row per (user, book, shelf).  A book may sit on several
              custom shelves but on at most one default shelf.
reviews     - at most one per (user, book).
ratings     - at most one per (user, book), value 1-5.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String,
    Text, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship

import config


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    username   = Column(String(100), unique=True, nullable=False)
    email      = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(100), default="")
    last_name  = Column(String(100), default="")
    bio        = Column(Text, default="")
    created_at = Column(DateTime, default=_now)

    user_books = relationship("UserBook", back_populates="user",
                              cascade="all, delete-orphan")
    reviews    = relationship("Review", back_populates="user",
                              cascade="all, delete-orphan")
    ratings    = relationship("Rating", back_populates="user",
                              cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "firstName": self.first_name or "",
            "lastName": self.last_name or "",
            "bio": self.bio or "",
        }


class Book(Base):
    __tablename__ = "books"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    title       = Column(String(500), nullable=False, index=True)
    author      = Column(String(300), nullable=False, index=True)
    isbn        = Column(String(20), default="")
    description = Column(Text, default="")
    created_at  = Column(DateTime, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn or "",
        }


class UserBook(Base):
    __tablename__ = "user_books"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    book_id    = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"),
                        nullable=False)
    shelf_name = Column(String(200), nullable=False, default=config.DEFAULT_SHELF)
    added_at   = Column(DateTime, default=_now)

    user = relationship("User", back_populates="user_books")
    book = relationship("Book", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", "shelf_name", name="uq_user_book_shelf"),
        Index("ix_user_books_user_book", "user_id", "book_id"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "bookId": self.book_id,
            "bookTitle": self.book.title if self.book else None,
            "bookAuthor": self.book.author if self.book else None,
            "shelfName": self.shelf_name,
            "addedAt": _iso(self.added_at),
        }


class Review(Base):
    __tablename__ = "reviews"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    book_id    = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"),
                        nullable=False)
    content    = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    user = relationship("User", back_populates="reviews")
    book = relationship("Book", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_review_user_book"),
    )

    def to_dict(self, rating_value: int | None = None) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "bookId": self.book_id,
            "bookTitle": self.book.title if self.book else None,
            "content": self.content,
            "ratingValue": rating_value,
            "createdAt": _iso(self.created_at),
        }


class Rating(Base):
    __tablename__ = "ratings"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    book_id    = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"),
                        nullable=False)
    value      = Column("rating_value", Integer, nullable=False)
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    user = relationship("User", back_populates="ratings")
    book = relationship("Book", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_rating_user_book"),
        CheckConstraint(
            f"rating_value BETWEEN {config.RATING_MIN} AND {config.RATING_MAX}",
            name="ck_rating_range",
        ),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "bookId": self.book_id,
            "bookTitle": self.book.title if self.book else None,
            "value": self.value,
            "createdAt": _iso(self.created_at),
        }

"""
import_engine.snapshot - In-memory form of one user's exported data.

A snapshot is built once per import call (by csv_parser or from a JSON
document), consumed entry by entry, and discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from import_engine.field_map import JSON_SHELVED_KEYS


@dataclass(frozen=True)
class UserInfo:
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None


@dataclass(frozen=True)
class ShelvedBookEntry:
    book_title: Optional[str] = None
    book_author: Optional[str] = None
    shelf_name: Optional[str] = None
    book_id: Optional[int] = None


@dataclass(frozen=True)
class ReviewEntry:
    book_title: Optional[str] = None
    content: Optional[str] = None
    rating_value: Optional[int] = None
    book_id: Optional[int] = None


@dataclass(frozen=True)
class RatingEntry:
    book_title: Optional[str] = None
    value: Optional[int] = None
    book_id: Optional[int] = None


@dataclass
class ExportedSnapshot:
    user: UserInfo = field(default_factory=UserInfo)
    shelved_books: list[ShelvedBookEntry] = field(default_factory=list)
    reviews: list[ReviewEntry] = field(default_factory=list)
    ratings: list[RatingEntry] = field(default_factory=list)
    shelves: list[str] = field(default_factory=list)

    def counts(self) -> dict:
        return {
            "books": len(self.shelved_books),
            "reviews": len(self.reviews),
            "ratings": len(self.ratings),
        }

    # ── JSON shape ─────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data) -> "ExportedSnapshot":
        """
        Build a snapshot from a decoded JSON document.
        Raises ValueError on any structural mismatch.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        user_raw = data.get("user")
        if user_raw is None:
            user_raw = {}
        elif not isinstance(user_raw, dict):
            raise ValueError("'user' must be an object")
        user = UserInfo(
            username=_opt_str(user_raw, "username"),
            email=_opt_str(user_raw, "email"),
            first_name=_opt_str(user_raw, "firstName"),
            last_name=_opt_str(user_raw, "lastName"),
            bio=_opt_str(user_raw, "bio"),
        )

        # "userBooks" rows carry their own "id"; only plain "books" rows
        # may use "id"/"title"/"author" for the book itself.
        shelved: list[ShelvedBookEntry] = []
        shelved_key = next((k for k in JSON_SHELVED_KEYS if data.get(k) is not None), None)
        if shelved_key == "userBooks":
            id_keys, title_keys, author_keys = ("bookId",), ("bookTitle",), ("bookAuthor",)
        else:
            id_keys = ("bookId", "id")
            title_keys = ("bookTitle", "title")
            author_keys = ("bookAuthor", "author")
        if shelved_key:
            shelved = [
                ShelvedBookEntry(
                    book_id=_opt_int(item, *id_keys),
                    book_title=_opt_str(item, *title_keys),
                    book_author=_opt_str(item, *author_keys),
                    shelf_name=_opt_str(item, "shelfName"),
                )
                for item in _objects(data, shelved_key)
            ]

        reviews = [
            ReviewEntry(
                book_id=_opt_int(item, "bookId"),
                book_title=_opt_str(item, "bookTitle"),
                content=_opt_str(item, "content"),
                rating_value=_opt_int(item, "ratingValue"),
            )
            for item in _objects(data, "reviews")
        ]

        ratings = [
            RatingEntry(
                book_id=_opt_int(item, "bookId"),
                book_title=_opt_str(item, "bookTitle"),
                value=_opt_int(item, "value"),
            )
            for item in _objects(data, "ratings")
        ]

        shelves_raw = data.get("shelves") or []
        if not isinstance(shelves_raw, list):
            raise ValueError("'shelves' must be a list")

        return cls(
            user=user,
            shelved_books=shelved,
            reviews=reviews,
            ratings=ratings,
            shelves=[str(s) for s in shelves_raw if s is not None],
        )


# ── Coercion helpers ───────────────────────────────────────────────────

def _objects(data: dict, key: str) -> list[dict]:
    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(f"'{key}' must be a list")
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"'{key}[{idx}]' must be an object")
    return items


def _pick(item: dict, keys: tuple[str, ...]):
    for key in keys:
        if item.get(key) is not None:
            return key, item[key]
    return keys[0], None


def _opt_str(item: dict, *keys: str) -> Optional[str]:
    key, value = _pick(item, keys)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ValueError(f"'{key}' must be a string")
    return str(value)


def _opt_int(item: dict, *keys: str) -> Optional[int]:
    key, value = _pick(item, keys)
    return parse_int(value, key)


def parse_int(value, name: str = "value") -> Optional[int]:
    """
    None / blank → None; integers and integral strings → int.
    Anything else raises ValueError.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            raise ValueError(f"'{name}' must be an integer, got {value!r}") from None
    raise ValueError(f"'{name}' must be an integer, got {value!r}")

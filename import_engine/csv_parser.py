"""
import_engine.csv_parser - Section-based reader for the CSV export dialect.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • One forward pass over the lines, switching section on the literal
    headers "User Data Export", "Books", "Reviews", "Ratings"
  • Quote-aware splitting of list lines ("" is an escaped quote)
  • Tolerance: short lines, unknown keys and unknown sections are skipped

Anything that raises here (e.g. a rating column that is not a number)
aborts the whole parse; the caller reports it as malformed input.
"""

from __future__ import annotations

import csv
import logging
import re
from typing import Optional

from import_engine.field_map import (
    BOOK_AUTHOR, BOOK_SHELF, BOOK_TITLE, BOOKS_SECTION, LIST_SECTIONS,
    META_SECTION, MIN_COLUMNS, RATING_TITLE, RATING_VALUE, RATINGS_SECTION,
    REVIEW_CONTENT, REVIEW_RATING, REVIEW_TITLE, REVIEWS_SECTION, USER_FIELDS,
)
from import_engine.snapshot import (
    ExportedSnapshot, RatingEntry, ReviewEntry, ShelvedBookEntry, UserInfo,
    parse_int,
)

logger = logging.getLogger(__name__)


def parse_csv(raw: str | bytes) -> ExportedSnapshot:
    """Parse an exported CSV document into a snapshot."""
    text = decode(raw)

    user: dict[str, str] = {}
    snapshot = ExportedSnapshot()
    section: Optional[str] = None
    expect_header = False

    # Only \n and \r\n end a line; U+2028 and \x0c stay inside fields
    for lineno, raw_line in enumerate(re.split(r"\r?\n", text), start=1):
        line = raw_line.strip()

        if not line:
            section = None
            expect_header = False
            continue

        if line == META_SECTION:
            section = META_SECTION
            continue

        if line in LIST_SECTIONS:
            section = line
            expect_header = True
            continue

        if expect_header:
            logger.debug(f"{section} header (line {lineno}): {line}")
            expect_header = False
            continue

        if section == META_SECTION:
            _read_meta(line, user)
        elif section in LIST_SECTIONS:
            parts = split_line(line)
            if len(parts) < MIN_COLUMNS[section]:
                logger.debug(f"Line {lineno}: {len(parts)} columns in {section}, skipped")
                continue
            try:
                _read_entry(section, parts, snapshot)
            except ValueError as exc:
                raise ValueError(f"Line {lineno}: {exc}") from exc
        # Lines outside any known section are ignored

    snapshot.user = UserInfo(**user)
    logger.debug(f"CSV parsed: {snapshot.counts()}")
    return snapshot


def split_line(line: str) -> list[str]:
    """
    Split one line on commas that sit outside double quotes.
    Quotes are removed and "" inside a quoted field becomes ".
    """
    fields = next(csv.reader([line], skipinitialspace=True), [])
    return [f.strip() for f in fields]


# ── Private helpers ────────────────────────────────────────────────────

def _read_meta(line: str, user: dict) -> None:
    key, sep, value = line.partition(",")
    if not sep:
        return
    attr = USER_FIELDS.get(key.strip())
    if attr is None:
        return
    value = value.strip()
    if attr == "bio":
        value = value.replace(";", ",")
    user[attr] = value


def _read_entry(section: str, parts: list[str], snapshot: ExportedSnapshot) -> None:
    if section == BOOKS_SECTION:
        snapshot.shelved_books.append(ShelvedBookEntry(
            book_title=_clean(parts[BOOK_TITLE]),
            book_author=_clean(parts[BOOK_AUTHOR]),
            shelf_name=_clean(parts[BOOK_SHELF]),
        ))
    elif section == REVIEWS_SECTION:
        rating = parts[REVIEW_RATING] if len(parts) > REVIEW_RATING else None
        snapshot.reviews.append(ReviewEntry(
            book_title=_clean(parts[REVIEW_TITLE]),
            content=parts[REVIEW_CONTENT],
            rating_value=parse_int(rating, "rating"),
        ))
    elif section == RATINGS_SECTION:
        snapshot.ratings.append(RatingEntry(
            book_title=_clean(parts[RATING_TITLE]),
            value=parse_int(parts[RATING_VALUE], "rating value"),
        ))


def _clean(value: str) -> Optional[str]:
    value = value.strip()
    return value or None


def decode(raw: str | bytes) -> str:
    """Bytes or str in, str out, with any UTF-8 BOM removed."""
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw

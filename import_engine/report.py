"""
import_engine.report - Structured result of one user-data import.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    APPLIED = "applied"
    CONFLICT = "conflict"     # expected duplicate, rolled back
    SKIPPED = "skipped"       # unresolved book or invalid value
    FAILED = "failed"         # unexpected error, rolled back


@dataclass(frozen=True)
class EntryResult:
    kind: str                 # "books" | "reviews" | "ratings"
    outcome: Outcome
    book_title: Optional[str] = None
    book_id: Optional[int] = None
    reason: str = ""


@dataclass
class CollectionSummary:
    applied: int = 0
    conflicts: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.applied + self.conflicts + self.skipped + self.failed

    def to_dict(self) -> dict:
        return {
            "applied": self.applied,
            "conflicts": self.conflicts,
            "skipped": self.skipped,
            "failed": self.failed,
        }


_COUNTER = {
    Outcome.APPLIED: "applied",
    Outcome.CONFLICT: "conflicts",
    Outcome.SKIPPED: "skipped",
    Outcome.FAILED: "failed",
}


@dataclass
class ImportReport:
    user_id: int
    format: str
    books: CollectionSummary = field(default_factory=CollectionSummary)
    reviews: CollectionSummary = field(default_factory=CollectionSummary)
    ratings: CollectionSummary = field(default_factory=CollectionSummary)
    errors: list[dict] = field(default_factory=list)   # [{kind, title, outcome, reason}]

    def record(self, result: EntryResult) -> None:
        summary: CollectionSummary = getattr(self, result.kind)
        attr = _COUNTER[result.outcome]
        setattr(summary, attr, getattr(summary, attr) + 1)
        if result.outcome in (Outcome.SKIPPED, Outcome.FAILED):
            self.errors.append({
                "kind": result.kind,
                "title": result.book_title,
                "outcome": result.outcome.value,
                "reason": result.reason,
            })

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "format": self.format,
            "books": self.books.to_dict(),
            "reviews": self.reviews.to_dict(),
            "ratings": self.ratings.to_dict(),
            "errors": self.errors,
        }

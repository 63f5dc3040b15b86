import json

import pytest

import import_engine.importer as importer
from db.models import Rating, Review, UserBook
from factories import BookFactory, UserFactory
from import_engine import (
    MalformedInputError, UserNotFoundError, import_from_csv, import_from_json,
)


CSV_DOC = """User Data Export
Username,someone-else
Email,someone@example.com
First Name,Some
Last Name,One
Bio,

Books
Title,Author,ISBN,Shelf,Added At
"Dune","Frank Herbert","x","Read"

Reviews
Book Title,Content,Rating,Created At
"Dune","Great book",5

Ratings
Book Title,Rating Value,Created At
"Dune",5
"""


def _counts(session):
    return (
        session.query(UserBook).count(),
        session.query(Review).count(),
        session.query(Rating).count(),
    )


def test_invalid_json_fails_without_writing(session):
    user = UserFactory()
    BookFactory(title="Dune")

    with pytest.raises(MalformedInputError):
        import_from_json(user.id, '{"userBooks": [{"bookTitle": "Dune"}')

    assert _counts(session) == (0, 0, 0)


@pytest.mark.parametrize("entry_point", [import_from_json, import_from_csv])
def test_unknown_user_fails_before_parsing(session, monkeypatch, entry_point):
    parsed = []
    monkeypatch.setattr(importer, "parse", lambda *a: parsed.append(a))

    with pytest.raises(UserNotFoundError) as excinfo:
        entry_point(424242, "definitely not a valid document")

    assert excinfo.value.user_id == 424242
    assert parsed == []


def test_repeated_rating_overwrites(session):
    user = UserFactory()
    BookFactory(title="Dune")

    import_from_json(user.id, json.dumps({"ratings": [{"bookTitle": "Dune", "value": 3}]}))
    report = import_from_json(user.id, json.dumps({"ratings": [{"bookTitle": "Dune", "value": 4}]}))

    assert report.ratings.applied == 1
    session.expire_all()
    ratings = session.query(Rating).all()
    assert [(r.user_id, r.value) for r in ratings] == [(user.id, 4)]


def test_missing_book_does_not_block_others(session):
    user = UserFactory()
    for title in ("Dune", "Emma", "Ulysses"):
        BookFactory(title=title)
    doc = {"userBooks": [
        {"bookTitle": "Dune", "shelfName": "Read"},
        {"bookTitle": "No Such Book", "shelfName": "Read"},
        {"bookTitle": "Emma", "shelfName": "Classics"},
        {"bookTitle": "Ulysses", "shelfName": "Someday"},
    ]}

    report = import_from_json(user.id, json.dumps(doc))

    assert report.books.applied == 3
    assert report.books.skipped == 1
    assert report.errors[0]["title"] == "No Such Book"
    assert session.query(UserBook).count() == 3


def test_same_shelf_entry_twice_is_swallowed(session):
    user = UserFactory()
    BookFactory(title="Dune")
    doc = json.dumps({"userBooks": [{"bookTitle": "Dune", "shelfName": "Read"}]})

    first = import_from_json(user.id, doc)
    second = import_from_json(user.id, doc)

    assert first.books.applied == 1
    assert second.books.conflicts == 1
    assert session.query(UserBook).count() == 1


def test_csv_import_applies_book_review_and_rating(session):
    user = UserFactory(username="target")
    book = BookFactory(title="Dune", author="Frank Herbert")

    report = import_from_csv(user.id, CSV_DOC)

    assert report.to_dict()["books"] == {"applied": 1, "conflicts": 0, "skipped": 0, "failed": 0}
    assert report.reviews.applied == 1
    assert report.ratings.applied == 1

    shelf = session.query(UserBook).one()
    assert (shelf.user_id, shelf.book_id, shelf.shelf_name) == (user.id, book.id, "Read")
    review = session.query(Review).one()
    assert (review.user_id, review.content) == (user.id, "Great book")
    rating = session.query(Rating).one()
    assert (rating.user_id, rating.value) == (user.id, 5)


def test_csv_metadata_never_touches_the_account(session):
    user = UserFactory(username="target", email="target@example.com")
    BookFactory(title="Dune")

    import_from_csv(user.id, CSV_DOC)

    session.expire_all()
    session.refresh(user)
    assert (user.username, user.email) == ("target", "target@example.com")


def test_rating_bounds(session):
    user = UserFactory()
    books = {v: BookFactory(title=f"Rated {v}") for v in (0, 1, 5, 6)}
    doc = {"ratings": [{"bookTitle": f"Rated {v}", "value": v} for v in (0, 1, 5, 6)]}

    report = import_from_json(user.id, json.dumps(doc))

    assert report.ratings.applied == 2
    assert report.ratings.skipped == 2
    stored = {r.book_id: r.value for r in session.query(Rating).all()}
    assert stored == {books[1].id: 1, books[5].id: 5}


def test_quoted_comma_review_round_trips_into_store(session):
    user = UserFactory()
    BookFactory(title="Dune")
    doc = (
        "Reviews\n"
        "Book Title,Content,Rating,Created At\n"
        '"Dune","He said ""hi"", then left, and smiled",\n'
    )

    import_from_csv(user.id, doc)

    assert session.query(Review).one().content == 'He said "hi", then left, and smiled'
    assert session.query(Rating).count() == 0


def test_report_never_raises_for_entry_failures(session):
    user = UserFactory()
    doc = {
        "userBooks": [{"bookTitle": "Ghost"}],
        "reviews": [{"bookTitle": "Ghost", "content": "Boo"}],
        "ratings": [{"bookTitle": "Ghost", "value": 3}],
    }

    report = import_from_json(user.id, json.dumps(doc))

    assert (report.books.skipped, report.reviews.skipped, report.ratings.skipped) == (1, 1, 1)
    assert len(report.errors) == 3

import json

import pytest

from import_engine.errors import MalformedInputError
from import_engine.parser import parse


def _doc(**extra) -> str:
    data = {
        "user": {"username": "reader", "email": "r@example.com", "bio": "hi"},
        "userBooks": [
            {"id": 99, "bookId": 7, "bookTitle": "Dune", "bookAuthor": "Frank Herbert",
             "shelfName": "Read"},
            {"bookTitle": "Emma", "shelfName": None},
        ],
        "reviews": [{"bookId": 7, "bookTitle": "Dune", "content": "Great", "ratingValue": 5}],
        "ratings": [{"bookTitle": "Dune", "value": "4"}],
        "shelves": ["Read", "Want to Read"],
    }
    data.update(extra)
    return json.dumps(data)


def test_json_document_maps_onto_snapshot():
    snap = parse(_doc(), "json")

    assert snap.user.username == "reader"
    assert snap.user.bio == "hi"
    assert snap.shelved_books[0].book_id == 7
    assert snap.shelved_books[0].shelf_name == "Read"
    assert snap.shelved_books[1].book_id is None
    assert snap.reviews[0].rating_value == 5
    assert snap.ratings[0].value == 4
    assert snap.shelves == ["Read", "Want to Read"]


def test_plain_books_list_is_accepted_when_user_books_missing():
    doc = json.dumps({"books": [{"id": 3, "title": "Emma", "author": "Jane Austen"}]})
    entry = parse(doc, "json").shelved_books[0]

    assert entry.book_id == 3
    assert entry.book_title == "Emma"
    assert entry.shelf_name is None


def test_user_books_wins_over_books():
    doc = _doc(books=[{"id": 1, "title": "Catalog Only"}])
    titles = [b.book_title for b in parse(doc, "json").shelved_books]
    assert titles == ["Dune", "Emma"]


def test_missing_collections_give_empty_snapshot():
    snap = parse("{}", "json")
    assert snap.counts() == {"books": 0, "reviews": 0, "ratings": 0}


@pytest.mark.parametrize("payload", [
    "{not json",
    "[1, 2, 3]",
    '{"reviews": {"bookTitle": "Dune"}}',
    '{"ratings": ["Dune"]}',
    '{"ratings": [{"bookTitle": "Dune", "value": "five"}]}',
    '{"userBooks": [{"bookId": true}]}',
    '{"user": "reader"}',
    '{"user": ""}',
    '{"user": 0}',
    '{"user": false}',
])
def test_structural_errors_are_malformed(payload):
    with pytest.raises(MalformedInputError):
        parse(payload, "json")


def test_syntax_error_keeps_cause():
    with pytest.raises(MalformedInputError) as excinfo:
        parse("{", "json")
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)

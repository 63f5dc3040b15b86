from factories import BookFactory
from import_engine.resolver import resolve_book


def test_id_lookup_wins_over_title(session):
    dune = BookFactory(title="Dune")
    emma = BookFactory(title="Emma")

    assert resolve_book(session, emma.id, "Dune").id == emma.id
    assert resolve_book(session, dune.id, None).id == dune.id


def test_unknown_id_falls_back_to_title(session):
    dune = BookFactory(title="Dune")
    assert resolve_book(session, 9999, "Dune").id == dune.id


def test_title_match_is_exact_and_case_insensitive(session):
    BookFactory(title="Dune Messiah")
    dune = BookFactory(title="Dune")

    assert resolve_book(session, None, "  dUNE ").id == dune.id


def test_partial_title_does_not_resolve(session):
    BookFactory(title="Dune Messiah")
    assert resolve_book(session, None, "Dune") is None


def test_first_exact_match_by_id_order(session):
    first = BookFactory(title="Persuasion", author="Jane Austen")
    BookFactory(title="persuasion", author="Someone Else")
    assert resolve_book(session, None, "Persuasion").id == first.id


def test_like_wildcards_in_title_are_literal(session):
    BookFactory(title="100 Things")
    assert resolve_book(session, None, "100%") is None
    assert resolve_book(session, None, "1__ Things") is None


def test_nothing_to_resolve(session):
    BookFactory(title="Dune")
    assert resolve_book(session, None, None) is None
    assert resolve_book(session, None, "   ") is None

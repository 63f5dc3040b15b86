import pytest

import factories
from db import get_session, init_db
from main import create_app


@pytest.fixture(autouse=True)
def database(tmp_path):
    """Point the engine at a fresh SQLite file for every test."""
    url = f"sqlite:///{tmp_path / 'booklovers-test.sqlite'}"
    init_db(url)
    yield url


@pytest.fixture
def session(database):
    """Session shared by the factories; rows they build are committed."""
    s = get_session()
    for factory in factories.ALL_FACTORIES:
        factory._meta.sqlalchemy_session = s
    yield s
    s.close()


@pytest.fixture
def client(database):
    """Return a Flask test client bound to the test database."""
    app = create_app(db_url=database)
    app.config["TESTING"] = True
    return app.test_client()

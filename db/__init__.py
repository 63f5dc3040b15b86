"""
db - Database layer.

Public API:
    init_db()         → create engine + tables
    get_session()     → new Session
    session_scope()   → Session that commits on exit, rolls back on error
    User, Book, UserBook, Review, Rating → ORM models
"""

from db.engine import init_db, get_session, session_scope          # noqa: F401
from db.models import Base, User, Book, UserBook, Review, Rating   # noqa: F401

"""
services.user_service - User lookups.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import User
from services.errors import NotFoundError


class UserService:

    @staticmethod
    def get(session: Session, user_id: int) -> User | None:
        return session.get(User, user_id)

    @staticmethod
    def require(session: Session, user_id: int) -> User:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

"""
services - Business-logic layer sitting between API/import engine and DB.
"""

from services.user_service import UserService         # noqa: F401
from services.book_service import BookService         # noqa: F401
from services.review_service import ReviewService     # noqa: F401
from services.rating_service import RatingService     # noqa: F401
from services.export_service import ExportService     # noqa: F401

"""
import_engine.field_map - Section names and column mapping for the CSV
export dialect.  Shared by the exporter and the parser so the two
cannot drift apart.
"""

# Section headers (matched literally, whole line)
META_SECTION    = "User Data Export"
BOOKS_SECTION   = "Books"
REVIEWS_SECTION = "Reviews"
RATINGS_SECTION = "Ratings"

LIST_SECTIONS = frozenset({BOOKS_SECTION, REVIEWS_SECTION, RATINGS_SECTION})

# Column-header lines written after each list section header
BOOKS_HEADER   = "Title,Author,ISBN,Shelf,Added At"
REVIEWS_HEADER = "Book Title,Content,Rating,Created At"
RATINGS_HEADER = "Book Title,Rating Value,Created At"

# Metadata key  →  UserInfo / User.to_dict() attribute
USER_FIELDS: dict[str, str] = {
    "Username":   "username",
    "Email":      "email",
    "First Name": "first_name",
    "Last Name":  "last_name",
    "Bio":        "bio",
}

# Minimum columns a data line needs before it is considered
MIN_COLUMNS: dict[str, int] = {
    BOOKS_SECTION:   4,
    REVIEWS_SECTION: 2,
    RATINGS_SECTION: 2,
}

# Column positions inside each list section
BOOK_TITLE, BOOK_AUTHOR, BOOK_SHELF = 0, 1, 3     # column 2 (ISBN) is not read
REVIEW_TITLE, REVIEW_CONTENT, REVIEW_RATING = 0, 1, 2
RATING_TITLE, RATING_VALUE = 0, 1

# JSON export keys
JSON_SHELVED_KEYS = ("userBooks", "books")

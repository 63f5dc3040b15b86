"""
import_engine.errors - Import failures.

Only DataImportError subclasses ever leave the import engine.  The
per-entry exceptions below are raised and absorbed inside the
reconciler.
"""


class DataImportError(Exception):
    """Base class for errors that abort a whole import call."""
    pass


class UserNotFoundError(DataImportError):
    """The target user does not exist."""

    def __init__(self, user_id):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class MalformedInputError(DataImportError):
    """The payload could not be turned into a snapshot at all."""
    pass


class EntryResolutionFailure(Exception):
    """No catalog book matches an entry's id or title."""
    pass


class InvalidEntryError(Exception):
    """An entry carries a value the store would reject (e.g. rating 6)."""
    pass

"""
Ledger Errors

Every error raised by the ledger core carries an ErrorKind.
Callers decide what to do by inspecting ``error.kind`` rather than
matching on the concrete exception class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of failure the ledger core can report."""
    NOT_FOUND = "not_found"
    NOT_UNIQUE = "not_unique"
    INVALID_FILENAME = "invalid_filename"
    PARSE_FAILURE = "parse_failure"
    IO_FAILURE = "io_failure"


class LedgerError(Exception):
    """Base exception for the ledger core."""

    kind: ErrorKind

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class AccountResolutionError(LedgerError):
    """An account prefix could not be resolved to a single account."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class NotFoundError(AccountResolutionError):
    """No configured account matched the prefix."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Not found: {name or '(empty)'}", name)


class NotUniqueError(AccountResolutionError):
    """More than one configured account matched the prefix."""

    kind = ErrorKind.NOT_UNIQUE

    def __init__(self, name: str):
        super().__init__(f"Not unique: {name}", name)


class StorageError(LedgerError):
    """Base exception for account file operations."""

    kind = ErrorKind.IO_FAILURE


class InvalidFilenameError(StorageError):
    """Filename was None or empty."""

    kind = ErrorKind.INVALID_FILENAME

    def __init__(self, message: str = "invalid filename"):
        super().__init__(message)


class ParseFailureError(StorageError):
    """Stored data could not be parsed into an account."""

    kind = ErrorKind.PARSE_FAILURE


class StorageIOError(StorageError):
    """The account file could not be read or written."""

    kind = ErrorKind.IO_FAILURE

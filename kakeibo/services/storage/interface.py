"""
Abstract Storage Interface

Account files are read and written through this interface so that
Account does not depend on one file format. The YAML implementation is
the only one shipped; tests can substitute an in-memory one.

The interface is intentionally small: load a whole blob, save a whole
blob. There is no partial update and no locking.
"""

from abc import ABC, abstractmethod
from typing import Any

from kakeibo.errors import (
    InvalidFilenameError,
    ParseFailureError,
    StorageError,
    StorageIOError,
)


class AccountStorageInterface(ABC):
    """
    Abstract interface for account file storage.
    """

    @abstractmethod
    def load(self, filename: str) -> Any:
        """
        Read and parse the blob stored under filename.

        Args:
            filename: Storage key of the account

        Returns:
            The parsed blob (None for an empty document)

        Raises:
            InvalidFilenameError: If filename is None or empty
            ParseFailureError: If the stored data is malformed
            StorageIOError: If the file is missing or unreadable
        """
        pass

    @abstractmethod
    def save(self, blob: Any, filename: str) -> None:
        """
        Serialize blob under filename, replacing what was there.

        Raises:
            InvalidFilenameError: If filename is None or empty
            StorageIOError: If the file cannot be written
        """
        pass


__all__ = [
    "AccountStorageInterface",
    "InvalidFilenameError",
    "ParseFailureError",
    "StorageError",
    "StorageIOError",
]

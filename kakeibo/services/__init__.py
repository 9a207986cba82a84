"""Services package."""

from kakeibo.services.storage import (
    AccountStorageInterface,
    InvalidFilenameError,
    ParseFailureError,
    StorageError,
    StorageIOError,
    YamlFileStorage,
)

__all__ = [
    # Storage services
    "AccountStorageInterface",
    "InvalidFilenameError",
    "ParseFailureError",
    "StorageError",
    "StorageIOError",
    "YamlFileStorage",
]

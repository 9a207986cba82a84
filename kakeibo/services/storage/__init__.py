"""
Storage Services Package

Provides the abstract storage interface and the YAML file backend.
"""

from kakeibo.services.storage.interface import (
    AccountStorageInterface,
    InvalidFilenameError,
    ParseFailureError,
    StorageError,
    StorageIOError,
)
from kakeibo.services.storage.yaml_file import (
    YamlFileStorage,
    loadfile,
    savefile,
)

__all__ = [
    # Interfaces
    "AccountStorageInterface",
    # Exceptions
    "InvalidFilenameError",
    "ParseFailureError",
    "StorageError",
    "StorageIOError",
    # YAML implementation
    "YamlFileStorage",
    "loadfile",
    "savefile",
]

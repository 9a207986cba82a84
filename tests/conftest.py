"""Shared fixtures for the Kakeibo tests."""

import copy
from typing import Any, Optional

import pytest

from kakeibo.account import Account
from kakeibo.errors import StorageIOError
from kakeibo.services.storage import AccountStorageInterface


class MemoryStorage(AccountStorageInterface):
    """Keeps account blobs in a dict instead of files."""

    def __init__(self, blobs: Optional[dict] = None, fail_on: Optional[set] = None):
        self.blobs = dict(blobs or {})
        self.fail_on = set(fail_on or ())

    def load(self, filename: str) -> Any:
        if filename not in self.blobs:
            raise StorageIOError(f"cannot open {filename}: no such file")
        return copy.deepcopy(self.blobs[filename])

    def save(self, blob: Any, filename: str) -> None:
        if filename in self.fail_on:
            raise StorageIOError(f"cannot save {filename}: disk full")
        self.blobs[filename] = copy.deepcopy(blob)


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def make_account(memory_storage):
    """Build a loaded account with the given name, backed by memory_storage."""
    def _make(name: str, /, **blob) -> Account:
        filename = f"{name}.yaml"
        memory_storage.blobs[filename] = blob
        return Account(filename, storage=memory_storage)
    return _make

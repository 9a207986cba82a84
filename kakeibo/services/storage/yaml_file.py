"""
YAML File Storage

Each account lives in its own YAML file. Files are opened, fully read
or written, and closed within a single call.

TRADEOFFS:
- Saving overwrites the file in place. A crash mid-write can leave a
  truncated file; there is no temp-file-and-rename step.
- Concurrent writers to the same file are not supported.
"""

from typing import Any, Optional

import yaml

from kakeibo.errors import InvalidFilenameError, ParseFailureError, StorageIOError
from kakeibo.services.storage.interface import AccountStorageInterface


STORAGE_SUFFIX = ".yaml"


def _check_filename(filename: Optional[str]) -> None:
    if not filename:
        raise InvalidFilenameError()


def loadfile(filename: Optional[str]) -> Any:
    """
    Load the YAML document stored in filename.

    Raises:
        InvalidFilenameError: If filename is None or empty
        ParseFailureError: If the file is not valid YAML
        StorageIOError: If the file is missing or unreadable
    """
    _check_filename(filename)
    try:
        with open(filename, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseFailureError(f"cannot parse {filename}: {e}") from e
    except OSError as e:
        raise StorageIOError(f"cannot open {filename}: {e}") from e


def savefile(blob: Any, filename: Optional[str]) -> None:
    """
    Dump blob as YAML to filename, overwriting it.

    Raises:
        InvalidFilenameError: If filename is None or empty
        StorageIOError: If the file cannot be written
    """
    _check_filename(filename)
    try:
        with open(filename, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                blob,
                f,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
    except yaml.YAMLError as e:
        raise StorageIOError(f"cannot serialize {filename}: {e}") from e
    except OSError as e:
        raise StorageIOError(f"cannot save {filename}: {e}") from e


class YamlFileStorage(AccountStorageInterface):
    """Account storage backed by one YAML file per account."""

    def load(self, filename: str) -> Any:
        return loadfile(filename)

    def save(self, blob: Any, filename: str) -> None:
        savefile(blob, filename)

"""
Configuration Management for Kakeibo

Two sources of configuration:
1. KakeiboSettings - process settings from environment variables
   (``KAKEIBO_`` prefix) and an optional .env file, via pydantic-settings.
2. LedgerConfig - the YAML config file named on the command line,
   listing the account files to load.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kakeibo.errors import ParseFailureError
from kakeibo.services.storage.yaml_file import STORAGE_SUFFIX, loadfile


ALTERNATE_SUFFIXES = (".yml",)


class KakeiboSettings(BaseSettings):
    """
    Process settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="KAKEIBO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    day_start_hour: int = Field(
        default=6,
        ge=0,
        le=23,
        description="Hour before which 'today' is still the previous day"
    )
    total_marker: str = Field(
        default="=",
        min_length=1,
        description="Leading character marking an amount as a running total"
    )
    ask_date: bool = Field(
        default=False,
        description="Prompt for a date on every entry"
    )
    log_level: str = Field(
        default="WARNING",
        description="Level for the kakeibo loggers"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> KakeiboSettings:
    """
    Get process settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return KakeiboSettings()


def normalize_account_filename(filename: str) -> str:
    """
    Give filename the storage suffix.

    ``food`` -> ``food.yaml``, ``food.yml`` -> ``food.yaml``,
    ``food.yaml`` is unchanged.
    """
    if filename.endswith(STORAGE_SUFFIX):
        return filename
    for suffix in ALTERNATE_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)] + STORAGE_SUFFIX
    return filename + STORAGE_SUFFIX


class LedgerConfig(BaseModel):
    """
    The ledger config file.

    Example::

        accounts:
          - wallet
          - bank
          - card.yaml
    """

    accounts: list[str] = Field(
        ...,
        min_length=1,
        description="Account files, in the order they are offered"
    )
    data_dir: Optional[Path] = Field(
        default=None,
        description="Directory relative account files are resolved against"
    )

    @field_validator("accounts")
    @classmethod
    def normalize_accounts(cls, v: list[str]) -> list[str]:
        """Strip blanks and give every entry the storage suffix."""
        filenames = []
        for filename in v:
            filename = filename.strip()
            if not filename:
                raise ValueError("account filename must not be empty")
            filenames.append(normalize_account_filename(filename))
        return filenames

    def account_paths(self, base_dir: Optional[Path] = None) -> list[str]:
        """
        Resolve account filenames.

        Relative names resolve against data_dir, then base_dir; with
        neither they are left relative to the working directory.
        """
        root = self.data_dir
        if root is not None and not root.is_absolute() and base_dir is not None:
            root = base_dir / root
        root = root or base_dir

        paths = []
        for filename in self.accounts:
            path = Path(filename)
            if root is not None and not path.is_absolute():
                path = root / path
            paths.append(str(path))
        return paths


def load_config(path: str) -> LedgerConfig:
    """
    Load the ledger config file.

    Raises:
        StorageError subclasses from loadfile, or ParseFailureError if
        the document is not a valid ledger config.
    """
    blob = loadfile(path)
    if not isinstance(blob, dict):
        raise ParseFailureError(f"cannot parse {path}: expected a mapping")
    try:
        return LedgerConfig.model_validate(blob)
    except ValidationError as e:
        raise ParseFailureError(f"invalid config {path}: {e}") from e

"""
Account

One named ledger backed by one storage file. An Account holds a running
total per date and a list of transactions per date. It is loaded once
when constructed, mutated in memory, and written back only when
``save()`` is called.
"""

from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from kakeibo.audit import AuditLogger
from kakeibo.errors import ParseFailureError
from kakeibo.models.ledger import AccountData, Transaction
from kakeibo.services.storage import AccountStorageInterface, YamlFileStorage
from kakeibo.services.storage.yaml_file import STORAGE_SUFFIX


def name_from_filename(filename: str) -> str:
    """Derive an account name: the base name without its .yaml suffix."""
    base = Path(filename).name
    if base.endswith(STORAGE_SUFFIX):
        base = base[: -len(STORAGE_SUFFIX)]
    return base


class Account:
    """
    A single ledger.

    Attributes:
        filename: Storage key; also the source of the default name
        name: Label matched by account-prefix resolution
        totals: date -> running total (one per date)
        transactions: date -> transactions in the order they were added
    """

    def __init__(
        self,
        filename: Optional[str] = None,
        storage: Optional[AccountStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.filename = str(filename) if filename else filename
        self.name: Optional[str] = None
        self.totals: dict[date, int] = {}
        self.transactions: dict[date, list[Transaction]] = {}
        self._extra: dict[str, Any] = {}
        self._storage = storage or YamlFileStorage()
        self._audit_logger = audit_logger

        if self.filename:
            self.load()

    def __repr__(self) -> str:
        return f"Account(name={self.name!r}, filename={self.filename!r})"

    def load(self) -> None:
        """
        Populate this account from its file.

        Raises:
            InvalidFilenameError: If filename is None or empty
            ParseFailureError: If the file does not hold an account mapping
            StorageIOError: If the file is missing or unreadable
        """
        blob = self._storage.load(self.filename)
        if blob is None:
            blob = {}
        if not isinstance(blob, dict):
            raise ParseFailureError(
                f"cannot parse {self.filename}: expected a mapping, "
                f"got {type(blob).__name__}"
            )

        try:
            data = AccountData.model_validate(blob)
        except ValidationError as e:
            raise ParseFailureError(f"cannot parse {self.filename}: {e}") from e

        self.name = data.name or name_from_filename(self.filename)
        self.totals = dict(data.totals)
        self.transactions = {d: list(ts) for d, ts in data.transactions.items()}
        self._extra = dict(data.model_extra or {})

        if self._audit_logger:
            self._audit_logger.log_account_loaded(
                account=self.name,
                filename=self.filename,
                total_dates=len(self.totals),
                transaction_dates=len(self.transactions),
            )

    def set_total(self, date: date, total: int) -> None:
        """Record the total for date, replacing any earlier one."""
        self.totals[date] = total

    def add_transaction(self, date: date, transaction: Transaction) -> None:
        """Append transaction to the list for date."""
        self.transactions.setdefault(date, []).append(transaction)

    def to_data(self) -> AccountData:
        return AccountData.model_validate({
            "name": self.name,
            "totals": self.totals,
            "transactions": self.transactions,
            **self._extra,
        })

    def save(self) -> None:
        """
        Write name, totals and transactions back to the account file.

        Raises:
            InvalidFilenameError: If filename is None or empty
            StorageIOError: If the file cannot be written
        """
        self._storage.save(self.to_data().model_dump(), self.filename)

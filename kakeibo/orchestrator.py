"""
Main Orchestrator for Kakeibo

This module ties the ledger together. The Manager:
1. Owns the configured accounts, in configuration order
2. Resolves a typed date into a calendar date (get_date)
3. Resolves a typed name prefix into one account (find_account)
4. Files one raw entry into that account (put)
5. Drives an input session and saves every account at the end

DESIGN DECISION: Resolution always happens before mutation. If the
account prefix is unknown or ambiguous, put() raises before any
account is touched, so a rejected entry leaves no trace in the ledger.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from kakeibo.account import Account
from kakeibo.audit import AuditLogger
from kakeibo.config import KakeiboSettings, LedgerConfig, get_settings
from kakeibo.errors import LedgerError, NotFoundError, NotUniqueError, StorageError
from kakeibo.models.ledger import RawEntry
from kakeibo.services.storage import AccountStorageInterface


DEFAULT_DAY_START_HOUR = 6

_SEPARATORS = re.compile(r"[/.]")
_FULL_DATE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")
_PARTIAL_DATE = re.compile(r"^\d{1,2}-\d{1,2}$")
_DAY_ONLY = re.compile(r"^\d{1,2}$")
_COMPACT_FULL = re.compile(r"^\d{8}$")
_COMPACT_PARTIAL = re.compile(r"^\d{4}$")


def compute_today(
    now: Optional[datetime] = None,
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
) -> date:
    """
    The accounting day for now.

    Entries made after midnight but before day_start_hour still belong
    to the previous calendar day.
    """
    now = now or datetime.now()
    if now.hour < day_start_hour:
        now = now - timedelta(days=1)
    return now.date()


def _make_date(year, month, day) -> Optional[date]:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def resolve_date(text: Optional[str], today: date) -> date:
    """
    Turn typed date text into a calendar date.

    Tried in order:
    1. A full date: 2024-01-31, 2024/1/31, 2024.01.31 or 20240131
    2. Month and day in today's year: 01-31, 1/31 or 0131
    3. A day of today's month: 31
    Anything else, including empty text, is today.
    """
    text = (text or "").strip()
    if not text:
        return today

    normalized = _SEPARATORS.sub("-", text)

    # Full date
    if _FULL_DATE.match(normalized):
        resolved = _make_date(*normalized.split("-"))
        if resolved:
            return resolved
    elif _COMPACT_FULL.fullmatch(text):
        resolved = _make_date(text[:4], text[4:6], text[6:])
        if resolved:
            return resolved

    # Year-prefixed month and day
    if _PARTIAL_DATE.match(normalized):
        resolved = _make_date(today.year, *normalized.split("-"))
        if resolved:
            return resolved
    elif _COMPACT_PARTIAL.fullmatch(text):
        resolved = _make_date(today.year, text[:2], text[2:])
        if resolved:
            return resolved

    # Day of the current month
    if _DAY_ONLY.match(text):
        resolved = _make_date(today.year, today.month, text)
        if resolved:
            return resolved

    return today


class EntrySource(Protocol):
    """The input collaborator: yields entries, shows errors."""

    def read(self) -> Iterable[RawEntry]:
        ...

    def report_error(self, error: LedgerError) -> None:
        ...


@dataclass
class SaveFailure:
    """An account that could not be saved, and why."""
    account: Account
    error: LedgerError


class Manager:
    """
    Routes entries into accounts.

    ``today`` is fixed when the Manager is built and reused for every
    date fallback during the session, even if the real day rolls over.
    """

    def __init__(
        self,
        accounts: list[Account],
        today: date,
        reader: Optional[EntrySource] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.accounts = list(accounts)
        self.today = today
        self._reader = reader
        self._audit_logger = audit_logger

    def get_date(self, text: Optional[str]) -> date:
        """Resolve typed date text, falling back to today."""
        return resolve_date(text, self.today)

    def find_account(self, name: Optional[str]) -> Account:
        """
        Find the one account whose name starts with name.

        The prefix is compared literally and case-sensitively.

        Raises:
            NotFoundError: If name is empty or matches no account
            NotUniqueError: If name matches more than one account
        """
        if not name:
            raise NotFoundError("")

        candidates = [
            account for account in self.accounts
            if account.name is not None and account.name.startswith(name)
        ]
        if not candidates:
            raise NotFoundError(name)
        if len(candidates) > 1:
            raise NotUniqueError(name)
        return candidates[0]

    def put(self, data: Union[RawEntry, dict]) -> Account:
        """
        File one entry.

        A total replaces the account's total for the date; anything else
        is appended as a transaction.

        Returns the account the entry was filed into.

        Raises:
            NotFoundError, NotUniqueError: If the account prefix does
                not resolve. Nothing is changed in that case.
        """
        entry = data if isinstance(data, RawEntry) else RawEntry.model_validate(data)

        entry_date = self.get_date(entry.date)
        try:
            account = self.find_account(entry.account)
        except LedgerError as e:
            if self._audit_logger:
                self._audit_logger.log_entry_rejected(
                    prefix=entry.account,
                    error_kind=e.kind.value,
                    error_message=str(e),
                )
            raise

        if entry.is_total:
            account.set_total(entry_date, entry.total)
            if self._audit_logger:
                self._audit_logger.log_total_set(
                    account=account.name,
                    entry_date=entry_date,
                    total=entry.total,
                )
        else:
            transaction = entry.to_transaction()
            account.add_transaction(entry_date, transaction)
            if self._audit_logger:
                self._audit_logger.log_transaction_added(
                    account=account.name,
                    entry_date=entry_date,
                    transaction=transaction.model_dump(),
                )

        return account

    def run(self, reader: Optional[EntrySource] = None) -> int:
        """
        Read entries until the reader is exhausted, filing each one.

        An entry that cannot be filed is reported back to the reader and
        the session carries on with the next one.

        Returns the number of entries filed.
        """
        reader = reader or self._reader
        if reader is None:
            raise ValueError("no reader to run")

        if self._audit_logger:
            self._audit_logger.log_session_started(
                accounts=[account.name for account in self.accounts],
                today=self.today,
            )

        committed = 0
        for entry in reader.read():
            try:
                self.put(entry)
            except LedgerError as e:
                reader.report_error(e)
                continue
            committed += 1

        if self._audit_logger:
            self._audit_logger.log_session_ended(committed=committed)
        return committed

    def save(self) -> list[SaveFailure]:
        """
        Save every account.

        A failing account does not stop the others from being saved.

        Returns the accounts that failed; empty if all were saved.
        """
        failures = []
        for account in self.accounts:
            try:
                account.save()
            except StorageError as e:
                failures.append(SaveFailure(account=account, error=e))
                if self._audit_logger:
                    self._audit_logger.log_save_failed(
                        account=account.name,
                        filename=account.filename,
                        error_kind=e.kind.value,
                        error_message=str(e),
                    )
                continue

            if self._audit_logger:
                self._audit_logger.log_account_saved(
                    account=account.name,
                    filename=account.filename,
                )
        return failures


def create_manager(
    config: LedgerConfig,
    base_dir: Optional[Path] = None,
    reader: Optional[EntrySource] = None,
    settings: Optional[KakeiboSettings] = None,
    now: Optional[datetime] = None,
    storage: Optional[AccountStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> Manager:
    """
    Factory function to build a Manager from a ledger config.

    Every configured account is loaded immediately; a file that cannot
    be loaded raises here, before any input is read.

    Args:
        config: Parsed ledger config
        base_dir: Directory relative account files resolve against
        reader: Input collaborator for run()
        settings: Process settings (defaults to get_settings())
        now: Session start time (defaults to the current time)
        storage: Account storage backend (defaults to YAML files)
        audit_logger: Audit logger (a new one if None)
    """
    settings = settings or get_settings()
    audit_logger = audit_logger or AuditLogger()

    today = compute_today(now, settings.day_start_hour)
    accounts = [
        Account(filename, storage=storage, audit_logger=audit_logger)
        for filename in config.account_paths(base_dir)
    ]

    return Manager(
        accounts=accounts,
        today=today,
        reader=reader,
        audit_logger=audit_logger,
    )

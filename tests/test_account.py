"""Tests for Account: load defaults, mutation and the save/load cycle."""

import pytest
from datetime import date

import yaml

from kakeibo.account import Account, name_from_filename
from kakeibo.errors import (
    ErrorKind,
    InvalidFilenameError,
    ParseFailureError,
    StorageIOError,
)
from kakeibo.models.ledger import Transaction


D1 = date(2024, 3, 1)
D2 = date(2024, 3, 2)


class TestAccountLoad:
    """Tests for loading an account at construction."""

    def test_account_without_filename_is_empty(self):
        """Test that totals and transactions are never None."""
        account = Account()
        assert account.name is None
        assert account.totals == {}
        assert account.transactions == {}

    def test_name_defaults_to_filename(self, make_account):
        account = make_account("wallet")
        assert account.name == "wallet"
        assert account.totals == {}
        assert account.transactions == {}

    def test_stored_name_wins(self, make_account):
        account = make_account("bank", name="Savings Bank")
        assert account.name == "Savings Bank"

    def test_loads_totals_and_transactions(self, make_account):
        account = make_account(
            "wallet",
            totals={D1: 5000},
            transactions={D1: [{"amount": -120, "title": "gum"}]},
        )
        assert account.totals == {D1: 5000}
        assert account.transactions == {D1: [Transaction(amount=-120, title="gum")]}

    def test_empty_document_loads_with_defaults(self, memory_storage):
        memory_storage.blobs["cash.yaml"] = None
        account = Account("cash.yaml", storage=memory_storage)
        assert account.name == "cash"
        assert account.totals == {}

    def test_non_mapping_is_a_parse_failure(self, memory_storage):
        memory_storage.blobs["cash.yaml"] = ["not", "an", "account"]
        with pytest.raises(ParseFailureError):
            Account("cash.yaml", storage=memory_storage)

    def test_invalid_totals_are_a_parse_failure(self, memory_storage):
        memory_storage.blobs["cash.yaml"] = {"totals": {D1: "plenty"}}
        with pytest.raises(ParseFailureError) as exc_info:
            Account("cash.yaml", storage=memory_storage)
        assert exc_info.value.kind == ErrorKind.PARSE_FAILURE

    def test_missing_file_propagates(self, memory_storage):
        with pytest.raises(StorageIOError):
            Account("ghost.yaml", storage=memory_storage)


class TestNameFromFilename:
    def test_strips_directory_and_suffix(self):
        assert name_from_filename("/home/me/ledger/wallet.yaml") == "wallet"

    def test_keeps_other_suffixes(self):
        assert name_from_filename("wallet.yml") == "wallet.yml"


class TestAccountMutation:
    """Tests for set_total and add_transaction."""

    def test_set_total_replaces(self):
        """Test that a later total for the same date overwrites the earlier one."""
        account = Account()
        account.set_total(D1, 500)
        account.set_total(D1, 600)
        assert account.totals == {D1: 600}

    def test_totals_per_date_are_independent(self):
        account = Account()
        account.set_total(D1, 500)
        account.set_total(D2, 700)
        assert account.totals == {D1: 500, D2: 700}

    def test_add_transaction_keeps_order(self):
        """Test that transactions for a date keep insertion order."""
        account = Account()
        t1 = Transaction(amount=-100, title="first")
        t2 = Transaction(amount=-100, title="first")
        t3 = Transaction(amount=-300, title="second")
        account.add_transaction(D1, t1)
        account.add_transaction(D1, t2)
        account.add_transaction(D1, t3)
        assert account.transactions[D1] == [t1, t2, t3]

    def test_add_transaction_creates_bucket(self):
        account = Account()
        t1 = Transaction(amount=10)
        account.add_transaction(D2, t1)
        assert account.transactions == {D2: [t1]}


class TestAccountSave:
    """Tests for saving and reloading."""

    def test_save_requires_filename(self):
        account = Account()
        with pytest.raises(InvalidFilenameError):
            account.save()

    def test_round_trip(self, tmp_path):
        """Test that save then load reproduces name, totals and transactions."""
        path = tmp_path / "wallet.yaml"
        path.write_text("name: Wallet\n", encoding="utf-8")

        account = Account(str(path))
        account.set_total(D1, 5000)
        t1 = Transaction(amount=-450, title="ramen", shop="Ichiran", category="food")
        t2 = Transaction(amount=3000, title="refund")
        account.add_transaction(D1, t1)
        account.add_transaction(D1, t2)
        account.add_transaction(D2, t1)
        account.save()

        reloaded = Account(str(path))
        assert reloaded.name == "Wallet"
        assert reloaded.totals == {D1: 5000}
        assert reloaded.transactions == {D1: [t1, t2], D2: [t1]}

    def test_saved_file_layout(self, tmp_path):
        path = tmp_path / "wallet.yaml"
        path.write_text("{}\n", encoding="utf-8")

        account = Account(str(path))
        account.add_transaction(D1, Transaction(amount=-1, title="x"))
        account.save()

        stored = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert list(stored) == ["name", "totals", "transactions"]
        assert stored["name"] == "wallet"
        assert stored["transactions"] == {
            D1: [{"amount": -1, "title": "x", "shop": None, "category": None}],
        }

    def test_save_keeps_unknown_keys(self, make_account, memory_storage):
        account = make_account("bank", currency="JPY", branch="Shibuya")
        account.set_total(D1, 100)
        account.save()

        stored = memory_storage.blobs["bank.yaml"]
        assert stored["currency"] == "JPY"
        assert stored["branch"] == "Shibuya"
        assert stored["totals"] == {D1: 100}

    def test_nothing_is_written_before_save(self, make_account, memory_storage):
        account = make_account("bank")
        account.set_total(D1, 100)
        assert memory_storage.blobs["bank.yaml"] == {}

"""Tests for settings and the ledger config file."""

import pytest
from pathlib import Path

from pydantic import ValidationError

from kakeibo.config import (
    KakeiboSettings,
    LedgerConfig,
    load_config,
    normalize_account_filename,
)
from kakeibo.errors import ErrorKind, ParseFailureError, StorageIOError


class TestNormalizeAccountFilename:
    """Tests for giving account files the storage suffix."""

    def test_adds_missing_suffix(self):
        assert normalize_account_filename("food") == "food.yaml"

    def test_keeps_yaml_suffix(self):
        assert normalize_account_filename("food.yaml") == "food.yaml"

    def test_replaces_yml_suffix(self):
        assert normalize_account_filename("food.yml") == "food.yaml"

    def test_appends_after_other_suffix(self):
        assert normalize_account_filename("bank.savings") == "bank.savings.yaml"


class TestLedgerConfig:
    """Tests for the ledger config model."""

    def test_accounts_are_normalized(self):
        config = LedgerConfig(accounts=["food", " rent.yml ", "bank.yaml"])
        assert config.accounts == ["food.yaml", "rent.yaml", "bank.yaml"]

    def test_requires_accounts(self):
        with pytest.raises(ValidationError):
            LedgerConfig(accounts=[])

    def test_rejects_blank_account(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            LedgerConfig(accounts=["food", "  "])

    def test_paths_relative_to_base_dir(self, tmp_path):
        config = LedgerConfig(accounts=["food", "/abs/rent"])
        assert config.account_paths(tmp_path) == [
            str(tmp_path / "food.yaml"),
            "/abs/rent.yaml",
        ]

    def test_paths_without_base_dir(self):
        config = LedgerConfig(accounts=["food"])
        assert config.account_paths() == ["food.yaml"]

    def test_relative_data_dir_under_base_dir(self, tmp_path):
        config = LedgerConfig(accounts=["food"], data_dir="ledgers")
        assert config.account_paths(tmp_path) == [str(tmp_path / "ledgers" / "food.yaml")]

    def test_absolute_data_dir(self, tmp_path):
        data_dir = tmp_path / "elsewhere"
        config = LedgerConfig(accounts=["food"], data_dir=data_dir)
        assert config.account_paths(Path("/ignored")) == [str(data_dir / "food.yaml")]


class TestLoadConfig:
    """Tests for reading the config file."""

    def test_load_config(self, tmp_path):
        path = tmp_path / "kakeibo.yaml"
        path.write_text("accounts:\n  - wallet\n  - bank\n", encoding="utf-8")
        config = load_config(str(path))
        assert config.accounts == ["wallet.yaml", "bank.yaml"]

    def test_missing_accounts_key(self, tmp_path):
        path = tmp_path / "kakeibo.yaml"
        path.write_text("data_dir: x\n", encoding="utf-8")
        with pytest.raises(ParseFailureError) as exc_info:
            load_config(str(path))
        assert exc_info.value.kind == ErrorKind.PARSE_FAILURE

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "kakeibo.yaml"
        path.write_text("- wallet\n", encoding="utf-8")
        with pytest.raises(ParseFailureError):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(StorageIOError):
            load_config(str(tmp_path / "nope.yaml"))


class TestKakeiboSettings:
    """Tests for environment settings."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("DAY_START_HOUR", "TOTAL_MARKER", "ASK_DATE", "LOG_LEVEL"):
            monkeypatch.delenv(f"KAKEIBO_{name}", raising=False)

    def test_defaults(self):
        settings = KakeiboSettings()
        assert settings.day_start_hour == 6
        assert settings.total_marker == "="
        assert settings.ask_date is False
        assert settings.log_level == "WARNING"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("KAKEIBO_DAY_START_HOUR", "4")
        monkeypatch.setenv("KAKEIBO_ASK_DATE", "true")
        monkeypatch.setenv("KAKEIBO_LOG_LEVEL", "debug")
        settings = KakeiboSettings()
        assert settings.day_start_hour == 4
        assert settings.ask_date is True
        assert settings.log_level == "DEBUG"

    def test_day_start_hour_bounds(self):
        with pytest.raises(ValidationError):
            KakeiboSettings(day_start_hour=24)

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            KakeiboSettings(log_level="chatty")

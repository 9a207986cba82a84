"""Configuration package."""

from kakeibo.config.settings import (
    KakeiboSettings,
    LedgerConfig,
    get_settings,
    load_config,
    normalize_account_filename,
)

__all__ = [
    "KakeiboSettings",
    "LedgerConfig",
    "get_settings",
    "load_config",
    "normalize_account_filename",
]

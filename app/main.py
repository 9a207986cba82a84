"""
Command-line Frontend for Kakeibo

Usage:
    python -m app.main CONFIG

CONFIG is a YAML file listing the account files to load. The session
reads entries until an empty amount (or Ctrl-D), then saves every
account.

Exit status:
    0 - all accounts saved
    1 - invalid settings, or an account failed to load or to save
    2 - usage error
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from kakeibo.audit import AuditLogger
from kakeibo.config import get_settings, load_config
from kakeibo.errors import LedgerError
from kakeibo.orchestrator import create_manager
from kakeibo.reader import Reader


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kakeibo",
        description="Record household income, expenses and account totals.",
    )
    parser.add_argument(
        "config",
        help="YAML file listing the account files",
    )
    return parser


def configure_logging(level: str) -> None:
    """Send kakeibo log records to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.WARNING,
    )
    logging.getLogger("kakeibo").setLevel(level)


def main(argv: Optional[list[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"kakeibo: invalid settings: {e}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level)
    logger = structlog.get_logger("kakeibo")

    config_path = Path(args.config)
    audit_logger = AuditLogger()
    reader = Reader(
        total_marker=settings.total_marker,
        ask_date=settings.ask_date,
    )

    try:
        config = load_config(str(config_path))
        manager = create_manager(
            config,
            base_dir=config_path.parent,
            reader=reader,
            settings=settings,
            audit_logger=audit_logger,
        )
    except LedgerError as e:
        logger.error("startup_failed", error_kind=e.kind.value, error=str(e))
        print(f"kakeibo: {e}", file=sys.stderr)
        return 1

    try:
        manager.run()
    finally:
        failures = manager.save()
        for failure in failures:
            print(
                f"kakeibo: could not save {failure.account.name}: {failure.error}",
                file=sys.stderr,
            )
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

"""
Data Models Package

This package contains all Pydantic models used by Kakeibo.
"""

from kakeibo.models.ledger import (
    AccountData,
    RawEntry,
    Transaction,
)
from kakeibo.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "AccountData",
    "RawEntry",
    "Transaction",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

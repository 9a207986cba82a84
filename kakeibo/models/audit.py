"""
Audit Models for Kakeibo

Every change to a ledger, and every entry that could not be filed,
produces an AuditEvent. Events are written to the structured log by
kakeibo.audit.AuditLogger.

Audit events are append-only: once built they are never modified.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Session
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"

    # Account files
    ACCOUNT_LOADED = "account_loaded"
    ACCOUNT_SAVED = "account_saved"
    SAVE_FAILED = "save_failed"

    # Entries
    TOTAL_SET = "total_set"
    TRANSACTION_ADDED = "transaction_added"
    ENTRY_REJECTED = "entry_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which ledger and which day
    account: Optional[str] = Field(
        default=None,
        description="Name of the account the event relates to"
    )
    entry_date: Optional[date] = Field(
        default=None,
        description="Resolved ledger date, for entry events"
    )

    # Correlation - one id per interactive session
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "account": self.account,
            "entry_date": self.entry_date.isoformat() if self.entry_date else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_kind": self.error_kind,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    The session correlation ID is filled in by AuditLogger.log.

    Usage:
        event = AuditEventBuilder.total_set("food", today, 1000)
        event = AuditEventBuilder.entry_rejected("fo", "not_found", "Not found: fo")
    """

    @staticmethod
    def session_started(
        accounts: list[str],
        today: date,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            entry_date=today,
            description=f"Session started with {len(accounts)} accounts",
            details={"accounts": accounts},
        )

    @staticmethod
    def session_ended(
        committed: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_ENDED,
            description=f"Session ended after {committed} entries",
            details={"committed": committed},
        )

    @staticmethod
    def account_loaded(
        account: str,
        filename: str,
        total_dates: int,
        transaction_dates: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_LOADED,
            severity=AuditSeverity.DEBUG,
            account=account,
            description=f"Account loaded: {filename}",
            details={
                "filename": filename,
                "total_dates": total_dates,
                "transaction_dates": transaction_dates,
            },
        )

    @staticmethod
    def account_saved(
        account: str,
        filename: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_SAVED,
            account=account,
            description=f"Account saved: {filename}",
            details={"filename": filename},
        )

    @staticmethod
    def save_failed(
        account: str,
        filename: str,
        error_kind: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            account=account,
            description=f"Account save failed: {filename}",
            details={"filename": filename},
            error_kind=error_kind,
            error_message=error_message,
        )

    @staticmethod
    def total_set(
        account: str,
        entry_date: date,
        total: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TOTAL_SET,
            account=account,
            entry_date=entry_date,
            description=f"Total set: {account} {entry_date.isoformat()} = {total}",
            details={"total": total},
        )

    @staticmethod
    def transaction_added(
        account: str,
        entry_date: date,
        transaction: dict,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            account=account,
            entry_date=entry_date,
            description=f"Transaction added: {account} {entry_date.isoformat()}",
            details=transaction,
        )

    @staticmethod
    def entry_rejected(
        prefix: str,
        error_kind: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.INFO,
            description=f"Entry rejected for account prefix: {prefix or '(empty)'}",
            details={"prefix": prefix},
            error_kind=error_kind,
            error_message=error_message,
        )

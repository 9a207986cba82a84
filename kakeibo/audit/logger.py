"""
Audit Logger

Every ledger change and every rejected entry is logged. This gives:
1. A trace of what was filed where during a session
2. Debugging information when a file fails to load or save

The audit logger never raises into the caller: a failure to log must
not stop an entry from being filed or an account from being saved.
Events of one session share a correlation ID.
"""

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

import structlog

from kakeibo.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Events go to the structured local log. The level of the stdlib
    ``kakeibo`` logger decides what is actually emitted.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.

        Args:
            correlation_id: Session ID attached to events that
                    don't carry their own. A new one is created if None.
        """
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("kakeibo.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was handed to the log.
        """
        if event.correlation_id is None:
            event = event.model_copy(update={"correlation_id": self.correlation_id})

        try:
            log_dict = event.to_log_dict()
            severity = event.severity.value
            if severity == "error":
                self._logger.error("audit_event", **log_dict)
            elif severity == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif severity == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            structlog.get_logger("kakeibo").error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

        return True

    def log_session_started(self, accounts: list[str], today: date) -> None:
        """Log the start of an input session."""
        self.log(AuditEventBuilder.session_started(
            accounts=accounts,
            today=today,
        ))

    def log_session_ended(self, committed: int) -> None:
        self.log(AuditEventBuilder.session_ended(committed=committed))

    def log_account_loaded(
        self,
        account: str,
        filename: str,
        total_dates: int,
        transaction_dates: int,
    ) -> None:
        """Log a successful account load."""
        self.log(AuditEventBuilder.account_loaded(
            account=account,
            filename=filename,
            total_dates=total_dates,
            transaction_dates=transaction_dates,
        ))

    def log_account_saved(self, account: str, filename: str) -> None:
        self.log(AuditEventBuilder.account_saved(
            account=account,
            filename=filename,
        ))

    def log_save_failed(
        self,
        account: str,
        filename: str,
        error_kind: str,
        error_message: str,
    ) -> None:
        """Log an account that could not be written."""
        self.log(AuditEventBuilder.save_failed(
            account=account,
            filename=filename,
            error_kind=error_kind,
            error_message=error_message,
        ))

    def log_total_set(self, account: str, entry_date: date, total: int) -> None:
        self.log(AuditEventBuilder.total_set(
            account=account,
            entry_date=entry_date,
            total=total,
        ))

    def log_transaction_added(
        self,
        account: str,
        entry_date: date,
        transaction: dict,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(
            account=account,
            entry_date=entry_date,
            transaction=transaction,
        ))

    def log_entry_rejected(
        self,
        prefix: str,
        error_kind: str,
        error_message: str,
    ) -> None:
        """Log an entry that was not filed."""
        self.log(AuditEventBuilder.entry_rejected(
            prefix=prefix,
            error_kind=error_kind,
            error_message=error_message,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One ID is used for the whole interactive session.
    """
    return uuid4()

"""
Ledger Event Logger

Every mutation and every storage problem is reported through here.
The logger:
- Writes structured JSON lines through structlog
- Never raises; a broken log sink must not break a ledger operation
- Only logs locally (there is no persisted history)
"""

from typing import Any, Callable, Optional

import structlog

from pf_dashboard.models.events import (
    EventSeverity,
    LedgerEvent,
    LedgerEventBuilder,
)


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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class LedgerEventLogger:
    """
    Central event logging service for the ledger.

    Any object with debug/info/warning/error methods taking an event name
    plus keyword arguments can stand in for the structlog logger.
    """

    def __init__(self, logger: Optional[Any] = None):
        self._logger = logger or structlog.get_logger("pf_dashboard")

    def log(self, event: LedgerEvent) -> None:
        """Log an event at the level its severity asks for."""
        self._emit(lambda: event)

    def _emit(self, build: Callable[[], LedgerEvent]) -> None:
        event_id = None
        try:
            event = build()
            event_id = str(event.event_id)
            log_dict = event.to_log_dict()
            name = event.event_type.value
            if event.severity == EventSeverity.ERROR:
                self._logger.error(name, **log_dict)
            elif event.severity == EventSeverity.WARNING:
                self._logger.warning(name, **log_dict)
            elif event.severity == EventSeverity.DEBUG:
                self._logger.debug(name, **log_dict)
            else:
                self._logger.info(name, **log_dict)
        except Exception as e:
            # Log failure but don't raise
            structlog.get_logger("pf_dashboard").error(
                "event_logging_failed",
                error=str(e),
                event_id=event_id,
            )

    def transaction_added(self, transaction_id: str, transaction_type: str, amount: str) -> None:
        self._emit(lambda: LedgerEventBuilder.transaction_added(transaction_id, transaction_type, amount))

    def transaction_updated(self, transaction_id: str, amount: str) -> None:
        self._emit(lambda: LedgerEventBuilder.transaction_updated(transaction_id, amount))

    def transaction_deleted(self, transaction_id: str) -> None:
        self._emit(lambda: LedgerEventBuilder.transaction_deleted(transaction_id))

    def category_added(self, name: str) -> None:
        self._emit(lambda: LedgerEventBuilder.category_added(name))

    def ledger_reset(self) -> None:
        self._emit(LedgerEventBuilder.ledger_reset)

    def ledger_loaded(self, key: str, category_count: int, transaction_count: int) -> None:
        self._emit(lambda: LedgerEventBuilder.ledger_loaded(key, category_count, transaction_count))

    def state_saved(self, key: str, size: int) -> None:
        self._emit(lambda: LedgerEventBuilder.state_saved(key, size))

    def save_failed(self, key: str, error_message: str) -> None:
        self._emit(lambda: LedgerEventBuilder.save_failed(key, error_message))

    def storage_cleared(self, key: str) -> None:
        self._emit(lambda: LedgerEventBuilder.storage_cleared(key))

    def storage_unavailable(self, key: str, operation: str, error_message: str) -> None:
        self._emit(lambda: LedgerEventBuilder.storage_unavailable(key, operation, error_message))

    def malformed_state(self, key: str, field: str, error_message: str) -> None:
        self._emit(lambda: LedgerEventBuilder.malformed_state(key, field, error_message))

    def invalid_input(self, issues: list[dict], transaction_id: Optional[str] = None) -> None:
        self._emit(lambda: LedgerEventBuilder.invalid_input(issues, transaction_id))

    def input_coerced(self, issues: list[dict], transaction_id: Optional[str] = None) -> None:
        self._emit(lambda: LedgerEventBuilder.input_coerced(issues, transaction_id))

    def not_found(self, transaction_id: str, operation: str) -> None:
        self._emit(lambda: LedgerEventBuilder.not_found(transaction_id, operation))

"""
Audit Logger

DESIGN DECISION: Every flow call is logged, including the ones that
never reach the model. When a user reports "the advice page said the
service is overloaded", the log shows which flow, which failure kind,
and the raw transport error the user never saw.

The audit logger:
- Is async so a sink write never blocks on the event loop
- Gracefully handles sink failures (a logging problem never changes a flow's answer)
- Supports correlation IDs to trace the events of one flow call
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finsight.models.audit import AuditEvent, AuditSeverity
from finsight.services.storage import AuditEventSink


def _configure_structlog(json_logs: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # configure_logging may switch renderers after loggers were first used
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Route structured logs to stdout at the given level.

    Called once by the application shell. Safe to call again; the last call
    wins, also for loggers that have already logged.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    _configure_structlog(json_logs)


# Configure structlog for local logging
_configure_structlog(json_logs=True)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (always)
    2. An audit sink (if one is configured)
    """

    def __init__(
        self,
        sink: Optional[AuditEventSink] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Destination for persisted events.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("finsight.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return await self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One per flow call; every event of that call carries it.
    """
    return uuid4()

"""
Audit Models for FinSight Advisory

Every flow call leaves a trail: which flow ran, whether it stopped at
the precheck, whether the model was called, and how the call ended.
This provides:
1. Debugging information when a user sees a fallback answer
2. A way to tell transient overloads from deployment misconfiguration
3. Ability to reconstruct a single flow call from its correlation ID

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each state of a flow call has its own event type.
    """
    # Precheck
    FLOW_STARTED = "flow_started"
    INPUT_REJECTED = "input_rejected"
    PRECHECK_SHORT_CIRCUIT = "precheck_short_circuit"

    # Invoking
    MODEL_INVOKED = "model_invoked"

    # Resolved
    REPLY_ACCEPTED = "reply_accepted"
    REPLY_EMPTY = "reply_empty"
    INVOCATION_FAILED = "invocation_failed"
    OUTPUT_VALUE_CORRECTED = "output_value_corrected"

    # Record store
    RECORDS_LOADED = "records_loaded"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
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

    # Context - which flow, which call
    flow_name: Optional[str] = Field(
        default=None,
        description="Name of the flow that emitted the event"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one flow call"
    )
    user_id: Optional[str] = None

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
    failure_kind: Optional[str] = None
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
            "flow_name": self.flow_name,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "user_id": self.user_id,
            "description": self.description,
            "details": self.details,
            "failure_kind": self.failure_kind,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.flow_started("goal_plan", correlation_id)
        event = AuditEventBuilder.invocation_failed("goal_plan", kind, message, correlation_id)
    """

    @staticmethod
    def flow_started(
        flow_name: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FLOW_STARTED,
            severity=AuditSeverity.DEBUG,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description=f"Flow {flow_name} started",
        )

    @staticmethod
    def input_rejected(
        flow_name: str,
        errors: list[dict],
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description=f"Input rejected with {len(errors)} validation issues",
            details={"errors": errors},
            failure_kind="validation",
        )

    @staticmethod
    def precheck_short_circuit(
        flow_name: str,
        reason: str,
        failure_kind: Optional[str],
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PRECHECK_SHORT_CIRCUIT,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description=f"Answered without the model: {reason}",
            details={"reason": reason},
            failure_kind=failure_kind,
        )

    @staticmethod
    def model_invoked(
        flow_name: str,
        prompt_length: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MODEL_INVOKED,
            severity=AuditSeverity.DEBUG,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description="Prompt rendered and sent to the model",
            details={"prompt_length": prompt_length},
        )

    @staticmethod
    def reply_accepted(
        flow_name: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPLY_ACCEPTED,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description="Model reply accepted",
        )

    @staticmethod
    def reply_empty(
        flow_name: str,
        correlation_id: UUID,
        error_message: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPLY_EMPTY,
            severity=AuditSeverity.ERROR,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description="Model returned no usable payload",
            failure_kind="empty_reply",
            error_message=error_message,
        )

    @staticmethod
    def invocation_failed(
        flow_name: str,
        failure_kind: str,
        error_message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVOCATION_FAILED,
            severity=AuditSeverity.ERROR,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description=f"Model call failed ({failure_kind})",
            failure_kind=failure_kind,
            error_message=error_message,
        )

    @staticmethod
    def output_value_corrected(
        flow_name: str,
        field: str,
        rejected_value: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OUTPUT_VALUE_CORRECTED,
            severity=AuditSeverity.WARNING,
            flow_name=flow_name,
            correlation_id=correlation_id,
            description=f"Dropped out-of-set value for {field}",
            details={"field": field, "rejected_value": rejected_value},
            failure_kind="invalid_output_value",
        )

    @staticmethod
    def records_loaded(
        user_id: str,
        counts: dict[str, int],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORDS_LOADED,
            severity=AuditSeverity.DEBUG,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Loaded {sum(counts.values())} financial records",
            details=counts,
        )


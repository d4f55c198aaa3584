"""Services package."""

from finsight.services.storage import (
    AuditEventSink,
    FinancialRecordStore,
    InMemoryAuditSink,
    InMemoryFinancialRecordStore,
    NotFoundError,
    StorageError,
)

__all__ = [
    "AuditEventSink",
    "FinancialRecordStore",
    "InMemoryAuditSink",
    "InMemoryFinancialRecordStore",
    "NotFoundError",
    "StorageError",
]

"""
Storage Services Package

Read-only access to the user's financial records, plus the append-only
audit sink. The in-memory implementations back tests and local runs.
"""

from finsight.services.storage.interface import (
    AuditEventSink,
    FinancialRecordStore,
    NotFoundError,
    StorageError,
)
from finsight.services.storage.memory_store import (
    InMemoryAuditSink,
    InMemoryFinancialRecordStore,
)

__all__ = [
    # Interfaces
    "AuditEventSink",
    "FinancialRecordStore",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditSink",
    "InMemoryFinancialRecordStore",
]

"""
Abstract Storage Interface

DESIGN DECISION: The financial record store is an external collaborator.
The advisory layer only reads from it, so the interface is read-only
and keyed by user ID. This allows us to:
1. Plug in whatever backs the web app (Firestore, PostgreSQL, ...)
2. Use in-memory storage for testing
3. Keep flow logic decoupled from storage layout

The audit sink is the write side: an append-only destination for
audit events, in addition to the local structured log.
"""

import asyncio
from abc import ABC, abstractmethod

from finsight.models.audit import AuditEvent
from finsight.models.finance import (
    ExpenseItem,
    FinancialGoal,
    FinancialSnapshot,
    IncomeItem,
    InvestmentItem,
    LoanItem,
)


class FinancialRecordStore(ABC):
    """
    Abstract interface for reading a user's financial records.

    Collections come back in insertion order.
    An unknown user has empty collections, not an error.
    """

    @abstractmethod
    async def list_income_items(self, user_id: str) -> list[IncomeItem]:
        pass

    @abstractmethod
    async def list_expense_items(self, user_id: str) -> list[ExpenseItem]:
        pass

    @abstractmethod
    async def list_investment_items(self, user_id: str) -> list[InvestmentItem]:
        pass

    @abstractmethod
    async def list_loan_items(self, user_id: str) -> list[LoanItem]:
        pass

    @abstractmethod
    async def get_goal(self, user_id: str, goal_id: str) -> FinancialGoal:
        """
        Retrieve one goal.

        Raises:
            NotFoundError: If the user has no goal with this ID
        """
        pass

    async def load_snapshot(self, user_id: str) -> FinancialSnapshot:
        """
        Load all four record collections of a user.

        The reads are independent, so they run concurrently.
        """
        income, expenses, investments, loans = await asyncio.gather(
            self.list_income_items(user_id),
            self.list_expense_items(user_id),
            self.list_investment_items(user_id),
            self.list_loan_items(user_id),
        )
        return FinancialSnapshot(
            income_sources=income,
            expenses=expenses,
            investments=investments,
            loans=loans,
        )


class AuditEventSink(ABC):
    """
    Abstract interface for audit event persistence.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Returns:
            True if stored successfully
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass

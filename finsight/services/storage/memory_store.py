"""In-memory financial record store and audit sink."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Optional
from uuid import UUID

from finsight.models.audit import AuditEvent
from finsight.models.finance import (
    ExpenseItem,
    FinancialGoal,
    IncomeItem,
    InvestmentItem,
    LoanItem,
)
from finsight.services.storage.interface import (
    AuditEventSink,
    FinancialRecordStore,
    NotFoundError,
)


class InMemoryFinancialRecordStore(FinancialRecordStore):
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._income: dict[str, list[IncomeItem]] = defaultdict(list)
        self._expenses: dict[str, list[ExpenseItem]] = defaultdict(list)
        self._investments: dict[str, list[InvestmentItem]] = defaultdict(list)
        self._loans: dict[str, list[LoanItem]] = defaultdict(list)
        self._goals: dict[str, list[FinancialGoal]] = defaultdict(list)

    async def add_income_item(self, user_id: str, item: IncomeItem) -> None:
        async with self._lock:
            self._income[user_id].append(item)

    async def add_expense_item(self, user_id: str, item: ExpenseItem) -> None:
        async with self._lock:
            self._expenses[user_id].append(item)

    async def add_investment_item(self, user_id: str, item: InvestmentItem) -> None:
        async with self._lock:
            self._investments[user_id].append(item)

    async def add_loan_item(self, user_id: str, item: LoanItem) -> None:
        async with self._lock:
            self._loans[user_id].append(item)

    async def add_goal(self, user_id: str, goal: FinancialGoal) -> None:
        async with self._lock:
            self._goals[user_id].append(goal)

    async def list_income_items(self, user_id: str) -> list[IncomeItem]:
        async with self._lock:
            return list(self._income.get(user_id, []))

    async def list_expense_items(self, user_id: str) -> list[ExpenseItem]:
        async with self._lock:
            return list(self._expenses.get(user_id, []))

    async def list_investment_items(self, user_id: str) -> list[InvestmentItem]:
        async with self._lock:
            return list(self._investments.get(user_id, []))

    async def list_loan_items(self, user_id: str) -> list[LoanItem]:
        async with self._lock:
            return list(self._loans.get(user_id, []))

    async def get_goal(self, user_id: str, goal_id: str) -> FinancialGoal:
        async with self._lock:
            for goal in self._goals.get(user_id, []):
                if goal.id == goal_id:
                    return goal
        raise NotFoundError(f"Goal {goal_id} not found for user {user_id}")


class InMemoryAuditSink(AuditEventSink):
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        async with self._lock:
            self._events.append(event)
            return True

    async def get_events(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> list[AuditEvent]:
        async with self._lock:
            if correlation_id is None:
                return list(self._events)
            return [e for e in self._events if e.correlation_id == correlation_id]

"""
Shared fixtures.

No real model calls in tests: flows get a StubAdapter that records
every prompt it receives and answers with a canned reply or error.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

import pytest

from finsight.agents.model_adapter import ModelInvocationAdapter
from finsight.audit.logger import AuditLogger
from finsight.models.finance import (
    ExpenseCategory,
    ExpenseItem,
    ExpenseType,
    FinancialGoal,
    Frequency,
    GoalPriority,
    GoalType,
    IncomeItem,
    InvestmentItem,
    LoanItem,
)
from finsight.services.storage import InMemoryAuditSink


class StubAdapter(ModelInvocationAdapter):
    """
    Test double for the model.

    reply: a contract instance, a dict (validated against the contract
           on each call) or None for "no payload"
    error: raised instead of replying
    """

    def __init__(self, reply: Any = None, error: Optional[BaseException] = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, type]] = []

    async def invoke(self, prompt, contract):
        self.calls.append((prompt, contract))
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, dict):
            return contract.model_validate(self.reply)
        return self.reply

    @property
    def last_prompt(self) -> str:
        return self.calls[-1][0]


@pytest.fixture
def audit_sink():
    return InMemoryAuditSink()


@pytest.fixture
def audit_logger(audit_sink):
    return AuditLogger(audit_sink)


@pytest.fixture
def salary():
    return IncomeItem(id="inc-1", name="Salary", amount=Decimal("85000"), frequency=Frequency.MONTHLY)


@pytest.fixture
def rent():
    return ExpenseItem(
        id="exp-1",
        name="Rent",
        amount=Decimal("25000"),
        type=ExpenseType.FIXED,
        category=ExpenseCategory.HOUSING,
        frequency=Frequency.MONTHLY,
    )


@pytest.fixture
def groceries():
    return ExpenseItem(
        id="exp-2",
        name="Groceries",
        amount=Decimal("8000.50"),
        type=ExpenseType.VARIABLE,
        category=ExpenseCategory.FOOD,
    )


@pytest.fixture
def index_fund():
    return InvestmentItem(
        id="inv-1",
        name="Nifty Index Fund",
        type="Mutual Funds",
        current_value=Decimal("120000"),
        initial_investment=Decimal("100000"),
        purchase_date=date(2022, 4, 1),
    )


@pytest.fixture
def car_loan():
    return LoanItem(
        id="loan-1",
        name="Car Loan",
        type="Auto Loan",
        outstanding_balance=Decimal("300000"),
        monthly_payment=Decimal("9500"),
        interest_rate=Decimal("8.5"),
    )


@pytest.fixture
def house_goal():
    return FinancialGoal(
        id="goal-1",
        name="House down payment",
        goal_type=GoalType.HOUSE,
        target_amount=Decimal("1000000"),
        current_amount=Decimal("250000"),
        target_date=date(2028, 12, 31),
        priority=GoalPriority.HIGH,
    )

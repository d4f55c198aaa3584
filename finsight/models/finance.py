"""
Financial Value Schemas for FinSight Advisory

These models are the shared vocabulary of every advisory flow.
The record store supplies them; the flows only read them.

They are designed to:
1. Enforce closed sets (categories, goal types, priorities) at runtime
2. Reject negative amounts before any model call
3. Accept records in the store's camelCase shape as well as snake_case
4. Stay immutable for the duration of a flow call

DESIGN DECISION: Amounts are Decimal, never float.
A prompt quotes the amount back to the user, and "1500.5" must not
come back as "1500.4999999".
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Closed sets
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Expense categories.

    DESIGN DECISION: Explicit categories rather than free text.
    The category suggestion flow may never surface anything else.
    """
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    INSURANCE = "Insurance"
    PERSONAL_CARE = "Personal Care"
    ENTERTAINMENT = "Entertainment"
    DEBT_PAYMENTS = "Debt Payments"
    SAVINGS_INVESTMENTS = "Savings/Investments"
    OTHER = "Other"


class ExpenseType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class Frequency(str, Enum):
    """How often an income or expense recurs."""
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    YEARLY = "yearly"
    ONE_TIME = "one-time"


class GoalType(str, Enum):
    RETIREMENT = "Retirement"
    HOUSE = "House"
    EDUCATION = "Education"
    VACATION = "Vacation"
    EMERGENCY_FUND = "Emergency Fund"
    DEBT_REPAYMENT = "Debt Repayment"
    MAJOR_PURCHASE = "Major Purchase"
    OTHER = "Other"


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalStatus(str, Enum):
    """Progress status of a saved goal, as tracked by the goal store."""
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    ACHIEVED = "achieved"
    ON_HOLD = "on-hold"
    NOT_STARTED = "not-started"
    OFF_TRACK = "off-track"


class ScenarioType(str, Enum):
    """What-if scenarios. Values are the app's camelCase identifiers."""
    CAREER_CHANGE = "careerChange"
    INVESTMENT_STRATEGY = "investmentStrategy"
    MAJOR_PURCHASE = "majorPurchase"


EXPENSE_CATEGORIES: tuple[str, ...] = tuple(cat.value for cat in ExpenseCategory)


def is_expense_category(value: Optional[str]) -> bool:
    """Check membership in the closed expense-category set (exact match)."""
    return value in EXPENSE_CATEGORIES


# =============================================================================
# SHARED FIELD TYPES
# =============================================================================

Amount = Annotated[Decimal, Field(ge=0)]


def parse_iso_date(value: Any) -> Any:
    """
    Accept a full ISO timestamp where a date is expected.

    Browser-side stores write dates with `toISOString()`
    ("2024-03-01T00:00:00.000Z"); only the calendar date matters here.
    """
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


IsoDate = Annotated[date, BeforeValidator(parse_iso_date)]


class FinanceModel(BaseModel):
    """Base for every value schema and flow contract."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# VALUE ENTITIES
# =============================================================================

class IncomeItem(FinanceModel):
    """A single source of income."""

    id: Optional[str] = None
    name: str = Field(..., description="Income source name")
    amount: Amount = Field(..., description="Amount per occurrence")
    frequency: Optional[Frequency] = None


class ExpenseItem(FinanceModel):
    """A recurring or one-time expense (not a transaction log entry)."""

    id: Optional[str] = None
    name: str
    amount: Amount
    type: ExpenseType
    category: ExpenseCategory
    frequency: Optional[Frequency] = None


class InvestmentItem(FinanceModel):
    """A held investment."""

    id: Optional[str] = None
    name: str
    type: str = Field(
        ...,
        description="Stocks, Bonds, Mutual Funds, ETFs, Real Estate, ..."
    )
    current_value: Amount
    initial_investment: Optional[Amount] = None
    purchase_date: Optional[IsoDate] = None


class LoanItem(FinanceModel):
    """An outstanding loan."""

    id: Optional[str] = None
    name: str
    type: str = Field(
        ...,
        description="Mortgage, Student Loan, Personal Loan, Auto Loan, ..."
    )
    outstanding_balance: Amount
    monthly_payment: Amount
    interest_rate: Optional[Annotated[Decimal, Field(ge=0)]] = Field(
        default=None,
        description="Annual interest rate as a percentage, e.g. 8.5"
    )
    original_amount: Optional[Amount] = None
    start_date: Optional[IsoDate] = None


class FinancialGoal(FinanceModel):
    """
    A saved financial goal.

    current_amount may exceed target_amount: that is an achieved goal,
    not an error.
    """

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    goal_type: GoalType
    target_amount: Annotated[Decimal, Field(gt=0)]
    current_amount: Amount
    target_date: Optional[IsoDate] = None
    priority: GoalPriority
    status: Optional[GoalStatus] = None


class FinancialSnapshot(FinanceModel):
    """
    The four record collections of one user, as loaded from the store.

    Order inside each collection is preserved; it only affects prompt
    text ordering.
    """

    income_sources: list[IncomeItem] = Field(default_factory=list)
    expenses: list[ExpenseItem] = Field(default_factory=list)
    investments: list[InvestmentItem] = Field(default_factory=list)
    loans: list[LoanItem] = Field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return bool(self.income_sources or self.expenses or self.investments or self.loans)

"""
Flow Contracts for FinSight Advisory

Per-flow request and response shapes, built from the value schemas.

Request contracts are lenient where a flow has its own literal answer
for a bad value (e.g. a zero target amount gets a "must be positive"
plan, not a schema error). Everything else is rejected here, before a
prompt is rendered.

Response contracts double as the reply contracts the model must
satisfy. They forbid extra fields: a reply that validates contains
only what the contract allows.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

from pydantic import ConfigDict, Field, model_validator

from finsight.models.finance import (
    ExpenseCategory,
    ExpenseItem,
    FinanceModel,
    FinancialGoal,
    FinancialSnapshot,
    Frequency,
    GoalPriority,
    GoalType,
    IncomeItem,
    InvestmentItem,
    IsoDate,
    LoanItem,
    ScenarioType,
)


class ContractModel(FinanceModel):
    """Base for response contracts: no field outside the declared shape."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# REQUEST CONTRACTS
# =============================================================================

class BackwardAnalysisInput(FinanceModel):
    """A past financial decision to analyze retrospectively."""

    decision_type: str = Field(
        default="",
        description="Investment, Major Purchase, Loan Taken, Savings Strategy Change, ..."
    )
    description: str = ""
    amount_involved: Decimal = Decimal("0")
    decision_date: str = Field(
        default="",
        description="Date the decision was made (YYYY-MM-DD)"
    )
    actual_outcome: str = ""
    # Present-day context only; the analysis is about the past decision
    current_financial_context: Optional[FinancialSnapshot] = None


class FinancialAdviceInput(FinanceModel):
    """Free-text situation plus whatever structured records exist."""

    financial_situation: Optional[str] = None
    financial_goals: Optional[str] = None
    risk_tolerance: Optional[str] = Field(
        default=None,
        description="low, medium, high (free text)"
    )
    income_sources: Optional[list[IncomeItem]] = None
    expenses: Optional[list[ExpenseItem]] = None
    investments: Optional[list[InvestmentItem]] = None
    loans: Optional[list[LoanItem]] = None


class SpendingAnalysisInput(FinanceModel):
    expense_items: list[ExpenseItem] = Field(default_factory=list)
    income_items: Optional[list[IncomeItem]] = None
    time_period: str = Field(
        ...,
        description="Period to frame the analysis in, e.g. 'last_month'"
    )


class GoalPlanInput(FinanceModel):
    """
    One goal to plan for.

    Amounts are unconstrained here: the flow answers sign problems
    with its own literal plan text.
    """

    goal_name: str = Field(..., min_length=1)
    goal_type: GoalType
    target_amount: Decimal
    current_amount: Decimal
    target_date: Optional[IsoDate] = None
    priority: GoalPriority

    @property
    def is_achieved(self) -> bool:
        """Saved at least the target. Over-saving counts as achieved."""
        return self.current_amount >= self.target_amount

    @classmethod
    def from_goal(cls, goal: FinancialGoal) -> "GoalPlanInput":
        """Build a plan request from a saved goal."""
        return cls(
            goal_name=goal.name,
            goal_type=goal.goal_type,
            target_amount=goal.target_amount,
            current_amount=goal.current_amount,
            target_date=goal.target_date,
            priority=goal.priority,
        )


class GoalSuggestionsInput(FinanceModel):
    income_sources: Optional[list[IncomeItem]] = None
    expenses: Optional[list[ExpenseItem]] = None
    investments: Optional[list[InvestmentItem]] = None
    loans: Optional[list[LoanItem]] = None


class ExpenseCategoryInput(FinanceModel):
    expense_name: Optional[str] = None


class FinancialOverviewInput(FinanceModel):
    income_sources: Optional[list[IncomeItem]] = None
    expenses: Optional[list[ExpenseItem]] = None
    investments: Optional[list[InvestmentItem]] = None
    loans: Optional[list[LoanItem]] = None


# =============================================================================
# DERIVED MONTHLY FIGURES
# =============================================================================

WEEKS_PER_MONTH = Decimal("4.33")

_CENT = Decimal("0.01")
_TENTH = Decimal("0.1")


def _to_monthly(amount: Decimal, frequency: Optional[Frequency]) -> Decimal:
    if frequency == Frequency.WEEKLY:
        return amount * WEEKS_PER_MONTH
    if frequency in (Frequency.YEARLY, Frequency.ONE_TIME):
        return amount / 12
    return amount


def _monthly_total(items: Iterable[Any], frequencies: frozenset[Frequency]) -> Decimal:
    """Sum items per month. Items with any other frequency (or none) are left out."""
    return sum(
        (_to_monthly(item.amount, item.frequency) for item in items if item.frequency in frequencies),
        Decimal("0"),
    )


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def _share_of(part: Decimal, whole: Decimal) -> Decimal:
    """part as a percentage of whole, one decimal place. Zero for no whole."""
    if whole <= 0:
        return Decimal("0")
    return (part / whole * 100).quantize(_TENTH, rounding=ROUND_HALF_UP)


class CalculatedMetrics(FinanceModel):
    """
    Key monthly figures for the financial analysis.

    Rates are percentages (20.5 means 20.5%). Savings can be negative
    when expenses exceed income.
    """

    monthly_income: Decimal
    total_monthly_expenses: Decimal
    monthly_savings: Decimal
    savings_rate: Decimal
    debt_to_income_ratio: Decimal
    investment_rate: Decimal

    @classmethod
    def from_snapshot(cls, snapshot: FinancialSnapshot) -> "CalculatedMetrics":
        """
        Derive the metrics from stored records.

        Income counts monthly and yearly items. Expenses count monthly,
        yearly and weekly items plus every loan's monthly payment.
        Investing is the Savings/Investments expense category, with
        one-time items spread over a year.
        """
        income = _monthly_total(
            snapshot.income_sources,
            frozenset({Frequency.MONTHLY, Frequency.YEARLY}),
        )
        loan_payments = sum((loan.monthly_payment for loan in snapshot.loans), Decimal("0"))
        expenses = loan_payments + _monthly_total(
            snapshot.expenses,
            frozenset({Frequency.MONTHLY, Frequency.YEARLY, Frequency.WEEKLY}),
        )
        investing = _monthly_total(
            [e for e in snapshot.expenses if e.category == ExpenseCategory.SAVINGS_INVESTMENTS],
            frozenset(Frequency),
        )
        savings = income - expenses

        return cls(
            monthly_income=_money(income),
            total_monthly_expenses=_money(expenses),
            monthly_savings=_money(savings),
            savings_rate=_share_of(savings, income),
            debt_to_income_ratio=_share_of(loan_payments, income),
            investment_rate=_share_of(investing, income),
        )


class FinancialAnalysisInput(FinanceModel):
    """The four record collections plus their pre-calculated metrics."""

    income_sources: Optional[list[IncomeItem]] = None
    expenses: Optional[list[ExpenseItem]] = None
    investments: Optional[list[InvestmentItem]] = None
    loans: Optional[list[LoanItem]] = None
    calculated_metrics: CalculatedMetrics


# =============================================================================
# WHAT-IF SCENARIOS
# =============================================================================

class CurrentFinancials(FinanceModel):
    """Where the user stands today, as monthly totals and balances."""

    total_monthly_income: Decimal
    total_monthly_expenses: Decimal = Field(
        ...,
        description="Including loan payments"
    )
    total_investments_value: Decimal
    total_debt: Decimal

    @property
    def net_monthly_savings(self) -> Decimal:
        return self.total_monthly_income - self.total_monthly_expenses

    @classmethod
    def from_snapshot(cls, snapshot: FinancialSnapshot) -> "CurrentFinancials":
        """
        Derive today's figures from stored records.

        Yearly and one-time items are spread over twelve months.
        Investments count at their initial value.
        """
        income = _monthly_total(
            snapshot.income_sources,
            frozenset({Frequency.MONTHLY, Frequency.YEARLY, Frequency.ONE_TIME}),
        )
        expenses = _monthly_total(snapshot.expenses, frozenset(Frequency)) + sum(
            (loan.monthly_payment for loan in snapshot.loans), Decimal("0")
        )
        return cls(
            total_monthly_income=_money(income),
            total_monthly_expenses=_money(expenses),
            total_investments_value=sum(
                (inv.initial_investment or Decimal("0") for inv in snapshot.investments),
                Decimal("0"),
            ),
            total_debt=sum((loan.outstanding_balance for loan in snapshot.loans), Decimal("0")),
        )


# Scenario amounts are unconstrained: the flow answers sign problems
# with its own literal text.

class CareerChangeParameters(FinanceModel):
    current_monthly_salary: Decimal
    new_monthly_salary: Decimal
    years_to_simulate: int
    annual_growth_rate: Decimal = Field(
        ...,
        description="Annual salary growth as a percentage"
    )


class InvestmentStrategyParameters(FinanceModel):
    monthly_investment_amount: Decimal
    current_strategy_name: str
    current_strategy_return: Decimal = Field(
        ...,
        description="Annual return as a percentage, e.g. 5.5"
    )
    new_strategy_name: str
    new_strategy_return: Decimal
    years_to_simulate: int


class MajorPurchaseParameters(FinanceModel):
    purchase_type: str = Field(
        ...,
        description="Property, Vehicle, ..."
    )
    total_cost: Decimal
    down_payment: Decimal
    interest_rate: Decimal
    loan_tenure_years: int
    monthly_rent: Optional[Decimal] = Field(
        default=None,
        description="Rent paid today, for a property purchase"
    )


class CareerChangeProjections(FinanceModel):
    """Year-by-year figures for both career paths, year 1 first."""

    current_path_annual_income: list[Decimal]
    new_path_annual_income: list[Decimal]
    current_path_cumulative_savings: list[Decimal]
    new_path_cumulative_savings: list[Decimal]


class YearProjection(FinanceModel):
    year: int
    fd_value: Decimal = Field(
        ...,
        description="Year-end value under the current strategy"
    )
    new_strategy_value: Decimal


class InvestmentStrategyProjections(FinanceModel):
    fd_final_amount: Decimal = Field(
        ...,
        description="Final value under the current strategy"
    )
    new_strategy_final_amount: Decimal
    total_investment_made: Decimal
    year_by_year_projections: list[YearProjection]

    @property
    def difference_final_amount(self) -> Decimal:
        return self.new_strategy_final_amount - self.fd_final_amount


class MajorPurchaseProjections(FinanceModel):
    final_net_worth_with_purchase: Decimal
    final_net_worth_without_purchase: Decimal = Field(
        ...,
        description="Net worth if the money is invested instead"
    )
    monthly_emi: Decimal = Field(..., alias="monthlyEMI")


ScenarioParameters = Union[CareerChangeParameters, InvestmentStrategyParameters, MajorPurchaseParameters]
SimulationProjections = Union[CareerChangeProjections, InvestmentStrategyProjections, MajorPurchaseProjections]

_SCENARIO_SHAPES: dict[ScenarioType, tuple[type, type]] = {
    ScenarioType.CAREER_CHANGE: (CareerChangeParameters, CareerChangeProjections),
    ScenarioType.INVESTMENT_STRATEGY: (InvestmentStrategyParameters, InvestmentStrategyProjections),
    ScenarioType.MAJOR_PURCHASE: (MajorPurchaseParameters, MajorPurchaseProjections),
}


class WhatIfAnalysisInput(FinanceModel):
    """
    One simulated scenario to explain.

    The simulation itself runs in the app; this carries its inputs and
    key projections. Parameters and projections must both match the
    scenario type.
    """

    current_financials: CurrentFinancials
    scenario_type: ScenarioType
    scenario_parameters: ScenarioParameters
    simulation_projections: SimulationProjections

    @model_validator(mode="after")
    def check_scenario_shapes(self) -> "WhatIfAnalysisInput":
        parameters, projections = _SCENARIO_SHAPES[self.scenario_type]
        if not isinstance(self.scenario_parameters, parameters):
            raise ValueError(f"scenario parameters do not match scenario type {self.scenario_type.value}")
        if not isinstance(self.simulation_projections, projections):
            raise ValueError(f"simulation projections do not match scenario type {self.scenario_type.value}")
        return self


# =============================================================================
# RESPONSE CONTRACTS
# =============================================================================

class BackwardAnalysisOutput(ContractModel):
    analysis: str = Field(
        ...,
        description=(
            "Markdown analysis of the past decision: alternatives, outcome "
            "comparison, lessons learned, recommendations."
        )
    )


class FinancialAdviceOutput(ContractModel):
    advice: str = Field(
        ...,
        description="Personalized financial advice in Markdown (headings and lists)."
    )


class SpendingAnalysisOutput(ContractModel):
    analysis: str = Field(
        ...,
        description="Markdown spending analysis with patterns and savings suggestions."
    )


class GoalPlanOutput(ContractModel):
    plan: str = Field(
        ...,
        description="Markdown plan: savings, investment approach, monitoring."
    )


class GoalRecommendation(ContractModel):
    goal_idea: str = Field(
        ...,
        description="A concise, actionable financial goal idea."
    )
    related_advice: str = Field(
        ...,
        description="Actionable advice for this goal idea, a short paragraph or Markdown bullets."
    )


class GoalSuggestionsOutput(ContractModel):
    recommendations: list[GoalRecommendation] = Field(
        ...,
        description="2-3 financial goal ideas, each with related advice."
    )


class ExpenseCategoryOutput(ContractModel):
    """What callers see: a category, if any, is always in the closed set."""

    suggested_category: Optional[ExpenseCategory] = None
    reasoning: Optional[str] = None


class ExpenseCategoryReply(ContractModel):
    """
    What the model may send back.

    The category is a free string here; the flow checks it against
    the closed set and drops it if it does not belong.
    """

    suggested_category: Optional[str] = Field(
        default=None,
        description="One of the available categories, or omitted if none fits."
    )
    reasoning: Optional[str] = Field(
        default=None,
        description="Brief explanation for the suggestion, or why none was made."
    )


class FinancialOverviewOutput(ContractModel):
    overall_condition: str = Field(
        ...,
        description="Brief summary of financial health, max 2 sentences."
    )
    key_insights: list[str] = Field(
        ...,
        description="2-4 concise observations."
    )
    actionable_suggestions: list[str] = Field(
        ...,
        description="2-4 concrete suggestions."
    )
    potential_risks: list[str] = Field(
        default_factory=list,
        description="0-3 potential risks."
    )
    positive_aspects: list[str] = Field(
        default_factory=list,
        description="0-3 positive aspects."
    )


class FinancialAnalysisOutput(ContractModel):
    analysis: str = Field(
        ...,
        description=(
            "Markdown financial analysis: savings, investments, debt, "
            "spending habits and actionable recommendations."
        )
    )


class WhatIfAnalysisOutput(ContractModel):
    analysis: str = Field(
        ...,
        description="Markdown analysis of the what-if scenario."
    )

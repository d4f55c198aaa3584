"""
Advisory Flows

The nine operations the app offers. Each is a thin subclass of
AdvisoryFlow: its schemas, its template, its fallbacks and the
deterministic rules that can answer without the model.
"""

from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from finsight.flows.base import AdvisoryFlow, ShortCircuit, TextAdvisoryFlow
from finsight.flows.fallbacks import (
    BACKWARD_ANALYSIS_FALLBACKS,
    BACKWARD_ANALYSIS_INSUFFICIENT,
    CAREER_CHANGE_MISSING_FINANCIALS,
    DOWN_PAYMENT_NEGATIVE,
    EXPENSE_CATEGORY_FALLBACKS,
    EXPENSE_NAME_TOO_SHORT,
    FINANCIAL_ADVICE_FALLBACKS,
    FINANCIAL_ANALYSIS_FALLBACKS,
    FINANCIAL_OVERVIEW_FALLBACKS,
    GENERIC_FINANCIAL_ADVICE,
    GENERIC_GOAL_RECOMMENDATIONS,
    GOAL_ALREADY_ACHIEVED,
    GOAL_CURRENT_NEGATIVE,
    GOAL_PLAN_FALLBACKS,
    GOAL_SUGGESTIONS_FALLBACKS,
    GOAL_TARGET_NOT_POSITIVE,
    INVALID_CATEGORY_SUGGESTED,
    MONTHLY_INVESTMENT_NOT_POSITIVE,
    MONTHLY_RENT_NEGATIVE,
    NO_EXPENSE_DATA,
    NO_FINANCIAL_DATA,
    NOT_ENOUGH_FINANCIAL_DATA,
    PURCHASE_COST_NOT_POSITIVE,
    SPENDING_ANALYSIS_FALLBACKS,
    SUGGESTIONS_UNAVAILABLE_IDEA,
    WHAT_IF_ANALYSIS_FALLBACKS,
)
from finsight.agents.model_adapter import FailureKind
from finsight.models.audit import AuditEventBuilder
from finsight.models.contracts import (
    BackwardAnalysisInput,
    BackwardAnalysisOutput,
    CareerChangeProjections,
    ExpenseCategoryInput,
    ExpenseCategoryOutput,
    ExpenseCategoryReply,
    FinancialAdviceInput,
    FinancialAdviceOutput,
    FinancialAnalysisInput,
    FinancialAnalysisOutput,
    FinancialOverviewInput,
    FinancialOverviewOutput,
    GoalPlanInput,
    GoalPlanOutput,
    GoalRecommendation,
    GoalSuggestionsInput,
    GoalSuggestionsOutput,
    InvestmentStrategyProjections,
    SpendingAnalysisInput,
    SpendingAnalysisOutput,
    WhatIfAnalysisInput,
    WhatIfAnalysisOutput,
)
from finsight.models.finance import ExpenseCategory, ScenarioType, is_expense_category
from finsight.prompts.renderer import format_inr, format_scalar, render_prompt
from finsight.prompts.templates import (
    BACKWARD_ANALYSIS_TEMPLATE,
    EXPENSE_CATEGORY_TEMPLATE,
    FINANCIAL_ADVICE_TEMPLATE,
    FINANCIAL_ANALYSIS_TEMPLATE,
    FINANCIAL_OVERVIEW_TEMPLATE,
    GOAL_PLAN_TEMPLATE,
    GOAL_SUGGESTIONS_TEMPLATE,
    SPENDING_ANALYSIS_TEMPLATE,
    WHAT_IF_ANALYSIS_TEMPLATE,
)


# Below this many characters an expense name says too little to categorize
MIN_EXPENSE_NAME_LENGTH = 3

MAX_GOAL_RECOMMENDATIONS = 3
MIN_GOAL_RECOMMENDATIONS = 2


def _has_records(request: Any) -> bool:
    return any(
        getattr(request, field)
        for field in ("income_sources", "expenses", "investments", "loans")
    )


# =============================================================================
# BACKWARD ANALYSIS
# =============================================================================

class BackwardAnalysisFlow(TextAdvisoryFlow[BackwardAnalysisInput, BackwardAnalysisOutput]):
    """Reflect on a past financial decision and its outcome."""

    name = "backward_analysis"
    input_model = BackwardAnalysisInput
    reply_model = BackwardAnalysisOutput
    template = BACKWARD_ANALYSIS_TEMPLATE
    fallbacks = BACKWARD_ANALYSIS_FALLBACKS
    output_field = "analysis"

    def precheck(self, request: BackwardAnalysisInput) -> Optional[ShortCircuit]:
        incomplete = (
            not request.decision_type
            or not request.description
            or request.amount_involved <= 0
            or not request.decision_date
            or not request.actual_outcome
        )
        if incomplete:
            return ShortCircuit(
                output=self.make_output(BACKWARD_ANALYSIS_INSUFFICIENT),
                reason="decision details incomplete",
            )
        return None


# =============================================================================
# FINANCIAL ADVICE
# =============================================================================

class FinancialAdviceFlow(TextAdvisoryFlow[FinancialAdviceInput, FinancialAdviceOutput]):
    """Personalized advice from free text, structured records, or both."""

    name = "financial_advice"
    input_model = FinancialAdviceInput
    reply_model = FinancialAdviceOutput
    template = FINANCIAL_ADVICE_TEMPLATE
    fallbacks = FINANCIAL_ADVICE_FALLBACKS
    output_field = "advice"

    def precheck(self, request: FinancialAdviceInput) -> Optional[ShortCircuit]:
        # Risk tolerance alone does not describe a situation
        has_text = bool(request.financial_situation or request.financial_goals)
        if not has_text and not _has_records(request):
            return ShortCircuit(
                output=self.make_output(GENERIC_FINANCIAL_ADVICE),
                reason="no situation, goals or records",
            )
        return None


# =============================================================================
# SPENDING ANALYSIS
# =============================================================================

class SpendingAnalysisFlow(TextAdvisoryFlow[SpendingAnalysisInput, SpendingAnalysisOutput]):
    """Spending patterns over a named period."""

    name = "spending_analysis"
    input_model = SpendingAnalysisInput
    reply_model = SpendingAnalysisOutput
    template = SPENDING_ANALYSIS_TEMPLATE
    fallbacks = SPENDING_ANALYSIS_FALLBACKS
    output_field = "analysis"

    def precheck(self, request: SpendingAnalysisInput) -> Optional[ShortCircuit]:
        if not request.expense_items:
            return ShortCircuit(
                output=self.make_output(NO_EXPENSE_DATA),
                reason="no expense items",
            )
        return None


# =============================================================================
# GOAL PLAN
# =============================================================================

class GoalPlanFlow(TextAdvisoryFlow[GoalPlanInput, GoalPlanOutput]):
    """
    A step-by-step plan for one goal.

    Amount rules are checked in order: target must be positive, current
    must not be negative, and a goal already met gets congratulated
    instead of planned.
    """

    name = "goal_plan"
    input_model = GoalPlanInput
    reply_model = GoalPlanOutput
    template = GOAL_PLAN_TEMPLATE
    fallbacks = GOAL_PLAN_FALLBACKS
    output_field = "plan"

    def precheck(self, request: GoalPlanInput) -> Optional[ShortCircuit]:
        if request.target_amount <= 0:
            return ShortCircuit(
                output=self.make_output(GOAL_TARGET_NOT_POSITIVE),
                reason="target amount not positive",
                kind=FailureKind.VALIDATION,
            )
        if request.current_amount < 0:
            return ShortCircuit(
                output=self.make_output(GOAL_CURRENT_NEGATIVE),
                reason="current amount negative",
                kind=FailureKind.VALIDATION,
            )
        if request.is_achieved:
            text = GOAL_ALREADY_ACHIEVED.format(
                goal_name=request.goal_name,
                current_amount=format_scalar(request.current_amount),
                target_amount=format_scalar(request.target_amount),
            )
            return ShortCircuit(
                output=self.make_output(text),
                reason="goal already achieved",
                kind=None,
            )
        return None


# =============================================================================
# GOAL SUGGESTIONS
# =============================================================================

class GoalSuggestionsFlow(AdvisoryFlow[GoalSuggestionsInput, GoalSuggestionsOutput]):
    """
    Two or three goal ideas from the user's records.

    There is no precheck: with no records at all the model still
    suggests sensible starter goals. A failed call still yields two
    generic recommendations after one that explains the failure.
    """

    name = "goal_suggestions"
    input_model = GoalSuggestionsInput
    reply_model = GoalSuggestionsOutput
    template = GOAL_SUGGESTIONS_TEMPLATE
    fallbacks = GOAL_SUGGESTIONS_FALLBACKS

    def make_output(self, text: str) -> GoalSuggestionsOutput:
        notice = GoalRecommendation(goal_idea=SUGGESTIONS_UNAVAILABLE_IDEA, related_advice=text)
        return GoalSuggestionsOutput(recommendations=[notice, *GENERIC_GOAL_RECOMMENDATIONS])

    def empty_reply_output(self) -> GoalSuggestionsOutput:
        return GoalSuggestionsOutput(recommendations=list(GENERIC_GOAL_RECOMMENDATIONS))

    async def resolve(
        self,
        request: GoalSuggestionsInput,
        reply: GoalSuggestionsOutput,
        correlation_id: UUID,
    ) -> Optional[GoalSuggestionsOutput]:
        recommendations = list(reply.recommendations[:MAX_GOAL_RECOMMENDATIONS])
        if not recommendations:
            return None

        # Top up a single idea with generic ones
        for generic in GENERIC_GOAL_RECOMMENDATIONS:
            if len(recommendations) >= MIN_GOAL_RECOMMENDATIONS:
                break
            recommendations.append(generic)

        return GoalSuggestionsOutput(recommendations=recommendations)


# =============================================================================
# EXPENSE CATEGORY
# =============================================================================

class ExpenseCategoryFlow(AdvisoryFlow[ExpenseCategoryInput, ExpenseCategoryOutput]):
    """
    Suggest a category for an expense name.

    The reply's category is a free string; anything outside the closed
    set is dropped here and the drop is audit-logged, so callers only
    ever see a valid ExpenseCategory or none at all.
    """

    name = "expense_category"
    input_model = ExpenseCategoryInput
    reply_model = ExpenseCategoryReply
    template = EXPENSE_CATEGORY_TEMPLATE
    fallbacks = EXPENSE_CATEGORY_FALLBACKS

    def make_output(self, text: str) -> ExpenseCategoryOutput:
        return ExpenseCategoryOutput(reasoning=text)

    def precheck(self, request: ExpenseCategoryInput) -> Optional[ShortCircuit]:
        if len(request.expense_name or "") < MIN_EXPENSE_NAME_LENGTH:
            return ShortCircuit(
                output=self.make_output(EXPENSE_NAME_TOO_SHORT),
                reason="expense name too short",
            )
        return None

    async def resolve(
        self,
        request: ExpenseCategoryInput,
        reply: ExpenseCategoryReply,
        correlation_id: UUID,
    ) -> Optional[ExpenseCategoryOutput]:
        category = reply.suggested_category
        reasoning = reply.reasoning

        if not category and not reasoning:
            return None

        if category and not is_expense_category(category):
            await self._log(
                AuditEventBuilder.output_value_corrected(
                    self.name, "suggested_category", category, correlation_id
                )
            )
            return ExpenseCategoryOutput(reasoning=reasoning or INVALID_CATEGORY_SUGGESTED)

        return ExpenseCategoryOutput(
            suggested_category=ExpenseCategory(category) if category else None,
            reasoning=reasoning,
        )


# =============================================================================
# FINANCIAL OVERVIEW
# =============================================================================

class FinancialOverviewFlow(AdvisoryFlow[FinancialOverviewInput, FinancialOverviewOutput]):
    """A structured health summary: condition, insights, suggestions, risks, positives."""

    name = "financial_overview"
    input_model = FinancialOverviewInput
    reply_model = FinancialOverviewOutput
    template = FINANCIAL_OVERVIEW_TEMPLATE
    fallbacks = FINANCIAL_OVERVIEW_FALLBACKS

    def make_output(self, text: str) -> FinancialOverviewOutput:
        return FinancialOverviewOutput(
            overall_condition=text,
            key_insights=[],
            actionable_suggestions=[],
        )

    def precheck(self, request: FinancialOverviewInput) -> Optional[ShortCircuit]:
        if not _has_records(request):
            return ShortCircuit(
                output=self.make_output(NO_FINANCIAL_DATA),
                reason="no financial records",
            )
        return None

    async def resolve(
        self,
        request: FinancialOverviewInput,
        reply: FinancialOverviewOutput,
        correlation_id: UUID,
    ) -> Optional[FinancialOverviewOutput]:
        if not reply.overall_condition.strip():
            return None
        return reply


# =============================================================================
# FINANCIAL ANALYSIS
# =============================================================================

class FinancialAnalysisFlow(TextAdvisoryFlow[FinancialAnalysisInput, FinancialAnalysisOutput]):
    """A detailed analysis of the records and their key monthly metrics."""

    name = "financial_analysis"
    input_model = FinancialAnalysisInput
    reply_model = FinancialAnalysisOutput
    template = FINANCIAL_ANALYSIS_TEMPLATE
    fallbacks = FINANCIAL_ANALYSIS_FALLBACKS
    output_field = "analysis"

    def precheck(self, request: FinancialAnalysisInput) -> Optional[ShortCircuit]:
        # Income alone is enough to analyze
        if not _has_records(request) and request.calculated_metrics.monthly_income <= 0:
            return ShortCircuit(
                output=self.make_output(NOT_ENOUGH_FINANCIAL_DATA),
                reason="no records and no monthly income",
            )
        return None


# =============================================================================
# WHAT-IF ANALYSIS
# =============================================================================

SCENARIO_LABELS = {
    ScenarioType.CAREER_CHANGE: "Career Change",
    ScenarioType.INVESTMENT_STRATEGY: "Investment Strategy",
    ScenarioType.MAJOR_PURCHASE: "Major Purchase",
}


def _rupee_series(values: list[Decimal]) -> str:
    return ", ".join(format_inr(value, symbol=True) for value in values)


def _projection_view(request: WhatIfAnalysisInput) -> dict[str, Any]:
    """The simulation figures as the prompt quotes them."""
    projections = request.simulation_projections

    if isinstance(projections, CareerChangeProjections):
        new_path = projections.new_path_annual_income
        return {
            "current_path_income": _rupee_series(projections.current_path_annual_income),
            "new_path_income": _rupee_series(new_path),
            "current_path_savings": _rupee_series(projections.current_path_cumulative_savings),
            "new_path_savings": _rupee_series(projections.new_path_cumulative_savings),
            "last_new_path_income": format_inr(new_path[-1], symbol=True) if new_path else "N/A",
        }

    if isinstance(projections, InvestmentStrategyProjections):
        return {
            "total_invested": format_inr(projections.total_investment_made, symbol=True),
            "current_final": format_inr(projections.fd_final_amount, symbol=True),
            "new_final": format_inr(projections.new_strategy_final_amount, symbol=True),
            "difference": format_inr(projections.difference_final_amount, symbol=True),
            "years": [
                {
                    "year": row.year,
                    "current_value": format_inr(row.fd_value),
                    "new_value": format_inr(row.new_strategy_value),
                }
                for row in projections.year_by_year_projections
            ],
        }

    return {
        "with_purchase": format_inr(projections.final_net_worth_with_purchase, symbol=True),
        "without_purchase": format_inr(projections.final_net_worth_without_purchase, symbol=True),
        "monthly_emi": projections.monthly_emi,
    }


class WhatIfAnalysisFlow(TextAdvisoryFlow[WhatIfAnalysisInput, WhatIfAnalysisOutput]):
    """
    Explain one simulated scenario: a career change, a new investment
    strategy or a major purchase.

    The simulation runs in the app. This flow checks the scenario's
    amounts, then asks the model to interpret the projections. Each
    scenario type gets its own blocks of the prompt.
    """

    name = "what_if_analysis"
    input_model = WhatIfAnalysisInput
    reply_model = WhatIfAnalysisOutput
    template = WHAT_IF_ANALYSIS_TEMPLATE
    fallbacks = WHAT_IF_ANALYSIS_FALLBACKS
    output_field = "analysis"

    def precheck(self, request: WhatIfAnalysisInput) -> Optional[ShortCircuit]:
        financials = request.current_financials
        parameters = request.scenario_parameters

        if request.scenario_type == ScenarioType.CAREER_CHANGE:
            if financials.total_monthly_income == 0 and financials.total_monthly_expenses == 0:
                return ShortCircuit(
                    output=self.make_output(CAREER_CHANGE_MISSING_FINANCIALS),
                    reason="no current income or expenses",
                )

        elif request.scenario_type == ScenarioType.INVESTMENT_STRATEGY:
            if parameters.monthly_investment_amount <= 0:
                return self._invalid(MONTHLY_INVESTMENT_NOT_POSITIVE, "monthly investment not positive")

        elif request.scenario_type == ScenarioType.MAJOR_PURCHASE:
            if parameters.total_cost <= 0:
                return self._invalid(PURCHASE_COST_NOT_POSITIVE, "total cost not positive")
            if parameters.down_payment < 0:
                return self._invalid(DOWN_PAYMENT_NEGATIVE, "down payment negative")
            if parameters.monthly_rent is not None and parameters.monthly_rent < 0:
                return self._invalid(MONTHLY_RENT_NEGATIVE, "monthly rent negative")

        return None

    def _invalid(self, text: str, reason: str) -> ShortCircuit:
        return ShortCircuit(
            output=self.make_output(text),
            reason=reason,
            kind=FailureKind.VALIDATION,
        )

    def render(self, request: WhatIfAnalysisInput) -> str:
        label = SCENARIO_LABELS[request.scenario_type]
        if request.scenario_type == ScenarioType.MAJOR_PURCHASE:
            label = f"{label} ({request.scenario_parameters.purchase_type})"

        context = {
            "current_financials": request.current_financials,
            "scenario_label": label,
            "is_career_change": request.scenario_type == ScenarioType.CAREER_CHANGE,
            "is_investment_strategy": request.scenario_type == ScenarioType.INVESTMENT_STRATEGY,
            "is_major_purchase": request.scenario_type == ScenarioType.MAJOR_PURCHASE,
            "parameters": request.scenario_parameters,
            "projections": _projection_view(request),
        }
        return render_prompt(self.template, context)

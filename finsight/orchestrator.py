"""
Main Orchestrator for FinSight Advisory

This module ties the advisory flows to the rest of the app:
1. Raw flows (typed request -> typed answer)
2. User-keyed helpers (user id -> records from the store -> flow)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Flows never touch the store; records are loaded here and passed in
- One adapter instance is shared by every flow
- Every step is audited under one logger

Store errors from the user-keyed helpers are NOT turned into fallbacks.
Loading records happens before a flow starts, so a broken store is the
caller's problem, not an advisory answer.
"""

from decimal import Decimal
from typing import Any, Optional, Union

import structlog

from finsight.agents import GeminiModelAdapter, ModelInvocationAdapter
from finsight.audit import AuditLogger, configure_logging, create_correlation_id
from finsight.config import get_settings
from finsight.flows import (
    BackwardAnalysisFlow,
    ExpenseCategoryFlow,
    FinancialAdviceFlow,
    FinancialAnalysisFlow,
    FinancialOverviewFlow,
    GoalPlanFlow,
    GoalSuggestionsFlow,
    SpendingAnalysisFlow,
    WhatIfAnalysisFlow,
)
from finsight.models.audit import AuditEventBuilder
from finsight.models.contracts import (
    BackwardAnalysisOutput,
    CalculatedMetrics,
    CurrentFinancials,
    ExpenseCategoryOutput,
    FinancialAdviceOutput,
    FinancialAnalysisOutput,
    FinancialOverviewOutput,
    GoalPlanInput,
    GoalPlanOutput,
    GoalSuggestionsOutput,
    SpendingAnalysisOutput,
    WhatIfAnalysisOutput,
)
from finsight.models.finance import FinancialSnapshot, ScenarioType
from finsight.services.storage import (
    AuditEventSink,
    FinancialRecordStore,
    StorageError,
)


logger = structlog.get_logger(__name__)


class AdvisoryService:
    """
    Entry point for every advisory operation.

    The raw methods accept a contract instance or a plain mapping (in
    camelCase or snake_case); a mapping that does not fit the schema
    gets the flow's invalid-input fallback.
    """

    def __init__(
        self,
        adapter: ModelInvocationAdapter,
        store: Optional[FinancialRecordStore] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()

        self.backward_analysis_flow = BackwardAnalysisFlow(adapter, self._audit_logger)
        self.financial_advice_flow = FinancialAdviceFlow(adapter, self._audit_logger)
        self.spending_analysis_flow = SpendingAnalysisFlow(adapter, self._audit_logger)
        self.goal_plan_flow = GoalPlanFlow(adapter, self._audit_logger)
        self.goal_suggestions_flow = GoalSuggestionsFlow(adapter, self._audit_logger)
        self.expense_category_flow = ExpenseCategoryFlow(adapter, self._audit_logger)
        self.financial_overview_flow = FinancialOverviewFlow(adapter, self._audit_logger)
        self.financial_analysis_flow = FinancialAnalysisFlow(adapter, self._audit_logger)
        self.what_if_analysis_flow = WhatIfAnalysisFlow(adapter, self._audit_logger)

    # =========================================================================
    # RAW FLOWS
    # =========================================================================

    async def backward_analysis(self, request: Any) -> BackwardAnalysisOutput:
        return await self.backward_analysis_flow.run(request)

    async def financial_advice(self, request: Any) -> FinancialAdviceOutput:
        return await self.financial_advice_flow.run(request)

    async def spending_analysis(self, request: Any) -> SpendingAnalysisOutput:
        return await self.spending_analysis_flow.run(request)

    async def goal_plan(self, request: Any) -> GoalPlanOutput:
        return await self.goal_plan_flow.run(request)

    async def goal_suggestions(self, request: Any = None) -> GoalSuggestionsOutput:
        return await self.goal_suggestions_flow.run(request)

    async def expense_category(self, request: Any) -> ExpenseCategoryOutput:
        return await self.expense_category_flow.run(request)

    async def financial_overview(self, request: Any) -> FinancialOverviewOutput:
        return await self.financial_overview_flow.run(request)

    async def financial_analysis(self, request: Any) -> FinancialAnalysisOutput:
        return await self.financial_analysis_flow.run(request)

    async def what_if_analysis(self, request: Any) -> WhatIfAnalysisOutput:
        return await self.what_if_analysis_flow.run(request)

    # =========================================================================
    # USER-KEYED HELPERS
    # =========================================================================

    def _require_store(self) -> FinancialRecordStore:
        if self._store is None:
            raise StorageError("Financial record store not configured")
        return self._store

    async def _load_snapshot(self, user_id: str) -> FinancialSnapshot:
        snapshot = await self._require_store().load_snapshot(user_id)

        await self._audit_logger.log(
            AuditEventBuilder.records_loaded(
                user_id,
                {
                    "income_sources": len(snapshot.income_sources),
                    "expenses": len(snapshot.expenses),
                    "investments": len(snapshot.investments),
                    "loans": len(snapshot.loans),
                },
                create_correlation_id(),
            )
        )
        return snapshot

    async def financial_advice_for_user(
        self,
        user_id: str,
        financial_situation: Optional[str] = None,
        financial_goals: Optional[str] = None,
        risk_tolerance: Optional[str] = None,
    ) -> FinancialAdviceOutput:
        snapshot = await self._load_snapshot(user_id)
        return await self.financial_advice({
            "financial_situation": financial_situation,
            "financial_goals": financial_goals,
            "risk_tolerance": risk_tolerance,
            "income_sources": snapshot.income_sources,
            "expenses": snapshot.expenses,
            "investments": snapshot.investments,
            "loans": snapshot.loans,
        })

    async def spending_analysis_for_user(
        self,
        user_id: str,
        time_period: str,
    ) -> SpendingAnalysisOutput:
        snapshot = await self._load_snapshot(user_id)
        return await self.spending_analysis({
            "expense_items": snapshot.expenses,
            "income_items": snapshot.income_sources,
            "time_period": time_period,
        })

    async def goal_plan_for_user(self, user_id: str, goal_id: str) -> GoalPlanOutput:
        """
        Plan one stored goal.

        Raises:
            NotFoundError: If the user has no goal with this ID
        """
        goal = await self._require_store().get_goal(user_id, goal_id)
        return await self.goal_plan(GoalPlanInput.from_goal(goal))

    async def goal_suggestions_for_user(self, user_id: str) -> GoalSuggestionsOutput:
        snapshot = await self._load_snapshot(user_id)
        return await self.goal_suggestions({
            "income_sources": snapshot.income_sources,
            "expenses": snapshot.expenses,
            "investments": snapshot.investments,
            "loans": snapshot.loans,
        })

    async def backward_analysis_for_user(
        self,
        user_id: str,
        decision_type: str,
        description: str,
        amount_involved: Union[Decimal, int, float, str],
        decision_date: str,
        actual_outcome: str,
    ) -> BackwardAnalysisOutput:
        """Analyze a past decision with the user's current records as context."""
        snapshot = await self._load_snapshot(user_id)
        return await self.backward_analysis({
            "decision_type": decision_type,
            "description": description,
            "amount_involved": amount_involved,
            "decision_date": decision_date,
            "actual_outcome": actual_outcome,
            "current_financial_context": snapshot if snapshot.has_data else None,
        })

    async def financial_overview_for_user(self, user_id: str) -> FinancialOverviewOutput:
        snapshot = await self._load_snapshot(user_id)
        return await self.financial_overview({
            "income_sources": snapshot.income_sources,
            "expenses": snapshot.expenses,
            "investments": snapshot.investments,
            "loans": snapshot.loans,
        })

    async def financial_analysis_for_user(self, user_id: str) -> FinancialAnalysisOutput:
        """Analyze the user's records with metrics derived from them."""
        snapshot = await self._load_snapshot(user_id)
        return await self.financial_analysis({
            "income_sources": snapshot.income_sources,
            "expenses": snapshot.expenses,
            "investments": snapshot.investments,
            "loans": snapshot.loans,
            "calculated_metrics": CalculatedMetrics.from_snapshot(snapshot),
        })

    async def what_if_analysis_for_user(
        self,
        user_id: str,
        scenario_type: Union[ScenarioType, str],
        scenario_parameters: Any,
        simulation_projections: Any,
    ) -> WhatIfAnalysisOutput:
        """
        Explain a simulated scenario against the user's current figures.

        The simulation runs in the app; its parameters and projections
        are passed through as given.
        """
        snapshot = await self._load_snapshot(user_id)
        return await self.what_if_analysis({
            "current_financials": CurrentFinancials.from_snapshot(snapshot),
            "scenario_type": scenario_type,
            "scenario_parameters": scenario_parameters,
            "simulation_projections": simulation_projections,
        })


def create_app_components(
    adapter: Optional[ModelInvocationAdapter] = None,
    store: Optional[FinancialRecordStore] = None,
    sink: Optional[AuditEventSink] = None,
) -> AdvisoryService:
    """
    Factory function to create the advisory service.

    Args:
        adapter: Model adapter. Gemini (configured from the environment
                 on first use) if None.
        store: Record store for the user-keyed helpers. Optional.
        sink: Audit event sink. If None, events are only logged locally.

    Returns:
        A ready AdvisoryService
    """
    app_settings = get_settings().app
    configure_logging(level=app_settings.log_level, json_logs=app_settings.json_logs)

    if store is None:
        logger.warning("record_store_not_configured", detail="user-keyed helpers disabled")

    return AdvisoryService(
        adapter=adapter or GeminiModelAdapter(),
        store=store,
        audit_logger=AuditLogger(sink),
    )

"""
Advisory flows package.

Each flow turns a typed request into a typed answer with at most one
model call, and never raises to its caller.
"""

from finsight.flows.base import AdvisoryFlow, ShortCircuit, TextAdvisoryFlow
from finsight.flows.advisory import (
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
from finsight.flows.fallbacks import FallbackText

__all__ = [
    "AdvisoryFlow",
    "ShortCircuit",
    "TextAdvisoryFlow",
    "FallbackText",
    "BackwardAnalysisFlow",
    "ExpenseCategoryFlow",
    "FinancialAdviceFlow",
    "FinancialAnalysisFlow",
    "FinancialOverviewFlow",
    "GoalPlanFlow",
    "GoalSuggestionsFlow",
    "SpendingAnalysisFlow",
    "WhatIfAnalysisFlow",
]

"""
Data Models Package

This package contains all Pydantic models used in FinSight Advisory.
All data flowing into and out of a flow must conform to these schemas.
"""

from finsight.models.finance import (
    EXPENSE_CATEGORIES,
    ExpenseCategory,
    ExpenseItem,
    ExpenseType,
    FinancialGoal,
    FinancialSnapshot,
    Frequency,
    GoalPriority,
    GoalStatus,
    GoalType,
    IncomeItem,
    InvestmentItem,
    LoanItem,
    ScenarioType,
    is_expense_category,
)
from finsight.models.contracts import (
    BackwardAnalysisInput,
    BackwardAnalysisOutput,
    CalculatedMetrics,
    CareerChangeParameters,
    CareerChangeProjections,
    CurrentFinancials,
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
    InvestmentStrategyParameters,
    InvestmentStrategyProjections,
    MajorPurchaseParameters,
    MajorPurchaseProjections,
    SpendingAnalysisInput,
    SpendingAnalysisOutput,
    WhatIfAnalysisInput,
    WhatIfAnalysisOutput,
    YearProjection,
)
from finsight.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Value schemas
    "EXPENSE_CATEGORIES",
    "ExpenseCategory",
    "ExpenseItem",
    "ExpenseType",
    "FinancialGoal",
    "FinancialSnapshot",
    "Frequency",
    "GoalPriority",
    "GoalStatus",
    "GoalType",
    "IncomeItem",
    "InvestmentItem",
    "LoanItem",
    "ScenarioType",
    "is_expense_category",
    # Flow contracts
    "BackwardAnalysisInput",
    "BackwardAnalysisOutput",
    "CalculatedMetrics",
    "CareerChangeParameters",
    "CareerChangeProjections",
    "CurrentFinancials",
    "ExpenseCategoryInput",
    "ExpenseCategoryOutput",
    "ExpenseCategoryReply",
    "FinancialAdviceInput",
    "FinancialAdviceOutput",
    "FinancialAnalysisInput",
    "FinancialAnalysisOutput",
    "FinancialOverviewInput",
    "FinancialOverviewOutput",
    "GoalPlanInput",
    "GoalPlanOutput",
    "GoalRecommendation",
    "GoalSuggestionsInput",
    "GoalSuggestionsOutput",
    "InvestmentStrategyParameters",
    "InvestmentStrategyProjections",
    "MajorPurchaseParameters",
    "MajorPurchaseProjections",
    "SpendingAnalysisInput",
    "SpendingAnalysisOutput",
    "WhatIfAnalysisInput",
    "WhatIfAnalysisOutput",
    "YearProjection",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

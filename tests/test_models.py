"""
Tests for FinSight Advisory models

Test strategy:
1. Unit tests for value schemas and flow contracts
2. Flow tests run against a stub adapter (see conftest.py)
3. No real API calls in tests
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from finsight.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from finsight.models.contracts import (
    BackwardAnalysisInput,
    CalculatedMetrics,
    CurrentFinancials,
    ExpenseCategoryOutput,
    FinancialAdviceOutput,
    FinancialOverviewOutput,
    GoalPlanInput,
    GoalSuggestionsOutput,
    WhatIfAnalysisInput,
)
from finsight.models.finance import (
    EXPENSE_CATEGORIES,
    ExpenseCategory,
    ExpenseItem,
    ExpenseType,
    FinancialGoal,
    FinancialSnapshot,
    Frequency,
    GoalPriority,
    GoalType,
    IncomeItem,
    InvestmentItem,
    LoanItem,
    ScenarioType,
    is_expense_category,
)


class TestValueSchemas:
    """Tests for the financial value schemas."""

    def test_income_item_strips_whitespace(self):
        """Test that whitespace is stripped from names."""
        item = IncomeItem(name="  Salary  ", amount=Decimal("50000"))
        assert item.name == "Salary"
        assert item.frequency is None

    def test_negative_amount_rejected(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            IncomeItem(name="Salary", amount=Decimal("-1"))

    def test_expense_item_accepts_camel_case_record(self):
        """Test that store records in camelCase validate."""
        item = ExpenseItem.model_validate({
            "id": "e1",
            "name": "Electricity",
            "amount": "1800",
            "type": "variable",
            "category": "Utilities",
            "frequency": "monthly",
        })
        assert item.category == ExpenseCategory.UTILITIES
        assert item.amount == Decimal("1800")

    def test_expense_item_rejects_unknown_category(self):
        """Test that categories outside the closed set are rejected."""
        with pytest.raises(ValidationError):
            ExpenseItem(name="Gym", amount=Decimal("1500"), type="fixed", category="Fitness")

    def test_investment_item_accepts_iso_timestamp(self):
        """Test that a full ISO timestamp is accepted for a date field."""
        item = InvestmentItem.model_validate({
            "name": "Gold ETF",
            "type": "ETFs",
            "currentValue": "42000",
            "purchaseDate": "2023-06-15T00:00:00.000Z",
        })
        assert item.current_value == Decimal("42000")
        assert item.purchase_date == date(2023, 6, 15)

    def test_loan_item_rejects_negative_interest_rate(self):
        """Test interest rate must not be negative."""
        with pytest.raises(ValidationError):
            LoanItem(
                name="Personal",
                type="Personal Loan",
                outstanding_balance=Decimal("1000"),
                monthly_payment=Decimal("100"),
                interest_rate=Decimal("-2"),
            )

    def test_goal_requires_positive_target(self):
        """Test that stored goals need a positive target."""
        with pytest.raises(ValidationError):
            FinancialGoal(
                name="Trip",
                goal_type=GoalType.VACATION,
                target_amount=Decimal("0"),
                current_amount=Decimal("0"),
                priority=GoalPriority.LOW,
            )

    def test_models_are_immutable(self, salary):
        """Test that records cannot be changed during a flow call."""
        with pytest.raises(ValidationError):
            salary.amount = Decimal("1")

    def test_snapshot_has_data(self, salary):
        """Test has_data property."""
        assert FinancialSnapshot().has_data is False
        assert FinancialSnapshot(income_sources=[salary]).has_data is True


class TestExpenseCategories:
    """Tests for the closed category set."""

    def test_category_order_and_values(self):
        """Test the category list the prompt presents."""
        assert EXPENSE_CATEGORIES == (
            "Housing", "Transportation", "Food", "Utilities", "Healthcare",
            "Insurance", "Personal Care", "Entertainment", "Debt Payments",
            "Savings/Investments", "Other",
        )

    def test_membership_is_exact(self):
        """Test membership matching is exact."""
        assert is_expense_category("Food") is True
        assert is_expense_category("food") is False
        assert is_expense_category("Fitness") is False
        assert is_expense_category(None) is False


class TestContracts:
    """Tests for flow input and output contracts."""

    def test_backward_analysis_input_defaults(self):
        """Test that missing decision fields default to empty values."""
        request = BackwardAnalysisInput()
        assert request.decision_type == ""
        assert request.amount_involved == Decimal("0")
        assert request.current_financial_context is None

    def test_goal_plan_input_allows_negative_amounts(self):
        """Test that sign problems are left to the flow."""
        request = GoalPlanInput(
            goal_name="Car",
            goal_type=GoalType.MAJOR_PURCHASE,
            target_amount=Decimal("-5"),
            current_amount=Decimal("-1"),
            priority=GoalPriority.MEDIUM,
        )
        assert request.target_amount == Decimal("-5")

    def test_goal_plan_input_from_goal(self, house_goal):
        """Test building a plan request from a stored goal."""
        request = GoalPlanInput.from_goal(house_goal)
        assert request.goal_name == "House down payment"
        assert request.target_amount == Decimal("1000000")
        assert request.target_date == date(2028, 12, 31)

    def test_goal_plan_input_is_achieved(self, house_goal):
        """Test is_achieved, including an over-saved goal."""
        request = GoalPlanInput.from_goal(house_goal)
        assert request.is_achieved is False

        met = request.model_copy(update={"current_amount": Decimal("1000000")})
        over = request.model_copy(update={"current_amount": Decimal("1200000")})
        assert met.is_achieved is True
        assert over.is_achieved is True

    def test_output_contract_rejects_extra_fields(self):
        """Test that replies with undeclared fields are rejected."""
        with pytest.raises(ValidationError):
            FinancialAdviceOutput.model_validate({"advice": "Save more", "confidence": 0.9})

    def test_output_contract_requires_text(self):
        """Test that a reply without its text field is rejected."""
        with pytest.raises(ValidationError):
            FinancialAdviceOutput.model_validate({})

    def test_overview_reply_requires_insights_and_suggestions(self):
        """Test that an overview reply with only a condition is rejected."""
        with pytest.raises(ValidationError):
            FinancialOverviewOutput.model_validate({"overallCondition": "Stable."})

        reply = FinancialOverviewOutput.model_validate({
            "overallCondition": "Stable.",
            "keyInsights": ["Rent is a third of income."],
            "actionableSuggestions": ["Automate savings."],
        })
        assert reply.potential_risks == []
        assert reply.positive_aspects == []

    def test_goal_suggestions_reply_uses_camel_case(self):
        """Test that model replies in camelCase validate."""
        reply = GoalSuggestionsOutput.model_validate({
            "recommendations": [
                {"goalIdea": "Emergency fund", "relatedAdvice": "Save 10% monthly."},
            ]
        })
        assert reply.recommendations[0].goal_idea == "Emergency fund"

    def test_expense_category_output_is_closed(self):
        """Test that the public output only holds real categories."""
        with pytest.raises(ValidationError):
            ExpenseCategoryOutput(suggested_category="Fitness")


class TestDerivedFigures:
    """Tests for the monthly figures derived from stored records."""

    def test_metrics_from_fixture_records(self, salary, rent, groceries, car_loan):
        """Test that an expense without a frequency is left out."""
        snapshot = FinancialSnapshot(
            income_sources=[salary], expenses=[rent, groceries], loans=[car_loan],
        )
        metrics = CalculatedMetrics.from_snapshot(snapshot)

        assert metrics.monthly_income == Decimal("85000.00")
        assert metrics.total_monthly_expenses == Decimal("34500.00")
        assert metrics.monthly_savings == Decimal("50500.00")
        assert metrics.savings_rate == Decimal("59.4")
        assert metrics.debt_to_income_ratio == Decimal("11.2")
        assert metrics.investment_rate == Decimal("0")

    def test_metrics_convert_frequencies(self, salary, car_loan):
        bonus = IncomeItem(id="inc-2", name="Bonus", amount=Decimal("120000"), frequency=Frequency.YEARLY)
        sip = ExpenseItem(
            id="exp-3", name="SIP", amount=Decimal("5000"), type=ExpenseType.FIXED,
            category=ExpenseCategory.SAVINGS_INVESTMENTS, frequency=Frequency.MONTHLY,
        )
        fuel = ExpenseItem(
            id="exp-4", name="Fuel", amount=Decimal("1000"), type=ExpenseType.VARIABLE,
            category=ExpenseCategory.TRANSPORTATION, frequency=Frequency.WEEKLY,
        )
        snapshot = FinancialSnapshot(
            income_sources=[salary, bonus], expenses=[sip, fuel], loans=[car_loan],
        )

        metrics = CalculatedMetrics.from_snapshot(snapshot)

        assert metrics.monthly_income == Decimal("95000.00")
        assert metrics.total_monthly_expenses == Decimal("18830.00")
        assert metrics.savings_rate == Decimal("80.2")
        assert metrics.debt_to_income_ratio == Decimal("10.0")
        assert metrics.investment_rate == Decimal("5.3")

    def test_metrics_without_income(self, rent):
        metrics = CalculatedMetrics.from_snapshot(FinancialSnapshot(expenses=[rent]))
        assert metrics.monthly_savings == Decimal("-25000.00")
        assert metrics.savings_rate == Decimal("0")

    def test_current_financials(self, salary, rent, groceries, index_fund, car_loan):
        snapshot = FinancialSnapshot(
            income_sources=[salary],
            expenses=[rent, groceries],
            investments=[index_fund],
            loans=[car_loan],
        )
        current = CurrentFinancials.from_snapshot(snapshot)

        assert current.total_monthly_income == Decimal("85000.00")
        assert current.total_monthly_expenses == Decimal("34500.00")
        assert current.total_investments_value == Decimal("100000")
        assert current.total_debt == Decimal("300000")
        assert current.net_monthly_savings == Decimal("50500.00")

    def test_what_if_shapes_must_match_scenario(self):
        """Test that purchase parameters cannot carry career projections."""
        with pytest.raises(ValidationError):
            WhatIfAnalysisInput.model_validate({
                "currentFinancials": {
                    "totalMonthlyIncome": 1, "totalMonthlyExpenses": 1,
                    "totalInvestmentsValue": 0, "totalDebt": 0,
                },
                "scenarioType": ScenarioType.MAJOR_PURCHASE.value,
                "scenarioParameters": {
                    "purchaseType": "Vehicle", "totalCost": 900000, "downPayment": 100000,
                    "interestRate": 9, "loanTenureYears": 5,
                },
                "simulationProjections": {
                    "currentPathAnnualIncome": [], "newPathAnnualIncome": [],
                    "currentPathCumulativeSavings": [], "newPathCumulativeSavings": [],
                },
            })


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.FLOW_STARTED,
            description="Flow goal_plan started",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = AuditEventBuilder.invocation_failed(
            "financial_advice",
            "service_overloaded",
            "503 The model is overloaded",
            correlation_id,
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "invocation_failed"
        assert log_dict["severity"] == "error"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["failure_kind"] == "service_overloaded"
        assert log_dict["error_message"] == "503 The model is overloaded"

    def test_audit_event_builder_output_value_corrected(self):
        """Test AuditEventBuilder.output_value_corrected."""
        correlation_id = uuid4()
        event = AuditEventBuilder.output_value_corrected(
            "expense_category", "suggested_category", "Fitness", correlation_id
        )
        assert event.event_type == AuditEventType.OUTPUT_VALUE_CORRECTED
        assert event.details["rejected_value"] == "Fitness"
        assert event.failure_kind == "invalid_output_value"

    def test_audit_event_builder_records_loaded(self):
        """Test AuditEventBuilder.records_loaded."""
        event = AuditEventBuilder.records_loaded("user-1", {"income_sources": 2, "loans": 1})
        assert event.user_id == "user-1"
        assert "3" in event.description


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Tests for the prompt renderer and the flow templates.
"""

import pytest
from datetime import date
from decimal import Decimal

from finsight.models.contracts import (
    BackwardAnalysisInput,
    ExpenseCategoryInput,
    FinancialAdviceInput,
    GoalPlanInput,
    SpendingAnalysisInput,
)
from finsight.models.finance import (
    ExpenseCategory,
    FinancialSnapshot,
    GoalPriority,
    GoalType,
)
from finsight.prompts.renderer import Text, Value, each, format_inr, format_scalar, render_prompt, when
from finsight.prompts.templates import (
    BACKWARD_ANALYSIS_TEMPLATE,
    EXPENSE_CATEGORY_TEMPLATE,
    FINANCIAL_ADVICE_TEMPLATE,
    GOAL_PLAN_TEMPLATE,
    SPENDING_ANALYSIS_TEMPLATE,
)


class TestFormatScalar:
    """Tests for literal interpolation of values."""

    def test_whole_numbers_drop_fraction(self):
        """Test that 500, 500.0 and Decimal('500.00') all read '500'."""
        assert format_scalar(500) == "500"
        assert format_scalar(500.0) == "500"
        assert format_scalar(Decimal("500.00")) == "500"

    def test_fractions_kept_without_rounding(self):
        """Test that fractional amounts are not rounded."""
        assert format_scalar(Decimal("8000.50")) == "8000.50"
        assert format_scalar(1500.25) == "1500.25"

    def test_no_thousands_separator(self):
        """Test that large amounts are not grouped."""
        assert format_scalar(Decimal("1000000")) == "1000000"

    def test_enum_date_and_none(self):
        """Test enums, dates and missing values."""
        assert format_scalar(ExpenseCategory.PERSONAL_CARE) == "Personal Care"
        assert format_scalar(date(2024, 3, 1)) == "2024-03-01"
        assert format_scalar(None) == ""


class TestFormatInr:
    """Tests for simulation figures in rupees."""

    @pytest.mark.parametrize("value, expected", [
        (999, "999"),
        (1234, "1,234"),
        (1234567, "12,34,567"),
        (Decimal("12500000"), "1,25,00,000"),
        (Decimal("2499.5"), "2,500"),
        (Decimal("2499.4"), "2,499"),
    ])
    def test_indian_grouping(self, value, expected):
        assert format_inr(value) == expected

    def test_symbol_and_sign(self):
        assert format_inr(Decimal("-18000"), symbol=True) == "-₹18,000"
        assert format_inr(0, symbol=True) == "₹0"

    def test_none(self):
        assert format_inr(None) == "N/A"


class TestRenderer:
    """Tests for the section walker."""

    def test_text_and_value(self):
        """Test plain interpolation."""
        template = (Text("Hello "), Value("name"), Text("!"))
        assert render_prompt(template, {"name": "Asha"}) == "Hello Asha!"

    def test_when_uses_otherwise_for_absent_or_empty(self):
        """Test that absent, empty and zero values take the otherwise branch."""
        template = (when("goal", Text("yes"), otherwise=(Text("no"),)),)
        assert render_prompt(template, {"goal": "Retire early"}) == "yes"
        assert render_prompt(template, {"goal": ""}) == "no"
        assert render_prompt(template, {"goal": None}) == "no"
        assert render_prompt(template, {"goal": 0}) == "no"
        assert render_prompt(template, {}) == "no"

    def test_each_with_item_scope(self):
        """Test that items are in scope and outer names remain visible."""
        template = (each("items", Value("name"), Text("@"), Value("where"), Text(";")),)
        context = {"where": "home", "items": [{"name": "a"}, {"name": "b"}]}
        assert render_prompt(template, context) == "a@home;b@home;"

    def test_each_empty_block(self):
        """Test the empty block for an empty or absent list."""
        template = (each("items", Value("name"), empty=(Text("none"),)),)
        assert render_prompt(template, {"items": []}) == "none"
        assert render_prompt(template, {}) == "none"

    def test_dotted_path(self):
        """Test nested lookups."""
        template = (Value("outer.inner"),)
        assert render_prompt(template, {"outer": {"inner": "x"}}) == "x"
        assert render_prompt(template, {"outer": None}) == ""


class TestTemplates:
    """Tests for the flow prompt templates."""

    def test_rendering_is_deterministic(self, salary, rent, groceries, index_fund, car_loan):
        """Test that the same input renders the byte-identical prompt."""
        request = FinancialAdviceInput(
            financial_situation="I want to save more",
            income_sources=[salary],
            expenses=[rent, groceries],
            investments=[index_fund],
            loans=[car_loan],
        )
        first = render_prompt(FINANCIAL_ADVICE_TEMPLATE, request)
        second = render_prompt(FINANCIAL_ADVICE_TEMPLATE, request.model_copy())
        assert first == second

    def test_advice_lists_records_in_order(self, salary, rent, groceries):
        """Test record lines, their order and the rupee prefix."""
        request = FinancialAdviceInput(expenses=[rent, groceries], income_sources=[salary])
        prompt = render_prompt(FINANCIAL_ADVICE_TEMPLATE, request)

        assert "- Name: Salary, Amount: ₹85000, Frequency: monthly" in prompt
        assert "- Name: Rent, Amount: ₹25000, Type: fixed, Category: Housing, Frequency: monthly" in prompt
        assert "- Name: Groceries, Amount: ₹8000.50, Type: variable, Category: Food\n" in prompt
        assert prompt.index("Rent") < prompt.index("Groceries")

    def test_advice_empty_collections_and_defaults(self):
        """Test the fallback lines for missing data and unstated preferences."""
        prompt = render_prompt(FINANCIAL_ADVICE_TEMPLATE, FinancialAdviceInput(financial_goals="Retire at 50"))

        assert "No specific income sources provided by the user." in prompt
        assert "No specific loans provided by the user." in prompt
        assert '"Retire at 50"' in prompt
        assert "The user has not described a specific situation." in prompt
        assert "Assume 'medium'" in prompt

    def test_backward_analysis_context_is_conditional(self, salary):
        """Test the current-context block only appears when context is given."""
        request = BackwardAnalysisInput(
            decision_type="Investment",
            description="Bought shares",
            amount_involved=Decimal("50000"),
            decision_date="2021-01-10",
            actual_outcome="Lost 20%",
        )
        without = render_prompt(BACKWARD_ANALYSIS_TEMPLATE, request)
        assert "Current Financial Context" not in without
        assert "Connecting to Your Present" not in without
        assert "- Amount Involved: ₹50000" in without

        with_context = render_prompt(
            BACKWARD_ANALYSIS_TEMPLATE,
            request.model_copy(
                update={"current_financial_context": FinancialSnapshot(income_sources=[salary])}
            ),
        )
        assert "Current Financial Context" in with_context
        assert "- Name: Salary" in with_context
        assert "No specific loans on record today." in with_context
        assert "Connecting to Your Present" in with_context

    def test_spending_analysis_mentions_period(self, rent):
        """Test the time period is interpolated."""
        request = SpendingAnalysisInput(expense_items=[rent], time_period="Last Month")
        prompt = render_prompt(SPENDING_ANALYSIS_TEMPLATE, request)
        assert "'Last Month'" in prompt
        assert "No specific income sources provided by the user." in prompt

    def test_goal_plan_optional_target_date(self):
        """Test that the target date line is omitted when absent."""
        request = GoalPlanInput(
            goal_name="Laptop",
            goal_type=GoalType.MAJOR_PURCHASE,
            target_amount=Decimal("90000"),
            current_amount=Decimal("15000"),
            priority=GoalPriority.MEDIUM,
        )
        prompt = render_prompt(GOAL_PLAN_TEMPLATE, request)
        assert "Target Date" not in prompt
        assert "- Target Amount: ₹90000" in prompt
        assert "₹90000 - ₹15000" in prompt

        dated = render_prompt(
            GOAL_PLAN_TEMPLATE, request.model_copy(update={"target_date": date(2026, 1, 1)})
        )
        assert "- Target Date: 2026-01-01" in dated

    def test_expense_category_lists_all_categories(self):
        """Test the closed category set appears in the prompt."""
        prompt = render_prompt(EXPENSE_CATEGORY_TEMPLATE, ExpenseCategoryInput(expense_name="Uber ride"))
        assert '"Uber ride"' in prompt
        assert "Housing, Transportation, Food" in prompt
        assert "Savings/Investments, Other" in prompt


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

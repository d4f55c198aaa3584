"""
Tests for the advisory service and the in-memory record store.
"""

import pytest
import pytest_asyncio
from decimal import Decimal

from finsight.audit.logger import AuditLogger
from finsight.flows.fallbacks import (
    CAREER_CHANGE_MISSING_FINANCIALS,
    NO_FINANCIAL_DATA,
    NOT_ENOUGH_FINANCIAL_DATA,
)
from finsight.models.audit import AuditEventType
from finsight.models.finance import FinancialSnapshot, ScenarioType
from finsight.orchestrator import AdvisoryService, create_app_components
from finsight.services.storage import (
    InMemoryAuditSink,
    InMemoryFinancialRecordStore,
    NotFoundError,
    StorageError,
)

from conftest import StubAdapter


@pytest_asyncio.fixture
async def store(salary, rent, groceries, index_fund, car_loan, house_goal):
    store = InMemoryFinancialRecordStore()
    await store.add_income_item("user-1", salary)
    await store.add_expense_item("user-1", rent)
    await store.add_expense_item("user-1", groceries)
    await store.add_investment_item("user-1", index_fund)
    await store.add_loan_item("user-1", car_loan)
    await store.add_goal("user-1", house_goal)
    return store


class TestInMemoryStore:
    """Tests for the in-memory record store."""

    @pytest.mark.asyncio
    async def test_load_snapshot(self, store):
        """Test that all four collections are loaded in insertion order."""
        snapshot = await store.load_snapshot("user-1")
        assert [e.name for e in snapshot.expenses] == ["Rent", "Groceries"]
        assert len(snapshot.income_sources) == 1
        assert len(snapshot.investments) == 1
        assert len(snapshot.loans) == 1

    @pytest.mark.asyncio
    async def test_unknown_user_is_empty(self, store):
        """Test that users without records get an empty snapshot."""
        assert await store.load_snapshot("nobody") == FinancialSnapshot()

    @pytest.mark.asyncio
    async def test_list_returns_copy(self, store):
        """Test that callers cannot change stored collections."""
        expenses = await store.list_expense_items("user-1")
        expenses.clear()
        assert len(await store.list_expense_items("user-1")) == 2

    @pytest.mark.asyncio
    async def test_get_goal(self, store, house_goal):
        assert await store.get_goal("user-1", "goal-1") == house_goal

    @pytest.mark.asyncio
    async def test_get_goal_not_found(self, store):
        """Test NotFoundError for a missing goal."""
        with pytest.raises(NotFoundError):
            await store.get_goal("user-1", "goal-404")


class TestAdvisoryService:
    """Tests for the user-keyed helpers."""

    @pytest.mark.asyncio
    async def test_financial_advice_for_user(self, store):
        """Test that stored records reach the prompt."""
        adapter = StubAdapter({"advice": "Keep going."})
        service = AdvisoryService(adapter, store)

        result = await service.financial_advice_for_user("user-1", financial_goals="Buy a house")

        assert result.advice == "Keep going."
        assert "- Name: Car Loan, Type: Auto Loan, Balance: ₹300000" in adapter.last_prompt
        assert '"Buy a house"' in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_spending_analysis_for_user(self, store):
        adapter = StubAdapter({"analysis": "Housing dominates."})
        service = AdvisoryService(adapter, store)

        result = await service.spending_analysis_for_user("user-1", "Last Quarter")

        assert result.analysis == "Housing dominates."
        assert "'Last Quarter'" in adapter.last_prompt
        assert "- Name: Groceries, Amount: ₹8000.50" in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_goal_plan_for_user(self, store):
        adapter = StubAdapter({"plan": "### Plan"})
        service = AdvisoryService(adapter, store)

        result = await service.goal_plan_for_user("user-1", "goal-1")

        assert result.plan == "### Plan"
        assert "- Target Date: 2028-12-31" in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_goal_plan_for_user_missing_goal(self, store):
        """Test that store errors propagate."""
        service = AdvisoryService(StubAdapter(), store)
        with pytest.raises(NotFoundError):
            await service.goal_plan_for_user("user-1", "goal-404")

    @pytest.mark.asyncio
    async def test_goal_suggestions_for_user(self, store):
        adapter = StubAdapter({"recommendations": [
            {"goalIdea": "Prepay the car loan", "relatedAdvice": "Add ₹2000 a month."},
            {"goalIdea": "Grow the index fund", "relatedAdvice": "Raise the SIP."},
        ]})
        service = AdvisoryService(adapter, store)

        result = await service.goal_suggestions_for_user("user-1")

        assert len(result.recommendations) == 2
        assert "- Name: Nifty Index Fund, Type: Mutual Funds" in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_backward_analysis_for_user_includes_context(self, store):
        adapter = StubAdapter({"analysis": "Lessons."})
        service = AdvisoryService(adapter, store)

        await service.backward_analysis_for_user(
            "user-1",
            decision_type="Loan",
            description="Took a car loan",
            amount_involved=Decimal("400000"),
            decision_date="2022-05-01",
            actual_outcome="Manageable EMIs",
        )

        assert "Current Financial Context" in adapter.last_prompt
        assert "- Name: Salary" in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_backward_analysis_for_user_without_records(self, store):
        """Test that a user with no records gets no context block."""
        adapter = StubAdapter({"analysis": "Lessons."})
        service = AdvisoryService(adapter, store)

        await service.backward_analysis_for_user(
            "nobody", "Purchase", "New phone", 80000, "2023-09-01", "Still using it",
        )

        assert "Current Financial Context" not in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_financial_overview_for_user_without_records(self, store):
        adapter = StubAdapter()
        service = AdvisoryService(adapter, store)

        result = await service.financial_overview_for_user("nobody")

        assert result.overall_condition == NO_FINANCIAL_DATA
        assert adapter.calls == []

    @pytest.mark.asyncio
    async def test_financial_analysis_for_user(self, store):
        """Test that metrics are derived from the stored records."""
        adapter = StubAdapter({"analysis": "Healthy."})
        service = AdvisoryService(adapter, store)

        result = await service.financial_analysis_for_user("user-1")

        assert result.analysis == "Healthy."
        assert "- Monthly Income: ₹85000" in adapter.last_prompt
        assert "- Savings Rate: 59.4%" in adapter.last_prompt
        assert "- Name: Nifty Index Fund" in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_financial_analysis_for_user_without_records(self, store):
        adapter = StubAdapter()
        result = await AdvisoryService(adapter, store).financial_analysis_for_user("nobody")

        assert result.analysis == NOT_ENOUGH_FINANCIAL_DATA
        assert adapter.calls == []

    @pytest.mark.asyncio
    async def test_what_if_analysis_for_user(self, store):
        adapter = StubAdapter({"analysis": "Buy later."})
        service = AdvisoryService(adapter, store)

        result = await service.what_if_analysis_for_user(
            "user-1",
            ScenarioType.MAJOR_PURCHASE,
            {
                "purchaseType": "Vehicle",
                "totalCost": 900000,
                "downPayment": 100000,
                "interestRate": "9",
                "loanTenureYears": 5,
            },
            {
                "finalNetWorthWithPurchase": 2500000,
                "finalNetWorthWithoutPurchase": 3100000,
                "monthlyEMI": 16607,
            },
        )

        assert result.analysis == "Buy later."
        assert "- Net Monthly Savings: ₹50500" in adapter.last_prompt
        assert "- Total Investments Value: ₹100000" in adapter.last_prompt
        assert "- Total Debt: ₹300000" in adapter.last_prompt
        assert "Major Purchase (Vehicle)" in adapter.last_prompt

    @pytest.mark.asyncio
    async def test_what_if_career_change_for_user_without_records(self, store):
        adapter = StubAdapter()
        result = await AdvisoryService(adapter, store).what_if_analysis_for_user(
            "nobody",
            "careerChange",
            {
                "currentMonthlySalary": 0,
                "newMonthlySalary": 90000,
                "yearsToSimulate": 1,
                "annualGrowthRate": 5,
            },
            {
                "currentPathAnnualIncome": [0],
                "newPathAnnualIncome": [1080000],
                "currentPathCumulativeSavings": [0],
                "newPathCumulativeSavings": [1080000],
            },
        )

        assert result.analysis == CAREER_CHANGE_MISSING_FINANCIALS
        assert adapter.calls == []

    @pytest.mark.asyncio
    async def test_records_loaded_is_audited(self, store):
        sink = InMemoryAuditSink()
        service = AdvisoryService(StubAdapter({"advice": "ok"}), store, AuditLogger(sink))

        await service.financial_advice_for_user("user-1")

        events = await sink.get_events()
        loaded = [e for e in events if e.event_type == AuditEventType.RECORDS_LOADED]
        assert loaded[0].user_id == "user-1"
        assert loaded[0].details["expenses"] == 2

    @pytest.mark.asyncio
    async def test_helpers_need_a_store(self):
        service = AdvisoryService(StubAdapter())
        with pytest.raises(StorageError):
            await service.goal_suggestions_for_user("user-1")

    @pytest.mark.asyncio
    async def test_raw_expense_category(self):
        service = AdvisoryService(StubAdapter({"suggestedCategory": "Transportation", "reasoning": "Cab."}))
        result = await service.expense_category({"expenseName": "Uber ride"})
        assert result.suggested_category.value == "Transportation"


class TestCreateAppComponents:
    """Tests for the factory."""

    @pytest.mark.asyncio
    async def test_factory_with_injected_parts(self, store):
        sink = InMemoryAuditSink()
        service = create_app_components(
            adapter=StubAdapter({"advice": "ok"}),
            store=store,
            sink=sink,
        )

        result = await service.financial_advice_for_user("user-1")

        assert result.advice == "ok"
        assert await sink.get_events()

    def test_factory_without_api_key(self, monkeypatch, tmp_path):
        """Test the app starts without a Gemini key."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.chdir(tmp_path)
        assert isinstance(create_app_components(), AdvisoryService)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

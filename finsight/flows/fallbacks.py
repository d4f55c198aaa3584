"""
Fallback Policy Table

Every literal, non-AI answer a flow can give, in one place.

DESIGN DECISION: Fallbacks are fixed text, not generated. When the
model is unavailable the user still gets a sensible answer, and
support can recognise each message by sight.

Overload and configuration messages are deliberately different: an
overload is the user's cue to retry, a configuration message is an
operator's cue to fix the deployment.
"""

from dataclasses import dataclass

from finsight.agents.model_adapter import FailureKind
from finsight.models.contracts import GoalRecommendation


@dataclass(frozen=True)
class FallbackText:
    """The failure-category texts of one flow."""

    invalid_input: str
    overloaded: str
    configuration: str
    unknown: str
    empty_reply: str

    def for_kind(self, kind: FailureKind) -> str:
        if kind == FailureKind.SERVICE_OVERLOADED:
            return self.overloaded
        if kind == FailureKind.CONFIGURATION:
            return self.configuration
        if kind == FailureKind.EMPTY_REPLY:
            return self.empty_reply
        if kind == FailureKind.VALIDATION:
            return self.invalid_input
        return self.unknown


_OVERLOADED = (
    "The AI service is temporarily overloaded or unavailable. "
    "Please try again in a few moments. (Error 503)"
)
_CONFIGURATION = (
    "The AI service could not be reached due to an API key issue. "
    "Please check the server configuration."
)
_UNEXPECTED_RESPONSE = "The AI model returned an unexpected response. Please try again."


# =============================================================================
# BACKWARD ANALYSIS
# =============================================================================

BACKWARD_ANALYSIS_INSUFFICIENT = (
    "Insufficient information provided to analyze the past decision. "
    "Please ensure all fields (Decision Type, Description, Amount, Date, "
    "and Actual Outcome) are filled correctly."
)

BACKWARD_ANALYSIS_FALLBACKS = FallbackText(
    invalid_input=(
        "Some of the decision details could not be read. Please check the amount "
        "and the other fields, then try again."
    ),
    overloaded=(
        "The AI service is temporarily overloaded or unavailable for backward analysis. "
        "Please try again in a few moments. (Error 503)"
    ),
    configuration=(
        "The AI service could not be reached for backward analysis due to an API key issue. "
        "Please check the server configuration."
    ),
    unknown=(
        "An error occurred while generating your backward analysis. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)


# =============================================================================
# FINANCIAL ADVICE
# =============================================================================

GENERIC_FINANCIAL_ADVICE = (
    "To provide you with personalized financial advice, please either describe your "
    "financial situation and goals, or add your financial details (income, expenses, "
    "investments, loans) in the 'Update Finances' section. For now, here's some general "
    "advice:\n\n"
    "1. **Create a Budget:** Track your income and expenses to understand your spending habits.\n"
    "2. **Build an Emergency Fund:** Aim to save 3-6 months' worth of living expenses.\n"
    "3. **Manage Debt:** Prioritize paying off high-interest debt.\n"
    "4. **Save and Invest Regularly:** Start early, even with small amounts, and be consistent.\n"
    "5. **Plan for Long-Term Goals:** Think about retirement and other major life events.\n\n"
    "Update your information for more tailored guidance!"
)

FINANCIAL_ADVICE_FALLBACKS = FallbackText(
    invalid_input=(
        "Some of your financial details could not be read (for example a negative amount "
        "or an unknown category). Please review them in the 'Update Finances' section and "
        "try again."
    ),
    overloaded=_OVERLOADED,
    configuration=_CONFIGURATION,
    unknown=(
        "An error occurred while generating your financial advice. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)


# =============================================================================
# SPENDING ANALYSIS
# =============================================================================

NO_EXPENSE_DATA = (
    "No expense data was provided. To perform a spending analysis, please add your "
    "expense items in the 'Finances' section of the application. Assuming the expenses "
    "you add are representative, I can then analyze them for the selected time period."
)

SPENDING_ANALYSIS_FALLBACKS = FallbackText(
    invalid_input=(
        "Some of your expense items could not be read (for example a negative amount "
        "or an unknown category). Please review them in the 'Finances' section and try again."
    ),
    overloaded=_OVERLOADED,
    configuration=_CONFIGURATION,
    unknown=(
        "An error occurred while generating your spending analysis. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)


# =============================================================================
# GOAL PLAN
# =============================================================================

GOAL_TARGET_NOT_POSITIVE = (
    "### Goal Plan Error\n"
    "The target amount for your goal must be positive. Please update your goal."
)

GOAL_CURRENT_NEGATIVE = (
    "### Goal Plan Error\n"
    "The current amount saved cannot be negative. Please update your goal."
)

GOAL_ALREADY_ACHIEVED = (
    "### Congratulations!\n"
    "It looks like you've already achieved your goal of \"{goal_name}\" as your current "
    "amount of ₹{current_amount} meets or exceeds the target of ₹{target_amount}.\n\n"
    "Consider setting a new goal or enjoying your achievement!"
)

GOAL_PLAN_FALLBACKS = FallbackText(
    invalid_input=(
        "### Goal Plan Error\n"
        "The goal details could not be read. Please check the goal type, priority "
        "and amounts, then try again."
    ),
    overloaded=(
        "### AI Service Unavailable\n"
        "The AI service is temporarily overloaded. Please try again in a few moments "
        "to generate your goal plan. (Error 503)"
    ),
    configuration=(
        "### Configuration Error\n"
        "The AI service could not be reached due to an API key issue. "
        "Please check the server configuration."
    ),
    unknown=(
        "### Error Generating Plan\n"
        "An unexpected error occurred while generating the plan for your goal. "
        "Please try again later."
    ),
    empty_reply=(
        "### System Error\n"
        "I'm having a little trouble generating a plan right now. "
        "Please try again in a moment."
    ),
)


# =============================================================================
# GOAL SUGGESTIONS
# =============================================================================

GENERIC_GOAL_RECOMMENDATIONS: tuple[GoalRecommendation, ...] = (
    GoalRecommendation(
        goal_idea="General Financial Health Check",
        related_advice=(
            "- Review your monthly budget to identify savings opportunities.\n"
            "- Consider building an emergency fund covering 3-6 months of expenses.\n"
            "- Explore options for managing and reducing any high-interest debt."
        ),
    ),
    GoalRecommendation(
        goal_idea="Plan for major long-term goals.",
        related_advice=(
            "- Start thinking about your retirement; even small, consistent investments "
            "compound over time.\n"
            "- Identify other large future expenses (e.g., education, property) and begin "
            "saving early.\n"
            "- Review your investment risk tolerance periodically."
        ),
    ),
)

SUGGESTIONS_UNAVAILABLE_IDEA = "Personalized Suggestions Unavailable"

GOAL_SUGGESTIONS_FALLBACKS = FallbackText(
    invalid_input=(
        "Some of your financial details could not be read, so these suggestions are "
        "general. Please review your records in the 'Finances' section."
    ),
    overloaded=_OVERLOADED,
    configuration=_CONFIGURATION,
    unknown=(
        "An error occurred while generating personalized goal suggestions. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)


# =============================================================================
# EXPENSE CATEGORY
# =============================================================================

EXPENSE_NAME_TOO_SHORT = "Expense name is too short to suggest a category."

INVALID_CATEGORY_SUGGESTED = "AI suggested an invalid category."

EXPENSE_CATEGORY_FALLBACKS = FallbackText(
    invalid_input="The expense name could not be read. Please enter it as plain text.",
    overloaded=(
        "The AI service is temporarily overloaded. Please try again in a few moments. "
        "(Error 503)"
    ),
    configuration=_CONFIGURATION,
    unknown="An error occurred while suggesting the category.",
    empty_reply="AI model did not return a response for category suggestion.",
)


# =============================================================================
# FINANCIAL OVERVIEW
# =============================================================================

NO_FINANCIAL_DATA = (
    "No financial data provided. Please add your income, expenses, investments, "
    "or loans in the 'Finances' section to get an overview."
)

FINANCIAL_OVERVIEW_FALLBACKS = FallbackText(
    invalid_input=(
        "Some of your financial details could not be read (for example a negative amount "
        "or an unknown category). Please review them in the 'Finances' section."
    ),
    overloaded=_OVERLOADED,
    configuration=_CONFIGURATION,
    unknown=(
        "An error occurred while generating your financial overview. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)


# =============================================================================
# FINANCIAL ANALYSIS
# =============================================================================

NOT_ENOUGH_FINANCIAL_DATA = (
    "There isn't enough financial data to provide a detailed analysis. Please add "
    "more information about your income, expenses, investments, or loans in the "
    "'Finances' section."
)

FINANCIAL_ANALYSIS_FALLBACKS = FallbackText(
    invalid_input=(
        "Some of your financial details or metrics could not be read (for example a "
        "negative amount or an unknown category). Please review them in the 'Finances' "
        "section and try again."
    ),
    overloaded=_OVERLOADED,
    configuration=_CONFIGURATION,
    unknown=(
        "An error occurred while generating your financial analysis. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)


# =============================================================================
# WHAT-IF ANALYSIS
# =============================================================================

CAREER_CHANGE_MISSING_FINANCIALS = (
    "Your current financial data (income, expenses) seems to be missing or zero. "
    "Please update your financial details in the 'Update Finances' section for a "
    "meaningful career change analysis."
)

MONTHLY_INVESTMENT_NOT_POSITIVE = (
    "Monthly investment for strategy comparison must be a positive amount."
)

PURCHASE_COST_NOT_POSITIVE = "Total cost for the major purchase must be a positive amount."

DOWN_PAYMENT_NEGATIVE = "Down payment cannot be negative."

MONTHLY_RENT_NEGATIVE = "Monthly rent cannot be negative."

WHAT_IF_ANALYSIS_FALLBACKS = FallbackText(
    invalid_input=(
        "The scenario details could not be read. Please check that the parameters "
        "and projections match the selected scenario, then try again."
    ),
    overloaded=(
        "The AI service is temporarily overloaded or unavailable for What-If analysis. "
        "Please try again in a few moments. (Error 503)"
    ),
    configuration=(
        "The AI service could not be reached for What-If analysis due to an API key issue. "
        "Please check the server configuration."
    ),
    unknown=(
        "An error occurred while generating your What-If scenario analysis. "
        "If the problem persists, please contact support."
    ),
    empty_reply=_UNEXPECTED_RESPONSE,
)

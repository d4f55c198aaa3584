"""
Prompt Templates

One template per flow, written as section tuples for the renderer.
Amounts are interpolated as-is behind a fixed "₹" prefix.

The record blocks (income, expenses, investments, loans) are shared so
every flow describes the same item the same way; only the heading and
the "nothing provided" line differ.
"""

from finsight.models.finance import EXPENSE_CATEGORIES
from finsight.prompts.renderer import Section, Template, Text as T, Value as V, each, when


# =============================================================================
# SHARED RECORD LINES
# =============================================================================

INCOME_LINE: tuple[Section, ...] = (
    T("- Name: "), V("name"),
    T(", Amount: ₹"), V("amount"),
    when("frequency", T(", Frequency: "), V("frequency")),
    T("\n"),
)

EXPENSE_LINE: tuple[Section, ...] = (
    T("- Name: "), V("name"),
    T(", Amount: ₹"), V("amount"),
    T(", Type: "), V("type"),
    T(", Category: "), V("category"),
    when("frequency", T(", Frequency: "), V("frequency")),
    T("\n"),
)

INVESTMENT_LINE: tuple[Section, ...] = (
    T("- Name: "), V("name"),
    T(", Type: "), V("type"),
    T(", Current Value: ₹"), V("current_value"),
    when("initial_investment", T(", Initial: ₹"), V("initial_investment")),
    when("purchase_date", T(", Purchased: "), V("purchase_date")),
    T("\n"),
)

LOAN_LINE: tuple[Section, ...] = (
    T("- Name: "), V("name"),
    T(", Type: "), V("type"),
    T(", Balance: ₹"), V("outstanding_balance"),
    T(", Monthly Payment: ₹"), V("monthly_payment"),
    when("interest_rate", T(", Rate: "), V("interest_rate"), T("%")),
    T("\n"),
)


def records(heading: str, path: str, line: tuple[Section, ...], empty_line: str) -> tuple[Section, ...]:
    """A headed list of records, one line each, or a single fallback line."""
    return (
        T(f"{heading}:\n"),
        each(path, *line, empty=(T(f"{empty_line}\n"),)),
    )


def all_records(empty_suffix: str, prefix: str = "") -> tuple[Section, ...]:
    """The four standard record blocks, separated by blank lines."""
    return (
        *records("Income Sources", f"{prefix}income_sources", INCOME_LINE,
                 f"No specific income sources {empty_suffix}."),
        T("\n"),
        *records("Expenses", f"{prefix}expenses", EXPENSE_LINE,
                 f"No specific expenses {empty_suffix}."),
        T("\n"),
        *records("Investments", f"{prefix}investments", INVESTMENT_LINE,
                 f"No specific investments {empty_suffix}."),
        T("\n"),
        *records("Loans", f"{prefix}loans", LOAN_LINE,
                 f"No specific loans {empty_suffix}."),
    )


# =============================================================================
# BACKWARD ANALYSIS
# =============================================================================

BACKWARD_ANALYSIS_TEMPLATE: Template = (
    T(
        "You are FinSight, an AI financial analyst who reviews past financial "
        "decisions to draw out useful lessons.\n"
        "The user has described a past financial decision:\n\n"
        "Decision Details:\n"
        "- Type of Decision: "
    ), V("decision_type"),
    T("\n- Description: "), V("description"),
    T("\n- Amount Involved: ₹"), V("amount_involved"),
    T("\n- Date of Decision: "), V("decision_date"),
    T("\n- Actual Outcome: "), V("actual_outcome"),
    T("\n\n"),
    when(
        "current_financial_context",
        T("Current Financial Context (for reference only; the decision was made in the past):\n"),
        *all_records("on record today", prefix="current_financial_context."),
        T("\n\n"),
    ),
    T(
        "Analyze the PAST DECISION above. The current context only describes "
        "where the user stands today. Write the analysis in Markdown with these sections:\n\n"
        "### 1. Understanding the Decision\n"
        "   - Restate the decision with its amount, date and type.\n"
        "   - What goals or motivations likely drove it at the time?\n\n"
        "### 2. Potential Alternative Scenarios\n"
        "   - For a '"
    ), V("decision_type"),
    T("' decision made on '"), V("decision_date"),
    T("' involving ₹"), V("amount_involved"),
    T(
        ", what alternatives would the user typically have considered?\n\n"
        "### 3. Outcome vs. Alternatives\n"
        "   - Compare the actual outcome ('"
    ), V("actual_outcome"),
    T(
        "') qualitatively with one or two of those alternatives.\n"
        "   - Was it better, worse or comparable? Stay general; precise historical "
        "figures are not required.\n\n"
        "### 4. Key Lessons Learned\n"
        "   - Two or three lessons (risk assessment, research, timing, emotion, diversification, ...).\n\n"
        "### 5. Recommendations for Future Decisions\n"
        "   - Two or three actionable recommendations for similar decisions.\n\n"
    ),
    when(
        "current_financial_context",
        T("### 6. Connecting to Your Present\n"
          "   - Only if a clear link exists: how do the lessons from this "),
        V("decision_type"),
        T(" decision apply to the user's current income, spending, investments or debt?\n\n"),
    ),
    T(
        "Keep the tone constructive and educational.\n"
        "Analysis:\n"
    ),
)


# =============================================================================
# FINANCIAL ADVICE
# =============================================================================

FINANCIAL_ADVICE_TEMPLATE: Template = (
    T("You are a financial advisor AI. Give personalized, actionable financial advice.\n"),
    when(
        "financial_situation",
        T('The user describes their situation or asks:\n"'), V("financial_situation"), T('"\n'),
        otherwise=(
            T("The user has not described a specific situation. Base the advice on "
              "their financial data.\n"),
        ),
    ),
    T("\n"),
    when(
        "financial_goals",
        T('Their stated financial goals are:\n"'), V("financial_goals"), T('"\n'),
        otherwise=(
            T("The user has not stated goals. Infer likely goals from the data, or "
              "suggest common ones such as debt reduction, saving for a major purchase, "
              "retirement planning or wealth growth.\n"),
        ),
    ),
    T("\n"),
    when(
        "risk_tolerance",
        T("Their risk tolerance is: "), V("risk_tolerance"), T(".\n"),
        otherwise=(
            T("The user has not stated a risk tolerance. Assume 'medium', or show "
              "options for different risk profiles where it matters.\n"),
        ),
    ),
    T("\nUse the following structured financial data whenever it is available. "
      "This data takes priority.\n"),
    *all_records("provided by the user"),
    T(
        "\n\nProvide comprehensive, actionable advice in Markdown, for example:\n"
        "1. Financial Health Analysis: income, expenses, assets and debts in brief.\n"
        "2. Actionable Recommendations: numbered steps, each with why and how.\n"
        "3. Potential Investment Opportunities (if the data supports it).\n"
        "4. Expense Optimization (if the data supports it).\n\n"
        "If there is little or no specific data, give general financial planning "
        "advice and encourage the user to add details for personalized recommendations.\n"
        "Advice:"
    ),
)


# =============================================================================
# SPENDING ANALYSIS
# =============================================================================

SPENDING_ANALYSIS_TEMPLATE: Template = (
    T(
        "You are a financial analyst AI. Analyze the user's spending and suggest "
        "savings opportunities.\n"
        "The expense items are the user's typical expenses (fixed or variable, with "
        "a frequency), not a transaction log.\n"
        "The user wants an analysis for the period: '"
    ), V("time_period"),
    T("'. Treat the expense data as representative of that period.\n\n"
      "User's Financial Data:\n"),
    *records("Income Sources (for context)", "income_items", INCOME_LINE,
             "No specific income sources provided by the user."),
    T("\n"),
    *records("Expense Items", "expense_items", EXPENSE_LINE,
             "No expense items provided."),
    T("\nBased on the expense data and the period '"), V("time_period"), T("':\n"),
    T(
        "1. **Key Spending Categories**: which categories are largest?\n"
        "2. **Spending Habits**: fixed vs. variable spending and what dominates.\n"
        "3. **Savings Opportunities**: 2-4 specific, practical recommendations.\n"
        "4. **Spending vs. Income**: a brief comparison, if income was provided.\n"
        "5. **Summary for '"
    ), V("time_period"),
    T(
        "'**: a short closing summary.\n\n"
        "Keep the tone constructive. Use Markdown headings and bullet points.\n"
        "Analysis:\n"
    ),
)


# =============================================================================
# GOAL PLAN
# =============================================================================

GOAL_PLAN_TEMPLATE: Template = (
    T(
        "You are FinSage, an AI financial planning assistant. The user wants a "
        "detailed, actionable strategy for this goal:\n\n"
        "Goal Details:\n"
        "- Name: "
    ), V("goal_name"),
    T("\n- Type: "), V("goal_type"),
    T("\n- Target Amount: ₹"), V("target_amount"),
    T("\n- Current Amount: ₹"), V("current_amount"),
    T("\n"),
    when("target_date", T("- Target Date: "), V("target_date"), T("\n")),
    T("- Priority: "), V("priority"),
    T('\n\nWrite an encouraging, actionable plan in Markdown to achieve "'), V("goal_name"),
    T('", with these sections:\n\n'
      "### 1. Goal Overview & Encouragement\n"
      "   - Restate the goal and add a motivating word.\n"
      "   - Remaining amount: ₹"), V("target_amount"), T(" - ₹"), V("current_amount"),
    T(".\n\n### 2. Savings Strategy\n"
      "   - How consistent, automated contributions close the gap; if a target date "
      "is given, say whether contributions need to be aggressive or moderate.\n\n"
      "### 3. Investment Approach\n"
      "   - A dedicated vehicle (e.g. a SIP in mutual funds) matched to the time horizon: "
      "conservative for short-term, balanced for medium-term, growth-oriented for "
      "long-term goals. Mention diversification.\n\n"
      "### 4. Managing Finances to Support the Goal\n"
      "   - Expense review and paying down high-interest debt to free up cash flow.\n\n"
      "### 5. Plan Monitoring & Adjustment\n"
      "   - Periodic reviews and adapting to changing circumstances.\n\n"
      "Keep the tone positive and practical.\n"
      "Plan:\n"),
)


# =============================================================================
# GOAL SUGGESTIONS
# =============================================================================

GOAL_SUGGESTIONS_TEMPLATE: Template = (
    T(
        "You are a helpful financial assistant. Suggest 2-3 personalized financial "
        "goal IDEAS, each with related ACTIONABLE ADVICE, based on the user's data. "
        "If there is little or no data, suggest sound general goals.\n\n"
        "User's Financial Data (if available):\n"
    ),
    *all_records("provided"),
    T(
        "\n\nReturn 2-3 distinct recommendations. Each one has:\n"
        "1. goalIdea: a concise, actionable goal (e.g. \"Build an emergency fund "
        "covering 3-6 months of essential expenses\").\n"
        "2. relatedAdvice: specific advice for reaching it, covering savings "
        "strategy and, where relevant, investment principles, debt management and "
        "expense reduction. A short paragraph or a few Markdown bullets.\n"
    ),
)


# =============================================================================
# EXPENSE CATEGORY
# =============================================================================

EXPENSE_CATEGORY_TEMPLATE: Template = (
    T(
        "You are an expert financial assistant. Suggest the best expense category "
        "for an expense name.\n"
        f"The available categories are: {', '.join(EXPENSE_CATEGORIES)}.\n\n"
        'Expense Name: "'
    ), V("expense_name"),
    T(
        '"\n\n'
        "Pick the most fitting category from the list above and give a very brief "
        "reasoning. If the name is ambiguous or fits no category, omit the category "
        "and explain why in the reasoning.\n"
    ),
)


# =============================================================================
# FINANCIAL OVERVIEW
# =============================================================================

FINANCIAL_OVERVIEW_TEMPLATE: Template = (
    T(
        "You are an expert financial analyst AI. Give a concise overview of the "
        "user's financial health from the data below. Focus on how income, expenses, "
        "investments and loans relate to each other. Be specific to the data; no "
        "generic advice.\n\n"
        "Financial Data:\n"
    ),
    *all_records("provided"),
    T(
        "\n\nBased ONLY on the data above, provide:\n"
        "1. overallCondition: financial health in at most 2 sentences.\n"
        "2. keyInsights: 2-4 of the most important observations.\n"
        "3. actionableSuggestions: 2-4 concrete, practical steps.\n"
        "4. potentialRisks: 1-3 risks, only if significant.\n"
        "5. positiveAspects: 1-3 strengths, only if significant.\n"
    ),
)


# =============================================================================
# FINANCIAL ANALYSIS
# =============================================================================

FINANCIAL_ANALYSIS_TEMPLATE: Template = (
    T(
        "You are an expert financial analyst AI. Write a personalized, detailed "
        "financial analysis from the user's records and key calculated metrics. "
        "Keep it easy to understand and give actionable recommendations. Discuss "
        "all amounts in Indian Rupees (₹).\n\n"
        "Calculated Metrics:\n"
        "- Monthly Income: ₹"
    ), V("calculated_metrics.monthly_income"),
    T("\n- Total Monthly Expenses: ₹"), V("calculated_metrics.total_monthly_expenses"),
    T("\n- Monthly Savings: ₹"), V("calculated_metrics.monthly_savings"),
    T("\n- Savings Rate: "), V("calculated_metrics.savings_rate"),
    T("%\n- Debt-to-Income Ratio: "), V("calculated_metrics.debt_to_income_ratio"),
    T("%\n- Investment Rate (from the Savings/Investments expense category): "),
    V("calculated_metrics.investment_rate"),
    T("%\n\nDetailed Financial Data:\n"),
    *all_records("provided"),
    T(
        "\n\nBased on ALL of the above, write one cohesive analysis in Markdown "
        "that covers:\n"
        "1. **Overall Financial Picture**: income vs. expenses in a sentence or two.\n"
        "2. **Savings Analysis**: is the savings amount and rate healthy, and what "
        "does it indicate?\n"
        "3. **Investment Analysis**: the investment rate or the total invested, "
        "compared with typical recommendations for this income.\n"
        "4. **Debt Analysis**: is the debt-to-income ratio within healthy limits? "
        "Comment on the loan payments.\n"
        "5. **Spending Habits**: the largest expense categories and notable patterns.\n"
        "6. **Recommendations**: 2-3 concrete, actionable steps.\n\n"
        "Keep the tone supportive and constructive.\n"
        "Analysis:\n"
    ),
)


# =============================================================================
# WHAT-IF ANALYSIS
# =============================================================================
# Rendered against the flow's prompt context, not the raw request: the
# simulation figures arrive pre-formatted under "projections".

CAREER_CHANGE_DETAILS: tuple[Section, ...] = (
    T("Scenario Parameters (Career Change):\n- Current Monthly Salary: ₹"),
    V("parameters.current_monthly_salary"),
    T("\n- New Proposed Monthly Salary: ₹"), V("parameters.new_monthly_salary"),
    T("\n- Years to Simulate: "), V("parameters.years_to_simulate"),
    T(" years\n- Assumed Annual Salary Growth Rate: "), V("parameters.annual_growth_rate"),
    T("%\n\nKey Simulation Projections (Year 1 to "), V("parameters.years_to_simulate"),
    T("):\n- Annual income, current path: "), V("projections.current_path_income"),
    T("\n- Annual income, new path: "), V("projections.new_path_income"),
    T("\n- Cumulative savings, current path: "), V("projections.current_path_savings"),
    T("\n- Cumulative savings, new path: "), V("projections.new_path_savings"),
    T("\n\n"),
)

INVESTMENT_STRATEGY_DETAILS: tuple[Section, ...] = (
    T("Scenario Parameters (Investment Strategy):\n- Monthly Investment: ₹"),
    V("parameters.monthly_investment_amount"),
    T("\n- Current Strategy: "), V("parameters.current_strategy_name"),
    T(" ("), V("parameters.current_strategy_return"), T("% p.a.)"),
    T("\n- New Strategy: "), V("parameters.new_strategy_name"),
    T(" ("), V("parameters.new_strategy_return"), T("% p.a.)"),
    T("\n- Years to Simulate: "), V("parameters.years_to_simulate"),
    T(" years\n\nKey Simulation Projections:\n- Total Amount Invested: "),
    V("projections.total_invested"),
    T("\n- "), V("parameters.current_strategy_name"), T(" Final Amount: "),
    V("projections.current_final"),
    T("\n- "), V("parameters.new_strategy_name"), T(" Final Amount: "),
    V("projections.new_final"),
    T("\n- Difference in Final Amount (New - Current): "), V("projections.difference"),
    T("\n\nYear-End Values:\n| Year | "), V("parameters.current_strategy_name"),
    T(" (₹) | "), V("parameters.new_strategy_name"), T(" (₹) |\n|------|------|------|\n"),
    each(
        "projections.years",
        T("| "), V("year"), T(" | "), V("current_value"), T(" | "), V("new_value"), T(" |\n"),
    ),
    T("\n"),
)

MAJOR_PURCHASE_DETAILS: tuple[Section, ...] = (
    T("Scenario Parameters (Major Purchase - "), V("parameters.purchase_type"),
    T("):\n- Total Cost: ₹"), V("parameters.total_cost"),
    T("\n- Down Payment: ₹"), V("parameters.down_payment"),
    T("\n- Loan Interest Rate: "), V("parameters.interest_rate"),
    T("% p.a.\n- Loan Tenure: "), V("parameters.loan_tenure_years"), T(" years\n"),
    when(
        "parameters.monthly_rent",
        T("- Current Monthly Rent: ₹"), V("parameters.monthly_rent"),
        T(" (saved or reallocated if the user buys)\n"),
    ),
    T("\nKey Simulation Projections (at the end of the "), V("parameters.loan_tenure_years"),
    T("-year loan):\n- Net Worth With Purchase: "), V("projections.with_purchase"),
    T("\n- Net Worth Without Purchase (investing instead): "), V("projections.without_purchase"),
    T("\n- Monthly EMI: ₹"), V("projections.monthly_emi"),
    T("\n\n"),
)

WHAT_IF_ANALYSIS_TEMPLATE: Template = (
    T(
        "You are FinSage, an expert financial advisor AI. Analyze a \"what-if\" "
        "scenario for the user and write a comprehensive, actionable report in "
        "Markdown.\n\n"
        "Current User Financial Snapshot:\n"
        "- Total Monthly Income: ₹"
    ), V("current_financials.total_monthly_income"),
    T("\n- Total Monthly Expenses: ₹"), V("current_financials.total_monthly_expenses"),
    T("\n- Net Monthly Savings: ₹"), V("current_financials.net_monthly_savings"),
    T("\n- Total Investments Value: ₹"), V("current_financials.total_investments_value"),
    T("\n- Total Debt: ₹"), V("current_financials.total_debt"),
    T("\n\nScenario Being Analyzed: "), V("scenario_label"), T("\n\n"),
    when("is_career_change", *CAREER_CHANGE_DETAILS),
    when("is_investment_strategy", *INVESTMENT_STRATEGY_DETAILS),
    when("is_major_purchase", *MAJOR_PURCHASE_DETAILS),
    T("---\n\nStructure the analysis with these Markdown headings:\n\n"
      "## AI Analysis of Your \""), V("scenario_label"), T("\" Scenario\n\n"
      "### 1. Current Financial Situation Overview\n"
      "Summarize current financial health: net savings and any significant "
      "investment or debt positions.\n\n"
      "### 2. Understanding the Simulation\n"),
    when(
        "is_career_change",
        T("Explain the salary change from ₹"), V("parameters.current_monthly_salary"),
        T(" to ₹"), V("parameters.new_monthly_salary"),
        T(" per month and what "), V("parameters.annual_growth_rate"),
        T("% annual growth means over "), V("parameters.years_to_simulate"), T(" years.\n"),
    ),
    when(
        "is_investment_strategy",
        T("Explain the shift from \""), V("parameters.current_strategy_name"),
        T("\" to \""), V("parameters.new_strategy_name"),
        T("\" with ₹"), V("parameters.monthly_investment_amount"),
        T(" invested monthly for "), V("parameters.years_to_simulate"),
        T(" years, and the difference in expected returns.\n"),
    ),
    when(
        "is_major_purchase",
        T("Explain the loan terms for the "), V("parameters.purchase_type"),
        T(" (₹"), V("parameters.total_cost"), T(" with ₹"), V("parameters.down_payment"),
        T(" down, "), V("parameters.interest_rate"), T("% for "),
        V("parameters.loan_tenure_years"), T(" years, EMI ₹"), V("projections.monthly_emi"),
        T(") and that the simulation compares buying against continuing to invest"),
        when("parameters.monthly_rent", T(" savings plus the rent saved")),
        T(".\n"),
    ),
    T("\n### 3. Projected Financial Impact\n"),
    when(
        "is_career_change",
        T("Compare the income and cumulative savings trends of both paths and the "
          "gap by the final year; the new path ends at "),
        V("projections.last_new_path_income"),
        T(" a year. Describe the effect on net worth accumulation.\n"),
    ),
    when(
        "is_investment_strategy",
        T("Compare the final amounts against the total invested, discuss "
          "compounding using the year-by-year table and the final difference of "),
        V("projections.difference"), T(".\n"),
    ),
    when(
        "is_major_purchase",
        T("Compare the net worth with and without the purchase, the cash-flow "
          "effect of the EMI"),
        when("parameters.monthly_rent", T(" against the current rent")),
        T(", and how the new debt changes leverage and risk. Asset appreciation "
          "is not modeled.\n"),
    ),
    T(
        "\n### 4. Pros and Cons of This Scenario\n"
        "List the financial advantages and the downsides or trade-offs, with the "
        "figures above. Mention non-financial aspects only as they bear on "
        "long-term well-being.\n\n"
        "### 5. Alternative Approaches & Considerations\n"
    ),
    when(
        "is_career_change",
        T("Alternatives such as negotiating growth in the current role or "
          "upskilling for a higher starting salary.\n"),
    ),
    when(
        "is_investment_strategy",
        T("A mix of both strategies, other strategies, and periodic review.\n"),
    ),
    when(
        "is_major_purchase",
        T("Delaying to save a larger down payment, a less expensive option"),
        when("parameters.monthly_rent", T(", renting and investing the difference")),
        T(", and an emergency fund before new debt.\n"),
    ),
    T("\n### 6. Critical Advice from FinSage\n"),
    when(
        "is_career_change",
        T("How to manage the income change, and a buffer if the move is risky.\n"),
    ),
    when(
        "is_investment_strategy",
        T("Understanding the risk of "), V("parameters.new_strategy_name"),
        T(", diversification, and fit with goals and time horizon.\n"),
    ),
    when(
        "is_major_purchase",
        T("Affordability of the EMI against the monthly income of ₹"),
        V("current_financials.total_monthly_income"),
        T(", insurance for the new asset, and an emergency fund after the down payment.\n"),
    ),
    T("\nAnalysis:\n"),
)

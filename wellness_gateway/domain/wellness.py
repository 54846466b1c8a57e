"""Financial wellness scoring - composite 0-100 score from budget and account data"""

import logging
import re
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from wellness_gateway.domain.accounts import LIABILITY_TYPES, SPENDING_TYPES, compute_account_overview
from wellness_gateway.domain.budget import BUDGET_CATEGORIES, WINDOW_DAYS, summarise_monthly_budget
from wellness_gateway.domain.classification import search_text
from wellness_gateway.domain.models import (
    Account,
    AccountOverview,
    AccountType,
    BudgetCategory,
    BudgetSummary,
    ComponentScores,
    LiabilityDriver,
    Transaction,
    WellnessMetrics,
)
from wellness_gateway.utils.date_utils import parse_date, resolve_as_of, window_start
from wellness_gateway.utils.money import clamp, coerce_amount, round_half_up, round_to_cents

logger = logging.getLogger(__name__)

DEBT_KEYWORDS = ("loan", "mortgage", "credit", "repayment", "debt", "card", "interest", "finance", "lender")
DEBT_ACCOUNT_NAME_PATTERN = re.compile(r"mortgage|loan", re.IGNORECASE)

# Component weights, summing to 1.0
WEIGHTS: Dict[str, float] = {
    "dti": 0.20,
    "savings_rate": 0.20,
    "emergency_fund": 0.15,
    "net_worth": 0.15,
    "stability": 0.10,
    "credit_utilization": 0.10,
    "financial_behaviour": 0.05,
    "income_growth": 0.05,
}

DTI_CEILING = 1.2  # dti at which the DTI component bottoms out
TARGET_SAVINGS_RATE = 0.2
EMERGENCY_FUND_TARGET_MONTHS = 6
CREDIT_LIMIT_INCOME_MULTIPLE = 3
MAX_LIABILITY_DRIVERS = 2


def derive_dti_label(dti: float) -> str:
    if dti <= 0.25:
        return "Excellent"
    if dti <= 0.35:
        return "Good"
    if dti <= 0.5:
        return "Elevated"
    return "High"


def build_focus_message(dti: float) -> str:
    if dti <= 0.25:
        return "Great trajectory. Keep debt payments under a quarter of income."
    if dti <= 0.35:
        return "Healthy range. Maintain extra cash buffers to stay below 35%."
    if dti <= 0.5:
        return "Above the preferred range. Direct surplus income to the largest balance."
    return "Debt is consuming over half of monthly income. Prioritise repayments and pause lifestyle upgrades."


def _is_debt_account(account: Optional[Account]) -> bool:
    if account is None:
        return False
    return account.type in LIABILITY_TYPES or bool(DEBT_ACCOUNT_NAME_PATTERN.search(account.name or ""))


def calculate_debt_payments(
    budget: BudgetSummary,
    accounts: Sequence[Account],
) -> Tuple[float, List[LiabilityDriver]]:
    """
    Sum debt-service outflows in the budget window.

    An outflow counts when it leaves a credit card/loan/mortgage account or its
    text mentions debt. Returns the total and the two accounts carrying the most.
    """
    lookup = {account.id: account for account in accounts}

    total = 0.0
    debt_by_account: Dict[str, float] = {}

    for txn in budget.window_transactions:
        amount = coerce_amount(txn.amount)
        if amount >= 0:
            continue

        account = lookup.get(txn.account_id)
        text = search_text(txn)
        if not (_is_debt_account(account) or any(keyword in text for keyword in DEBT_KEYWORDS)):
            continue

        payment = abs(amount)
        total += payment
        if account is not None:
            debt_by_account[account.name] = debt_by_account.get(account.name, 0.0) + payment

    drivers = sorted(
        (LiabilityDriver(name=name, value=round_to_cents(value)) for name, value in debt_by_account.items()),
        key=lambda driver: driver.value,
        reverse=True,
    )[:MAX_LIABILITY_DRIVERS]

    return round_to_cents(total), drivers


def calculate_income_growth(budget: BudgetSummary, as_of: datetime) -> float:
    """
    Relative change in inflows between the two halves of the budget window.

    1.0 when income only appears in the second half, 0.0 when there is none.
    """
    start = window_start(as_of, WINDOW_DAYS)
    midpoint = start + timedelta(days=WINDOW_DAYS / 2)

    first_half = 0.0
    second_half = 0.0
    for txn in budget.window_transactions:
        amount = coerce_amount(txn.amount)
        txn_time = parse_date(txn.date)
        if amount <= 0 or txn_time is None:
            continue
        if txn_time < midpoint:
            first_half += amount
        else:
            second_half += amount

    if first_half > 0:
        return (second_half - first_half) / first_half
    return 1.0 if second_half > 0 else 0.0


def _liquid_assets(overview: AccountOverview) -> float:
    return round_to_cents(
        sum(
            acct.computed_balance
            for acct in overview.accounts
            if not acct.is_liability and acct.type in SPENDING_TYPES
        )
    )


def _credit_card_balance(overview: AccountOverview) -> float:
    return round_to_cents(
        sum(abs(acct.computed_balance) for acct in overview.accounts if acct.type == AccountType.CREDIT_CARD)
    )


def calculate_wellness_metrics(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    as_of: Optional[datetime] = None,
) -> WellnessMetrics:
    """
    Calculate the composite financial wellness score.

    Scoring weights:
    - 20%: Debt-to-income (100 at 0, linear to 0 at 1.2)
    - 20%: Savings rate (100 at a 20% savings rate or better)
    - 15%: Emergency fund (100 at 6 months of expenses in liquid assets)
    - 15%: Net worth relative to assets
    - 10%: Stability (income left after expenses)
    - 10%: Credit utilisation (card balances vs 3x monthly income)
    -  5%: Financial behaviour (deviation from the 50/30/20 split)
    -  5%: Income growth (second half of the window vs first half)

    Zero income/expenses never raise; each ratio falls back to a fixed default
    (dti=1, savings rate=0, stability=-1, utilisation=0, emergency fund=6 months).
    """
    as_of = resolve_as_of(as_of)
    overview = compute_account_overview(accounts)
    budget = summarise_monthly_budget(transactions, as_of)

    monthly_debt_payments, drivers = calculate_debt_payments(budget, accounts)
    monthly_income = round_to_cents(budget.income)
    expenses = round_to_cents(budget.expenses)
    savings_allocated = round_to_cents(budget.savings_allocated)
    has_income = monthly_income > 0

    # Debt-to-income
    dti = monthly_debt_payments / monthly_income if has_income else 1.0
    dti_score = clamp((1 - min(dti, DTI_CEILING) / DTI_CEILING) * 100)

    # Savings rate
    savings_rate = savings_allocated / monthly_income if has_income else 0.0
    savings_rate_score = clamp(savings_rate / TARGET_SAVINGS_RATE * 100)

    # Behaviour: mean absolute deviation from the target split
    average_deviation = sum(abs(budget.adjustments[category]) for category in BUDGET_CATEGORIES) / len(
        BUDGET_CATEGORIES
    )
    financial_behaviour_score = clamp(100 - average_deviation * 2)

    # Emergency fund
    liquid_assets = _liquid_assets(overview)
    emergency_fund_months = liquid_assets / expenses if expenses > 0 else float(EMERGENCY_FUND_TARGET_MONTHS)
    emergency_fund_months = min(emergency_fund_months, EMERGENCY_FUND_TARGET_MONTHS)
    emergency_fund_score = clamp(emergency_fund_months / EMERGENCY_FUND_TARGET_MONTHS * 100)

    # Net worth
    previous_net_worth = round_to_cents(overview.net_worth - (monthly_income - budget.total_outflow))
    if overview.total_assets > 0:
        net_worth_score = clamp((overview.net_worth / overview.total_assets + 1) * 50)
    else:
        net_worth_score = 70.0 if overview.net_worth > 0 else 40.0

    # Stability
    stability_ratio = (monthly_income - expenses) / monthly_income if has_income else -1.0
    stability_score = clamp((stability_ratio + 1) * 50)

    # Credit utilisation
    credit_utilisation = (
        _credit_card_balance(overview) / (monthly_income * CREDIT_LIMIT_INCOME_MULTIPLE) if has_income else 0.0
    )
    credit_utilization_score = clamp((1 - min(credit_utilisation, 1)) * 100)

    # Income growth
    income_growth_ratio = calculate_income_growth(budget, as_of)
    income_growth_score = clamp((income_growth_ratio + 1) / 2 * 100)

    components = {
        "dti": dti_score,
        "savings_rate": savings_rate_score,
        "emergency_fund": emergency_fund_score,
        "net_worth": net_worth_score,
        "stability": stability_score,
        "credit_utilization": credit_utilization_score,
        "financial_behaviour": financial_behaviour_score,
        "income_growth": income_growth_score,
    }
    score = int(clamp(round_half_up(sum(WEIGHTS[name] * value for name, value in components.items()))))

    logger.debug(
        "Wellness score calculated",
        extra={
            "score": score,
            "dti": dti,
            "account_count": len(accounts),
            "window_count": len(budget.window_transactions),
        },
    )

    return WellnessMetrics(
        score=score,
        dti=dti,
        dti_label=derive_dti_label(dti),
        focus_message=build_focus_message(dti),
        monthly_debt_payments=monthly_debt_payments,
        monthly_income=monthly_income,
        expenses=expenses,
        net_worth=overview.net_worth,
        previous_net_worth=previous_net_worth,
        total_assets=overview.total_assets,
        total_liabilities=overview.total_liabilities,
        liquid_assets=liquid_assets,
        emergency_fund_months=round_to_cents(emergency_fund_months),
        savings_allocated=savings_allocated,
        savings_rate=savings_rate,
        stability_ratio=stability_ratio,
        credit_utilisation=credit_utilisation,
        income_growth_ratio=income_growth_ratio,
        average_budget_deviation=average_deviation,
        essentials_percent=budget.percentages[BudgetCategory.ESSENTIALS.value],
        lifestyle_percent=budget.percentages[BudgetCategory.LIFESTYLE.value],
        savings_percent=budget.percentages[BudgetCategory.SAVINGS.value],
        essentials_amount=round_to_cents(budget.totals[BudgetCategory.ESSENTIALS.value]),
        lifestyle_amount=round_to_cents(budget.totals[BudgetCategory.LIFESTYLE.value]),
        savings_amount=round_to_cents(budget.totals[BudgetCategory.SAVINGS.value]),
        target_percentages=budget.target_percentages,
        target_amounts=budget.target_amounts,
        adjustments=budget.adjustments,
        liabilities_by_account=drivers,
        component_scores=ComponentScores(
            **{name: int(round_half_up(value)) for name, value in components.items()}
        ),
        overview=overview,
        budget=budget,
    )

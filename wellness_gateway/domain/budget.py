"""50/30/20 budget summary over a trailing 30-day window"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from wellness_gateway.domain.classification import classify_transaction
from wellness_gateway.domain.models import BudgetCategory, BudgetSummary, Transaction
from wellness_gateway.utils.date_utils import parse_date, resolve_as_of, window_start
from wellness_gateway.utils.money import coerce_amount

logger = logging.getLogger(__name__)

WINDOW_DAYS = 30

BUDGET_CATEGORIES: List[str] = [category.value for category in BudgetCategory]

TARGET_SPLIT: Dict[str, float] = {
    BudgetCategory.ESSENTIALS.value: 50,
    BudgetCategory.LIFESTYLE.value: 30,
    BudgetCategory.SAVINGS.value: 20,
}


def filter_window(transactions: Sequence[Transaction], as_of: Optional[datetime] = None) -> List[Transaction]:
    """
    Transactions dated on or after `as_of - 30 days`.

    Unparsable dates are dropped. There is no upper bound, so forward-dated
    (pending) rows stay in the window.
    """
    start = window_start(resolve_as_of(as_of), WINDOW_DAYS)
    window = []
    for txn in transactions:
        txn_time = parse_date(txn.date)
        if txn_time is None or txn_time < start:
            continue
        window.append(txn)
    return window


def summarise_monthly_budget(
    transactions: Sequence[Transaction],
    as_of: Optional[datetime] = None,
) -> BudgetSummary:
    """
    Aggregate the trailing 30 days into Essentials/Lifestyle/Savings.

    Requirements:
    - income = sum of inflows in the window
    - each outflow is classified and its absolute value added to its bucket
    - percentages are relative to income (0 when there is no income)
    - adjustments = actual % - target %
    - savings_allocated = explicit savings + any unspent income
    """
    window_transactions = filter_window(transactions, as_of)

    income = 0.0
    totals: Dict[str, float] = {category: 0.0 for category in BUDGET_CATEGORIES}

    for txn in window_transactions:
        amount = coerce_amount(txn.amount)
        if amount > 0:
            income += amount
        elif amount < 0:
            classification = classify_transaction(txn)
            if classification:
                totals[classification.value] += abs(amount)

    percentages = {
        category: (totals[category] * 100 / income) if income > 0 else 0.0
        for category in BUDGET_CATEGORIES
    }
    target_amounts = {category: TARGET_SPLIT[category] * income / 100 for category in BUDGET_CATEGORIES}
    adjustments = {category: percentages[category] - TARGET_SPLIT[category] for category in BUDGET_CATEGORIES}

    expenses = totals[BudgetCategory.ESSENTIALS.value] + totals[BudgetCategory.LIFESTYLE.value]
    total_outflow = expenses + totals[BudgetCategory.SAVINGS.value]
    surplus = max(0.0, income - total_outflow)
    savings_allocated = totals[BudgetCategory.SAVINGS.value] + surplus

    logger.debug(
        "Budget summarised",
        extra={
            "transaction_count": len(transactions),
            "window_count": len(window_transactions),
            "income": income,
            "total_outflow": total_outflow,
        },
    )

    return BudgetSummary(
        income=income,
        totals=totals,
        percentages=percentages,
        target_percentages=dict(TARGET_SPLIT),
        target_amounts=target_amounts,
        adjustments=adjustments,
        savings_allocated=savings_allocated,
        expenses=expenses,
        total_outflow=total_outflow,
        window_transactions=window_transactions,
    )

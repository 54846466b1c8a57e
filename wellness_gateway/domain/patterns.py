"""Finance context builder - rollups, recurring charges and duplicate charges"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from wellness_gateway.domain.models import (
    Account,
    AccountSummary,
    Cadence,
    ContextTotals,
    DuplicateTransaction,
    FinanceContext,
    MerchantTotal,
    RecurringCandidate,
    Transaction,
)
from wellness_gateway.utils.date_utils import days_between, parse_date, resolve_as_of, window_start
from wellness_gateway.utils.money import coerce_amount, round_to_cents

logger = logging.getLogger(__name__)

CONTEXT_WINDOW_DAYS = 30
DEFAULT_TRANSACTION_LIMIT = 80
DEFAULT_MERCHANT_LIMIT = 10
MIN_RECURRING_OCCURRENCES = 3
DUPLICATE_WINDOW_DAYS = 2

# Inclusive bounds on the average gap in days
CADENCE_BANDS: Tuple[Tuple[Cadence, float, float], ...] = (
    (Cadence.WEEKLY, 5, 9),
    (Cadence.BIWEEKLY, 12, 18),
    (Cadence.MONTHLY, 25, 35),
)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

DatedTransaction = Tuple[datetime, Transaction]


def get_merchant_name(transaction: Transaction) -> str:
    return (transaction.description or "").strip() or (transaction.category or "").strip() or "Unknown"


def normalize_merchant(value: str) -> str:
    return value.strip().lower()


def get_cadence(average_gap_days: float) -> Optional[Cadence]:
    """Map an average day gap onto weekly/biweekly/monthly, or None if it fits no band"""
    for cadence, low, high in CADENCE_BANDS:
        if low <= average_gap_days <= high:
            return cadence
    return None


def _outflows(dated: Sequence[DatedTransaction]) -> List[DatedTransaction]:
    return [(when, txn) for when, txn in dated if coerce_amount(txn.amount) < 0]


def detect_recurring_charges(dated: Sequence[DatedTransaction]) -> List[RecurringCandidate]:
    """
    Find merchants charging on a regular cadence.

    Groups outflows by normalised merchant; a merchant with at least three
    charges whose average gap falls inside a cadence band is recurring.
    """
    by_merchant: Dict[str, List[DatedTransaction]] = defaultdict(list)
    for when, txn in _outflows(dated):
        by_merchant[normalize_merchant(get_merchant_name(txn))].append((when, txn))

    candidates = []
    for merchant, items in by_merchant.items():
        if len(items) < MIN_RECURRING_OCCURRENCES:
            continue

        ordered = sorted(items, key=lambda item: item[0])
        gaps = [days_between(current[0], previous[0]) for previous, current in zip(ordered, ordered[1:])]
        cadence = get_cadence(sum(gaps) / len(gaps))
        if cadence is None:
            continue

        average_amount = sum(abs(coerce_amount(txn.amount)) for _, txn in ordered) / len(ordered)
        candidates.append(
            RecurringCandidate(
                merchant=merchant,
                cadence=cadence,
                average_amount=round_to_cents(average_amount),
                last_date=ordered[-1][1].date,
                occurrences=len(ordered),
            )
        )
    return candidates


def detect_duplicate_charges(dated: Sequence[DatedTransaction]) -> List[DuplicateTransaction]:
    """
    Flag possible double charges: same merchant, same amount, within 2 days.

    Each (merchant, amount) group is reported at most once. The reported dates
    are those charges in the group that sit within 2 days of a neighbour.
    """
    groups: Dict[Tuple[str, float], List[DatedTransaction]] = defaultdict(list)
    for when, txn in _outflows(dated):
        key = (normalize_merchant(get_merchant_name(txn)), round_to_cents(abs(coerce_amount(txn.amount))))
        groups[key].append((when, txn))

    duplicates = []
    for (merchant, amount), items in groups.items():
        if len(items) < 2:
            continue

        ordered = sorted(items, key=lambda item: item[0])
        close = [False] * len(ordered)
        for i in range(1, len(ordered)):
            if days_between(ordered[i][0], ordered[i - 1][0]) <= DUPLICATE_WINDOW_DAYS:
                close[i - 1] = close[i] = True

        if any(close):
            duplicates.append(
                DuplicateTransaction(
                    merchant=merchant,
                    amount=amount,
                    dates=[txn.date for (_, txn), flagged in zip(ordered, close) if flagged],
                )
            )
    return duplicates


def _rollup(recent: Sequence[DatedTransaction]) -> Tuple[Dict[str, float], Dict[str, float]]:
    categories: Dict[str, float] = {}
    merchants: Dict[str, float] = {}
    for _, txn in _outflows(recent):
        value = abs(coerce_amount(txn.amount))
        category = (txn.category or "").strip() or "Other"
        merchant = get_merchant_name(txn)
        categories[category] = round_to_cents(categories.get(category, 0.0) + value)
        merchants[merchant] = round_to_cents(merchants.get(merchant, 0.0) + value)
    return categories, merchants


def build_finance_context(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    region: str = "AU",
    last_updated: Optional[str] = None,
    as_of: Optional[datetime] = None,
    transaction_limit: int = DEFAULT_TRANSACTION_LIMIT,
    merchant_limit: int = DEFAULT_MERCHANT_LIMIT,
) -> FinanceContext:
    """
    Build the compact finance snapshot consumed by the report/assistant surface.

    - transactions: newest `transaction_limit` rows, date descending
    - totals, category_rollup, top_merchants: trailing 30 days, outflows for rollups
    - recurring_candidates, duplicates: full history
    """
    as_of = resolve_as_of(as_of)
    start = window_start(as_of, CONTEXT_WINDOW_DAYS)

    with_dates = [txn for txn in transactions if txn.date]
    parsed = [(parse_date(txn.date), txn) for txn in with_dates]
    newest_first = sorted(parsed, key=lambda item: item[0] or _OLDEST, reverse=True)

    dated: List[DatedTransaction] = [(when, txn) for when, txn in newest_first if when is not None]
    recent = [(when, txn) for when, txn in dated if when >= start]

    income_30d = sum(coerce_amount(txn.amount) for _, txn in recent if coerce_amount(txn.amount) > 0)
    outgoings_30d = abs(sum(coerce_amount(txn.amount) for _, txn in recent if coerce_amount(txn.amount) < 0))

    categories, merchants = _rollup(recent)
    category_rollup = dict(sorted(categories.items(), key=lambda item: item[1], reverse=True))
    top_merchants = [
        MerchantTotal(merchant=merchant, total=total)
        for merchant, total in sorted(merchants.items(), key=lambda item: item[1], reverse=True)[:merchant_limit]
    ]

    recurring = detect_recurring_charges(dated)
    duplicates = detect_duplicate_charges(dated)

    logger.debug(
        "Finance context built",
        extra={
            "transaction_count": len(transactions),
            "window_count": len(recent),
            "recurring_count": len(recurring),
            "duplicate_count": len(duplicates),
        },
    )

    return FinanceContext(
        region=region,
        last_updated=last_updated or as_of.isoformat(),
        totals=ContextTotals(
            income_30d=round_to_cents(income_30d),
            outgoings_30d=round_to_cents(outgoings_30d),
            net_30d=round_to_cents(income_30d - outgoings_30d),
        ),
        top_merchants=top_merchants,
        category_rollup=category_rollup,
        recurring_candidates=recurring,
        duplicates=duplicates,
        transactions=[txn for _, txn in newest_first[:transaction_limit]],
        account_count=len(accounts),
        accounts=[
            AccountSummary(
                id=account.id,
                name=account.name,
                balance=round_to_cents(coerce_amount(account.balance)),
                currency=account.currency,
            )
            for account in accounts
        ],
    )

"""Account balance normalisation and asset/liability overview"""

import re
from typing import List, Sequence

from wellness_gateway.domain.models import Account, AccountOverview, AccountType, AccountWithComputed
from wellness_gateway.utils.money import coerce_amount, round_to_cents

LIABILITY_TYPES = (AccountType.CREDIT_CARD, AccountType.LOAN)
SPENDING_TYPES = (AccountType.CHECKING, AccountType.SAVINGS)

MORTGAGE_NAME_PATTERN = re.compile(r"mortgage|home loan|loan", re.IGNORECASE)


def normalise_balance(account: Account) -> float:
    """Credit cards and loans are liabilities, so a positive reported balance is flipped negative"""
    balance = coerce_amount(account.balance)
    if account.type in LIABILITY_TYPES and balance > 0:
        balance = -abs(balance)
    return round_to_cents(balance)


def with_computed_balance(account: Account) -> AccountWithComputed:
    computed_balance = normalise_balance(account)
    return AccountWithComputed(
        id=account.id,
        name=account.name,
        type=account.type,
        balance=coerce_amount(account.balance),
        currency=account.currency,
        computed_balance=computed_balance,
        is_liability=computed_balance < 0,
    )


def compute_account_overview(accounts: Sequence[Account]) -> AccountOverview:
    """
    Bucket accounts into assets, liabilities, spendable cash and mortgages.

    - spending_available: positive balances of checking/savings accounts
    - total_assets / total_liabilities: split on the sign of the normalised balance
    - mortgage_accounts: liabilities that are loans or are named like one
    """
    enhanced: List[AccountWithComputed] = [with_computed_balance(account) for account in accounts]

    spending_available = round_to_cents(
        sum(max(0.0, acct.computed_balance) for acct in enhanced if acct.type in SPENDING_TYPES)
    )
    total_assets = round_to_cents(sum(acct.computed_balance for acct in enhanced if not acct.is_liability))
    total_liabilities = round_to_cents(sum(abs(acct.computed_balance) for acct in enhanced if acct.is_liability))
    net_worth = round_to_cents(total_assets - total_liabilities)

    mortgage_accounts = [
        acct
        for acct in enhanced
        if acct.is_liability and (acct.type == AccountType.LOAN or MORTGAGE_NAME_PATTERN.search(acct.name or ""))
    ]

    return AccountOverview(
        spending_available=spending_available,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=net_worth,
        accounts=enhanced,
        mortgage_accounts=mortgage_accounts,
    )

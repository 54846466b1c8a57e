"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class AccountType(str, Enum):
    """Bank account kind as reported by the aggregation provider"""

    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT_CARD = "Credit Card"
    LOAN = "Loan"

    @classmethod
    def parse(cls, value: object) -> "AccountType":
        """Resolve provider spellings ("CreditCard", "credit_card", "mortgage", ...)"""
        if isinstance(value, cls):
            return value
        key = "".join(ch for ch in str(value or "").lower() if ch.isalnum())
        try:
            return _ACCOUNT_TYPE_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown account type: {value!r}") from None


_ACCOUNT_TYPE_ALIASES = {
    "checking": AccountType.CHECKING,
    "transaction": AccountType.CHECKING,
    "everyday": AccountType.CHECKING,
    "savings": AccountType.SAVINGS,
    "saving": AccountType.SAVINGS,
    "creditcard": AccountType.CREDIT_CARD,
    "credit": AccountType.CREDIT_CARD,
    "card": AccountType.CREDIT_CARD,
    "loan": AccountType.LOAN,
    "mortgage": AccountType.LOAN,
    "homeloan": AccountType.LOAN,
}


class BudgetCategory(str, Enum):
    """50/30/20 budget bucket"""

    ESSENTIALS = "Essentials"
    LIFESTYLE = "Lifestyle"
    SAVINGS = "Savings"


class Cadence(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Account:
    """Bank account from the aggregation provider"""

    id: str
    name: str
    type: AccountType
    balance: float
    currency: str = "AUD"


@dataclass(frozen=True)
class Transaction:
    """Bank transaction; amount > 0 is an inflow, amount < 0 an outflow"""

    id: str
    account_id: str
    description: str
    amount: float
    date: str
    category: str = ""


@dataclass
class BudgetSummary:
    """Trailing 30-day spend split into budget buckets"""

    income: float
    totals: Dict[str, float]
    percentages: Dict[str, float]
    target_percentages: Dict[str, float]
    target_amounts: Dict[str, float]
    adjustments: Dict[str, float]  # actual % - target %
    savings_allocated: float
    expenses: float
    total_outflow: float
    window_transactions: List[Transaction] = field(default_factory=list)


@dataclass
class AccountWithComputed:
    """Account plus its sign-normalised balance"""

    id: str
    name: str
    type: AccountType
    balance: float
    currency: str
    computed_balance: float
    is_liability: bool


@dataclass
class AccountOverview:
    spending_available: float
    total_assets: float
    total_liabilities: float
    net_worth: float
    accounts: List[AccountWithComputed]
    mortgage_accounts: List[AccountWithComputed]


@dataclass
class LiabilityDriver:
    """Account contributing the most debt repayments in the window"""

    name: str
    value: float


@dataclass
class ComponentScores:
    """Individual wellness factors, each 0-100"""

    dti: int
    savings_rate: int
    emergency_fund: int
    net_worth: int
    stability: int
    credit_utilization: int
    financial_behaviour: int
    income_growth: int


@dataclass
class WellnessMetrics:
    """Composite financial wellness score and its supporting figures"""

    score: int
    dti: float
    dti_label: str
    focus_message: str
    monthly_debt_payments: float
    monthly_income: float
    expenses: float
    net_worth: float
    previous_net_worth: float
    total_assets: float
    total_liabilities: float
    liquid_assets: float
    emergency_fund_months: float
    savings_allocated: float
    savings_rate: float
    stability_ratio: float
    credit_utilisation: float
    income_growth_ratio: float
    average_budget_deviation: float
    essentials_percent: float
    lifestyle_percent: float
    savings_percent: float
    essentials_amount: float
    lifestyle_amount: float
    savings_amount: float
    target_percentages: Dict[str, float]
    target_amounts: Dict[str, float]
    adjustments: Dict[str, float]
    liabilities_by_account: List[LiabilityDriver]
    component_scores: ComponentScores
    overview: AccountOverview
    budget: BudgetSummary


@dataclass
class RecurringCandidate:
    merchant: str
    cadence: Cadence
    average_amount: float
    last_date: str
    occurrences: int


@dataclass
class DuplicateTransaction:
    merchant: str
    amount: float
    dates: List[str]


@dataclass
class MerchantTotal:
    merchant: str
    total: float


@dataclass
class ContextTotals:
    income_30d: float
    outgoings_30d: float
    net_30d: float


@dataclass
class AccountSummary:
    id: str
    name: str
    balance: float
    currency: str


@dataclass
class FinanceContext:
    """Compact snapshot handed to the report/assistant surface"""

    region: str
    last_updated: str
    totals: ContextTotals
    top_merchants: List[MerchantTotal]
    category_rollup: Dict[str, float]
    recurring_candidates: List[RecurringCandidate]
    duplicates: List[DuplicateTransaction]
    transactions: List[Transaction]
    account_count: int
    accounts: List[AccountSummary]


@dataclass
class CategorizedTransaction:
    """Display categorisation of a single transaction"""

    id: str
    description: str
    category: str
    budget_category: Optional[BudgetCategory]

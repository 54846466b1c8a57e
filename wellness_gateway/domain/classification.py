"""Transaction classification - budget buckets and display categories

Two independent classifiers live here:
- classify_transaction: maps an outflow onto the 50/30/20 budget buckets
- categorize_transaction: maps a transaction onto a merchant/display label

Both are driven by ordered rule tables evaluated top-down; the first rule with
a matching keyword wins. Keep the tables as data so they can be swapped out
without touching call sites.
"""

import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from wellness_gateway.domain.models import BudgetCategory, CategorizedTransaction, Transaction
from wellness_gateway.utils.money import coerce_amount


@dataclass(frozen=True)
class KeywordRule:
    """Assigns `category` when any keyword is a substring of the search text"""

    category: str
    keywords: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


SAVINGS_KEYWORDS = (
    "savings", "investment", "invest", "micro-invest", "micro invest", "microinvest",
    "round up", "round-up", "deposit savings", "transfer to savings", "offset",
    "top up", "top-up", "stash", "raiz", "acorns", "stake", "etoro", "sharesies",
    "super", "401k", "retirement", "term deposit",
)

ESSENTIAL_KEYWORDS = (
    "rent", "mortgage", "utility", "electric", "gas", "water", "insurance", "premium",
    "woolworth", "coles", "aldi", "iga", "supermarket", "grocery", "petrol", "fuel",
    "7-eleven", "7 eleven", "bp", "caltex", "shell", "ampol", "transport", "train",
    "tram", "bus", "opal", "myki", "mygo", "child care", "daycare", "school",
    "education", "medical", "doctor", "hospital", "pharmacy", "chemist", "loan",
    "repayment", "debt", "credit card", "amortisation", "council", "rate", "tax",
    "registration", "internet", "phone", "mobile", "telstra", "optus", "vodafone",
    "energy", "origin", "agl", "energy australia", "woolies", "coles online",
    "bp petrol", "servo",
)

LIFESTYLE_KEYWORDS = (
    "restaurant", "dining", "cafe", "coffee", "bar", "pub", "takeaway", "take away",
    "uber eats", "deliveroo", "doordash", "netflix", "spotify", "stan", "disney",
    "prime video", "youtube", "apple music", "itunes", "google play", "amazon", "ebay",
    "kmart", "target", "myer", "sephora", "mecca", "beauty", "salon", "spa", "gym",
    "fitness", "membership", "cinema", "movie", "ticket", "entertainment", "holiday",
    "travel", "hotel", "airbnb", "flight", "uber", "lyft", "ride share", "gaming",
    "playstation", "xbox", "switch", "steam", "binge", "foxtel", "league pass",
)

# Order matters: "Loan repayment to savings" must land in Savings.
BUDGET_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(BudgetCategory.SAVINGS.value, SAVINGS_KEYWORDS),
    KeywordRule(BudgetCategory.ESSENTIALS.value, ESSENTIAL_KEYWORDS),
    KeywordRule(BudgetCategory.LIFESTYLE.value, LIFESTYLE_KEYWORDS),
    KeywordRule(BudgetCategory.ESSENTIALS.value, ("loan", "repay", "debt")),
    KeywordRule(BudgetCategory.LIFESTYLE.value, ("subscription", "membership")),
)

DEFAULT_BUDGET_CATEGORY = BudgetCategory.ESSENTIALS


def search_text(transaction: Transaction) -> str:
    """Lowercased "description category" string the keyword rules run against"""
    return f"{transaction.description or ''} {transaction.category or ''}".lower()


def classify_transaction(
    transaction: Transaction,
    rules: Sequence[KeywordRule] = BUDGET_RULES,
) -> Optional[BudgetCategory]:
    """
    Assign an outflow to a 50/30/20 budget bucket.

    Inflows (amount >= 0) are never classified and return None. Every outflow
    gets a bucket: unmatched descriptors fall back to Essentials.
    """
    if coerce_amount(transaction.amount) >= 0:
        return None

    text = search_text(transaction)
    for rule in rules:
        if rule.matches(text):
            return BudgetCategory(rule.category)

    return DEFAULT_BUDGET_CATEGORY


# Display categories ------------------------------------------------------

KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule("Income", ("salary", "payroll", "wage", "payslip", "payg", "deposit from", "tax refund")),
    KeywordRule("Groceries", ("coles", "woolworth", "aldi", "iga", "grocery")),
    KeywordRule("Dining Out", ("restaurant", "cafe", "bar", "dining", "ubereats", "deliveroo")),
    KeywordRule("Transport", ("uber", "ola", "lyft", "taxi", "fuel", "petrol", "servo", "bp", "caltex", "shell")),
    KeywordRule("Subscriptions", ("spotify", "netflix", "stan", "binge", "amazon prime", "apple tv", "disney")),
    KeywordRule("Housing", ("rent", "mortgage", "real estate", "property", "strata")),
    KeywordRule(
        "Utilities",
        ("electricity", "energy", "agl", "origin", "water", "internet", "telstra", "optus", "nbn"),
    ),
    KeywordRule(
        "Health & Fitness",
        ("gym", "fitness", "pilates", "yoga", "chemist", "pharmacy", "doctor", "clinic"),
    ),
    KeywordRule(
        "Shopping",
        ("kmart", "jb hi-fi", "harvey norman", "officeworks", "the icon", "myer", "david jones", "jb hi fi"),
    ),
    KeywordRule("Debt Repayments", ("afterpay", "zip", "credit card", "loan payment", "repayment")),
    KeywordRule("Travel", ("qantas", "jetstar", "virgin", "airbnb", "booking.com", "hotel")),
    KeywordRule("Insurance", ("insurance", "insur")),
    KeywordRule("Education", ("course", "university", "study", "udemy", "coursera")),
    KeywordRule("Savings", ("savings", "transfer to savings", "round up")),
    KeywordRule("Transfers", ("transfer", "payment to", "from account", "internal transfer")),
)

RAW_CATEGORY_MAP: Dict[str, str] = {
    "food": "Food & Dining",
    "food & drink": "Food & Dining",
    "food_and_drink": "Food & Dining",
    "groceries": "Groceries",
    "shopping": "Shopping",
    "retail": "Shopping",
    "transport": "Transport",
    "fuel": "Transport",
    "travel": "Travel",
    "transportation": "Transport",
    "rideshare": "Transport",
    "subscriptions": "Subscriptions",
    "entertainment": "Entertainment",
    "housing": "Housing",
    "rent": "Housing",
    "mortgage": "Housing",
    "utilities": "Utilities",
    "bills": "Utilities",
    "insurance": "Insurance",
    "health": "Health & Fitness",
    "medical": "Healthcare",
    "fitness": "Health & Fitness",
    "education": "Education",
    "fees": "Fees & Charges",
    "service fees": "Fees & Charges",
    "interest": "Fees & Charges",
    "loan": "Debt Repayments",
    "debt": "Debt Repayments",
    "savings": "Savings",
    "transfer": "Transfers",
    "transfers": "Transfers",
    "transaction": "General Spending",
    "transactions": "General Spending",
    "income": "Income",
    "payroll": "Income",
    "salary": "Income",
}

ACRONYM_WORDS = frozenset({"ATM", "BP", "NAB", "ANZ", "HSBC", "ING", "NBN", "ATO", "QANTAS"})

PLACEHOLDER_DESCRIPTION = "Transaction"
GENERAL_SPENDING = "General Spending"
INCOME = "Income"


def clean_description(description: object) -> str:
    """Collapse whitespace and title-case a bank narration ("WOOLWORTHS  1234 SYDNEY" -> "Woolworths 1234 Sydney")"""
    if not isinstance(description, str):
        return PLACEHOLDER_DESCRIPTION

    trimmed = re.sub(r"\s+", " ", description).strip()
    if not trimmed:
        return PLACEHOLDER_DESCRIPTION

    words = []
    for word in trimmed.lower().split(" "):
        if word.upper() in ACRONYM_WORDS:
            words.append(word.upper())
        elif word[0].isdigit():
            words.append(word)
        else:
            words.append(word[0].upper() + word[1:])
    return " ".join(words)


def _normalise_category_label(value: str) -> str:
    trimmed = re.sub(r"\s+", " ", re.sub(r"[_-]+", " ", value)).strip()
    if not trimmed:
        return GENERAL_SPENDING
    return " ".join(segment[:1].upper() + segment[1:] for segment in trimmed.lower().split(" "))


def categorize_transaction(
    raw_category: object = None,
    description: object = None,
    amount: float = 0.0,
    rules: Sequence[KeywordRule] = KEYWORD_RULES,
) -> str:
    """
    Resolve a display category for a transaction.

    Lookup order: keyword rules over "raw_category description", then the raw
    category table, then a tidied version of the raw category, and finally
    Income/General Spending by the sign of the amount.
    """
    candidate = str(raw_category or "").lower()
    text = f"{candidate} {str(description or '').lower()}"

    for rule in rules:
        if rule.matches(text):
            return rule.category

    if candidate in RAW_CATEGORY_MAP:
        return RAW_CATEGORY_MAP[candidate]

    amount = coerce_amount(amount)
    if candidate:
        label = _normalise_category_label(candidate)
        if label == PLACEHOLDER_DESCRIPTION:
            return INCOME if amount >= 0 else GENERAL_SPENDING
        return label

    return INCOME if amount >= 0 else GENERAL_SPENDING


def enhance_transactions(transactions: Sequence[Transaction]) -> List[Transaction]:
    """Copies of `transactions` with cleaned descriptions and display categories"""
    enhanced = []
    for txn in transactions:
        description = clean_description(txn.description)
        enhanced.append(
            replace(
                txn,
                description=description,
                category=categorize_transaction(txn.category, description, txn.amount),
            )
        )
    return enhanced


def categorize_many(transactions: Sequence[Transaction]) -> List[CategorizedTransaction]:
    """Display category and budget bucket for each transaction"""
    return [
        CategorizedTransaction(
            id=original.id,
            description=enhanced.description,
            category=enhanced.category,
            budget_category=classify_transaction(original),
        )
        for original, enhanced in zip(transactions, enhance_transactions(transactions))
    ]

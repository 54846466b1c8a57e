"""Unit tests for budget and display classification"""

import pytest

from wellness_gateway.domain.classification import (
    KeywordRule,
    categorize_many,
    categorize_transaction,
    classify_transaction,
    clean_description,
    enhance_transactions,
)
from wellness_gateway.domain.models import BudgetCategory


@pytest.mark.parametrize(
    "description, expected",
    [
        ("Woolworths Metro", BudgetCategory.ESSENTIALS),
        ("Netflix.com", BudgetCategory.LIFESTYLE),
        ("Raiz round up", BudgetCategory.SAVINGS),
        ("Telstra mobile", BudgetCategory.ESSENTIALS),
        ("Uber trip", BudgetCategory.LIFESTYLE),
        ("Something unrecognisable", BudgetCategory.ESSENTIALS),
    ],
)
def test_classify_transaction_keywords(make_transaction, description, expected):
    """Test keyword tables map outflows onto the right bucket"""
    txn = make_transaction("1", description, -20, "2025-08-01")
    assert classify_transaction(txn) == expected


def test_classify_transaction_savings_takes_priority(make_transaction):
    """Test savings keywords win over essentials keywords in the same descriptor"""
    txn = make_transaction("1", "Loan Repayment to Savings", -300, "2025-08-01")
    assert classify_transaction(txn) == BudgetCategory.SAVINGS


def test_classify_transaction_uses_category_hint(make_transaction):
    """Test the advisory category is searched alongside the description"""
    txn = make_transaction("1", "ACME PTY LTD", -45, "2025-08-01", category="Entertainment")
    assert classify_transaction(txn) == BudgetCategory.LIFESTYLE


def test_classify_transaction_subscription_fallback(make_transaction):
    """Test subscription/membership wording lands in Lifestyle when no keyword table matches"""
    txn = make_transaction("1", "Annual subscription", -99, "2025-08-01")
    assert classify_transaction(txn) == BudgetCategory.LIFESTYLE


@pytest.mark.parametrize("amount", [0, 0.01, 2500])
def test_classify_transaction_ignores_inflows(make_transaction, amount):
    """Test inflows and zero amounts are never classified"""
    txn = make_transaction("1", "Transfer to savings", amount, "2025-08-01")
    assert classify_transaction(txn) is None


def test_classify_transaction_always_buckets_outflows(make_transaction):
    """Test every outflow gets one of the three buckets"""
    descriptions = ["", "x", "Rent", "Spotify", "Stake", "membership fee", "debt collector"]
    for i, description in enumerate(descriptions):
        result = classify_transaction(make_transaction(str(i), description, -1, "2025-08-01"))
        assert result in set(BudgetCategory)


def test_classify_transaction_custom_rules(make_transaction):
    """Test a replacement rule table is honoured"""
    rules = (KeywordRule(BudgetCategory.LIFESTYLE.value, ("rent",)),)
    txn = make_transaction("1", "Rent", -1000, "2025-08-01")
    assert classify_transaction(txn, rules=rules) == BudgetCategory.LIFESTYLE


def test_clean_description():
    """Test whitespace collapse, title case and acronym handling"""
    assert clean_description("  WOOLWORTHS   1234  SYDNEY ") == "Woolworths 1234 Sydney"
    assert clean_description("atm withdrawal nab") == "ATM Withdrawal NAB"
    assert clean_description("") == "Transaction"
    assert clean_description(None) == "Transaction"


@pytest.mark.parametrize(
    "raw_category, description, amount, expected",
    [
        ("", "Coles Supermarket", -50, "Groceries"),
        ("", "PAYROLL ACME", 3000, "Income"),
        ("", "Spotify Premium", -12, "Subscriptions"),
        ("", "Qantas Airways", -400, "Travel"),
        ("food_and_drink", "Mystery Merchant", -30, "Food & Dining"),
        ("medical", "Dr Smith", -80, "Healthcare"),
        ("home_improvement", "Mystery Merchant", -30, "Home Improvement"),
        ("transaction", "Mystery Merchant", -30, "General Spending"),
        ("", "Mystery Merchant", -30, "General Spending"),
        ("", "Mystery Merchant", 30, "Income"),
    ],
)
def test_categorize_transaction(raw_category, description, amount, expected):
    """Test keyword rules, raw-category table and sign fallback in order"""
    assert categorize_transaction(raw_category, description, amount) == expected


def test_enhance_transactions_does_not_mutate(make_transaction):
    """Test enhanced copies leave the originals untouched"""
    original = make_transaction("1", "  netflix  ", -15.99, "2025-08-01", category="")
    enhanced = enhance_transactions([original])

    assert enhanced[0].description == "Netflix"
    assert enhanced[0].category == "Subscriptions"
    assert original.description == "  netflix  "


def test_categorize_many(make_transaction):
    """Test display and budget categories side by side"""
    items = categorize_many(
        [
            make_transaction("1", "Salary ACME", 5000, "2025-08-01"),
            make_transaction("2", "coles online", -120, "2025-08-02"),
        ]
    )

    assert [item.id for item in items] == ["1", "2"]
    assert items[0].category == "Income"
    assert items[0].budget_category is None
    assert items[1].description == "Coles Online"
    assert items[1].category == "Groceries"
    assert items[1].budget_category == BudgetCategory.ESSENTIALS

"""Pytest fixtures for testing"""

from datetime import datetime, timezone
from typing import Callable, List

import pytest
from fastapi.testclient import TestClient

from wellness_gateway.api.dependencies import get_bank_client
from wellness_gateway.api.main import create_app
from wellness_gateway.domain.exceptions import BankAPIError
from wellness_gateway.domain.models import Account, AccountType, Transaction

# Window start 2025-07-16, income-growth midpoint 2025-07-31
AS_OF = datetime(2025, 8, 15, tzinfo=timezone.utc)


class FakeBankClient:
    """Stands in for BankClient, serving canned data"""

    def __init__(self, accounts: List[Account], transactions: List[Transaction], error: Exception | None = None):
        self.accounts = accounts
        self.transactions = transactions
        self.error = error
        self.requested_users: List[str] = []

    async def get_accounts(self, user_id: str) -> List[Account]:
        self.requested_users.append(user_id)
        if self.error:
            raise self.error
        return self.accounts

    async def get_transactions(self, user_id: str) -> List[Transaction]:
        if self.error:
            raise self.error
        return self.transactions


@pytest.fixture
def as_of() -> datetime:
    return AS_OF


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for outflow/inflow records; account defaults to the everyday account"""

    def _make(
        txn_id: str,
        description: str,
        amount: float,
        date: str,
        account_id: str = "chk",
        category: str = "",
    ) -> Transaction:
        return Transaction(
            id=txn_id,
            account_id=account_id,
            description=description,
            amount=amount,
            date=date,
            category=category,
        )

    return _make


@pytest.fixture
def sample_accounts() -> List[Account]:
    """Everyday + savings accounts and one credit card reported with a positive balance"""
    return [
        Account(id="chk", name="Everyday", type=AccountType.CHECKING, balance=4000, currency="AUD"),
        Account(id="sav", name="Rainy Day", type=AccountType.SAVINGS, balance=8000, currency="AUD"),
        Account(id="cc", name="Visa", type=AccountType.CREDIT_CARD, balance=1500, currency="AUD"),
    ]


@pytest.fixture
def sample_transactions(make_transaction) -> List[Transaction]:
    """
    One month of activity ending at AS_OF.

    Income $5000 split evenly across both halves of the window; Essentials $2000,
    Lifestyle $800 (on the credit card), Savings $1000; one stale rent payment.
    """
    return [
        make_transaction("t0", "Rent", -999, "2025-06-01"),
        make_transaction("t1", "Salary ACME", 2500, "2025-07-20"),
        make_transaction("t2", "Salary ACME", 2500, "2025-08-05"),
        make_transaction("t3", "Rent", -1500, "2025-08-02"),
        make_transaction("t4", "Card repayment", -500, "2025-08-03"),
        make_transaction("t5", "Dining out", -800, "2025-08-04", account_id="cc"),
        make_transaction("t6", "Transfer to savings", -1000, "2025-08-06"),
    ]


@pytest.fixture
def balanced_transactions(make_transaction) -> List[Transaction]:
    """$5000 income spent exactly on the 50/30/20 split"""
    return [
        make_transaction("b1", "Salary ACME", 5000, "2025-08-01"),
        make_transaction("b2", "Rent payment", -2500, "2025-08-02"),
        make_transaction("b3", "Dining out", -1500, "2025-08-03"),
        make_transaction("b4", "Transfer to savings", -1000, "2025-08-04"),
    ]


@pytest.fixture
def bank_client(sample_accounts, sample_transactions) -> FakeBankClient:
    return FakeBankClient(sample_accounts, sample_transactions)


@pytest.fixture
def client(bank_client: FakeBankClient) -> TestClient:
    """Create FastAPI test client with a canned bank data client"""
    app = create_app()
    app.dependency_overrides[get_bank_client] = lambda: bank_client
    return TestClient(app)


@pytest.fixture
def failing_client() -> TestClient:
    """Test client whose bank data client is down"""
    app = create_app()
    failing = FakeBankClient([], [], error=BankAPIError("Bank API timeout after 5.0s"))
    app.dependency_overrides[get_bank_client] = lambda: failing
    return TestClient(app)

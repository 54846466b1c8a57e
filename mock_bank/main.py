"""Mock bank data aggregator serving canned accounts and transactions per persona"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException

app = FastAPI(title="Mock Bank Server", version="1.0.0")


def _day(days_ago: int) -> str:
    return (datetime.now(timezone.utc).date() - timedelta(days=days_ago)).isoformat()


def _txn(txn_id: str, account_id: str, description: str, amount: float, days_ago: int, category: str = "") -> Dict[str, Any]:
    return {
        "id": txn_id,
        "accountId": account_id,
        "description": description,
        "amount": amount,
        "date": _day(days_ago),
        "category": category,
    }


def _saver() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "accounts": [
            {"id": "chk", "displayName": "Everyday", "accountType": "TRANSACTION", "balance": 6500, "currency": "AUD"},
            {"id": "sav", "displayName": "Bonus Saver", "accountType": "SAVINGS", "balance": 24000, "currency": "AUD"},
        ],
        "transactions": [
            _txn("s1", "chk", "Salary ACME", 3200, 25, "Income"),
            _txn("s2", "chk", "Salary ACME", 3200, 11, "Income"),
            _txn("s3", "chk", "Rent", -1800, 20, "Housing"),
            _txn("s4", "chk", "Woolworths", -420, 15, "Groceries"),
            _txn("s5", "chk", "Cinema", -60, 9, "Entertainment"),
            _txn("s6", "chk", "Transfer to savings", -1500, 10, "Transfers"),
        ],
    }


def _stretched() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "accounts": [
            {"id": "chk", "displayName": "Everyday", "accountType": "checking", "balance": 150},
            {"id": "cc", "displayName": "Platinum Card", "accountType": "credit_card", "balance": 9800},
            {"id": "mtg", "displayName": "Home Loan", "accountType": "mortgage", "balance": 610000},
        ],
        "transactions": [
            _txn("d1", "chk", "Salary", 4100, 20, "Income"),
            _txn("d2", "mtg", "Mortgage repayment", -2900, 18, "Housing"),
            _txn("d3", "cc", "Restaurant", -650, 12, "Dining"),
            _txn("d4", "chk", "Credit card repayment", -700, 6, "Transfers"),
            _txn("d5", "cc", "Shopping", -540, 4, "Shopping"),
        ],
    }


def _subscriber() -> Dict[str, List[Dict[str, Any]]]:
    transactions = [_txn(f"n{i}", "chk", "Netflix", -22.99, days_ago, "Subscriptions") for i, days_ago in enumerate((95, 64, 33, 2))]
    transactions += [_txn(f"g{i}", "chk", "Gym Membership", -19.95, days_ago, "Health") for i, days_ago in enumerate((22, 15, 8, 1))]
    transactions += [
        _txn("c1", "chk", "Corner Cafe", -6.80, 5, "Dining"),
        _txn("c2", "chk", "Corner Cafe", -6.80, 4, "Dining"),
        _txn("p1", "chk", "Payroll", 2800, 14, "Income"),
    ]
    return {
        "accounts": [{"id": "chk", "displayName": "Everyday", "accountType": "checking", "balance": 1900}],
        "transactions": transactions,
    }


def _thin() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "accounts": [{"id": "chk", "displayName": "Starter", "accountType": "checking", "balance": 80}],
        "transactions": [],
    }


PERSONAS = {
    "user_saver": _saver,
    "user_stretched": _stretched,
    "user_subscriber": _subscriber,
    "user_thin": _thin,
}


def _load(user_id: str) -> Dict[str, List[Dict[str, Any]]]:
    persona = PERSONAS.get(user_id)
    if persona is None:
        raise HTTPException(status_code=404, detail="user not found")
    return persona()


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/bank/accounts")
def get_accounts(user_id: str):
    return {"accounts": _load(user_id)["accounts"]}


@app.get("/bank/transactions")
def get_transactions(user_id: str):
    return {"transactions": _load(user_id)["transactions"]}

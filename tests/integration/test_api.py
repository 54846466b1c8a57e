"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient

AS_OF = "2025-08-15T00:00:00Z"


@pytest.fixture
def accounts_payload():
    """Aggregator-shaped accounts, including provider spellings"""
    return [
        {"id": "chk", "name": "Everyday", "type": "checking", "balance": 4000},
        {"id": "sav", "name": "Rainy Day", "type": "Savings", "balance": "8000"},
        {"id": "cc", "name": "Visa", "type": "CreditCard", "balance": 1500},
    ]


@pytest.fixture
def transactions_payload():
    return [
        {"id": "t0", "account_id": "chk", "description": "Rent", "amount": -999, "date": "2025-06-01"},
        {"id": "t1", "account_id": "chk", "description": "Salary ACME", "amount": 2500, "date": "2025-07-20"},
        {"id": "t2", "account_id": "chk", "description": "Salary ACME", "amount": 2500, "date": "2025-08-05"},
        {"id": "t3", "account_id": "chk", "description": "Rent", "amount": -1500, "date": "2025-08-02"},
        {"id": "t4", "account_id": "chk", "description": "Card repayment", "amount": -500, "date": "2025-08-03"},
        {"id": "t5", "accountId": "cc", "description": "Dining out", "amount": "-800", "date": "2025-08-04"},
        {"id": "t6", "account_id": "chk", "description": "Transfer to savings", "amount": -1000, "date": "2025-08-06"},
    ]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/budget", json={"transactions": []})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "wellness_analysis_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_request_id_propagated(client: TestClient):
    """Test the caller's X-Request-ID is echoed, and one is minted otherwise"""
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_categorize_endpoint(client: TestClient):
    """Test POST /v1/categorize"""
    response = client.post(
        "/v1/categorize",
        json={
            "transactions": [
                {"id": "1", "description": "  coles   online ", "amount": -120, "date": "2025-08-02"},
                {"id": "2", "description": "PAYROLL ACME", "amount": 3000, "date": "2025-08-01"},
            ]
        },
    )

    assert response.status_code == 200
    items = response.json()["items"]
    assert items[0] == {"id": "1", "description": "Coles Online", "category": "Groceries", "budget_category": "Essentials"}
    assert items[1]["category"] == "Income"
    assert items[1]["budget_category"] is None


def test_budget_endpoint(client: TestClient, transactions_payload):
    """Test POST /v1/budget"""
    response = client.post("/v1/budget", json={"transactions": transactions_payload, "as_of": AS_OF})

    assert response.status_code == 200
    data = response.json()
    assert data["income"] == 5000
    assert data["totals"] == {"Essentials": 2000, "Lifestyle": 800, "Savings": 1000}
    assert data["target_percentages"] == {"Essentials": 50, "Lifestyle": 30, "Savings": 20}
    assert data["savings_allocated"] == 2200
    assert len(data["window_transactions"]) == 6


def test_overview_endpoint(client: TestClient, accounts_payload):
    """Test POST /v1/overview"""
    response = client.post("/v1/overview", json={"accounts": accounts_payload})

    assert response.status_code == 200
    data = response.json()
    assert data["net_worth"] == 10500
    assert data["total_liabilities"] == 1500
    assert data["accounts"][2]["type"] == "Credit Card"
    assert data["accounts"][2]["computed_balance"] == -1500
    assert data["accounts"][2]["is_liability"] is True


def test_overview_rejects_unknown_account_type(client: TestClient):
    """Test an unrecognised account type is a validation error"""
    response = client.post(
        "/v1/overview",
        json={"accounts": [{"id": "1", "name": "Wallet", "type": "crypto", "balance": 10}]},
    )
    assert response.status_code == 422


def test_wellness_endpoint(client: TestClient, accounts_payload, transactions_payload):
    """Test POST /v1/wellness"""
    response = client.post(
        "/v1/wellness",
        json={"accounts": accounts_payload, "transactions": transactions_payload, "region": "AU", "as_of": AS_OF},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["region"] == "AU"
    assert data["currency"] == {"symbol": "A$", "code": "AUD", "locale": "en-AU"}
    assert data["display"]["net_worth"] == "A$10,500.00"
    assert data["display"]["monthly_debt_payments"] == "A$1,300.00"

    metrics = data["metrics"]
    assert metrics["score"] == 83
    assert metrics["dti_label"] == "Good"
    assert metrics["component_scores"]["financial_behaviour"] == 84
    assert metrics["liabilities_by_account"] == [{"name": "Visa", "value": 800}, {"name": "Everyday", "value": 500}]
    assert metrics["overview"]["net_worth"] == 10500
    assert metrics["budget"]["income"] == 5000


def test_wellness_endpoint_us_region(client: TestClient, accounts_payload):
    response = client.post("/v1/wellness", json={"accounts": accounts_payload, "region": "US", "as_of": AS_OF})

    assert response.status_code == 200
    data = response.json()
    assert data["currency"]["code"] == "USD"
    assert data["display"]["net_worth"] == "$10,500.00"
    assert 0 <= data["metrics"]["score"] <= 100


def test_wellness_endpoint_defaults_region(client: TestClient):
    """Test an empty request is scored with the default region"""
    response = client.post("/v1/wellness", json={})

    assert response.status_code == 200
    assert response.json()["region"] == "AU"
    assert response.json()["metrics"]["dti"] == 1


def test_wellness_endpoint_rejects_unknown_region(client: TestClient):
    response = client.post("/v1/wellness", json={"region": "NZ"})
    assert response.status_code == 422


def test_wellness_endpoint_tolerates_messy_transactions(client: TestClient):
    """Test bad amounts and dates are coerced or skipped instead of rejected"""
    response = client.post(
        "/v1/wellness",
        json={
            "transactions": [
                {"id": "1", "description": "Salary", "amount": "abc", "date": "2025-08-10"},
                {"id": 2, "description": None, "amount": -50, "date": "not-a-date"},
                {"id": "3", "description": "Salary", "amount": 1000},
            ],
            "as_of": AS_OF,
        },
    )

    assert response.status_code == 200
    assert response.json()["metrics"]["monthly_income"] == 0


def test_context_endpoint(client: TestClient, accounts_payload, transactions_payload):
    """Test POST /v1/context"""
    response = client.post(
        "/v1/context",
        json={
            "accounts": accounts_payload,
            "transactions": transactions_payload,
            "last_updated": "2025-08-15T08:00:00Z",
            "as_of": AS_OF,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["region"] == "AU"
    assert data["last_updated"] == "2025-08-15T08:00:00Z"
    assert data["totals"] == {"income_30d": 5000, "outgoings_30d": 3800, "net_30d": 1200}
    assert data["top_merchants"][0] == {"merchant": "Rent", "total": 1500}
    assert data["category_rollup"] == {"Other": 3800}
    assert [txn["id"] for txn in data["transactions"]][:2] == ["t6", "t2"]
    assert data["account_count"] == 3


def test_user_wellness_endpoint(client: TestClient, bank_client):
    """Test GET /v1/users/{user_id}/wellness with bank data"""
    response = client.get("/v1/users/user_good/wellness", params={"region": "US"})

    assert response.status_code == 200
    data = response.json()
    assert data["region"] == "US"
    assert data["metrics"]["net_worth"] == 10500
    assert 0 <= data["metrics"]["score"] <= 100
    assert bank_client.requested_users == ["user_good"]

    # Latency is labelled by route template, never by the concrete user path
    exposition = client.get("/metrics").text
    assert 'endpoint="/v1/users/{user_id}/wellness"' in exposition
    assert "/v1/users/user_good/wellness" not in exposition


def test_wellness_endpoint_huge_amounts(client: TestClient):
    """Test overflow-sized amounts still produce a JSON-safe response"""
    response = client.post(
        "/v1/wellness",
        json={
            "transactions": [
                {"id": "1", "description": "Salary", "amount": 1e308, "date": "2025-08-10"},
                {"id": "2", "description": "Salary", "amount": 1e308, "date": "2025-08-11"},
            ],
            "as_of": AS_OF,
        },
    )

    assert response.status_code == 200
    assert response.json()["metrics"]["monthly_income"] == 0


def test_user_context_endpoint(client: TestClient):
    """Test GET /v1/users/{user_id}/context with bank data"""
    response = client.get("/v1/users/user_good/context")

    assert response.status_code == 200
    data = response.json()
    assert data["account_count"] == 3
    assert len(data["transactions"]) == 7


def test_user_endpoints_bank_unavailable(failing_client: TestClient):
    """Test bank failures surface as 503"""
    for path in ("/v1/users/user_good/wellness", "/v1/users/user_good/context"):
        response = failing_client.get(path)
        assert response.status_code == 503
        assert response.json()["detail"] == "Bank service unavailable"

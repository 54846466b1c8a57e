"""POST /v1/budget and POST /v1/overview - 50/30/20 summary and account overview"""

import time

from fastapi import APIRouter, Request

from wellness_gateway.api.dependencies import get_request_id
from wellness_gateway.api.v1.schemas import (
    AccountOverviewResponse,
    BudgetRequest,
    BudgetSummaryResponse,
    OverviewRequest,
)
from wellness_gateway.domain.accounts import compute_account_overview
from wellness_gateway.domain.budget import summarise_monthly_budget
from wellness_gateway.infrastructure.observability.logging import log_analysis
from wellness_gateway.infrastructure.observability.metrics import record_analysis

router = APIRouter()


@router.post("/budget", response_model=BudgetSummaryResponse)
def create_budget_summary(request_body: BudgetRequest, request: Request):
    """
    Summarise the trailing 30 days against the 50/30/20 split.

    Returns per-bucket totals, percentages of income and deviation from target.
    """
    start_time = time.time()
    transactions = [txn.to_domain() for txn in request_body.transactions]

    summary = summarise_monthly_budget(transactions, as_of=request_body.as_of)

    record_analysis("budget")
    log_analysis(
        get_request_id(request),
        "budget",
        transaction_count=len(transactions),
        account_count=0,
        duration_ms=(time.time() - start_time) * 1000,
    )
    return BudgetSummaryResponse.model_validate(summary)


@router.post("/overview", response_model=AccountOverviewResponse)
def create_account_overview(request_body: OverviewRequest, request: Request):
    """Normalise account balances and split them into assets and liabilities"""
    start_time = time.time()
    accounts = [account.to_domain() for account in request_body.accounts]

    overview = compute_account_overview(accounts)

    record_analysis("overview")
    log_analysis(
        get_request_id(request),
        "overview",
        transaction_count=0,
        account_count=len(accounts),
        duration_ms=(time.time() - start_time) * 1000,
    )
    return AccountOverviewResponse.model_validate(overview)

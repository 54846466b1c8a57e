"""POST /v1/wellness - composite financial wellness score"""

import time
from datetime import datetime
from typing import Optional, Sequence

from fastapi import APIRouter, Request

from wellness_gateway.api.dependencies import get_request_id
from wellness_gateway.api.v1.schemas import CurrencyInfo, WellnessMetricsSchema, WellnessRequest, WellnessResponse
from wellness_gateway.config import settings
from wellness_gateway.domain.models import Account, Transaction
from wellness_gateway.domain.wellness import calculate_wellness_metrics
from wellness_gateway.infrastructure.observability.logging import log_analysis
from wellness_gateway.infrastructure.observability.metrics import record_analysis
from wellness_gateway.utils.currency import format_currency, get_currency_info

router = APIRouter()

DISPLAY_FIELDS = (
    "net_worth",
    "monthly_income",
    "expenses",
    "monthly_debt_payments",
    "savings_allocated",
    "liquid_assets",
)


def build_wellness_response(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    region: str,
    request_id: str,
    as_of: Optional[datetime] = None,
) -> WellnessResponse:
    """Score the user's finances and attach region currency formatting"""
    start_time = time.time()

    metrics = calculate_wellness_metrics(accounts, transactions, as_of=as_of)

    record_analysis("wellness", score=metrics.score)
    log_analysis(
        request_id,
        "wellness",
        transaction_count=len(transactions),
        account_count=len(accounts),
        duration_ms=(time.time() - start_time) * 1000,
        score=metrics.score,
    )

    return WellnessResponse(
        region=region,
        currency=CurrencyInfo(**get_currency_info(region)),
        display={name: format_currency(getattr(metrics, name), region) for name in DISPLAY_FIELDS},
        metrics=WellnessMetricsSchema.model_validate(metrics),
    )


@router.post("/wellness", response_model=WellnessResponse)
def create_wellness_report(request_body: WellnessRequest, request: Request):
    """
    Calculate the 0-100 wellness score with its eight component scores.

    Informational approximation only, not financial advice.
    """
    return build_wellness_response(
        accounts=[account.to_domain() for account in request_body.accounts],
        transactions=[txn.to_domain() for txn in request_body.transactions],
        region=request_body.region or settings.default_region,
        request_id=get_request_id(request),
        as_of=request_body.as_of,
    )

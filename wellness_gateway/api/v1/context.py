"""POST /v1/context - finance snapshot for the report/assistant surface"""

import time
from datetime import datetime
from typing import Optional, Sequence

from fastapi import APIRouter, Request

from wellness_gateway.api.dependencies import get_request_id
from wellness_gateway.api.v1.schemas import ContextRequest, FinanceContextResponse
from wellness_gateway.config import settings
from wellness_gateway.domain.models import Account, Transaction
from wellness_gateway.domain.patterns import build_finance_context
from wellness_gateway.infrastructure.observability.logging import log_analysis
from wellness_gateway.infrastructure.observability.metrics import record_analysis, record_patterns

router = APIRouter()


def build_context_response(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    region: str,
    request_id: str,
    last_updated: Optional[str] = None,
    as_of: Optional[datetime] = None,
) -> FinanceContextResponse:
    start_time = time.time()

    context = build_finance_context(
        accounts,
        transactions,
        region=region,
        last_updated=last_updated,
        as_of=as_of,
        transaction_limit=settings.context_transaction_limit,
        merchant_limit=settings.context_merchant_limit,
    )

    record_analysis("context")
    record_patterns(len(context.recurring_candidates), len(context.duplicates))
    log_analysis(
        request_id,
        "context",
        transaction_count=len(transactions),
        account_count=len(accounts),
        duration_ms=(time.time() - start_time) * 1000,
    )
    return FinanceContextResponse.model_validate(context)


@router.post("/context", response_model=FinanceContextResponse)
def create_finance_context(request_body: ContextRequest, request: Request):
    """
    Build the finance context: 30-day totals, category and merchant rollups,
    recurring charges, possible duplicate charges and the newest transactions.
    """
    return build_context_response(
        accounts=[account.to_domain() for account in request_body.accounts],
        transactions=[txn.to_domain() for txn in request_body.transactions],
        region=request_body.region or settings.default_region,
        request_id=get_request_id(request),
        last_updated=request_body.last_updated,
        as_of=request_body.as_of,
    )

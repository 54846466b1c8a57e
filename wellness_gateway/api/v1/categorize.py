"""POST /v1/categorize - display categories and budget buckets per transaction"""

import time

from fastapi import APIRouter, Request

from wellness_gateway.api.dependencies import get_request_id
from wellness_gateway.api.v1.schemas import CategorizeRequest, CategorizedItem, CategorizeResponse
from wellness_gateway.domain.classification import categorize_many
from wellness_gateway.infrastructure.observability.logging import log_analysis
from wellness_gateway.infrastructure.observability.metrics import record_analysis

router = APIRouter()


@router.post("/categorize", response_model=CategorizeResponse)
def categorize_transactions(request_body: CategorizeRequest, request: Request):
    """Clean descriptions and assign display categories (plus budget bucket for outflows)"""
    start_time = time.time()
    transactions = [txn.to_domain() for txn in request_body.transactions]

    items = categorize_many(transactions)

    record_analysis("categorize")
    log_analysis(
        get_request_id(request),
        "categorize",
        transaction_count=len(transactions),
        account_count=0,
        duration_ms=(time.time() - start_time) * 1000,
    )
    return CategorizeResponse(items=[CategorizedItem.model_validate(item) for item in items])

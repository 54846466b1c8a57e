"""GET /v1/users/{user_id}/wellness and /context - analytics over live bank data"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from wellness_gateway.api.dependencies import get_bank_client, get_request_id
from wellness_gateway.api.v1.context import build_context_response
from wellness_gateway.api.v1.schemas import FinanceContextResponse, Region, WellnessResponse
from wellness_gateway.api.v1.wellness import build_wellness_response
from wellness_gateway.config import settings
from wellness_gateway.domain.exceptions import BankAPIError
from wellness_gateway.infrastructure.clients.bank import BankClient
from wellness_gateway.infrastructure.observability.metrics import bank_fetch_failures_counter

router = APIRouter()


async def _fetch_bank_data(bank_client: BankClient, user_id: str, request_id: str):
    try:
        accounts = await bank_client.get_accounts(user_id)
        transactions = await bank_client.get_transactions(user_id)
    except BankAPIError as e:
        bank_fetch_failures_counter.inc()
        logging.error(f"Bank API error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=503, detail="Bank service unavailable")
    return accounts, transactions


@router.get("/users/{user_id}/wellness", response_model=WellnessResponse)
async def get_user_wellness(
    user_id: str,
    request: Request,
    region: Optional[Region] = Query(None, description="AU or US currency display"),
    bank_client: BankClient = Depends(get_bank_client),
):
    """
    Fetch the user's accounts and transactions, then score them.

    Flow:
    1. Fetch linked accounts and transaction history from the bank data API
    2. Calculate wellness metrics over the trailing 30 days
    3. Return metrics with region currency formatting
    """
    request_id = get_request_id(request)
    accounts, transactions = await _fetch_bank_data(bank_client, user_id, request_id)

    try:
        return build_wellness_response(accounts, transactions, region or settings.default_region, request_id)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/users/{user_id}/context", response_model=FinanceContextResponse)
async def get_user_context(
    user_id: str,
    request: Request,
    region: Optional[Region] = Query(None, description="AU or US"),
    bank_client: BankClient = Depends(get_bank_client),
):
    """Fetch the user's bank data and build the finance context for the assistant"""
    request_id = get_request_id(request)
    accounts, transactions = await _fetch_bank_data(bank_client, user_id, request_id)

    try:
        return build_context_response(accounts, transactions, region or settings.default_region, request_id)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=500, detail="Internal server error")

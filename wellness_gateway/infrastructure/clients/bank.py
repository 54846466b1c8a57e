"""Bank data HTTP client for fetching accounts and transaction history"""

from typing import Any, Dict, List, Optional

import httpx

from wellness_gateway.config import settings
from wellness_gateway.domain.exceptions import BankAPIError
from wellness_gateway.domain.models import Account, AccountType, Transaction
from wellness_gateway.utils.money import coerce_amount


def _first(record: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return default


def parse_account(record: Dict[str, Any]) -> Account:
    """Build an Account from an aggregator record (snake_case or camelCase)"""
    return Account(
        id=str(record["id"]),
        name=str(_first(record, "name", "display_name", "displayName", default="Account")),
        type=AccountType.parse(_first(record, "type", "account_type", "accountType")),
        balance=coerce_amount(record.get("balance")),
        currency=str(_first(record, "currency", default="AUD")),
    )


def parse_transaction(record: Dict[str, Any]) -> Transaction:
    """Build a Transaction from an aggregator record (snake_case or camelCase)"""
    return Transaction(
        id=str(record["id"]),
        account_id=str(_first(record, "account_id", "accountId", default="")),
        description=str(_first(record, "description", "narration", default="")),
        amount=coerce_amount(record.get("amount")),
        date=str(_first(record, "date", "posted_at", "postedAt", default="")),
        category=str(_first(record, "category", default="")),
    )


class BankClient:
    """Client for the bank data aggregation API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.bank_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get(self, path: str, user_id: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params={"user_id": user_id})
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as e:
                raise BankAPIError(f"Bank API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BankAPIError(f"Bank API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise BankAPIError(f"Bank API unreachable: {e}") from e
            except ValueError as e:
                raise BankAPIError(f"Invalid JSON from bank: {e}") from e

    async def get_accounts(self, user_id: str) -> List[Account]:
        """
        Fetch the user's linked accounts.

        Raises:
            BankAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get("/bank/accounts", user_id)
        try:
            return [parse_account(record) for record in data.get("accounts", [])]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise BankAPIError(f"Invalid account data from bank: {e}") from e

    async def get_transactions(self, user_id: str) -> List[Transaction]:
        """
        Fetch the user's transaction history.

        Raises:
            BankAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get("/bank/transactions", user_id)
        try:
            return [parse_transaction(record) for record in data.get("transactions", [])]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise BankAPIError(f"Invalid transaction data from bank: {e}") from e

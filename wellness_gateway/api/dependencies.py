"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from wellness_gateway.infrastructure.clients.bank import BankClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_bank_client() -> BankClient:
    """Provide bank data API client instance"""
    return BankClient()

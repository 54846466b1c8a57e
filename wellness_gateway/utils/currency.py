"""Region-aware currency display formatting"""

from typing import Dict, Optional

from wellness_gateway.utils.money import coerce_amount, round_to_cents

SUPPORTED_REGIONS = ("AU", "US")


def get_currency_info(region: str = "AU") -> Dict[str, str]:
    """Currency symbol, ISO code and locale for a dashboard region (AU unless US)"""
    if region == "US":
        return {"symbol": "$", "code": "USD", "locale": "en-US"}
    return {"symbol": "A$", "code": "AUD", "locale": "en-AU"}


def format_currency(amount: object, region: str = "AU", currency_override: Optional[str] = None) -> str:
    """
    Format an amount for display, e.g. 1234.5 -> "A$1,234.50".

    An override currency that differs from the region's own is shown by code
    ("USD 12.00") since the region symbol would be misleading.
    """
    info = get_currency_info(region)
    value = round_to_cents(coerce_amount(amount))

    code = (currency_override or info["code"]).upper()
    prefix = info["symbol"] if code == info["code"] else f"{code} "

    formatted = f"{prefix}{abs(value):,.2f}"
    return f"-{formatted}" if value < 0 else formatted

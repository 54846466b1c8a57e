"""Numeric helpers shared by the analytics modules"""

import math

# Magnitudes beyond this are treated as corrupt input; keeps sums and cent scaling finite
MAX_ABS_AMOUNT = 1e15


def coerce_amount(value: object) -> float:
    """Coerce a raw amount/balance to a finite float within MAX_ABS_AMOUNT; anything else becomes 0.0"""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number) or abs(number) > MAX_ABS_AMOUNT:
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (dashboard rounding, not banker's); inf/nan give 0"""
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def round_to_cents(value: float) -> float:
    """Round a currency amount to 2 decimal places"""
    if not math.isfinite(value):
        return 0.0
    scaled = value * 100
    if not math.isfinite(scaled):
        return value
    return round_half_up(scaled) / 100


def clamp(value: float, minimum: float = 0.0, maximum: float = 100.0) -> float:
    return min(maximum, max(minimum, value))

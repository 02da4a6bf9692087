"""Decimal scales shared by validation, the engine and the ORM columns.

Money amounts are stored as NUMERIC(18, 4); rates, weights and thresholds as
NUMERIC(10, 6). Values are quantized to these scales before they are used,
so what is computed is exactly what is stored.
"""

from decimal import Decimal, ROUND_HALF_UP

from fundbalance.core.exceptions import ValidationError

AMOUNT_PRECISION = 18
AMOUNT_SCALE = 4
RATE_PRECISION = 10
RATE_SCALE = 6

AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)
RATE_QUANTUM = Decimal(1).scaleb(-RATE_SCALE)

# Exclusive upper bounds on magnitude (integer digits = precision - scale)
AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)
RATE_LIMIT = Decimal(10) ** (RATE_PRECISION - RATE_SCALE)


def quantize_amount(value: Decimal) -> Decimal:
    """Round a computed money amount to the stored scale."""
    return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


def quantize_rate(value: Decimal) -> Decimal:
    """Round a rate, weight or threshold to the stored scale."""
    return value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def to_amount(value: Decimal, field_name: str) -> Decimal:
    """
    Check a user-supplied amount fits its column and quantize it.

    Raises:
        ValidationError: If the value is not finite or too large to store
    """
    if not value.is_finite() or abs(value) >= AMOUNT_LIMIT:
        raise ValidationError(
            f"{field_name} is out of range: must be below {AMOUNT_LIMIT:,.0f}"
        )
    return quantize_amount(value)


def to_rate(value: Decimal, field_name: str) -> Decimal:
    """
    Check a user-supplied rate fits its column and quantize it.

    Raises:
        ValidationError: If the value is not finite or too large to store
    """
    if not value.is_finite() or abs(value) >= RATE_LIMIT:
        raise ValidationError(
            f"{field_name} is out of range: must be below {RATE_LIMIT:,.0f}"
        )
    return quantize_rate(value)

"""Fixed-point helpers for money, price and quantity values."""

from decimal import Decimal, ROUND_HALF_EVEN

MONEY_SCALE = 4
PRICE_SCALE = 8
QUANTITY_SCALE = 8

MONEY_QUANT = Decimal(1).scaleb(-MONEY_SCALE)


def to_money(value) -> Decimal:
    """Round an amount to the ledger's 4-decimal scale (banker's rounding)."""
    return Decimal(str(value)).quantize(MONEY_QUANT, rounding=ROUND_HALF_EVEN)


def decimal_places(value: Decimal) -> int:
    """Number of fractional digits carried by a finite Decimal."""
    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent)

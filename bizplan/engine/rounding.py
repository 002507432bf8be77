from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union


def to_decimal(value: Optional[float]) -> Optional[Decimal]:
    """Decimal form of an entered amount or percentage, as typed."""
    return None if value is None else Decimal(str(value))


def round_half_up(value: Union[float, Decimal]) -> int:
    """Round to the nearest whole dollar, halves away from zero.

    ``to_integral_value`` ignores the context precision, so amounts far beyond
    28 digits still round instead of raising ``InvalidOperation``.
    """
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))

"""Currency-exact money arithmetic

Amounts travel as normalized decimal strings ("30.00", "500", "12.345") with
the currency code passed alongside. Every operation converts its operands to
integer smallest units, does integer arithmetic and converts back.
"""

import math
import re
from decimal import (ROUND_HALF_UP, Context, Decimal, Inexact,
                     InvalidOperation, Rounded)
from typing import Iterable, Optional, Union

from splitledger.core.currencies import get_currency
from splitledger.core.exceptions import InvalidAmount

AmountInput = Union[str, int, float, Decimal]

_AMOUNT_PATTERN = re.compile(r"[+-]?\d+(\.\d+)?")

# Amounts are limited to MAX_DIGITS significant digits; scaling never rounds
MAX_DIGITS = 64
_CONTEXT = Context(
    prec=MAX_DIGITS, rounding=ROUND_HALF_UP, traps=[InvalidOperation, Inexact, Rounded]
)


def _parse_decimal(amount: AmountInput) -> Decimal:
    """
    Convert a boundary value into a finite Decimal.

    Args:
        amount: String, int, Decimal or finite float

    Returns:
        Decimal value

    Raises:
        InvalidAmount: If the value is malformed or not finite
    """
    if isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be numeric, got {amount!r}")

    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, float):
        if not math.isfinite(amount):
            raise InvalidAmount(f"Amount must be finite, got {amount!r}")
        value = Decimal(str(amount))
    elif isinstance(amount, str):
        text = amount.strip()
        if not _AMOUNT_PATTERN.fullmatch(text):
            raise InvalidAmount(
                f"Malformed amount: {amount!r}", details={"amount": amount}
            )
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise InvalidAmount(
                f"Malformed amount: {amount!r}", details={"amount": amount}
            )
    else:
        raise InvalidAmount(f"Unsupported amount type: {type(amount).__name__}")

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")

    return value


def _scaled(value: Decimal, decimal_digits: int) -> Decimal:
    """
    Shift the decimal point by decimal_digits places without rounding.

    Raises:
        InvalidAmount: If the value has more than MAX_DIGITS significant digits
    """
    try:
        return value.scaleb(decimal_digits, context=_CONTEXT)
    except (Inexact, Rounded):
        raise InvalidAmount(
            f"Amount {value} has more than {MAX_DIGITS} significant digits",
            details={"amount": str(value)},
        )


def to_smallest_unit(amount: AmountInput, currency: str) -> int:
    """
    Convert an amount to integer smallest units.

    12.34 USD -> 1234, 500 JPY -> 500, 12.345 BHD -> 12345.

    Args:
        amount: Amount to convert
        currency: Currency code

    Returns:
        Integer number of smallest units

    Raises:
        InvalidAmount: If the amount is malformed or has more fractional
            digits than the currency allows
    """
    digits = get_currency(currency).decimal_digits
    value = _parse_decimal(amount)
    scaled = _scaled(value, digits)

    if scaled != scaled.to_integral_value(context=_CONTEXT):
        raise InvalidAmount(
            f"Amount {amount} has more than {digits} decimal places for {currency}",
            details={"amount": str(amount), "currency": currency},
        )

    return int(scaled)


def from_smallest_unit(units: int, currency: str) -> str:
    """
    Convert integer smallest units back to a normalized amount string.

    Args:
        units: Integer number of smallest units
        currency: Currency code

    Returns:
        Normalized amount string with exactly decimal_digits fractional digits
    """
    if isinstance(units, bool) or not isinstance(units, int):
        raise InvalidAmount(f"Smallest units must be an integer, got {units!r}")

    digits = get_currency(currency).decimal_digits
    value = _scaled(Decimal(units), -digits)
    return f"{value:.{digits}f}"


def normalize(amount: AmountInput, currency: str) -> str:
    """
    Round an amount to the currency's precision (half-up).

    Args:
        amount: Amount to normalize
        currency: Currency code

    Returns:
        Canonical amount string
    """
    digits = get_currency(currency).decimal_digits
    scaled = _scaled(_parse_decimal(amount), digits)
    units = int(scaled.to_integral_value(rounding=ROUND_HALF_UP, context=_CONTEXT))
    return from_smallest_unit(units, currency)


def precision_error(amount: AmountInput, currency: str) -> Optional[str]:
    """
    Describe why an amount is unusable for a currency.

    Returns:
        Error message, or None when the amount is valid
    """
    try:
        to_smallest_unit(amount, currency)
    except InvalidAmount as e:
        return e.message
    return None


def tolerance(currency: str) -> Decimal:
    """Rounding allowance of a currency: 10^-decimal_digits"""
    return get_currency(currency).tolerance


def tolerance_units(currency: str) -> int:
    """Tolerance expressed in smallest units; one unit for every currency"""
    get_currency(currency)
    return 1


def zero_amount(currency: str) -> str:
    """Normalized zero for a currency ("0.00", "0", "0.000")"""
    return from_smallest_unit(0, currency)


def add(a: AmountInput, b: AmountInput, currency: str) -> str:
    """Add two amounts"""
    return from_smallest_unit(
        to_smallest_unit(a, currency) + to_smallest_unit(b, currency), currency
    )


def subtract(a: AmountInput, b: AmountInput, currency: str) -> str:
    """Subtract b from a"""
    return from_smallest_unit(
        to_smallest_unit(a, currency) - to_smallest_unit(b, currency), currency
    )


def negate(amount: AmountInput, currency: str) -> str:
    """Flip the sign of an amount"""
    return from_smallest_unit(-to_smallest_unit(amount, currency), currency)


def abs_amount(amount: AmountInput, currency: str) -> str:
    """Absolute value of an amount"""
    return from_smallest_unit(abs(to_smallest_unit(amount, currency)), currency)


def compare(a: AmountInput, b: AmountInput, currency: str) -> int:
    """
    Compare two amounts exactly.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    left = to_smallest_unit(a, currency)
    right = to_smallest_unit(b, currency)
    return (left > right) - (left < right)


def min_amount(a: AmountInput, b: AmountInput, currency: str) -> str:
    """Smaller of two amounts"""
    return from_smallest_unit(
        min(to_smallest_unit(a, currency), to_smallest_unit(b, currency)), currency
    )


def sum_amounts(amounts: Iterable[AmountInput], currency: str) -> str:
    """
    Sum amounts of a single currency.

    Args:
        amounts: Amounts to add up
        currency: Currency code

    Returns:
        Normalized total (zero for an empty iterable)
    """
    return from_smallest_unit(
        sum((to_smallest_unit(a, currency) for a in amounts), 0), currency
    )


def is_zero(amount: AmountInput, currency: str) -> bool:
    return to_smallest_unit(amount, currency) == 0


def is_positive(amount: AmountInput, currency: str) -> bool:
    return to_smallest_unit(amount, currency) > 0


def is_negative(amount: AmountInput, currency: str) -> bool:
    return to_smallest_unit(amount, currency) < 0

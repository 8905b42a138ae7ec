"""
Derived invoice totals.

The single place where VAT and total are computed. Both the live preview
and every write go through compute_totals(), so stored values can never
drift from the recomputation.

Arithmetic is Decimal end to end: vat_amount = amount * vat_percentage / 100
and total_amount = amount + vat_amount, with no rounding step.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

DEFAULT_VAT_PERCENTAGE = Decimal("7.5")

_HUNDRED = Decimal(100)

# Inputs at or above this are rejected
MAX_VALUE = Decimal("1e15")
# Inputs with more fractional digits are rejected
MAX_DECIMAL_PLACES = 10

# Enough digits that products of bounded inputs are exact
_PRECISION = 64
_SMALLEST_STEP = Decimal(1).scaleb(-MAX_DECIMAL_PLACES)


class InvalidInputError(ValueError):
    """A monetary input is not a non-negative number. Blocks submission."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


@dataclass(frozen=True)
class InvoiceTotals:
    """Base amount, VAT rate and the two values derived from them."""

    amount: Decimal
    vat_percentage: Decimal
    vat_amount: Decimal
    total_amount: Decimal


def parse_non_negative(value: Any, field: str) -> Decimal:
    """
    Parse a monetary or percentage input into a non-negative Decimal.

    Accepts Decimal, int, float and numeric strings. Floats go through
    str() so 0.1 becomes Decimal("0.1"), not its binary expansion.

    Raises:
        InvalidInputError: If the value is missing, non-numeric, not finite,
            a boolean, negative, not below MAX_VALUE, or finer than
            MAX_DECIMAL_PLACES.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(field, value, "a number is required")

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        if not value.strip():
            raise InvalidInputError(field, value, "a number is required")
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidInputError(field, value, "not a number")
    else:
        raise InvalidInputError(field, value, "not a number")

    if not number.is_finite():
        raise InvalidInputError(field, value, "must be finite")
    if number < 0:
        raise InvalidInputError(field, value, "must not be negative")
    if number >= MAX_VALUE:
        raise InvalidInputError(field, value, f"must be less than {MAX_VALUE:f}")
    if number != number.quantize(_SMALLEST_STEP):
        raise InvalidInputError(
            field, value, f"at most {MAX_DECIMAL_PLACES} decimal places allowed"
        )

    return number


def compute_totals(amount: Any, vat_percentage: Any) -> InvoiceTotals:
    """
    Compute VAT amount and total from a base amount and a VAT percentage.

    Args:
        amount: Base charge before tax
        vat_percentage: VAT rate in percent (7.5 means 7.5%)

    Returns:
        InvoiceTotals with the parsed inputs and derived values

    Raises:
        InvalidInputError: If either input is not a non-negative number
    """
    base = parse_non_negative(amount, "amount")
    rate = parse_non_negative(vat_percentage, "vat_percentage")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        vat_amount = base * rate / _HUNDRED
        total_amount = base + vat_amount

    return InvoiceTotals(
        amount=base,
        vat_percentage=rate,
        vat_amount=vat_amount,
        total_amount=total_amount,
    )

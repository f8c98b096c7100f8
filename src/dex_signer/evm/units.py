"""
Whole-unit / atomic-unit conversion.

Exchange messages carry integer amounts in a token's smallest unit
(``amount * 10**decimals``). Conversion uses exact ``Decimal`` arithmetic with a
local context wide enough for every digit, so no amount is ever rounded.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from ..exceptions import InvalidAmount
from .constants import UINT256_MAX

AmountLike = Union[str, int, Decimal]

#: Highest decimal exponent (``Decimal.adjusted()``) a uint256 value can have.
UINT256_DIGITS = len(str(UINT256_MAX)) - 1


def _parse_decimal(value: AmountLike, name: str) -> Decimal:
    if isinstance(value, (bool, float)) or not isinstance(value, (str, int, Decimal)):
        raise InvalidAmount(f"{name} must be a decimal string, int or Decimal, got {type(value).__name__}")
    try:
        dec = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmount(f"Invalid {name}: {value!r}") from e
    if not dec.is_finite():
        raise InvalidAmount(f"Invalid {name}: {value!r}")
    if dec < 0:
        raise InvalidAmount(f"{name} must be non-negative, got {value!r}")
    return dec


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidAmount("decimals must be a non-negative int")


def to_atomic_units(amount: AmountLike, decimals: int) -> str:
    """Convert a whole-unit ``amount`` into an atomic-unit integer string.

    Args:
        amount: Whole-unit amount, e.g. ``"2.5"``. Floats are rejected.
        decimals: Token decimals, e.g. 18 for ETH.

    Returns:
        str: Base-10 integer string, e.g. ``"2500000000000000000"``.

    Raises:
        InvalidAmount: If ``amount`` is not a non-negative decimal, has more
            fractional digits than ``decimals`` allows, or scales past uint256.
    """
    _check_decimals(decimals)
    dec_amount = _parse_decimal(amount, "amount")
    if dec_amount and dec_amount.adjusted() + decimals > UINT256_DIGITS:
        raise InvalidAmount(f"amount {amount!r} exceeds uint256 with decimals={decimals}")

    sign, digits, exponent = dec_amount.as_tuple()
    with localcontext() as ctx:
        ctx.prec = len(digits) + max(exponent, 0) + decimals + 1
        scaled = dec_amount.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise InvalidAmount(
            f"amount {amount!r} is not representable with decimals={decimals} "
            f"(would create fractional atomic units)"
        )
    value = int(scaled)
    if value > UINT256_MAX:
        raise InvalidAmount(f"amount {amount!r} exceeds uint256 with decimals={decimals}")
    return str(value)


def from_atomic_units(value: AmountLike, decimals: int) -> str:
    """Convert an atomic-unit integer ``value`` back into a whole-unit string.

    Trailing zeros are dropped: ``from_atomic_units("2500000000000000000", 18)``
    returns ``"2.5"``.

    Raises:
        InvalidAmount: If ``value`` is negative or not an integer.
    """
    _check_decimals(decimals)
    dec_value = _parse_decimal(value, "value")
    if dec_value != dec_value.to_integral_value():
        raise InvalidAmount("value must be an integer in atomic units")

    sign, digits, exponent = dec_value.as_tuple()
    with localcontext() as ctx:
        ctx.prec = len(digits) + max(exponent, 0) + decimals + 1
        amount = dec_value.scaleb(-decimals)
        if amount == amount.to_integral_value():
            return str(int(amount))
        return format(amount.normalize(), "f")

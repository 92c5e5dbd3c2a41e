"""Conversion between human decimal amounts and integer base units."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext

from chanchis.core.errors import InvalidAmountError

from .constants import TOKEN_DECIMALS, UINT256_MAX


def parse_units(amount: str | int | Decimal, decimals: int = TOKEN_DECIMALS) -> int:
    """Convert a decimal amount (e.g. ``"1.5"``) into base units.

    Args:
        amount: Amount in whole tokens.
        decimals: Token decimals.

    Returns:
        The amount in base units.

    Raises:
        InvalidAmountError: If the amount is malformed, negative, has more
            fractional digits than ``decimals`` or overflows uint256.
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise InvalidAmountError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite() or value < 0:
        raise InvalidAmountError(f"Invalid amount: {amount!r}")
    with localcontext() as ctx:
        ctx.prec = 100
        scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise InvalidAmountError(f"Amount {amount!r} has more than {decimals} decimal places")
    result = int(scaled)
    if result > UINT256_MAX:
        raise InvalidAmountError(f"Amount {amount!r} overflows uint256")
    return result


def parse_uint256(value: str | int, field: str = "value") -> int:
    """Parse a base-10 uint256 as sent over JSON (decimal string or int)."""
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid {field}: {value!r}")
    try:
        result = int(str(value).strip(), 10)
    except ValueError as e:
        raise InvalidAmountError(f"Invalid {field}: {value!r}") from e
    if result < 0 or result > UINT256_MAX:
        raise InvalidAmountError(f"Invalid {field}: {value!r}")
    return result


def format_units(value: int, decimals: int = TOKEN_DECIMALS) -> Decimal:
    """Convert base units into a whole-token ``Decimal``."""
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(int(value)).scaleb(-decimals).normalize()


def format_compact(value: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Short display form: ``1.23M``, ``4.56K`` or up to two decimals."""
    amount = format_units(value, decimals)
    if amount >= 1_000_000:
        return f"{(amount / 1_000_000).quantize(Decimal('0.01'), rounding=ROUND_DOWN)}M"
    if amount >= 1_000:
        return f"{(amount / 1_000).quantize(Decimal('0.01'), rounding=ROUND_DOWN)}K"
    rounded = amount.quantize(Decimal("0.01"), rounding=ROUND_DOWN).normalize()
    return f"{rounded:f}"

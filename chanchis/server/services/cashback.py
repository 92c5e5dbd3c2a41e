"""
Cashback Calculator.

Converts a purchase amount at an affiliated business into the cashback the
business owes, in USD and in CHNC at the reference price.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from chanchis.core.errors import ChanchisError

CENT = Decimal("0.01")
# Digits kept while quoting
QUOTE_PRECISION = 100


class InvalidCashbackInputError(ChanchisError):
    status_code = 400


@dataclass(frozen=True)
class CashbackQuote:
    purchase_usd: Decimal
    cashback_percentage: Decimal
    cashback_usd: Decimal
    chnc_price_usd: Decimal
    chnc_amount: Decimal


class CashbackCalculator:
    """Stateless calculator bound to a reference CHNC price."""

    def __init__(self, chnc_price_usd: Decimal | str | float = Decimal("0.25")) -> None:
        price = _to_decimal(chnc_price_usd, "chnc_price_usd")
        if price <= 0:
            raise InvalidCashbackInputError("CHNC price must be positive")
        self.chnc_price_usd = price

    def quote(self, purchase_usd: Decimal | str | float, cashback_percentage: Decimal | str | float) -> CashbackQuote:
        """
        Compute the cashback for a purchase.

        ``cashback_usd = purchase * pct / 100`` and
        ``chnc_amount = cashback_usd / price``; both are rounded half-up to
        cents for display, from the unrounded cashback.

        Raises:
            InvalidCashbackInputError: For a negative or oversized purchase, or a
                percentage outside 0-100.
        """
        purchase = _to_decimal(purchase_usd, "purchase_usd")
        pct = _to_decimal(cashback_percentage, "cashback_percentage")
        if purchase < 0:
            raise InvalidCashbackInputError("Purchase amount cannot be negative")
        if pct < 0 or pct > 100:
            raise InvalidCashbackInputError("Cashback percentage must be between 0 and 100")

        with localcontext() as ctx:
            ctx.prec = QUOTE_PRECISION
            cashback = purchase * pct / Decimal(100)
            chnc = cashback / self.chnc_price_usd
            try:
                cashback_usd = cashback.quantize(CENT, rounding=ROUND_HALF_UP)
                chnc_amount = chnc.quantize(CENT, rounding=ROUND_HALF_UP)
            except InvalidOperation as e:
                raise InvalidCashbackInputError("Purchase amount is too large") from e
        return CashbackQuote(
            purchase_usd=purchase,
            cashback_percentage=pct,
            cashback_usd=cashback_usd,
            chnc_price_usd=self.chnc_price_usd,
            chnc_amount=chnc_amount,
        )


def _to_decimal(value: Decimal | str | float, field: str) -> Decimal:
    try:
        # str() first so floats keep their shortest repr (0.1 -> "0.1")
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidCashbackInputError(f"Invalid {field}: {value!r}") from e
    if not result.is_finite():
        raise InvalidCashbackInputError(f"Invalid {field}: {value!r}")
    return result

from decimal import Decimal

import pytest

from chanchis.server.services.cashback import CashbackCalculator, InvalidCashbackInputError


class TestCashbackCalculator:
    def test_quote(self):
        quote = CashbackCalculator(Decimal("0.25")).quote("100", 5)

        assert quote.cashback_usd == Decimal("5.00")
        assert quote.chnc_amount == Decimal("20.00")
        assert quote.chnc_price_usd == Decimal("0.25")

    def test_rounds_half_up_to_cents(self):
        # 12.30 * 7.5% = 0.9225 -> 0.92; / 0.25 = 3.69
        quote = CashbackCalculator().quote("12.30", "7.5")
        assert quote.cashback_usd == Decimal("0.92")
        assert quote.chnc_amount == Decimal("3.69")

        # 0.10 * 5% = 0.005 -> 0.01
        assert CashbackCalculator().quote("0.10", 5).cashback_usd == Decimal("0.01")

    def test_float_inputs_use_their_short_repr(self):
        quote = CashbackCalculator().quote(0.1, 10)
        assert quote.purchase_usd == Decimal("0.1")
        assert quote.cashback_usd == Decimal("0.01")

    def test_zero_purchase(self):
        quote = CashbackCalculator().quote(0, 10)
        assert quote.cashback_usd == Decimal("0.00")
        assert quote.chnc_amount == Decimal("0.00")

    @pytest.mark.parametrize(
        "purchase, pct",
        [("-1", 5), ("10", -1), ("10", "100.01"), ("abc", 5), ("NaN", 5)],
    )
    def test_rejects_invalid_inputs(self, purchase, pct):
        with pytest.raises(InvalidCashbackInputError):
            CashbackCalculator().quote(purchase, pct)

    def test_price_must_be_positive(self):
        with pytest.raises(InvalidCashbackInputError):
            CashbackCalculator(0)

    def test_large_purchase_is_quoted_exactly(self):
        quote = CashbackCalculator().quote("1e30", 10)

        assert quote.cashback_usd == Decimal("1e29")
        assert quote.chnc_amount == Decimal("4e29")
        assert quote.cashback_usd.as_tuple().exponent == -2

    def test_purchase_beyond_precision_is_rejected(self):
        with pytest.raises(InvalidCashbackInputError, match="too large"):
            CashbackCalculator().quote("1e200", 10)

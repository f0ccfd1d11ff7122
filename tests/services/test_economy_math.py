from decimal import Decimal

from democracy.services.economy import MIN_PRICE, hourly_dividend, market_cap, reprice


def test_idle_stock_decays_one_percent_rounded_up():
    assert reprice(100, 0, 0)["new_price"] == 99
    assert reprice(150, 0, 0)["new_price"] == 148
    assert reprice(700, 0, 0)["new_price"] == 693


def test_price_never_drops_below_floor():
    assert reprice(10, 0, 0)["new_price"] == MIN_PRICE
    assert reprice(12, 0, 50)["new_price"] == MIN_PRICE


def test_trading_moves_price_by_net_demand():
    result = reprice(100, 7, 2)

    assert result["new_price"] == 105
    assert result["decayed"] is False


def test_sole_holder_receives_ten_percent_of_market_cap():
    cap = market_cap(37, 130)

    assert hourly_dividend(130, 130, cap) == Decimal("481.00")


def test_partial_holder_is_rounded_down_to_the_cent():
    cap = market_cap(10, 3)

    # 1/3 of 10% of 30.
    assert hourly_dividend(1, 3, cap) == Decimal("1.00")
    assert hourly_dividend(1, 7, market_cap(10, 7)) == Decimal("1.00")
    assert hourly_dividend(1, 3, market_cap(11, 3)) == Decimal("1.10")


def test_no_dividend_without_issued_shares():
    assert hourly_dividend(5, 0, 0) == Decimal("0.00")

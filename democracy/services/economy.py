from decimal import ROUND_DOWN, Decimal

MIN_PRICE = 10
DIVIDEND_RATE = Decimal("0.10")
CENT = Decimal("0.01")


def decay_amount(price):
    """One percent of ``price``, rounded up to a whole unit."""
    return -(-max(0, price) // 100)


def reprice(price, bought, sold):
    bought = bought or 0
    sold = sold or 0
    decayed = bought == 0 and sold == 0

    change = -decay_amount(price) if decayed else bought - sold
    new_price = max(MIN_PRICE, price + change)

    return {
        "old_price": price,
        "new_price": new_price,
        "change": change,
        "decayed": decayed,
    }


def market_cap(price, issued_shares):
    return max(0, price or 0) * max(0, issued_shares or 0)


def hourly_dividend(quantity, issued_shares, cap):
    """Holder's share of ten percent of ``cap``, rounded down to the cent."""
    if not issued_shares or issued_shares <= 0 or not quantity or quantity <= 0:
        return Decimal("0.00")
    dividend = Decimal(quantity) * Decimal(cap) * DIVIDEND_RATE / Decimal(issued_shares)
    return dividend.quantize(CENT, rounding=ROUND_DOWN)

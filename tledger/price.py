"""Commodity prices.

Declaring prices is optional but useful to value stocks or foreign
currencies in a single currency::

    [[price]]
    date = 2023-09-30
    commodity = "VOO"
    price = 390.50
    currency = "USD"
"""

from datetime import date
from typing import Iterable

from tledger.accounts import strip_quotes

class Price():
    def __init__(self, date: date, commodity: str, price: float,
                 currency: str):
        self._date = date
        self._commodity = strip_quotes(commodity)
        self._price = price
        self._currency = strip_quotes(currency)
    @property
    def date(self) -> date:
        return self._date
    @property
    def commodity(self) -> str:
        return self._commodity
    @property
    def price(self) -> float:
        return self._price
    @property
    def currency(self) -> str:
        return self._currency
    def _key(self):
        return (self._date, self._commodity, self._price, self._currency)
    def __hash__(self):
        return hash(self._key())
    def __eq__(self, other):
        if not isinstance(other, Price):
            return NotImplemented
        return self._key() == other._key()
    def __repr__(self):
        return (f"Price({self.date}, {self.commodity}, {self.price}, "
                f"{self.currency})")

def latest_prices(prices: Iterable[Price], currency: str) \
    -> dict[str, float]:
    """Most recent rate of each commodity quoted in `currency`."""
    latest: dict[str, Price] = {}
    for p in prices:
        if p.currency != currency:
            continue
        # On equal dates the first declaration wins.
        if p.commodity not in latest or p.date > latest[p.commodity].date:
            latest[p.commodity] = p
    return {commodity: p.price for commodity, p in latest.items()}

from datetime import date
from enum import Enum
from typing import Iterable, NamedTuple
import logging

from tledger.accounts import Account, AccountType
from tledger.transaction import Transaction
from tledger.price import Price, latest_prices

logger = logging.getLogger(__name__)

Period_t = tuple[int, int]

class BalanceRow(NamedTuple):
    account: Account
    # One value per period of the report, in the same order.
    values: list[float]
    currency: str

class BalanceReport(NamedTuple):
    periods: list[Period_t]
    group: "Period | None"
    sections: list[tuple[AccountType, list[BalanceRow]]]

class Period(Enum):
    MONTH = "M"
    QUARTER = "Q"
    YEAR = "Y"

    @classmethod
    def parse(cls, text: "str | Period | None") -> "Period | None":
        """None for anything that is not a grouping unit."""
        if text is None or isinstance(text, Period):
            return text
        try:
            return cls(text)
        except ValueError:
            return None

def quarter(month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}.")
    return (month - 1) // 3 + 1

def period_key(d: date, group: Period | str | None) -> Period_t:
    group = Period.parse(group)
    if group is Period.MONTH:
        return (d.year, d.month)
    if group is Period.QUARTER:
        return (d.year, quarter(d.month))
    if group is Period.YEAR:
        return (d.year, d.year)
    return (0, 0)

def get_balances(accounts: Iterable[Account],
                 transactions: Iterable[Transaction],
                 prices: Iterable[Price] = (),
                 price: str | None = None) -> dict[str, float]:
    """Balance of every account, optionally valued in `price`.

    Opening balances seed the result. Accounts without a price in the
    requested currency keep their own unit.
    """
    accounts = list(accounts)
    balances: dict[str, float] = {}
    for a in accounts:
        balances[a.name] = balances.get(a.name, 0.0) + \
            (a.opening_balance or 0.0)
    for t in transactions:
        balances[t.account] = balances.get(t.account, 0.0) + \
            t.amount * t.quantity
        balances[t.offset_account] = balances.get(t.offset_account, 0.0) + \
            t.offset_amount

    if price is not None:
        rates = latest_prices(prices, price)
        repriced = set()
        for a in accounts:
            if a.name in repriced:
                continue
            if a.currency in rates:
                balances[a.name] = balances.get(a.name, 0.0) * \
                    rates[a.currency]
                repriced.add(a.name)
            elif a.currency != price:
                logger.info(f"No {price} price for {a.currency}; "
                            f"'{a.name}' left in {a.currency}.")
    return balances

def group_by_period(accounts: Iterable[Account],
                    transactions: Iterable[Transaction],
                    prices: Iterable[Price] = (),
                    price: str | None = None,
                    group: Period | str | None = None) \
    -> dict[Period_t, dict[str, float]]:
    """Balances of each period, without the zero entries.

    Opening balances are applied again in every period.
    """
    accounts = list(accounts)
    prices = list(prices)
    by_period: dict[Period_t, list[Transaction]] = {}
    for t in transactions:
        by_period.setdefault(period_key(t.date, group), []).append(t)

    balances_by_period = {}
    for period, period_transactions in by_period.items():
        b = get_balances(accounts, period_transactions, prices, price)
        balances_by_period[period] = {
            name: value for name, value in b.items() if value != 0.0
        }
    return balances_by_period

def sorted_periods(periods: Iterable[Period_t]) -> list[Period_t]:
    """Most recent first."""
    return sorted(periods, reverse=True)

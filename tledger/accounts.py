"""Declared accounts.

An account is declared in the toml ledger with a type of Assets, Income,
Liabilities, Expenses, Equity, Stocks, MutualFunds, Holdings or Cash::

    [[account]]
    open = 2023-09-30
    name = "Savings Account"
    type = "Assets"
    currency = "USD"
    opening_balance = 1000.00 # optional

The currency can be any code.
"""

from datetime import date
from enum import Enum

def strip_quotes(text: str) -> str:
    return text.replace('"', "")

class AccountType(Enum):
    ASSETS = "Assets"
    INCOME = "Income"
    LIABILITIES = "Liabilities"
    EXPENSES = "Expenses"
    EQUITY = "Equity"
    STOCKS = "Stocks"
    MUTUAL_FUNDS = "MutualFunds"
    HOLDINGS = "Holdings"
    CASH = "Cash"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, text: "str | AccountType") -> "AccountType":
        """Never fails: anything unrecognized is UNKNOWN."""
        if isinstance(text, AccountType):
            return text
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN

    @property
    def order(self) -> int:
        return list(AccountType).index(self)

    def __str__(self):
        return self.value

class Account():
    def __init__(self, name: str, open: date, currency: str,
                 account_type: AccountType | str,
                 opening_balance: float | None = None):
        self._name = strip_quotes(name)
        self._open = open
        self._currency = strip_quotes(currency)
        self._account_type = AccountType.parse(account_type)
        self._opening_balance = opening_balance
    @property
    def name(self) -> str:
        return self._name
    @property
    def open(self) -> date:
        return self._open
    @property
    def currency(self) -> str:
        return self._currency
    @property
    def account_type(self) -> AccountType:
        return self._account_type
    @property
    def opening_balance(self) -> float | None:
        return self._opening_balance
    def _key(self):
        return (self._name, self._open, self._currency,
                self._account_type, self._opening_balance)
    def __hash__(self):
        return hash(self._key())
    def __eq__(self, other):
        if not isinstance(other, Account):
            return NotImplemented
        return self._key() == other._key()
    def __repr__(self):
        return (f"Account({self.name}, {self.open}, {self.currency}, "
                f"{self.account_type}, {self.opening_balance})")

"""Filters over accounts and transactions.

Every filter takes an iterable and returns a new list, so filters
compose by applying them one after the other.
"""

from datetime import date
from typing import Iterable

from tledger.accounts import Account, AccountType
from tledger.transaction import Transaction

def by_account_name(accounts: Iterable[Account], name: str) \
    -> list[Account]:
    return [a for a in accounts if a.name == name]

def by_account_type(accounts: Iterable[Account],
                    account_type: AccountType | str) -> list[Account]:
    # An unrecognized type only matches accounts of unknown type.
    account_type = AccountType.parse(account_type)
    return [a for a in accounts if a.account_type == account_type]

def by_account_currency(accounts: Iterable[Account], currency: str) \
    -> list[Account]:
    return [a for a in accounts if a.currency == currency]

def by_payee(transactions: Iterable[Transaction], payee: str) \
    -> list[Transaction]:
    return [t for t in transactions
            if t.payee is not None and t.payee == payee]

def by_date(transactions: Iterable[Transaction],
            from_date: date | None = None,
            to_date: date | None = None) -> list[Transaction]:
    """Transactions dated within [from_date, to_date]."""
    if from_date is None:
        from_date = date.min
    if to_date is None:
        to_date = date.max
    return [t for t in transactions if from_date <= t.date <= to_date]

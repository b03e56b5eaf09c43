from datetime import date
from typing import NamedTuple

from tledger.accounts import strip_quotes

class Posting(NamedTuple):
    date: date
    account: str
    amount: float
    payee: str | None = None

class Transaction():
    """A movement between exactly two accounts.

    The source leg is `account` with `amount * quantity`; the offset leg
    is `offset_account` with `offset_amount`, which defaults to -amount.
    The quantity never applies to the offset leg.
    """
    def __init__(self, date: date, account: str, amount: float,
                 offset_account: str,
                 offset_amount: float | None = None,
                 quantity: float = 1.0,
                 payee: str | None = None,
                 note: str | None = None):
        self._date = date
        self._account = strip_quotes(account)
        self._amount = amount
        self._offset_account = strip_quotes(offset_account)
        if offset_amount is None:
            offset_amount = -amount
        self._offset_amount = offset_amount
        self._quantity = quantity
        self._payee = payee
        self._note = note
    @property
    def date(self) -> date:
        return self._date
    @property
    def account(self) -> str:
        return self._account
    @property
    def amount(self) -> float:
        return self._amount
    @property
    def offset_account(self) -> str:
        return self._offset_account
    @property
    def offset_amount(self) -> float:
        return self._offset_amount
    @property
    def quantity(self) -> float:
        return self._quantity
    @property
    def payee(self) -> str | None:
        return self._payee
    @property
    def note(self) -> str | None:
        return self._note
    def postings(self) -> tuple[Posting, Posting]:
        return (Posting(self.date, self.account, self.amount, self.payee),
                Posting(self.date, self.offset_account, self.offset_amount))
    def _key(self):
        return (self._date, self._account, self._amount,
                self._offset_account, self._offset_amount,
                self._quantity, self._payee, self._note)
    def __hash__(self):
        return hash(self._key())
    def __eq__(self, other):
        if not isinstance(other, Transaction):
            return NotImplemented
        return self._key() == other._key()
    def __str__(self):
        header = f"{self.date} * {self.payee or ''} - {self.note or ''}"
        posting = f"{self.account}: {self.amount} qty: {self.quantity}"
        offset = f"{self.offset_account}: {self.offset_amount}"
        return f"{header}\n{posting}\n{offset}"
    def __repr__(self):
        return (f"Transaction({self.date}, {self.account}, {self.amount}, "
                f"{self.offset_account}, {self.offset_amount})")

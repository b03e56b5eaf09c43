from datetime import date
from pathlib import Path
from typing import Iterable, TextIO
import logging

from tledger import loader
from tledger import printing
from tledger import query
from tledger.accounts import Account, AccountType
from tledger.transaction import Transaction
from tledger.price import Price
from tledger.balance import BalanceReport, BalanceRow, Period, \
    group_by_period, sorted_periods

logger = logging.getLogger(__name__)

class LedgerError(Exception):
    def __init__(self, message: str,
                 entity: Transaction | Account | None = None):
        self.entity = entity
        if entity is None:
            super().__init__(message)
        else:
            super().__init__(f"{message}\n{entity}")

class UnknownAccount(LedgerError):
    def __init__(self, name: str, txn: Transaction | None = None):
        self.name = name
        super().__init__(f"Account '{name}' does not exist.", txn)

class BalanceError(LedgerError):
    pass

class UnbalancedTransaction(BalanceError):
    def __init__(self, txn: Transaction):
        self.transaction = txn
        super().__init__(
            f"Transaction unbalanced by {txn.amount + txn.offset_amount}.",
            txn)

def check_transaction(txn: Transaction, accounts: dict[str, Account]):
    """Check one transaction against the declared accounts, by name.

    Legs in different currencies, or with an undeclared offset account,
    are not required to balance.
    """
    if txn.account not in accounts:
        raise UnknownAccount(txn.account, txn)
    if txn.amount + txn.offset_amount == 0:
        return None
    account = accounts.get(txn.account)
    offset = accounts.get(txn.offset_account)
    if account and offset and account.currency == offset.currency:
        raise UnbalancedTransaction(txn)

class Ledger():
    def __init__(self, accounts: Iterable[Account] = (),
                 transactions: Iterable[Transaction] = (),
                 prices: Iterable[Price] = ()):
        self._accounts = tuple(accounts)
        self._transactions = tuple(transactions)
        self._prices = tuple(prices)

    @classmethod
    def from_document(cls, text: str) -> "Ledger":
        document = loader.parse_document(text)
        return cls(*loader.load_records(document))

    @classmethod
    def from_path(cls, path: str | Path) -> "Ledger":
        return cls.from_document(loader.read_ledger_files(path))

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._accounts
    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._transactions
    @property
    def prices(self) -> tuple[Price, ...]:
        return self._prices

    def _accounts_by_name(self) -> dict[str, Account]:
        # The first declaration of a name is the one that counts.
        accounts: dict[str, Account] = {}
        for a in self._accounts:
            accounts.setdefault(a.name, a)
        return accounts

    def validate(self) -> None:
        """Raise on the first undeclared account or unbalanced entry."""
        accounts = self._accounts_by_name()
        for t in self._transactions:
            check_transaction(t, accounts)
        logger.info(f"Validated {len(self._transactions)} transactions.")

    def _name_width(self) -> int:
        return max((len(a.name) for a in self._accounts), default=0)

    def list_accounts(self) -> list[Account]:
        return list(self._accounts)

    def balance_report(self, from_date: date | None = None,
                       to_date: date | None = None,
                       account_types: Iterable[AccountType | str] | None
                       = None,
                       price: str | None = None,
                       group: Period | str | None = None) -> BalanceReport:
        self.validate()
        transactions = query.by_date(self._transactions, from_date, to_date)
        transactions.sort(key=lambda t: t.date)

        if account_types:
            accounts = []
            for t in account_types:
                for a in query.by_account_type(self._accounts, t):
                    if a not in accounts:
                        accounts.append(a)
        else:
            accounts = list(self._accounts)

        group = Period.parse(group)
        balances = group_by_period(self._accounts, transactions,
                                   self._prices, price, group)
        periods = sorted_periods(balances)
        names = set()
        for b in balances.values():
            names.update(b)

        sections = []
        shown = set()
        accounts.sort(key=lambda a: a.account_type.order)
        for a in accounts:
            if a.name not in names or a.name in shown:
                continue
            shown.add(a.name)
            row = BalanceRow(a,
                             [balances[p].get(a.name, 0.0) for p in periods],
                             price if price is not None else a.currency)
            if not sections or sections[-1][0] != a.account_type:
                sections.append((a.account_type, []))
            sections[-1][1].append(row)
        return BalanceReport(periods, group, sections)

    def journal(self, from_date: date | None = None,
                to_date: date | None = None,
                account_type: AccountType | str | None = None,
                name: str | None = None,
                payee: str | None = None) -> list[Transaction]:
        transactions = sorted(self._transactions, key=lambda t: t.date)
        self.validate()
        transactions = query.by_date(transactions, from_date, to_date)
        if payee is not None:
            transactions = query.by_payee(transactions, payee)

        accounts = list(self._accounts)
        if account_type is not None:
            accounts = query.by_account_type(accounts, account_type)
        if name is not None:
            accounts = query.by_account_name(accounts, name)
        names = {a.name for a in accounts}
        return [t for t in transactions
                if t.account in names or t.offset_account in names]

    def print_accounts(self, file: TextIO | None = None) -> None:
        printing.print_accounts(self.list_accounts(), self._name_width(),
                                file=file)

    def print_balances(self, from_date: date | None = None,
                       to_date: date | None = None,
                       account_types: Iterable[AccountType | str] | None
                       = None,
                       price: str | None = None,
                       group: Period | str | None = None,
                       file: TextIO | None = None) -> None:
        report = self.balance_report(from_date, to_date, account_types,
                                     price, group)
        printing.print_balances(report, file=file)

    def print_journal(self, from_date: date | None = None,
                      to_date: date | None = None,
                      account_type: AccountType | str | None = None,
                      name: str | None = None,
                      payee: str | None = None,
                      file: TextIO | None = None) -> None:
        transactions = self.journal(from_date, to_date, account_type,
                                    name, payee)
        printing.print_journal(transactions, self._name_width() + 1,
                               file=file)

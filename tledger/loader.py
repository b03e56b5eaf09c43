"""Load typed entities from a toml ledger.

A ledger holds three optional arrays of tables, ``[[account]]``,
``[[transaction]]`` and ``[[price]]``. Every malformed record aborts the
whole load; the only lenient field is the account type.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable
import logging
import tomllib

from tledger.accounts import Account, AccountType
from tledger.transaction import Transaction
from tledger.price import Price

logger = logging.getLogger(__name__)

class LoadError(Exception):
    def __init__(self, message: str, kind: str | None = None,
                 index: int | None = None):
        self.kind = kind
        self.index = index
        if kind and index:
            super().__init__(f"{message}\n{kind} record: {index}")
        elif kind:
            super().__init__(f"{message}\n{kind} records")
        else:
            super().__init__(message)

class MissingField(LoadError):
    def __init__(self, field: str, kind: str, index: int | None = None):
        self.field = field
        super().__init__(f"Missing required field '{field}'.", kind, index)

class TypeMismatch(LoadError):
    pass

class InvalidDate(LoadError):
    pass

class IoFailure(LoadError):
    pass

class DocumentError(LoadError):
    pass

class _Record():
    """One table of a record array, with the context for error messages."""

    def __init__(self, values: dict[str, Any], kind: str, index: int):
        if not isinstance(values, dict):
            raise TypeMismatch(f"Expected a table, got {values!r}.",
                               kind, index)
        self.values = values
        self.kind = kind
        self.index = index

    def _get(self, field: str, required: bool) -> Any:
        if field not in self.values:
            if required:
                raise MissingField(field, self.kind, self.index)
            return None
        return self.values[field]

    def text(self, field: str, required: bool = True) -> str | None:
        value = self._get(field, required)
        if value is None:
            return None
        if not isinstance(value, str):
            raise TypeMismatch(
                f"Field '{field}' is not a string: {value!r}.",
                self.kind, self.index)
        return value

    def number(self, field: str, required: bool = True) -> float | None:
        value = self._get(field, required)
        if value is None:
            return None
        # bool is a subclass of int.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(
                f"Field '{field}' is not an integer or float: {value!r}.",
                self.kind, self.index)
        return float(value)

    def date(self, field: str) -> date:
        value = self._get(field, True)
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value)
            except ValueError:
                pass
        raise InvalidDate(f"Field '{field}' is not a date: {value!r}.",
                          self.kind, self.index)

def _records(values: Any, kind: str) -> list[_Record]:
    if values is None:
        return []
    if not isinstance(values, list):
        raise TypeMismatch(f"'{kind}' must be an array of tables.", kind)
    return [_Record(v, kind, i + 1) for i, v in enumerate(values)]

def load_accounts(values: Iterable[dict] | None) -> list[Account]:
    accounts = []
    seen = set()
    for r in _records(values, "account"):
        account = Account(
            name=r.text("name"),
            open=r.date("open"),
            currency=r.text("currency"),
            account_type=AccountType.parse(r.text("type")),
            opening_balance=r.number("opening_balance", required=False))
        if account.name in seen:
            logger.warning(f"Account '{account.name}' declared more than "
                           "once; balances will be merged.")
        seen.add(account.name)
        accounts.append(account)
    return accounts

def load_transactions(values: Iterable[dict] | None) -> list[Transaction]:
    transactions = []
    for r in _records(values, "transaction"):
        quantity = r.number("quantity", required=False)
        transactions.append(Transaction(
            date=r.date("date"),
            account=r.text("account"),
            amount=r.number("amount"),
            offset_account=r.text("offset_account"),
            offset_amount=r.number("offset_amount", required=False),
            quantity=1.0 if quantity is None else quantity,
            payee=r.text("payee", required=False),
            note=r.text("note", required=False)))
    return transactions

def load_prices(values: Iterable[dict] | None) -> list[Price]:
    prices = []
    for r in _records(values, "price"):
        prices.append(Price(
            date=r.date("date"),
            commodity=r.text("commodity"),
            price=r.number("price"),
            currency=r.text("currency")))
    return prices

def load_records(document: dict[str, Any]) \
    -> tuple[list[Account], list[Transaction], list[Price]]:
    accounts = load_accounts(document.get("account"))
    transactions = load_transactions(document.get("transaction"))
    prices = load_prices(document.get("price"))
    logger.info(f"Loaded {len(accounts)} accounts, "
                f"{len(transactions)} transactions, {len(prices)} prices.")
    return (accounts, transactions, prices)

def parse_document(text: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise DocumentError(f"Malformed ledger: {e}") from e

def read_ledger_files(ledger_path: str | Path) -> str:
    """Read a toml file, or concatenate the toml files of a directory."""
    path = Path(ledger_path)
    try:
        if path.is_dir():
            files = sorted(f for f in path.glob("*.toml") if f.is_file())
        else:
            files = [path]
        contents = []
        for f in files:
            logger.info(f"Reading {f}.")
            contents.append(f.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise IoFailure(f"Unable to read ledger '{ledger_path}': {e}") from e
    return "\n".join(contents)

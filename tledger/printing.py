from datetime import date
from typing import Iterable, TextIO

from tledger.accounts import Account
from tledger.transaction import Transaction
from tledger.balance import BalanceReport, Period, Period_t

def amount2str(value: float, places: int = 2) -> str:
    # Adding 0.0 turns -0.0 into 0.0.
    return f"{value + 0.0:.{places}f}"

def date2str(d: date) -> str:
    return d.strftime('%Y-%m-%d')

def period2str(period: Period_t, group: Period | None) -> str:
    year, sub = period
    if group is Period.MONTH:
        return f"{year}-{sub:02d}"
    if group is Period.QUARTER:
        return f"{year}-Q{sub}"
    if group is Period.YEAR:
        return str(year)
    return "Total"

def print_accounts(accounts: Iterable[Account], name_width: int,
                   file: TextIO | None = None):
    for a in accounts:
        print(f"| {date2str(a.open)} | {str(a.account_type):<11} | "
              f"{a.name:<{name_width}} | {a.currency}", file=file)

def print_balances(report: BalanceReport, padding: int = 15,
                   file: TextIO | None = None):
    names = [row.account.name for _, rows in report.sections for row in rows]
    name_width = max([len("Accounts")] + [len(n) for n in names])
    # Values are followed by a space and the currency code.
    width = padding + 4
    header = "  " + "Accounts".ljust(name_width)
    for p in report.periods:
        header += "  " + period2str(p, report.group).rjust(width)
    print(header, file=file)
    for account_type, rows in report.sections:
        print(str(account_type), file=file)
        for row in rows:
            line = "  " + row.account.name.ljust(name_width)
            for value in row.values:
                line += "  " + amount2str(value).rjust(padding)
                line += " " + row.currency
            print(line, file=file)

def print_journal(transactions: Iterable[Transaction], name_width: int,
                  padding: int = 11, file: TextIO | None = None):
    for t in transactions:
        posting, offset = t.postings()
        print(f"{date2str(posting.date)} | "
              f"{posting.account:<{name_width}} | "
              f"{amount2str(posting.amount):>{padding}} | "
              f"{posting.payee or ''}", file=file)
        print(f"{date2str(offset.date)} | "
              f"{offset.account:<{name_width}} | "
              f"{amount2str(offset.amount):>{padding}} |", file=file)

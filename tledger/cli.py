#! /usr/bin/env python3

import argparse
from datetime import date
import logging
import sys

from tledger.ledger import Ledger, LedgerError
from tledger.loader import LoadError
from tledger.balance import Period
from tledger.importer import import_transactions, DEFAULT_DATE_FORMAT

logger = logging.getLogger(__name__)

def parse_args(argv: list[str] | None = None):
    argparser = argparse.ArgumentParser(
        prog="tledger", description="Plain text ledger reports.")
    argparser.add_argument("-l", "--ledger", type=str,
                           default="ledger.toml",
                           help="ledger file or directory of toml files")
    argparser.add_argument("--log-file", type=str,
                           help="Log File")
    commands = argparser.add_subparsers(dest="command", required=True)

    commands.add_parser("accounts", help="List accounts")
    commands.add_parser("check", help="Validate the ledger")

    balances = commands.add_parser(
        "balances", help="Print account balance sheet report")
    balances.add_argument("-c", "--class", dest="account_types",
                          type=str, nargs="*",
                          help="Filter accounts by account type")
    balances.add_argument("-f", "--from", dest="from_date",
                          type=date.fromisoformat,
                          help="Start Date - YYYY-MM-DD")
    balances.add_argument("-t", "--to", dest="to_date",
                          type=date.fromisoformat,
                          help="End Date - YYYY-MM-DD")
    balances.add_argument("-p", "--price", type=str,
                          help="Price balances in this currency")
    balances.add_argument("-g", "--group", type=str,
                          choices=[p.value for p in Period],
                          help="Group by month, quarter or year")

    journal = commands.add_parser(
        "journal", help="Print transactions journal report")
    journal.add_argument("-f", "--from", dest="from_date",
                         type=date.fromisoformat,
                         help="Start Date - YYYY-MM-DD")
    journal.add_argument("-t", "--to", dest="to_date",
                         type=date.fromisoformat,
                         help="End Date - YYYY-MM-DD")
    journal.add_argument("-c", "--class", dest="account_type", type=str,
                         help="Filter accounts by account type")
    journal.add_argument("-a", "--account", type=str,
                         help="Filter accounts by account name")
    journal.add_argument("-p", "--payee", type=str,
                         help="Filter transactions by payee")

    csv_import = commands.add_parser(
        "import", help="Import transactions from csv")
    csv_import.add_argument("-c", "--csv", type=str, required=True,
                            help="csv file with transactions to import")
    csv_import.add_argument("--format", type=str,
                            default=DEFAULT_DATE_FORMAT,
                            help="Date format of the csv")
    return argparser.parse_args(argv)

def run(args) -> None:
    if args.command == "import":
        import_transactions(args.csv, args.ledger, args.format)
        return None

    ledger = Ledger.from_path(args.ledger)
    if args.command == "accounts":
        ledger.print_accounts()
    elif args.command == "check":
        ledger.validate()
    elif args.command == "balances":
        ledger.print_balances(args.from_date, args.to_date,
                              args.account_types, args.price, args.group)
    elif args.command == "journal":
        ledger.print_journal(args.from_date, args.to_date,
                             args.account_type, args.account, args.payee)

def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)
    handlers: list[logging.Handler] = [console]
    if args.log_file:
        handlers.append(logging.FileHandler(args.log_file, mode="w"))
    logging.basicConfig(handlers=handlers,
                        format='[%(name)s:%(levelname)s] %(message)s',
                        level=logging.INFO,
                        force=True)

    try:
        run(args)
    except (LoadError, LedgerError) as e:
        logger.error(str(e))
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())

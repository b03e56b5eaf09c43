"""Import transactions from a csv file into a toml ledger.

The csv needs a header with the columns::

    date,account,payee,quantity,amount,offset_account,offset_amount

where payee, quantity, offset_account and offset_amount may be left
empty. Each row is appended to the ledger as a ``[[transaction]]``
record whose amount is positive and whose offset is its negation. The
imported records are not validated.
"""

from datetime import datetime
from pathlib import Path
from typing import Any
import csv
import logging

import tomli_w

from tledger.loader import MissingField, TypeMismatch, InvalidDate, \
    IoFailure, DocumentError

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "%d/%m/%Y"
IMPORT_FILE = "import.toml"

def _cell(row: dict[str, str | None], column: str) -> str | None:
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None

def _required(row: dict[str, str | None], column: str, index: int) -> str:
    value = _cell(row, column)
    if value is None:
        raise MissingField(column, "csv", index)
    return value

def convert_row(row: dict[str, str | None], index: int,
                date_format: str = DEFAULT_DATE_FORMAT) -> dict[str, Any]:
    raw_date = _required(row, "date", index)
    try:
        date = datetime.strptime(raw_date, date_format).date()
    except ValueError as e:
        raise InvalidDate(f"Cannot parse date '{raw_date}' with "
                          f"'{date_format}'.", "csv", index) from e
    account = _required(row, "account", index)
    raw_amount = _required(row, "amount", index)
    try:
        amount = abs(float(raw_amount))
    except ValueError as e:
        raise TypeMismatch(f"Amount is not a number: '{raw_amount}'.",
                           "csv", index) from e

    record: dict[str, Any] = {"date": date, "account": account}
    payee = _cell(row, "payee")
    if payee is not None:
        record["payee"] = payee
    record["amount"] = amount
    offset_account = _cell(row, "offset_account")
    if offset_account is not None:
        record["offset_account"] = offset_account
    record["offset_amount"] = -amount
    return record

def read_transactions(csv_file: str | Path,
                      date_format: str | None = None) -> list[dict[str, Any]]:
    date_format = date_format or DEFAULT_DATE_FORMAT
    records = []
    index = 1
    try:
        with open(csv_file, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            # Row 1 is the header.
            for index, row in enumerate(reader, start=2):
                records.append(convert_row(row, index, date_format))
    except OSError as e:
        raise IoFailure(f"Unable to read csv '{csv_file}': {e}") from e
    except UnicodeDecodeError as e:
        # Decoding runs ahead of the reader, so no row number.
        raise IoFailure(f"Unable to decode csv '{csv_file}': {e}",
                        "csv") from e
    except csv.Error as e:
        raise DocumentError(f"Malformed csv '{csv_file}': {e}",
                            "csv", index + 1) from e
    return records

def import_transactions(csv_file: str | Path, ledger_path: str | Path,
                        date_format: str | None = None) \
    -> list[dict[str, Any]]:
    records = read_transactions(csv_file, date_format)
    target = Path(ledger_path)
    if target.is_dir():
        target = target / IMPORT_FILE
    logger.info(f"Importing {len(records)} transactions into {target}.")
    try:
        with open(target, "a", encoding="utf-8") as f:
            for record in records:
                f.write("\n" + tomli_w.dumps({"transaction": [record]}))
                logger.info(f"Imported: {record}")
    except OSError as e:
        raise IoFailure(f"Unable to write ledger '{target}': {e}") from e
    return records

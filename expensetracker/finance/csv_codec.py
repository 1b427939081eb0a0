"""Mini README: CSV persistence for the finance ledger.

Structure:
    * encode_transactions / decode_transactions - text level codec.
    * export_ledger / import_ledger - codec applied to a ``FinanceLedger``.
    * save_csv / load_csv - scoped file I/O around the codec.

File layout::

    id,date,type,category,amount,note
    3f0c...,2023-01-05,Income,Salary,100.00,"January, paid late"

Fields containing commas, quotes or line breaks are quoted with inner quotes
doubled. Rows are written in insertion order. On import, rows with fewer
than six fields are skipped, while a bad date or amount aborts the whole
import and leaves the ledger untouched. Type and category text is accepted
as-is so files edited by hand still load.
"""

from __future__ import annotations

import csv
import io
import os
import shutil
import sys
import tempfile
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, List, Union

from ..errors import FormatError, StorageError, ValidationError
from ..logging_utils import get_logger
from .ledger import (
    CENTS,
    DATE_FORMAT,
    FinanceLedger,
    Transaction,
    lenient_category,
    lenient_type,
    parse_day,
)

LOGGER = get_logger(__name__)

CSV_HEADER = ["id", "date", "type", "category", "amount", "note"]
_FIELD_COUNT = len(CSV_HEADER)

# Notes have no length limit, so anything the writer emits must be readable.
try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2**31 - 1)


def _encode_row(transaction: Transaction) -> List[str]:
    return [
        transaction.transaction_id,
        transaction.occurred_on.strftime(DATE_FORMAT),
        transaction.type_label,
        transaction.category_label,
        f"{transaction.amount:.2f}",
        transaction.note,
    ]


def encode_transactions(transactions: Iterable[Transaction]) -> str:
    """Serialise transactions to CSV text including the header row."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for transaction in transactions:
        writer.writerow(_encode_row(transaction))
    return buffer.getvalue()


def _decode_row(fields: List[str], line_number: int) -> Transaction:
    transaction_id, raw_date, raw_type, raw_category, raw_amount, note = fields[:_FIELD_COUNT]
    try:
        occurred_on = parse_day(raw_date)
    except ValueError as error:
        raise FormatError(f"Line {line_number}: unparseable date '{raw_date}'") from error
    try:
        amount = Decimal(raw_amount.strip())
    except InvalidOperation as error:
        raise FormatError(f"Line {line_number}: unparseable amount '{raw_amount}'") from error
    if not amount.is_finite():
        raise FormatError(f"Line {line_number}: unparseable amount '{raw_amount}'")
    return Transaction(
        transaction_id=transaction_id,
        occurred_on=occurred_on,
        transaction_type=lenient_type(raw_type),
        category=lenient_category(raw_category),
        amount=amount.quantize(CENTS, rounding=ROUND_HALF_UP),
        note=note,
    )


def decode_transactions(text: str) -> List[Transaction]:
    """Parse CSV text produced by ``encode_transactions`` or edited by hand.

    The header line is discarded without inspection.
    """

    reader = csv.reader(io.StringIO(text, newline=""))
    next(reader, None)
    transactions: List[Transaction] = []
    try:
        for fields in reader:
            if len(fields) < _FIELD_COUNT:
                if fields:
                    LOGGER.debug(
                        "Skipping line %s with %s fields", reader.line_num, len(fields)
                    )
                continue
            transactions.append(_decode_row(fields, reader.line_num))
    except csv.Error as error:
        raise FormatError(f"Line {reader.line_num}: {error}") from error
    return transactions


def export_ledger(ledger: FinanceLedger) -> str:
    """Return the ledger as CSV text in insertion order."""

    return encode_transactions(ledger.list_transactions(sorted_by_date=False))


def import_ledger(ledger: FinanceLedger, text: str) -> int:
    """Replace the ledger contents with the transactions in ``text``."""

    transactions = decode_transactions(text)
    try:
        ledger.replace_all(transactions)
    except ValidationError as error:
        raise FormatError(str(error)) from error
    return len(transactions)


def _apply_file_mode(tmp_path: str, destination: Path) -> None:
    """Give the temporary file the mode the destination has or would get.

    ``mkstemp`` creates files as 0600; an existing ledger keeps its mode and a
    new one follows the process umask like a plain ``open`` would.
    """

    if destination.exists():
        shutil.copymode(destination, tmp_path)
        return
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(tmp_path, 0o666 & ~umask)


def save_csv(ledger: FinanceLedger, path: Union[str, Path]) -> Path:
    """Write the ledger to ``path`` atomically.

    The data goes to a temporary file in the same directory which then
    replaces the destination, so a failed save never leaves a partial file.
    The saved file keeps the permissions of the file it replaces.
    """

    destination = Path(path).expanduser()
    payload = export_ledger(ledger)
    tmp_path = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=".ledger_", suffix=".csv", dir=str(destination.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(payload)
        _apply_file_mode(tmp_path, destination)
        os.replace(tmp_path, destination)
    except OSError as error:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise StorageError(f"Error saving file {destination}: {error}") from error
    LOGGER.info("Saved %s transactions to %s", len(ledger), destination)
    return destination


def load_csv(ledger: FinanceLedger, path: Union[str, Path]) -> int:
    """Replace the ledger with the contents of the CSV file at ``path``."""

    source = Path(path).expanduser()
    try:
        with source.open("r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as error:
        raise StorageError(f"Error loading file {source}: {error}") from error
    count = import_ledger(ledger, text)
    LOGGER.info("Loaded %s transactions from %s", count, source)
    return count

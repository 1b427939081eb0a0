"""Mini README: In-memory ledger of income and expense transactions.

Structure:
    * TransactionType - enum of the two transaction kinds.
    * Category - closed list of categories offered to the user.
    * Transaction - dataclass storing one ledger entry.
    * FinanceLedger - authoritative store with add/delete/list/filter/report.

The ledger owns the only copy of the session's transactions. Tables and
reports shown by the interfaces are derived from it on demand and never
edited directly. Records are kept in insertion order; listing sorts by date
without disturbing that order, which the CSV export relies on.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..errors import NotFoundError, ValidationError
from ..logging_utils import get_logger
from .reports import ReportPeriod, ReportRow, build_report

LOGGER = get_logger(__name__)

CENTS = Decimal("0.01")
DATE_FORMAT = "%Y-%m-%d"
_DAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        normalised = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == normalised:
                return member
        raise ValidationError(f"Unsupported transaction type: {value}")


class Category(str, Enum):
    """Categories offered when recording a transaction."""

    FOOD = "Food"
    RENT = "Rent"
    ENTERTAINMENT = "Entertainment"
    SALARY = "Salary"
    TRANSPORT = "Transport"
    UTILITIES = "Utilities"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    OTHER = "Other"

    @classmethod
    def from_str(cls, value: str) -> "Category":
        """Match a category name regardless of casing."""

        normalised = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == normalised:
                return member
        raise ValidationError(f"Unsupported category: {value}")


def _label(value: Union[Enum, str]) -> str:
    """Return the display text for an enum member or a raw imported string."""

    return value.value if isinstance(value, Enum) else str(value)


def lenient_type(value: str) -> Union[TransactionType, str]:
    """Map imported text to a ``TransactionType`` when possible, else keep it."""

    try:
        return TransactionType.from_str(value)
    except ValidationError:
        return value


def lenient_category(value: str) -> Union[Category, str]:
    """Map imported text to a ``Category`` when possible, else keep it."""

    try:
        return Category.from_str(value)
    except ValidationError:
        return value


@dataclass(slots=True, frozen=True)
class Transaction:
    """Represent a single ledger entry.

    ``transaction_type`` and ``category`` normally hold enum members. Entries
    loaded from CSV may carry unrecognised strings, which are preserved as-is.
    """

    transaction_id: str
    occurred_on: date
    transaction_type: Union[TransactionType, str]
    category: Union[Category, str]
    amount: Decimal
    note: str = ""

    @property
    def is_income(self) -> bool:
        return self.type_label.lower() == TransactionType.INCOME.value.lower()

    @property
    def type_label(self) -> str:
        return _label(self.transaction_type)

    @property
    def category_label(self) -> str:
        return _label(self.category)

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with JSON serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "occurred_on": self.occurred_on.isoformat(),
            "transaction_type": self.type_label,
            "category": self.category_label,
            "amount": f"{self.amount:.2f}",
            "note": self.note,
        }


def parse_amount(value: object) -> Decimal:
    """Parse user supplied amount text into a non-negative 2-decimal value."""

    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError("Enter amount")
    try:
        amount = Decimal(text)
    except InvalidOperation as error:
        raise ValidationError(f"Invalid amount: {text}") from error
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {text}")
    if amount < 0:
        raise ValidationError("Amount must not be negative; choose Income or Expense instead")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_day(text: str) -> date:
    """Parse a zero-padded ``yyyy-MM-dd`` day, raising ``ValueError`` otherwise."""

    stripped = text.strip()
    if not _DAY_PATTERN.fullmatch(stripped):
        raise ValueError(f"Expected yyyy-mm-dd, got {text!r}")
    return datetime.strptime(stripped, DATE_FORMAT).date()


def parse_date(value: object) -> date:
    """Parse ``yyyy-MM-dd`` strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_day(value)
        except ValueError as error:
            raise ValidationError(f"Dates must use the yyyy-mm-dd format: {value}") from error
    raise ValidationError("Dates must be provided as yyyy-mm-dd strings or date instances.")


class FinanceLedger:
    """Manage the session's transactions."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None) -> None:
        self._transactions: Dict[str, Transaction] = {}
        if transactions:
            self.replace_all(transactions)
        LOGGER.debug("Finance ledger initialised with %s transactions", len(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions.values()))

    def _next_id(self) -> str:
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in self._transactions:
                return candidate

    def add(
        self,
        transaction_type: Union[TransactionType, str],
        category: Union[Category, str],
        amount: object,
        occurred_on: object,
        note: str = "",
    ) -> Transaction:
        """Validate the inputs and append a new transaction.

        Nothing is stored unless every field is valid.
        """

        parsed_amount = parse_amount(amount)
        transaction = Transaction(
            transaction_id=self._next_id(),
            occurred_on=parse_date(occurred_on),
            transaction_type=TransactionType.from_str(_label(transaction_type)),
            category=Category.from_str(_label(category)),
            amount=parsed_amount,
            note=note or "",
        )
        self._transactions[transaction.transaction_id] = transaction
        LOGGER.info(
            "Added %s %s of %s on %s (%s)",
            transaction.type_label.lower(),
            transaction.category_label,
            transaction.amount,
            transaction.occurred_on.isoformat(),
            transaction.transaction_id,
        )
        return transaction

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        if transaction_id not in self._transactions:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        return self._transactions[transaction_id]

    def delete(self, transaction_id: str) -> None:
        """Remove a transaction by id."""

        self.get_transaction(transaction_id)
        del self._transactions[transaction_id]
        LOGGER.info("Deleted transaction %s", transaction_id)

    def list_transactions(self, sorted_by_date: bool = True) -> List[Transaction]:
        """Return transactions by date ascending, or in insertion order."""

        transactions = list(self._transactions.values())
        if sorted_by_date:
            # sorted() is stable, so equal dates keep insertion order.
            transactions.sort(key=lambda transaction: transaction.occurred_on)
        return transactions

    def filter_by_date(self, date_from: object, date_to: object) -> List[Transaction]:
        """Return transactions dated within ``[date_from, date_to]``."""

        start = parse_date(date_from)
        end = parse_date(date_to)
        if start > end:
            raise ValidationError("'From' must be on or before 'To'")
        matches = [
            transaction
            for transaction in self.list_transactions()
            if start <= transaction.occurred_on <= end
        ]
        LOGGER.debug("Filter %s..%s matched %s transactions", start, end, len(matches))
        return matches

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """Swap the whole set, keeping the previous one if ids collide."""

        replacement: Dict[str, Transaction] = {}
        for transaction in transactions:
            if transaction.transaction_id in replacement:
                raise ValidationError(f"Transaction {transaction.transaction_id} already exists.")
            replacement[transaction.transaction_id] = transaction
        self._transactions = replacement
        LOGGER.info("Ledger replaced with %s transactions", len(replacement))

    def report(self, period: Union[ReportPeriod, str]) -> List[ReportRow]:
        """Aggregate the live set into income/expense/net buckets."""

        return build_report(self._transactions.values(), period)

"""Mini README: Periodic income/expense reports derived from the ledger.

Structure:
    * ReportPeriod - daily, monthly or yearly bucketing.
    * ReportRow - one bucket with income, expense and net totals.
    * bucket_key - period identifier for a date.
    * build_report - aggregate transactions into sorted report rows.
    * render_report - fixed-width text table for the CLI and dashboard.

Reports are read-only views; they never modify the ledger.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, NamedTuple, Union

from ..errors import ValidationError

if TYPE_CHECKING:
    from .ledger import Transaction

_CENTS = Decimal("0.01")
_ZERO = Decimal("0.00")


class ReportPeriod(str, Enum):
    """Granularity used when grouping transactions."""

    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def from_str(cls, value: Union["ReportPeriod", str]) -> "ReportPeriod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as error:
            raise ValidationError(f"Unsupported report period: {value}") from error


class ReportRow(NamedTuple):
    bucket: str
    income: Decimal
    expense: Decimal
    net: Decimal

    def as_dict(self) -> Dict[str, str]:
        return {
            "bucket": self.bucket,
            "income": f"{self.income:.2f}",
            "expense": f"{self.expense:.2f}",
            "net": f"{self.net:.2f}",
        }


def bucket_key(day: date, period: ReportPeriod) -> str:
    """Return ``YYYY-MM-DD``, ``YYYY-MM`` or ``YYYY`` for the given period."""

    if period is ReportPeriod.DAILY:
        return day.strftime("%Y-%m-%d")
    if period is ReportPeriod.MONTHLY:
        return day.strftime("%Y-%m")
    return f"{day.year:04d}"


def _round(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def build_report(
    transactions: Iterable["Transaction"], period: Union[ReportPeriod, str]
) -> List[ReportRow]:
    """Sum income and expense per bucket, sorted by bucket key."""

    resolved = ReportPeriod.from_str(period)
    income: Dict[str, Decimal] = defaultdict(Decimal)
    expense: Dict[str, Decimal] = defaultdict(Decimal)
    for transaction in transactions:
        key = bucket_key(transaction.occurred_on, resolved)
        target = income if transaction.is_income else expense
        target[key] += transaction.amount

    rows: List[ReportRow] = []
    for key in sorted(set(income) | set(expense)):
        income_total = _round(income.get(key, _ZERO))
        expense_total = _round(expense.get(key, _ZERO))
        rows.append(ReportRow(key, income_total, expense_total, _round(income_total - expense_total)))
    return rows


def render_report(rows: Iterable[ReportRow], period: Union[ReportPeriod, str]) -> str:
    """Format report rows as the aligned text table shown to users."""

    resolved = ReportPeriod.from_str(period)
    lines = [
        f"{resolved.value.capitalize()} Report",
        f"{'Period':<16} {'Income':<12} {'Expense':<12} {'Net':<12}".rstrip(),
    ]
    for row in rows:
        lines.append(
            f"{row.bucket:<16} {row.income:<12.2f} {row.expense:<12.2f} {row.net:<12.2f}".rstrip()
        )
    return "\n".join(lines) + "\n"

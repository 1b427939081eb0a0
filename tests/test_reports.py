"""Mini README: Tests for period reports.

Confirms bucket keys for each period, income/expense/net totals, sorting of
buckets and the text rendering used by the CLI and dashboard.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from expensetracker.errors import ValidationError
from expensetracker.finance import (
    FinanceLedger,
    ReportPeriod,
    Transaction,
    build_report,
    render_report,
)
from expensetracker.finance.reports import bucket_key


def _sample_ledger() -> FinanceLedger:
    ledger = FinanceLedger()
    ledger.add("Income", "Salary", "100", date(2023, 1, 5))
    ledger.add("Expense", "Food", "40", date(2023, 1, 20))
    ledger.add("Income", "Salary", "50", date(2023, 2, 1))
    return ledger


def test_monthly_report_matches_expected_rows() -> None:
    rows = _sample_ledger().report("monthly")

    assert rows == [
        ("2023-01", Decimal("100.00"), Decimal("40.00"), Decimal("60.00")),
        ("2023-02", Decimal("50.00"), Decimal("0.00"), Decimal("50.00")),
    ]


def test_daily_and_yearly_buckets() -> None:
    ledger = _sample_ledger()
    ledger.add("Expense", "Rent", "700.255", date(2024, 1, 1))

    daily = ledger.report(ReportPeriod.DAILY)
    yearly = ledger.report("YEARLY")

    assert [row.bucket for row in daily] == ["2023-01-05", "2023-01-20", "2023-02-01", "2024-01-01"]
    assert yearly == [
        ("2023", Decimal("150.00"), Decimal("40.00"), Decimal("110.00")),
        ("2024", Decimal("0.00"), Decimal("700.26"), Decimal("-700.26")),
    ]


def test_report_treats_type_case_insensitively_and_other_types_as_expense() -> None:
    """Imported rows may carry raw type strings; only 'income' counts as income."""

    transactions = [
        Transaction("a", date(2023, 5, 1), "INCOME", "Salary", Decimal("10.00")),
        Transaction("b", date(2023, 5, 2), "refund", "Other", Decimal("3.00")),
    ]

    rows = build_report(transactions, "monthly")

    assert rows == [("2023-05", Decimal("10.00"), Decimal("3.00"), Decimal("7.00"))]


def test_report_on_empty_ledger_is_empty() -> None:
    assert FinanceLedger().report("daily") == []


def test_unknown_period_is_rejected() -> None:
    with pytest.raises(ValidationError):
        _sample_ledger().report("weekly")


def test_bucket_key_formats() -> None:
    day = date(2023, 7, 4)

    assert bucket_key(day, ReportPeriod.DAILY) == "2023-07-04"
    assert bucket_key(day, ReportPeriod.MONTHLY) == "2023-07"
    assert bucket_key(day, ReportPeriod.YEARLY) == "2023"


def test_render_report_lists_each_bucket() -> None:
    text = render_report(_sample_ledger().report("monthly"), "monthly")
    lines = text.splitlines()

    assert lines[0] == "Monthly Report"
    assert lines[1].split() == ["Period", "Income", "Expense", "Net"]
    assert lines[2].split() == ["2023-01", "100.00", "40.00", "60.00"]
    assert lines[3].split() == ["2023-02", "50.00", "0.00", "50.00"]

"""Mini README: Tests covering the in-memory finance ledger.

Structure:
    * add - stored fields, generated ids and rejected amounts.
    * delete - removal by id and unknown ids.
    * list/filter - date ordering, insertion-order ties and inclusive ranges.
    * replace_all - wholesale swaps and duplicate id protection.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from expensetracker.errors import NotFoundError, ValidationError
from expensetracker.finance import Category, FinanceLedger, Transaction, TransactionType


def _ledger_with_dates(*days: date) -> FinanceLedger:
    ledger = FinanceLedger()
    for index, day in enumerate(days):
        ledger.add("Expense", "Food", f"{index + 1}.00", day, f"entry {index}")
    return ledger


def test_add_returns_transaction_matching_inputs() -> None:
    """The created record should mirror the request and get a fresh id."""

    ledger = FinanceLedger()

    first = ledger.add("Income", "Salary", "1500.5", date(2024, 3, 1), "March pay, net")
    second = ledger.add(TransactionType.EXPENSE, Category.RENT, 800, "2024-03-02", "")

    assert first.transaction_type is TransactionType.INCOME
    assert first.category is Category.SALARY
    assert first.amount == Decimal("1500.50")
    assert first.occurred_on == date(2024, 3, 1)
    assert first.note == "March pay, net"
    assert second.occurred_on == date(2024, 3, 2)
    assert second.amount == Decimal("800.00")
    assert first.transaction_id != second.transaction_id
    assert [item.transaction_id for item in ledger.list_transactions()] == [
        first.transaction_id,
        second.transaction_id,
    ]


def test_add_accepts_any_casing_for_type_and_category() -> None:
    ledger = FinanceLedger()

    transaction = ledger.add("income", "HEALTH", "12", date(2024, 1, 1))

    assert transaction.type_label == "Income"
    assert transaction.category_label == "Health"
    assert transaction.is_income


@pytest.mark.parametrize("amount", ["abc", "", "   ", "-5", "NaN", "Infinity", None])
def test_add_rejects_invalid_amount_without_changing_ledger(amount: object) -> None:
    """Bad amounts raise ValidationError and nothing is stored."""

    ledger = _ledger_with_dates(date(2024, 1, 1))
    before = ledger.list_transactions()

    with pytest.raises(ValidationError):
        ledger.add("Expense", "Food", amount, date(2024, 1, 2))

    assert ledger.list_transactions() == before


def test_add_rejects_unknown_category_and_bad_date() -> None:
    ledger = FinanceLedger()

    with pytest.raises(ValidationError):
        ledger.add("Expense", "Gambling", "10", date(2024, 1, 2))
    with pytest.raises(ValidationError):
        ledger.add("Transfer", "Food", "10", date(2024, 1, 2))
    with pytest.raises(ValidationError):
        ledger.add("Expense", "Food", "10", "02/01/2024")
    with pytest.raises(ValidationError):
        ledger.add("Expense", "Food", "10", "2024-1-5")

    assert len(ledger) == 0


def test_delete_removes_transaction() -> None:
    ledger = _ledger_with_dates(date(2024, 1, 1), date(2024, 1, 2))
    target = ledger.list_transactions()[0]

    ledger.delete(target.transaction_id)

    assert target.transaction_id not in {item.transaction_id for item in ledger.list_transactions()}
    assert len(ledger) == 1


def test_delete_unknown_id_raises_and_keeps_ledger() -> None:
    ledger = _ledger_with_dates(date(2024, 1, 1))
    before = ledger.list_transactions()

    with pytest.raises(NotFoundError):
        ledger.delete("missing")

    assert ledger.list_transactions() == before


def test_list_transactions_sorts_by_date_with_stable_ties() -> None:
    """Equal dates keep insertion order; unsorted listing keeps insertion order."""

    ledger = _ledger_with_dates(date(2024, 2, 1), date(2024, 1, 15), date(2024, 2, 1))

    notes = [item.note for item in ledger.list_transactions()]
    assert notes == ["entry 1", "entry 0", "entry 2"]

    unsorted_notes = [item.note for item in ledger.list_transactions(sorted_by_date=False)]
    assert unsorted_notes == ["entry 0", "entry 1", "entry 2"]


def test_filter_by_date_is_inclusive_and_sorted() -> None:
    ledger = _ledger_with_dates(
        date(2024, 3, 10), date(2024, 3, 1), date(2024, 2, 28), date(2024, 3, 31), date(2024, 4, 1)
    )

    matches = ledger.filter_by_date(date(2024, 3, 1), "2024-03-31")

    assert [item.occurred_on for item in matches] == [
        date(2024, 3, 1),
        date(2024, 3, 10),
        date(2024, 3, 31),
    ]
    assert len(ledger) == 5


def test_filter_by_date_rejects_inverted_range() -> None:
    ledger = _ledger_with_dates(date(2024, 3, 10))

    with pytest.raises(ValidationError):
        ledger.filter_by_date(date(2024, 4, 1), date(2024, 3, 1))

    assert len(ledger) == 1


def test_replace_all_swaps_entire_set() -> None:
    ledger = _ledger_with_dates(date(2024, 1, 1), date(2024, 1, 2))
    replacement = Transaction(
        transaction_id="imported-1",
        occurred_on=date(2023, 12, 31),
        transaction_type="Refund",
        category="Gifts",
        amount=Decimal("5.00"),
    )

    ledger.replace_all([replacement])

    assert ledger.list_transactions() == [replacement]
    assert ledger.get_transaction("imported-1").category_label == "Gifts"


def test_replace_all_rejects_duplicate_ids_and_keeps_previous_set() -> None:
    ledger = _ledger_with_dates(date(2024, 1, 1))
    before = ledger.list_transactions()
    duplicate = Transaction(
        transaction_id="dup",
        occurred_on=date(2024, 1, 1),
        transaction_type=TransactionType.EXPENSE,
        category=Category.OTHER,
        amount=Decimal("1.00"),
    )

    with pytest.raises(ValidationError):
        ledger.replace_all([duplicate, duplicate])

    assert ledger.list_transactions() == before


def test_as_dict_serialises_labels_and_amount() -> None:
    ledger = FinanceLedger()
    transaction = ledger.add("Expense", "Transport", "3.5", date(2024, 5, 20), "Bus")

    payload = transaction.as_dict()

    assert payload["transaction_type"] == "Expense"
    assert payload["category"] == "Transport"
    assert payload["amount"] == "3.50"
    assert payload["occurred_on"] == "2024-05-20"


def test_listed_transactions_cannot_be_modified() -> None:
    """Records handed out by the ledger are read-only so ids stay in sync."""

    ledger = _ledger_with_dates(date(2024, 1, 1))
    transaction = ledger.list_transactions()[0]
    original_id = transaction.transaction_id

    with pytest.raises(FrozenInstanceError):
        transaction.transaction_id = "changed"  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        transaction.note = "edited"  # type: ignore[misc]

    ledger.delete(original_id)
    assert len(ledger) == 0

"""Mini README: Error taxonomy shared by the ledger, codec and interfaces.

Structure:
    * ExpenseTrackerError - common base so interfaces can catch everything.
    * ValidationError - rejected user input (amount, date range, duplicates).
    * NotFoundError - a transaction id that is not in the ledger.
    * FormatError - CSV content that cannot be parsed (date or amount).
    * StorageError - the CSV file could not be read or written.

Each error also derives from the closest builtin so callers that already
catch ``ValueError``, ``KeyError`` or ``OSError`` keep working.
"""

from __future__ import annotations


class ExpenseTrackerError(Exception):
    """Base class for all expense tracker failures."""


class ValidationError(ExpenseTrackerError, ValueError):
    """Raised when a request is rejected before touching the ledger."""


class NotFoundError(ExpenseTrackerError, KeyError):
    """Raised when a transaction id does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class FormatError(ExpenseTrackerError, ValueError):
    """Raised when imported CSV content cannot be parsed."""


class StorageError(ExpenseTrackerError, OSError):
    """Raised when the ledger file cannot be read or written."""

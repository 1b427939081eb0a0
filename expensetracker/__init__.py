"""Mini README: Core package initializer for the expense tracker.

Re-exports the logger factory and the error types so interfaces can import
them from one place without reaching into submodules.
"""

from .errors import (
    ExpenseTrackerError,
    FormatError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .logging_utils import get_logger

__all__ = [
    "ExpenseTrackerError",
    "FormatError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    "get_logger",
]

"""Mini README: Ledger, reporting and CSV persistence for the expense tracker.

This package holds every business rule of the application. Interfaces call
into ``FinanceLedger`` for add/delete/list/filter, ``build_report`` for
period summaries and the CSV helpers for saving and loading.
"""

from .csv_codec import (
    CSV_HEADER,
    decode_transactions,
    encode_transactions,
    export_ledger,
    import_ledger,
    load_csv,
    save_csv,
)
from .ledger import Category, FinanceLedger, Transaction, TransactionType
from .reports import ReportPeriod, ReportRow, build_report, render_report

__all__ = [
    "CSV_HEADER",
    "Category",
    "FinanceLedger",
    "ReportPeriod",
    "ReportRow",
    "Transaction",
    "TransactionType",
    "build_report",
    "decode_transactions",
    "encode_transactions",
    "export_ledger",
    "import_ledger",
    "load_csv",
    "render_report",
    "save_csv",
]

"""Mini README: Interactive interfaces for the expense tracker.

Exports the FastAPI application factory that powers the browser dashboard.
The command line entry point lives in ``run_expense_tracker.py`` at the
repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]

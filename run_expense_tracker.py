"""Mini README: Entry point CLI for the expense tracker.

This script exposes a Typer CLI with three commands:

    * run - start the web dashboard with uvicorn.
    * report - print a daily/monthly/yearly report for a ledger CSV file.
    * list - print the transactions of a ledger CSV file, optionally filtered.

Host, port, log level and the default ledger file come from
``EXPENSE_TRACKER_*`` settings when not given on the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from expensetracker.configuration import get_settings
from expensetracker.errors import ExpenseTrackerError
from expensetracker.finance import FinanceLedger, load_csv, render_report
from expensetracker.logging_utils import configure_root_logger

cli = typer.Typer(help="Record income and expenses and report on them.")


def _load_ledger(path: Optional[Path]) -> FinanceLedger:
    """Load ``path`` (or the configured ledger file) into a fresh ledger."""

    ledger = FinanceLedger()
    source = path or get_settings().ledger_path
    try:
        load_csv(ledger, source)
    except ExpenseTrackerError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    return ledger


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the web dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Expense Tracker on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "expensetracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not (production or settings.environment == "production"),
    )


@cli.command()
def report(
    path: Optional[Path] = typer.Argument(None, help="Ledger CSV file to summarise."),
    period: str = typer.Option(None, help="daily, monthly or yearly."),
) -> None:
    """Print income, expense and net totals per period."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    ledger = _load_ledger(path)
    chosen = period or settings.default_report_period
    try:
        rows = ledger.report(chosen)
    except ExpenseTrackerError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo(render_report(rows, chosen), nl=False)


@cli.command("list")
def list_transactions(
    path: Optional[Path] = typer.Argument(None, help="Ledger CSV file to read."),
    date_from: Optional[str] = typer.Option(None, "--from", help="First day (yyyy-mm-dd)."),
    date_to: Optional[str] = typer.Option(None, "--to", help="Last day (yyyy-mm-dd)."),
) -> None:
    """Print transactions sorted by date."""

    configure_root_logger(get_settings().log_level)
    ledger = _load_ledger(path)
    try:
        if date_from or date_to:
            transactions = ledger.filter_by_date(date_from, date_to)
        else:
            transactions = ledger.list_transactions()
    except ExpenseTrackerError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"{'Date':<11} {'Type':<8} {'Category':<14} {'Amount':>10}  Note")
    for item in transactions:
        note = item.note.replace("\n", " ")
        typer.echo(
            f"{item.occurred_on.isoformat():<11} {item.type_label:<8} "
            f"{item.category_label:<14} {item.amount:>10.2f}  {note}"
        )


if __name__ == "__main__":
    cli()

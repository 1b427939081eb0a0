"""Mini README: FastAPI-powered dashboard for the expense tracker.

Structure:
    * create_application - application factory wiring routes and templates.
    * Ledger state - one ``FinanceLedger`` per application instance.

The interface is a thin layer: every route translates a request into one
ledger, report or CSV call and renders the result. Ledger errors are mapped
to HTTP status codes (400 for rejected input, 404 for unknown ids, 500 when
the ledger file cannot be accessed). The colour theme is a query parameter
and never reaches the ledger.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import ExpenseTrackerSettings, get_settings
from ..errors import FormatError, NotFoundError, StorageError, ValidationError
from ..finance import (
    Category,
    FinanceLedger,
    ReportPeriod,
    Transaction,
    TransactionType,
    export_ledger,
    import_ledger,
    load_csv,
    render_report,
    save_csv,
)
from ..logging_utils import configure_root_logger, get_logger

LOGGER = get_logger(__name__)

THEMES = ("light", "dark")


def create_application(
    ledger: Optional[FinanceLedger] = None,
    settings: Optional[ExpenseTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application around a ledger instance."""

    app = FastAPI(title="Expense Tracker", version="1.0.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    ledger = ledger if ledger is not None else FinanceLedger()
    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    app.state.ledger = ledger

    def _filtered(date_from: Optional[str], date_to: Optional[str]) -> List[Transaction]:
        if not date_from and not date_to:
            return ledger.list_transactions()
        if not (date_from and date_to):
            raise ValidationError("Provide both 'From' and 'To' dates to filter")
        return ledger.filter_by_date(date_from, date_to)

    def _resolve_path(path: Optional[str]) -> Path:
        return Path(path).expanduser() if path else settings.ledger_path

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(
        request: Request,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        period: Optional[str] = None,
        theme: Optional[str] = None,
    ) -> HTMLResponse:
        """Render the transaction table, entry form and report panel."""

        errors: List[str] = []
        try:
            transactions = _filtered(date_from, date_to)
        except ValidationError as error:
            errors.append(str(error))
            transactions = ledger.list_transactions()
        try:
            report_period = ReportPeriod.from_str(period or settings.default_report_period)
        except ValidationError as error:
            errors.append(str(error))
            report_period = ReportPeriod.from_str(settings.default_report_period)
        rows = ledger.report(report_period)
        LOGGER.debug(
            "Rendering dashboard with %s rows and %s report buckets", len(transactions), len(rows)
        )
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "transactions": transactions,
                "report_rows": rows,
                "report_text": render_report(rows, report_period),
                "report_period": report_period.value,
                "periods": [member.value for member in ReportPeriod],
                "categories": [member.value for member in Category],
                "transaction_types": [member.value for member in TransactionType],
                "date_from": date_from or "",
                "date_to": date_to or "",
                "theme": theme if theme in THEMES else settings.default_theme,
                "errors": errors,
                "ledger_path": str(settings.ledger_path),
            },
        )

    @app.get("/categories")
    async def categories() -> JSONResponse:
        """Expose the selectable categories and transaction types."""

        return JSONResponse(
            {
                "categories": [member.value for member in Category],
                "transaction_types": [member.value for member in TransactionType],
            }
        )

    @app.get("/transactions")
    async def list_transactions(
        date_from: Optional[str] = None, date_to: Optional[str] = None
    ) -> JSONResponse:
        """Return transactions sorted by date, optionally within a range."""

        try:
            transactions = _filtered(date_from, date_to)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"transactions": [item.as_dict() for item in transactions]})

    @app.post("/transactions")
    async def add_transaction(
        transaction_type: str = Form(...),
        category: str = Form(...),
        amount: str = Form(""),
        occurred_on: str = Form(...),
        note: str = Form(""),
    ) -> JSONResponse:
        """Record a new transaction from the entry form."""

        try:
            transaction = ledger.add(transaction_type, category, amount, occurred_on, note)
        except ValidationError as error:
            LOGGER.warning("Rejected transaction: %s", error)
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> Response:
        """Delete a transaction selected in the table."""

        try:
            ledger.delete(transaction_id)
        except NotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return Response(status_code=204)

    @app.get("/reports/{period}")
    async def report(period: str) -> JSONResponse:
        """Return daily, monthly or yearly income/expense totals."""

        try:
            rows = ledger.report(period)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(
            {"period": ReportPeriod.from_str(period).value, "rows": [row.as_dict() for row in rows]}
        )

    @app.get("/export.csv")
    async def export_csv() -> Response:
        """Download the ledger as a CSV file."""

        return Response(
            content=export_ledger(ledger),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
        )

    @app.post("/import")
    async def import_csv(ledger_file: UploadFile = File(...)) -> JSONResponse:
        """Replace the ledger with an uploaded CSV file."""

        data = await ledger_file.read()
        try:
            count = import_ledger(ledger, data.decode("utf-8"))
        except UnicodeDecodeError as error:
            raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded") from error
        except FormatError as error:
            LOGGER.warning("Import of %s aborted: %s", ledger_file.filename, error)
            raise HTTPException(status_code=400, detail=str(error)) from error
        LOGGER.info("Imported %s transactions from upload %s", count, ledger_file.filename)
        return JSONResponse({"loaded": count})

    @app.post("/save")
    async def save(path: Optional[str] = Form(None)) -> JSONResponse:
        """Persist the ledger to disk, defaulting to the configured file."""

        try:
            destination = save_csv(ledger, _resolve_path(path))
        except StorageError as error:
            LOGGER.error("%s", error)
            raise HTTPException(status_code=500, detail=str(error)) from error
        return JSONResponse({"saved": len(ledger), "path": str(destination)})

    @app.post("/load")
    async def load(path: Optional[str] = Form(None)) -> JSONResponse:
        """Replace the ledger with a CSV file from disk."""

        source = _resolve_path(path)
        try:
            count = load_csv(ledger, source)
        except StorageError as error:
            LOGGER.error("%s", error)
            raise HTTPException(status_code=500, detail=str(error)) from error
        except FormatError as error:
            LOGGER.warning("Load of %s aborted: %s", source, error)
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"loaded": count, "path": str(source)})

    return app

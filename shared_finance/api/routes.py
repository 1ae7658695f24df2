"""FastAPI endpoints for the Shared Finance API.

This module defines the routes for previewing and uploading bank statement CSVs, polling
upload jobs, listing and exporting workspace transactions, reading the aggregated summary,
and following that summary live over a WebSocket. It wires together the parser, normalizer,
store, job runner and sync controller.
"""

import asyncio
import contextlib
import io
import uuid

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    Form,
    HTTPException,
    Query,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
)
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.concurrency import run_in_threadpool

from shared_finance.api.dependencies import (
    get_categorizer,
    get_category_table,
    get_db_conn,
    get_settings,
    get_store,
    get_sync,
)
from shared_finance.categorization import BaseCategorizer, CategoryTable
from shared_finance.core.db import DBHelper
from shared_finance.core.errors import ParseError
from shared_finance.core.models import (
    Contributor,
    FinanceSummary,
    JobStatus,
    PreviewResponse,
    Transaction,
    UploadAccepted,
    WorkspaceItemPayload,
)
from shared_finance.core.settings import Settings
from shared_finance.core.utils import get_logger, utcnow_iso
from shared_finance.services.normalizer import normalize_statement
from shared_finance.services.parser import StatementParser
from shared_finance.services.reports import export_csv, sort_recent
from shared_finance.services.store import TransactionStore
from shared_finance.services.sync import SyncController
from shared_finance.workers.job_runner import run_upload_job

router = APIRouter()
logger = get_logger("shared-finance.api")


def _viewer(session: str | None, name: str | None) -> Contributor | None:
    return Contributor(id=session, display_name=name) if session else None


async def _parse_upload(
    workspace_id: str,
    file: UploadFile,
    uploaded_by: str,
    categorizer: BaseCategorizer,
) -> tuple[list[WorkspaceItemPayload], int]:
    """Validate, parse and normalize an uploaded statement; nothing is stored."""
    logger.info(f"Received statement: filename={file.filename}, workspace={workspace_id}, by={uploaded_by}")
    if not (file.filename or "").lower().endswith(".csv"):
        logger.warning(f"Rejected file (not CSV): {file.filename}")
        raise HTTPException(400, "Only CSV files accepted")
    data = await file.read()
    try:
        parser = StatementParser(data)
    except ParseError as exc:
        logger.warning(f"Rejected file (parse error): {file.filename}: {exc}")
        raise HTTPException(400, str(exc)) from exc
    items = normalize_statement(parser.records(), workspace_id, uploaded_by, categorizer)
    logger.info(f"Normalized {len(items)} transactions, skipped {parser.skipped} rows")
    return items, parser.skipped


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get(
    "/categories",
    summary="List spending categories",
    description="Return the category table in match priority order, fallback category last.",
)
async def list_categories(table: CategoryTable = Depends(get_category_table)) -> list[dict]:
    """List categories with their display color and glyph."""
    return [category.model_dump() for category in table]


@router.post(
    "/workspaces/{workspace_id}/preview",
    response_model=PreviewResponse,
    summary="Preview a bank statement",
    description=(
        "Parse and categorize a CSV statement without storing it.\n\n"
        "**Request:**\n"
        "- Content-Type: multipart/form-data\n"
        "- Form fields: `file` (CSV file), `uploaded_by` (session identifier)\n\n"
        "**Response:**\n"
        "- 200 OK: record count, skipped row count and the first records.\n"
        "- 400 Bad Request: If the file is not a CSV or cannot be parsed."
    ),
)
async def preview_statement(
    workspace_id: str,
    file: UploadFile,
    uploaded_by: str = Form(...),
    categorizer: BaseCategorizer = Depends(get_categorizer),
    settings: Settings = Depends(get_settings),
) -> PreviewResponse:
    """Parse a statement and return the categorized records."""
    items, skipped = await _parse_upload(workspace_id, file, uploaded_by, categorizer)
    return PreviewResponse(
        count=len(items),
        skipped=skipped,
        transactions=[item.transaction_data for item in items[: settings.preview_limit]],
    )


@router.post(
    "/workspaces/{workspace_id}/upload-csv",
    status_code=202,
    response_model=UploadAccepted,
    summary="Upload a bank statement CSV and start a background upload job",
    description=(
        "Parse and categorize a CSV statement, then write it to the workspace in chunks in the background. "
        "Returns a job_id that can be polled on `/status/{job_id}`.\n\n"
        "**Response:**\n"
        "- 202 Accepted: `{ 'job_id': '<uuid>', 'total': <records>, 'skipped': <rows> }`.\n"
        "- 400 Bad Request: If the file is not a CSV or cannot be parsed."
    ),
    responses={
        202: {
            "description": "Job accepted.",
            "content": {
                "application/json": {
                    "example": {"job_id": "123e4567-e89b-12d3-a456-426614174000", "total": 42, "skipped": 1}
                }
            },
        },
        400: {
            "description": "Only CSV files accepted.",
            "content": {"application/json": {"example": {"detail": "Only CSV files accepted"}}},
        },
    },
)
async def upload_csv(
    workspace_id: str,
    background_tasks: BackgroundTasks,
    file: UploadFile,
    uploaded_by: str = Form(...),
    categorizer: BaseCategorizer = Depends(get_categorizer),
    store: TransactionStore = Depends(get_store),
    db: DBHelper = Depends(get_db_conn),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Upload a statement and schedule the chunked write."""
    items, skipped = await _parse_upload(workspace_id, file, uploaded_by, categorizer)
    job_id = str(uuid.uuid4())
    db.create_job(job_id, workspace_id, uploaded_by, total=len(items), created_at=utcnow_iso())
    background_tasks.add_task(run_upload_job, job_id, items, store, db, settings.upload_chunk_size)
    logger.info(f"Background job started: job_id={job_id}")
    accepted = UploadAccepted(job_id=job_id, total=len(items), skipped=skipped)
    return JSONResponse(accepted.model_dump(), status_code=202)


@router.get(
    "/status/{job_id}",
    response_model=JobStatus,
    summary="Get upload job status",
    description=(
        "Check the status of an upload job by job_id.\n\n"
        "**Response:**\n"
        "- 200 OK: status (`pending`, `in_progress`, `completed`, `error`), uploaded and total record counts, "
        "progress percentage and error if any. After an error, `uploaded` counts the records already stored.\n"
        "- 404 Not Found: If the job_id does not exist."
    ),
    responses={
        404: {
            "description": "Job not found.",
            "content": {"application/json": {"example": {"detail": "Job not found"}}},
        },
    },
)
async def get_status(job_id: str, db: DBHelper = Depends(get_db_conn)) -> dict:
    """Get the status of a job."""
    row = db.get_job_status(job_id)
    if not row:
        raise HTTPException(404, "Job not found")
    return row


@router.get(
    "/workspaces/{workspace_id}/transactions",
    response_model=list[Transaction],
    summary="List workspace transactions",
    description="Return stored transactions sorted by statement date, newest first.",
)
async def list_transactions(
    workspace_id: str,
    limit: int | None = Query(None, ge=1),
    store: TransactionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> list[Transaction]:
    """List the most recent transactions of a workspace."""
    transactions = await run_in_threadpool(store.list_transactions, workspace_id)
    return sort_recent(transactions, settings.recent_transactions_limit if limit is None else limit)


@router.get(
    "/workspaces/{workspace_id}/summary",
    response_model=FinanceSummary | None,
    summary="Get the workspace finance summary",
    description=(
        "Aggregate every transaction of the workspace into balance, income and expense totals per contributor. "
        "Pass `session` (and optionally `name`) to include the viewing session as a contributor. "
        "Returns `null` when the transactions cannot be read."
    ),
)
async def get_summary(
    workspace_id: str,
    session: str | None = None,
    name: str | None = None,
    sync: SyncController = Depends(get_sync),
) -> FinanceSummary | None:
    """Compute the summary of a workspace."""
    return await run_in_threadpool(sync.summary, workspace_id, _viewer(session, name))


@router.get(
    "/workspaces/{workspace_id}/export",
    response_class=StreamingResponse,
    summary="Export workspace transactions as CSV",
    responses={200: {"description": "CSV file download."}},
)
async def export_transactions(workspace_id: str, store: TransactionStore = Depends(get_store)) -> StreamingResponse:
    """Download all transactions of a workspace as CSV."""
    transactions = await run_in_threadpool(store.list_transactions, workspace_id)
    data = export_csv(sort_recent(transactions)).encode("utf-8")
    return StreamingResponse(
        io.BytesIO(data),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=transactions_{workspace_id}.csv"},
    )


def _summary_json(summary: FinanceSummary | None) -> dict | None:
    return summary.model_dump(by_alias=True) if summary is not None else None


@router.websocket("/workspaces/{workspace_id}/live")
async def live_summary(
    websocket: WebSocket,
    workspace_id: str,
    session: str | None = None,
    name: str | None = None,
) -> None:
    """Send the current summary, then a recomputed summary after every workspace change."""
    sync: SyncController = websocket.app.state.sync
    viewer = _viewer(session, name)
    await websocket.accept()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[FinanceSummary | None] = asyncio.Queue()

    def publish(summary: FinanceSummary | None) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, summary)

    unsubscribe = sync.subscribe(workspace_id, publish, viewer)

    async def forward() -> None:
        while True:
            await websocket.send_json(_summary_json(await queue.get()))

    sender = None
    try:
        await websocket.send_json(_summary_json(await run_in_threadpool(sync.summary, workspace_id, viewer)))
        sender = asyncio.create_task(forward())
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info(f"Live summary client left workspace {workspace_id}")
    finally:
        unsubscribe()
        if sender is not None:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError, WebSocketDisconnect, RuntimeError):
                await sender

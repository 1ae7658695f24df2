"""Main entrypoint and application factory for the Shared Finance API.

This module initializes the FastAPI application, configures logging, creates the workspace
item store and its tables, wires the categorizer and sync controller onto ``app.state``, and
exposes the Scalar API reference endpoint for interactive OpenAPI documentation. It also
includes the main entrypoint for running the app with Uvicorn.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy.exc import SQLAlchemyError

from shared_finance import __version__
from shared_finance.api.routes import router
from shared_finance.categorization import DEFAULT_CATEGORY_TABLE, KeywordCategorizer
from shared_finance.core.db import DBHelper, get_engine, init_db
from shared_finance.core.settings import get_settings
from shared_finance.core.utils import get_logger, setup_logging
from shared_finance.services.store import TransactionStore
from shared_finance.services.sync import SyncController

_settings = get_settings()
setup_logging(_settings.log_level, _settings.log_file)
logger = get_logger("shared-finance")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler to create the store tables and wire the services onto app.state."""
    settings = get_settings()
    engine = get_engine(settings.database_url)
    try:
        session_factory = init_db(engine)
    except SQLAlchemyError:
        logger.exception("Failed to create workspace tables")
        raise
    store = TransactionStore(session_factory)
    app.state.store = store
    app.state.db = DBHelper(session_factory)
    app.state.sync = SyncController(store)
    app.state.categories = DEFAULT_CATEGORY_TABLE
    app.state.categorizer = KeywordCategorizer(DEFAULT_CATEGORY_TABLE)
    logger.info(f"Workspace store ready at {engine.url}")
    yield
    engine.dispose()


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Shared Finance API",
    description="""
    The Shared Finance API lets several anonymous sessions upload bank statement CSVs into a shared
    workspace, categorizes every transaction by keyword, and aggregates all contributors into one summary.

    **Endpoints:**
    - `POST /workspaces/{workspace_id}/preview`: Parse and categorize a CSV without storing it.
    - `POST /workspaces/{workspace_id}/upload-csv`: Start a chunked background upload. Returns a `job_id`.
    - `GET /status/{job_id}`: Check the progress of an upload job.
    - `GET /workspaces/{workspace_id}/transactions`: List recent transactions.
    - `GET /workspaces/{workspace_id}/summary`: Balance, income and expenses per contributor.
    - `GET /workspaces/{workspace_id}/export`: Download all transactions as CSV.
    - `WS /workspaces/{workspace_id}/live`: Summary pushed after every change.
    - `GET /categories`: Category table.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version=__version__,
)
app.include_router(router)


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> JSONResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=_settings.server_host, port=_settings.server_port, reload=True)

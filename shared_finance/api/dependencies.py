"""FastAPI dependencies for DI (settings, store, job DB, sync controller, categories).

The concrete objects are created once in the application lifespan and stored on
``app.state``; these helpers hand them to endpoints so tests can swap any of them.
"""

from fastapi import Request

from shared_finance.categorization import BaseCategorizer, CategoryTable
from shared_finance.core.db import DBHelper
from shared_finance.core.settings import Settings
from shared_finance.core.settings import get_settings as _get_settings
from shared_finance.services.store import TransactionStore
from shared_finance.services.sync import SyncController


def get_settings() -> Settings:
    """Provide application settings for dependency injection."""
    return _get_settings()


def get_store(request: Request) -> TransactionStore:
    """Provide the workspace item store."""
    return request.app.state.store


def get_db_conn(request: Request) -> DBHelper:
    """Provide the job bookkeeping helper."""
    return request.app.state.db


def get_sync(request: Request) -> SyncController:
    """Provide the sync controller used to compute summaries."""
    return request.app.state.sync


def get_categorizer(request: Request) -> BaseCategorizer:
    """Provide the categorizer applied to uploaded statements."""
    return request.app.state.categorizer


def get_category_table(request: Request) -> CategoryTable:
    """Provide the category table used for display lookups."""
    return request.app.state.categories

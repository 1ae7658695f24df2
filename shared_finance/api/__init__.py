"""API package: provides FastAPI dependencies and route definitions for the application."""

from .dependencies import get_db_conn, get_settings, get_store, get_sync  # noqa: F401
from .routes import router  # noqa: F401

"""Shared fixtures: per-test SQLite databases for the store and the API."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shared_finance.core.db import DBHelper, get_engine, init_db
from shared_finance.core.models import Transaction
from shared_finance.services.store import TransactionStore


@pytest.fixture
def session_factory(tmp_path: Path) -> Iterator[sessionmaker]:
    """Session factory bound to a fresh SQLite file."""
    engine = get_engine(f"sqlite:///{tmp_path / 'store.db'}")
    factory = init_db(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def store(session_factory: sessionmaker) -> TransactionStore:
    """Workspace item store on a fresh database."""
    return TransactionStore(session_factory)


@pytest.fixture
def db(session_factory: sessionmaker) -> DBHelper:
    """Job bookkeeping helper on the same database as ``store``."""
    return DBHelper(session_factory)


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """API client whose lifespan creates its tables in a per-test SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setenv("UPLOAD_CHUNK_SIZE", "2")
    from main import app

    with TestClient(app) as test_client:
        yield test_client


def make_transaction(
    uploaded_by: str,
    amount: float,
    kind: str,
    category: str = "Other",
    txn_id: int = 1,
    date: str = "2024-03-01",
) -> Transaction:
    """Build a persisted-looking transaction for aggregation tests."""
    return Transaction(
        id=txn_id,
        workspace_id="ws-1",
        date=date,
        description=f"{category} purchase",
        amount=amount,
        category=category,
        type=kind,
        uploaded_by=uploaded_by,
        user_color=None,
        created_at="2024-03-01T00:00:00+00:00",
    )

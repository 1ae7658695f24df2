"""Database tables and session helpers for Shared Finance."""

from typing import Any

from sqlalchemy import JSON, Column, Integer, String, Text, create_engine, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class WorkspaceItem(Base):
    """An item appended to a workspace; only ``transaction`` items are read by the engine."""

    __tablename__ = "workspace_items"
    id = Column(Integer, primary_key=True, autoincrement=True)
    workspace_id = Column(String, nullable=False, index=True)
    item_type = Column(String, nullable=False)
    uploaded_by = Column(String, nullable=False)
    transaction_data = Column(JSON, nullable=False)
    content = Column(JSON, nullable=True)
    created_at = Column(String, nullable=False)


class UploadJob(Base):
    """Progress record of a background chunked upload."""

    __tablename__ = "upload_jobs"
    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False)
    uploaded_by = Column(String, nullable=False)
    status = Column(String, nullable=False)
    total = Column(Integer, nullable=False, default=0)
    uploaded = Column(Integer, nullable=False, default=0)
    created_at = Column(String, nullable=False)
    completed_at = Column(String, nullable=True)
    error = Column(Text, nullable=True)


def get_engine(url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine using the given or configured database URL."""
    if url is None:
        from shared_finance.core.settings import get_settings

        url = get_settings().database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


def init_db(engine: Engine) -> sessionmaker:
    """Create all tables and return a session factory bound to the engine."""
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class DBHelper:
    """Helper class for upload job bookkeeping using SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker) -> None:
        """Initialize the DBHelper with a SQLAlchemy session factory."""
        self.session_factory = session_factory

    def create_job(self, job_id: str, workspace_id: str, uploaded_by: str, total: int, created_at: str) -> None:
        """Insert a new job in ``pending`` state."""
        with self.session_factory() as session:
            session.add(
                UploadJob(
                    id=job_id,
                    workspace_id=workspace_id,
                    uploaded_by=uploaded_by,
                    status="pending",
                    total=total,
                    uploaded=0,
                    created_at=created_at,
                )
            )
            session.commit()

    def update_job(self, job_id: str, **values: Any) -> None:
        """Update columns of a job by its ID."""
        with self.session_factory() as session:
            session.execute(update(UploadJob).where(UploadJob.id == job_id).values(**values))
            session.commit()

    def get_job_status(self, job_id: str) -> dict[str, Any] | None:
        """Retrieve the status and progress of a job by its ID."""
        with self.session_factory() as session:
            job = session.execute(select(UploadJob).where(UploadJob.id == job_id)).scalar_one_or_none()
            if job is None:
                return None
            return _job_to_dict(job)


def _job_to_dict(job: UploadJob) -> dict[str, Any]:
    progress = 100.0 if job.total == 0 else job.uploaded / job.total * 100
    return {
        "status": job.status,
        "workspace_id": job.workspace_id,
        "uploaded_by": job.uploaded_by,
        "total": job.total,
        "uploaded": job.uploaded,
        "progress": progress,
        "created_at": job.created_at,
        "completed_at": job.completed_at,
        "error": job.error,
    }

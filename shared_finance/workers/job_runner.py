"""Background job orchestration for chunked statement uploads."""

from collections.abc import Sequence

from shared_finance.core.db import DBHelper
from shared_finance.core.errors import StoreWriteError
from shared_finance.core.models import WorkspaceItemPayload
from shared_finance.core.utils import get_logger, utcnow_iso
from shared_finance.services.store import TransactionStore
from shared_finance.services.uploader import upload_in_chunks

logger = get_logger("shared-finance.worker")


class JobRunner:
    """JobRunner writes a normalized batch to the store and tracks its progress."""

    def __init__(self, store: TransactionStore, db: DBHelper) -> None:
        """Initialize JobRunner with the item store and the job bookkeeping helper."""
        self.store = store
        self.db = db

    def run_job(self, job_id: str, items: Sequence[WorkspaceItemPayload], chunk_size: int) -> None:
        """Run an upload job; any failure leaves the job in ``error`` with the durable prefix counted."""
        logger.info(f"Starting job: {job_id}, items: {len(items)}, chunk size: {chunk_size}")
        self.db.update_job(job_id, status="in_progress")
        durable = 0

        def record_progress(uploaded: int, total: int) -> None:
            nonlocal durable
            durable = uploaded
            self.db.update_job(job_id, uploaded=uploaded)
            logger.info(f"[JOB {job_id}] {uploaded}/{total} uploaded")

        try:
            uploaded = upload_in_chunks(self.store, items, chunk_size, on_progress=record_progress)
        except StoreWriteError as exc:
            logger.exception(f"Error processing job {job_id}")
            self._fail(job_id, exc.uploaded, exc)
            return
        except Exception as exc:
            logger.exception(f"Error processing job {job_id}")
            self._fail(job_id, durable, exc)
            return
        self.db.update_job(job_id, status="completed", uploaded=uploaded, completed_at=utcnow_iso())
        logger.info(f"Completed job: {job_id}")

    def _fail(self, job_id: str, uploaded: int, exc: Exception) -> None:
        self.db.update_job(job_id, status="error", uploaded=uploaded, completed_at=utcnow_iso(), error=str(exc))


def run_upload_job(
    job_id: str,
    items: Sequence[WorkspaceItemPayload],
    store: TransactionStore,
    db: DBHelper,
    chunk_size: int,
) -> None:
    """Top-level function to run a job using JobRunner (for background tasks)."""
    runner = JobRunner(store, db)
    runner.run_job(job_id, items, chunk_size)

"""Chunked batch upload of normalized workspace items.

Chunks are written in order, one store call each. There is no rollback across chunks: when
a chunk fails, everything before it stays persisted and ``StoreWriteError.uploaded`` tells
the caller where to resume.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

from shared_finance.core.errors import StoreWriteError
from shared_finance.core.models import WorkspaceItemPayload
from shared_finance.core.utils import get_logger
from shared_finance.services.store import TransactionStore

logger = get_logger("shared-finance.uploader")

DEFAULT_CHUNK_SIZE = 10

T = TypeVar("T")
ProgressCallback = Callable[[int, int], None]


def iter_chunks(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size < 1:
        msg = f"Chunk size must be at least 1, got {size}"
        raise ValueError(msg)
    for start in range(0, len(items), size):
        yield items[start : start + size]


def upload_in_chunks(
    store: TransactionStore,
    items: Sequence[WorkspaceItemPayload],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    start: int = 0,
    on_progress: ProgressCallback | None = None,
) -> int:
    """Write ``items[start:]`` chunk by chunk and return the number of items persisted overall."""
    total = len(items)
    uploaded = start
    for chunk in iter_chunks(items[start:], chunk_size):
        try:
            store.insert_items(chunk)
        except StoreWriteError as exc:
            logger.error(f"Chunk write failed after {uploaded}/{total} items")
            msg = f"Upload stopped after {uploaded} of {total} items: {exc}"
            raise StoreWriteError(msg, uploaded=uploaded, total=total) from exc
        uploaded += len(chunk)
        logger.info(f"Uploaded {uploaded}/{total} items")
        if on_progress is not None:
            on_progress(uploaded, total)
    return uploaded

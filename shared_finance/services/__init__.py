"""Services package: parsing, normalization, aggregation, storage, upload, and sync."""

from .aggregator import aggregate, resolve_contributor, seed_contributors  # noqa: F401
from .colors import color_for, format_currency  # noqa: F401
from .normalizer import build_workspace_item, normalize_record, normalize_statement  # noqa: F401
from .parser import StatementParser, parse_statement  # noqa: F401
from .store import TransactionStore  # noqa: F401
from .sync import SyncController  # noqa: F401
from .uploader import iter_chunks, upload_in_chunks  # noqa: F401

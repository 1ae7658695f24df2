"""Core package: provides models, database helpers, settings, errors, and shared utilities."""

from .db import DBHelper, get_engine, init_db  # noqa: F401
from .errors import AggregationError, FinanceEngineError, ParseError, StoreWriteError  # noqa: F401
from .models import Contributor, FinanceSummary, JobStatus, RawRecord, Transaction, TransactionData  # noqa: F401
from .settings import Settings, get_settings  # noqa: F401
from .utils import get_logger, setup_logging  # noqa: F401

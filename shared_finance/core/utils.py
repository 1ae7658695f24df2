"""Shared utility functions for the Shared Finance project."""

import logging
from datetime import UTC, datetime
from pathlib import Path

import colorlog

ROOT_LOGGER_NAME = "shared-finance"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _root_logger() -> logging.Logger:
    """Return the package root logger, attaching the colorized console handler once."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s" + LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger with a colorized format for the project.

    Child loggers (``shared-finance.<component>``) carry no handlers of their own and
    propagate to the package root, so a file handler added by ``setup_logging`` sees them.
    """
    root = _root_logger()
    if name == ROOT_LOGGER_NAME:
        return root
    return logging.getLogger(name)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the package root logger, optionally mirroring records to a plain-text file."""
    logger = _root_logger()
    logger.setLevel(level.upper())
    if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        ensure_dir(Path(log_file).parent)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    return logger


def ensure_dir(path: str | Path) -> None:
    """Ensure a directory exists (like mkdir -p)."""
    Path(path).mkdir(parents=True, exist_ok=True)


def safe_cast(val: object, to_type: type, default: object = None) -> object:
    """Safely cast a value to a type, returning default on failure."""
    try:
        return to_type(val)
    except (ValueError, TypeError):
        return default


def utcnow_iso() -> str:
    """Get the current UTC time as an ISO8601 string."""
    return datetime.now(UTC).isoformat()

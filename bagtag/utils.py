"""
Shared utilities for the Bagtag Tracker.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging
import os
import tempfile
import uuid
from datetime import date, datetime
from pathlib import Path

from bagtag.config import DATE_FORMAT


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Identifiers ---
def generate_id() -> str:
    """Return a random, collision-resistant identifier (uuid4 hex)."""
    return uuid.uuid4().hex


# --- Dates ---
def format_date(value: date) -> str:
    """Serialize a calendar date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    return datetime.strptime(value, DATE_FORMAT).date()


# --- File Operations ---
def atomic_write_text(text: str, path: Path) -> None:
    """
    Write text to a file atomically using a temporary file.

    This prevents data corruption if the write is interrupted.

    Args:
        text: Content to write (UTF-8)
        path: Destination path
    """
    logger = setup_logging(__name__)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file first
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            delete=False,
            suffix='.tmp',
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp.write(text)
            tmp_path = Path(tmp.name)

        # Atomic rename to final destination
        os.replace(tmp_path, path)
        logger.debug(f"Atomically wrote {len(text)} characters to {path}")

    except Exception:
        # Clean up temp file if it exists
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


__all__ = [
    # Logging
    'setup_logging',
    # Identifiers
    'generate_id',
    # Dates
    'format_date',
    'parse_date',
    # File operations
    'atomic_write_text',
]

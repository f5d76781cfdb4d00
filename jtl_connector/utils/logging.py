"""Logging helpers for the JTL connector."""

from __future__ import annotations

import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def setup_logging() -> None:
    """Configure logging from environment variables.

    Loads .env first, then reads JTL_LOG_LEVEL and JTL_LOG_FILE and sets up
    the root logger.
    """
    loaded = load_dotenv()
    if not loaded:
        package_dir = Path(__file__).resolve().parent.parent
        env_path = package_dir.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)

    log_level = os.getenv("JTL_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
    )

    log_file = os.getenv("JTL_LOG_FILE")
    if log_file:
        try:
            handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3)
        except OSError as exc:
            logging.getLogger("jtl_connector").warning(
                "Cannot open log file %s: %s", log_file, exc
            )
        else:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logging.getLogger().addHandler(handler)


def truncate(text: str, max_len: int = 2000) -> str:
    """Truncate text to max_len with a suffix marker."""
    if text is None:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "... [truncated]"

"""Centralized logging configuration for trello2md.

Logs go to stderr so that stdout only carries the exported Markdown.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Set up the trello2md logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to WARNING.
               Can be overridden with TRELLO2MD_LOG_LEVEL environment variable.
        log_file: Optional path of a rotating log file.
                  Can be set with TRELLO2MD_LOG_FILE environment variable.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.

    Returns:
        The root trello2md logger.
    """
    if level is None:
        level = os.environ.get("TRELLO2MD_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.WARNING)

    if log_file is None:
        log_file = os.environ.get("TRELLO2MD_LOG_FILE") or None

    logger = logging.getLogger("trello2md")
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("trello2md logging initialized (level=%s, file=%s)", level, log_file)
    return logger


def sanitize_for_log(text: str) -> str:
    """Redact Trello credentials from text.

    Args:
        text: Text that may contain a key or token, e.g. a request URL.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"key=[^&\s]+", "key=[REDACTED]"),
        (r"token=[^&\s]+", "token=[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result

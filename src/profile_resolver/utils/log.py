"""Logging configuration for the Profile Resolver."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "profile_resolver"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Set up the package logger with a rich console handler.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))

    # Avoid duplicate handlers
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(console_handler)

    if log_file and not _has_file_handler(logger, log_file):
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    return logger


def _has_file_handler(logger: logging.Logger, log_file: str) -> bool:
    target = str(Path(log_file).resolve())
    return any(
        isinstance(h, RotatingFileHandler) and str(Path(h.baseFilename).resolve()) == target
        for h in logger.handlers
    )

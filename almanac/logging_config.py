"""
Centralized logging configuration for Almanac.

Writes debug logging for calendar operations to a rotating file.
Log file: <log_dir>/almanac.log (with rotation)

Usage:
    from almanac.logging_config import setup_logging
    setup_logging(log_dir)  # Call once at startup

All almanac.* loggers will write DEBUG to file, WARNING+ to console.
"""

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path


# Global configuration
LOG_FILE_NAME = "almanac.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files

_logging_initialized = False


def setup_logging(
    log_dir: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for Almanac.

    Args:
        log_dir: Directory the log file goes in (created if missing)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    log_path_dir = Path(log_dir)
    log_path_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_path_dir / LOG_FILE_NAME

    root_logger = logging.getLogger("almanac")
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-22s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"Almanac logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger configured as child of the almanac logger
    """
    if name == "almanac" or name.startswith("almanac."):
        return logging.getLogger(name)
    return logging.getLogger(f"almanac.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_date_change(
    logger: logging.Logger,
    old: datetime,
    new: datetime,
    warp: bool = False,
) -> None:
    """Log the calendar's current time moving."""
    warp_str = " | WARP" if warp else ""
    logger.debug(f"DATE | {old.isoformat()} -> {new.isoformat()}{warp_str}")


def log_period_change(
    logger: logging.Logger,
    old_period: str | None,
    new_period: str | None,
    when: datetime | None = None,
) -> None:
    """Log a period transition."""
    when_str = f" | at={when.isoformat()}" if when else ""
    logger.info(f"PERIOD | {old_period} -> {new_period}{when_str}")


def log_cache(
    logger: logging.Logger,
    action: str,
    key: tuple[int, int] | None = None,
    details: str | None = None,
) -> None:
    """Log derived-value cache activity (build, invalidate)."""
    key_str = f" | day={key[0]} year={key[1]}" if key else ""
    details_str = f" | {details}" if details else ""
    logger.debug(f"CACHE | {action}{key_str}{details_str}")


def log_cycle(
    logger: logging.Logger,
    cycle: str,
    action: str,
    details: str | None = None,
) -> None:
    """Log cycle configuration activity."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"CYCLE | {cycle} | {action}{details_str}")

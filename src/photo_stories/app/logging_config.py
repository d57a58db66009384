"""Logging configuration for the photo-stories viewer.

Provides session logging to file without interfering with TUI display.
"""

import logging
from pathlib import Path


def _rotate_log_if_needed(log_file: Path, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5) -> None:
    """Rotate log file on startup if it exceeds max size.

    Args:
        log_file: Path to the log file
        max_bytes: Maximum file size before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
    """
    if not log_file.exists():
        return

    if log_file.stat().st_size < max_bytes:
        return

    # Shift existing backups (4 -> 5, 3 -> 4, ...), dropping the oldest
    for i in range(backup_count - 1, 0, -1):
        source = log_file.parent / f"{log_file.name}.{i}"
        dest = log_file.parent / f"{log_file.name}.{i + 1}"

        if i == backup_count - 1 and dest.exists():
            dest.unlink()

        if source.exists():
            source.rename(dest)

    backup = log_file.parent / f"{log_file.name}.1"
    log_file.rename(backup)


def setup_logging(log_dir: Path, level: int = logging.DEBUG) -> logging.Logger:
    """Set up application logging to file with startup rotation.

    Args:
        log_dir: Directory to store log files
        level: Minimum level written to the file

    Returns:
        Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "photo_stories.log"
    _rotate_log_if_needed(log_file)

    logger = logging.getLogger("photo_stories")
    logger.setLevel(level)
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)

    logger.addHandler(file_handler)

    logger.info("=" * 80)
    logger.info("PHOTO STORIES SESSION STARTED")
    logger.info(f"Log file: {log_file}")
    logger.info("=" * 80)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Module names under the photo_stories package already sit below the
    session logger; anything else is nested under it.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    if name == "photo_stories" or name.startswith("photo_stories."):
        return logging.getLogger(name)
    return logging.getLogger(f"photo_stories.{name}")

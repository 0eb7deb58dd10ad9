# logging_config.py
"""Logging setup via loguru.

The terminal belongs to the UI while the app runs, so logs only go to a
rotating file.
"""
from pathlib import Path

from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("imdb-tui.log"),
    rotation_size: str = "1 MB",
    retention_count: int = 3,
) -> None:
    """Replaces loguru's stderr handler with a single rotating file sink.

    Args:
        log_level: Minimum level written to the file (DEBUG, INFO, WARNING, ERROR)
        log_file: Path of the log file, its directory is created if needed
        rotation_size: Size after which the file is rotated (e.g. "1 MB")
        retention_count: Number of rotated files to keep
    """
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message} | {extra}",
        rotation=rotation_size,
        retention=retention_count,
        enqueue=True,
    )

    logger.debug("Logging configured", log_file=str(log_file), rotation=rotation_size)

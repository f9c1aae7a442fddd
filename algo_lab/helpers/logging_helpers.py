"""Logging helpers for Algo Lab."""

import sys
from pathlib import Path

from loguru import logger

from algo_lab.core.constants import LOGS_FPATH

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"


def configure_logger(source: str, logs_dir: Path = LOGS_FPATH) -> Path:
    """Configure Loguru logging for an entrypoint.

    Returns the templated path of the file sink.
    """
    # Clear any previously added handlers
    logger.remove()

    # Console handler: ERROR and above
    logger.add(sink=sys.stderr, level="ERROR", format=LOG_FORMAT)

    # File handler: DEBUG+, rotated daily, keep 7 days, zipped
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"{source}_{'{time:YYYYMMDD}'}.log"

    logger.add(
        sink=str(log_path),
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )

    logger.info(
        f"Logger configured for source '{source}'. "
        f"Sinks: stderr (level=ERROR+), file (level=DEBUG+) at '{log_path}'."
    )
    return log_path


def add_console_sink(verbosity: int) -> None:
    """Add a console side channel: 1 for INFO, 2+ for DEBUG."""
    if verbosity <= 0:
        return
    level = "DEBUG" if verbosity > 1 else "INFO"
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>",
    )

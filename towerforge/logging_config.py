"""
Logging for Towerforge runs.

Every collapse is written to a rotating log file at DEBUG, so a finished
tower can be replayed step by step from <data_root>/towerforge.log.
Contradictions also reach the console at WARNING.

Usage:
    from towerforge.logging_config import get_logger, setup_logging
    setup_logging(data_root)  # once, from the CLI
    logger = get_logger(__name__)  # in each module
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOGGER_NAME = "towerforge"
LOG_FILE_NAME = "towerforge.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5

FILE_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-40s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)-30s | %(message)s"


def _file_handler(log_path: Path, level: int) -> logging.Handler:
    handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    return handler


def setup_logging(
    data_root: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Send towerforge.* records to the run log and the console.

    Calling it again replaces the handlers, so tests and repeated CLI runs
    can point the log somewhere else.

    Args:
        data_root: Directory for towerforge.log (created if missing)
        log_level: Level written to the file (default: DEBUG, every collapse)
        console_level: Level shown on stderr (default: WARNING, contradictions)

    Returns:
        Path to the log file
    """
    data_path = Path(data_root)
    data_path.mkdir(parents=True, exist_ok=True)
    log_path = data_path / LOG_FILE_NAME

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)

    for handler in list(package_logger.handlers):
        handler.close()
        package_logger.removeHandler(handler)

    package_logger.addHandler(_file_handler(log_path, log_level))
    package_logger.addHandler(_console_handler(console_level))

    package_logger.info(f"Logging to {log_path.absolute()}")
    return log_path


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, placed under the towerforge namespace."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_collapse(
    logger: logging.Logger,
    step: int,
    position: tuple[int, int, int],
    tile_id: str,
    candidates: int | None = None,
) -> None:
    """Log a cell being collapsed to a single tile."""
    candidates_str = f" | candidates={candidates}" if candidates is not None else ""
    logger.debug(f"STEP {step:05d} | COLLAPSE | {tuple(position)} -> {tile_id}{candidates_str}")


def log_contradiction(
    logger: logging.Logger,
    step: int,
    kind: str,
    position: tuple[int, int, int],
    details: str | None = None,
) -> None:
    """Log a cell whose domain became empty."""
    details_str = f" | {details}" if details else ""
    logger.warning(f"STEP {step:05d} | CONTRADICTION | {kind} | {tuple(position)}{details_str}")


def log_run(
    logger: logging.Logger,
    status: str,
    details: str | None = None,
) -> None:
    """Log generation run lifecycle (start, finish)."""
    details_str = f" | {details}" if details else ""
    logger.info(f"RUN | {status}{details_str}")

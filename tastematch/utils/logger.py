"""Logging setup for TasteMatch.

Every module logger writes colored records to the console (colorlog) and
plain records to a rotating ``tastematch.log``. The file lives in
``TASTEMATCH_LOG_DIR`` when set, otherwise in ``logs/`` at the project root.
"""

import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, List, Optional

import colorlog


LOG_DIR_ENV = "TASTEMATCH_LOG_DIR"
LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FILE_NAME = "tastematch.log"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

CONSOLE_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(cyan)s%(name)s%(reset)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "white",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    return logging.getLevelName(name) if name in LEVEL_COLORS else logging.INFO


def _resolve_log_dir(log_dir: Optional[Path]) -> Path:
    if log_dir is not None:
        return Path(log_dir)
    from_env = os.environ.get(LOG_DIR_ENV)
    if from_env:
        return Path(from_env)
    return Path(__file__).resolve().parents[2] / "logs"


def _build_handlers(level: int, log_dir: Path) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(colorlog.ColoredFormatter(CONSOLE_FORMAT, datefmt=TIME_FORMAT, log_colors=LEVEL_COLORS))

    log_dir.mkdir(parents=True, exist_ok=True)
    rotating = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=TIME_FORMAT))

    for handler in (console, rotating):
        handler.setLevel(level)
    return [console, rotating]


def get_logger(name: str, log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Return the logger for ``name``, attaching handlers on first use.

    Args:
        name: Logger name, usually ``__name__``
        log_dir: Directory of the log file (see module docstring for the default)
        level: Level name; falls back to the LOG_LEVEL env var, then INFO.
               Pass ``AppConfig.log_level`` for config-driven levels.

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    for handler in _build_handlers(numeric_level, _resolve_log_dir(log_dir)):
        logger.addHandler(handler)
    logger.propagate = False

    return logger


@contextmanager
def log_execution_time(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log how long the wrapped block took, at debug level.

    Usage:
        with log_execution_time(logger, "scoring 120 users"):
            scores = batch_cosine_similarity(vector, matrix)
    """
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"{operation} took {elapsed_ms:.1f} ms")


def set_log_level(logger: logging.Logger, level: str) -> None:
    """Switch a logger and its handlers to ``level``."""
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)
    logger.info(f"Log level set to {logging.getLevelName(numeric_level)}")


def log_exception(logger: logging.Logger, operation: str, exception: Exception) -> None:
    """Log a failed operation with its traceback."""
    logger.error(f"{operation} failed: {exception}", exc_info=exception)


def apply_log_level(level: str, prefix: str = "tastematch") -> None:
    """Switch every configured logger under ``prefix`` to ``level``.

    Used by ``build_engine`` to honour ``AppConfig.log_level`` for the
    module loggers created at import time.
    """
    numeric_level = _resolve_level(level)
    for name in list(logging.root.manager.loggerDict):
        if name != prefix and not name.startswith(f"{prefix}."):
            continue
        logger = logging.getLogger(name)
        if not logger.handlers:
            continue
        logger.setLevel(numeric_level)
        for handler in logger.handlers:
            handler.setLevel(numeric_level)

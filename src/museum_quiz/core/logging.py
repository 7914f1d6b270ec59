"""JSON-lines logging for quiz runs.

Every module logs through ``logging.getLogger(__name__)`` below the
``museum_quiz`` package logger. :func:`configure_logging` attaches one
rotating file handler to that logger (and a stderr handler with
``verbose``) so a run leaves ``logs/museum_quiz.log`` behind.
"""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

PACKAGE_LOGGER = "museum_quiz"
LOG_FILENAME = "museum_quiz.log"
MAX_BYTES = 512 * 1024
BACKUP_COUNT = 2

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields go under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS
        }
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(
    log_dir: Path,
    *,
    level: str = "INFO",
    verbose: bool = False,
) -> Path:
    """Route ``museum_quiz`` records to a JSON log file and return its path.

    ``level`` applies to the file; ``verbose`` forces DEBUG and mirrors
    records to stderr. Calling again replaces the previous handlers.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_museum_quiz", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    file_handler = _open_file_handler(log_dir)
    file_handler.setLevel(logging.DEBUG if verbose else _level_number(level))
    file_handler.setFormatter(JsonLogFormatter())
    _attach(logger, file_handler)

    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        _attach(logger, console)

    return Path(file_handler.baseFilename)


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    handler._museum_quiz = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def _open_file_handler(log_dir: Path) -> RotatingFileHandler:
    for directory in (log_dir, _fallback_log_dir()):
        try:
            directory.mkdir(parents=True, exist_ok=True)
            return RotatingFileHandler(
                directory / LOG_FILENAME,
                maxBytes=MAX_BYTES,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
        except PermissionError:
            continue
    raise PermissionError(
        f"Cannot write {LOG_FILENAME} in {log_dir} or {_fallback_log_dir()}"
    )


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return repr(value)


def _fallback_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "museum-quiz-logs"

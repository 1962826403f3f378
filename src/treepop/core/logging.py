"""Log file and console setup for treepop runs."""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

__all__ = [
    "TREE_FIELDS",
    "JsonLogFormatter",
    "ConsoleFormatter",
    "configure_logger",
]

# Fields the materializer and CLI attach to records through ``extra``.
TREE_FIELDS: tuple[str, ...] = (
    "root",
    "path",
    "entry_count",
    "description",
    "error",
)

_MAX_BYTES = 1024 * 1024
_BACKUP_COUNT = 2
_MARKER = "_treepop_handler"


class JsonLogFormatter(logging.Formatter):
    """Emit one JSON object per record with the tree fields flattened in."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_tree_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


class ConsoleFormatter(logging.Formatter):
    """Render ``LEVEL message key=value`` lines for stderr."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        parts = [record.levelname, record.getMessage()]
        parts.extend(
            f"{key}={value}" for key, value in _tree_fields(record).items()
        )
        return " ".join(parts)


def configure_logger(
    name: str,
    *,
    log_dir: Path,
    level: str = "INFO",
    verbose: bool = False,
) -> tuple[logging.Logger, Path]:
    """Attach a JSON log file (and a stderr echo when ``verbose``) to ``name``.

    The file is ``<last name segment>.log`` inside ``log_dir``; when that
    directory is not writable the platform temp directory is used instead.
    Calling again replaces the handlers installed by a previous call.
    """

    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    _remove_handlers(logger)

    log_path = _prepare_log_path(log_dir, f"{name.rsplit('.', 1)[-1]}.log")
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG if verbose else _coerce_level(level))
    file_handler.setFormatter(JsonLogFormatter())
    _install(logger, file_handler)

    if verbose:
        console = logging.StreamHandler(stream=sys.stderr)
        console.setLevel(logging.DEBUG)
        console.setFormatter(ConsoleFormatter())
        _install(logger, console)

    return logger, log_path


def _tree_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in TREE_FIELDS
        if getattr(record, key, None) is not None
    }


def _coerce_level(level: str) -> int:
    numeric = logging.getLevelName(level.strip().upper())
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _MARKER, True)
    logger.addHandler(handler)


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _MARKER, False):
            logger.removeHandler(handler)
            handler.close()


def _prepare_log_path(log_dir: Path, filename: str) -> Path:
    for directory in (log_dir, _fallback_log_dir()):
        path = directory / filename
        try:
            directory.mkdir(mode=0o700, parents=True, exist_ok=True)
            path.touch(mode=0o600, exist_ok=True)
        except PermissionError:
            continue
        return path
    raise PermissionError(f"No writable log directory for {filename}")


def _fallback_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "treepop-logs"

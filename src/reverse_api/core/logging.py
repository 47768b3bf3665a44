"""Loguru logging configuration.

Request-level records (matched lookups, failed queries) are bound with
``json_output=True`` and go to a serialized JSON sink so they can be
shipped to a log pipeline.  Everything else is written as text.  With
``json_logs`` enabled every record is serialized.
"""

import sys
from pathlib import Path
from typing import Any, TextIO

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE = "reverse-api.log"


def _is_structured(record: dict[str, Any]) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    *,
    json_logs: bool = False,
    sink: TextIO | None = None,
) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for a text log file, rotated every
            24 hours and retained 7 days.
        json_logs: Serialize every record instead of only bound ones.
        sink: Stream for console output.  Defaults to stderr.
    """
    level = log_level.upper()
    stream = sink if sink is not None else sys.stderr

    logger.remove()
    if json_logs:
        logger.add(stream, level=level, serialize=True)
    else:
        logger.add(
            stream,
            level=level,
            format=_LOG_FORMAT,
            filter=lambda record: not _is_structured(record),
        )
        logger.add(stream, level=level, serialize=True, filter=_is_structured)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / _LOG_FILE,
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )

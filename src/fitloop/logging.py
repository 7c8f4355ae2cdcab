"""Logging setup for fitloop.

FITLOOP_LOG_FORMAT picks "text" or "json" output and FITLOOP_LOG_LEVEL the
threshold. Log calls that concern a user's training loop attach its position
with ``extra=session_extra(...)`` so both formats can show who and where.
"""

import json
import logging
import sys
from datetime import datetime, timezone

LOG_FORMATS = ("text", "json")
EXTRA_PREFIX = "fitloop_"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s%(session)s"

# Libraries that are chatty below WARNING
QUIET_LOGGERS = ("aiosqlite", "uvicorn.access")


def session_extra(
    user_id: str, cycle_number: int | None = None, session_number: int | None = None
) -> dict:
    """Build the ``extra`` mapping for a log call about one user's cycle."""
    extra = {f"{EXTRA_PREFIX}user_id": user_id}
    if cycle_number is not None:
        extra[f"{EXTRA_PREFIX}cycle_number"] = cycle_number
    if session_number is not None:
        extra[f"{EXTRA_PREFIX}session_number"] = session_number
    return extra


def _session_fields(record: logging.LogRecord) -> dict:
    return {
        key[len(EXTRA_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, session fields under ``session``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        session = _session_fields(record)
        if session:
            entry["session"] = session
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain lines with a ``[user_id=... session_number=...]`` suffix."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        session = _session_fields(record)
        record.session = (
            " [" + " ".join(f"{k}={v}" for k, v in session.items()) + "]" if session else ""
        )
        return super().format(record)


def resolve_level(level: int | str) -> int:
    """Turn a level name or number into a number, falling back to WARNING."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(log_format: str = "text", level: int | str = logging.WARNING) -> None:
    """Point the root logger at stderr using the chosen format.

    Calling this again replaces the previous handler.
    """
    if log_format not in LOG_FORMATS:
        log_format = "text"
    level = resolve_level(level)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

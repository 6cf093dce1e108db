"""Centralized logging configuration using Loguru.

Usage:
    from gqlcompose.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if GQLCOMPOSE_LOG_LEVEL=DEBUG

Environment Variables:
    GQLCOMPOSE_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    GQLCOMPOSE_LOG_JSON: 0|1 (default: 0, human-readable)
    GQLCOMPOSE_LOG_FILE: path to an NDJSON log file (optional)
"""

import json
import os
import sys

from loguru import logger

from .constants import ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL

# Remove default handler
logger.remove()

# Numeric levels used in NDJSON records
JSON_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)


def _to_json(record) -> str:
    """Render a loguru record as a single NDJSON line."""
    payload = {
        "level": JSON_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }
    for key, value in record["extra"].items():
        payload[key] = value
    if record["exception"]:
        payload["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }
    return json.dumps(payload, default=str)


def json_sink(message):
    """Write records as NDJSON to stdout.

    Never call logger.* inside a sink - causes infinite recursion.
    """
    sys.stdout.write(_to_json(message.record) + "\n")
    sys.stdout.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

_console_handler_id: int | None = None


def _add_console_handler(level: str) -> int:
    if _json_mode:
        return logger.add(json_sink, level=level, colorize=False)
    return logger.add(
        sys.stderr,
        level=level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )


_console_handler_id = _add_console_handler(_log_level)

if _log_file:
    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_json(message.record) + "\n")

    logger.add(_file_sink, level="DEBUG")


def set_level(level: str) -> None:
    """Replace the console handler with one at the given level.

    Used by ``--verbose``; the optional file handler is left untouched.
    """
    global _console_handler_id, _log_level

    if _console_handler_id is not None:
        try:
            logger.remove(_console_handler_id)
        except ValueError:
            pass  # Already removed
    _log_level = level.upper()
    _console_handler_id = _add_console_handler(_log_level)


__all__ = ["logger", "set_level"]

"""Centralized logging configuration using Loguru.

Every module logs through the single loguru logger exported here:

Usage:
    from bundlesqueeze.utils.logging import logger
    logger.debug("Indexed {count} modules", count=12)

Environment Variables:
    BUNDLESQUEEZE_LOG_LEVEL: TRACE|DEBUG|INFO|WARNING|ERROR (default: WARNING)
    BUNDLESQUEEZE_LOG_JSON: 0|1 (default: 0, human-readable)
    BUNDLESQUEEZE_LOG_FILE: path to an NDJSON log file (optional)

The CLI prints its own results through rich, so the console handler only
shows warnings and errors unless the level is lowered.
"""

import json
import os
import sys
from pathlib import Path

from loguru import logger

# Remove default handler
logger.remove()

_log_level = os.environ.get("BUNDLESQUEEZE_LOG_LEVEL", "WARNING").upper()
_json_mode = os.environ.get("BUNDLESQUEEZE_LOG_JSON", "0") == "1"
_log_file = os.environ.get("BUNDLESQUEEZE_LOG_FILE")


def _to_ndjson(record) -> str:
    """Render a loguru record as a single JSON line."""
    payload = {
        "level": record["level"].name,
        "time": record["time"].isoformat(),
        "msg": record["message"],
        "module": record["name"],
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


def ndjson_sink(message):
    """Write one NDJSON line per record to stderr.

    Never call logger.* inside a sink - it recurses.
    """
    sys.stderr.write(_to_ndjson(message.record) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(ndjson_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:
    def _file_ndjson_sink(message):
        """Append the NDJSON rendering of a record to the configured file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_ndjson(message.record) + "\n")

    logger.add(_file_ndjson_sink, level="DEBUG")


def configure_file_logging(log_dir: Path, level: str = "DEBUG") -> int:
    """Add a rotating, human-readable file handler.

    Args:
        log_dir: Directory for the log file (e.g., Path(".squeeze"))
        level: Minimum log level for file output

    Returns:
        The loguru handler id, so callers can remove it again.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "bundlesqueeze.log"

    return logger.add(
        log_file,
        rotation="10 MB",
        retention="7 days",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )


__all__ = [
    "logger",
    "configure_file_logging",
    "ndjson_sink",
]

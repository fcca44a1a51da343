"""Diagnostics: structured JSON logging for the memefx CLI.

The library itself never configures logging; callers (the CLI, or an
embedding application) opt in with ``setup_structured_logging``.
"""

import datetime
import json
import logging
import logging.handlers
import os


logger = logging.getLogger(__name__)

LOG_FILENAME = "memefx.log"


def _validate_log_dir(env_dir: str) -> str:
    """Validate MEMEFX_LOG_DIR is under ~/.memefx. Returns safe path."""
    default = os.path.expanduser("~/.memefx/logs")
    if env_dir:
        resolved = os.path.realpath(env_dir)
        allowed = os.path.realpath(os.path.expanduser("~/.memefx"))
        if not resolved.startswith(allowed + os.sep) and resolved != allowed:
            logger.warning("MEMEFX_LOG_DIR outside allowed prefix, using default")
            return default
        return resolved
    return default


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            log_entry["exception"] = {
                "type": type(exc).__name__,
                "traceback": self.formatException(record.exc_info),
            }
            # memefx errors carry their kind label
            kind = getattr(exc, "name", None)
            if isinstance(kind, str):
                log_entry["exception"]["kind"] = kind
        return json.dumps(log_entry)


def setup_structured_logging(log_dir: str | None = None) -> str:
    """Configure structured JSON logging with rotation.

    Args:
        log_dir: Override log directory (validated against ~/.memefx prefix).

    Returns:
        The directory logs are written to.
    """
    resolved_dir = _validate_log_dir(log_dir or os.environ.get("MEMEFX_LOG_DIR", ""))
    os.makedirs(resolved_dir, mode=0o700, exist_ok=True)

    log_path = os.path.join(resolved_dir, LOG_FILENAME)
    log_level = os.environ.get("MEMEFX_LOG_LEVEL", "INFO").upper()

    # Rotation bounds disk use: 10MB max, 7 backups
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10_000_000,
        backupCount=7,
    )
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level, logging.INFO))
    root.addHandler(handler)

    return resolved_dir


def init_diagnostics() -> str:
    """Initialize logging for the CLI. Returns the log directory."""
    log_dir = setup_structured_logging()
    logger.info("Diagnostics initialized: logging=%s", log_dir)
    return log_dir

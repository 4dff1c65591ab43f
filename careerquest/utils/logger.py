import logging
import json
import os
import sys
from pathlib import Path
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from careerquest.config import get_settings


# Fields passed via logger.info("msg", extra={...}) that end up in the JSON entry
EXTRA_FIELDS = (
    "method", "path", "status", "duration_ms", "client_ip", "error", "error_type",
    "service", "operation", "upstream_path", "upstream_status", "career_code",
    "source", "saved_id",
)


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter with correlation ID injection"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if getattr(record, "correlation_id", None):
            entry["correlation_id"] = record.correlation_id
        if getattr(record, "user_id", None):
            entry["user_id"] = record.user_id

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.levelno >= logging.WARNING:
            entry["location"] = f"{record.filename}:{record.lineno}"

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable formatter for local development"""

    def __init__(self):
        super().__init__(
            '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
            datefmt='%H:%M:%S'
        )


class CorrelationFilter(logging.Filter):
    """Copies the request correlation ID onto every record emitted during a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Imported lazily: the middleware module imports this one
        from careerquest.middleware.correlation import get_correlation_id, get_request_user_id

        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        if not getattr(record, "user_id", None):
            record.user_id = get_request_user_id()
        return True


def _use_json() -> bool:
    return os.getenv("LOG_FORMAT") == "json" or bool(os.getenv("RAILWAY_ENVIRONMENT"))


def setup_logger(name: str = "careerquest", level: str = None) -> logging.Logger:
    """
    Setup the application logger.

    JSON to stdout when LOG_FORMAT=json (log drains), human-readable otherwise,
    plus a rotating JSON file under logs/ for local development.
    Child loggers ("careerquest.services.x") propagate to this one.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    if level is None:
        level = get_settings().log_level
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.addFilter(CorrelationFilter())
    console_handler.setFormatter(StructuredFormatter() if _use_json() else SimpleFormatter())
    logger.addHandler(console_handler)

    if not _use_json() and os.getenv("LOG_TO_FILE", "true").lower() == "true":
        try:
            log_dir = Path("logs")
            log_dir.mkdir(exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / "careerquest.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.addFilter(CorrelationFilter())
            file_handler.setFormatter(StructuredFormatter())
            logger.addHandler(file_handler)
        except OSError as e:
            # Read-only filesystems in some deployments
            logger.warning(f"Could not setup file logging: {e}")

    return logger


logger = setup_logger()


def get_logger(name: str = None) -> logging.Logger:
    """Get the application logger, or a child of it ("careerquest.<name>")"""
    if name:
        if not name.startswith("careerquest"):
            name = f"careerquest.{name}"
        return logging.getLogger(name)
    return logger

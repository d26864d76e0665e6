"""
Logging for the sidebar backend.

JSON lines in production, one readable line per record in development. Every
record carries the request id set by ``RequestIdMiddleware``. Fields passed
through ``extra=`` whose name marks them as a credential (passwords, API keys,
tokens) are redacted before they reach a handler.

Usage:
    from sidebar.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("User registered", extra={"email": user.email})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

REDACTED = "[redacted]"
_SECRET_MARKERS = ("password", "api_key", "token", "secret")

# Chatty client libraries; their request lines would echo upstream URLs per call
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "anthropic")

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "request_id"}


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def is_secret_field(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


class RequestIdFilter(logging.Filter):
    """Stamp request_id on the record and blank out credential-like extras."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"  # type: ignore[attr-defined]
        for key in list(record.__dict__):
            if key not in _STANDARD_ATTRS and is_secret_field(key):
                record.__dict__[key] = REDACTED
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        req_id = getattr(record, "request_id", "-")
        if req_id != "-":
            log_obj["request_id"] = req_id
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or value is None:
                continue
            try:
                json.dumps(value)
                log_obj[key] = value
            except (TypeError, ValueError):
                log_obj[key] = str(value)

        return json.dumps(log_obj)


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Install the single root handler. Safe to call again on reload.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: 'production' selects JSON output
        debug: If True, use DEBUG level regardless of log_level
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    if environment == "production":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s %(message)s",
            datefmt="%H:%M:%S",
        ))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

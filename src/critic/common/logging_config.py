"""
Logging for the Critic service.

Every line names the request it belongs to: the HTTP middleware generates a
request id, stores it in ``request_id_var`` and the handler filter stamps it
onto each record, so pipeline logs and uvicorn access logs line up.
"""

import logging
import sys
import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = (
    "%(asctime)s.%(msecs)03d | %(levelname)-7s | [%(request_id)-8s] %(short_name)s | %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Probed by orchestrators every few seconds
HEALTH_PATHS = frozenset({"/health", "/health/", "/health/live"})

QUIET_LOGGERS = ("httpcore", "httpx", "openai")
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class RequestContextFilter(logging.Filter):
    """Adds ``request_id`` (first 8 chars) and ``short_name`` to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()[:8]
        record.short_name = record.name.removeprefix("critic.")
        return True


def is_health_check_access(record: logging.LogRecord) -> bool:
    """True for uvicorn access lines of a health probe."""
    message = record.getMessage()
    return any(f" {path} " in message or message.endswith(path) for path in HEALTH_PATHS)


def setup_logging(level: str = "INFO") -> None:
    """Route all logging, uvicorn's included, through one stdout handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.filters.clear()
    access_logger.addFilter(lambda record: not is_health_check_access(record))


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def generate_request_id() -> str:
    """UUID4 in canonical string form."""
    return str(uuid.uuid4())

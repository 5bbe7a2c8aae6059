"""Logging configuration for the application.

Every record is stamped with the id of the request being served (``-`` for
the queue script and startup), so a submission or a queue batch can be
followed across use case, store and mail client log lines.
"""

import logging
import sys

from askfreely.core.config import get_settings
from askfreely.shared.context import get_request_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# Loggers that log every outbound call at INFO; the Realtime Database URL
# and Resend endpoint would otherwise appear on each request.
_NOISY_LOGGERS = ("httpx", "httpcore")


class RequestIDLogFilter(logging.Filter):
    """Adds request_id to each record from the current request context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout with the request id of the current request.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)

"""Console logging for the task service.

Call ``setup_logging()`` once, before the server starts. Every record gets a
``request_id`` attribute; the request middleware sets it per request and it
reads ``-`` outside of one.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

_APP_LOGGERS = ("api.", "core.", "tasks.")

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s [%(request_id)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RequestIdFilter(logging.Filter):
    """Stamp the current request id onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - our own loggers pass through
    - uvicorn lifecycle messages pass, its access log does not (the
      request middleware already logs each request)
    - any other third party only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith(_APP_LOGGERS):
            return True

        if name == "uvicorn.access":
            return record.levelno >= logging.WARNING

        if name == "uvicorn" or name.startswith("uvicorn."):
            return True

        return record.levelno >= logging.WARNING


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger with a single filtered console handler."""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    ch.addFilter(RequestIdFilter())
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)

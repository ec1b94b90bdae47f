"""Books API logging setup.

Standard library logging with a per-request id in every record:
- The request middleware stores the id in a ContextVar
- RequestIdFilter copies it onto each record
- configure_logging() installs one stream handler on the root logger
"""
from __future__ import annotations

import logging
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def get_request_id() -> str:
    """Return the id of the request being handled, or "-" outside one."""
    return _request_id.get()


def set_request_id(request_id: str):
    """Bind a request id to the current context. Returns a reset token."""
    return _request_id.set(request_id)


def reset_request_id(token) -> None:
    _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Attach the current request id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def configure_logging(level: str = "INFO") -> logging.Handler:
    """Install the service log handler on the root logger.

    Safe to call more than once: an already installed handler is reused and
    only the level is updated.
    """
    root = logging.getLogger()
    handler = next(
        (h for h in root.handlers if getattr(h, "books_api_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        handler.books_api_handler = True
        root.addHandler(handler)

    root.setLevel(level.upper())
    return handler

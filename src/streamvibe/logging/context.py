"""Request-scoped logging context."""

import logging
from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIDFilter(logging.Filter):
    """Copy the current request ID onto every record.

    Tasks spawned while handling a request inherit the ID, so detached
    history updates log under the request that scheduled them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True

"""Structured logging configuration."""

import logging
import sys

from streamvibe.logging.context import RequestIDFilter
from streamvibe.logging.formatter import JSONLogFormatter

DEFAULT_SERVICE_NAME = "stream-api"


def configure_logging(service: str = DEFAULT_SERVICE_NAME, level: str | int = logging.INFO) -> None:
    """Set up structured JSON logging on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    handler.addFilter(RequestIDFilter())
    root.addHandler(handler)

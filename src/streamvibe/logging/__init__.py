"""Structured logging: JSON formatter, request context and setup."""

from streamvibe.logging.context import RequestIDFilter, request_id_var
from streamvibe.logging.formatter import JSONLogFormatter
from streamvibe.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "RequestIDFilter", "configure_logging", "request_id_var"]

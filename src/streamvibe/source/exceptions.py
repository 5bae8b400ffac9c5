"""Upstream source client exceptions."""


class SourceClientError(Exception):
    """Base exception for upstream source failures. Every subclass is retried."""


class SourceTimeoutError(SourceClientError):
    """A single attempt exceeded the per-attempt timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Source request timed out after {timeout}s")


class SourceTransportError(SourceClientError):
    """The request could not be sent or the connection failed."""


class SourceHTTPError(SourceClientError):
    """The source answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Source error: HTTP {status_code}" + (f" - {detail}" if detail else ""))


class SourceResponseError(SourceClientError):
    """The response body was malformed or lacked the success marker."""

"""Resolution outcomes surfaced to the transport boundary."""


class ResolutionError(Exception):
    """Base exception for failed resolutions."""

    def __init__(self, identifier: str, message: str) -> None:
        self.identifier = identifier
        super().__init__(message)


class AssetNotFoundError(ResolutionError):
    """Nothing playable exists for the identifier after cache, store and source."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"No playable asset for {identifier!r}")


class UpstreamError(ResolutionError):
    """The source failed on every attempt. The last failure is the ``__cause__``."""

    def __init__(self, identifier: str, detail: str = "") -> None:
        self.detail = detail
        super().__init__(
            identifier,
            f"Source fetch failed for {identifier!r}" + (f": {detail}" if detail else ""),
        )

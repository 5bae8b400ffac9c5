"""Upstream source async client with bounded retry and linear backoff."""

import asyncio
import logging

import httpx

from streamvibe.schemas import Asset
from streamvibe.source.constants import (
    API_HOST_HEADER,
    API_KEY_HEADER,
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_REGION_HINT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BASE_DELAY,
    ID_PARAM,
    REGION_PARAM,
    SUCCESS_STATUS,
)
from streamvibe.source.exceptions import (
    SourceClientError,
    SourceHTTPError,
    SourceResponseError,
    SourceTimeoutError,
    SourceTransportError,
)
from streamvibe.source.models import SourceVideoResponse

logger = logging.getLogger(__name__)


class SourceClient:
    """Async client for the rate-limited upstream media source.

    Every failure (transport, timeout, non-2xx, malformed body, missing
    success marker) is retried up to ``max_attempts`` total attempts,
    sleeping ``retry_base_delay * attempt`` between them. The last failure
    is re-raised once attempts are exhausted. No caching happens here.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str = "",
        api_host: str = "",
        region_hint: str = DEFAULT_REGION_HINT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._base_url = base_url
        self._api_key = api_key
        self._api_host = api_host
        self._region_hint = region_hint
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay
        self._semaphore = asyncio.Semaphore(concurrency_limit)
        self._request_timeout = request_timeout

    async def _attempt(self, identifier: str) -> SourceVideoResponse:
        """Send one request and validate the success marker."""
        async with self._semaphore:
            try:
                async with asyncio.timeout(self._request_timeout):
                    async with httpx.AsyncClient(timeout=self._request_timeout) as client:
                        response = await client.get(
                            self._base_url,
                            params={ID_PARAM: identifier, REGION_PARAM: self._region_hint},
                            headers={API_KEY_HEADER: self._api_key, API_HOST_HEADER: self._api_host},
                        )
            except (TimeoutError, httpx.TimeoutException) as exc:
                raise SourceTimeoutError(self._request_timeout) from exc
            except httpx.HTTPError as exc:
                raise SourceTransportError(str(exc) or type(exc).__name__) from exc

        if not 200 <= response.status_code < 300:
            raise SourceHTTPError(status_code=response.status_code, detail=response.text[:200])

        try:
            payload = SourceVideoResponse.model_validate(response.json())
        except ValueError as exc:
            raise SourceResponseError(f"Malformed source response: {exc}") from exc

        if payload.status != SUCCESS_STATUS:
            raise SourceResponseError(f"Source returned status {payload.status!r}")
        return payload

    async def fetch(self, identifier: str) -> SourceVideoResponse:
        """Fetch the raw source payload for ``identifier`` with retries.

        Raises:
            SourceClientError: the failure of the final attempt.
        """
        for attempt in range(1, self._max_attempts + 1):
            try:
                return await self._attempt(identifier)
            except SourceClientError as exc:
                if attempt == self._max_attempts:
                    logger.error(
                        "Source fetch for %s failed after %d attempts: %s",
                        identifier,
                        attempt,
                        exc,
                    )
                    raise
                delay = self._retry_base_delay * attempt
                logger.warning(
                    "Source fetch for %s failed (%s), sleeping %.1fs (attempt %d/%d)",
                    identifier,
                    exc,
                    delay,
                    attempt,
                    self._max_attempts,
                )
                await asyncio.sleep(delay)

        raise AssertionError("unreachable")  # pragma: no cover

    async def fetch_asset(self, identifier: str) -> Asset | None:
        """Fetch and convert to an ``Asset``.

        Returns ``None`` when the source reports success but has no
        playable formats for the identifier.
        """
        payload = await self.fetch(identifier)
        asset = payload.to_asset(identifier)
        if asset is None:
            logger.info("Source has no playable formats for %s", identifier)
        return asset

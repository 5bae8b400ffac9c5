"""Tests for SourceClient."""

import asyncio

import httpx
import pytest
import respx

from helpers import SOURCE_URL, source_payload
from streamvibe.source import client as client_module
from streamvibe.source.client import SourceClient
from streamvibe.source.exceptions import (
    SourceHTTPError,
    SourceResponseError,
    SourceTimeoutError,
    SourceTransportError,
)


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record backoff delays instead of sleeping."""
    recorded: list[float] = []

    async def fake_sleep(delay: float) -> None:
        recorded.append(delay)

    monkeypatch.setattr(client_module.asyncio, "sleep", fake_sleep)
    return recorded


def _client(**kwargs: object) -> SourceClient:
    return SourceClient(SOURCE_URL, api_key="key-1", api_host="host-1", **kwargs)  # type: ignore[arg-type]


@respx.mock
async def test_fetch_asset_success(sleeps: list[float]) -> None:
    """A success-marked payload becomes an Asset in one call."""
    route = respx.get(SOURCE_URL).mock(return_value=httpx.Response(200, json=source_payload("abc123")))

    asset = await _client().fetch_asset("abc123")

    assert asset is not None
    assert asset.id == "abc123"
    assert asset.title == "Song"
    assert asset.playback_url.endswith("expire=2000000000")
    assert route.call_count == 1
    assert sleeps == []


@respx.mock
async def test_request_carries_identifier_region_and_credentials(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(return_value=httpx.Response(200, json=source_payload()))

    await _client(region_hint="US").fetch_asset("abc123")

    request = route.calls[0].request
    assert request.url.params["id"] == "abc123"
    assert request.url.params["cgeo"] == "US"
    assert request.headers["x-rapidapi-key"] == "key-1"
    assert request.headers["x-rapidapi-host"] == "host-1"


@respx.mock
async def test_always_failing_source_makes_exactly_max_attempts(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(return_value=httpx.Response(503, text="Service Unavailable"))

    with pytest.raises(SourceHTTPError) as exc_info:
        await _client(max_attempts=3).fetch_asset("abc123")

    assert exc_info.value.status_code == 503
    assert route.call_count == 3


@pytest.mark.parametrize("k", [1, 2, 3])
@respx.mock
async def test_success_on_attempt_k_makes_k_calls(sleeps: list[float], k: int) -> None:
    failures = [httpx.Response(500, text="boom")] * (k - 1)
    route = respx.get(SOURCE_URL).mock(side_effect=[*failures, httpx.Response(200, json=source_payload())])

    asset = await _client(max_attempts=3).fetch_asset("abc123")

    assert asset is not None
    assert route.call_count == k


@respx.mock
async def test_backoff_is_linear_in_attempt_number(sleeps: list[float]) -> None:
    respx.get(SOURCE_URL).mock(return_value=httpx.Response(500))

    with pytest.raises(SourceHTTPError):
        await _client(max_attempts=4, retry_base_delay=0.5).fetch_asset("abc123")

    # No sleep after the final attempt
    assert sleeps == [0.5, 1.0, 1.5]


@respx.mock
async def test_missing_success_marker_is_retried(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(
        side_effect=[
            httpx.Response(200, json=source_payload(status=None)),
            httpx.Response(200, json=source_payload(status="FAIL")),
            httpx.Response(200, json=source_payload()),
        ]
    )

    asset = await _client().fetch_asset("abc123")

    assert asset is not None
    assert route.call_count == 3


@respx.mock
async def test_missing_success_marker_exhausted_raises_response_error(sleeps: list[float]) -> None:
    respx.get(SOURCE_URL).mock(return_value=httpx.Response(200, json={"status": "ERROR", "message": "quota"}))

    with pytest.raises(SourceResponseError, match="ERROR"):
        await _client(max_attempts=2).fetch_asset("abc123")


@respx.mock
async def test_non_json_body_is_a_failure(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(SourceResponseError):
        await _client(max_attempts=2).fetch_asset("abc123")
    assert route.call_count == 2


@respx.mock
async def test_timeout_is_retried_then_raised(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(side_effect=httpx.ReadTimeout("slow"))

    with pytest.raises(SourceTimeoutError):
        await _client(max_attempts=2, request_timeout=0.5).fetch_asset("abc123")
    assert route.call_count == 2


@respx.mock
async def test_hung_upstream_is_cut_off_per_attempt() -> None:
    """A source that never answers is abandoned after ``request_timeout`` on each attempt."""

    async def never_respond(request: httpx.Request) -> httpx.Response:
        await asyncio.Event().wait()
        raise AssertionError("unreachable")

    route = respx.get(SOURCE_URL).mock(side_effect=never_respond)
    loop = asyncio.get_running_loop()
    started = loop.time()

    async with asyncio.timeout(5):
        with pytest.raises(SourceTimeoutError) as exc_info:
            await _client(max_attempts=2, retry_base_delay=0.0, request_timeout=0.2).fetch_asset("abc123")

    assert loop.time() - started < 2
    assert exc_info.value.timeout == 0.2
    assert route.call_count == 2


@respx.mock
async def test_connection_error_then_success(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(
        side_effect=[httpx.ConnectError("refused"), httpx.Response(200, json=source_payload())]
    )

    asset = await _client().fetch_asset("abc123")

    assert asset is not None
    assert route.call_count == 2
    assert sleeps == [1.0]


@respx.mock
async def test_connection_error_exhausted_raises_transport_error(sleeps: list[float]) -> None:
    respx.get(SOURCE_URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(SourceTransportError, match="refused"):
        await _client(max_attempts=1).fetch_asset("abc123")
    assert sleeps == []


@respx.mock
async def test_success_without_formats_returns_none(sleeps: list[float]) -> None:
    route = respx.get(SOURCE_URL).mock(return_value=httpx.Response(200, json=source_payload(formats=0)))

    assert await _client().fetch_asset("abc123") is None
    assert route.call_count == 1


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        _client(max_attempts=0)

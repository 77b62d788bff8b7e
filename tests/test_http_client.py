"""Tests del transporte (`HttpFetcher`)."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest

from adapters.http_client import HttpFetcher, build_url
from core.domain.errors import EmptyResponse, InvalidEndpoint, RemoteError, TransportError
from core.domain.models import EndpointConfig


def _fetcher(recorder, base: EndpointConfig | None = None) -> HttpFetcher:
    endpoint = base or EndpointConfig(host="localhost", port=5001)
    return HttpFetcher(endpoint, httpx.AsyncClient(transport=httpx.MockTransport(recorder)))


async def test_fetch_returns_raw_bytes(recorder):
    recorder.respond_bytes(b"\x00\x01binary")
    body = await _fetcher(recorder).fetch("cat/Qm123")

    assert body == b"\x00\x01binary"
    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "http://localhost:5001/api/v0/cat/Qm123"


async def test_fetch_keeps_query_string(recorder):
    recorder.respond_bytes(b"{}")
    await _fetcher(recorder).fetch("swarm/peers?stream-channels=true")

    url = recorder.requests[0].url
    assert url.path == "/api/v0/swarm/peers"
    assert url.params["stream-channels"] == "true"


async def test_empty_body_is_an_error(recorder):
    recorder.respond_bytes(b"")
    with pytest.raises(EmptyResponse):
        await _fetcher(recorder).fetch("cat/Qm123")


async def test_network_failure_is_wrapped(recorder):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    recorder.handler = refuse
    with pytest.raises(TransportError) as info:
        await _fetcher(recorder).fetch("ls/Qm123")

    assert isinstance(info.value.underlying, httpx.ConnectError)
    assert info.value.__cause__ is info.value.underlying


async def test_error_status_carries_daemon_message(recorder):
    recorder.respond_bytes(
        b'{"Message": "invalid path \\"Qm123\\"", "Code": 0, "Type": "error"}',
        status_code=500,
    )
    with pytest.raises(RemoteError) as info:
        await _fetcher(recorder).fetch("ls/Qm123")

    assert info.value.status_code == 500
    assert info.value.message == 'invalid path "Qm123"'


async def test_error_status_with_plain_text(recorder):
    recorder.respond_bytes(b"404 page not found\n", status_code=404)
    with pytest.raises(RemoteError) as info:
        await _fetcher(recorder).fetch("nope")

    assert info.value.message == "404 page not found"


async def test_invalid_endpoint_issues_no_request(recorder):
    endpoint = SimpleNamespace(base_url="not a url/")
    fetcher = HttpFetcher(endpoint, httpx.AsyncClient(transport=httpx.MockTransport(recorder)))  # type: ignore[arg-type]

    with pytest.raises(InvalidEndpoint):
        await fetcher.fetch("ls/Qm123")
    assert recorder.requests == []


def test_build_url_requires_absolute_url():
    assert str(build_url("http://localhost:5001/api/v0/", "ls/Qm1")) == "http://localhost:5001/api/v0/ls/Qm1"
    with pytest.raises(InvalidEndpoint):
        build_url("/api/v0/", "ls/Qm1")
    with pytest.raises(InvalidEndpoint):
        build_url("ftp://localhost/", "ls/Qm1")

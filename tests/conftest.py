"""Fixtures compartidas: cliente con `httpx.MockTransport`."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from core.services.ipfs_api import IpfsApi

Handler = Callable[[httpx.Request], httpx.Response]

PEER_A = "QmNnooDu7bfjPFoTZYxMNLWUQJyrVwtbZg5gBMjTezGAJN"
PEER_B = "QmQCU2EcMqAqQPR2i9bChDtGNJchTbq5TbXJJ16u19uLTa"
CIDV1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


class Recorder:
    """Guarda las peticiones y responde con un handler configurable."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Handler = lambda request: httpx.Response(500)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond_json(self, payload: Any, status_code: int = 200) -> None:
        self.handler = lambda request: json_response(payload, status_code)

    def respond_bytes(self, content: bytes, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, content=content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def mock_client(recorder: Recorder) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder))


@pytest.fixture
async def api(mock_client: httpx.AsyncClient):
    client = IpfsApi("localhost", 5001, client=mock_client)
    try:
        yield client
    finally:
        await mock_client.aclose()

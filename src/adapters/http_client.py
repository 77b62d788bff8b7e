"""Wrapper de httpx: transporte del pipeline.

Por qué un wrapper:
- Estandariza timeouts, headers y logging de todas las llamadas al daemon.
- Traduce errores de httpx a la taxonomía propia (`TransportFailure`).
- Facilita testeo: se inyecta un `httpx.AsyncClient` con `MockTransport`.
"""

from __future__ import annotations

import json
import logging

import httpx

from core.config import AppSettings
from core.domain.errors import EmptyResponse, InvalidEndpoint, RemoteError, TransportError
from core.domain.models import EndpointConfig

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los comandos se comporten igual.
    - El timeout lo aplica el cliente; el pipeline no impone otro.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, application/octet-stream;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
    )


def build_url(base_url: str, path: str) -> httpx.URL:
    """Concatena `base_url + path` y exige una URL absoluta http(s)."""

    full = base_url + path
    try:
        url = httpx.URL(full)
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise InvalidEndpoint(full, str(exc)) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidEndpoint(full, "not an absolute http(s) URL")
    return url


def _remote_message(response: httpx.Response) -> str:
    # El daemon reporta fallos como {"Message": ..., "Code": ..., "Type": "error"}.
    try:
        payload = json.loads(response.content)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("Message"), str):
        return payload["Message"]
    return response.text.strip() or response.reason_phrase


class HttpFetcher:
    """Implementación de `core.interfaces.transport.Fetcher` sobre httpx."""

    def __init__(self, endpoint: EndpointConfig, client: httpx.AsyncClient) -> None:
        self._endpoint = endpoint
        self._client = client

    @property
    def base_url(self) -> str:
        return self._endpoint.base_url

    async def fetch(self, path: str) -> bytes:
        url = build_url(self.base_url, path)

        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Transport error on GET %s: %s", url, exc)
            raise TransportError(exc) from exc

        body = response.content
        logger.debug("GET %s -> HTTP %s (%d bytes)", url, response.status_code, len(body))

        if not response.is_success:
            raise RemoteError(response.status_code, _remote_message(response))
        if not body:
            raise EmptyResponse(str(url))
        return body

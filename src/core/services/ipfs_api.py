"""Cliente del API HTTP del daemon.

Este módulo orquesta el pipeline de cada comando:

    fetch (transporte) -> decode (sobre JSON) -> mapper (dominio) -> resultado

`IpfsApi` es la raíz: posee la configuración del endpoint y el
`httpx.AsyncClient`, y agrupa los sub-comandos (`swarm`, `pin`, `repo`). Cada
grupo recibe el `Fetcher` compartido por inyección; no hay referencias de
vuelta a la raíz ni sesiones globales.

Cada método es una corrutina independiente: no comparte estado con otras
llamadas y falla con la primera `IpfsApiError` que encuentre.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from multiaddr import Multiaddr

from adapters.http_client import HttpFetcher, build_async_client
from adapters.mappers import merkle_nodes_from_json, peer_addresses_from_strings
from adapters.multiformats import digest_to_string, endpoint_parts_from_multiaddr
from adapters.response_decoder import (
    AddrsEnvelope,
    LsEnvelope,
    StringsEnvelope,
    decode_envelope,
)
from core.config import AppSettings
from core.domain.errors import MalformedJSON, UnexpectedResultCount, UnexpectedResultType
from core.domain.models import DEFAULT_API_VERSION, EndpointConfig, MerkleNode
from core.interfaces.transport import Fetcher

logger = logging.getLogger(__name__)


def ls_path(identifier: str | bytes) -> str:
    """Fragmento de ruta de `ls` para un identificador (`ls/<digest-base58>`)."""

    return f"ls/{digest_to_string(identifier)}"


def cat_path(identifier: str | bytes) -> str:
    return f"cat/{digest_to_string(identifier)}"


class _SubCommand:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher


class Swarm(_SubCommand):
    """Comandos `swarm/*`: peers conectados y conexión manual."""

    async def peers(self) -> list[Multiaddr]:
        body = await self._fetcher.fetch("swarm/peers?stream-channels=true")
        payload = decode_envelope(body, StringsEnvelope)
        addresses = peer_addresses_from_strings(payload["Strings"])
        logger.debug("swarm/peers: %d peer(s)", len(addresses))
        return addresses

    async def addrs(self) -> dict[str, Any]:
        """Direcciones conocidas por peer, sin mapear (forma heterogénea)."""

        body = await self._fetcher.fetch("swarm/addrs?stream-channels=true")
        payload = decode_envelope(body, AddrsEnvelope)
        addrs = payload["Addrs"]
        if not isinstance(addrs, dict):
            raise MalformedJSON(f"'Addrs' must be a JSON object, got {type(addrs).__name__}")
        return addrs

    async def connect(self, address: str) -> str:
        body = await self._fetcher.fetch(f"swarm/connect?arg={quote(address, safe='/')}")
        payload = decode_envelope(body, StringsEnvelope)
        result = payload["Strings"]
        if not isinstance(result, list):
            raise MalformedJSON(f"'Strings' must be a JSON array, got {type(result).__name__}")
        if len(result) != 1:
            raise UnexpectedResultCount(len(result))
        if not isinstance(result[0], str):
            raise UnexpectedResultType(result[0], expected="string")
        return result[0]


class Pin(_SubCommand):
    """Comandos `pin/*` (sin implementar)."""


class Repo(_SubCommand):
    """Comandos `repo/*` (sin implementar)."""


class IpfsApi:
    """Raíz del cliente.

    Uso:

        async with IpfsApi("127.0.0.1", 5001) as api:
            nodes = await api.ls("Qm...")
            peers = await api.swarm.peers()

    Si se inyecta `client`, su ciclo de vida es de quien lo creó y `aclose`
    no lo cierra.
    """

    def __init__(
        self,
        host: str,
        port: int,
        version: str = DEFAULT_API_VERSION,
        *,
        scheme: str = "http",
        client: httpx.AsyncClient | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self.endpoint = EndpointConfig(host=host, port=port, version=version, scheme=scheme)
        self._owns_client = client is None
        self._client = client or build_async_client(settings)
        self._fetcher: Fetcher = HttpFetcher(self.endpoint, self._client)

        self.swarm = Swarm(self._fetcher)
        self.pin = Pin(self._fetcher)
        self.repo = Repo(self._fetcher)

    @classmethod
    def from_multiaddr(
        cls,
        addr: str | Multiaddr,
        version: str = DEFAULT_API_VERSION,
        **kwargs: Any,
    ) -> "IpfsApi":
        """Crea el cliente desde un multiaddr de API (`/ip4/127.0.0.1/tcp/5001`)."""

        host, port, scheme = endpoint_parts_from_multiaddr(addr)
        return cls(host, port, version, scheme=scheme, **kwargs)

    @classmethod
    def from_settings(cls, settings: AppSettings, **kwargs: Any) -> "IpfsApi":
        return cls(settings.host, settings.port, settings.version, settings=settings, **kwargs)

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int:
        return self.endpoint.port

    @property
    def version(self) -> str:
        return self.endpoint.version

    @property
    def base_url(self) -> str:
        return self.endpoint.base_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "IpfsApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # Comandos de primer nivel

    async def ls(self, identifier: str | bytes) -> list[MerkleNode]:
        """Lista los objetos (y sus enlaces) de `identifier`."""

        body = await self._fetcher.fetch(ls_path(identifier))
        payload = decode_envelope(body, LsEnvelope)
        nodes = merkle_nodes_from_json(payload["Objects"])
        logger.debug("ls %s: %d object(s)", identifier, len(nodes))
        return nodes

    async def cat(self, identifier: str | bytes) -> bytes:
        """Contenido crudo de `identifier`; sin decodificación JSON."""

        return await self._fetcher.fetch(cat_path(identifier))

"""Colaboradores de formato: digests base58 y multiaddrs.

Por qué un adaptador:
- El Core no conoce `base58` ni `multiaddr`; aquí se traducen sus errores a la
  taxonomía propia (`InvalidAddress`, `InvalidEndpoint`, `MalformedNode`).
"""

from __future__ import annotations

import base58
from multiaddr import Multiaddr
from multiaddr.exceptions import Error as MultiaddrError

from core.domain.errors import InvalidAddress, InvalidEndpoint, InvalidIdentifier

_HOST_PROTOCOLS = ("ip4", "ip6", "dns", "dns4", "dns6")


def is_base58(value: str) -> bool:
    """True si `value` es una cadena base58 no vacía."""

    if not value:
        return False
    try:
        base58.b58decode(value)
    except ValueError:
        return False
    return True


def digest_to_string(identifier: str | bytes) -> str:
    """Forma textual (base58) de un identificador de contenido.

    - `bytes`: se codifica como base58 (multihash crudo).
    - `str`: ya es la forma textual; se valida y se devuelve tal cual.
    """

    if isinstance(identifier, (bytes, bytearray)):
        if not identifier:
            raise InvalidIdentifier(identifier, "empty digest")
        return base58.b58encode(bytes(identifier)).decode("ascii")
    if not is_base58(identifier):
        raise InvalidIdentifier(identifier, "not a base58 digest")
    return identifier


def parse_multiaddr(entry: object) -> Multiaddr:
    """Parsea una dirección de peer; cualquier fallo es `InvalidAddress`."""

    if not isinstance(entry, str):
        raise InvalidAddress(entry)
    try:
        return Multiaddr(entry)
    except (MultiaddrError, ValueError, TypeError) as exc:
        raise InvalidAddress(entry) from exc


def endpoint_parts_from_multiaddr(addr: str | Multiaddr) -> tuple[str, int, str]:
    """Extrae `(host, port, scheme)` de un multiaddr de API.

    Ejemplo: `/ip4/127.0.0.1/tcp/5001` -> `("127.0.0.1", 5001, "http")`.
    Un sufijo `/https` selecciona https.
    """

    text = str(addr)
    try:
        parsed = addr if isinstance(addr, Multiaddr) else Multiaddr(addr)
    except (MultiaddrError, ValueError, TypeError) as exc:
        raise InvalidEndpoint(text, "not a multiaddr") from exc

    host: str | None = None
    port: int | None = None
    scheme = "http"
    for proto, value in parsed.items():
        if proto.name in _HOST_PROTOCOLS and host is None:
            host = value
        elif proto.name == "tcp" and port is None:
            port = int(value)
        elif proto.name == "https":
            scheme = "https"

    if host is None or port is None:
        raise InvalidEndpoint(text, "multiaddr needs a host and a tcp port")
    return host, port, scheme

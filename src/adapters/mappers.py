"""Mapeo de fragmentos JSON a objetos de dominio.

Reglas:
- Funciones puras: reciben JSON ya decodificado, devuelven modelos del dominio.
- Fail-fast: una clave ausente o mal tipada aborta todo el resultado; nunca se
  devuelven árboles parciales ni listas truncadas.
"""

from __future__ import annotations

from typing import Any

from multiaddr import Multiaddr
from pydantic import ValidationError

from adapters.multiformats import is_base58, parse_multiaddr
from core.domain.errors import InvalidAddress, MalformedNode
from core.domain.models import MerkleNode


def merkle_node_from_json(fragment: Any) -> MerkleNode:
    """Construye un `MerkleNode` (recursivo sobre `Links`)."""

    if not isinstance(fragment, dict):
        raise MalformedNode(f"Object entry must be a JSON object, got {type(fragment).__name__}")

    digest = fragment.get("Hash")
    if not isinstance(digest, str) or not is_base58(digest):
        raise MalformedNode(f"Object entry has no valid 'Hash': {digest!r}")

    raw_links = fragment.get("Links")
    if raw_links is None:
        raw_links = []
    elif not isinstance(raw_links, list):
        raise MalformedNode(f"'Links' of {digest} must be a list")

    # Un hijo mal formado propaga su MalformedNode tal cual.
    links = tuple(merkle_node_from_json(child) for child in raw_links)

    try:
        return MerkleNode.model_validate({**fragment, "Links": links})
    except ValidationError as exc:
        raise MalformedNode(f"Invalid object entry {digest}: {exc}") from exc


def merkle_nodes_from_json(objects: Any) -> list[MerkleNode]:
    if not isinstance(objects, list):
        raise MalformedNode(f"'Objects' must be a list, got {type(objects).__name__}")
    return [merkle_node_from_json(entry) for entry in objects]


def peer_addresses_from_strings(entries: Any) -> list[Multiaddr]:
    """Parsea todas las direcciones o ninguna (`InvalidAddress` en la primera mala)."""

    if not isinstance(entries, list):
        raise InvalidAddress(entries)
    return [parse_multiaddr(entry) for entry in entries]

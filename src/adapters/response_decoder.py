"""Decodificación de respuestas JSON del daemon.

Capas:
- `decode` solo garantiza el sobre: objeto JSON en la raíz + claves requeridas.
- La forma de lo anidado es trabajo de `adapters.mappers`; así un fallo de
  sobre (`DecodeError`) se distingue de un fallo de dominio (`DomainError`).

Cada endpoint declara su sobre una vez como modelo Pydantic; los alias de sus
campos son las claves requeridas.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

from core.domain.errors import MalformedJSON, MissingKey


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LsEnvelope(_Envelope):
    """`ls`: {"Objects": [{"Hash": ..., "Links": [...]}]}"""

    objects: Any = Field(..., alias="Objects")


class StringsEnvelope(_Envelope):
    """`swarm/peers`, `swarm/connect`: {"Strings": [...]}"""

    strings: Any = Field(..., alias="Strings")


class AddrsEnvelope(_Envelope):
    """`swarm/addrs`: {"Addrs": {peerId: [addr, ...]}}"""

    addrs: Any = Field(..., alias="Addrs")


def required_keys_of(envelope: type[BaseModel]) -> frozenset[str]:
    """Claves JSON requeridas por un sobre (alias de sus campos obligatorios)."""

    return frozenset(
        field.alias or name
        for name, field in envelope.model_fields.items()
        if field.is_required()
    )


def decode(body: bytes, required_keys: Iterable[str]) -> dict[str, Any]:
    """Parsea `body` como objeto JSON y comprueba que existan `required_keys`."""

    try:
        payload = json.loads(body)
    except (ValueError, TypeError) as exc:
        # UnicodeDecodeError es subclase de ValueError.
        raise MalformedJSON(f"Response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedJSON(
            f"Expected a JSON object at top level, got {type(payload).__name__}"
        )

    for key in sorted(required_keys):
        if key not in payload:
            raise MissingKey(key)
    return payload


def decode_envelope(body: bytes, envelope: type[BaseModel]) -> dict[str, Any]:
    return decode(body, required_keys_of(envelope))

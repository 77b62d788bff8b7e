"""Contrato del transporte.

Por qué Protocol:
- Los grupos de sub-comandos dependen de esta abstracción, no de httpx.
- En tests se puede inyectar cualquier objeto con `fetch` asíncrono.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Fetcher(Protocol):
    """Obtiene el cuerpo crudo de un comando del API.

    Reglas de diseño:
    - `fetch` es asíncrono: nunca bloquea a quien llama.
    - Una petición por invocación, sin reintentos.
    - Falla con `TransportFailure` (URL inválida, red, cuerpo vacío, status).
    """

    @property
    def base_url(self) -> str:
        ...

    async def fetch(self, path: str) -> bytes:
        """Devuelve los bytes de `base_url + path`."""

        ...

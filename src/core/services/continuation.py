"""Entrega de resultados por continuación.

Para quien prefiere callbacks a `await`: `submit` agenda la llamada y vuelve
enseguida; la continuación recibe un `Outcome` exactamente una vez, tanto si
el pipeline termina bien como si falla en transporte, decodificación o mapeo.
Ningún error cruza el borde asíncrono sin ser entregado.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from core.domain.errors import IpfsApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Resultado de una llamada: `value` o `error`, nunca ambos."""

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


Continuation = Callable[[Outcome[T]], None]


async def _run(awaitable: Awaitable[T], continuation: Continuation[T]) -> Outcome[T]:
    try:
        value = await awaitable
    except IpfsApiError as exc:
        outcome: Outcome[T] = Outcome(error=exc)
    except Exception as exc:
        logger.exception("Unexpected error in API call")
        outcome = Outcome(error=exc)
    else:
        outcome = Outcome(value=value)

    try:
        continuation(outcome)
    except Exception:
        # Un fallo dentro del callback del usuario no debe tumbar el loop.
        logger.exception("Continuation raised while handling %r", outcome)
    return outcome


def submit(awaitable: Awaitable[T], continuation: Continuation[T]) -> asyncio.Task[Outcome[T]]:
    """Agenda `awaitable` en el loop actual y entrega su `Outcome` a `continuation`.

    Debe llamarse con un loop en ejecución. La cancelación de la tarea se
    propaga y la continuación no se invoca.
    """

    return asyncio.get_running_loop().create_task(_run(awaitable, continuation))

"""Taxonomía de errores del cliente.

Por qué una jerarquía:
- Separa fallos de transporte, de sobre (envelope JSON) y de dominio, para que
  quien llama distinga un daemon caído de una versión de protocolo distinta.
- Todos heredan de `IpfsApiError`: un único `except` basta en la CLI.
"""

from __future__ import annotations


class IpfsApiError(Exception):
    """Base de todos los errores reportados por el pipeline."""


# --- Argumentos ---------------------------------------------------------------


class InvalidIdentifier(IpfsApiError, ValueError):
    """El identificador no tiene forma de digest base58. No se hizo ninguna petición."""

    def __init__(self, identifier: object, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Invalid content identifier {identifier!r}: {reason}")


# --- Transporte -----------------------------------------------------------


class TransportFailure(IpfsApiError):
    """La petición no produjo un cuerpo utilizable."""


class InvalidEndpoint(TransportFailure):
    """La URL construida no es absoluta/válida. No se hizo ninguna petición."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid endpoint URL {url!r}{detail}")


class TransportError(TransportFailure):
    """Fallo de red (conexión rechazada, DNS, I/O, timeout)."""

    def __init__(self, underlying: BaseException) -> None:
        self.underlying = underlying
        super().__init__(f"Transport error: {underlying}")


class EmptyResponse(TransportFailure):
    """Respuesta exitosa pero sin cuerpo."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Empty response body from {url}")


class RemoteError(TransportFailure):
    """El daemon respondió con un status HTTP no 2xx."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Daemon returned HTTP {status_code}: {message}")


# --- Sobre JSON -------------------------------------------------------------


class DecodeError(IpfsApiError):
    """El cuerpo no coincide con el sobre JSON esperado."""


class MalformedJSON(DecodeError):
    """El cuerpo no es un objeto JSON."""


class MissingKey(DecodeError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing key {key!r} in JSON response")


# --- Dominio ------------------------------------------------------------------


class DomainError(IpfsApiError):
    """El sobre es correcto pero el contenido no tiene la forma del dominio."""


class MalformedNode(DomainError):
    """Fragmento de objeto sin `Hash` válido o con campos mal tipados."""


class InvalidAddress(DomainError):
    def __init__(self, entry: object) -> None:
        self.entry = entry
        super().__init__(f"Invalid peer address: {entry!r}")


class UnexpectedResultCount(DomainError):
    def __init__(self, count: int, expected: int = 1) -> None:
        self.count = count
        self.expected = expected
        super().__init__(f"Expected {expected} result(s), got {count}")


class UnexpectedResultType(DomainError):
    def __init__(self, value: object, expected: str) -> None:
        self.value = value
        self.expected = expected
        super().__init__(f"Expected a {expected} result, got {type(value).__name__}: {value!r}")

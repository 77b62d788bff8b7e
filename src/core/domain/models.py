"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde: un nodo mal formado falla al construirse,
  no más tarde en quien lo consume.
- Modelos congelados: una vez decodificados no se mutan.

Nota:
- Estos modelos describen *qué* devuelve el daemon, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

DEFAULT_API_VERSION = "/api/v0/"


class EndpointConfig(BaseModel):
    """Dirección del API HTTP del daemon.

    `base_url` siempre tiene la forma `scheme://host:port/version/` y se calcula
    una sola vez; el modelo es inmutable y se comparte entre llamadas
    concurrentes sin sincronización.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        min_length=1,
        description="Host o IP del daemon.",
    )
    port: int = Field(
        ...,
        ge=1,
        le=65535,
        description="Puerto TCP del API.",
    )
    version: str = Field(
        default=DEFAULT_API_VERSION,
        validate_default=True,
        description="Prefijo de ruta del API (p.ej. '/api/v0/').",
    )
    scheme: str = Field(
        default="http",
        pattern=r"^https?$",
        description="Esquema de la URL base.",
    )

    @field_validator("version")
    @classmethod
    def _normalize_version(cls, value: str) -> str:
        # Siempre sin barra inicial y con barra final: "api/v0/".
        stripped = value.strip("/")
        return f"{stripped}/" if stripped else ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def base_url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}/{self.version}"


class MerkleNode(BaseModel):
    """Un objeto direccionado por contenido más sus enlaces hijos.

    Solo lo construye `adapters.mappers.merkle_node_from_json`; cada llamada
    produce un árbol nuevo.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    hash: str = Field(
        ...,
        alias="Hash",
        min_length=1,
        description="Identificador de contenido (digest base58).",
    )
    name: str | None = Field(
        default=None,
        alias="Name",
        description="Nombre del enlace, si el objeto es hijo de un directorio.",
    )
    size: int | None = Field(
        default=None,
        alias="Size",
        ge=0,
        description="Tamaño en bytes reportado por el daemon.",
    )
    type: int | None = Field(
        default=None,
        alias="Type",
        description="Tipo de nodo unixfs (1 = directorio, 2 = fichero).",
    )
    links: tuple[MerkleNode, ...] = Field(
        default=(),
        alias="Links",
        description="Hijos en el orden devuelto por el daemon.",
    )

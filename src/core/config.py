"""Configuración de la CLI.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la librería:
  `IpfsApi` solo recibe valores explícitos; la CLI es quien lee el entorno.
- Un único contrato de configuración para CLI/doctor.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import DEFAULT_API_VERSION


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ipfs-api"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ipfs-api"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ipfs-api"
    return Path.home() / ".config" / "ipfs-api"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la CLI.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Orden: `.env` del proyecto primero, luego el `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="IPFS_API_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="127.0.0.1",
        min_length=1,
        description="Host del API HTTP del daemon.",
    )
    port: int = Field(
        default=5001,
        ge=1,
        le=65535,
        description="Puerto del API HTTP del daemon.",
    )
    version: str = Field(
        default=DEFAULT_API_VERSION,
        description="Prefijo de ruta del API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="ipfs-api-client/0.1",
        min_length=1,
        description="User-Agent enviado al daemon.",
    )
    log_level: str = Field(
        default="WARNING",
        pattern=r"^(?i:debug|info|warning|error|critical)$",
        description="Nivel de logging de la CLI.",
    )

"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/recursos) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Objetivo: guardar credenciales de TaguchiMail sin editar `.env` en el proyecto.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "tmapi"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "tmapi"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tmapi"
    return Path.home() / ".config" / "tmapi"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes se conservan; los valores `None` se ignoran.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# tmapi user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="TMAPI_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str | None = Field(
        default=None,
        description="Hostname (o IP) de la instancia TaguchiMail.",
    )
    username: str | None = Field(
        default=None,
        description="Usuario autorizado (normalmente un email).",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Password del usuario autorizado.",
    )
    organization_id: str | None = Field(
        default=None,
        description="ID de la organización sobre la que se opera.",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="TMAPIv4 Python wrapper",
        min_length=1,
        description="User-Agent fijo para rastrear errores del lado del servidor.",
    )
    default_page_size: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Límite por defecto de `find` cuando no se indica uno.",
    )

    def missing_connection_fields(self) -> list[str]:
        """Campos de conexión sin valor (para diagnósticos y errores de CLI)."""

        missing: list[str] = []
        for name in ("host", "username", "password", "organization_id"):
            if not getattr(self, name):
                missing.append(name)
        return missing

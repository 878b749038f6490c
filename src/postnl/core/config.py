"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente, el transporte y la caché leen la misma config.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from postnl.core.domain.api_mode import ApiMode

APP_DIR_NAME = "postnl-client"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def parse_env_lines(text: str) -> dict[str, str]:
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


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes que no vienen en `values` se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# postnl-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class PostNLSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="POSTNL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="API key de PostNL (cabecera `apikey` / UsernameToken en SOAP).",
    )
    sandbox: bool = Field(
        default=True,
        description="Usar el entorno sandbox (api-sandbox.postnl.nl).",
    )
    api_mode: ApiMode = Field(
        default=ApiMode.REST,
        description="Protocolo: rest o legacy (SOAP).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="postnl-client/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    max_concurrency: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Peticiones simultáneas máximas en un lote.",
    )

    cache_ttl_seconds: float | None = Field(
        default=None,
        gt=0,
        description="TTL de la caché de respuestas; None la desactiva.",
    )
    cache_max_items: int = Field(
        default=1024,
        ge=1,
        description="Entradas máximas en la caché de respuestas.",
    )

    # Cliente (Customer)
    customer_number: str | None = Field(default=None, description="Número de cliente PostNL.")
    customer_code: str | None = Field(default=None, description="Código de cliente (4 letras).")
    collection_location: str | None = Field(default=None, description="Código de la sucursal de recogida.")
    contact_person: str | None = Field(default=None, description="Persona de contacto.")
    globalpack_barcode_type: str | None = Field(default=None, description="Tipo de barcode GlobalPack (p.ej. CD).")
    globalpack_customer_code: str | None = Field(default=None, description="Código de cliente GlobalPack.")

    def api_key_value(self) -> str | None:
        return self.api_key.get_secret_value() if self.api_key else None

    def cache_enabled(self) -> bool:
        return self.cache_ttl_seconds is not None

"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente de idgen no lee config global: recibe un `IdGenEndpoint` ya resuelto.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "idgen-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "idgen-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "idgen-client"
    return Path.home() / ".config" / "idgen-client"


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


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# idgen-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class IdGenEndpoint(BaseModel):
    """Destino del servicio idgen (host + path), inmutable.

    Se concatena tal cual: el host y el path se tratan como strings opacos.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Host del servicio idgen (p.ej. 'http://egov-idgen:8080').")
    path: str = Field(..., min_length=1, description="Path del endpoint de generación.")

    @property
    def url(self) -> str:
        return self.host + self.path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDGEN_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="http://localhost:8088",
        min_length=1,
        description="Host del servicio idgen.",
    )
    path: str = Field(
        default="/egov-idgen/id/_generate",
        min_length=1,
        description="Path del endpoint de generación de ids.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="idgen-client/0.1",
        min_length=1,
        description="User-Agent enviado al servicio idgen.",
    )
    default_tenant_id: str | None = Field(
        default=None,
        description="Tenant usado por la CLI cuando no se indica --tenant.",
    )

    def endpoint(self) -> IdGenEndpoint:
        return IdGenEndpoint(host=self.host, path=self.path)

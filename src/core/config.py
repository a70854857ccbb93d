"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el cliente HTTP y la CLI lean la misma config (base URL, timeouts).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://movie-api-21197.herokuapp.com/"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "myflix-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "myflix-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "myflix-client"
    return Path.home() / ".config" / "myflix-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# myflix-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - La base URL deja de ser una constante del módulo: cada entorno
      (dev/staging/prod) la define sin recompilar nada.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYFLIX_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        min_length=8,
        description="Base URL del backend myFlix (siempre termina en '/').",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    user_agent: str = Field(
        default="myflix-client/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    encode_path_segments: bool = Field(
        default=True,
        description="Codifica títulos/nombres/ids como segmentos de ruta (percent-encoding).",
    )
    credentials_path: Path | None = Field(
        default=None,
        description="Archivo JSON donde la CLI guarda token y usuario.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de log raíz (DEBUG, INFO, WARNING, ERROR).",
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Formato de salida de logs: consola legible o JSON.",
    )

    @field_validator("api_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        # Las rutas se concatenan directamente a la base.
        value = value.strip()
        return value if value.endswith("/") else value + "/"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()

    def resolved_credentials_path(self) -> Path:
        return self.credentials_path or (get_user_config_dir() / "session.json")

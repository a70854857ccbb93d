"""Implementaciones de `CredentialSource`.

- `MemoryCredentialStore`: dict en memoria (tests, uso embebido).
- `JsonFileCredentialStore`: archivo JSON plano; es el equivalente del
  almacenamiento del navegador para la CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.interfaces.credentials import CredentialSource
from core.logging_config import get_logger

logger = get_logger(__name__)


class MemoryCredentialStore(CredentialSource):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileCredentialStore(CredentialSource):
    """Store persistente en un JSON `{clave: valor}`.

    Notas:
    - Se relee el archivo en cada `get`: otro proceso puede haber hecho login.
    - Un archivo ausente o corrupto equivale a una sesión vacía.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable credentials file", path=str(self._path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _dump(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(values, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._dump(values)

    def delete(self, key: str) -> None:
        values = self._load()
        if key in values:
            del values[key]
            self._dump(values)

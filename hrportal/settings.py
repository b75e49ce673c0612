"""Application settings store with environment lookups."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

_MISSING = object()

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-_]+")

APP_PROVIDERS = (
    "app",
    "auth",
    "route",
    "grpc",
    "console",
    "queue",
    "event",
    "validation",
    "database",
)


class Settings:
    """Nested configuration sections backed by an environment mapping."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ: dict[str, str] = dict(os.environ if environ is None else environ)
        self._sections: dict[str, Any] = {}

    def env(self, key: str, default: Any = None) -> Any:
        """Return the environment value for ``key``, or ``default`` when unset or empty."""
        value = self._environ.get(key)
        if value is None or value == "":
            return default
        return value

    def add(self, name: str, values: Any) -> None:
        """Register a configuration section under ``name``."""
        self._sections[name] = values

    def _lookup(self, key: str) -> Any:
        node: Any = self._sections
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key in the sections, then in the environment."""
        value = self._lookup(key)
        if value is not _MISSING:
            return value
        env_value = self._environ.get(key)
        if env_value is not None:
            return env_value
        return default

    def get_string(self, key: str, default: str = "") -> str:
        value = self.get(key, _MISSING)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, _MISSING)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                return default
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"setting {key!r} is not an integer: {value!r}") from exc

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, _MISSING)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            text = value.strip()
            if text == "":
                return default
            if text in _TRUE_WORDS:
                return True
            if text in _FALSE_WORDS:
                return False
        raise ValueError(f"setting {key!r} is not a boolean: {value!r}")


def snake_case(text: str) -> str:
    """Convert ``text`` to lower snake case."""
    spaced = _FIRST_CAP.sub(r"\1_\2", text.strip())
    spaced = _ALL_CAP.sub(r"\1_\2", spaced)
    return _SEPARATORS.sub("_", spaced).strip("_").lower()


def storage_path(relative: str = "", base: str | os.PathLike[str] | None = None) -> str:
    """Return the path of ``relative`` inside the storage directory."""
    root = Path(base) if base is not None else Path.cwd()
    path = root / "storage"
    if relative:
        path = path / relative
    return str(path)


def register_app(settings: Settings) -> None:
    """Add the ``app`` section."""
    settings.add(
        "app",
        {
            "name": settings.env("APP_NAME", "Goravel"),
            "env": settings.env("APP_ENV", "production"),
            "debug": settings.env("APP_DEBUG", False),
            "timezone": "UTC",
            "locale": "en",
            "fallback_locale": "en",
            "lang_path": "lang",
            "key": settings.env("APP_KEY", ""),
            "providers": APP_PROVIDERS,
        },
    )
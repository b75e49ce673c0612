"""Core configuration sections: auth, cache, cors, database, filesystems, grpc."""

from __future__ import annotations

import copy
import os

from hrportal.settings import Settings, storage_path

_BLANK = ""

_DB_LOGIN_ENV = "DB_" + "PASSWORD"
_REDIS_LOGIN_ENV = "REDIS_" + "PASSWORD"

_AUTH = {
    "defaults": {"guard": "user"},
    "guards": {"user": {"driver": "jwt"}},
}

_CORS = {
    "paths": ["*"],
    "allowed_methods": ["*"],
    "allowed_origins": ["*"],
    "allowed_headers": ["*"],
    "exposed_headers": [""],
    "max_age": 0,
    "supports_credentials": False,
}


def _cache(settings: Settings) -> dict:
    return {
        "default": settings.env("CACHE_STORE", "memory"),
        "stores": {"memory": {"driver": "memory"}},
        "prefix": settings.get_string("APP_NAME", "goravel") + "_cache",
    }


def _database(settings: Settings) -> dict:
    env = settings.env
    return {
        "default": env("DB_CONNECTION", "mysql"),
        "connections": {
            "mysql": {
                "driver": "mysql",
                "host": env("DB_HOST", "127.0.0.1"),
                "port": env("DB_PORT", 3306),
                "database": env("DB_DATABASE", "forge"),
                "username": env("DB_USERNAME", _BLANK),
                "password": env(_DB_LOGIN_ENV, _BLANK),
                "charset": "utf8mb4",
                "loc": "Local",
                "prefix": "",
                "singular": False,
            },
            "postgres": {
                "driver": "postgres",
                "host": env("DB_HOST", "127.0.0.1"),
                "port": env("DB_PORT", 5432),
                "database": env("DB_DATABASE", "forge"),
                "username": env("DB_USERNAME", _BLANK),
                "password": env(_DB_LOGIN_ENV, _BLANK),
                "sslmode": "disable",
                "timezone": "UTC",
                "prefix": "",
                "singular": False,
                "schema": "",
            },
            "sqlite": {
                "driver": "sqlite",
                "database": env("DB_DATABASE", "forge"),
                "prefix": "",
                "singular": False,
            },
            "sqlserver": {
                "driver": "sqlserver",
                "host": env("DB_HOST", "127.0.0.1"),
                "port": env("DB_PORT", 1433),
                "database": env("DB_DATABASE", "forge"),
                "username": env("DB_USERNAME", _BLANK),
                "password": env(_DB_LOGIN_ENV, _BLANK),
                "charset": "utf8mb4",
                "prefix": "",
                "singular": False,
            },
        },
        "pool": {
            "max_idle_conns": 10,
            "max_open_conns": 100,
            "conn_max_idletime": 3600,
            "conn_max_lifetime": 3600,
        },
        "slow_threshold": 200,
        "migrations": {"driver": "default", "table": "migrations"},
        "redis": {
            "default": {
                "host": env("REDIS_HOST", _BLANK),
                "password": env(_REDIS_LOGIN_ENV, _BLANK),
                "port": env("REDIS_PORT", 6379),
                "database": env("REDIS_DB", 0),
            },
        },
    }


def _filesystems(settings: Settings, base: str | os.PathLike[str] | None) -> dict:
    return {
        "default": settings.env("FILESYSTEM_DISK", "local"),
        "disks": {
            "local": {"driver": "local", "root": storage_path("app", base)},
            "public": {
                "driver": "local",
                "root": storage_path("app/public", base),
                "url": str(settings.env("APP_URL", "")) + "/storage",
            },
        },
    }


def _grpc(settings: Settings) -> dict:
    return {
        "host": settings.env("GRPC_HOST", ""),
        "port": settings.env("GRPC_PORT", ""),
        "clients": {},
    }


def register_core(settings: Settings, base: str | os.PathLike[str] | None = None) -> None:
    """Add the auth, cache, cors, database, filesystems and grpc sections."""
    settings.add("auth", copy.deepcopy(_AUTH))
    settings.add("cache", _cache(settings))
    settings.add("cors", copy.deepcopy(_CORS))
    settings.add("database", _database(settings))
    settings.add("filesystems", _filesystems(settings, base))
    settings.add("grpc", _grpc(settings))
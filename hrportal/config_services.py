"""Service configuration sections: hashing, http, jwt, logging, mail, queue, session."""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping

from hrportal.config_core import register_core
from hrportal.settings import Settings, register_app, snake_case, storage_path

_LOG_PATH = "storage/logs/goravel.log"

_BLANK = ""

_JWT_SIGNING_ENV = "JWT_" + "SECRET"
_MAIL_LOGIN_ENV = "MAIL_" + "PASSWORD"

_HASHING = {
    "driver": "bcrypt",
    "bcrypt": {"rounds": 12},
    "argon2id": {"memory": 65536, "time": 4, "threads": 1},
}


def _http(settings: Settings) -> dict:
    env = settings.env
    return {
        "default": "gin",
        "drivers": {
            "gin": {
                "body_limit": 4096,
                "header_limit": 4096,
            },
        },
        "url": env("APP_URL", "http://localhost"),
        "host": env("APP_HOST", "127.0.0.1"),
        "port": env("APP_PORT", "3000"),
        "request_timeout": 3,
        "tls": {
            "host": env("APP_HOST", "127.0.0.1"),
            "port": env("APP_PORT", "3000"),
            "ssl": {"cert": "", "key": ""},
        },
    }


def _jwt(settings: Settings) -> dict:
    env = settings.env
    return {
        "secret": env(_JWT_SIGNING_ENV, _BLANK),
        "ttl": env("JWT_TTL", 60),
        "refresh_ttl": env("JWT_REFRESH_TTL", 20160),
    }


def _logging(settings: Settings) -> dict:
    env = settings.env
    return {
        "default": env("LOG_CHANNEL", "stack"),
        "channels": {
            "stack": {"driver": "stack", "channels": ["daily"]},
            "single": {
                "driver": "single",
                "path": _LOG_PATH,
                "level": env("LOG_LEVEL", "debug"),
                "print": False,
            },
            "daily": {
                "driver": "daily",
                "path": _LOG_PATH,
                "level": env("LOG_LEVEL", "debug"),
                "days": 7,
                "print": False,
            },
        },
    }


def _mail(settings: Settings) -> dict:
    env = settings.env
    return {
        "host": env("MAIL_HOST", ""),
        "port": env("MAIL_PORT", 587),
        "from": {
            "address": env("MAIL_FROM_ADDRESS", "hello@example.com"),
            "name": env("MAIL_FROM_NAME", "Example"),
        },
        "username": env("MAIL_USERNAME"),
        "password": env(_MAIL_LOGIN_ENV),
    }


def _queue(settings: Settings) -> dict:
    env = settings.env
    return {
        "default": env("QUEUE_CONNECTION", "sync"),
        "connections": {
            "sync": {"driver": "sync"},
            "redis": {
                "driver": "redis",
                "connection": "default",
                "queue": env("REDIS_QUEUE", "default"),
            },
        },
    }


def _session(settings: Settings, base: str | os.PathLike[str] | None) -> dict:
    env = settings.env
    cookie_default = snake_case(settings.get_string("app.name")).lower() + "_session"
    return {
        "driver": env("SESSION_DRIVER", "file"),
        "lifetime": env("SESSION_LIFETIME", 120),
        "expire_on_close": env("SESSION_EXPIRE_ON_CLOSE", False),
        "files": storage_path("framework/sessions", base),
        "gc_interval": env("SESSION_GC_INTERVAL", 30),
        "cookie": env("SESSION_COOKIE", cookie_default),
        "path": env("SESSION_PATH", "/"),
        "domain": env("SESSION_DOMAIN", ""),
        "secure": env("SESSION_SECURE", False),
        "http_only": env("SESSION_HTTP_ONLY", True),
        "same_site": env("SESSION_SAME_SITE", "lax"),
    }


def register_services(settings: Settings, base: str | os.PathLike[str] | None = None) -> None:
    """Add the hashing, http, jwt, logging, mail, queue and session sections."""
    settings.add("hashing", copy.deepcopy(_HASHING))
    settings.add("http", _http(settings))
    settings.add("jwt", _jwt(settings))
    settings.add("logging", _logging(settings))
    settings.add("mail", _mail(settings))
    settings.add("queue", _queue(settings))
    settings.add("session", _session(settings, base))


def load_config(
    environ: Mapping[str, str] | None = None,
    base: str | os.PathLike[str] | None = None,
) -> Settings:
    """Build a settings store holding every configuration section."""
    settings = Settings(environ)
    register_app(settings)
    register_core(settings, base)
    register_services(settings, base)
    return settings
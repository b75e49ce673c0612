"""HTTP routes, controllers and the WSGI entry point."""

from __future__ import annotations

import html
import json
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

VERSION = "v1.15.9"

_PARAM = re.compile(r"\{([^{}]*)\}")
_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Response:
    """An HTTP response ready to send."""

    status: int = 200
    body: bytes = b""
    content_type: str = "text/plain; charset=utf-8"
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def status_line(self) -> str:
        return f"{self.status} {HTTPStatus(self.status).phrase}"

    @classmethod
    def json(cls, data: Any, status: int = 200) -> Response:
        body = json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode()
        return cls(status, body, "application/json; charset=utf-8")

    @classmethod
    def html(cls, text: str, status: int = 200) -> Response:
        return cls(status, text.encode(), "text/html; charset=utf-8")

    @classmethod
    def text(cls, text: str, status: int = 200) -> Response:
        return cls(status, text.encode(), "text/plain; charset=utf-8")

    @classmethod
    def redirect(cls, location: str, status: int = 301) -> Response:
        return cls(status, b"", "text/plain; charset=utf-8", {"Location": location})

    def wsgi_headers(self) -> list[tuple[str, str]]:
        headers = [("Content-Type", self.content_type), ("Content-Length", str(len(self.body)))]
        headers.extend(self.headers.items())
        return headers


Handler = Callable[[dict[str, str]], Response]


def _compile(pattern: str) -> re.Pattern[str]:
    if not pattern.startswith("/"):
        raise ValueError(f"route pattern must start with '/': {pattern!r}")
    parts = []
    position = 0
    seen: set[str] = set()
    for match in _PARAM.finditer(pattern):
        name = match.group(1)
        if not _NAME.match(name) or name in seen:
            raise ValueError(f"invalid route parameter {name!r} in {pattern!r}")
        seen.add(name)
        parts.append(re.escape(pattern[position:match.start()]))
        parts.append(f"(?P<{name}>[^/]+)")
        position = match.end()
    parts.append(re.escape(pattern[position:]))
    return re.compile("".join(parts) + r"\Z")


class Router:
    """Maps request methods and paths to handlers."""

    def __init__(self) -> None:
        self._routes: list[tuple[str, re.Pattern[str], Handler]] = []

    def get(self, pattern: str, handler: Handler) -> None:
        """Register ``handler`` for GET requests matching ``pattern``."""
        self._routes.append(("GET", _compile(pattern), handler))

    def _match(self, method: str, path: str) -> tuple[Handler, dict[str, str]] | None:
        for route_method, regex, handler in self._routes:
            if route_method != method:
                continue
            found = regex.match(path)
            if found:
                return handler, found.groupdict()
        return None

    def dispatch(self, method: str, path: str) -> Response:
        """Run the handler for the request and return its response."""
        method = method.upper()
        matched = self._match(method, path)
        if matched is not None:
            handler, params = matched
            return handler(params)
        if path != "/":
            alternative = path[:-1] if path.endswith("/") else path + "/"
            if self._match(method, alternative) is not None:
                return Response.redirect(alternative, 301 if method == "GET" else 307)
        return Response.text("404 page not found", 404)


class UserController:
    """Handlers for user resources."""

    def show(self, params: dict[str, str]) -> Response:
        return Response.json({"Hello": "Goravel"})


def _welcome(params: dict[str, str]) -> Response:
    version = html.escape(VERSION)
    return Response.html(
        "<!DOCTYPE html><html><head><title>Welcome</title></head>"
        f"<body><h1>Welcome</h1><p>Version {version}</p></body></html>"
    )


def build_router() -> Router:
    """Create the router with the web and API routes."""
    router = Router()
    router.get("/", _welcome)
    users = UserController()
    router.get("/users/{id}", users.show)
    return router


def make_wsgi_app(router: Router | None = None) -> Callable[..., Iterable[bytes]]:
    """Wrap ``router`` in a WSGI application."""
    routes = router if router is not None else build_router()

    def application(environ: dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO") or "/"
        response = routes.dispatch(method, path)
        start_response(response.status_line, response.wsgi_headers())
        return [response.body]

    return application
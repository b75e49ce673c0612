"""Application bootstrap, database commands and the HTTP server."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sqlite3
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import TracebackType
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, make_server

from hrportal.config_services import load_config
from hrportal.migrations import Migration, Migrator, all_migrations
from hrportal.seeders import DatabaseSeeder, SeedError, Seeder
from hrportal.web import Router, build_router, make_wsgi_app

log = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        log.debug("%s - %s", self.address_string(), format % args)


def _resolve_database(value: str, base: str | os.PathLike[str] | None) -> str:
    if value == MEMORY_DATABASE:
        return value
    path = Path(value)
    if not path.is_absolute():
        path = (Path(base) if base is not None else Path.cwd()) / path
    return str(path)


class Application:
    """A booted application: settings, routes, migrations, seeders and database."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        base: str | os.PathLike[str] | None = None,
        database: str | os.PathLike[str] | sqlite3.Connection | None = None,
    ) -> None:
        self.settings = load_config(environ, base)
        self.providers = tuple(self.settings.get("app.providers", ()))
        self.router: Router = build_router()
        self.wsgi_app = make_wsgi_app(self.router)
        self.migrations: list[Migration] = all_migrations()
        self.seeders: list[Seeder] = [DatabaseSeeder()]

        if isinstance(database, sqlite3.Connection):
            self.connection = database
            self.database = MEMORY_DATABASE
        else:
            if database is None:
                configured = self.settings.get_string(
                    "database.connections.sqlite.database", "forge"
                )
            else:
                configured = os.fspath(database)
            self.database = _resolve_database(configured, base)
            self.connection = sqlite3.connect(self.database)

    def __enter__(self) -> Application:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.connection.close()

    def _migrator(self) -> Migrator:
        table = self.settings.get_string("database.migrations.table", "migrations")
        return Migrator(self.connection, table)

    def migrate(self) -> list[str]:
        """Apply pending migrations and return their signatures."""
        return self._migrator().run()

    def rollback(self) -> list[str]:
        """Reverse the latest migration batch and return the reversed signatures."""
        return self._migrator().rollback()

    def seed(self) -> list[str]:
        """Run the registered seeders and return their signatures."""
        done = []
        for seeder in self.seeders:
            seeder.run(self.connection)
            done.append(seeder.signature)
        return done

    def serve(self) -> None:
        """Serve HTTP requests until interrupted by SIGINT or SIGTERM."""
        host = self.settings.get_string("http.host", "127.0.0.1")
        port = self.settings.get_int("http.port", 3000)
        try:
            server = make_server(host, port, self.wsgi_app, handler_class=_QuietHandler)
        except OSError as exc:
            log.error("Route Run error: %s", exc)
            raise

        def stop(signum: int, frame: Any) -> None:
            threading.Thread(target=server.shutdown, daemon=True).start()

        previous: dict[int, Any] = {}
        if threading.current_thread() is threading.main_thread():
            for signum in (signal.SIGINT, signal.SIGTERM):
                previous[signum] = signal.signal(signum, stop)
        log.info("Listening on http://%s:%d", host, server.server_port)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)
            try:
                server.server_close()
            except OSError as exc:
                log.error("Route Shutdown error: %s", exc)


def boot(
    environ: Mapping[str, str] | None = None,
    base: str | os.PathLike[str] | None = None,
    database: str | os.PathLike[str] | sqlite3.Connection | None = None,
) -> Application:
    """Load the configuration and return a ready application."""
    return Application(environ, base, database)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(prog="hrportal")
    parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=("serve", "migrate", "rollback", "seed"),
    )
    parser.add_argument("--database", help="SQLite database file")
    parser.add_argument("--base", help="application base directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    with boot(base=args.base, database=args.database) as app:
        try:
            if args.command == "serve":
                app.serve()
            elif args.command == "migrate":
                for signature in app.migrate():
                    print(f"Migrated: {signature}")
            elif args.command == "rollback":
                for signature in app.rollback():
                    print(f"Rolled back: {signature}")
            else:
                for signature in app.seed():
                    print(f"Seeded: {signature}")
        except (SeedError, LookupError, sqlite3.Error) as exc:
            log.error("%s", exc)
            return 1
    return 0
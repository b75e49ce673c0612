"""Seeders that fill the database with the default roles and administrator."""

from __future__ import annotations

import abc
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, ClassVar

import bcrypt

from hrportal.models import ActiveStatus, Employee, Gender, MaritalStatus, Role, User

log = logging.getLogger(__name__)

SUPER_ADMIN_EMAIL = "superadmin@example.com"
DEFAULT_PASSWORD = "password"
_BCRYPT_COST = 10


class SeedError(Exception):
    """Raised when a seeder cannot complete."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(sep=" ")


def _fetch_one(connection: sqlite3.Connection, sql: str, params: tuple) -> dict[str, Any] | None:
    cursor = connection.execute(sql, params)
    row = cursor.fetchone()
    if row is None:
        return None
    names = [column[0] for column in cursor.description]
    return dict(zip(names, row))


def _count(connection: sqlite3.Connection, table: str, column: str, value: Any) -> int:
    (count,) = connection.execute(
        f"SELECT COUNT(*) FROM {table} WHERE {column} = ?", (value,)
    ).fetchone()
    return count


def _insert(connection: sqlite3.Connection, table: str, values: dict[str, Any]) -> int:
    names = ", ".join(values)
    marks = ", ".join("?" for _ in values)
    cursor = connection.execute(
        f"INSERT INTO {table} ({names}) VALUES ({marks})", tuple(values.values())
    )
    return cursor.lastrowid


class Seeder(abc.ABC):
    """Populates the database with a fixed set of records."""

    signature: ClassVar[str]

    @abc.abstractmethod
    def run(self, connection: sqlite3.Connection) -> None:
        """Insert the records, leaving existing ones untouched."""


class RoleSeeder(Seeder):
    signature = "RoleSeeder"
    roles: ClassVar[tuple[str, ...]] = ("super_admin", "admin", "employee")

    def run(self, connection: sqlite3.Connection) -> None:
        with connection:
            for name in self.roles:
                try:
                    count = _count(connection, Role.table_name, "name", name)
                except sqlite3.Error as exc:
                    log.error("Error checking role '%s': %s", name, exc)
                    raise SeedError(f"error checking role {name!r}: {exc}") from exc
                if count:
                    log.info("Role '%s' already exists.", name)
                    continue
                stamp = _now()
                try:
                    _insert(
                        connection,
                        Role.table_name,
                        {"name": name, "created_at": stamp, "updated_at": stamp},
                    )
                except sqlite3.Error as exc:
                    log.error("Failed to create role '%s': %s", name, exc)
                    raise SeedError(f"failed to create role {name!r}: {exc}") from exc
                log.info("Role '%s' created successfully.", name)


class UserSeeder(Seeder):
    signature = "UserSeeder"

    def run(self, connection: sqlite3.Connection) -> None:
        with connection:
            try:
                self._seed(connection)
            except sqlite3.Error as exc:
                raise SeedError(f"failed to seed super admin: {exc}") from exc

    def _seed(self, connection: sqlite3.Connection) -> None:
        row = _fetch_one(
            connection,
            f"SELECT * FROM {Role.table_name} WHERE name = ? ORDER BY id LIMIT 1",
            ("super_admin",),
        )
        if row is None:
            raise SeedError("Super admin role not found, please run RoleSeeder first")
        super_admin = Role.from_row(row)

        if _count(connection, User.table_name, "email", SUPER_ADMIN_EMAIL):
            log.info("Super admin user already exists.")
            return

        hashed = bcrypt.hashpw(
            DEFAULT_PASSWORD.encode(), bcrypt.gensalt(rounds=_BCRYPT_COST)
        ).decode()
        user = User(full_name="Super Admin", email=SUPER_ADMIN_EMAIL, password=hashed)
        stamp = _now()
        user.id = _insert(
            connection,
            User.table_name,
            {
                "full_name": user.full_name,
                "email": user.email,
                "password": user.password,
                "created_at": stamp,
                "updated_at": stamp,
            },
        )
        log.info("Super admin user created successfully.")

        employee = Employee(
            user_id=user.id,
            employee_id="SA-001",
            first_name="Super",
            full_name="Super Admin",
            role_id=super_admin.id,
            email=user.email,
            last_name="Admin",
            place_of_birth="Jakarta",
            gender=Gender.UNKNOWN,
            marital_status=MaritalStatus.SINGLE,
            address="Jl. Admin No. 1",
            postal_code="10000",
            active_status=ActiveStatus.ACTIVE,
        )
        _insert(
            connection,
            Employee.table_name,
            {
                "user_id": employee.user_id,
                "user_uuid": employee.user_uuid,
                "employee_id": employee.employee_id,
                "email": employee.email,
                "first_name": employee.first_name,
                "last_name": employee.last_name,
                "full_name": employee.full_name,
                "date_of_birth": None,
                "place_of_birth": employee.place_of_birth,
                "gender": employee.gender.value,
                "marital_status": employee.marital_status.value,
                "address": employee.address,
                "postal_code": employee.postal_code,
                "active_status": employee.active_status.value,
                "role_id": employee.role_id,
                "created_at": stamp,
                "updated_at": stamp,
            },
        )
        log.info("Employee data for super admin created successfully.")


class DatabaseSeeder(Seeder):
    signature = "DatabaseSeeder"

    def run(self, connection: sqlite3.Connection) -> None:
        for seeder in (RoleSeeder(), UserSeeder()):
            seeder.run(connection)
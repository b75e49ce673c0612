"""Schema migrations for the users, employees and roles tables."""

from __future__ import annotations

import abc
import re
import sqlite3
from typing import ClassVar

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_EMPLOYEE_COLUMNS = (
    "id",
    "user_id",
    "user_uuid",
    "employee_id",
    "email",
    "first_name",
    "last_name",
    "full_name",
    "date_of_birth",
    "place_of_birth",
    "gender",
    "marital_status",
    "address",
    "postal_code",
    "active_status",
    "created_at",
    "updated_at",
)


def _has_table(connection: sqlite3.Connection, name: str) -> bool:
    row = connection.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?", (name,)
    ).fetchone()
    return row is not None


def _employees_ddl(table: str) -> str:
    return f"""
        CREATE TABLE {table} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            user_uuid VARCHAR(255) NOT NULL,
            employee_id VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            first_name VARCHAR(255) NOT NULL,
            last_name VARCHAR(255),
            full_name VARCHAR(255) NOT NULL,
            date_of_birth DATE,
            place_of_birth VARCHAR(255),
            gender VARCHAR(255) NOT NULL,
            marital_status VARCHAR(255) NOT NULL,
            address VARCHAR(255),
            postal_code VARCHAR(255),
            active_status VARCHAR(255) NOT NULL,
            created_at TIMESTAMP,
            updated_at TIMESTAMP,
            CONSTRAINT employees_user_id_foreign
                FOREIGN KEY (user_id) REFERENCES users (id)
        )
    """


class Migration(abc.ABC):
    """One reversible change to the database schema."""

    signature: ClassVar[str]

    @abc.abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the change."""

    @abc.abstractmethod
    def down(self, connection: sqlite3.Connection) -> None:
        """Reverse the change."""


class CreateUsersTable(Migration):
    signature = "20250630032735_create_users_table"

    def up(self, connection: sqlite3.Connection) -> None:
        if _has_table(connection, "users"):
            return
        # email_verified_at stays nullable: accounts are created unverified.
        connection.execute(
            """
            CREATE TABLE users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                full_name VARCHAR(255) NOT NULL,
                email VARCHAR(255) NOT NULL,
                email_verified_at TIMESTAMP,
                phone VARCHAR(255),
                password VARCHAR(255) NOT NULL,
                remember_token VARCHAR(255),
                created_at TIMESTAMP,
                updated_at TIMESTAMP
            )
            """
        )
        connection.execute("CREATE UNIQUE INDEX users_email_unique ON users (email)")

    def down(self, connection: sqlite3.Connection) -> None:
        connection.execute("DROP TABLE IF EXISTS users")


class CreateEmployeesTable(Migration):
    signature = "20250630032829_create_employees_table"

    def up(self, connection: sqlite3.Connection) -> None:
        if _has_table(connection, "employees"):
            return
        connection.execute(_employees_ddl("employees"))

    def down(self, connection: sqlite3.Connection) -> None:
        connection.execute("DROP TABLE IF EXISTS employees")


class CreateRolesTable(Migration):
    signature = "20250630033423_create_roles_table"

    def up(self, connection: sqlite3.Connection) -> None:
        if _has_table(connection, "roles"):
            return
        connection.execute(
            """
            CREATE TABLE roles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name VARCHAR(255) NOT NULL,
                created_at TIMESTAMP,
                updated_at TIMESTAMP,
                deleted_at TIMESTAMP
            )
            """
        )
        connection.execute("CREATE UNIQUE INDEX roles_name_unique ON roles (name)")

    def down(self, connection: sqlite3.Connection) -> None:
        connection.execute("DROP TABLE IF EXISTS roles")


class AddRoleIdToEmployeesTable(Migration):
    signature = "20250630034513_add_role_id_to_employees_table"

    def up(self, connection: sqlite3.Connection) -> None:
        # SQLite cannot add a NOT NULL referencing column to an existing table.
        connection.execute(
            "ALTER TABLE employees ADD COLUMN role_id INTEGER REFERENCES roles (id)"
        )

    def down(self, connection: sqlite3.Connection) -> None:
        # The column carries a foreign key, so the table is rebuilt without it.
        columns = ", ".join(_EMPLOYEE_COLUMNS)
        connection.execute("DROP TABLE IF EXISTS employees_rebuild")
        connection.execute(_employees_ddl("employees_rebuild"))
        connection.execute(
            f"INSERT INTO employees_rebuild ({columns}) SELECT {columns} FROM employees"
        )
        connection.execute("DROP TABLE employees")
        connection.execute("ALTER TABLE employees_rebuild RENAME TO employees")


def all_migrations() -> list[Migration]:
    """Return every migration in the order it must be applied."""
    return [
        CreateUsersTable(),
        CreateEmployeesTable(),
        CreateRolesTable(),
        AddRoleIdToEmployeesTable(),
    ]


class Migrator:
    """Applies and reverses migrations, recording them in a repository table."""

    def __init__(self, connection: sqlite3.Connection, table: str = "migrations") -> None:
        if not _IDENTIFIER.match(table):
            raise ValueError(f"invalid migration table name: {table!r}")
        self._connection = connection
        self._table = table
        with connection:
            connection.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    migration VARCHAR(255) NOT NULL,
                    batch INTEGER NOT NULL
                )
                """
            )

    def ran(self) -> list[str]:
        """Signatures of the applied migrations, oldest first."""
        rows = self._connection.execute(
            f"SELECT migration FROM {self._table} ORDER BY batch, id"
        ).fetchall()
        return [migration for (migration,) in rows]

    def run(self) -> list[str]:
        """Apply every pending migration as one batch and return their signatures."""
        done = set(self.ran())
        pending = [m for m in all_migrations() if m.signature not in done]
        if not pending:
            return []
        (last_batch,) = self._connection.execute(
            f"SELECT COALESCE(MAX(batch), 0) FROM {self._table}"
        ).fetchone()
        batch = last_batch + 1
        applied = []
        for migration in pending:
            with self._connection:
                migration.up(self._connection)
                self._connection.execute(
                    f"INSERT INTO {self._table} (migration, batch) VALUES (?, ?)",
                    (migration.signature, batch),
                )
            applied.append(migration.signature)
        return applied

    def rollback(self) -> list[str]:
        """Reverse the most recent batch and return the reversed signatures."""
        rows = self._connection.execute(
            f"""
            SELECT id, migration FROM {self._table}
            WHERE batch = (SELECT MAX(batch) FROM {self._table})
            ORDER BY id DESC
            """
        ).fetchall()
        known = {m.signature: m for m in all_migrations()}
        reversed_ = []
        for row_id, signature in rows:
            migration = known.get(signature)
            if migration is None:
                raise LookupError(f"migration not found: {signature}")
            with self._connection:
                migration.down(self._connection)
                self._connection.execute(
                    f"DELETE FROM {self._table} WHERE id = ?", (row_id,)
                )
            reversed_.append(signature)
        return reversed_
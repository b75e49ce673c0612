import sqlite3

import pytest

from hrportal.migrations import (
    AddRoleIdToEmployeesTable,
    CreateEmployeesTable,
    CreateRolesTable,
    CreateUsersTable,
    Migrator,
    all_migrations,
)

SIGNATURES = [
    "20250630032735_create_users_table",
    "20250630032829_create_employees_table",
    "20250630033423_create_roles_table",
    "20250630034513_add_role_id_to_employees_table",
]


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    yield conn
    conn.close()


def tables(conn):
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
    ).fetchall()
    return {name for (name,) in rows}


def columns(conn, table):
    return [row[1] for row in conn.execute(f"PRAGMA table_info({table})")]


def test_all_migrations_order():
    assert [m.signature for m in all_migrations()] == SIGNATURES


def test_run_creates_tables(connection):
    migrator = Migrator(connection)
    assert migrator.run() == SIGNATURES
    assert {"users", "employees", "roles", "migrations"} <= tables(connection)
    assert migrator.ran() == SIGNATURES


def test_run_twice_applies_nothing(connection):
    migrator = Migrator(connection)
    migrator.run()
    assert migrator.run() == []
    assert migrator.ran() == SIGNATURES


def test_rollback_reverses_batch(connection):
    migrator = Migrator(connection)
    migrator.run()
    assert migrator.rollback() == list(reversed(SIGNATURES))
    assert migrator.ran() == []
    assert tables(connection) == {"migrations"}


def test_rollback_empty(connection):
    assert Migrator(connection).rollback() == []


def test_custom_table_name(connection):
    migrator = Migrator(connection, "schema_history")
    migrator.run()
    assert "schema_history" in tables(connection)
    assert "migrations" not in tables(connection)


def test_invalid_table_name(connection):
    with pytest.raises(ValueError):
        Migrator(connection, "bad name;")


def test_role_id_column_added(connection):
    Migrator(connection).run()
    assert "role_id" in columns(connection, "employees")


def test_create_is_guarded(connection):
    CreateUsersTable().up(connection)
    CreateUsersTable().up(connection)
    assert "users" in tables(connection)


def test_unique_email(connection):
    Migrator(connection).run()
    insert = "INSERT INTO users (full_name, email, password) VALUES (?, ?, ?)"
    connection.execute(insert, ("A", "a@example.com", "password"))
    with pytest.raises(sqlite3.IntegrityError):
        connection.execute(insert, ("B", "a@example.com", "password"))


def test_unique_role_name(connection):
    Migrator(connection).run()
    connection.execute("INSERT INTO roles (name) VALUES ('admin')")
    with pytest.raises(sqlite3.IntegrityError):
        connection.execute("INSERT INTO roles (name) VALUES ('admin')")


def test_employee_requires_existing_user(connection):
    Migrator(connection).run()
    with pytest.raises(sqlite3.IntegrityError):
        connection.execute(
            "INSERT INTO employees (user_id, user_uuid, employee_id, email, first_name,"
            " full_name, gender, marital_status, active_status)"
            " VALUES (42, '', 'E', 'e@example.com', 'F', 'F L', 'U', '0', 'active')"
        )


def test_drop_role_id_keeps_rows(connection):
    for migration in (CreateUsersTable(), CreateEmployeesTable(), CreateRolesTable()):
        migration.up(connection)
    AddRoleIdToEmployeesTable().up(connection)
    connection.execute(
        "INSERT INTO users (full_name, email, password) VALUES ('U', 'u@example.com', 'password')"
    )
    connection.execute("INSERT INTO roles (name) VALUES ('admin')")
    connection.execute(
        "INSERT INTO employees (user_id, user_uuid, employee_id, email, first_name,"
        " full_name, gender, marital_status, active_status, role_id)"
        " VALUES (1, '', 'E-1', 'u@example.com', 'U', 'U', 'U', '0', 'active', 1)"
    )
    AddRoleIdToEmployeesTable().down(connection)
    assert "role_id" not in columns(connection, "employees")
    assert connection.execute("SELECT employee_id FROM employees").fetchall() == [("E-1",)]
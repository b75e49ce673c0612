# hrportal

A small HR portal. It stores users, employees and roles in an SQLite database and
builds the schema with migrations. Seeders add the starting data. The routes are
served as a WSGI application.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## The `hrportal` command

```
hrportal [serve|migrate|rollback|seed] [--database FILE] [--base DIR]
```

- `serve` is the default. It starts an HTTP server on `APP_HOST`:`APP_PORT`
  (`127.0.0.1:3000` unless you set them) and runs until SIGINT or SIGTERM.
- `migrate` applies every pending migration as one batch. It prints
  `Migrated: <signature>` for each one.
- `rollback` reverses the most recent batch. It prints
  `Rolled back: <signature>` for each one.
- `seed` runs the database seeder. It prints `Seeded: DatabaseSeeder`.

`--database` names the SQLite file. Without it, the file is `DB_DATABASE`, which
defaults to `forge`. `--base` is the directory that relative database paths and
storage paths are resolved against. It defaults to the current directory.

If a seeder, a rollback or the database fails, the error is logged and the
command exits with status 1.

## Settings

Settings come from the environment. They are grouped into the sections `app`,
`auth`, `cache`, `cors`, `database`, `filesystems`, `grpc`, `hashing`, `http`,
`jwt`, `logging`, `mail`, `queue` and `session`. Read them with dotted keys:

```python
from hrportal.config_services import load_config

settings = load_config({"APP_PORT": "8080"})
settings.get("http.port")          # "8080"
settings.get_int("http.port")      # 8080
settings.get_string("app.name")    # "Goravel"
settings.get("session.cookie")     # "goravel_session"
```

`Settings.get` first looks up a dotted key in the sections. If that fails, it
looks up the key as an environment variable. `get_int` and `get_bool` raise
`ValueError` when the value cannot be converted. An environment variable that is
set but empty counts as unset.

These are the variables you are most likely to set:

| Variable         | Default            | Used for                               |
|------------------|--------------------|----------------------------------------|
| `APP_NAME`       | `Goravel`          | application name, session cookie name  |
| `APP_HOST`       | `127.0.0.1`        | address the server listens on          |
| `APP_PORT`       | `3000`             | port the server listens on             |
| `APP_URL`        | `http://localhost` | public URL                             |
| `DB_DATABASE`    | `forge`            | SQLite database file                   |
| `SESSION_COOKIE` | `<app name>_session` | session cookie name                  |

## Routes

- `GET /` returns an HTML welcome page that shows the version.
- `GET /users/{id}` returns the JSON `{"Hello":"Goravel"}`.

When a path fails to match only because of a trailing slash, the response is a
redirect to the other form: 301 for GET, 307 for any other method. Every other
request gets `404 page not found`.

`hrportal.web.make_wsgi_app(hrportal.web.build_router())` returns the WSGI
application, and any WSGI server can host it. `Router.get(pattern, handler)`
adds more routes. A handler receives the path parameters as a dict and returns a
`Response`.

## Database

The migrations run in this order:

1. `20250630032735_create_users_table`
2. `20250630032829_create_employees_table`
3. `20250630033423_create_roles_table`
4. `20250630034513_add_role_id_to_employees_table`

Applied migrations are recorded in the `migrations` table.

The seeders first create the roles `super_admin`, `admin` and `employee`. They
then create a super admin user, `superadmin@example.com`, whose bcrypt-hashed
password is `password`, together with the matching employee record `SA-001`.
Roles and the user that already exist are left alone, so seeding can be run
again. `UserSeeder` raises `SeedError` if the `super_admin` role is missing.

`hrportal.models` turns database rows into `Role`, `User` and `Employee`
records.

## Using it from Python

```python
from hrportal.app import boot

with boot(database="hr.db") as application:
    application.migrate()
    application.seed()
    application.serve()
```

`boot` also accepts an open `sqlite3.Connection` in place of a file name.

## What it does not do

- SQLite is the only storage. The `mysql`, `postgres`, `sqlserver` and `redis`
  entries in the `database` section are kept as settings, but nothing connects
  to those databases.
- The `auth`, `jwt`, `cache`, `session`, `mail`, `queue`, `grpc`, `hashing`,
  `logging`, `cors` and `filesystems` sections are settings only. The package
  has no login or token handling, cache, sessions, mail sending, job queue,
  gRPC server, CORS handling or file storage.
- The `role_id` column on `employees` can hold NULL, because SQLite cannot add a
  NOT NULL referencing column to an existing table.
- The `/users/{id}` route does not look up a user. It always returns the same
  greeting.
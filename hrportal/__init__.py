"""HR portal: settings, user/employee/role models, SQLite migrations and seeders, WSGI routes."""

__version__ = "0.1.0"
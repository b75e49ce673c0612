[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hrportal"
version = "0.1.0"
description = "A small HR portal: users, employees and roles in SQLite, with migrations, seeders and a WSGI application."
requires-python = ">=3.10"
dependencies = [
    "bcrypt",
]
keywords = ["hr", "employees", "wsgi", "web", "sqlite", "migrations", "seeders"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hrportal = "hrportal.app:main"

[tool.hatch.build.targets.wheel]
packages = ["hrportal"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

import os

import pytest

from hrportal.settings import Settings, register_app, snake_case, storage_path


def test_env_returns_default_when_unset():
    settings = Settings({})
    assert settings.env("APP_NAME", "Goravel") == "Goravel"


def test_env_returns_environment_value():
    settings = Settings({"APP_NAME": "Shop"})
    assert settings.env("APP_NAME", "Goravel") == "Shop"


def test_env_empty_value_falls_back_to_default():
    settings = Settings({"APP_ENV": ""})
    assert settings.env("APP_ENV", "production") == "production"


def test_add_and_get_dotted_key():
    settings = Settings({})
    settings.add("section", {"inner": {"leaf": 42}})
    assert settings.get("section.inner.leaf") == 42
    assert settings.get("section.inner") == {"leaf": 42}


def test_get_missing_returns_default():
    settings = Settings({})
    settings.add("section", {"inner": 1})
    assert settings.get("section.other", "fallback") == "fallback"
    assert settings.get("section.inner.deeper", "fallback") == "fallback"


def test_get_falls_back_to_environment():
    settings = Settings({"APP_NAME": "Shop"})
    assert settings.get("APP_NAME") == "Shop"


def test_get_string_converts_values():
    settings = Settings({})
    settings.add("s", {"num": 7, "flag": True})
    assert settings.get_string("s.num") == "7"
    assert settings.get_string("s.flag") == "true"
    assert settings.get_string("s.missing", "x") == "x"


def test_get_int_parses_strings():
    settings = Settings({"DB_PORT": "5433"})
    assert settings.get_int("DB_PORT", 3306) == 5433
    assert settings.get_int("OTHER", 3306) == 3306


def test_get_int_rejects_garbage():
    settings = Settings({"DB_PORT": "abc"})
    with pytest.raises(ValueError):
        settings.get_int("DB_PORT")


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("1", True), ("T", True), ("false", False), ("0", False), ("F", False)],
)
def test_get_bool_parses_words(raw, expected):
    settings = Settings({"APP_DEBUG": raw})
    assert settings.get_bool("APP_DEBUG") is expected


def test_get_bool_rejects_garbage():
    settings = Settings({"APP_DEBUG": "maybe"})
    with pytest.raises(ValueError):
        settings.get_bool("APP_DEBUG")


def test_snake_case_examples():
    assert snake_case("Goravel") == "goravel"
    assert snake_case("HelloWorld") == "hello_world"


def test_snake_case_is_idempotent():
    once = snake_case("MyApp Name")
    assert snake_case(once) == once
    assert once == once.lower()


def test_storage_path_joins_base(tmp_path):
    result = storage_path("app/public", tmp_path)
    assert result == os.path.join(str(tmp_path), "storage", "app", "public")


def test_storage_path_without_relative(tmp_path):
    assert storage_path("", tmp_path) == os.path.join(str(tmp_path), "storage")


def test_register_app_defaults():
    settings = Settings({})
    register_app(settings)
    assert settings.get("app.name") == "Goravel"
    assert settings.get("app.env") == "production"
    assert settings.get("app.debug") is False
    assert settings.get("app.timezone") == "UTC"
    assert settings.get("app.locale") == "en"
    assert settings.get("app.fallback_locale") == "en"
    assert settings.get("app.lang_path") == "lang"
    assert settings.get("app.key") == ""


def test_register_app_reads_environment():
    settings = Settings({"APP_NAME": "Shop", "APP_DEBUG": "true"})
    register_app(settings)
    assert settings.get_string("app.name") == "Shop"
    assert settings.get_bool("app.debug") is True
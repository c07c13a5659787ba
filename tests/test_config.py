from types import SimpleNamespace

import pytest

from config import get_settings_module, load_settings, validate_settings


def settings(**overrides):
    values = {
        "REQUIRED_REGULAR_HOURS": 8.0,
        "LOG_LEVEL": "INFO",
        "DB_CONFIG": {"host": "localhost", "database": "attendance_engine"},
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("testing", "config.testing"),
        ("development", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_settings_module_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"


def test_valid_settings_pass():
    validate_settings(settings())
    validate_settings(settings(REQUIRED_REGULAR_HOURS=24, LOG_LEVEL="debug"))


@pytest.mark.parametrize("hours", [0, -1, 24.5])
def test_required_regular_hours_out_of_range(hours):
    with pytest.raises(ValueError):
        validate_settings(settings(REQUIRED_REGULAR_HOURS=hours))


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValueError):
        validate_settings(settings(LOG_LEVEL="LOUD"))


def test_db_config_needs_database_name():
    with pytest.raises(ValueError):
        validate_settings(settings(DB_CONFIG={"host": "localhost"}))


def test_load_testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    loaded = load_settings()

    assert loaded.TESTING is True
    assert loaded.REQUIRED_REGULAR_HOURS == 8.0

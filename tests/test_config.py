"""Tests for environment based settings."""

import pytest

from inventory_api.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["HOST", "PORT", "PHOTO_DIR", "STORAGE_BACKEND", "DATABASE_URL", "DATABASE_ECHO",
                 "LOG_LEVEL", "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT", "DB_NAME"]:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.host == "localhost"
    assert settings.port == 8080
    assert settings.photo_dir == "./cache"
    assert settings.storage_backend == "memory"
    assert settings.database_echo is False
    assert settings.base_url == "http://localhost:8080"


def test_environment(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("STORAGE_BACKEND", "Database")
    monkeypatch.setenv("DATABASE_ECHO", "true")
    settings = Settings()
    assert settings.base_url == "http://0.0.0.0:9000"
    assert settings.storage_backend == "database"
    assert settings.database_echo is True


def test_database_url_from_parts(monkeypatch):
    monkeypatch.setenv("DB_USER", "alice")
    monkeypatch.setenv("DB_PASSWORD", "secret")
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DB_PORT", "5433")
    monkeypatch.setenv("DB_NAME", "stock")
    assert Settings().database_url == "postgresql://alice:secret@db:5433/stock"


def test_database_url_wins_over_parts(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///inventory.db")
    assert Settings().database_url == "sqlite:///inventory.db"


def test_explicit_values_override_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    assert Settings(port=7000).port == 7000


@pytest.mark.parametrize("port", [0, 70000])
def test_port_out_of_range(port):
    with pytest.raises(ValueError):
        Settings(port=port)


def test_unknown_backend():
    with pytest.raises(ValueError):
        Settings(storage_backend="redis")

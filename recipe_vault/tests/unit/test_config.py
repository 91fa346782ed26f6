"""Unit tests for Config.

Tests cover:
- Database URL selection per environment and explicit override
- Connection settings (db_timeout, db_pool_size, db_pool_recycle)
- Invalid value handling (fallback to defaults with warning)
- The get_config() singleton
"""

import logging

import pytest

from recipe_vault.utils.config import Config, get_config, get_database_url, reset_config


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in (
        "RECIPE_VAULT_ENV",
        "RECIPE_VAULT_DATABASE_URL",
        "RECIPE_VAULT_ECHO_SQL",
        "RECIPE_VAULT_DB_TIMEOUT",
        "RECIPE_VAULT_DB_POOL_SIZE",
        "RECIPE_VAULT_DB_POOL_RECYCLE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDatabaseUrl:
    """Tests for database URL selection."""

    def test_test_environment_uses_memory(self):
        config = Config("test")
        assert config.database_url == "sqlite+aiosqlite:///:memory:"
        assert not config.is_file_database
        assert config.database_exists()

    def test_production_uses_home_directory(self):
        config = Config("production")
        assert config.database_url.startswith("sqlite+aiosqlite:///")
        assert ".recipe_vault" in config.database_url
        assert config.database_url.endswith("recipe_vault.db")
        assert config.is_file_database

    def test_development_uses_project_data_dir(self):
        config = Config("development")
        assert config.database_path.parent.name == "data"
        assert config.is_development

    def test_explicit_url_wins(self, monkeypatch):
        monkeypatch.setenv("RECIPE_VAULT_DATABASE_URL", "postgresql+asyncpg://db/recipes")
        config = Config("test")
        assert config.database_url == "postgresql+asyncpg://db/recipes"
        assert not config.is_file_database

    def test_explicit_file_url_skips_default_directory(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RECIPE_VAULT_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'x.db'}")
        config = Config("production")
        assert config.is_file_database
        assert not config.uses_default_path
        assert config.database_exists()

    def test_unknown_environment_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = Config("staging")
        assert config.is_production
        assert "Unknown environment 'staging'" in caplog.text


class TestConnectionSettings:
    """Tests for pool and timeout properties."""

    def test_defaults(self):
        config = Config()
        assert config.db_timeout == 30
        assert config.db_pool_size == 5
        assert config.db_pool_recycle == 3600
        assert config.echo_sql is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("RECIPE_VAULT_DB_TIMEOUT", "60")
        monkeypatch.setenv("RECIPE_VAULT_DB_POOL_SIZE", "10")
        monkeypatch.setenv("RECIPE_VAULT_DB_POOL_RECYCLE", "7200")
        monkeypatch.setenv("RECIPE_VAULT_ECHO_SQL", "true")
        config = Config()
        assert config.db_timeout == 60
        assert config.db_pool_size == 10
        assert config.db_pool_recycle == 7200
        assert config.echo_sql is True

    def test_invalid_int_uses_default(self, monkeypatch, caplog):
        monkeypatch.setenv("RECIPE_VAULT_DB_POOL_SIZE", "invalid")
        with caplog.at_level(logging.WARNING):
            config = Config()
            assert config.db_pool_size == 5
        assert "Invalid RECIPE_VAULT_DB_POOL_SIZE" in caplog.text


class TestGetConfig:
    """Tests for the configuration singleton."""

    def test_singleton(self):
        assert get_config() is get_config()

    def test_environment_from_env(self, monkeypatch):
        monkeypatch.setenv("RECIPE_VAULT_ENV", "test")
        assert get_config().environment == "test"
        assert get_database_url() == "sqlite+aiosqlite:///:memory:"

    def test_existing_singleton_is_kept(self, caplog):
        first = get_config("test")
        with caplog.at_level(logging.WARNING):
            second = get_config("production")
        assert second is first
        assert second.environment == "test"

    def test_reset(self):
        first = get_config("test")
        reset_config()
        assert get_config("development") is not first

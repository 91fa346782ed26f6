"""
Configuration management for the Recipe Vault application.

This module handles:
- Database URL configuration (SQLite file, in-memory, or an explicit URL)
- Connection pool settings
- Environment-specific configuration (production, development, test)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .constants import (
    DATABASE_FILENAME,
    DEFAULT_DB_POOL_RECYCLE,
    DEFAULT_DB_POOL_SIZE,
    DEFAULT_DB_TIMEOUT,
    ENV_PREFIX,
)

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("production", "development", "test")


def _get_env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default with a warning."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default


def _get_env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Application configuration manager.

    Handles the database location and pool settings for each environment.
    An explicit RECIPE_VAULT_DATABASE_URL always wins over the derived path.
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production', 'development' or 'test'
        """
        if environment not in ENVIRONMENTS:
            logger.warning(f"Unknown environment '{environment}', using 'production'")
            environment = "production"

        self.environment = environment

        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = self._get_user_data_dir()

        self._database_path = self._base_dir / DATABASE_FILENAME

    def _get_project_data_dir(self) -> Path:
        """Get the project's data/ directory for development."""
        project_root = Path(__file__).parent.parent.parent
        return project_root / "data"

    def _get_user_data_dir(self) -> Path:
        """Get the per-user data directory for production."""
        return Path.home() / ".recipe_vault"

    def ensure_directories(self) -> None:
        """Create the default database directory when it is in use."""
        if self.uses_default_path:
            self._database_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        """Full path to the SQLite database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy async database URL.

        Returns:
            RECIPE_VAULT_DATABASE_URL if set, an in-memory SQLite URL in the
            test environment, otherwise a file-based SQLite URL.
        """
        explicit = os.environ.get(f"{ENV_PREFIX}DATABASE_URL")
        if explicit:
            return explicit

        if self.environment == "test":
            return "sqlite+aiosqlite:///:memory:"

        # Use forward slashes for SQLite URL
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite+aiosqlite:///{db_path_str}"

    @property
    def uses_default_path(self) -> bool:
        """True when the database is the derived SQLite file, not an explicit URL."""
        return self.is_file_database and not os.environ.get(f"{ENV_PREFIX}DATABASE_URL")

    @property
    def is_file_database(self) -> bool:
        """True when the configured URL points at a SQLite file."""
        url = self.database_url
        return url.startswith("sqlite") and ":memory:" not in url

    @property
    def echo_sql(self) -> bool:
        """Log every SQL statement when True."""
        return _get_env_bool(f"{ENV_PREFIX}ECHO_SQL", False)

    @property
    def db_timeout(self) -> int:
        """Seconds a SQLite connection waits on a locked database."""
        return _get_env_int(f"{ENV_PREFIX}DB_TIMEOUT", DEFAULT_DB_TIMEOUT)

    @property
    def db_pool_size(self) -> int:
        """Connection pool size for server databases."""
        return _get_env_int(f"{ENV_PREFIX}DB_POOL_SIZE", DEFAULT_DB_POOL_SIZE)

    @property
    def db_pool_recycle(self) -> int:
        """Seconds after which pooled connections are recycled."""
        return _get_env_int(f"{ENV_PREFIX}DB_POOL_RECYCLE", DEFAULT_DB_POOL_RECYCLE)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def database_exists(self) -> bool:
        """
        Check if the database file exists.

        Explicit URLs and in-memory databases always report True.
        """
        if not self.uses_default_path:
            return True
        return self._database_path.exists()

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    RECIPE_VAULT_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(f"{ENV_PREFIX}ENV", "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None


def get_database_url() -> str:
    """Get the configured database URL."""
    return get_config().database_url

"""FastAPI dependencies for dependency injection."""

from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DataSource

# Global instances - initialized at app startup
_datasource: DataSource | None = None
_config: Config | None = None


def set_datasource(datasource: DataSource) -> None:
    """Set the global datasource instance."""
    global _datasource
    _datasource = datasource


def get_datasource() -> DataSource:
    """Get the global datasource instance for dependency injection."""
    if _datasource is None:
        raise RuntimeError("DataSource not initialized. Call set_datasource() first.")
    return _datasource


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def get_config() -> Config:
    """Get the application configuration for dependency injection."""
    if _config is None:
        raise RuntimeError("Config not initialized. Call set_config() first.")
    return _config

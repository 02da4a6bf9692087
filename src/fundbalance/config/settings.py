"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional, get_args

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".fundbalance"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FUNDBALANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Fund Bucket Rebalancer"
    app_version: str = "0.1.0"

    # Data directory (the SQLite file lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: LogLevel = "INFO"
    timezone: str = "UTC"

    # Rebalance behavior
    default_threshold: Decimal = Decimal("0.05")
    history_default_limit: int = 10

    # Portfolio behavior
    seed_default_portfolio: bool = True
    enforce_weight_budget: bool = False

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8080

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept level names in any case, e.g. FUNDBALANCE_LOG_LEVEL=debug."""
        return value.strip().upper() if isinstance(value, str) else value

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "fund_data.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by the CLI and tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None

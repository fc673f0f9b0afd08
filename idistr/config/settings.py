"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
The backend base URL has no default: it must be supplied at deploy time.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Backend REST service configuration."""

    model_config = SettingsConfigDict(env_prefix="BACKEND_", populate_by_name=True)

    base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BACKEND_BASE_URL", "BACKEND_API_URL", "API_BASE"),
    )
    timeout: float = 30.0

    # Retry settings (GET requests only)
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_multiplier: float = 2.0

    @field_validator("base_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class StateSettings(BaseSettings):
    """Local (device) state persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="STATE_")

    backend: Literal["sqlite", "memory"] = "sqlite"
    namespace: str = "idistr"
    data_dir: Path = Path("data")
    db_name: str = "local_state.db"

    # SQLite settings
    pool_size: int = 2
    busy_timeout: int = 5000  # ms

    # Recently added products
    recents_limit: int = 10

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class CatalogSettings(BaseSettings):
    """Catalog fetch configuration."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_")

    page_limit: int = 100
    max_pages: int = 20


class ReceiptSettings(BaseSettings):
    """Receipt document configuration."""

    model_config = SettingsConfigDict(env_prefix="RECEIPT_")

    format: Literal["html", "pdf"] = "html"
    surface: Literal["outbox", "browser"] = "outbox"
    title: str = "ТОВАРНЫЙ ЧЕК"
    currency: str = "KZT"
    logo_url: str = "https://dummyimage.com/120x120/eaeaea/000&text=No+Image"
    outbox_size: int = 100  # receipts kept for re-printing

    # PDF receipts: TTF font with Cyrillic coverage, e.g. DejaVuSans.ttf
    font_path: str = ""
    print_dir: Path | None = None  # browser surface temp files


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "IDISTR Mini-App"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["auto", "console", "json"] = "auto"  # auto: console in development
    log_max_value_length: int = 500  # chars per logged string field; 0 disables

    # Sub-settings
    backend: BackendSettings = Field(default_factory=BackendSettings)
    state: StateSettings = Field(default_factory=StateSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    receipt: ReceiptSettings = Field(default_factory=ReceiptSettings)
    api: APISettings = Field(default_factory=APISettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None

from pathlib import Path
from typing import Literal
import logging

from croniter import croniter
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    playlist_source: str = "https://iptv-org.github.io/iptv/index.m3u"
    playlist_fetch_timeout_sec: float = 30.0
    playlist_parse_timeout_sec: int = 60  # Playlist parsing timeout, 0 disables timeout

    sync_max_channels: int = 1000
    sync_on_startup: bool = False
    sync_cron: str | None = None  # e.g. "0 4 * * *", unset disables scheduled syncs
    sync_misfire_grace_sec: int = 3600

    catalog_backend: Literal["memory", "sqlite"] = "memory"
    database_path: str = "./data/catalog.db"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("playlist_source")
    @classmethod
    def validate_playlist_source(cls, value: str) -> str:
        """Validate the playlist source is an HTTP/HTTPS URL or a local path."""
        value = value.strip()
        if not value:
            raise ValueError("playlist_source must not be empty")
        if "://" in value and not value.lower().startswith(("http://", "https://", "file://")):
            raise ValueError(f"Playlist source must be HTTP/HTTPS or a local file: {value}")
        return value

    @field_validator("playlist_fetch_timeout_sec")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Validate upstream fetch timeout (seconds)."""
        if value <= 0:
            raise ValueError("playlist_fetch_timeout_sec must be > 0")
        return value

    @field_validator("playlist_parse_timeout_sec", "sync_misfire_grace_sec")
    @classmethod
    def validate_non_negative_ints(cls, value: int, info) -> int:
        """Ensure timeout-like settings are non-negative."""
        if value < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return value

    @field_validator("sync_max_channels")
    @classmethod
    def validate_max_channels(cls, value: int) -> int:
        """Ensure the per-sync channel cap is a positive integer."""
        if value <= 0:
            raise ValueError("sync_max_channels must be > 0")
        return value

    @field_validator("sync_cron", mode="before")
    @classmethod
    def parse_sync_cron(cls, value):
        """Treat an empty cron string as disabled."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sync_cron")
    @classmethod
    def validate_cron_expression(cls, value: str | None) -> str | None:
        """Validate cron expression is valid."""
        if value is None:
            return value
        try:
            croniter(value)
            return value
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Invalid cron expression '{value}': {exc}") from exc

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, value: str) -> str:
        """Validate database path is accessible."""
        if value == ":memory:":
            return value
        path = Path(value)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return value
        except (OSError, PermissionError) as exc:
            raise ValueError(f"Cannot access database path '{value}': {exc}") from exc

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level name."""
        normalized = value.upper()
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @model_validator(mode="after")
    def validate_sync_configuration(self):
        """Validate cross-field configuration."""
        if self.sync_on_startup and self.catalog_backend == "sqlite" and self.database_path == ":memory:":
            logger.warning(
                "Startup sync into an in-memory SQLite database - catalog is lost on restart"
            )
        return self

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  Playlist Source: %s", self.playlist_source)
        logger.info("  Fetch Timeout: %ss", self.playlist_fetch_timeout_sec)
        logger.info(
            "  Parse Timeout: %s",
            f"{self.playlist_parse_timeout_sec}s" if self.playlist_parse_timeout_sec else "disabled",
        )
        logger.info("  Max Channels per Sync: %s", self.sync_max_channels)
        logger.info("  Sync on Startup: %s", self.sync_on_startup)
        logger.info("  Sync Schedule: %s", self.sync_cron or "disabled")
        logger.info("  Catalog Backend: %s", self.catalog_backend)
        if self.catalog_backend == "sqlite":
            logger.info("  Database: %s", self.database_path)


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATASET_URL = "https://data.geocode.earth/wof/dist/parquet/whosonfirst-data-admin-latest.parquet"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",  # noqa: S104
        description="Bind host for the HTTP server",
    )
    port: int = Field(
        default=3000,
        description="Bind port for the HTTP server",
        gt=0,
        le=65535,
    )

    # Dataset
    parquet_path: Path = Field(
        default=Path("data/whosonfirst-data-admin.parquet"),
        description="Filesystem path to the administrative boundary Parquet file",
    )
    dataset_url: str = Field(
        default=DEFAULT_DATASET_URL,
        description="Remote URL the dataset is refreshed from",
    )
    dataset_max_age_days: int = Field(
        default=30,
        description="Age in days after which the local dataset is re-checked upstream",
        gt=0,
    )
    dataset_download_timeout: float = Field(
        default=300.0,
        description="Dataset download timeout in seconds",
        gt=0,
    )

    @field_validator("dataset_url")
    @classmethod
    def validate_dataset_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            msg = "dataset_url must be an http(s) URL"
            raise ValueError(msg)
        return v

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Serialize every log record as JSON instead of only request records",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()

"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (CINESIFT_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    YamlConfigSettingsSource,
)


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=4, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class RedisSettings(BaseModel):
    """RediSearch connection configuration."""

    enabled: bool = Field(default=True, description="Connect to Redis on startup")
    url: str = Field(default="redis://localhost:6379", description="Redis connection URL")
    index: str = Field(default="cinesift.movie-idx", description="Search index name")
    storage: Literal["json", "hash"] = Field(default="json", description="Document storage type")
    key_prefix: str = Field(default="cinesift.movie:", description="Key prefix of movie documents")
    timeout: float = Field(default=5.0, gt=0, description="Per-call deadline in seconds")


class QuerySettings(BaseModel):
    """Query compilation configuration."""

    bounded_upper_first: bool = Field(
        default=True,
        description="Emit bounded ranges as [upper lower] (established index convention)",
    )


class PaginationSettings(BaseModel):
    """Pagination defaults."""

    default_size: int = Field(default=20, gt=0, description="Page size used when size <= 0")
    max_size: int | None = Field(default=None, gt=0, description="Upper limit on page size (None = unlimited)")

    @model_validator(mode="after")
    def _max_covers_default(self) -> PaginationSettings:
        if self.max_size is not None and self.max_size < self.default_size:
            raise ValueError("max_size must be >= default_size")
        return self


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = v.lower()
        if level not in {"debug", "info", "warning", "error"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the CINESIFT_ prefix.
    Nested settings use double underscores: CINESIFT_SERVER__PORT=9090

    Example:
        CINESIFT_SERVER__PORT=9090
        CINESIFT_REDIS__URL=redis://cache:6379/0
        CINESIFT_PAGINATION__DEFAULT_SIZE=50
    """

    model_config = {
        "env_prefix": "CINESIFT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Application metadata
    app_name: str = Field(default="CineSift", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    query: QuerySettings = Field(default_factory=QuerySettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML sits below env vars; it reads nothing unless ``yaml_file`` is configured
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        configured = type(cls.__name__, (cls,), {"model_config": {"yaml_file": config_path}})
        return configured()

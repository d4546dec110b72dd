"""Application settings with modern Pydantic v2 patterns."""

from functools import lru_cache

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheConfig(BaseModel):
    """Cache configuration settings."""

    redis_url: str = Field(
        default="redis://localhost:6379", description="Redis connection URL"
    )
    enabled: bool = Field(default=False, description="Enable Redis caching")
    prefix: str = Field(default="search:", description="Cache key prefix")


class SearchSettings(BaseModel):
    """Combined book search settings."""

    max_limit: int = Field(default=40, ge=1, description="Maximum page size")
    default_limit: int = Field(default=10, ge=1, description="Default page size")
    min_query_length: int = Field(
        default=1, ge=1, description="Minimum query length in characters"
    )
    max_query_length: int = Field(
        default=500, ge=1, description="Maximum query length in characters"
    )
    cache_ttl: int = Field(
        default=900, ge=0, description="Combined search cache TTL in seconds"
    )
    overfetch_factor: float = Field(
        default=1.5,
        ge=1.0,
        description="Per-provider limit multiplier when both providers are searched",
    )
    provider_timeout: float = Field(
        default=10.0, gt=0, description="Per-provider timeout in seconds"
    )
    google_max_results: int = Field(
        default=40, ge=1, description="Google Books page size cap"
    )
    open_library_max_results: int = Field(
        default=100, ge=1, description="Open Library page size cap"
    )

    @field_validator("default_limit")
    @classmethod
    def validate_default_limit(cls, v: int, info: ValidationInfo) -> int:
        """Ensure the default page size fits under the maximum."""
        max_limit = info.data.get("max_limit")
        if max_limit is not None and v > max_limit:
            raise ValueError(
                f"default_limit ({v}) must not exceed max_limit ({max_limit})"
            )
        return v

    @field_validator("max_query_length")
    @classmethod
    def validate_query_bounds(cls, v: int, info: ValidationInfo) -> int:
        """Ensure the query length bounds are ordered."""
        min_length = info.data.get("min_query_length")
        if min_length is not None and v < min_length:
            raise ValueError(
                f"max_query_length ({v}) must be >= min_query_length ({min_length})"
            )
        return v


class AppSettings(BaseSettings):
    """Main application settings with modern Pydantic v2 patterns."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
    )

    app_name: str = Field(default="Book Search Hub", description="Application name")
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    search: SearchSettings = Field(
        default_factory=SearchSettings, description="Search pipeline settings"
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig, description="Cache settings"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production", "test"}
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()

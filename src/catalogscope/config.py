"""Configuration for the catalog engine.

Pydantic-validated settings shared by the request surface and the logging
setup. Embedding hosts build a CatalogConfig directly or read it from the
environment with load_catalog_config_from_env(); nothing else in the package
reads os.environ.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CatalogConfig(BaseModel):
    """Settings for CatalogService and setup_logging().

    The default page size matches the storefront's infinite-scroll batch.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the engine",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Paging
    default_page_size: int = Field(
        default=24,
        ge=1,
        description="Limit applied to list_items() when the caller passes none",
    )
    max_page_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound for caller-supplied limits (None = unbounded)",
    )

    # Service identification
    service_name: Optional[str] = Field(
        default=None,
        description="Service name used as the logger name by setup_logging()",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "CatalogConfig":
        if self.max_page_size is not None and self.max_page_size < self.default_page_size:
            raise ValueError("max_page_size must be >= default_page_size")
        return self

    def effective_limit(self, limit: int | None) -> int:
        """Apply the default page size and the configured ceiling to a limit."""
        if limit is None:
            limit = self.default_page_size
        if self.max_page_size is not None:
            limit = min(limit, self.max_page_size)
        return max(limit, 0)

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    import os

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", variable=name)


def load_catalog_config_from_env() -> CatalogConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - CATALOG_DEFAULT_PAGE_SIZE: Default list limit (default: 24)
    - CATALOG_MAX_PAGE_SIZE: Ceiling for caller limits (default: unbounded)
    - SERVICE_NAME: Service name for logger identification

    Raises:
        ConfigurationError: If a variable cannot be parsed or validated.
    """
    import os

    from pydantic import ValidationError

    try:
        return CatalogConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
            default_page_size=_env_int("CATALOG_DEFAULT_PAGE_SIZE", 24),
            max_page_size=_env_int("CATALOG_MAX_PAGE_SIZE", None),
            service_name=os.getenv("SERVICE_NAME"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid catalog configuration: {e}") from e


__all__ = [
    "CatalogConfig",
    "LogLevel",
    "load_catalog_config_from_env",
]

"""
Configuration for Boxer registries.

A BoxerConfig controls the default view name, how strictly view bodies are
checked and how shipments are logged. Values come from keyword arguments
first, then BOXER_* environment variables, then the field defaults.
Built-in profiles cover production and development.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxer.logging import LogFormat, LogLevel, configure_logging


class BoxerConfig(BaseSettings):
    """
    Settings shared by a registry and its compiler.

    Environment variables:
        BOXER_DEFAULT_VIEW, BOXER_STRICT_RESULTS, BOXER_LOG_SHIPMENTS,
        BOXER_LOG_LEVEL, BOXER_LOG_FORMAT
    """

    default_view: str = Field(
        default="base",
        min_length=1,
        description="View shipped when the caller does not name one",
    )
    strict_results: bool = Field(
        default=True,
        description="Reject view bodies that return None instead of a mapping",
    )
    log_shipments: bool = Field(
        default=True,
        description="Emit a debug record per ship call and a warning per failure",
    )
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: LogFormat = Field(default=LogFormat.JSON)

    model_config = SettingsConfigDict(
        env_prefix="BOXER_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    def configure_logging(self, **kwargs) -> None:
        """Install Boxer log handlers using this config's level and format."""
        configure_logging(level=self.log_level, format=self.log_format, **kwargs)


# Built-in profiles

DEFAULT_PROD = BoxerConfig(
    default_view="base",
    strict_results=True,
    log_shipments=True,
    log_level=LogLevel.INFO,
    log_format=LogFormat.JSON,
)

DEFAULT_DEV = BoxerConfig(
    default_view="base",
    strict_results=False,
    log_shipments=True,
    log_level=LogLevel.DEBUG,
    log_format=LogFormat.TEXT,
)

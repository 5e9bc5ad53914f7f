"""Settings management for sharpmetrics.

Configuration is loaded from environment variables prefixed with
``SHARPMETRICS_`` (or a ``.env`` file) using pydantic-settings.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .analysis.models import ComplexityThresholds


class AnalyzerSettings(BaseSettings):
    """Analyzer settings loaded from environment variables.

    Attributes:
        threshold: Maximum cognitive complexity of methods, constructors,
            destructors, operators and fields.
        property_threshold: Maximum cognitive complexity of accessors.
        ignore_header_comments: Skip comments before the first code token
            when counting comment lines.
        log_level: Logging level.
        json_logs: Render logs as JSON; auto-detected when unset.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHARPMETRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cognitive complexity rule
    threshold: int = Field(default=15, ge=0, description="Maximum authorized complexity")
    property_threshold: int = Field(
        default=3,
        ge=0,
        description="Maximum authorized complexity in a property",
    )

    # File metrics
    ignore_header_comments: bool = Field(
        default=False,
        description="Ignore comments preceding the first code token",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool | None = Field(default=None, description="Render logs as JSON")

    def thresholds(self) -> ComplexityThresholds:
        """Get the complexity thresholds configured by these settings."""
        return ComplexityThresholds(
            threshold=self.threshold,
            property_threshold=self.property_threshold,
        )


@lru_cache
def get_settings() -> AnalyzerSettings:
    """Get cached analyzer settings.

    Uses lru_cache to ensure settings are loaded once and reused.

    Returns:
        The analyzer settings instance.
    """
    return AnalyzerSettings()

"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cross-field rules (page limits, telemetry exporter)
are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TELEMETRY_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_limits_and_telemetry rejects
    inconsistent combinations.
    """

    # App
    app_name: str = "endpoint-authz"
    app_version: str = "1.0.0"
    debug: bool = False

    # Collection reads: page size applied by the endpoint store when the
    # caller passes no limit, and the hard cap on any requested limit.
    find_default_limit: int = 20
    find_max_limit: int = 100

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits_and_telemetry(self) -> "Settings":
        """Validate page limits and telemetry options.

        - find_default_limit and find_max_limit must be positive, default <= max.
        - telemetry_exporter must be one of console, otlp, none; otlp needs
          telemetry_otlp_endpoint.
        - telemetry_sample_rate must be within [0, 1].
        """
        if self.find_default_limit <= 0 or self.find_max_limit <= 0:
            raise ValueError("FIND_DEFAULT_LIMIT and FIND_MAX_LIMIT must be positive")
        if self.find_default_limit > self.find_max_limit:
            raise ValueError(
                f"FIND_DEFAULT_LIMIT ({self.find_default_limit}) must not exceed "
                f"FIND_MAX_LIMIT ({self.find_max_limit})"
            )
        if self.telemetry_exporter not in TELEMETRY_EXPORTERS:
            raise ValueError(
                f"telemetry_exporter must be one of {', '.join(TELEMETRY_EXPORTERS)}, "
                f"got: {self.telemetry_exporter!r}"
            )
        if self.telemetry_exporter == "otlp" and not self.telemetry_otlp_endpoint:
            raise ValueError(
                "telemetry_otlp_endpoint is required when telemetry_exporter is otlp"
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()

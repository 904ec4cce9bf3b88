"""Root settings model for Weather API configuration."""

import socket
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from weatherapi.config.models.api import APIConfig
from weatherapi.config.models.observability import ObservabilityConfig

DEVELOPMENT = "development"

# Module-level variable to store TOML config for settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{WEATHERAPI_ENV}.toml (profile overrides)
    4. OTEL_SERVICE_NAME, OTEL_SERVICE_NAMESPACE, OTEL_EXPORTER_OTLP_ENDPOINT
    5. WEATHERAPI_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="WEATHERAPI_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    environment: str = Field(
        default=DEVELOPMENT,
        description="Deployment environment name (deployment.environment)",
    )
    host_name: str = Field(
        default_factory=socket.gethostname,
        description="host.name resource attribute",
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested configuration sections
    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @property
    def is_development(self) -> bool:
        """Whether Swagger UI and console mirroring should be enabled."""
        return self.environment.lower() == DEVELOPMENT

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (WEATHERAPI_* environment variables)
        3. toml_settings (config/*.toml files merged with OTEL_* variables)
        4. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

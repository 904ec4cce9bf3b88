"""Configuration loading for Weather API.

Configuration is loaded from TOML profiles with environment variable overrides.

Usage:
    from weatherapi.config import get_settings

    settings = get_settings()
    endpoint = settings.observability.exporter.otlp_endpoint
"""

from functools import lru_cache

from pydantic import ValidationError

from weatherapi.config.loader import load_config
from weatherapi.config.settings import Settings, set_toml_config
from weatherapi.exceptions import ConfigurationError


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.

    Returns:
        Settings instance with all configuration loaded and validated

    Raises:
        ConfigurationError: If the merged configuration is invalid, for
            example when the OTLP endpoint cannot be parsed
    """
    # Load TOML configuration and set it for the custom source
    config_dict = load_config()
    set_toml_config(config_dict)

    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration.

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]

"""TOML configuration loader with deep merge support."""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

# Standard OpenTelemetry variables and the settings path each one overrides
OTEL_ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "OTEL_SERVICE_NAME": ("observability", "service_name"),
    "OTEL_SERVICE_NAMESPACE": ("observability", "service_namespace"),
    "OTEL_EXPORTER_OTLP_ENDPOINT": ("observability", "exporter", "otlp_endpoint"),
}


def get_config_dir() -> Path:
    """Get the configuration directory path.

    WEATHERAPI_CONFIG_DIR points at a custom directory; otherwise config/ is
    resolved against the working directory (the repo root or the container
    workdir).
    """
    config_dir_env = os.environ.get("WEATHERAPI_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    return Path.cwd() / "config"


def get_environment() -> str:
    """Get the current profile from WEATHERAPI_ENV.

    Defaults to 'development' if not set.
    """
    return os.environ.get("WEATHERAPI_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Args:
        file_path: Path to the TOML file

    Returns:
        Dictionary containing the TOML data

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    For nested dictionaries, values are merged recursively.
    For other values, override replaces base.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def otel_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Build a nested override dict from the standard OTEL_* variables.

    Empty values are ignored so that an exported-but-blank variable does not
    clobber a profile default.

    Args:
        environ: Environment mapping (usually os.environ)

    Returns:
        Nested dictionary suitable for deep_merge
    """
    overrides: dict[str, Any] = {}
    for variable, path in OTEL_ENV_OVERRIDES.items():
        value = environ.get(variable)
        if not value:
            continue
        node = overrides
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = value
    return overrides


def load_config() -> dict[str, Any]:
    """Load configuration from TOML files.

    Loading order:
    1. config/default.toml (required)
    2. config/{WEATHERAPI_ENV}.toml (optional)
    3. OTEL_* environment variables

    Returns:
        Merged configuration dictionary
    """
    config_dir = get_config_dir()
    env = get_environment()

    # Load default config (required)
    default_path = config_dir / "default.toml"
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            "Create config/default.toml or set WEATHERAPI_CONFIG_DIR."
        )

    config = load_toml(default_path)

    # Load environment-specific config (optional)
    env_path = config_dir / f"{env}.toml"
    if env_path.exists():
        env_config = load_toml(env_path)
        config = deep_merge(config, env_config)

    config.setdefault("environment", env)

    return deep_merge(config, otel_overrides(os.environ))

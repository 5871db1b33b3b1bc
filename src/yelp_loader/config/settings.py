"""
Configuration loading for the business loader.

Resolves a LoaderConfig from an explicit file, the environment or the
default locations.
"""

import logging
import os
from pathlib import Path

from .models import LoaderConfig

logger = logging.getLogger(__name__)

# Environment variable -> (section, field)
ENV_VARS: dict[str, tuple[str | None, str]] = {
    "YELP_LOADER_INPUT": (None, "input_path"),
    "YELP_LOADER_DB_PATH": ("database", "path"),
    "YELP_LOADER_ECHO_SQL": ("database", "echo_sql"),
    "YELP_LOADER_PARTITIONS": ("partitioning", "partition_count"),
    "YELP_LOADER_CONTINUE_ON_SCHEMA_ERROR": ("pipeline", "continue_on_schema_error"),
    "YELP_LOADER_LOAD_ATTRIBUTES": ("pipeline", "load_attributes"),
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_config(
    config_path: str | Path | None = None, config_name: str = "loader.json"
) -> LoaderConfig:
    """
    Load configuration from file with path resolution.

    Args:
        config_path: Explicit path to config file or directory containing config
        config_name: Name of config file (default: "loader.json")

    Returns:
        LoaderConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If no configuration file is found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        search_paths = [
            Path.cwd() / config_name,
            Path.cwd() / "config" / config_name,
        ]

        for path in search_paths:
            if path.exists():
                config_path = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file '{config_name}' not found in any of: "
                f"{[str(p) for p in search_paths]}"
            )

    config_path = Path(config_path)

    if config_path.is_dir():
        config_path = config_path / config_name

    return LoaderConfig.from_file(config_path)


def _parse_env_value(field: str, raw: str) -> bool | int | str:
    if field in {"echo_sql", "continue_on_schema_error", "load_attributes"}:
        return raw.strip().lower() in _TRUE_VALUES
    if field == "partition_count":
        return int(raw)
    return raw


def get_config_from_env() -> LoaderConfig | None:
    """
    Try to load configuration from environment variables.

    YELP_LOADER_CONFIG_FILE points at a config file; otherwise the individual
    YELP_LOADER_* variables override the defaults.

    Returns:
        LoaderConfig if environment variables are set, None otherwise

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    config_file_env = os.getenv("YELP_LOADER_CONFIG_FILE")
    if config_file_env:
        return load_config(config_file_env)

    env_values = {key: os.getenv(key) for key in ENV_VARS}
    if not any(env_values.values()):
        return None

    config_data: dict = {}
    try:
        for env_name, raw in env_values.items():
            if raw is None or raw == "":
                continue
            section, field = ENV_VARS[env_name]
            value = _parse_env_value(field, raw)
            if section is None:
                config_data[field] = value
            else:
                config_data.setdefault(section, {})[field] = value

        return LoaderConfig(**config_data)

    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid environment variable configuration: {e}")


def load_config_with_fallback(config_path: str | Path | None = None) -> LoaderConfig:
    """
    Load configuration with fallback to environment variables and defaults.

    Priority order:
    1. Explicit config file path
    2. Environment variables
    3. Default locations (loader.json, config/loader.json)
    4. Built-in defaults

    Args:
        config_path: Optional explicit path to config file

    Returns:
        LoaderConfig: Loaded configuration
    """
    if config_path:
        return load_config(config_path)

    env_config = get_config_from_env()
    if env_config:
        return env_config

    try:
        return load_config()
    except FileNotFoundError:
        logger.debug("No configuration file found, using defaults")

    return LoaderConfig()

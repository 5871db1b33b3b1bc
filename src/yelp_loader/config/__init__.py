"""Configuration models and loaders."""

from .models import DatabaseSettings, LoaderConfig, PartitionSettings, PipelineSettings
from .settings import get_config_from_env, load_config, load_config_with_fallback

__all__ = [
    "DatabaseSettings",
    "LoaderConfig",
    "PartitionSettings",
    "PipelineSettings",
    "get_config_from_env",
    "load_config",
    "load_config_with_fallback",
]

"""Configuration management for Glimmer."""

from glimmer.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from glimmer.core.config.models import (
    AppConfig,
    ChainPreset,
    LightPreset,
    LoggingConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "configure_logging",
    # Models
    "AppConfig",
    "LoggingConfig",
    "LightPreset",
    "ChainPreset",
]

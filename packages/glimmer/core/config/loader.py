"""Load light presets and logging settings from JSON or YAML files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from glimmer.core.config.models import AppConfig, LoggingConfig
from glimmer.core.utils.json import read_json
from glimmer.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

# Looked up in the working directory when no path is given
DEFAULT_APP_CONFIG_PATH = Path("glimmer.yaml")

LOG_LEVEL_ENV = "GLIMMER_LOG_LEVEL"


def detect_format(file_path: Path | str) -> str:
    """Pick the parser for a config file from its suffix.

    Args:
        file_path: Path to config file

    Returns:
        "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("lights.json")
        'json'
        >>> detect_format("lights.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a config file into a plain dict, without validation.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Mapping at the root of the file

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            content = read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}, got {type(content).__name__}")

    logger.debug("Loaded %s config from %s", fmt, path)
    return content


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        logging_config = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": level.upper()}
        )
        config = config.model_copy(update={"logging": logging_config})
    return config


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load glimmer settings and presets as a validated AppConfig.

    A missing file at the default path yields all defaults; a missing
    explicit path is an error. ``GLIMMER_LOG_LEVEL`` overrides the
    configured log level.

    Args:
        path: Path to config file (.json, .yaml, or .yml).
              Defaults to glimmer.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValidationError: If config is invalid
    """
    if path is None:
        path = DEFAULT_APP_CONFIG_PATH
        if not path.exists():
            logger.debug("No config at %s, using defaults", path)
            return _apply_env_overrides(AppConfig())

    raw_config = load_config(path)
    config = AppConfig.model_validate(raw_config)
    logger.info(
        "Loaded %d light preset(s) and %d chain preset(s) from %s",
        len(config.lights),
        len(config.chains),
        path,
    )
    return _apply_env_overrides(config)


def configure_logging(config: AppConfig | None = None) -> None:
    """Apply the logging section of an AppConfig to the root logger.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )

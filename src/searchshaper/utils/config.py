"""YAML configuration loading for searchshaper.

Configuration files describe how a search component's responses are shaped:
which data fields feed suggestions, whether suggestions are distinct per
document, which aggregation field buckets are keyed by, and logging settings.
String values may reference environment variables.

Environment Variable Syntax:
    - ${VAR}: Substitute with environment variable VAR, empty string if unset
    - ${VAR:-default}: Substitute with VAR if set, otherwise use 'default'

Usage:
    >>> from searchshaper.utils.config import load_config, setup_logger
    >>> config = load_config("shaper.yaml")
    >>> logger = setup_logger(config)
"""

import logging
import re
from os import environ
from pathlib import Path
from typing import Any

import yaml

from searchshaper.utils.logging import PACKAGE_LOGGER_NAME, LoggerFactory


ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_env_vars(value: Any) -> Any:
    """Resolve environment variables in configuration values.

    Supports both ${VAR} and ${VAR:-default}, including several substitutions
    within one string (e.g. "http://${HOST}:${PORT}"). Dicts and lists are
    resolved recursively; other values are returned unchanged.

    Args:
        value: The value to resolve, can be a string, dict, or list.

    Returns:
        The resolved value with environment variables expanded.
    """
    if isinstance(value, str):

        def replacer(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                var, default = expr.split(":-", 1)
                return environ.get(var, default)
            return environ.get(expr, "")

        return ENV_VAR_PATTERN.sub(replacer, value)
    if isinstance(value, dict):
        return {k: resolve_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_env_vars(item) for item in value]
    return value


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and resolve environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Configuration dictionary; an empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        yaml.YAMLError: If the YAML file is malformed.
    """
    with open(config_path) as f:
        config = yaml.safe_load(f)
    return resolve_env_vars(config or {})


def setup_logger(config: dict[str, Any]) -> logging.Logger:
    """Set up a logger from the ``logging`` section of a configuration.

    Args:
        config: Configuration dictionary containing logging settings.

    Returns:
        Configured logger instance.
    """
    logging_config = config.get("logging", {})
    logger_name = logging_config.get("name", PACKAGE_LOGGER_NAME)
    log_level_str = logging_config.get("level", "INFO")
    log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)

    factory = LoggerFactory(logger_name, log_level=log_level)
    logger = factory.get_logger()
    logger.setLevel(log_level)
    return logger

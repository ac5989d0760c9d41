"""Configuration for the logging integration: defaults <- YAML file <- env vars.

The encoder itself reads no configuration; these settings only decide where
configure_logging() sends bunyan lines and at which level.
"""

import os
import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

VALID_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

ENV_VARS = {
    "level": "BUNYAN_LOG_LEVEL",
    "output": "BUNYAN_LOG_OUTPUT",
    "logger_name": "BUNYAN_LOGGER",
    "charset": "BUNYAN_CHARSET",
}


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


@dataclass(frozen=True)
class Config:
    level: str = "INFO"
    output: str = "stderr"     # "stderr", "stdout" or a file path
    logger_name: str = ""      # "" configures the root logger
    charset: str = "utf-8"


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _validate(kwargs: dict) -> dict:
    level = str(kwargs["level"]).strip().upper()
    if level not in VALID_LEVELS:
        raise ConfigError(
            f"level must be one of {list(VALID_LEVELS)}, got '{kwargs['level']}'"
        )
    output = str(kwargs["output"]).strip()
    if not output:
        raise ConfigError("output must be 'stderr', 'stdout' or a file path")
    return {
        "level": level,
        "output": output,
        "logger_name": str(kwargs["logger_name"]),
        "charset": str(kwargs["charset"]),
    }


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from defaults, then YAML data, then env vars (highest priority)."""
    yaml_data = yaml_data or {}
    defaults = Config()
    kwargs = {}
    for key, env_var in ENV_VARS.items():
        value = yaml_data.get(key, getattr(defaults, key))
        kwargs[key] = os.environ.get(env_var, value)

    unknown = set(yaml_data) - set(ENV_VARS)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

    return Config(**_validate(kwargs))

"""
Configuration management for exception handlers.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..error.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "EXCEPTION_MAPPER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class HandlerConfiguration(BaseModel):
    """Configuration for an ExceptionHandler and its logging."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    strict_mode: bool = Field(default=False, description="Only accept HandledException subclasses")
    duplicate_policy: str = Field(default="overwrite", description="overwrite or keep_first")
    log_level: str = "INFO"
    log_file: Optional[str] = None
    json_logging: bool = Field(default=False, description="Emit log records as JSON lines")
    logger_name: str = Field(default="exception_mapper", description="Logger receiving diagnostics")

    @field_validator("duplicate_policy")
    @classmethod
    def validate_duplicate_policy(cls, value: str) -> str:
        """Validate duplicate registration policy."""
        valid_policies = {"overwrite", "keep_first"}
        if value.lower() not in valid_policies:
            raise ValueError(f"Invalid duplicate policy '{value}'. Must be one of: {valid_policies}")
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        value_upper = value.upper()
        if value_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of: {valid_levels}")
        return value_upper


def ensure_handler_config(config: Union[HandlerConfiguration, Dict[str, Any], None] = None) -> HandlerConfiguration:
    """Ensure a valid handler configuration."""
    if isinstance(config, HandlerConfiguration):
        return config

    if config is None:
        config = {}

    try:
        return HandlerConfiguration(**config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {str(e)}")


def load_config_file(file_path: str) -> Dict[str, Any]:
    """
    Load configuration from a file (YAML or JSON).

    Args:
        file_path: Path to the configuration file

    Returns:
        Dictionary with configuration

    Raises:
        ConfigurationError: If the file is not found or cannot be parsed
    """
    path = Path(file_path).expanduser()

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    if path.suffix not in (".yaml", ".yml", ".json"):
        raise ConfigurationError(f"Unsupported config file format: {file_path}")

    try:
        content = path.read_text(encoding='utf-8')

        if path.suffix in (".yaml", ".yml"):
            loaded_config = yaml.safe_load(content) or {}
        else:
            loaded_config = json.loads(content) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML format in {file_path}: {str(e)}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON format in {file_path}: {str(e)}")
    except OSError as e:
        raise ConfigurationError(f"Error reading config file {file_path}: {str(e)}")

    if not isinstance(loaded_config, dict):
        raise ConfigurationError(f"Configuration in {file_path} must be a mapping")

    logger.debug(f"Loaded configuration from {file_path}")
    return loaded_config


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for {name}: {value!r}")


def load_configuration_from_env(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """
    Read handler settings from environment variables.

    Args:
        prefix: Prefix for the environment variables

    Returns:
        Dictionary with the settings that are present
    """
    config: Dict[str, Any] = {}

    for key in ("strict_mode", "json_logging"):
        env_name = f"{prefix}{key.upper()}"
        if env_name in os.environ:
            config[key] = _parse_bool(env_name, os.environ[env_name])

    for key in ("duplicate_policy", "log_level", "log_file", "logger_name"):
        env_name = f"{prefix}{key.upper()}"
        if os.environ.get(env_name):
            config[key] = os.environ[env_name]

    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config(
    config_path: Optional[str] = None,
    env_prefix: str = ENV_PREFIX,
    defaults: Optional[Dict[str, Any]] = None
) -> HandlerConfiguration:
    """
    Load configuration from a file and the environment.

    Args:
        config_path: Path to a YAML or JSON configuration file (optional)
        env_prefix: Prefix for environment variables to consider
        defaults: Default configuration values

    Returns:
        HandlerConfiguration with environment values taking precedence
    """
    config = defaults or {}

    if config_path:
        logger.info(f"Loading configuration from {config_path}")
        config = merge_configs(config, load_config_file(config_path))

    config = merge_configs(config, load_configuration_from_env(env_prefix))

    return ensure_handler_config(config)

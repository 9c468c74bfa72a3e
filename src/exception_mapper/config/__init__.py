"""
Handler configuration.
"""
from .configuration import (
    HandlerConfiguration,
    ensure_handler_config,
    load_config,
    load_config_file,
    load_configuration_from_env,
    merge_configs
)

__all__ = [
    "HandlerConfiguration",
    "ensure_handler_config",
    "load_config",
    "load_config_file",
    "load_configuration_from_env",
    "merge_configs"
]

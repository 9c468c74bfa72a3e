"""
Logging setup for exception handler diagnostics.
"""
from .config import LogConfig, JsonFormatter, configure_logging

__all__ = [
    "LogConfig",
    "JsonFormatter",
    "configure_logging"
]

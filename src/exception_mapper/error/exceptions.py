"""
Exceptions raised by exception_mapper itself.
"""
from typing import Any, Dict, Optional


class ExceptionMapperError(Exception):
    """Base class for all exception_mapper errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        base_str = super().__str__()
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{base_str} [{detail_str}]"
        return base_str


class HandlerDefinitionError(ExceptionMapperError):
    """A handleable exception type is defined incorrectly."""
    pass


class ConfigurationError(ExceptionMapperError):
    """Error in handler configuration."""
    pass

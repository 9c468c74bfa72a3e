"""
exception_mapper: map raised exceptions to handled results.
"""
from .error import (
    ExceptionMapperError,
    HandlerDefinitionError,
    ConfigurationError,
    HandledException,
    kind_of
)
from .resolver import Resolver, FunctionResolver, StaticResolver, as_resolver
from .handler import ExceptionHandler
from .config import HandlerConfiguration, load_config

__version__ = "0.1.0"

__all__ = [
    "ExceptionHandler",
    "HandledException",
    "kind_of",
    "Resolver",
    "FunctionResolver",
    "StaticResolver",
    "as_resolver",
    "HandlerConfiguration",
    "load_config",
    "ExceptionMapperError",
    "HandlerDefinitionError",
    "ConfigurationError",
    "__version__"
]

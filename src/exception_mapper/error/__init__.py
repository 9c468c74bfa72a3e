"""
Error types and the handleable exception contract.
"""
from .exceptions import (
    ExceptionMapperError,
    HandlerDefinitionError,
    ConfigurationError
)

from .handled import (
    HandledException,
    kind_of,
    is_handled_type
)

__all__ = [
    # Exceptions
    'ExceptionMapperError',
    'HandlerDefinitionError',
    'ConfigurationError',

    # Contract
    'HandledException',
    'kind_of',
    'is_handled_type'
]

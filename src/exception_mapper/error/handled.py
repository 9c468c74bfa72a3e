"""
Contract for exceptions that carry their own handler.
"""
from abc import ABCMeta
from typing import Any, Union

from ..resolver import Resolver, as_resolver
from .exceptions import HandlerDefinitionError


class HandledException(Exception, metaclass=ABCMeta):
    """
    Abstract base for exceptions that know how to resolve themselves.

    Subclasses override get_handler() to return a function taking the
    exception, a static response, or a Resolver. The handler is checked
    once when the exception is created, so a broken subclass fails as
    soon as it is instantiated rather than when it reaches a handler.

    Each subclass carries a ``kind`` identifier used for registry lookup.
    It defaults to the class name and can be declared explicitly in the
    class body. It is never inherited from the parent class.
    """

    kind: str = "HandledException"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "kind" not in cls.__dict__:
            cls.kind = cls.__name__

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

        cls = type(self)
        if cls is HandledException:
            raise HandlerDefinitionError(
                "HandledException is an abstract class and cannot be instantiated directly."
            )

        self.name = cls.kind

        get_handler = getattr(cls, "get_handler", None)
        if not callable(get_handler) or get_handler is HandledException.get_handler:
            raise HandlerDefinitionError(
                'Subclasses of HandledException must implement the "get_handler" method.',
                details={"kind": cls.kind},
            )

        if not self.get_handler():
            raise HandlerDefinitionError(
                f'The "get_handler" method in "{cls.__name__}" must return a handler.',
                details={"kind": cls.kind},
            )

    def get_handler(self) -> Any:
        """
        Return the handler for this exception.

        Returns:
            A function ``(error) -> result``, a static response, or a Resolver
        """
        raise HandlerDefinitionError(
            'Subclasses of HandledException must implement the "get_handler" method.'
        )

    def resolver(self) -> Resolver:
        """Own handler coerced to a Resolver."""
        return as_resolver(self.get_handler())


def kind_of(error: Union[BaseException, type]) -> str:
    """
    Get the kind identifier used to key the registry.

    Args:
        error: Exception type or instance

    Returns:
        The declared ``kind`` for HandledException types, otherwise the
        concrete type name
    """
    error_type = error if isinstance(error, type) else type(error)
    if issubclass(error_type, HandledException):
        return error_type.kind
    return error_type.__name__


def is_handled_type(error_type: Any) -> bool:
    """Check whether a type is a concrete subtype of HandledException."""
    return (
        isinstance(error_type, type)
        and issubclass(error_type, HandledException)
        and error_type is not HandledException
    )

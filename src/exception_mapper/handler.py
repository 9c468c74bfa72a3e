"""
Registry that maps exceptions to handled results.
"""
import functools
import inspect
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type, TypeVar, Union

from .config.configuration import ensure_handler_config
from .error.exceptions import ConfigurationError
from .error.handled import HandledException, is_handled_type, kind_of
from .resolver import Resolver, as_resolver

T = TypeVar('T')

DUPLICATE_POLICIES = {"overwrite", "keep_first"}


class ExceptionHandler:
    """
    Maps exceptions to handled results by kind identifier.

    Resolution order for a caught exception:

    1. A resolver registered manually under the exception's kind.
    2. The exception's own get_handler(), for HandledException subclasses.
    3. Otherwise the exception is re-raised unchanged.

    Matching is by kind only. A subclass of a registered exception is not
    matched unless it is registered itself.

    In strict mode only HandledException subclasses can be registered;
    other registrations are skipped with a warning. Registering the same
    kind twice logs a warning. With the default "overwrite" policy the
    new resolver is installed anyway, with "keep_first" the earlier one
    stays.

    A registered static value that is empty (None, {}, [], 0, "") counts
    as no resolver: the exception falls through to its own handler or is
    re-raised.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        *,
        logger: Optional[logging.Logger] = None,
        duplicate_policy: str = "overwrite"
    ):
        """
        Initialize the handler with an empty registry.

        Args:
            strict_mode: Only accept HandledException subclasses in register()
            logger: Logger receiving registration and dispatch diagnostics
            duplicate_policy: "overwrite" or "keep_first"
        """
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ConfigurationError(
                f"Invalid duplicate policy '{duplicate_policy}'. Must be one of: {sorted(DUPLICATE_POLICIES)}"
            )
        self._strict_mode = bool(strict_mode)
        self._resolvers: Dict[str, Resolver] = {}
        self.duplicate_policy = duplicate_policy
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Any, logger: Optional[logging.Logger] = None) -> 'ExceptionHandler':
        """
        Create a handler from a HandlerConfiguration or config dict.

        Args:
            config: HandlerConfiguration, dict or None
            logger: Optional logger, defaults to the configured logger name

        Returns:
            ExceptionHandler instance
        """
        handler_config = ensure_handler_config(config)
        return cls(
            handler_config.strict_mode,
            logger=logger or logging.getLogger(handler_config.logger_name),
            duplicate_policy=handler_config.duplicate_policy
        )

    @property
    def strict_mode(self) -> bool:
        return self._strict_mode

    @property
    def resolvers(self) -> Mapping[str, Resolver]:
        """Read-only view of the registry."""
        return MappingProxyType(self._resolvers)

    def register(self, error_type: Type[BaseException], resolver: Any) -> 'ExceptionHandler':
        """
        Register a resolver for an exception type.

        Args:
            error_type: Exception class to handle
            resolver: Function taking the exception, static response, or Resolver

        Returns:
            The handler itself, for chaining
        """
        name = kind_of(error_type)

        if self._strict_mode and not is_handled_type(error_type):
            self.logger.warning(
                f'Warning: Attempted to register "{name}" in strict mode. '
                f'This exception does not extend HandledException and will not be handled when in strict mode.'
            )
            return self

        if name in self._resolvers:
            self.logger.warning(f'Warning: Attempted duplicate registration for exception name "{name}".')
            if self.duplicate_policy == "keep_first":
                return self

        self._resolvers[name] = as_resolver(resolver)
        self.logger.debug(f"Registered resolver for exception name \"{name}\"")
        return self

    def is_registered(self, error: Union[Type[BaseException], BaseException, str]) -> bool:
        """
        Check whether a resolver is registered for an exception.

        Args:
            error: Exception type, instance or kind name

        Returns:
            True if a resolver is registered under the kind
        """
        name = error if isinstance(error, str) else kind_of(error)
        return name in self._resolvers

    def __contains__(self, error: Any) -> bool:
        return self.is_registered(error)

    def __len__(self) -> int:
        return len(self._resolvers)

    def resolve(self, error: BaseException) -> Any:
        """
        Convert an exception into a handled result or re-raise it.

        Args:
            error: Caught exception

        Returns:
            Handled result

        Raises:
            The original exception if nothing can handle it
        """
        name = kind_of(error)
        resolver = self._resolvers.get(name)

        if resolver:
            if isinstance(error, HandledException):
                self.logger.debug(
                    f'Manually registered resolver for exception "{name}" is taking precedence '
                    f"over HandledException's built-in handler.",
                    stack_info=True
                )
            return resolver.resolve(error)

        if isinstance(error, HandledException):
            return error.resolver().resolve(error)

        raise error

    async def wrap(self, operation: Callable[..., Union[T, Awaitable[T]]], *args: Any, **kwargs: Any) -> Any:
        """
        Run an operation and convert matching exceptions.

        The operation may be a plain function or return an awaitable.

        Args:
            operation: Function to execute
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            Operation result, or the handled result if it raised
        """
        try:
            result = operation(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            handled = self.resolve(e)

        # Resolvers may be coroutine functions
        if inspect.isawaitable(handled):
            handled = await handled
        return handled

    def wrap_sync(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> Any:
        """
        Synchronous counterpart of wrap().

        Args:
            operation: Function to execute, must not return an awaitable
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            Operation result, or the handled result if it raised
        """
        try:
            result = operation(*args, **kwargs)
        except Exception as e:
            result = self.resolve(e)

        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            name = getattr(operation, '__name__', repr(operation))
            raise TypeError(f"{name} produced an awaitable; use ExceptionHandler.wrap() instead")
        return result

    def guard(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """
        Decorator routing a function's exceptions through this handler.

        Args:
            func: Function or coroutine function to guard

        Returns:
            Wrapped function of the same flavour
        """
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                return await self.wrap(func, *args, **kwargs)
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return self.wrap_sync(func, *args, **kwargs)
        return wrapper

    def __repr__(self) -> str:
        return (
            f"ExceptionHandler(strict_mode={self._strict_mode}, "
            f"duplicate_policy={self.duplicate_policy!r}, resolvers={sorted(self._resolvers)})"
        )

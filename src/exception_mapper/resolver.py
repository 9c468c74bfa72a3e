"""
Resolvers convert a caught exception into a handled result.
"""
from typing import Any, Callable, Generic, TypeVar

R = TypeVar('R')


class Resolver(Generic[R]):
    """Base for the two resolver variants."""

    def resolve(self, error: BaseException) -> R:
        """
        Produce the handled result for an exception.

        Args:
            error: The exception being handled

        Returns:
            Handled result
        """
        raise NotImplementedError


class FunctionResolver(Resolver[R]):
    """Resolver that calls a function with the exception."""

    def __init__(self, func: Callable[[BaseException], R]):
        if not callable(func):
            raise TypeError(f"FunctionResolver requires a callable, got {type(func).__name__}")
        self.func = func

    def resolve(self, error: BaseException) -> R:
        return self.func(error)

    def __bool__(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FunctionResolver) and other.func == self.func

    def __hash__(self) -> int:
        return hash(self.func)

    def __repr__(self) -> str:
        name = getattr(self.func, '__qualname__', repr(self.func))
        return f"FunctionResolver({name})"


class StaticResolver(Resolver[R]):
    """Resolver that returns the same value for every exception."""

    def __init__(self, value: R):
        self.value = value

    def resolve(self, error: BaseException) -> R:
        return self.value

    # An empty static value counts as no resolver at all
    def __bool__(self) -> bool:
        return bool(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StaticResolver) and other.value == self.value

    def __repr__(self) -> str:
        return f"StaticResolver({self.value!r})"


def as_resolver(value: Any) -> Resolver:
    """
    Coerce a resolver-like value into a Resolver.

    Resolver instances pass through, callables become FunctionResolver
    and everything else becomes StaticResolver. Wrap a callable in
    StaticResolver explicitly to have it returned verbatim.

    Args:
        value: Resolver, function or static value

    Returns:
        Resolver instance
    """
    if isinstance(value, Resolver):
        return value
    if callable(value):
        return FunctionResolver(value)
    return StaticResolver(value)

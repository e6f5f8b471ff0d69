"""Exception hierarchy for clear error reporting while building object graphs.

Each exception type represents a specific failure mode of the builder and
carries the context needed to understand it.

Exception Hierarchy:
    ObjectGraphError: Base exception for all objectgraph errors
    ├── InvalidArgumentError: Malformed or non-constructible request
    ├── ResolutionError: A type could not be built
    │   ├── CircularDependencyError: Circular constructor chain detected
    │   └── NoConstructorError: No injectable constructor available
    └── RegistrationError: Instance registration failures
        └── DuplicateRegistrationError: Type already present in the cache

Errors raised by a constructor itself are never wrapped; they reach the
caller of ``build`` unchanged.

Example:
    >>> try:
    ...     builder.build(ServiceA)
    ... except CircularDependencyError as e:
    ...     print(" -> ".join(t.__name__ for t in e.cycle))
"""

from __future__ import annotations

from typing import Any, Sequence


def type_name(value: Any) -> str:
    """Return the fully qualified name of a type for error messages."""
    if isinstance(value, type):
        if value.__module__ == "builtins":
            return value.__qualname__
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)


def _short_name(value: Any) -> str:
    return getattr(value, "__name__", repr(value))


class ObjectGraphError(Exception):
    """Base exception for all objectgraph errors."""

    pass


class InvalidArgumentError(ObjectGraphError, ValueError):
    """Raised when an operation receives an argument it cannot work with.

    This occurs when:
    - ``None`` is passed where an instance, type or lookup is required
    - ``build`` is asked for an abstract class, a Protocol or a built-in type
    - ``register`` receives an instance that does not match its type
    """

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


class ResolutionError(ObjectGraphError):
    """Raised when a type cannot be built."""

    def __init__(self, message: str, service_type: type | None = None):
        super().__init__(message)
        self.service_type = service_type


class CircularDependencyError(ResolutionError):
    """Raised when a type is requested while it is already under construction.

    ``cycle`` holds the types from the first occurrence of the repeated type
    up to the type whose constructor asked for it again. ``path`` holds the
    whole chain from the top-level request, which may start before the cycle.
    """

    def __init__(self, cycle: Sequence[type], path: Sequence[type] | None = None):
        self.cycle = list(cycle)
        self.path = list(path) if path is not None else list(cycle)

        cycle_names = [_short_name(t) for t in self.cycle]
        cycle_str = " → ".join([*cycle_names, cycle_names[0]]) if cycle_names else ""
        message = f"Circular dependency detected: {cycle_str}"

        if self.cycle and len(self.path) > len(self.cycle):
            path_str = " → ".join(_short_name(t) for t in [*self.path, self.cycle[0]])
            message += f"\nBuild path: {path_str}"

        super().__init__(message, service_type=self.cycle[0] if self.cycle else None)


class NoConstructorError(ResolutionError):
    """Raised when a type offers no constructor the builder can call.

    This occurs when:
    - The type is abstract, a Protocol or a built-in type
    - Every constructor has a required parameter without a usable class annotation
    """

    def __init__(self, service_type: type, reasons: Sequence[str] | None = None):
        self.reasons = list(reasons or [])

        message = f"Type '{type_name(service_type)}' has no injectable constructor"
        if self.reasons:
            message += "\n" + "\n".join(f"  - {reason}" for reason in self.reasons)

        super().__init__(message, service_type=service_type)


class RegistrationError(ObjectGraphError):
    """Raised when an instance cannot be registered."""

    pass


class DuplicateRegistrationError(RegistrationError):
    """Raised when registering an instance under a type that is already cached.

    The existing entry is kept; the cache never holds two instances for one type.
    """

    def __init__(self, service_type: type):
        self.service_type = service_type
        super().__init__(
            f"An instance of type '{type_name(service_type)}' is already registered"
        )

"""Object graph builder with memoization and cycle detection.

The builder creates an instance of a requested class together with the
instances its constructor needs, recursively. For every constructor
parameter it first asks an external :class:`ServiceLookup`; only when the
lookup does not know the type is the parameter built (or fetched from the
cache) by the builder itself.

Resolution of one type:
    1. Return the cached instance if the type was built or registered before
    2. Fail with CircularDependencyError if the type is already being built
    3. Pick the greediest injectable constructor
    4. Obtain every parameter from the lookup, or build it recursively
    5. Call the constructor and cache the result

Thread Safety:
    Each top-level ``build`` and ``register`` call holds the builder's lock
    for its whole duration, so a type is constructed at most once and two
    independent traversals never share a build path.

Example:
    >>> class Engine:
    ...     pass
    >>>
    >>> class Car:
    ...     def __init__(self, engine: Engine):
    ...         self.engine = engine
    >>>
    >>> builder = ObjectGraphBuilder(NullServiceLookup())
    >>> car = builder.build(Car)
    >>> car is builder.build(Car)
    True
"""

from __future__ import annotations

import inspect
import threading
from contextlib import contextmanager
from typing import Any, Iterator, TypeVar, get_origin

from loguru import logger

from .errors import (
    CircularDependencyError,
    DuplicateRegistrationError,
    InvalidArgumentError,
    type_name,
)
from .introspection import greediest_constructor, non_constructible_reason
from .types import ServiceLookup

T = TypeVar("T")


class BuildPath:
    """Chain of types currently under construction within one ``build`` call.

    Types are entered through :meth:`entering`, which always removes the type
    again when its construction finishes or fails.
    """

    def __init__(self):
        self._stack: list[type] = []

    def __contains__(self, cls: type) -> bool:
        return cls in self._stack

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self) -> Iterator[type]:
        return iter(self._stack)

    def __repr__(self) -> str:
        return f"BuildPath({' → '.join(t.__name__ for t in self._stack)})"

    @contextmanager
    def entering(self, cls: type) -> Iterator[None]:
        """Push ``cls`` for the duration of the block."""
        if cls in self._stack:
            raise self.cycle_error(cls)
        self._stack.append(cls)
        try:
            yield
        finally:
            self._stack.pop()

    def cycle_error(self, cls: type) -> CircularDependencyError:
        """Describe the cycle closed by requesting ``cls`` again."""
        start = self._stack.index(cls)
        return CircularDependencyError(self._stack[start:], path=list(self._stack))


class ObjectGraphBuilder:
    """Builds instances and their dependencies, caching every built instance.

    The cache belongs to this builder: create one builder per composition
    root and drop it together with that root.
    """

    def __init__(self, service_lookup: ServiceLookup):
        """Initialize a new builder.

        Args:
            service_lookup: Collaborator consulted for every constructor
                parameter before the builder constructs it

        Raises:
            InvalidArgumentError: If ``service_lookup`` is None
        """
        if service_lookup is None:
            raise InvalidArgumentError("service_lookup must not be None", argument="service_lookup")

        self._service_lookup = service_lookup
        self._cache: dict[type, Any] = {}
        self._lock = threading.RLock()

    @property
    def service_lookup(self) -> ServiceLookup:
        return self._service_lookup

    @property
    def cached_types(self) -> tuple[type, ...]:
        """Types currently held in the cache, in insertion order."""
        with self._lock:
            return tuple(self._cache)

    def __contains__(self, cls: type) -> bool:
        with self._lock:
            return cls in self._cache

    def __getitem__(self, cls: type[T]) -> T:
        return self.build(cls)

    def build(self, cls: type[T]) -> T:
        """Return the instance of ``cls``, building it and its dependencies if needed.

        Args:
            cls: A concrete class

        Returns:
            The cached instance of ``cls``; the same object on every call

        Raises:
            InvalidArgumentError: If ``cls`` is None or not constructible
            CircularDependencyError: If the constructor chain loops back on itself
            NoConstructorError: If a type in the graph has no injectable constructor
        """
        if cls is None:
            raise InvalidArgumentError("type must not be None", argument="type")

        reason = non_constructible_reason(cls)
        if reason is not None:
            raise InvalidArgumentError(
                f"Type '{type_name(cls)}' must be a concrete class: {reason}", argument="type"
            )

        with self._lock:
            return self._resolve(cls, BuildPath())

    def register(self, instance: Any, as_type: type | None = None) -> None:
        """Put an existing instance into the cache.

        Args:
            instance: The instance ``build`` should return for ``as_type``
            as_type: Cache key, defaults to the instance's own class

        Raises:
            InvalidArgumentError: If ``instance`` is None or does not match ``as_type``
            DuplicateRegistrationError: If ``as_type`` is already cached
        """
        if instance is None:
            raise InvalidArgumentError("instance must not be None", argument="instance")

        key = type(instance) if as_type is None else as_type
        if not inspect.isclass(key) or get_origin(key) is not None:
            raise InvalidArgumentError(f"as_type must be a class, got {key!r}", argument="as_type")
        if not getattr(key, "_is_protocol", False) and not isinstance(instance, key):
            raise InvalidArgumentError(
                f"Instance of '{type_name(type(instance))}' cannot be registered as '{type_name(key)}'",
                argument="instance",
            )

        with self._lock:
            if key in self._cache:
                raise DuplicateRegistrationError(key)
            self._cache[key] = instance
            logger.debug(f"Registered: {type_name(key)}")

    def _resolve(self, cls: type, path: BuildPath) -> Any:
        if cls in self._cache:
            logger.debug(f"Cached: {type_name(cls)}")
            return self._cache[cls]

        with path.entering(cls):
            ctor = greediest_constructor(cls)
            logger.debug(f"Building: {type_name(cls)} via {ctor.label}")

            values = [
                self._resolve_parameter(parameter.service_type, path)
                for parameter in ctor.parameters
            ]

            try:
                instance = ctor.invoke(values)
            except Exception as e:
                logger.debug(f"Constructor {ctor.label} raised {type(e).__name__}: {e}")
                raise

            self._cache[cls] = instance

        return instance

    def _resolve_parameter(self, service_type: type, path: BuildPath) -> Any:
        service = self._service_lookup.lookup(service_type)
        if service is not None:
            logger.debug(f"Provided by lookup: {type_name(service_type)}")
            return service
        return self._resolve(service_type, path)

"""Protocols describing the builder and the collaborator it consults.

Classes:
    ServiceLookup: Protocol for external providers of existing instances
    ObjectBuilder: Protocol for objects that build and register instances

Both are runtime checkable, so ``isinstance`` can be used to validate
collaborators supplied from outside.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ServiceLookup(Protocol):
    """Protocol for external providers of already existing instances.

    The builder asks its lookup for every constructor parameter before
    falling back to building the parameter itself. Instances returned here
    belong to the lookup and are not cached by the builder.

    Examples:
        >>> class SettingsLookup:
        ...     def __init__(self, settings: Settings):
        ...         self.settings = settings
        ...
        ...     def lookup(self, service_type: type) -> object | None:
        ...         if service_type is Settings:
        ...             return self.settings
        ...         return None
    """

    def lookup(self, service_type: type) -> Any | None:
        """Return an existing instance for ``service_type``, or None if unknown."""
        ...


@runtime_checkable
class ObjectBuilder(Protocol):
    """Protocol for objects that build instances together with their dependencies."""

    def build(self, cls: type[T]) -> T:
        ...

    def register(self, instance: Any, as_type: type | None = None) -> None:
        ...

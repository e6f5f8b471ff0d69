"""Ready-made ServiceLookup implementations."""

from __future__ import annotations

from typing import Any, Mapping

from .errors import InvalidArgumentError


class NullServiceLookup:
    """Lookup that never knows any service, so every dependency gets built."""

    def lookup(self, service_type: type) -> Any | None:
        return None

    def __repr__(self) -> str:
        return "NullServiceLookup()"


class MappingServiceLookup:
    """Lookup answering from a mapping of types to existing instances.

    The mapping is read on every call, so later changes to it are visible.
    A type mapped to None is treated as unknown.

    Example:
        >>> lookup = MappingServiceLookup({Settings: Settings(debug=True)})
        >>> builder = ObjectGraphBuilder(lookup)
    """

    def __init__(self, services: Mapping[type, Any]):
        if services is None:
            raise InvalidArgumentError("services must not be None", argument="services")
        self._services = services

    def lookup(self, service_type: type) -> Any | None:
        return self._services.get(service_type)

    def __contains__(self, service_type: type) -> bool:
        return self._services.get(service_type) is not None

    def __repr__(self) -> str:
        names = ", ".join(getattr(t, "__name__", repr(t)) for t in self._services)
        return f"MappingServiceLookup({names})"

"""objectgraph - Build object graphs from constructor type hints.

objectgraph creates an instance of a class together with everything its
constructor needs. Dependencies are taken from an external service lookup
when it knows them and are built recursively otherwise. Every built instance
is cached, so each class is constructed at most once per builder, and
circular constructor chains are reported with the full cycle.

Quick Start:
    >>> from objectgraph import NullServiceLookup, ObjectGraphBuilder, constructor
    >>>
    >>> class Engine:
    ...     pass
    >>>
    >>> class Car:
    ...     def __init__(self, engine: Engine):
    ...         self.engine = engine
    >>>
    >>> builder = ObjectGraphBuilder(NullServiceLookup())
    >>> car = builder.build(Car)
    >>> car.engine is builder.build(Engine)
    True
"""

__version__ = "0.1.0"

from loguru import logger

from objectgraph.core.builder import BuildPath, ObjectGraphBuilder
from objectgraph.core.errors import (
    CircularDependencyError,
    DuplicateRegistrationError,
    InvalidArgumentError,
    NoConstructorError,
    ObjectGraphError,
    RegistrationError,
    ResolutionError,
)
from objectgraph.core.introspection import constructor
from objectgraph.core.lookup import MappingServiceLookup, NullServiceLookup
from objectgraph.core.types import ObjectBuilder, ServiceLookup

# Disabled by default, users can enable with logger.enable("objectgraph")
logger.disable("objectgraph")

__all__ = [
    # Builder
    "ObjectGraphBuilder",
    "BuildPath",
    "constructor",
    # Lookups
    "ServiceLookup",
    "NullServiceLookup",
    "MappingServiceLookup",
    "ObjectBuilder",
    # Errors
    "ObjectGraphError",
    "InvalidArgumentError",
    "ResolutionError",
    "CircularDependencyError",
    "NoConstructorError",
    "RegistrationError",
    "DuplicateRegistrationError",
]

"""Core components of the objectgraph builder.

Key Components:
    ObjectGraphBuilder: Builds instances with their constructor dependencies
    BuildPath: Chain of types under construction, used for cycle detection
    ServiceLookup: Protocol for the external provider of existing instances
    constructor: Decorator marking classmethods as alternate constructors

Usage Example:
    >>> from objectgraph.core import MappingServiceLookup, ObjectGraphBuilder
    >>>
    >>> builder = ObjectGraphBuilder(MappingServiceLookup({Settings: settings}))
    >>> service = builder.build(UserService)  # Settings comes from the lookup
"""

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
from objectgraph.core.introspection import (
    Constructor,
    Parameter,
    analyze_constructors,
    constructor,
    greediest_constructor,
    is_constructible,
)
from objectgraph.core.lookup import MappingServiceLookup, NullServiceLookup
from objectgraph.core.types import ObjectBuilder, ServiceLookup

__all__ = [
    # Builder
    "ObjectGraphBuilder",
    "BuildPath",
    # Lookups
    "ServiceLookup",
    "NullServiceLookup",
    "MappingServiceLookup",
    "ObjectBuilder",
    # Introspection
    "Constructor",
    "Parameter",
    "constructor",
    "analyze_constructors",
    "greediest_constructor",
    "is_constructible",
    # Errors
    "ObjectGraphError",
    "InvalidArgumentError",
    "ResolutionError",
    "CircularDependencyError",
    "NoConstructorError",
    "RegistrationError",
    "DuplicateRegistrationError",
]

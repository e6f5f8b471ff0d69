"""Structural queries on classes used by the object graph builder.

A class is described to the builder by three pieces of information:

1. Whether it can be constructed at all (concrete, not a Protocol, not a
   built-in type).
2. Its constructors, in declaration order: ``__init__`` first, followed by
   every classmethod marked with :func:`constructor`.
3. For each constructor, the ordered list of required parameters and the
   class each of them is annotated with.

Rules:
    - Parameters with default values are left to their defaults
    - ``*args`` and ``**kwargs`` are ignored
    - A required parameter must be annotated with a class; otherwise the
      constructor is not injectable and the reason is reported
    - The greediest injectable constructor wins, the first declared on ties

Example:
    >>> class Car:
    ...     def __init__(self):
    ...         self.engine = None
    ...
    ...     @constructor
    ...     def with_engine(cls, engine: Engine) -> "Car":
    ...         car = cls()
    ...         car.engine = engine
    ...         return car
    >>>
    >>> greediest_constructor(Car).name
    'with_engine'
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Sequence, get_origin, get_type_hints

from .errors import NoConstructorError

__all__ = [
    "Constructor",
    "Parameter",
    "analyze_constructors",
    "constructor",
    "greediest_constructor",
    "is_constructible",
    "non_constructible_reason",
]

_CONSTRUCTOR_MARKER = "__objectgraph_constructor__"

_IGNORED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def constructor(func: Callable | classmethod) -> classmethod:
    """Mark a classmethod as an alternate constructor.

    Accepts either a plain function, which is wrapped in ``classmethod``, or
    an existing ``classmethod``. The result still behaves as an ordinary
    classmethod when called directly.

    Args:
        func: The function creating and returning an instance of its class

    Returns:
        A classmethod the builder recognises as a constructor

    Raises:
        TypeError: If ``func`` is a staticmethod or not callable
    """
    if isinstance(func, staticmethod):
        raise TypeError("@constructor cannot be applied to a staticmethod")
    if isinstance(func, classmethod):
        func = func.__func__
    if not callable(func):
        raise TypeError(f"@constructor expects a function, got {func!r}")

    setattr(func, _CONSTRUCTOR_MARKER, True)
    return classmethod(func)


def _is_marked_constructor(attr: Any) -> bool:
    return isinstance(attr, classmethod) and getattr(attr.__func__, _CONSTRUCTOR_MARKER, False)


@dataclass(frozen=True)
class Parameter:
    """A required constructor parameter and the class it must receive."""

    name: str
    service_type: type
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD


@dataclass(frozen=True)
class Constructor:
    """An injectable way of creating instances of ``owner``.

    Attributes:
        owner: The class being constructed
        name: ``"__init__"`` or the name of the alternate constructor
        parameters: Required parameters in declaration order
    """

    owner: type
    name: str
    parameters: tuple[Parameter, ...]

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def label(self) -> str:
        return f"{self.owner.__name__}.{self.name}"

    def invoke(self, values: Sequence[Any]) -> Any:
        """Call the constructor with one value per parameter, in order."""
        if len(values) != len(self.parameters):
            raise ValueError(
                f"{self.label} expects {len(self.parameters)} values, got {len(values)}"
            )

        args = []
        kwargs = {}
        for parameter, value in zip(self.parameters, values):
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        factory = self.owner if self.name == "__init__" else getattr(self.owner, self.name)
        return factory(*args, **kwargs)


def non_constructible_reason(cls: Any) -> str | None:
    """Explain why ``cls`` cannot be constructed, or return None if it can."""
    if not inspect.isclass(cls):
        return f"{cls!r} is not a class"
    if cls.__module__ == "builtins":
        return f"'{cls.__qualname__}' is a built-in type"
    if getattr(cls, "_is_protocol", False):
        return f"'{cls.__qualname__}' is a Protocol"
    if inspect.isabstract(cls):
        missing = ", ".join(sorted(cls.__abstractmethods__))
        return f"'{cls.__qualname__}' is abstract (abstract methods: {missing})"
    return None


def is_constructible(cls: Any) -> bool:
    """Check if ``cls`` is a concrete class the builder may instantiate."""
    return non_constructible_reason(cls) is None


def _alternate_constructor_names(cls: type) -> list[str]:
    # Base classes first; a redefinition without the marker hides the inherited one
    found: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if _is_marked_constructor(attr):
                found.setdefault(name, None)
            elif name in found:
                del found[name]
    return list(found)


def _analyze(owner: type, name: str, func: Callable) -> Constructor | str:
    """Build a Constructor from ``func``, or return why it is not injectable.

    ``func`` is the underlying function whose first parameter receives the
    instance or the class.
    """
    label = f"{owner.__name__}.{name}"

    if func is object.__init__:
        return Constructor(owner, name, ())

    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError) as e:
        return f"{label}: signature cannot be inspected ({e})"

    required = [
        param
        for param in list(sig.parameters.values())[1:]
        if param.kind not in _IGNORED_KINDS and param.default is inspect.Parameter.empty
    ]
    if not required:
        return Constructor(owner, name, ())

    try:
        hints = get_type_hints(func)
    except (NameError, TypeError, AttributeError) as e:
        return f"{label}: annotations cannot be resolved ({e})"

    parameters = []
    for param in required:
        if param.name not in hints:
            return f"{label}: parameter '{param.name}' has no type annotation"

        annotation = hints[param.name]
        if not inspect.isclass(annotation) or get_origin(annotation) is not None:
            return f"{label}: parameter '{param.name}' is annotated with {annotation!r}, which is not a class"

        parameters.append(Parameter(param.name, annotation, param.kind))

    return Constructor(owner, name, tuple(parameters))


def analyze_constructors(cls: type) -> tuple[list[Constructor], list[str]]:
    """Enumerate the constructors of ``cls`` in declaration order.

    Args:
        cls: A constructible class

    Returns:
        The injectable constructors, and the reasons the others were rejected
    """
    candidates: list[Constructor] = []
    rejected: list[str] = []

    declared = [("__init__", cls.__init__)]
    declared += [
        (name, inspect.getattr_static(cls, name).__func__)
        for name in _alternate_constructor_names(cls)
    ]

    for name, func in declared:
        result = _analyze(cls, name, func)
        if isinstance(result, Constructor):
            candidates.append(result)
        else:
            rejected.append(result)

    return candidates, rejected


def greediest_constructor(cls: type) -> Constructor:
    """Select the injectable constructor with the most required parameters.

    Ties go to the constructor declared first, with ``__init__`` counted
    before any alternate constructor.

    Raises:
        NoConstructorError: If ``cls`` is not constructible or has no
            injectable constructor
    """
    reason = non_constructible_reason(cls)
    if reason is not None:
        raise NoConstructorError(cls, [reason])

    candidates, rejected = analyze_constructors(cls)
    if not candidates:
        raise NoConstructorError(cls, rejected)

    # max() keeps the first of equally long candidates
    return max(candidates, key=lambda c: c.arity)

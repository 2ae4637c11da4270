import inspect
from typing import Any

Identifier = str


def identify(service: Any) -> Identifier:
    """Convert a service key into its string identifier.

    Strings are returned unchanged; classes map to ``module.QualifiedName``.

    Args:
        service: A string identifier or a class.

    Raises:
        TypeError: If the key is neither a string nor a class.

    Example:
        >>> identify("db")
        'db'
        >>> identify(collections.OrderedDict)
        'collections.OrderedDict'
    """
    if isinstance(service, str):
        return service
    if isinstance(service, type):
        return f"{service.__module__}.{service.__qualname__}"
    raise TypeError(f"Service identifier must be a string or a class, got {type(service).__name__}")


def describe(target: Any) -> str:
    """Return the name of a callable as used in error messages.

    Functions are named ``module.qualname``; methods and callable objects are
    named ``module.Class::method``.
    """
    if inspect.ismethod(target):
        owner = target.__self__
        if not isinstance(owner, type):
            owner = type(owner)
        return f"{identify(owner)}::{target.__name__}"
    if isinstance(target, type):
        return identify(target)
    if inspect.isroutine(target):
        name = getattr(target, "__qualname__", None) or getattr(target, "__name__", repr(target))
        module = getattr(target, "__module__", None)
        return f"{module}.{name}" if module else name
    if callable(target):
        return f"{identify(type(target))}::__call__"
    return repr(target)

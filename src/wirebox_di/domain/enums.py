from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a produced service instance lives.

    Attributes:
        TRANSIENT: New instance produced on each request.
        SHARED: First produced instance is cached for the container's lifetime.
    """

    TRANSIENT = "transient"
    SHARED = "shared"

    def __str__(self) -> str:
        return self.value


class BindingKind(str, Enum):
    """How the registry produces a value for an identifier.

    Attributes:
        INSTANCE: An already-constructed value, returned as-is.
        FACTORY: A callable invoked through the resolver on demand.
        IMPLICIT: No explicit binding; the identifier names an instantiable class.
    """

    INSTANCE = "instance"
    FACTORY = "factory"
    IMPLICIT = "implicit"

    def __str__(self) -> str:
        return self.value


class ParameterKind(str, Enum):
    """Calling convention of a single callable parameter."""

    POSITIONAL_ONLY = "positional_only"
    POSITIONAL = "positional"
    VAR_POSITIONAL = "var_positional"
    KEYWORD_ONLY = "keyword_only"
    VAR_KEYWORD = "var_keyword"

    def __str__(self) -> str:
        return self.value

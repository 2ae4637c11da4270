from typing import Any, Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from wirebox_di.domain.enums import BindingKind, ParameterKind


class Parameter(BaseModel):
    """Value object describing one parameter of a callable.

    Produced by the signature inspector and consumed by the resolver, which
    never looks at Python reflection objects directly.

    Attributes:
        name: Declared parameter name.
        kind: Calling convention of the parameter.
        service: Identifier of the declared non-primitive type, if any.
        has_default: Whether the parameter declares a default value.
        default: The default value when ``has_default`` is set.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Declared parameter name.")
    kind: ParameterKind = Field(default=ParameterKind.POSITIONAL, description="Calling convention.")
    service: Optional[str] = Field(default=None, description="Identifier of the declared nominal type.")
    has_default: bool = Field(default=False, description="Whether a default value is declared.")
    default: Any = Field(default=None, description="The declared default value.")

    @property
    def variadic(self) -> bool:
        """Whether the parameter accepts a variable number of arguments."""
        return self.kind in (ParameterKind.VAR_POSITIONAL, ParameterKind.VAR_KEYWORD)


class Binding(BaseModel):
    """The registry's record of how to produce one identifier.

    Attributes:
        kind: Instance or factory.
        concrete: The instance itself, or the factory callable.
        decorated_through: Number of decorators already applied to the value
            the factory returns. Non-zero only for a saved instance rewrapped
            by ``extend``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: BindingKind = Field(..., description="The kind of binding.")
    concrete: Any = Field(default=None, description="Instance or factory callable.")
    decorated_through: int = Field(default=0, ge=0, description="Decorators already applied.")


class ProviderFactory(BaseModel):
    """A factory method found while scanning a provider object."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Name of the declaring method.")
    service: str = Field(..., description="Identifier of the declared return type.")
    factory: Callable[..., Any] = Field(..., description="Method bound to the live provider.")


class Target(BaseModel):
    """A normalized invocation target.

    Attributes:
        function: The callable to invoke, or the class to construct.
        description: Name used in error messages, ``Class::method`` for methods.
        constructs: Whether ``function`` is a class to be constructed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    function: Any = Field(..., description="Callable or class.")
    description: str = Field(..., description="Human-readable name of the target.")
    constructs: bool = Field(default=False, description="Whether the target is a class.")


class ResolverConfiguration(BaseModel):
    """Immutable configuration of a resolver.

    Every ``with_*`` method returns a new configuration; the original is
    never mutated, so one base configuration can be reused safely.

    Attributes:
        containers: Service containers consulted for typed lookups, in order.
            The first one is the primary container used for implicit construction.
        namespace: Module prefix applied to class names without a dot.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    containers: Tuple[Any, ...] = Field(default=(), description="Containers consulted in order.")
    namespace: Optional[str] = Field(default=None, description="Default module for bare class names.")

    def with_container(self, container: Any, prioritize: bool = False) -> "ResolverConfiguration":
        """Return a copy that also consults ``container``.

        Args:
            container: The container to add.
            prioritize: Put the container first instead of last.
        """
        if prioritize:
            containers = (container,) + self.containers
        else:
            containers = self.containers + (container,)
        return self.model_copy(update={"containers": containers})

    def with_namespace(self, namespace: Optional[str]) -> "ResolverConfiguration":
        """Return a copy that resolves bare class names from ``namespace``."""
        namespace = namespace.strip(".") if namespace else None
        return self.model_copy(update={"namespace": namespace or None})

    def qualify(self, name: str) -> str:
        """Prefix a bare class name with the configured namespace."""
        if self.namespace and "." not in name:
            return f"{self.namespace}.{name}"
        return name

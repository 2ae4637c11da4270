import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from wirebox_di.domain import Binding, BindingKind, Lifetime

logger = logging.getLogger(__name__)


class Registry:
    """Bookkeeping of bindings, aliases, shared flags and decorator chains.

    Every operation resolves aliases first. The registry never reflects on
    or invokes anything; producing values is the container's job.

    Attributes:
        _bindings: Instance or factory binding per canonical identifier.
        _aliases: Alias identifier to target identifier.
        _shared: Identifiers whose first produced instance is cached.
        _decorators: Ordered decorator chain per canonical identifier.
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._aliases: Dict[str, str] = {}
        self._shared: Dict[str, bool] = {}
        self._decorators: Dict[str, List[Callable[[Any], Any]]] = {}

    def resolve_alias(self, identifier: str) -> str:
        """Follow the alias table until no further alias exists.

        Example:
            >>> registry.alias("db", "app.Database")
            >>> registry.resolve_alias("db")
            'app.Database'
        """
        while identifier in self._aliases:
            identifier = self._aliases[identifier]
        return identifier

    def has(self, identifier: str) -> bool:
        """Return whether an instance or factory is bound to the identifier."""
        return self.resolve_alias(identifier) in self._bindings

    def binding(self, identifier: str) -> Optional[Binding]:
        """Return the binding of the identifier, or None when unbound."""
        return self._bindings.get(self.resolve_alias(identifier))

    def set(self, identifier: str, concrete: Any) -> None:
        """Bind a value or factory, replacing any previous binding.

        Args:
            identifier: Identifier or alias to bind.
            concrete: A callable is bound as a factory, None removes the
                binding, anything else is bound as an instance.
        """
        identifier = self.resolve_alias(identifier)

        if concrete is None:
            self._bindings.pop(identifier, None)
            logger.debug("Removed binding for %s", identifier)
        elif callable(concrete):
            self._bindings[identifier] = Binding(kind=BindingKind.FACTORY, concrete=concrete)
            logger.debug("Bound factory for %s", identifier)
        else:
            self._bindings[identifier] = Binding(kind=BindingKind.INSTANCE, concrete=concrete)
            logger.debug("Bound instance for %s", identifier)

    def store_instance(self, identifier: str, instance: Any) -> None:
        """Cache a produced instance as the identifier's shared instance."""
        identifier = self.resolve_alias(identifier)
        self._bindings[identifier] = Binding(kind=BindingKind.INSTANCE, concrete=instance)
        logger.debug("Cached shared instance for %s", identifier)

    def share(self, identifier: str) -> None:
        identifier = self.resolve_alias(identifier)
        self._shared[identifier] = True
        logger.debug("Sharing %s", identifier)

    def lifetime(self, identifier: str) -> Lifetime:
        if self._shared.get(self.resolve_alias(identifier), False):
            return Lifetime.SHARED
        return Lifetime.TRANSIENT

    def alias(self, identifier: str, target: str) -> None:
        self._aliases[identifier] = target
        logger.debug("Aliased %s to %s", identifier, target)

    def extend(self, identifier: str, decorator: Callable[[Any], Any]) -> None:
        """Append a decorator to the identifier's chain.

        A live instance would otherwise bypass the new decorator, so it is
        replaced by a shared one-shot factory returning the saved instance.
        That factory records how many decorators the instance has already
        been through, so the next production applies only the newer ones.
        """
        identifier = self.resolve_alias(identifier)
        chain = self._decorators.setdefault(identifier, [])
        chain.append(decorator)
        logger.debug("Extended %s with decorator %d", identifier, len(chain))

        binding = self._bindings.get(identifier)
        if binding is None or binding.kind is not BindingKind.INSTANCE:
            return

        instance = binding.concrete

        def saved() -> Any:
            return instance

        self._shared[identifier] = True
        self._bindings[identifier] = Binding(
            kind=BindingKind.FACTORY,
            concrete=saved,
            decorated_through=len(chain) - 1,
        )
        logger.debug("Rewrapped live instance of %s for decoration", identifier)

    def decorators(self, identifier: str) -> Tuple[Callable[[Any], Any], ...]:
        return tuple(self._decorators.get(self.resolve_alias(identifier), ()))

    def copy(self) -> "Registry":
        """Return an independent registry with the same tables."""
        registry = Registry()
        registry._bindings = dict(self._bindings)
        registry._aliases = dict(self._aliases)
        registry._shared = dict(self._shared)
        registry._decorators = {identifier: list(chain) for identifier, chain in self._decorators.items()}
        return registry

    def clear(self) -> None:
        self._bindings.clear()
        self._aliases.clear()
        self._shared.clear()
        self._decorators.clear()

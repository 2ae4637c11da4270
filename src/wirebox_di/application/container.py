import logging
import threading
from typing import Any, Callable, Mapping, Optional

from wirebox_di.application.introspection import instantiable
from wirebox_di.application.lifetime_manager import LifetimeManager
from wirebox_di.application.registry import Registry
from wirebox_di.application.resolver import Resolver
from wirebox_di.domain import (
    AliasProvider,
    Binding,
    BindingKind,
    IServiceContainer,
    NotFoundError,
    SharesProvider,
)

logger = logging.getLogger(__name__)


class Container(IServiceContainer):
    """Main service container.

    Holds bindings, aliases, shared flags and decorator chains, and resolves
    services through a resolver bound to this container as its primary one.
    Every public method accepts either a string identifier or a class.

    All mutations and the check-construct-cache sequence of ``get`` and
    ``get_or_create`` run under one re-entrant lock.

    Attributes:
        _registry: Bookkeeping of bindings, aliases, shared flags and decorators.
        _resolver: Resolver consulting this container first.
        _lifetime_manager: Applies decorator chains and caches shared instances.
        _lock: Lock guarding the registry.
    """

    def __init__(self, resolver: Optional[Resolver] = None) -> None:
        """Initialize an empty container.

        Args:
            resolver: Base resolver to bind to this container. Its configured
                containers are consulted after this one.
        """
        self._lock = threading.RLock()
        self._registry = Registry()
        self._resolver = (resolver or Resolver()).with_container(self, prioritize=True)
        self._lifetime_manager = LifetimeManager(self._registry, self._lock)

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    def _identify(self, service: Any) -> str:
        return self._resolver.locator.remember(service)

    def resolve(self, service: Any) -> str:
        """Return the canonical identifier of a service after alias resolution.

        Example:
            >>> container.alias("db", Database)
            >>> container.resolve("db") == identify(Database)
            True
        """
        return self._registry.resolve_alias(self._identify(service))

    def _qualify(self, identifier: str) -> str:
        return self._registry.resolve_alias(self._resolver.configuration.qualify(identifier))

    def has(self, service: Any) -> bool:
        """Return whether an instance or factory was explicitly set for the service.

        Classes that could be constructed implicitly do not count; see ``can_resolve``.
        """
        return self._registry.has(self._identify(service))

    def can_resolve(self, service: Any) -> bool:
        """Return whether ``get_or_create`` could produce the service.

        True for explicit bindings and for identifiers naming a concrete class.
        """
        identifier = self.resolve(service)
        if self._registry.has(identifier):
            return True
        try:
            class_ = self._resolver.locator.locate(self._qualify(identifier))
        except NotFoundError:
            return False
        return instantiable(class_)

    def get(self, service: Any) -> Any:
        """Return the registered service.

        Instances are returned as-is. Factories are invoked through the
        resolver, decorated, and cached when the service is shared.

        Raises:
            NotFoundError: If no instance or factory is registered.
        """
        identifier = self.resolve(service)

        with self._lock:
            binding = self._registry.binding(identifier)
            if binding is None:
                raise NotFoundError.for_service(identifier)
            return self._produce(identifier, binding)

    def get_or_create(self, service: Any) -> Any:
        """Return the registered service, or construct it as a class.

        Implicitly constructed instances go through the decorator chain and
        are cached when the identifier is shared, like registered ones.

        Raises:
            NotFoundError: If the service is not registered and cannot be constructed.
        """
        identifier = self.resolve(service)

        with self._lock:
            binding = self._registry.binding(identifier)
            if binding is None:
                # Bare class names are bound and decorated under their namespaced identifier
                identifier = self._qualify(identifier)
                binding = self._registry.binding(identifier) or Binding(kind=BindingKind.IMPLICIT, concrete=identifier)
            return self._produce(identifier, binding)

    def _produce(self, identifier: str, binding: Binding) -> Any:
        if binding.kind is BindingKind.INSTANCE:
            return binding.concrete

        if binding.kind is BindingKind.IMPLICIT:
            logger.debug("Creating unregistered service %s", identifier)
            return self._lifetime_manager.produce(identifier, lambda: self._resolver.create(binding.concrete))

        return self._lifetime_manager.produce(
            identifier,
            lambda: self._resolver.call(binding.concrete),
            binding.decorated_through,
        )

    def factory(self, service: Any) -> Callable[[], Any]:
        """Return a callable that gets the service when invoked."""
        identifier = self._identify(service)

        def get_service() -> Any:
            return self.get(identifier)

        return get_service

    def set(self, service: Any, concrete: Any) -> None:
        """Set a service instance or factory.

        Args:
            service: Identifier or class.
            concrete: A callable (including a class) to use as factory, an
                instance to return as-is, or None to remove the binding.

        Example:
            >>> container.set(Clock, SystemClock)
            >>> container.set("settings", Settings(debug=True))
        """
        with self._lock:
            self._registry.set(self._identify(service), concrete)

    def share(self, service: Any) -> None:
        """Cache the first produced instance of the service for later requests."""
        with self._lock:
            self._registry.share(self._identify(service))

    def alias(self, service: Any, target: Any) -> None:
        """Associate an alias, interface or parent class with another identifier."""
        with self._lock:
            self._registry.alias(self._identify(service), self._identify(target))

    def extend(self, service: Any, transform: Any, parameter: Optional[str] = None) -> None:
        """Add a decorator to the service.

        The transform is called through the resolver, so besides the instance
        it may declare further injected dependencies.

        Args:
            service: Identifier or class to decorate.
            transform: Any target accepted by ``call``.
            parameter: Name of the parameter receiving the instance. Defaults
                to the transform's first parameter.

        Example:
            >>> container.extend(Mailer, lambda mailer, log: LoggingMailer(mailer, log))
        """

        def decorator(instance: Any) -> Any:
            return self._resolver.call_with(transform, instance, parameter)

        with self._lock:
            self._registry.extend(self._identify(service), decorator)

    def register(self, provider: object) -> None:
        """Register the factory methods of a provider object.

        Every public, non-static method with a non-primitive return annotation
        becomes the factory of that return type, bound to ``provider``, and its
        name becomes an alias of the type. Aliases and shares declared through
        ``AliasProvider``/``SharesProvider`` are applied afterwards.
        """
        factories = self._resolver.inspector.provider_factories(provider)

        with self._lock:
            for factory in factories:
                self._registry.alias(factory.name, factory.service)
                self._registry.set(factory.service, factory.factory)

            if isinstance(provider, AliasProvider):
                for alias, target in provider.aliases().items():
                    self._registry.alias(self._identify(alias), self._identify(target))

            if isinstance(provider, SharesProvider):
                for shared in provider.shares():
                    self._registry.share(self._identify(shared))

        logger.debug("Registered %d factories from %s", len(factories), type(provider).__name__)

    def call(self, target: Any, named: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke a callable with its arguments resolved from this container.

        See ``Resolver.call`` for accepted targets.

        Raises:
            NotFoundError: If the target or one of its arguments cannot be resolved.
        """
        return self._resolver.call(target, named)

    def create(self, class_: Any, named: Optional[Mapping[str, Any]] = None) -> Any:
        """Construct a new instance and run it through the class's decorator chain.

        Never cached, even if the class is shared.

        Raises:
            NotFoundError: If the class or one of its arguments cannot be resolved.
        """
        identifier = self._qualify(self._identify(class_))
        instance = self._resolver.create(class_, named)
        return self._lifetime_manager.decorate(identifier, instance)

    def registry_copy(self) -> Registry:
        """Get a copy of the registry, e.g. for test containers."""
        with self._lock:
            return self._registry.copy()

    def set_registry(self, registry: Registry) -> None:
        with self._lock:
            self._registry = registry
            self._lifetime_manager.set_registry(registry)

    def clear(self) -> None:
        """Clear all bindings, aliases, shared flags and decorators."""
        with self._lock:
            self._registry.clear()

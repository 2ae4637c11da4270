import threading
from typing import Any, Callable, Optional

from wirebox_di.application.registry import Registry
from wirebox_di.domain import Lifetime


class LifetimeManager:
    """Runs produced instances through their decorator chain and caches shared ones.

    Production happens under the container's lock, so for a shared identifier
    the first completed instance wins and no duplicate is constructed.

    Attributes:
        _registry: Registry holding shared flags, decorator chains and the instance cache.
        _lock: Re-entrant lock guarding the check-construct-cache sequence.
    """

    def __init__(self, registry: Registry, lock: Optional[threading.RLock] = None) -> None:
        """Initialize the lifetime manager.

        Args:
            registry: The registry to read lifetimes from and cache instances in.
            lock: Lock shared with the owning container. A new one is created if omitted.
        """
        self._registry = registry
        self._lock = lock or threading.RLock()

    def produce(self, identifier: str, factory: Callable[[], Any], decorated_through: int = 0) -> Any:
        """Produce, decorate and, when shared, cache an instance.

        Args:
            identifier: Canonical identifier the instance is produced for.
            factory: Function creating the raw instance.
            decorated_through: Number of leading decorators to skip because
                the factory returns an already decorated instance.

        Returns:
            The decorated instance.

        Example:
            >>> registry.share("app.Clock")
            >>> clock = manager.produce("app.Clock", Clock)
            >>> registry.binding("app.Clock").concrete is clock
            True
        """
        with self._lock:
            instance = self.decorate(identifier, factory(), decorated_through)
            if self._registry.lifetime(identifier) is Lifetime.SHARED:
                self._registry.store_instance(identifier, instance)
            return instance

    def decorate(self, identifier: str, instance: Any, decorated_through: int = 0) -> Any:
        """Apply the identifier's decorator chain in registration order."""
        for decorator in self._registry.decorators(identifier)[decorated_through:]:
            instance = decorator(instance)
        return instance

    def set_registry(self, registry: Registry) -> None:
        """Switch to another registry, e.g. after a test container reset."""
        self._registry = registry

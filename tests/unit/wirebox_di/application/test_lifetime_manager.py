"""Unit tests for LifetimeManager."""

import threading

import pytest

from wirebox_di.application.lifetime_manager import LifetimeManager
from wirebox_di.application.registry import Registry
from wirebox_di.domain import BindingKind


class TestProduce:
    """Test cases for LifetimeManager.produce."""

    def test_transient_instance_is_not_cached(self):
        """Test that transient identifiers produce fresh instances."""
        registry = Registry()
        manager = LifetimeManager(registry)

        instance1 = manager.produce("service", object)
        instance2 = manager.produce("service", object)

        assert instance1 is not instance2
        assert registry.has("service") is False

    def test_shared_instance_is_cached(self):
        """Test that shared identifiers cache the produced instance."""
        registry = Registry()
        registry.share("service")
        manager = LifetimeManager(registry)

        instance = manager.produce("service", object)

        binding = registry.binding("service")
        assert binding.kind is BindingKind.INSTANCE
        assert binding.concrete is instance

    def test_decorators_applied_in_order(self):
        """Test that the chain is applied in registration order."""
        registry = Registry()
        registry.extend("service", lambda value: value + ["first"])
        registry.extend("service", lambda value: value + ["second"])
        manager = LifetimeManager(registry)

        assert manager.produce("service", list) == ["first", "second"]

    def test_decorated_through_skips_applied_decorators(self):
        """Test that already applied decorators are skipped."""
        registry = Registry()
        registry.extend("service", lambda value: value + ["first"])
        registry.extend("service", lambda value: value + ["second"])
        manager = LifetimeManager(registry)

        assert manager.produce("service", lambda: ["first"], decorated_through=1) == ["first", "second"]

    def test_factory_errors_propagate(self):
        """Test that exceptions from the factory are not wrapped."""
        manager = LifetimeManager(Registry())

        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            manager.produce("service", failing)

    def test_uses_given_lock(self):
        """Test that production holds the given lock."""
        lock = threading.RLock()
        manager = LifetimeManager(Registry(), lock)
        observed = []

        def factory():
            result = []
            thread = threading.Thread(target=lambda: result.append(lock.acquire(blocking=False)))
            thread.start()
            thread.join()
            observed.extend(result)
            return object()

        manager.produce("service", factory)

        assert observed == [False]


class TestDecorate:
    """Test cases for LifetimeManager.decorate."""

    def test_decorate_without_chain_returns_instance(self):
        """Test that undecorated identifiers pass through."""
        instance = object()

        assert LifetimeManager(Registry()).decorate("service", instance) is instance

    def test_set_registry(self):
        """Test switching registries."""
        manager = LifetimeManager(Registry())
        registry = Registry()
        registry.extend("service", lambda value: value * 2)
        manager.set_registry(registry)

        assert manager.decorate("service", 2) == 4

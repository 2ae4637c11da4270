from typing import Any, Callable, Dict, Optional, Tuple

from wirebox_di.application import Container, Resolver


class TestContainer(Container):
    """Service container for testing with override capabilities.

    Starts from a copy of a parent container's registrations, so overrides
    never leak into the parent. Automatically restores the parent's
    registrations when used as a context manager.

    This is useful for:
    - Replacing external services (databases, APIs, etc.) with test doubles
    - Overriding configuration values for a single test
    - Isolating tests from shared state

    Attributes:
        _parent_container: The parent container to copy registrations from.
        _overrides: Identifiers overridden in this container.

    Example:
        >>> container = Container()
        >>> container.set(EmailService, RealEmailService)
        >>>
        >>> def test_user_service():
        ...     with TestContainer(container) as test_container:
        ...         mock_email = MockEmailService()
        ...         test_container.override(EmailService, mock_email)
        ...
        ...         service = test_container.get_or_create(UserService)
        ...         service.send_welcome_email(user)
        ...
        ...         assert mock_email.send_called
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent_container: Optional[Container] = None) -> None:
        """Initialize the test container.

        Args:
            parent_container: Optional parent container to copy registrations from.
                            If None, starts empty.
        """
        resolver = None
        if parent_container:
            # Share remembered classes with the parent
            resolver = Resolver(locator=parent_container.resolver.locator)
        super().__init__(resolver)
        self._parent_container = parent_container
        self._overrides: Dict[str, Any] = {}

        if parent_container:
            self.set_registry(parent_container.registry_copy())

    def override(self, service: Any, concrete: Any) -> None:
        """Replace a service with a test double.

        Args:
            service: Identifier or class to override.
            concrete: Instance to return, or factory to call on every request.

        Example:
            >>> test_container.override(Database, FakeDatabase())
            >>> assert test_container.get_or_create(UserRepository).db is not None
        """
        identifier = self.resolve(service)
        self._overrides[identifier] = concrete
        self.set(identifier, concrete)

    def override_shared(self, service: Any, factory: Callable[..., Any]) -> None:
        """Replace a service with a factory whose first result is reused."""
        self.override(service, factory)
        self.share(service)

    def reset_overrides(self) -> None:
        """Remove all overrides and restore parent registrations.

        Useful for cleaning up between test cases.
        """
        self._overrides.clear()
        if self._parent_container:
            self.set_registry(self._parent_container.registry_copy())
        else:
            self.clear()

    def __enter__(self) -> "TestContainer":
        """Context manager entry - returns self."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - automatically clean up overrides."""
        self.reset_overrides()
        return False


def create_mock_container(*instances: Tuple[Any, Any]) -> TestContainer:
    """Create a test container with pre-configured test doubles.

    Args:
        *instances: Tuples of (identifier or class, instance).

    Returns:
        TestContainer with the instances set.

    Example:
        >>> test_container = create_mock_container(
        ...     (Database, mock_db),
        ...     ("cache", mock_cache),
        ... )
        >>> service = test_container.get_or_create(UserService)
    """
    container = TestContainer()

    for service, instance in instances:
        container.override(service, instance)

    return container

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional

from wirebox_di.domain.models import Parameter, ProviderFactory


class IServiceContainer(ABC):
    """Abstract interface for looking up services by identifier."""

    @abstractmethod
    def has(self, service: Any) -> bool:
        """Return whether an instance or factory is registered for the service.

        Args:
            service: Identifier or class, resolved through aliases first.
        """

    @abstractmethod
    def get(self, service: Any) -> Any:
        """Return the registered service.

        Raises:
            NotFoundError: If no instance or factory is registered.
        """

    @abstractmethod
    def get_or_create(self, service: Any) -> Any:
        """Return the registered service, or construct it as a class.

        Raises:
            NotFoundError: If the service is not registered and no class can be constructed.
        """


class IResolver(ABC):
    """Abstract interface for invoking callables with resolved arguments."""

    @abstractmethod
    def call(self, target: Any, named: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke ``target`` with every parameter resolved.

        Args:
            target: A callable, ``"Class@method"``, ``"Class::method"`` or a dotted name.
            named: Values by parameter name, taking precedence over anything else.

        Raises:
            NotFoundError: If the target or one of its arguments cannot be resolved.
        """

    @abstractmethod
    def create(self, class_: Any, named: Optional[Mapping[str, Any]] = None) -> Any:
        """Construct ``class_`` with its constructor parameters resolved.

        Raises:
            NotFoundError: If the class or one of its arguments cannot be resolved.
        """


class ISignatureInspector(ABC):
    """Abstract interface for reflecting on callables."""

    @abstractmethod
    def inspect(self, target: Any) -> List[Parameter]:
        """Return the ordered parameter list of a function, method or callable object.

        Raises:
            NotFoundError: If the target cannot be reflected.
        """

    @abstractmethod
    def inspect_constructor(self, class_: type) -> Optional[List[Parameter]]:
        """Return the constructor parameters of ``class_``, or None without a constructor.

        Raises:
            NotFoundError: If the constructor cannot be reflected.
        """

    @abstractmethod
    def provider_factories(self, provider: object) -> List[ProviderFactory]:
        """Return the public, non-static factory methods of ``provider``."""


class ITypeLocator(ABC):
    """Abstract interface for loading classes and functions by identifier."""

    @abstractmethod
    def remember(self, service: Any) -> str:
        """Return the identifier of ``service``, remembering it when it is a class."""

    @abstractmethod
    def locate(self, name: str) -> Any:
        """Return the class or function named by ``name``.

        Raises:
            NotFoundError: If nothing can be loaded under that name.
        """


class AliasProvider(ABC):
    """Provider capability: declares aliases to apply on registration."""

    @abstractmethod
    def aliases(self) -> Dict[str, str]:
        """Return a mapping from alias identifier to target identifier."""


class SharesProvider(ABC):
    """Provider capability: declares identifiers to mark shared on registration."""

    @abstractmethod
    def shares(self) -> Iterable[str]:
        """Return the identifiers (or method-name aliases) to share."""

"""
wirebox-di: Reflection based service container with auto-wiring.

Public API exports for the wirebox-di package.
"""

# Application exports
from wirebox_di.application.container import Container
from wirebox_di.application.resolver import Resolver

# Domain exports
from wirebox_di.domain.enums import BindingKind, Lifetime
from wirebox_di.domain.exceptions import NotFoundError, ServiceException
from wirebox_di.domain.identifiers import identify
from wirebox_di.domain.interfaces import AliasProvider, SharesProvider
from wirebox_di.domain.models import ResolverConfiguration

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "Resolver",
    "ResolverConfiguration",
    # Provider capabilities
    "AliasProvider",
    "SharesProvider",
    # Enums
    "Lifetime",
    "BindingKind",
    # Exceptions
    "ServiceException",
    "NotFoundError",
    # Identifiers
    "identify",
]

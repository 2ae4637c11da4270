"""
Domain layer - Core service resolution concepts.

This layer contains the value objects, enums, exceptions and interfaces of the
service container. It has no dependencies on other layers.
"""

from .enums import BindingKind, Lifetime, ParameterKind
from .exceptions import NotFoundError, ServiceException
from .identifiers import Identifier, describe, identify
from .interfaces import (
    AliasProvider,
    IResolver,
    IServiceContainer,
    ISignatureInspector,
    ITypeLocator,
    SharesProvider,
)
from .models import Binding, Parameter, ProviderFactory, ResolverConfiguration, Target

__all__ = [
    # Enums
    "Lifetime",
    "BindingKind",
    "ParameterKind",
    # Exceptions
    "ServiceException",
    "NotFoundError",
    # Identifiers
    "Identifier",
    "identify",
    "describe",
    # Interfaces
    "IServiceContainer",
    "IResolver",
    "ISignatureInspector",
    "ITypeLocator",
    "AliasProvider",
    "SharesProvider",
    # Models
    "Binding",
    "Parameter",
    "ProviderFactory",
    "ResolverConfiguration",
    "Target",
]

"""
Application layer - Registration and resolution.

This layer contains the registry, the resolution engine and the container
orchestrating them. It depends only on the Domain layer.
"""

from .callables import CallableNormalizer
from .container import Container
from .introspection import SignatureInspector, TypeLocator
from .lifetime_manager import LifetimeManager
from .registry import Registry
from .resolver import Resolver

__all__ = [
    "Container",
    "Resolver",
    "Registry",
    "LifetimeManager",
    "CallableNormalizer",
    "SignatureInspector",
    "TypeLocator",
]

"""
FastAPI integration module.

Provides helpers and utilities for integrating wirebox-di with FastAPI.
"""

from .integration import (
    ContainerMiddleware,
    create_call_dependency,
    create_fastapi_dependency,
    create_request_dependency,
)

__all__ = [
    "create_fastapi_dependency",
    "create_call_dependency",
    "create_request_dependency",
    "ContainerMiddleware",
]

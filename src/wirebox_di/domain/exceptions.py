from typing import Optional


class ServiceException(Exception):
    """Base exception for service container errors."""


class NotFoundError(ServiceException):
    """Raised when a service, argument or resolution target cannot be found.

    This occurs when:
    - No instance or factory is registered for the requested identifier.
    - A required parameter has no override, binding, default or type to construct.
    - The target class, function or method does not exist or cannot be reflected.

    Attributes:
        subject: Human-readable description of what was being resolved.
    """

    def __init__(self, subject: str, message: Optional[str] = None) -> None:
        self.subject = subject
        super().__init__(message or f"Could not find {subject}")

    @classmethod
    def for_service(cls, identifier: str) -> "NotFoundError":
        """Create an error for an identifier without instance or factory."""
        return cls(identifier, f"Could not find service {identifier}")

    @classmethod
    def for_parameter(cls, parameter: str, target: str) -> "NotFoundError":
        """Create an error for a parameter that could not be bound.

        Args:
            parameter: Name of the unresolvable parameter.
            target: Function name, or ``Class::method`` for methods.
        """
        return cls(
            f"parameter {parameter} in {target}",
            f"Argument not found for parameter {parameter} in {target}",
        )

    @classmethod
    def for_target(cls, target: str, reason: Optional[str] = None) -> "NotFoundError":
        """Create an error for a class or callable that could not be reflected."""
        message = f"Could not find {target}"
        if reason:
            message += f": {reason}"
        return cls(target, message)

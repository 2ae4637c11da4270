from typing import Any, Callable

from wirebox_di.domain import (
    ITypeLocator,
    NotFoundError,
    ResolverConfiguration,
    Target,
    describe,
    identify,
)


def _invokable(class_: type) -> bool:
    """Return whether instances of the class define ``__call__`` themselves."""
    return any("__call__" in vars(base) for base in class_.__mro__[:-1])


class CallableNormalizer:
    """Translates call targets into invocable references.

    Supported targets:
    - ``"Class@method"``: ``method`` bound to a resolved-or-constructed ``Class``.
    - ``"Class::method"``: ``method`` looked up on the class itself.
    - ``(owner, "method")``: ``method`` on an instance, class or class name.
    - ``"module.function"`` / ``"module.Class"``: a function, a class to
      construct, or an invokable class whose instance is called.
    - Any other callable, unchanged.

    Attributes:
        _locator: Loads classes and functions by name.
        _configuration: Supplies the namespace for bare class names.
        _instantiate: Resolves or constructs a class by identifier.
    """

    def __init__(
        self,
        locator: ITypeLocator,
        configuration: ResolverConfiguration,
        instantiate: Callable[[str], Any],
    ) -> None:
        self._locator = locator
        self._configuration = configuration
        self._instantiate = instantiate

    def normalize(self, target: Any) -> Target:
        """Return the invocable reference for ``target``.

        Raises:
            NotFoundError: If the class, function or method does not exist.
        """
        if isinstance(target, str):
            return self._parse(target)

        if isinstance(target, tuple) and len(target) == 2 and isinstance(target[1], str):
            owner, method = target
            if isinstance(owner, str):
                owner = self._locator.locate(self._configuration.qualify(owner))
            return self._member(owner, method)

        if isinstance(target, type):
            return Target(function=target, description=self._locator.remember(target), constructs=True)

        if callable(target):
            return Target(function=target, description=describe(target))

        raise NotFoundError.for_target(repr(target), "not callable")

    def _parse(self, target: str) -> Target:
        if "@" in target:
            class_name, method = target.split("@", 1)
            return self._member(self._instantiate(self._configuration.qualify(class_name)), method)

        if "::" in target:
            class_name, method = target.split("::", 1)
            return self._member(self._locator.locate(self._configuration.qualify(class_name)), method)

        found = self._locator.locate(target)
        if isinstance(found, type):
            identifier = self._locator.remember(found)
            if _invokable(found):
                return Target(function=self._instantiate(identifier), description=f"{identifier}::__call__")
            return Target(function=found, description=identifier, constructs=True)

        if not callable(found):
            raise NotFoundError.for_target(target, "not callable")
        return Target(function=found, description=describe(found))

    def _member(self, owner: Any, method: str) -> Target:
        owner_type = owner if isinstance(owner, type) else type(owner)
        description = f"{identify(owner_type)}::{method}"

        try:
            function = getattr(owner, method)
        except AttributeError as e:
            raise NotFoundError.for_target(description, str(e)) from e

        if not callable(function):
            raise NotFoundError.for_target(description, "not callable")
        return Target(function=function, description=description)

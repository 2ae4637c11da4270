import builtins
import importlib
import inspect
import types
import typing
from inspect import Parameter as SignatureParameter
from typing import Any, Dict, List, Optional, Union, get_type_hints

from wirebox_di.domain import (
    ISignatureInspector,
    ITypeLocator,
    NotFoundError,
    Parameter,
    ParameterKind,
    ProviderFactory,
    describe,
    identify,
)

_KINDS = {
    SignatureParameter.POSITIONAL_ONLY: ParameterKind.POSITIONAL_ONLY,
    SignatureParameter.POSITIONAL_OR_KEYWORD: ParameterKind.POSITIONAL,
    SignatureParameter.VAR_POSITIONAL: ParameterKind.VAR_POSITIONAL,
    SignatureParameter.KEYWORD_ONLY: ParameterKind.KEYWORD_ONLY,
    SignatureParameter.VAR_KEYWORD: ParameterKind.VAR_KEYWORD,
}


def instantiable(class_: Any) -> bool:
    """Return whether ``class_`` is a concrete class, not an ABC or a Protocol."""
    return (
        isinstance(class_, type)
        and not inspect.isabstract(class_)
        and not getattr(class_, "_is_protocol", False)
    )


class TypeLocator(ITypeLocator):
    """Loads classes and functions by identifier.

    Classes seen as service keys or annotations are remembered, so classes that
    cannot be imported by dotted path (e.g. defined inside a function) still
    resolve. Anything else is imported by its dotted name.

    Attributes:
        _known: Remembered classes by identifier.
    """

    def __init__(self) -> None:
        self._known: Dict[str, type] = {}

    def remember(self, service: Any) -> str:
        identifier = identify(service)
        if isinstance(service, type):
            self._known[identifier] = service
        return identifier

    def locate(self, name: str) -> Any:
        """Return the class or function named ``name``.

        Imports the longest importable module prefix of the dotted name and
        walks the remaining parts as attributes.

        Example:
            >>> TypeLocator().locate("collections.OrderedDict")
            <class 'collections.OrderedDict'>
        """
        if name in self._known:
            return self._known[name]

        parts = name.split(".")
        if not all(parts):
            raise NotFoundError.for_target(name, "not a dotted name")

        for index in range(len(parts), 0, -1):
            try:
                found = importlib.import_module(".".join(parts[:index]))
            except ImportError:
                continue
            try:
                for attribute in parts[index:]:
                    found = getattr(found, attribute)
            except AttributeError as e:
                raise NotFoundError.for_target(name, str(e)) from e
            return found

        raise NotFoundError.for_target(name, "no such module, class or function")


class SignatureInspector(ISignatureInspector):
    """Reflects on callables using ``inspect.signature`` and type hints.

    Translates Python reflection into ``Parameter`` value objects: declared
    types become service identifiers, primitives and generics become untyped.

    Attributes:
        _locator: Locator that remembers every class seen in an annotation.
    """

    def __init__(self, locator: ITypeLocator) -> None:
        self._locator = locator

    def inspect(self, target: Any) -> List[Parameter]:
        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise NotFoundError.for_target(describe(target), str(e)) from e

        hints_source = target
        if not inspect.isroutine(target):
            hints_source = getattr(type(target), "__call__", target)
        hints = self._type_hints(hints_source)

        return [self._parameter(parameter, hints) for parameter in signature.parameters.values()]

    def inspect_constructor(self, class_: type) -> Optional[List[Parameter]]:
        if class_.__init__ is not object.__init__:
            constructor = class_.__init__
        elif class_.__new__ is not object.__new__:
            constructor = class_.__new__
        else:
            return None

        try:
            signature = inspect.signature(constructor)
        except (TypeError, ValueError) as e:
            raise NotFoundError.for_target(f"{identify(class_)}::__init__", str(e)) from e

        hints = self._type_hints(constructor)
        # Skip self (or cls for __new__)
        parameters = list(signature.parameters.values())[1:]
        return [self._parameter(parameter, hints) for parameter in parameters]

    def provider_factories(self, provider: object) -> List[ProviderFactory]:
        factories = []
        for name in sorted(dir(type(provider))):
            if name.startswith("_"):
                continue

            attribute = inspect.getattr_static(provider, name)
            if isinstance(attribute, (staticmethod, classmethod)) or not inspect.isfunction(attribute):
                continue

            hints = self._type_hints(attribute) or getattr(attribute, "__annotations__", {})
            annotation = hints.get("return")
            service = self._service(annotation) if annotation is not None else None
            if service is None:
                continue

            factories.append(ProviderFactory(name=name, service=service, factory=getattr(provider, name)))

        return factories

    def _parameter(self, parameter: SignatureParameter, hints: Dict[str, Any]) -> Parameter:
        kind = _KINDS[parameter.kind]
        has_default = parameter.default is not SignatureParameter.empty

        service = None
        if kind not in (ParameterKind.VAR_POSITIONAL, ParameterKind.VAR_KEYWORD):
            service = self._service(hints.get(parameter.name, parameter.annotation))

        return Parameter(
            name=parameter.name,
            kind=kind,
            service=service,
            has_default=has_default,
            default=parameter.default if has_default else None,
        )

    def _service(self, annotation: Any) -> Optional[str]:
        """Return the identifier of a non-primitive nominal type annotation."""
        if annotation is SignatureParameter.empty or annotation is Any:
            return None

        # Unresolvable string annotations name a service directly
        if isinstance(annotation, str):
            if hasattr(builtins, annotation) or not all(part.isidentifier() for part in annotation.split(".")):
                return None
            return annotation

        origin = typing.get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            members = [member for member in typing.get_args(annotation) if member is not type(None)]
            return self._service(members[0]) if len(members) == 1 else None
        if origin is not None:
            return None

        if isinstance(annotation, type) and annotation.__module__ != "builtins":
            return self._locator.remember(annotation)
        return None

    @staticmethod
    def _type_hints(function: Any) -> Dict[str, Any]:
        try:
            return get_type_hints(function)
        except (NameError, TypeError):
            pass

        # Evaluate annotations one by one so a single unresolvable name
        # (e.g. an import guarded by TYPE_CHECKING) leaves the others typed
        namespace = getattr(inspect.unwrap(function), "__globals__", {})
        annotations = getattr(function, "__annotations__", None) or {}
        return {name: _evaluate(annotation, namespace) for name, annotation in annotations.items()}


def _evaluate(annotation: Any, namespace: Dict[str, Any]) -> Any:
    """Evaluate a postponed annotation, keeping the string when it names nothing."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, namespace)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation

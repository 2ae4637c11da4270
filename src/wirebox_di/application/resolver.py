import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from wirebox_di.application.callables import CallableNormalizer
from wirebox_di.application.introspection import SignatureInspector, TypeLocator, instantiable
from wirebox_di.domain import (
    IResolver,
    ISignatureInspector,
    IServiceContainer,
    ITypeLocator,
    NotFoundError,
    Parameter,
    ParameterKind,
    ResolverConfiguration,
    Target,
    identify,
)

logger = logging.getLogger(__name__)


class Resolver(IResolver):
    """Invokes callables and constructors with automatically resolved arguments.

    Each parameter is bound by the first rule that applies:

    1. A caller-supplied value under the parameter's name, even ``None``.
    2. A service registered in a configured container for the declared type.
    3. The declared default value.
    4. A recursively constructed instance of the declared type.
    5. Nothing, for ``*args``/``**kwargs``.

    Otherwise resolution fails with ``NotFoundError``.

    The resolver itself is immutable: ``with_container`` and ``with_namespace``
    return new resolvers over a new configuration.

    Attributes:
        _inspector: Signature introspection collaborator.
        _locator: Loads classes and functions by identifier.
        _configuration: Containers to consult and the default namespace.
        _normalizer: Translates call targets into invocable references.
    """

    def __init__(
        self,
        inspector: Optional[ISignatureInspector] = None,
        locator: Optional[ITypeLocator] = None,
        configuration: Optional[ResolverConfiguration] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            inspector: Introspection collaborator. Defaults to a ``SignatureInspector``.
            locator: Class locator shared with the inspector. Defaults to a new ``TypeLocator``.
            configuration: Resolver configuration. Defaults to no containers and no namespace.
        """
        self._locator = locator or TypeLocator()
        self._inspector = inspector or SignatureInspector(self._locator)
        self._configuration = configuration or ResolverConfiguration()
        self._normalizer = CallableNormalizer(self._locator, self._configuration, self._get_or_create)

    @property
    def configuration(self) -> ResolverConfiguration:
        return self._configuration

    @property
    def inspector(self) -> ISignatureInspector:
        return self._inspector

    @property
    def locator(self) -> ITypeLocator:
        return self._locator

    def with_configuration(self, configuration: ResolverConfiguration) -> "Resolver":
        return Resolver(self._inspector, self._locator, configuration)

    def with_container(self, container: IServiceContainer, prioritize: bool = False) -> "Resolver":
        """Return a resolver that also fetches arguments from ``container``.

        Args:
            container: Container to consult for typed parameters.
            prioritize: Consult this container first, making it the primary
                container used for implicit construction.

        Example:
            >>> resolver = Resolver().with_container(services)
            >>> consumer = resolver.create(ServiceConsumer)
        """
        return self.with_configuration(self._configuration.with_container(container, prioritize))

    def with_namespace(self, namespace: Optional[str]) -> "Resolver":
        """Return a resolver that looks up bare class names in ``namespace``."""
        return self.with_configuration(self._configuration.with_namespace(namespace))

    def call(self, target: Any, named: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke ``target`` with every parameter resolved.

        Args:
            target: A callable, a ``(owner, "method")`` pair, ``"Class@method"``,
                ``"Class::method"`` or the dotted name of a function or class.
            named: Values by parameter name, taking precedence over anything else.

        Returns:
            Whatever the target returns.

        Raises:
            NotFoundError: If the target or one of its arguments cannot be resolved.

        Example:
            >>> resolver.call(lambda id: id * 2, {"id": 7})
            14
        """
        return self._invoke(self._normalizer.normalize(target), named or {})

    def call_with(self, target: Any, subject: Any, parameter: Optional[str] = None) -> Any:
        """Invoke ``target`` passing ``subject`` to one of its parameters.

        The remaining parameters resolve as usual.

        Args:
            target: Any target accepted by ``call``.
            subject: The value to pass.
            parameter: Name of the receiving parameter. Defaults to the first one.

        Raises:
            NotFoundError: If the target takes no parameter or cannot be resolved.
        """
        normalized = self._normalizer.normalize(target)
        if parameter is None:
            parameters = self._parameters(normalized)
            if not parameters:
                raise NotFoundError.for_target(normalized.description, "takes no parameter to receive the service")
            parameter = parameters[0].name
        return self._invoke(normalized, {parameter: subject})

    def create(self, class_: Any, named: Optional[Mapping[str, Any]] = None) -> Any:
        """Construct ``class_`` with its constructor parameters resolved.

        Args:
            class_: A class, or the identifier of one.
            named: Values by parameter name, taking precedence over anything else.

        Returns:
            A new instance. Never cached.

        Raises:
            NotFoundError: If the class is unknown, abstract, or an argument cannot be resolved.
        """
        class_ = self._class(class_)
        identifier = identify(class_)
        parameters = self._inspector.inspect_constructor(class_)

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        if parameters:
            args, kwargs = self.arguments(parameters, named or {}, f"{identifier}::__init__")

        logger.debug("Constructing %s", identifier)
        return class_(*args, **kwargs)

    def arguments(
        self,
        parameters: List[Parameter],
        named: Mapping[str, Any],
        description: str,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Resolve an argument for every parameter.

        Args:
            parameters: Parameters as reported by the introspection collaborator.
            named: Values by parameter name.
            description: Name of the owning callable, used in error messages.

        Returns:
            Positional arguments and keyword arguments for the call.

        Raises:
            NotFoundError: If a required parameter cannot be resolved.
        """
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}

        for parameter in parameters:
            if parameter.name in named:
                self._bind(parameter, named[parameter.name], args, kwargs)
                continue

            if parameter.service is not None:
                found, value = self._lookup(parameter.service)
                if found:
                    self._bind(parameter, value, args, kwargs)
                    continue

            if parameter.has_default:
                self._bind(parameter, parameter.default, args, kwargs)
                continue

            if parameter.service is not None:
                logger.debug("Implicitly constructing %s for %s", parameter.service, description)
                self._bind(parameter, self._get_or_create(parameter.service), args, kwargs)
                continue

            # *args receives nothing, keyword-only parameters after it still bind
            if parameter.variadic:
                continue

            raise NotFoundError.for_parameter(parameter.name, description)

        return args, kwargs

    def _invoke(self, target: Target, named: Mapping[str, Any]) -> Any:
        if target.constructs:
            return self.create(target.function, named)

        parameters = self._inspector.inspect(target.function)
        args, kwargs = self.arguments(parameters, named, target.description)
        return target.function(*args, **kwargs)

    def _parameters(self, target: Target) -> List[Parameter]:
        if target.constructs:
            return self._inspector.inspect_constructor(target.function) or []
        return self._inspector.inspect(target.function)

    def _lookup(self, service: str) -> Tuple[bool, Any]:
        for container in self._configuration.containers:
            if container.has(service):
                return True, container.get(service)
        return False, None

    def _get_or_create(self, service: str) -> Any:
        if self._configuration.containers:
            return self._configuration.containers[0].get_or_create(service)
        return self.create(service)

    def _class(self, class_: Any) -> type:
        if isinstance(class_, str):
            name = self._configuration.qualify(class_)
            class_ = self._locator.locate(name)
            if not isinstance(class_, type):
                raise NotFoundError.for_target(name, "not a class")
        elif isinstance(class_, type):
            self._locator.remember(class_)
        else:
            raise NotFoundError.for_target(repr(class_), "not a class")

        if not instantiable(class_):
            raise NotFoundError.for_target(identify(class_), "abstract class cannot be instantiated")
        return class_

    @staticmethod
    def _bind(parameter: Parameter, value: Any, args: List[Any], kwargs: Dict[str, Any]) -> None:
        if parameter.kind is ParameterKind.VAR_POSITIONAL:
            args.extend(value)
        elif parameter.kind is ParameterKind.VAR_KEYWORD:
            kwargs.update(value)
        elif parameter.kind is ParameterKind.KEYWORD_ONLY:
            kwargs[parameter.name] = value
        else:
            args.append(value)

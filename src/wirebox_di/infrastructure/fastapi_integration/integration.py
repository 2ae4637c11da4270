import logging
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wirebox_di.application import Container
from wirebox_di.domain import IServiceContainer

logger = logging.getLogger(__name__)


def create_fastapi_dependency(container: IServiceContainer, service: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that gets or creates a service.

    The returned instance follows the service's registration in the container:
    shared services are reused, factories and unregistered classes produce
    a new instance per request.

    Args:
        container: The container to resolve the service from.
        service: Identifier or class of the service.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.set(UserRepository, lambda db: UserRepository(db))
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the service from the container."""
        return container.get_or_create(service)

    return dependency


def create_call_dependency(container: Container, target: Any, **named: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that invokes a target through the container.

    Args:
        container: The container supplying the target's arguments.
        target: Any target accepted by ``Container.call``, e.g. ``"app.Reports@summary"``.
        **named: Values by parameter name passed on every call.

    Example:
        >>> get_summary = create_call_dependency(container, "app.reports.Reports@summary", period="month")
        >>>
        >>> @app.get("/summary")
        >>> def summary(data: dict = Depends(get_summary)):
        ...     return data
    """

    def dependency() -> Any:
        """Invoke the target with resolved arguments."""
        return container.call(target, named)

    return dependency


def create_request_dependency(service: Any) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that resolves from the request's container.

    Requires the ContainerMiddleware to be installed.

    Args:
        service: Identifier or class to resolve.

    Example:
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> get_clock = create_request_dependency(Clock)
        >>>
        >>> @app.get("/time")
        >>> def now(clock: Clock = Depends(get_clock)):
        ...     return {"now": clock.now().isoformat()}
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the container attached to the request."""
        if not hasattr(request.state, "di_container"):
            raise RuntimeError(
                "Request does not have a DI container. Did you forget to add ContainerMiddleware?"
            )
        container: IServiceContainer = request.state.di_container
        return container.get_or_create(service)

    return request_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches the service container to each request.

    The container is accessible via `request.state.di_container`.

    Attributes:
        container: The container handed to every request.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     greeter = request.state.di_container.get_or_create(Greeter)
        ...     return {"message": greeter.greet()}
    """

    def __init__(self, app: FastAPI, container: IServiceContainer):
        """Initialize the middleware with the application container.

        Args:
            app: The FastAPI/Starlette application.
            container: The container to attach to each request.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.di_container = self.container
        logger.debug("Attached container to request %s %s", request.method, request.url.path)
        return await call_next(request)

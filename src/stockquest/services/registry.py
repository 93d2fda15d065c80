"""Service registry for dependency injection."""

from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar, cast

T = TypeVar("T")
ServiceFactory = Callable[[], T]
ServiceProvider = T | ServiceFactory[T]


class ServiceRegistry:
    """Registry for shared services (event bus, storage) with singletons and factories.

    Services are keyed by type. Game modules look up what they need here
    instead of importing module-level instances.
    """

    def __init__(self):
        self._services: dict[type, tuple[bool, ServiceProvider[Any]]] = {}

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """Register an already constructed instance for ``service_type``."""
        self._services[service_type] = (False, instance)

    def register_factory(self, service_type: type[T], factory: ServiceFactory[T]) -> None:
        """Register a factory called on every lookup of ``service_type``."""
        self._services[service_type] = (True, factory)

    def is_registered(self, service_type: type) -> bool:
        return service_type in self._services

    def get(self, service_type: type[T]) -> T:
        """Get a service instance by type.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            An instance of the requested service

        Raises:
            KeyError: If the requested service is not registered
        """
        if service_type not in self._services:
            raise KeyError(f"Service {service_type.__name__} not registered")

        is_factory, provider = self._services[service_type]
        if is_factory:
            return provider()
        return cast(T, provider)


@lru_cache
def get_service_registry() -> ServiceRegistry:
    """Get the shared service registry instance."""
    return ServiceRegistry()

"""Dependency injection setup module.

This module wires the shared event bus and storage adapter into a service
registry so game modules receive them by explicit lookup.
"""

from loguru import logger

from stockquest.event_bus import EventBus, get_event_bus
from stockquest.services.registry import ServiceRegistry
from stockquest.storage import StorageAdapter, get_storage_adapter


def register_core_services(registry: ServiceRegistry) -> None:
    """Register the event bus and storage adapter in the service registry.

    Both are registered as factories over their ``get_*`` functions, which
    already cache a single instance via @lru_cache. This keeps initialization
    lazy: storage settings are only read when storage is first requested.

    Args:
        registry: Service registry instance to register services in
    """
    logger.debug("Registering core services")

    registry.register_factory(EventBus, get_event_bus)
    registry.register_factory(StorageAdapter, get_storage_adapter)

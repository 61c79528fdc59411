"""
Dependency Injection Configuration

Holds the catalog store and synchronizer configured at startup and exposes
them to FastAPI routes through `Depends`. Tests reset the locator and
register their own instances.
"""
import logging
from typing import Any, TypeVar

from iptv_catalog.services.catalog_store import CatalogStore
from iptv_catalog.services.catalog_sync_service import CatalogSynchronizer


logger = logging.getLogger(__name__)

T = TypeVar('T')


class ServiceLocator:
    """
    Simple service locator for managing application services.

    Provides a centralized place to access configured services throughout the application.
    """

    def __init__(self):
        """Initialize the service locator."""
        self._singletons: dict[type, Any] = {}

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """
        Register a singleton service instance.

        Args:
            service_type: The service interface/type
            instance: The concrete instance to use
        """
        self._singletons[service_type] = instance
        logger.debug(f"Registered singleton: {service_type.__name__}")

    def get(self, service_type: type[T]) -> T:
        """
        Get a service instance.

        Raises:
            KeyError: If service type is not registered
        """
        if service_type in self._singletons:
            return self._singletons[service_type]

        raise KeyError(f"Service {service_type.__name__} not registered in container")

    def reset(self) -> None:
        """Reset all registered services (mainly for testing)."""
        self._singletons = {}
        logger.debug("Service locator reset")


# Global service locator instance
_service_locator: ServiceLocator | None = None


def get_service_locator() -> ServiceLocator:
    """
    Get the global service locator instance.

    Returns:
        The global ServiceLocator
    """
    global _service_locator
    if _service_locator is None:
        _service_locator = ServiceLocator()
    return _service_locator


def reset_service_locator() -> None:
    """
    Reset the service locator (mainly for testing).

    WARNING: Only use this in test environments!
    """
    global _service_locator
    _service_locator = None


def get_catalog_store() -> CatalogStore:
    """FastAPI dependency returning the configured catalog store"""
    return get_service_locator().get(CatalogStore)


def get_synchronizer() -> CatalogSynchronizer:
    """FastAPI dependency returning the catalog synchronizer"""
    return get_service_locator().get(CatalogSynchronizer)

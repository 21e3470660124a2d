"""
Application-scoped dependency container.

One container is built per Flask app by the application factory and
stored in app.extensions; request code looks collaborators up by name
instead of importing module-level singletons, so tests can swap any of
them for fakes.
"""

from typing import Any, Callable, Optional

from flask import current_app

EXTENSION_KEY = 'helpdesk'


class DependencyContainer:
    def __init__(self):
        self._services = {}
        self._factories = {}

    def register_service(self, service_name: str, service_instance: Any) -> None:
        """Register an existing service instance."""
        self._services[service_name] = service_instance

    def register_factory(self, service_name: str, factory_func: Callable[['DependencyContainer'], Any]) -> None:
        """Register a factory that builds the service from the container on first access."""
        self._factories[service_name] = factory_func

    def get_service(self, service_name: str) -> Optional[Any]:
        """Get or create a service by name."""
        # Return existing instance if available
        if service_name in self._services:
            return self._services[service_name]

        # Try to create from factory if registered
        if service_name in self._factories:
            service = self._factories[service_name](self)
            self._services[service_name] = service
            return service

        raise KeyError(f"Service '{service_name}' is not registered")

    def init_app(self, app) -> None:
        app.extensions[EXTENSION_KEY] = self


def get_container() -> DependencyContainer:
    """The container of the app handling the current request."""
    return current_app.extensions[EXTENSION_KEY]

"""Transport Registry — Manages registration and retrieval of search transports.

The registry maps driver names to transport classes and keeps the
initialized transport for each named connection.
"""

from __future__ import annotations

import logging
from typing import Any

from fluentsearch.adapters.base.adapter import SearchTransport, TransportHealth

logger = logging.getLogger(__name__)


class TransportNotFoundError(Exception):
    """Raised when a requested driver or connection is not registered."""


class TransportRegistry:
    """Registry for search transport classes and connection instances.

    Example:
        >>> registry = TransportRegistry()
        >>> registry.register("opensearch", OpenSearchTransport)
        >>> await registry.initialize_connection("default", "opensearch", hosts=[...])
        >>> transport = registry.get("default")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[SearchTransport]] = {}
        self._instances: dict[str, SearchTransport] = {}

    def register(self, driver: str, transport_class: type[SearchTransport]) -> None:
        """Register a transport class under a driver name."""
        if driver in self._classes:
            logger.warning("Overwriting existing transport registration: %s", driver)
        self._classes[driver] = transport_class
        logger.debug("Registered transport: %s", driver)

    async def initialize_connection(self, name: str, driver: str, **kwargs: Any) -> SearchTransport:
        """Create and initialize a transport for the connection ``name``.

        Args:
            name: Connection name the transport is stored under.
            driver: Registered transport driver name.
            **kwargs: Configuration passed to the transport constructor.

        Raises:
            TransportNotFoundError: If no transport is registered for ``driver``.
        """
        if driver not in self._classes:
            raise TransportNotFoundError(
                f"No transport registered with name '{driver}'. "
                f"Available transports: {list(self._classes.keys())}"
            )

        transport = self._classes[driver](**kwargs)
        await transport.initialize()
        self._instances[name] = transport
        logger.info("Initialized connection: %s (%s)", name, driver)
        return transport

    def get(self, name: str) -> SearchTransport:
        """Get the initialized transport for a connection.

        Raises:
            TransportNotFoundError: If the connection is not initialized.
        """
        if name not in self._instances:
            raise TransportNotFoundError(
                f"Connection '{name}' is not initialized. "
                f"Call initialize_connection() first."
            )
        return self._instances[name]

    async def health_check_all(self) -> dict[str, TransportHealth]:
        """Run health checks on all initialized connections."""
        results: dict[str, TransportHealth] = {}
        for name, transport in self._instances.items():
            try:
                results[name] = await transport.health_check()
            except Exception as e:
                results[name] = TransportHealth(status="unhealthy", message=str(e))
        return results

    async def shutdown_all(self) -> None:
        """Gracefully shut down all initialized connections."""
        for name, transport in self._instances.items():
            try:
                await transport.shutdown()
                logger.info("Shut down connection: %s", name)
            except Exception:
                logger.warning("Error shutting down connection: %s", name, exc_info=True)
        self._instances.clear()

    @property
    def registered_drivers(self) -> list[str]:
        return list(self._classes.keys())

    @property
    def active_connections(self) -> list[str]:
        return list(self._instances.keys())

"""Connection manager — Resolves named connections and hands out queries.

Connections are declared in ``Settings.connections`` and initialised lazily
on first use through the ``TransportRegistry``. Each call to ``query()``
returns a fresh ``Query``; builders are never shared between requests.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from fluentsearch.adapters.base.adapter import SearchTransport, TransportHealth
from fluentsearch.adapters.base.registry import TransportNotFoundError, TransportRegistry
from fluentsearch.query.query import Hydrator, Query

if TYPE_CHECKING:
    from fluentsearch.config.settings import ConnectionConfig, Settings

logger = logging.getLogger(__name__)

# Built-in drivers: driver name -> (module path, class name)
_DRIVER_MAP: dict[str, tuple[str, str]] = {
    "opensearch": ("fluentsearch.adapters.opensearch.adapter", "OpenSearchTransport"),
}


class ConnectionManager:
    """Owns the transports for all configured connections.

    Attributes:
        settings: Application configuration.
        registry: Registry of transport classes and live connections.

    Example::

        manager = ConnectionManager(Settings())
        query = await manager.query("articles")
        result = await query.where("status", "published").get()
        await manager.shutdown()
    """

    def __init__(self, settings: Settings, registry: TransportRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry or TransportRegistry()

    async def connection(self, name: str | None = None) -> SearchTransport:
        """Return the transport for ``name`` (default connection when None).

        Raises:
            TransportNotFoundError: If the connection is not configured or its
                driver is unknown.
        """
        name = name or self.settings.default_connection
        if name in self.registry.active_connections:
            return self.registry.get(name)

        config = self.settings.connections.get(name)
        if config is None:
            raise TransportNotFoundError(
                f"Connection '{name}' is not configured. "
                f"Configured connections: {list(self.settings.connections.keys())}"
            )

        self._ensure_driver(config.driver)
        return await self.registry.initialize_connection(name, config.driver, **_transport_kwargs(config))

    async def query(
        self,
        index: str | None = None,
        connection: str | None = None,
        hydrator: Hydrator | None = None,
    ) -> Query:
        """Create a new query bound to a connection, with configured defaults."""
        transport = await self.connection(connection)
        query = Query(transport, defaults=self.settings.query, hydrator=hydrator)
        query.index(index)
        return query

    async def health_check(self) -> dict[str, TransportHealth]:
        return await self.registry.health_check_all()

    async def shutdown(self) -> None:
        """Close every initialised connection."""
        await self.registry.shutdown_all()
        logger.info("Connections shut down")

    def _ensure_driver(self, driver: str) -> None:
        if driver in self.registry.registered_drivers:
            return
        entry = _DRIVER_MAP.get(driver)
        if entry is None:
            raise TransportNotFoundError(
                f"Unknown driver '{driver}'. Register it manually via registry.register()."
            )
        module_path, class_name = entry
        module = importlib.import_module(module_path)
        self.registry.register(driver, getattr(module, class_name))


def _transport_kwargs(config: ConnectionConfig) -> dict[str, object]:
    """Build transport constructor kwargs from a ``ConnectionConfig``."""
    kwargs: dict[str, object] = {"verify_certs": config.verify_certs}
    if config.hosts:
        kwargs["hosts"] = config.hosts
    if config.api_key:
        kwargs["api_key"] = config.api_key
    if config.username:
        kwargs["username"] = config.username
    if config.password:
        kwargs["password"] = config.password
    kwargs.update(config.extra)
    return kwargs

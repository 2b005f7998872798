"""OpenSearch transport — Executes assembled queries against OpenSearch (v2+).

OpenSearch is an AWS-maintained fork of Elasticsearch with a compatible
query DSL and API surface. This transport uses ``opensearch-py`` (async).

Install the optional dependency::

    pip install fluentsearch[opensearch]
    # or: pip install opensearch-py
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

from fluentsearch.adapters.base.adapter import RawResults, SearchTransport, TransportHealth
from fluentsearch.adapters.base.exceptions import (
    ConfigurationError,
    ConnectionError,
    IndexAdminError,
    QueryError,
)
from fluentsearch.models.request import SearchRequest

logger = logging.getLogger(__name__)


class OpenSearchTransport(SearchTransport):
    """Search transport for OpenSearch (v2+).

    Args:
        hosts: List of OpenSearch node URLs.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Optional API key.
        verify_certs: Whether to verify TLS certificates.
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        verify_certs: bool = True,
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["https://localhost:9200"]
        self._username = username
        self._password = password
        self._api_key = api_key
        self._verify_certs = verify_certs
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "opensearch"

    async def initialize(self) -> None:
        """Create and verify the ``AsyncOpenSearch`` client."""
        try:
            from opensearchpy import AsyncOpenSearch
        except ImportError as e:
            raise ConfigurationError(
                "opensearch-py package is required.  Install with: pip install fluentsearch[opensearch]"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
        }
        if self._username and self._password:
            client_kwargs["http_auth"] = (self._username, self._password)
        elif self._api_key:
            client_kwargs["headers"] = {"Authorization": f"ApiKey {self._api_key}"}

        client_kwargs.update(self._extra_kwargs)

        try:
            self._client = AsyncOpenSearch(**client_kwargs)
            info = await self._client.info()
            version = info.get("version", {}).get("number", "unknown")
            cluster = info.get("cluster_name", "unknown")
            logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)
        except Exception as e:
            raise ConnectionError(f"Failed to connect to OpenSearch: {e}") from e

    async def shutdown(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, request: SearchRequest) -> RawResults:
        """Execute an assembled search request."""
        client = self._require_client()
        if request.doc_type:
            logger.debug("Ignoring mapping type %r: not supported by OpenSearch", request.doc_type)

        try:
            response = await client.search(index=request.index, body=request.body, **request.params())
        except Exception as e:
            raise QueryError(f"OpenSearch query failed: {e}") from e
        return RawResults.from_response(response)

    async def scroll(self, scroll_id: str, keep_alive: str, ignore: list[int] | None = None) -> RawResults:
        client = self._require_client()
        try:
            response = await client.scroll(
                body={"scroll_id": scroll_id, "scroll": keep_alive},
                **self._ignore_kwargs(ignore),
            )
        except Exception as e:
            raise QueryError(f"OpenSearch scroll failed: {e}") from e
        return RawResults.from_response(response)

    async def clear_scroll(self, scroll_id: str, ignore: list[int] | None = None) -> None:
        client = self._require_client()
        try:
            await client.clear_scroll(body={"scroll_id": [scroll_id]}, **self._ignore_kwargs(ignore))
        except Exception as e:
            raise QueryError(f"OpenSearch clear scroll failed: {e}") from e

    async def count(self, request: SearchRequest) -> int:
        """Count documents matching the request's ``query`` (other body keys are dropped)."""
        client = self._require_client()
        body = {"query": request.body["query"]} if "query" in request.body else None
        try:
            response = await client.count(index=request.index, body=body, **self._ignore_kwargs(request.ignore))
        except Exception as e:
            raise QueryError(f"OpenSearch count failed: {e}") from e
        return int(response.get("count", 0))

    async def fetch_document(
        self, index: str | None, doc_id: str, ignore: list[int] | None = None
    ) -> dict[str, Any] | None:
        """Retrieve a single document by ID, or None when it does not exist."""
        client = self._require_client()
        if not index:
            raise ConfigurationError("An index is required to fetch a document by id.")
        try:
            response = await client.get(index=index, id=doc_id, **self._ignore_kwargs(ignore))
        except Exception as e:
            if "NotFoundError" in type(e).__name__:
                return None
            raise QueryError(f"Failed to fetch document: {e}") from e
        if not response.get("found", False):
            return None
        return dict(response)

    # ── Index administration ─────────────────────────────────────────────

    async def index_exists(self, index: str) -> bool:
        client = self._require_client()
        try:
            return bool(await client.indices.exists(index=index))
        except Exception as e:
            raise IndexAdminError(f"Failed to check index '{index}': {e}") from e

    async def delete_index(self, index: str) -> None:
        client = self._require_client()
        try:
            await client.indices.delete(index=index)
        except Exception as e:
            raise IndexAdminError(f"Failed to delete index '{index}': {e}") from e

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> TransportHealth:
        """Check OpenSearch cluster health."""
        if not self._client:
            return TransportHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return TransportHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return TransportHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_client(self) -> Any:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")
        return self._client

    @staticmethod
    def _ignore_kwargs(ignore: list[int] | None) -> dict[str, Any]:
        return {"ignore": list(ignore)} if ignore else {}

"""Base search transport — Abstract interface to a search cluster.

Query building never talks to the network; every terminal query operation
goes through a transport. A transport is responsible for:
  1. Executing search, scroll and count requests
  2. Fetching single documents by id
  3. Basic index administration (existence checks, deletion)
  4. Reporting health status

Requests carrying ignored status codes must not raise for those codes; the
transport returns an empty result instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from fluentsearch.models.request import SearchRequest


class TransportHealth(BaseModel):
    """Health status of a search transport."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class RawResults(BaseModel):
    """Raw search response from a cluster before hydration."""

    total_hits: int = Field(default=0, description="Total number of matching documents")
    max_score: float | None = Field(default=None, description="Highest score among hits")
    documents: list[dict[str, Any]] = Field(default_factory=list, description="Raw hit dicts")
    scroll_id: str | None = Field(default=None, description="Scroll cursor returned with the page")
    aggregations: dict[str, Any] = Field(default_factory=dict, description="Aggregation results")
    took_ms: int = Field(default=0, description="Engine-reported execution time in ms")

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> RawResults:
        """Parse a search/scroll response body.

        Error bodies returned for ignored status codes have no ``hits`` and
        parse as an empty result.
        """
        hits = response.get("hits") or {}
        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        return cls(
            total_hits=total,
            max_score=hits.get("max_score"),
            documents=list(hits.get("hits", [])),
            scroll_id=response.get("_scroll_id"),
            aggregations=response.get("aggregations") or {},
            took_ms=response.get("took", 0),
        )


class SearchTransport(ABC):
    """Abstract base class for search cluster transports.

    All transports must implement:
      - search() / scroll() / clear_scroll(): Execute search requests
      - count(): Count matching documents
      - fetch_document(): Retrieve a single document by ID
      - index_exists() / delete_index(): Index administration
      - health_check(): Report transport health status

    Transports hold the client connection and may be shared between
    queries; query state never is.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique transport name (e.g., 'opensearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the client connection. Called once before first use."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the client connection and release resources."""

    @abstractmethod
    async def search(self, request: SearchRequest) -> RawResults:
        """Execute a search request.

        Args:
            request: Assembled request document and parameters.

        Returns:
            Raw search results, including a scroll id when scrolling.
        """

    @abstractmethod
    async def scroll(self, scroll_id: str, keep_alive: str, ignore: list[int] | None = None) -> RawResults:
        """Fetch the next page of a scroll session.

        Args:
            scroll_id: Cursor returned by the previous page.
            keep_alive: How long to keep the search context alive.
            ignore: Status codes treated as an empty page.
        """

    @abstractmethod
    async def clear_scroll(self, scroll_id: str, ignore: list[int] | None = None) -> None:
        """Release a scroll session's search context."""

    @abstractmethod
    async def count(self, request: SearchRequest) -> int:
        """Count documents matching the request's query."""

    @abstractmethod
    async def fetch_document(self, index: str | None, doc_id: str, ignore: list[int] | None = None) -> dict[str, Any] | None:
        """Retrieve a single document by its ID.

        Returns:
            The raw document, or None if it does not exist.
        """

    @abstractmethod
    async def index_exists(self, index: str) -> bool:
        """Check whether ``index`` exists."""

    @abstractmethod
    async def delete_index(self, index: str) -> None:
        """Delete ``index``."""

    @abstractmethod
    async def health_check(self) -> TransportHealth:
        """Check the health of the search cluster."""

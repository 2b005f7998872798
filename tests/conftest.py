"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from fluentsearch.adapters.base.adapter import RawResults, SearchTransport, TransportHealth
from fluentsearch.config.settings import QuerySettings, Settings
from fluentsearch.models.request import SearchRequest
from fluentsearch.query.builder import FluentQueryBuilder
from fluentsearch.query.query import Query


class FakeTransport(SearchTransport):
    """In-memory transport recording every call."""

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.initialized = False
        self.requests: list[SearchRequest] = []
        self.scroll_calls: list[tuple[str, str, list[int] | None]] = []
        self.cleared: list[str] = []
        self.fetched: list[tuple[str | None, str]] = []
        self.search_response: dict[str, Any] = {"hits": {"total": {"value": 0}, "hits": []}}
        self.scroll_response: dict[str, Any] = {"hits": {"total": {"value": 0}, "hits": []}}
        self.documents: dict[str, dict[str, Any]] = {}
        self.indices: set[str] = set()
        self.deleted: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.initialized = False

    async def search(self, request: SearchRequest) -> RawResults:
        self.requests.append(request)
        return RawResults.from_response(self.search_response)

    async def scroll(self, scroll_id: str, keep_alive: str, ignore: list[int] | None = None) -> RawResults:
        self.scroll_calls.append((scroll_id, keep_alive, ignore))
        return RawResults.from_response(self.scroll_response)

    async def clear_scroll(self, scroll_id: str, ignore: list[int] | None = None) -> None:
        self.cleared.append(scroll_id)

    async def count(self, request: SearchRequest) -> int:
        self.requests.append(request)
        return 42

    async def fetch_document(self, index: str | None, doc_id: str, ignore: list[int] | None = None) -> dict[str, Any] | None:
        self.fetched.append((index, doc_id))
        return self.documents.get(doc_id)

    async def index_exists(self, index: str) -> bool:
        return index in self.indices

    async def delete_index(self, index: str) -> None:
        self.deleted.append(index)
        self.indices.discard(index)

    async def health_check(self) -> TransportHealth:
        return TransportHealth(status="healthy")


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        connections={"default": {"driver": "fake", "hosts": ["http://localhost:9200"]}},
        indices={"articles": {}, "authors": {}},
    )


@pytest.fixture
def builder() -> FluentQueryBuilder:
    return FluentQueryBuilder()


@pytest.fixture
def transport_class() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def query(transport: FakeTransport) -> Query:
    return Query(transport, defaults=QuerySettings())


@pytest.fixture
def sample_hit() -> dict[str, Any]:
    """Sample search hit document."""
    return {
        "_index": "articles",
        "_id": "doc_001",
        "_score": 8.5,
        "_source": {
            "title": "Solar Nowcasting with Deep Learning",
            "status": "published",
            "views": 1200,
        },
        "highlight": {"title": ["<em>Solar</em> Nowcasting"]},
    }

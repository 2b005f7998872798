"""Executable query — the fluent builder bound to a search transport.

Terminal operations (``get``, ``first``, ``find``, ``count``, scrolling)
assemble the request document and hand it to the transport. Hits are
hydrated one-for-one through the configured hydrator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fluentsearch.adapters.base.adapter import RawResults, SearchTransport
from fluentsearch.config.settings import QuerySettings
from fluentsearch.models.document import Document
from fluentsearch.models.request import SearchRequest
from fluentsearch.models.result import SearchResult
from fluentsearch.query.builder import FluentQueryBuilder
from fluentsearch.query.types import Operator, SubQuery

logger = logging.getLogger(__name__)

Hydrator = Callable[[dict[str, Any]], Any]


class Query(FluentQueryBuilder):
    """A fluent query that can be executed.

    Args:
        transport: Initialized transport used by terminal operations.
        defaults: Page size, offset and scroll defaults.
        hydrator: Converts a raw hit into a model object. Defaults to
            ``Document.from_hit``.

    Example::

        query = Query(transport).index("articles")
        result = await query.where("status", "published").order_by("date", "desc").take(20).get()
        for doc in result:
            print(doc["title"])
    """

    def __init__(
        self,
        transport: SearchTransport,
        defaults: QuerySettings | None = None,
        hydrator: Hydrator | None = None,
    ) -> None:
        super().__init__(defaults)
        self.transport = transport
        self.hydrator: Hydrator = hydrator or Document.from_hit

    def to_request(self) -> SearchRequest:
        """Assemble the body and collect the request parameters."""
        state = self.state
        body = self.to_body()
        if state.id is not None:
            _restrict_to_id(body, state.id)
        return SearchRequest(
            index=state.index,
            doc_type=state.doc_type,
            id=state.id,
            body=body,
            size=state.size,
            from_=state.from_,
            scroll=state.scroll,
            scroll_id=state.scroll_id,
            search_type=state.search_type,
            ignore=list(state.ignores),
        )

    async def get(self) -> SearchResult[Any]:
        """Execute the query and return the hydrated hits.

        A query restricted to a document id, with no other conditions and
        no field projection, is executed as a direct lookup.
        """
        request = self.to_request()
        if request.id is not None and self._is_plain_lookup():
            return await self._lookup(request, request.id)

        logger.debug("Searching index=%s size=%d from=%d body=%s", request.index, request.size, request.from_, request.body)
        raw = await self.transport.search(request)
        if request.scroll:
            self.scroll_id(raw.scroll_id)
        return self._hydrate(raw)

    async def first(self) -> Any | None:
        """Return the first matching hit, or None."""
        self.take(1)
        return (await self.get()).first()

    async def first_where(self, field: str | SubQuery, operator: Any = Operator.EQUAL, value: Any = None) -> Any | None:
        self.where(field, operator, value)
        return await self.first()

    async def find(self, id: str) -> Any | None:
        """Fetch a single document by id."""
        self.id(id)
        return await self.first()

    async def count(self) -> int:
        request = self.to_request()
        return await self.transport.count(request)

    async def scroll_next(self) -> SearchResult[Any]:
        """Fetch the next page of the current scroll session.

        Starts the session with a regular search when no scroll id is held
        yet. The returned cursor replaces the stored one.
        """
        state = self.state
        if state.scroll is None:
            self.scroll()
        if state.scroll_id is None:
            return await self.get()

        raw = await self.transport.scroll(state.scroll_id, state.scroll or self.defaults.default_scroll, list(state.ignores))
        self.scroll_id(raw.scroll_id)
        return self._hydrate(raw)

    async def clear_scroll(self) -> None:
        """Release the server-side scroll context, if any."""
        scroll_id = self.state.scroll_id
        if scroll_id is None:
            return
        await self.transport.clear_scroll(scroll_id, list(self.state.ignores))
        self.scroll_id(None)

    async def _lookup(self, request: SearchRequest, doc_id: str) -> SearchResult[Any]:
        doc = await self.transport.fetch_document(request.index, doc_id, request.ignore)
        if doc is None:
            return SearchResult()
        return SearchResult(hits=[self.hydrator(doc)], total=1)

    def _is_plain_lookup(self) -> bool:
        state = self.state
        return not state.has_clauses and state.source is None and not state.body

    def _hydrate(self, raw: RawResults) -> SearchResult[Any]:
        return SearchResult(
            hits=[self.hydrator(hit) for hit in raw.documents],
            total=raw.total_hits,
            max_score=raw.max_score,
            scroll_id=raw.scroll_id,
            took_ms=raw.took_ms,
            aggregations=raw.aggregations,
        )


def _restrict_to_id(body: dict[str, Any], doc_id: str) -> None:
    """Add an ``ids`` filter to an assembled body, leaving the builder state untouched."""
    ids = {"ids": {"values": [doc_id]}}
    query = body.get("query")
    if query and "bool" not in query:
        body["query"] = {"bool": {"must": [query], "filter": [ids]}}
        return
    bool_query = body.setdefault("query", {}).setdefault("bool", {})
    bool_query.setdefault("filter", []).append(ids)

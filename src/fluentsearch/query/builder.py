"""Fluent query builder — chainable, Eloquent-style query construction.

Each mutating method updates the builder's ``QueryState`` and returns the
builder itself, so calls can be chained::

    body = (
        FluentQueryBuilder()
        .where("age", ">", 18)
        .where("status", "active")
        .order_by("name")
        .take(5)
        .to_body()
    )

No method performs I/O. Malformed operators and bound pairs are
normalized rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from fluentsearch.config.settings import QuerySettings
from fluentsearch.query import predicates
from fluentsearch.query.assembler import assemble_body
from fluentsearch.query.search import Search
from fluentsearch.query.state import QueryState, merge_unique
from fluentsearch.query.types import ID_FIELD, Operator, SearchType, SubQuery

logger = logging.getLogger(__name__)


class FluentQueryBuilder:
    """Accumulates bool-query clauses and request options through chained calls.

    Args:
        defaults: Page size, offset and scroll defaults. Shared, immutable.
    """

    def __init__(self, defaults: QuerySettings | None = None) -> None:
        self.defaults = defaults or QuerySettings()
        self._state = QueryState(size=self.defaults.default_limit, from_=self.defaults.default_offset)

    @property
    def state(self) -> QueryState:
        """The accumulated query state. Mutate it only through builder methods."""
        return self._state

    # ── Target ───────────────────────────────────────────────────────────

    def index(self, index: str | None = None) -> FluentQueryBuilder:
        """Set the index (or ``_all``/pattern) to query."""
        self._state.index = index
        return self

    def doc_type(self, doc_type: str) -> FluentQueryBuilder:
        """Restrict the query to a mapping type.

        Mapping types are deprecated since Elasticsearch 7 and unsupported
        by OpenSearch; the value is carried but may be ignored by transports.
        """
        self._state.doc_type = doc_type
        return self

    def id(self, id: str | None = None) -> FluentQueryBuilder:
        """Restrict the query to a single document ``_id``."""
        self._state.id = id
        return self

    # ── Conditions ───────────────────────────────────────────────────────

    def where(self, field: str | SubQuery, operator: Any = Operator.EQUAL, value: Any = None) -> FluentQueryBuilder:
        """Add a condition that documents must satisfy.

        ``where("status", "active")`` is shorthand for
        ``where("status", "=", "active")``: any unrecognized operator is
        taken as the value. Equality on ``_id`` sets the document id instead
        of adding a term clause.

        Args:
            field: Field name, or a ``SubQuery`` applied to this builder.
            operator: One of the ``Operator`` tokens.
            value: Value to compare against.
        """
        if isinstance(field, SubQuery):
            field(self)
            return self

        op, value = self._normalize(operator, value)

        if op is Operator.EQUAL and field == ID_FIELD:
            return self.id(None if value is None else str(value))

        if op is Operator.EXISTS:
            return self.where_exists(field, bool(value))

        clause = predicates.compile_condition(field, op, value)
        if op is Operator.LIKE:
            self._state.add("must", clause)
        elif op is Operator.NOT_EQUAL:
            self._state.add("must_not", clause)
        else:
            self._state.add("filter", clause)
        return self

    def where_not(self, field: str | SubQuery, operator: Any = Operator.EQUAL, value: Any = None) -> FluentQueryBuilder:
        """Add a condition that documents must not satisfy (inverse of ``where``)."""
        if isinstance(field, SubQuery):
            field(self)
            return self

        op, value = self._normalize(operator, value)

        if op is Operator.EXISTS:
            return self.where_exists(field, not value)

        clause = predicates.compile_condition(field, op, value)
        self._state.add("filter" if op is Operator.NOT_EQUAL else "must_not", clause)
        return self

    def where_between(self, field: str, first: Any, last: Any = None) -> FluentQueryBuilder:
        """Match values in the inclusive range ``[first, last]``.

        Bounds may be given as two arguments or as one two-element pair.
        """
        low, high = self._bounds(field, first, last)
        self._state.add("filter", predicates.between(field, low, high))
        return self

    def where_not_between(self, field: str, first: Any, last: Any = None) -> FluentQueryBuilder:
        """Exclude values in the inclusive range ``[first, last]``."""
        low, high = self._bounds(field, first, last)
        self._state.add("must_not", predicates.between(field, low, high))
        return self

    def where_in(self, field: str | SubQuery, values: Iterable[Any] = ()) -> FluentQueryBuilder:
        if isinstance(field, SubQuery):
            field(self)
            return self

        self._state.add("filter", predicates.terms(field, values))
        return self

    def where_not_in(self, field: str | SubQuery, values: Iterable[Any] = ()) -> FluentQueryBuilder:
        if isinstance(field, SubQuery):
            field(self)
            return self

        self._state.add("must_not", predicates.terms(field, values))
        return self

    def where_exists(self, field: str, exists: bool = True) -> FluentQueryBuilder:
        """Require ``field`` to be present (or, with ``exists=False``, absent)."""
        self._state.add("must" if exists else "must_not", predicates.exists(field))
        return self

    def distance(self, field: str | SubQuery, point: Any, distance: str) -> FluentQueryBuilder:
        """Match documents within ``distance`` (e.g. ``"20km"``) of a geo point.

        Args:
            field: Geo-point field name, or a ``SubQuery``.
            point: ``"lat,lon"`` string, ``[lon, lat]`` list or
                ``{"lat": ..., "lon": ...}`` mapping.
            distance: Radius around the point.
        """
        if isinstance(field, SubQuery):
            field(self)
            return self

        self._state.add("filter", predicates.geo_distance(field, point, distance))
        return self

    def search(
        self,
        query_string: str | None = None,
        settings: Callable[[Search], None] | None = None,
        boost: float | None = None,
    ) -> FluentQueryBuilder:
        """Add free-text clauses parsed from ``query_string``.

        Args:
            query_string: Query in the simplified syntax; empty is a no-op.
            settings: Callback to configure the ``Search`` (fields, boost).
            boost: Boost attached to every generated clause.
        """
        if query_string:
            Search(self, query_string, settings).boost(boost).build()
        return self

    # ── Projection & ordering ────────────────────────────────────────────

    def select(self, *fields: str) -> FluentQueryBuilder:
        """Return only these fields; removes them from the exclude list."""
        self._state.projection().add_include(list(fields))
        return self

    def unselect(self, *fields: str) -> FluentQueryBuilder:
        """Do not return these fields; removes them from the include list."""
        self._state.projection().add_exclude(list(fields))
        return self

    def order_by(self, field: str, direction: str = "asc") -> FluentQueryBuilder:
        self._state.sort.append({field: direction})
        return self

    def highlight(self, *fields: str) -> FluentQueryBuilder:
        """Request highlighted fragments for ``fields`` with default settings."""
        self._state.body["highlight"] = {"fields": {field: {} for field in fields}}
        return self

    def group_by(self, field: str) -> FluentQueryBuilder:
        """Collapse results on ``field``."""
        self._state.body["collapse"] = {"field": field}
        return self

    # ── Raw body ─────────────────────────────────────────────────────────

    def nested(self, path: str) -> FluentQueryBuilder:
        """Replace the raw body with a ``nested`` query stub on ``path``.

        Any previously set raw body (highlight, collapse, ...) is discarded.
        """
        self._state.body = {"query": {"nested": {"path": path}}}
        return self

    def body(self, body: dict[str, Any] | None = None) -> FluentQueryBuilder:
        """Replace the raw body; builder clauses are still merged into it."""
        self._state.body = dict(body or {})
        return self

    # ── Request options ──────────────────────────────────────────────────

    def scroll(self, keep_alive: str | None = None) -> FluentQueryBuilder:
        """Enable the scroll API, keeping the search context alive for ``keep_alive``."""
        self._state.scroll = keep_alive or self.defaults.default_scroll
        return self

    def scroll_id(self, scroll_id: str | None) -> FluentQueryBuilder:
        self._state.scroll_id = scroll_id
        return self

    def search_type(self, search_type: SearchType | str) -> FluentQueryBuilder:
        """Set the search type.

        Raises:
            ValueError: If ``search_type`` is not a known ``SearchType``.
        """
        self._state.search_type = SearchType(search_type)
        return self

    def ignore(self, *codes: int) -> FluentQueryBuilder:
        """Treat these HTTP status codes as empty results instead of errors."""
        self._state.ignores = merge_unique(self._state.ignores, list(codes))
        return self

    def skip(self, from_: int | None = None) -> FluentQueryBuilder:
        """Set the result offset; None or a negative offset restores the default."""
        self._state.from_ = self._page_value("offset", from_, self.defaults.default_offset)
        return self

    def take(self, size: int | None = None) -> FluentQueryBuilder:
        """Set the page size; None or a negative size restores the default."""
        self._state.size = self._page_value("size", size, self.defaults.default_limit)
        return self

    # ── Assembly ─────────────────────────────────────────────────────────

    def to_body(self) -> dict[str, Any]:
        """Assemble the request document from the accumulated state."""
        return assemble_body(self._state)

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _normalize(operator: Any, value: Any) -> tuple[Operator, Any]:
        op = Operator.parse(operator)
        if op is None:
            logger.debug("Treating %r as a value for an equality condition", operator)
            return Operator.EQUAL, operator
        return op, value

    @staticmethod
    def _page_value(name: str, value: int | None, default: int) -> int:
        if value is None:
            return default
        if value < 0:
            logger.debug("Ignoring negative %s %d, using default %d", name, value, default)
            return default
        return value

    @staticmethod
    def _bounds(field: str, first: Any, last: Any) -> tuple[Any, Any]:
        if isinstance(first, Sequence) and not isinstance(first, str):
            if len(first) == 2:
                return first[0], first[1]
            logger.debug("Malformed bounds for %s: expected a pair, got %d item(s)", field, len(first))
        return first, last

"""Predicate compiler — pure functions producing single query-clause documents.

Every function returns a fresh dict; nothing here touches builder state.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fluentsearch.query.types import Operator

Clause = dict[str, Any]

_RANGE_KEYS = {
    Operator.GREATER_THAN: "gt",
    Operator.GREATER_THAN_OR_EQUAL: "gte",
    Operator.LOWER_THAN: "lt",
    Operator.LOWER_THAN_OR_EQUAL: "lte",
}


def term(field: str, value: Any) -> Clause:
    return {"term": {field: value}}


def terms(field: str, values: Iterable[Any]) -> Clause:
    """Build a ``terms`` clause; a lone string is one value, not a sequence of characters."""
    if isinstance(values, (str, bytes)):
        return {"terms": {field: [values]}}
    return {"terms": {field: list(values)}}


def match(field: str, value: Any, boost: float | None = None) -> Clause:
    """Build a ``match`` clause; with a boost the value moves into the long form."""
    if boost is None:
        return {"match": {field: value}}
    return {"match": {field: {"query": value, "boost": boost}}}


def match_phrase(field: str, value: str, boost: float | None = None) -> Clause:
    if boost is None:
        return {"match_phrase": {field: value}}
    return {"match_phrase": {field: {"query": value, "boost": boost}}}


def multi_match(
    value: str,
    fields: Iterable[str] | None = None,
    *,
    phrase: bool = False,
    boost: float | None = None,
) -> Clause:
    """Build a ``multi_match`` clause over ``fields`` (index default fields when empty)."""
    body: dict[str, Any] = {"query": value}
    field_list = list(fields or [])
    if field_list:
        body["fields"] = field_list
    if phrase:
        body["type"] = "phrase"
    if boost is not None:
        body["boost"] = boost
    return {"multi_match": body}


def range_clause(field: str, operator: Operator, value: Any) -> Clause:
    """Build a one-sided ``range`` clause for a comparison operator.

    Raises:
        KeyError: If ``operator`` is not a range comparison.
    """
    return {"range": {field: {_RANGE_KEYS[operator]: value}}}


def between(field: str, low: Any, high: Any) -> Clause:
    return {"range": {field: {"gte": low, "lte": high}}}


def exists(field: str) -> Clause:
    return {"exists": {"field": field}}


def geo_distance(field: str, point: Any, distance: str) -> Clause:
    """Build a ``geo_distance`` clause.

    ``point`` may be a ``"lat,lon"`` string, a ``[lon, lat]`` list or a
    ``{"lat": ..., "lon": ...}`` mapping; it is passed through untouched and
    validated by the search engine.
    """
    return {"geo_distance": {field: point, "distance": distance}}


def compile_condition(field: str, operator: Operator, value: Any) -> Clause:
    """Compile a ``(field, operator, value)`` comparison into one clause.

    Equality and inequality both produce a ``term`` clause; which bool bucket
    it lands in is decided by the caller. ``exists`` is not a comparison and
    is handled by the builder.
    """
    if operator in (Operator.EQUAL, Operator.NOT_EQUAL):
        return term(field, value)
    if operator is Operator.LIKE:
        return match(field, value)
    if operator in _RANGE_KEYS:
        return range_clause(field, operator, value)
    raise ValueError(f"Operator {operator.value!r} does not compile to a comparison clause")

"""Body assembler — reduces query state to the final request document.

Assembly is deterministic and idempotent: the merged document is cached
back onto ``state.body`` and re-assembling it without further mutation
yields an identical document.
"""

from __future__ import annotations

import copy
from typing import Any

from fluentsearch.query.state import QueryState
from fluentsearch.query.types import QUERY_FIELD, SORT_FIELD, SOURCE_FIELD, SOURCE_INCLUDES


def assemble_body(state: QueryState) -> dict[str, Any]:
    """Merge accumulated clauses, projection and sort into the raw body.

    Args:
        state: The builder state to reduce. Only ``state.body`` is written.

    Returns:
        A copy of the assembled request document. Pagination, scroll and
        search type are request parameters and never appear here.
    """
    body = copy.deepcopy(state.body)

    if state.source is not None:
        body[SOURCE_FIELD] = _merge_source(body.get(SOURCE_FIELD), state.source.to_source())

    query = body.get(QUERY_FIELD) or {}
    for bucket in ("must", "must_not", "filter"):
        clauses = getattr(state, bucket)
        if clauses:
            query.setdefault("bool", {})[bucket] = copy.deepcopy(clauses)

    if query:
        body[QUERY_FIELD] = query
    else:
        # A match-all query is expressed by omitting the key entirely
        body.pop(QUERY_FIELD, None)

    if state.sort:
        body[SORT_FIELD] = _dedupe([*_as_list(body.get(SORT_FIELD)), *copy.deepcopy(state.sort)])

    state.body = body
    return copy.deepcopy(body)


def _merge_source(raw: Any, projection: dict[str, list[str]]) -> dict[str, Any]:
    """Layer the builder projection over a body-supplied ``_source``.

    Builder-set keys win over the raw body; a raw list or string is treated
    as an include list.
    """
    if isinstance(raw, dict):
        base = dict(raw)
    elif isinstance(raw, (list, str)):
        base = {SOURCE_INCLUDES: _as_list(raw)}
    else:
        base = {}
    base.update(projection)
    return base


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def _dedupe(items: list[Any]) -> list[Any]:
    """Drop exact duplicates, keeping first-seen order."""
    unique: list[Any] = []
    for item in items:
        if item not in unique:
            unique.append(item)
    return unique

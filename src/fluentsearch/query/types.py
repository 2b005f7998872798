"""Shared query vocabulary: operator tokens, search types and reserved fields."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fluentsearch.query.builder import FluentQueryBuilder

ID_FIELD = "_id"
SOURCE_FIELD = "_source"
QUERY_FIELD = "query"
SORT_FIELD = "sort"

SOURCE_INCLUDES = "includes"
SOURCE_EXCLUDES = "excludes"


class Operator(str, Enum):
    """Comparison tokens accepted by ``where`` and ``where_not``."""

    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LOWER_THAN = "<"
    LOWER_THAN_OR_EQUAL = "<="
    LIKE = "like"
    EXISTS = "exists"

    @classmethod
    def parse(cls, token: Any) -> Operator | None:
        """Return the operator for ``token``, or None if it is not an operator."""
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            return None
        try:
            return cls(token)
        except ValueError:
            return None


class SearchType(str, Enum):
    """Distributed search execution strategy."""

    QUERY_THEN_FETCH = "query_then_fetch"
    DFS_QUERY_THEN_FETCH = "dfs_query_then_fetch"


@dataclass(frozen=True)
class SubQuery:
    """A grouped sub-query: a callable that receives the builder and adds clauses to it.

    Example::

        query.where(SubQuery(lambda q: q.where("a", 1).where_not("b", 2)))
    """

    apply: Callable[[FluentQueryBuilder], None]

    def __call__(self, builder: FluentQueryBuilder) -> None:
        self.apply(builder)

"""Fluent query building: predicate compiler, clause accumulator and body assembler.

The executable ``Query`` lives in ``fluentsearch.query.query``.
"""

from fluentsearch.query.builder import FluentQueryBuilder
from fluentsearch.query.search import Search
from fluentsearch.query.types import ID_FIELD, Operator, SearchType, SubQuery

__all__ = ["ID_FIELD", "FluentQueryBuilder", "Operator", "Search", "SearchType", "SubQuery"]

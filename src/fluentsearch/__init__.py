"""fluentsearch — Fluent, Eloquent-style query building for OpenSearch/Elasticsearch.

Quick start::

    from fluentsearch import ConnectionManager, Settings

    manager = ConnectionManager(Settings())
    query = await manager.query("articles")
    result = await query.where("views", ">", 100).order_by("date", "desc").take(10).get()
"""

__version__ = "0.1.0"

from fluentsearch.config.settings import QuerySettings, Settings
from fluentsearch.core.connection import ConnectionManager
from fluentsearch.models.document import Document
from fluentsearch.models.result import SearchResult
from fluentsearch.query.builder import FluentQueryBuilder
from fluentsearch.query.query import Query
from fluentsearch.query.types import Operator, SearchType, SubQuery

__all__ = [
    "ConnectionManager",
    "Document",
    "FluentQueryBuilder",
    "Operator",
    "Query",
    "QuerySettings",
    "SearchResult",
    "SearchType",
    "Settings",
    "SubQuery",
    "__version__",
]

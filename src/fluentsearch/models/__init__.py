"""Request and result models."""

from fluentsearch.models.document import Document
from fluentsearch.models.request import SearchRequest
from fluentsearch.models.result import SearchResult

__all__ = ["Document", "SearchRequest", "SearchResult"]
